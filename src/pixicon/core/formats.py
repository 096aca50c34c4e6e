"""Supported output formats and their encoders.

The set of formats is closed: :class:`OutputFormat` lists every format and
:func:`format_from_extension` is the single mapping from a path extension to
a format.  Anything it does not recognise raises
:class:`~pixicon.core.errors.UnsupportedFormatError`.

=========  ===================  ==================  =======================
Format     Extensions           Content-Type        Encoder
=========  ===================  ==================  =======================
PNG        (none), ``.png``     ``image/png``       Pillow PNG
GIF        ``.gif``             ``image/gif``       Pillow GIF, 2 colours
JPEG       ``.jpg``, ``.jpeg``  ``image/jpeg``      Pillow JPEG (RGB)
SVG        ``.svg``             ``image/svg+xml``   :mod:`pixicon.core.vector`
=========  ===================  ==================  =======================

Encoders write to a new :class:`io.BytesIO` per call; no buffer outlives
the call.
"""

from __future__ import annotations

import io
from enum import Enum

from PIL import Image

from .errors import UnsupportedFormatError


class OutputFormat(str, Enum):
    PNG = "png"
    GIF = "gif"
    JPEG = "jpeg"
    SVG = "svg"

    @property
    def content_type(self) -> str:
        return _CONTENT_TYPES[self]

    @property
    def is_vector(self) -> bool:
        return self is OutputFormat.SVG


_CONTENT_TYPES = {
    OutputFormat.PNG: "image/png",
    OutputFormat.GIF: "image/gif",
    OutputFormat.JPEG: "image/jpeg",
    OutputFormat.SVG: "image/svg+xml",
}

_EXTENSIONS = {
    "": OutputFormat.PNG,
    ".png": OutputFormat.PNG,
    ".gif": OutputFormat.GIF,
    ".jpg": OutputFormat.JPEG,
    ".jpeg": OutputFormat.JPEG,
    ".svg": OutputFormat.SVG,
}


def format_from_extension(extension: str) -> OutputFormat:
    """Map a path extension (``""`` or starting with ``.``) to a format.

    Matching is case-insensitive.

    Raises:
        UnsupportedFormatError: For any extension not in the table, including
            a bare ``"."``.
    """
    try:
        return _EXTENSIONS[extension.lower()]
    except KeyError:
        raise UnsupportedFormatError() from None


def _encode_png(image: Image.Image, buffer: io.BytesIO, *, png_compress_level: int, **_) -> None:
    image.save(buffer, format="PNG", compress_level=png_compress_level)


def _encode_gif(image: Image.Image, buffer: io.BytesIO, **_) -> None:
    if image.palette is not None and image.palette.mode != "RGB":
        # GIF palettes carry no alpha channel.
        image = image.convert("RGB").convert("P", palette=Image.Palette.ADAPTIVE, colors=2)
    image.save(buffer, format="GIF")


def _encode_jpeg(image: Image.Image, buffer: io.BytesIO, *, jpeg_quality: int, **_) -> None:
    image.convert("RGB").save(buffer, format="JPEG", quality=jpeg_quality)


_RASTER_ENCODERS = {
    OutputFormat.PNG: _encode_png,
    OutputFormat.GIF: _encode_gif,
    OutputFormat.JPEG: _encode_jpeg,
}


def encode_image(
    image: Image.Image,
    output_format: OutputFormat,
    *,
    png_compress_level: int = 0,
    jpeg_quality: int = 90,
) -> bytes:
    """Encode a rendered raster image.

    Args:
        image: Paletted image from :func:`~pixicon.core.raster.render_image`.
        output_format: Any raster format.
        png_compress_level: zlib level for PNG.
        jpeg_quality: Quality for JPEG.

    Returns:
        The encoded bytes.

    Raises:
        ValueError: If ``output_format`` is a vector format.
    """
    if output_format.is_vector:
        raise ValueError(f"{output_format.value} is not a raster format")

    buffer = io.BytesIO()
    _RASTER_ENCODERS[output_format](
        image,
        buffer,
        png_compress_level=png_compress_level,
        jpeg_quality=jpeg_quality,
    )
    return buffer.getvalue()
