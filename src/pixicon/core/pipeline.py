"""End-to-end identicon generation: text in, encoded bytes out.

This is the one place that wires the components together, shared by the
HTTP handler and the command-line tool:

    text ──► generate() ──► Grid ─┐
    text ──► palette ─────────────┼──► render_image() / render_svg() ──► bytes
                      size/format ┘
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PIL import Image

from .config import PixiconConfig
from .config import config as default_config
from .formats import OutputFormat, encode_image
from .generator import generate
from .palette import Palette, default_palette, generate_palette
from .raster import render_image
from .vector import render_svg

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedIdenticon:
    """Encoded output plus the metadata needed to serve it."""

    body: bytes
    output_format: OutputFormat

    @property
    def content_type(self) -> str:
        return self.output_format.content_type


def generate_image(
    text: str,
    size: int,
    mirror_x: bool = True,
    mirror_y: bool = False,
    palette: Palette | None = None,
    workers: int | None = None,
) -> Image.Image:
    """Generate the grid for ``text`` and render it as a raster image.

    Args:
        text: Generation key.
        size: Edge length in pixels (positive multiple of 8).
        mirror_x: Mirror on the X axis.
        mirror_y: Mirror on the Y axis.
        palette: Colours to use; defaults to black on white.
        workers: Fill fan-out passed to :func:`render_image`.

    Raises:
        InvalidSizeError: If ``size`` is not a positive multiple of 8.
    """
    grid = generate(text, mirror_x, mirror_y)
    return render_image(grid, palette or default_palette(), size, workers=workers)


def render_identicon(
    text: str,
    output_format: OutputFormat,
    *,
    size: int | None = None,
    mirror_x: bool = True,
    mirror_y: bool = False,
    monochrome: bool = False,
    cfg: PixiconConfig | None = None,
) -> RenderedIdenticon:
    """Produce the encoded identicon for ``text`` in ``output_format``.

    Args:
        text: Generation key (also drives the palette unless ``monochrome``).
        output_format: Target format.
        size: Raster edge length; ignored for SVG.  ``None`` uses
            ``cfg.default_size``.
        mirror_x: Mirror on the X axis.
        mirror_y: Mirror on the Y axis.
        monochrome: Use the black-on-white palette instead of a derived one.
        cfg: Configuration; defaults to the global instance.

    Returns:
        The encoded body and its format.

    Raises:
        InvalidSizeError: For a raster format with an invalid ``size``.
    """
    cfg = cfg or default_config
    palette = default_palette() if monochrome else generate_palette(text)
    grid = generate(text, mirror_x, mirror_y)

    if output_format.is_vector:
        body = render_svg(grid, palette).encode("utf-8")
    else:
        image = render_image(
            grid,
            palette,
            cfg.default_size if size is None else size,
            workers=cfg.render_workers,
        )
        body = encode_image(
            image,
            output_format,
            png_compress_level=cfg.png_compress_level,
            jpeg_quality=cfg.jpeg_quality,
        )

    logger.debug(f"Rendered {output_format.value} identicon ({len(body)} bytes)")
    return RenderedIdenticon(body=body, output_format=output_format)
