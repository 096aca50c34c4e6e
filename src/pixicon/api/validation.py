"""Parsing and validation of identicon request paths and query parameters.

Each helper raises a :class:`~pixicon.core.errors.PixiconError` subclass
whose message is returned to the client verbatim (prefixed ``error: ``).
:func:`parse_request` applies them in the order the handler reports errors:
format, then size, then mirror axes.
"""

import re
from collections.abc import Iterable, Mapping

from pixicon.core.config import PixiconConfig
from pixicon.core.errors import (
    DuplicateMirrorAxisError,
    InvalidSizeFormatError,
    UnsupportedMirrorAxisError,
)
from pixicon.core.formats import format_from_extension
from pixicon.core.raster import validate_size

from .models import IdenticonRequest

_INTEGER = re.compile(r"[+-]?[0-9]+")

# Sizes are 64-bit signed integers; anything wider is not a size.
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT64_DIGITS = len(str(_INT64_MAX))

MIRROR_AXES = ("x", "y")


def split_path(path: str) -> tuple[str, str]:
    """Split a request path into ``(text, extension)``.

    The extension is everything from the last ``.`` of the final path
    element, dot included, or ``""`` if that element has no dot.  The text is
    the path without its leading ``/`` and without the extension.

    Examples:
        >>> split_path("/jackwilsdon.png")
        ('jackwilsdon', '.png')
        >>> split_path("/a.b/c")
        ('a.b/c', '')
        >>> split_path("/example.")
        ('example', '.')
    """
    if path.startswith("/"):
        path = path[1:]

    last_element = path.rsplit("/", 1)[-1]
    dot = last_element.rfind(".")
    if dot == -1:
        return path, ""

    extension = last_element[dot:]
    return path[: len(path) - len(extension)], extension


def first_values(items: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Collapse repeated query keys, keeping the first value of each.

    Examples:
        >>> first_values([("size", "8"), ("size", "foo")])
        {'size': '8'}
    """
    values: dict[str, str] = {}
    for key, value in items:
        values.setdefault(key, value)
    return values


def parse_integer(raw: str) -> int:
    """Parse a signed decimal integer that fits in 64 bits.

    Only ASCII digits with an optional leading sign are accepted; no
    whitespace, underscores or other digit characters.

    Raises:
        InvalidSizeFormatError: If ``raw`` is not such an integer.
    """
    if not _INTEGER.fullmatch(raw):
        raise InvalidSizeFormatError()
    if len(raw.lstrip("+-").lstrip("0")) > _INT64_DIGITS:
        raise InvalidSizeFormatError()

    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise InvalidSizeFormatError()
    return value


def parse_size(raw: str | None, default: int) -> int:
    """Parse the ``size`` query parameter.

    Args:
        raw: The raw value, or ``None`` if the parameter is absent.  An empty
            value is treated as absent.
        default: Size to use when absent.

    Returns:
        A positive multiple of 8.

    Raises:
        InvalidSizeFormatError: If ``raw`` is not an integer.
        InvalidSizeError: If the integer is not a positive multiple of 8.
    """
    if not raw:
        size = default
    else:
        size = parse_integer(raw)

    validate_size(size)
    return size


def parse_mirror(raw: str) -> tuple[bool, bool]:
    """Parse a mirror specification such as ``"x"``, ``"yx"`` or ``""``.

    Returns:
        ``(mirror_x, mirror_y)``.

    Raises:
        UnsupportedMirrorAxisError: On a character other than ``x`` or ``y``.
        DuplicateMirrorAxisError: On an axis given more than once.
    """
    seen: set[str] = set()
    for axis in raw:
        if axis not in MIRROR_AXES:
            raise UnsupportedMirrorAxisError(axis)
        if axis in seen:
            raise DuplicateMirrorAxisError(axis)
        seen.add(axis)
    return "x" in seen, "y" in seen


def parse_request(path: str, query: Mapping[str, str], cfg: PixiconConfig) -> IdenticonRequest:
    """Build an :class:`IdenticonRequest` from a request path and query.

    Args:
        path: Percent-decoded request path, starting with ``/``.
        query: Query parameters, one value per key (see :func:`first_values`).
            Only presence matters for ``monochrome``.
        cfg: Supplies the default size and mirror axes.

    Raises:
        PixiconError: The first problem found, in format, size, mirror order.
    """
    text, extension = split_path(path)
    output_format = format_from_extension(extension)

    size = None
    if not output_format.is_vector:
        size = parse_size(query.get("size"), cfg.default_size)

    mirror = query["mirror"] if "mirror" in query else cfg.default_mirror
    mirror_x, mirror_y = parse_mirror(mirror)

    return IdenticonRequest(
        text=text,
        output_format=output_format,
        size=size,
        mirror_x=mirror_x,
        mirror_y=mirror_y,
        monochrome="monochrome" in query,
    )
