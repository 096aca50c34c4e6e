"""Raster rendering of a grid into a two-colour paletted Pillow image.

The image is built from a freshly allocated index buffer (one byte per
pixel, ``0`` = background, ``1`` = foreground).  Each of the 64 grid cells
maps to a disjoint square block of that buffer, so the blocks are filled by a
bounded thread pool with no locking; the pool is joined before the buffer is
wrapped as an image.  The result does not depend on fill order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from PIL import Image

from .errors import InvalidSizeError
from .generator import GRID_SIZE, Grid
from .palette import Palette

logger = logging.getLogger(__name__)

BACKGROUND_INDEX = 0
FOREGROUND_INDEX = 1


def validate_size(size: int) -> None:
    """Raise :class:`InvalidSizeError` unless ``size`` is a positive multiple of 8."""
    if size <= 0 or size % GRID_SIZE != 0:
        raise InvalidSizeError()


def _fill_block(buffer: bytearray, size: int, block: int, x: int, y: int, index: int) -> None:
    row = bytes([index]) * block
    left = x * block
    for py in range(y * block, (y + 1) * block):
        start = py * size + left
        buffer[start : start + block] = row


def render_image(grid: Grid, palette: Palette, size: int, workers: int | None = None) -> Image.Image:
    """Render ``grid`` as a ``size`` x ``size`` paletted image.

    Args:
        grid: The 8x8 grid to draw.
        palette: Colours for set and unset cells.
        size: Edge length in pixels; must be a positive multiple of 8.
        workers: Thread fan-out for the block fill.  ``None`` uses one
            thread per grid row; ``1`` fills inline.

    Returns:
        Image in mode ``P`` whose palette is ``palette.colors()``.

    Raises:
        InvalidSizeError: If ``size`` is not a positive multiple of 8.
    """
    validate_size(size)

    block = size // GRID_SIZE
    buffer = bytearray(size * size)

    jobs = [
        (x, y, FOREGROUND_INDEX if value else BACKGROUND_INDEX) for x, y, value in grid.cells()
    ]

    max_workers = GRID_SIZE if workers is None else max(1, min(workers, GRID_SIZE * GRID_SIZE))
    if max_workers == 1:
        for x, y, index in jobs:
            _fill_block(buffer, size, block, x, y, index)
    else:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="pixicon-fill") as pool:
            futures = [
                pool.submit(_fill_block, buffer, size, block, x, y, index) for x, y, index in jobs
            ]
            for future in futures:
                future.result()

    image = Image.frombytes("P", (size, size), bytes(buffer))
    background, foreground = palette.colors()
    if palette.is_opaque:
        image.putpalette(bytes(background[:3] + foreground[:3]), rawmode="RGB")
    else:
        image.putpalette(bytes(background + foreground), rawmode="RGBA")

    logger.debug(f"Rendered {size}x{size} raster with {max_workers} fill worker(s)")
    return image
