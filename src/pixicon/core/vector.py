"""SVG rendering of a grid on a fixed 8x8 viewBox."""

from __future__ import annotations

from .generator import GRID_SIZE, Grid
from .palette import Palette

_HEADER = f"""<?xml version="1.0"?>
<svg viewBox="0 0 {GRID_SIZE} {GRID_SIZE}"
     shape-rendering="crispEdges"
     xmlns="http://www.w3.org/2000/svg"
     xmlns:xlink="http://www.w3.org/1999/xlink">
"""


def _rect(x: int, y: int, width: int, height: int, fill: str) -> str:
    return f'<rect x="{x}" y="{y}" width="{width}" height="{height}" style="fill: {fill}" />\n'


def render_svg(grid: Grid, palette: Palette) -> str:
    """Render ``grid`` as an SVG document.

    The document holds one full-canvas rectangle in the background colour
    followed by a 1x1 rectangle for each set cell in the foreground colour.
    Unset cells rely on the base fill and produce no element.

    Args:
        grid: The 8x8 grid to draw.
        palette: Colours for set cells and the base fill.

    Returns:
        The SVG text.
    """
    foreground = Palette.to_hex(palette.foreground)

    parts = [_HEADER, _rect(0, 0, GRID_SIZE, GRID_SIZE, Palette.to_hex(palette.background))]
    parts.extend(_rect(x, y, 1, 1, foreground) for x, y, value in grid.cells() if value)
    parts.append("</svg>\n")
    return "".join(parts)
