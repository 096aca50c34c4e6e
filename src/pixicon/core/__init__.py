"""Core identicon generation and rendering.

- **hashing**: text to 64-bit seed (SHA-256)
- **generator**: seed to 8x8 grid, with optional X/Y mirroring
- **palette**: fixed or text-derived colour pairs
- **raster** / **vector**: grid to Pillow image / SVG text
- **formats**: closed set of output formats and their encoders
- **pipeline**: the above wired together
- **config**: ``PixiconConfig`` loaded from ``PIXICON_*`` environment variables

Usage Example
-------------
    from pixicon.core import OutputFormat, render_identicon

    rendered = render_identicon("jackwilsdon", OutputFormat.SVG)
    rendered.content_type   # 'image/svg+xml'
"""

from pixicon.core.config import PixiconConfig, config
from pixicon.core.errors import PixiconError
from pixicon.core.formats import OutputFormat, encode_image, format_from_extension
from pixicon.core.generator import Grid, generate
from pixicon.core.hashing import hash_text
from pixicon.core.palette import DEFAULT_PALETTE, Palette, default_palette, generate_palette
from pixicon.core.pipeline import RenderedIdenticon, generate_image, render_identicon
from pixicon.core.raster import render_image
from pixicon.core.vector import render_svg

__all__ = [
    "DEFAULT_PALETTE",
    "Grid",
    "OutputFormat",
    "Palette",
    "PixiconConfig",
    "PixiconError",
    "RenderedIdenticon",
    "config",
    "default_palette",
    "encode_image",
    "format_from_extension",
    "generate",
    "generate_image",
    "generate_palette",
    "hash_text",
    "render_identicon",
    "render_image",
    "render_svg",
]
