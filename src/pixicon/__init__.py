"""Pixicon - deterministic 8x8 identicons as PNG, GIF, JPEG or SVG."""

__version__ = "0.1.0"

from pixicon.core import (
    DEFAULT_PALETTE,
    Grid,
    OutputFormat,
    Palette,
    PixiconConfig,
    config,
    default_palette,
    generate,
    generate_image,
    generate_palette,
    render_identicon,
)

__all__ = [
    "DEFAULT_PALETTE",
    "Grid",
    "OutputFormat",
    "Palette",
    "PixiconConfig",
    "config",
    "default_palette",
    "generate",
    "generate_image",
    "generate_palette",
    "render_identicon",
]
