"""Foreground/background colour pairs used to render a grid."""

from __future__ import annotations

from dataclasses import dataclass

from .hashing import hash_text

Color = tuple[int, int, int, int]

BLACK: Color = (0x00, 0x00, 0x00, 0xFF)
WHITE: Color = (0xFF, 0xFF, 0xFF, 0xFF)


@dataclass(frozen=True)
class Palette:
    """A pair of RGBA colours.

    Attributes:
        foreground: Colour of set cells.
        background: Colour of unset cells and of the vector base fill.
    """

    foreground: Color
    background: Color

    def __post_init__(self) -> None:
        for name in ("foreground", "background"):
            color = getattr(self, name)
            if len(color) != 4 or any(not 0 <= channel <= 0xFF for channel in color):
                raise ValueError(f"{name} must be four channels in 0-255, got {color!r}")

    def colors(self) -> tuple[Color, Color]:
        """Return ``(background, foreground)``; index 1 marks a set cell."""
        return self.background, self.foreground

    @property
    def is_opaque(self) -> bool:
        return self.foreground[3] == 0xFF and self.background[3] == 0xFF

    @staticmethod
    def to_hex(color: Color) -> str:
        """Format the RGB channels of ``color`` as ``#rrggbb``."""
        return "#{:02x}{:02x}{:02x}".format(*color[:3])


# Process-wide default: black on white.  Frozen, so it cannot be mutated.
DEFAULT_PALETTE = Palette(foreground=BLACK, background=WHITE)


def default_palette() -> Palette:
    """Return the fixed black-on-white palette."""
    return DEFAULT_PALETTE


def generate_palette(text: str) -> Palette:
    """Derive an opaque foreground colour from ``text`` on a white background.

    The low 24 bits of the text's seed give the colour: red is the most
    significant byte, blue the least.

    Args:
        text: Generation key.

    Returns:
        Palette whose foreground depends only on ``text``.
    """
    value = hash_text(text) & 0xFFFFFF
    foreground = ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 0xFF)
    return Palette(foreground=foreground, background=WHITE)
