"""Shared pytest fixtures for Pixicon tests."""

import io
import xml.etree.ElementTree as ET
from collections.abc import Callable
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from pixicon.api.main import app
from pixicon.core.config import PixiconConfig
from pixicon.core.generator import GRID_SIZE, Grid
from pixicon.core.palette import Palette

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def test_config(monkeypatch) -> PixiconConfig:
    """Create a configuration isolated from the environment and any .env file.

    Returns:
        PixiconConfig instance with default values
    """
    for name in (
        "PIXICON_DEFAULT_SIZE",
        "PIXICON_DEFAULT_MIRROR",
        "PIXICON_VERBOSE",
        "PIXICON_RENDER_WORKERS",
        "PIXICON_PNG_COMPRESS_LEVEL",
        "PIXICON_JPEG_QUALITY",
        "PIXICON_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return PixiconConfig(_env_file=None)


@pytest.fixture
def test_client(test_config: PixiconConfig) -> Generator[TestClient, None, None]:
    """FastAPI TestClient bound to the application with ``test_config``.

    Yields:
        TestClient instance

    Cleanup:
        The application's original configuration is restored
    """
    original = app.state.config
    app.state.config = test_config
    try:
        yield TestClient(app)
    finally:
        app.state.config = original


@pytest.fixture
def image_grid() -> Callable[[Image.Image, Palette], Grid]:
    """Return a function that reads a grid back out of a raster image.

    The centre pixel of each block is sampled; it must be exactly one of the
    palette colours.
    """

    def _read(image: Image.Image, palette: Palette) -> Grid:
        width, height = image.size
        assert width == height
        assert width % GRID_SIZE == 0
        block = width // GRID_SIZE
        rgba = image.convert("RGBA")

        rows = []
        for y in range(GRID_SIZE):
            row = []
            for x in range(GRID_SIZE):
                pixel = rgba.getpixel((x * block + block // 2, y * block + block // 2))
                assert pixel in (palette.foreground, palette.background), f"unexpected colour {pixel} at ({x}, {y})"
                row.append(pixel == palette.foreground)
            rows.append(tuple(row))
        return Grid(tuple(rows))

    return _read


@pytest.fixture
def svg_grid() -> Callable[[str, Palette], Grid]:
    """Return a function that flattens an SVG document back into a grid.

    Rectangles are painted in document order, so the background rectangle
    must come first.
    """

    def _read(document: str, palette: Palette) -> Grid:
        root = ET.fromstring(document)
        assert root.tag == f"{SVG_NS}svg"
        assert root.get("viewBox") == "0 0 8 8"

        cells = [[False] * GRID_SIZE for _ in range(GRID_SIZE)]
        for rect in root.iter(f"{SVG_NS}rect"):
            x, y = int(rect.get("x")), int(rect.get("y"))
            width, height = int(rect.get("width")), int(rect.get("height"))
            fill = rect.get("style").removeprefix("fill: ")
            assert fill in (Palette.to_hex(palette.foreground), Palette.to_hex(palette.background))
            for cy in range(y, y + height):
                for cx in range(x, x + width):
                    cells[cy][cx] = fill == Palette.to_hex(palette.foreground)
        return Grid(tuple(tuple(row) for row in cells))

    return _read


@pytest.fixture
def decode_image() -> Callable[[bytes], Image.Image]:
    """Return a function that decodes encoded image bytes with Pillow."""

    def _decode(data: bytes) -> Image.Image:
        image = Image.open(io.BytesIO(data))
        image.load()
        return image

    return _decode


@pytest.fixture
def sample_texts() -> list[str]:
    """Generation keys covering ASCII, unicode, empty and path-like text."""
    return [
        "jackwilsdon",
        "testing123",
        "",
        "hello world",
        "ünïcødé ✓",
        "a/b/c",
        "x" * 500,
    ]
