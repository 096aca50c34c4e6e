"""Integration tests for the Pixicon HTTP API.

These tests drive the FastAPI application through TestClient and check the
full request path: routing, parameter validation, error responses and the
encoded image bodies.
"""

import logging

import pytest

from pixicon.core.generator import generate
from pixicon.core.palette import DEFAULT_PALETTE, generate_palette


class TestMethods:
    """Only GET is served."""

    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"])
    def test_method_not_allowed(self, test_client, method):
        """Non-GET methods receive 405 with Allow: GET."""
        response = test_client.request(method, "/example")
        assert response.status_code == 405
        assert response.headers["allow"] == "GET"
        assert response.text == "error: method not allowed"

    def test_head_not_allowed(self, test_client):
        """HEAD is rejected like any other non-GET method."""
        response = test_client.head("/example")
        assert response.status_code == 405
        assert response.headers["allow"] == "GET"

    def test_cross_origin_preflight_not_allowed(self, test_client):
        """A CORS preflight OPTIONS request is a plain 405 too."""
        response = test_client.options(
            "/example",
            headers={"Origin": "https://example.com", "Access-Control-Request-Method": "GET"},
        )
        assert response.status_code == 405
        assert response.headers["allow"] == "GET"
        assert response.text == "error: method not allowed"
        assert "access-control-allow-origin" not in response.headers


class TestFormats:
    """The path extension selects the output format."""

    @pytest.mark.parametrize(
        "path, content_type",
        [
            ("/example", "image/png"),
            ("/example.png", "image/png"),
            ("/example.PNG", "image/png"),
            ("/example.gif", "image/gif"),
            ("/example.jpg", "image/jpeg"),
            ("/example.jpeg", "image/jpeg"),
            ("/example.svg", "image/svg+xml"),
        ],
    )
    def test_content_type(self, test_client, path, content_type):
        """Each supported extension returns its Content-Type."""
        response = test_client.get(path, params={"size": "64"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith(content_type)

    @pytest.mark.parametrize(
        "path, pillow_format",
        [("/example.png", "PNG"), ("/example.gif", "GIF"), ("/example.jpg", "JPEG")],
    )
    def test_body_decodes(self, test_client, decode_image, path, pillow_format):
        """Raster bodies decode to an image of the requested size."""
        response = test_client.get(path, params={"size": "64"})
        image = decode_image(response.content)
        assert image.format == pillow_format
        assert image.size == (64, 64)

    @pytest.mark.parametrize("path", ["/example.xyz", "/example.", "/example.bmp"])
    def test_unsupported_format(self, test_client, path):
        """Unknown extensions are 404 with a plain-text error."""
        response = test_client.get(path)
        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "error: unsupported file format"

    def test_unsupported_format_reported_before_size(self, test_client):
        """The format error wins over a bad size."""
        response = test_client.get("/example.xyz", params={"size": "foo"})
        assert response.status_code == 404


class TestSize:
    """The size query parameter."""

    def test_default_size(self, test_client, decode_image):
        """Without size the image is 512x512."""
        response = test_client.get("/example.png")
        assert decode_image(response.content).size == (512, 512)

    def test_empty_size_uses_default(self, test_client, decode_image):
        """An empty size is treated as absent."""
        response = test_client.get("/example.png?size=")
        assert response.status_code == 200
        assert decode_image(response.content).size == (512, 512)

    @pytest.mark.parametrize("size", [8, 16, 256, 1024])
    def test_custom_size(self, test_client, decode_image, size):
        """Any positive multiple of 8 is honoured."""
        response = test_client.get("/example.png", params={"size": str(size)})
        assert response.status_code == 200
        assert decode_image(response.content).size == (size, size)

    @pytest.mark.parametrize("size", ["1023", "0", "-8"])
    def test_not_multiple_of_8(self, test_client, size):
        """Integers that are not positive multiples of 8 are 400."""
        response = test_client.get("/example.png", params={"size": size})
        assert response.status_code == 400
        assert response.text == "error: size must be a multiple of 8"

    @pytest.mark.parametrize("size", ["foo", "1.5", "64px"])
    def test_not_an_integer(self, test_client, size):
        """Non-integers are 400."""
        response = test_client.get("/example.gif", params={"size": size})
        assert response.status_code == 400
        assert response.text == "error: invalid size"

    @pytest.mark.parametrize(
        "size",
        ["100000000000000000000", "9223372036854775808", "-9223372036854775809", "1" * 5000],
    )
    def test_beyond_64_bits(self, test_client, size):
        """Integers outside the signed 64-bit range are 400, not a crash."""
        response = test_client.get("/example.png", params={"size": size})
        assert response.status_code == 400
        assert response.text == "error: invalid size"

    def test_unrenderable_size(self, test_client):
        """A size too large to allocate is a plain-text 500."""
        response = test_client.get("/example.png", params={"size": str(2**62)})
        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text.startswith("error: ")

    def test_first_size_wins(self, test_client, decode_image):
        """With repeated size parameters the first one is used."""
        response = test_client.get("/example.png?size=8&size=foo")
        assert response.status_code == 200
        assert decode_image(response.content).size == (8, 8)

    def test_svg_ignores_size(self, test_client):
        """SVG responses never validate size."""
        response = test_client.get("/example.svg", params={"size": "foo"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")

    def test_configured_default_size(self, test_client, decode_image):
        """The configured default size applies when size is absent."""
        from pixicon.api.main import app
        from pixicon.core.config import PixiconConfig

        app.state.config = PixiconConfig(_env_file=None, default_size=64)
        response = test_client.get("/example.png")
        assert decode_image(response.content).size == (64, 64)


class TestMirror:
    """The mirror query parameter."""

    def test_default_mirror_is_x(self, test_client, decode_image, image_grid):
        """Without mirror the pattern is mirrored on X."""
        response = test_client.get("/example.png", params={"size": "64"})
        grid = image_grid(decode_image(response.content), generate_palette("example"))
        assert grid == generate("example", mirror_x=True)

    @pytest.mark.parametrize(
        "mirror, mirror_x, mirror_y",
        [("", False, False), ("x", True, False), ("y", False, True), ("xy", True, True), ("yx", True, True)],
    )
    def test_mirror_axes(self, test_client, decode_image, image_grid, mirror, mirror_x, mirror_y):
        """Each mirror specification selects the matching grid."""
        response = test_client.get("/example.png", params={"size": "64", "mirror": mirror})
        assert response.status_code == 200
        grid = image_grid(decode_image(response.content), generate_palette("example"))
        assert grid == generate("example", mirror_x, mirror_y)

    def test_duplicate_axis(self, test_client):
        """Repeating an axis is 400."""
        response = test_client.get("/example.png", params={"mirror": "xx"})
        assert response.status_code == 400
        assert response.text == "error: duplicate mirror axis: x"

    def test_unsupported_axis(self, test_client):
        """Unknown axes are 400."""
        response = test_client.get("/example.png", params={"mirror": "z"})
        assert response.status_code == 400
        assert response.text == "error: unsupported mirror axis: z"

    def test_size_reported_before_mirror(self, test_client):
        """The size error wins over a bad mirror axis."""
        response = test_client.get("/example.png", params={"size": "foo", "mirror": "z"})
        assert response.text == "error: invalid size"

    def test_first_mirror_wins(self, test_client):
        """With repeated mirror parameters the first one is used."""
        response = test_client.get("/example.png?size=8&mirror=xx&mirror=x")
        assert response.status_code == 400
        assert response.text == "error: duplicate mirror axis: x"

    def test_svg_mirror_validated(self, test_client):
        """SVG requests still validate mirror axes."""
        response = test_client.get("/example.svg", params={"mirror": "q"})
        assert response.status_code == 400


class TestPalette:
    """Derived and monochrome colours."""

    def test_derived_palette(self, test_client, decode_image, image_grid):
        """By default the foreground colour is derived from the text."""
        response = test_client.get("/jackwilsdon.png", params={"size": "64"})
        grid = image_grid(decode_image(response.content), generate_palette("jackwilsdon"))
        assert grid == generate("jackwilsdon", mirror_x=True)

    @pytest.mark.parametrize("query", ["monochrome", "monochrome=", "monochrome=false"])
    def test_monochrome(self, test_client, decode_image, image_grid, query):
        """The presence of monochrome forces black on white."""
        response = test_client.get(f"/jackwilsdon.png?size=64&{query}")
        grid = image_grid(decode_image(response.content), DEFAULT_PALETTE)
        assert grid == generate("jackwilsdon", mirror_x=True)

    def test_svg_colours(self, test_client):
        """SVG bodies use the derived colour as a hex fill."""
        response = test_client.get("/jackwilsdon.svg")
        assert "fill: #eae3a4" in response.text
        assert "fill: #ffffff" in response.text


class TestText:
    """The generation key is taken from the request path."""

    def test_percent_decoded(self, test_client, decode_image, image_grid):
        """Percent-encoded paths use the decoded text."""
        response = test_client.get("/hello%20world.png", params={"size": "64"})
        grid = image_grid(decode_image(response.content), generate_palette("hello world"))
        assert grid == generate("hello world", mirror_x=True)

    def test_nested_path(self, test_client, svg_grid):
        """Slashes are part of the text."""
        response = test_client.get("/a/b/c.svg")
        assert svg_grid(response.text, generate_palette("a/b/c")) == generate("a/b/c", mirror_x=True)

    def test_root_path(self, test_client):
        """The root path renders the empty text."""
        response = test_client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/png")

    def test_deterministic(self, test_client):
        """The same request always yields the same bytes."""
        first = test_client.get("/example.png", params={"size": "32"})
        second = test_client.get("/example.png", params={"size": "32"})
        assert first.content == second.content

    def test_different_texts_differ(self, test_client):
        """Different texts yield different images."""
        alice = test_client.get("/alice.svg")
        bob = test_client.get("/bob.svg")
        assert alice.text != bob.text


class TestAccessLog:
    """Verbose access logging."""

    def test_verbose_logs_requests(self, test_client, caplog):
        """With verbose set each request is logged with its status."""
        from pixicon.api.main import app
        from pixicon.core.config import PixiconConfig

        app.state.config = PixiconConfig(_env_file=None, verbose=True)
        caplog.set_level(logging.INFO, logger="pixicon.api.main")

        test_client.get("/example.svg?mirror=xy")
        test_client.get("/example.xyz")

        messages = [record.getMessage() for record in caplog.records if record.name == "pixicon.api.main"]
        assert any(m.startswith("GET /example.svg?mirror=xy - 200 (") and m.endswith("ms)") for m in messages)
        assert any(m.startswith("GET /example.xyz - 404 (") for m in messages)

    def test_quiet_by_default(self, test_client, caplog):
        """Without verbose nothing is logged per request."""
        caplog.set_level(logging.INFO, logger="pixicon.api.main")
        test_client.get("/example.svg")
        assert not [record for record in caplog.records if record.name == "pixicon.api.main"]
