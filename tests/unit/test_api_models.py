"""Tests for pixicon.api.models: Pydantic request models.

Tests cover:
- Required field validation on IdenticonRequest.
- Default values for optional fields.
- Immutability of parsed requests.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pixicon.api.models import IdenticonRequest
from pixicon.core.formats import OutputFormat


class TestIdenticonRequest:
    """Test IdenticonRequest Pydantic model."""

    def test_defaults(self):
        """Only text is required; the rest match the server defaults."""
        req = IdenticonRequest(text="example")
        assert req.output_format is OutputFormat.PNG
        assert req.size is None
        assert req.mirror_x is True
        assert req.mirror_y is False
        assert req.monochrome is False

    def test_text_required(self):
        """Omitting text raises ValidationError."""
        with pytest.raises(ValidationError):
            IdenticonRequest()

    def test_format_from_value(self):
        """The output format accepts its string value."""
        req = IdenticonRequest(text="example", output_format="svg")
        assert req.output_format is OutputFormat.SVG

    def test_invalid_format(self):
        """Unknown format values are rejected."""
        with pytest.raises(ValidationError):
            IdenticonRequest(text="example", output_format="bmp")

    def test_empty_text_allowed(self):
        """The empty string is a valid generation key."""
        assert IdenticonRequest(text="").text == ""

    def test_frozen(self):
        """Parsed requests cannot be modified."""
        req = IdenticonRequest(text="example", size=64)
        with pytest.raises(ValidationError):
            req.size = 128
