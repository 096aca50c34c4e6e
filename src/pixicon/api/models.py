"""Pydantic models for the identicon HTTP API.

Models
------
IdenticonRequest
    The parameters of one ``GET /<text>[.<ext>]`` request after the path and
    query string have been parsed by :mod:`pixicon.api.validation`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pixicon.core.formats import OutputFormat


class IdenticonRequest(BaseModel):
    """Parsed parameters for a single identicon request.

    Attributes:
        text: Generation key: the request path without its leading ``/``
            and without its extension.
        output_format: Format selected by the path extension.
        size: Raster edge length in pixels.  ``None`` for SVG, which is
            size-independent.
        mirror_x: Mirror the pattern on the X axis.
        mirror_y: Mirror the pattern on the Y axis.
        monochrome: Use the black-on-white palette instead of one derived
            from ``text``.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(
        ...,
        description="Generation key taken from the request path.",
    )
    output_format: OutputFormat = Field(
        default=OutputFormat.PNG,
        description="Output format selected by the path extension.",
    )
    size: int | None = Field(
        default=None,
        description="Raster size in pixels (None for SVG).",
    )
    mirror_x: bool = Field(
        default=True,
        description="Mirror on the X axis.",
    )
    mirror_y: bool = Field(
        default=False,
        description="Mirror on the Y axis.",
    )
    monochrome: bool = Field(
        default=False,
        description="Force the black-on-white palette.",
    )
