"""Configuration management for Pixicon.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the PIXICON_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (PIXICON_* prefix)
2. .env file in the project root
3. Default values defined in PixiconConfig

Example .env file:
    PIXICON_SERVER_PORT=3000
    PIXICON_DEFAULT_SIZE=256
    PIXICON_DEFAULT_MIRROR=xy
    PIXICON_VERBOSE=true

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
It is never mutated afterwards; to change values, set environment variables
and restart.

Usage Example
-------------
    from pixicon.core.config import config

    print(config.default_size)
    print(config.server_port)

Request Defaults
----------------
``default_size`` and ``default_mirror`` are the values the HTTP handler uses
when the ``size`` or ``mirror`` query parameters are absent.  They are
validated with the same rules as the query parameters, so a bad value fails
at startup instead of on every request.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PixiconConfig(BaseSettings):
    """Main configuration for Pixicon.

    Attributes
    ----------
    Server Settings:
        server_host : str
            Bind address for ``pixicon-server``
        server_port : int
            Port for ``pixicon-server`` (1024-65535)
        verbose : bool
            Log one access line per request
        log_level : str
            Root logging level name

    Request Defaults:
        default_size : int
            Raster size used when ``size`` is not supplied (multiple of 8)
        default_mirror : str
            Mirror axes used when ``mirror`` is not supplied

    Rendering Settings:
        render_workers : int
            Upper bound on the thread fan-out used to fill raster blocks
        png_compress_level : int
            zlib level for PNG output (0 = stored, fastest)
        jpeg_quality : int
            JPEG quality (1-95)

    Examples
    --------
        >>> custom_config = PixiconConfig(default_size=128, default_mirror="xy")
        >>> custom_config.default_mirror
        'xy'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PIXICON_",
        case_sensitive=False,
        frozen=True,
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=3000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    verbose: bool = Field(
        default=False,
        description="Log method, URI, status and duration of every request",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root logging level",
    )

    # Request defaults
    default_size: int = Field(
        default=512,
        description="Raster size when the size query parameter is absent",
        gt=0,
    )
    default_mirror: str = Field(
        default="x",
        description="Mirror axes when the mirror query parameter is absent",
    )

    # Rendering
    render_workers: int = Field(
        default=8,
        description="Maximum threads used to fill the 64 raster blocks",
        ge=1,
        le=64,
    )
    png_compress_level: int = Field(
        default=0,
        description="PNG zlib compression level (0 = no compression)",
        ge=0,
        le=9,
    )
    jpeg_quality: int = Field(
        default=90,
        description="JPEG encoder quality",
        ge=1,
        le=95,
    )

    @field_validator("default_size")
    @classmethod
    def _check_default_size(cls, value: int) -> int:
        if value % 8 != 0:
            raise ValueError("default_size must be a multiple of 8")
        return value

    @field_validator("default_mirror")
    @classmethod
    def _check_default_mirror(cls, value: str) -> str:
        seen: set[str] = set()
        for axis in value:
            if axis not in ("x", "y"):
                raise ValueError(f"unsupported mirror axis: {axis}")
            if axis in seen:
                raise ValueError(f"duplicate mirror axis: {axis}")
            seen.add(axis)
        return value


# Global configuration instance
# Loads values from environment variables (PIXICON_* prefix) and .env file.
config = PixiconConfig()
