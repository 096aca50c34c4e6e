"""Pixicon FastAPI application.

This module defines the FastAPI ``app`` instance, the single identicon
route, and the ``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The application is stateless:

- **Configuration** is the global :data:`~pixicon.core.config.config`
  instance, exposed as ``app.state.config`` so tests and ``main()`` can swap
  it without touching module globals.
- **Request parsing** lives in :mod:`pixicon.api.validation`; every failure
  is a :class:`~pixicon.core.errors.PixiconError` which the exception handler
  below turns into a ``text/plain`` ``error: <message>`` response.
- **Generation** is delegated to :func:`~pixicon.core.pipeline.render_identicon`.

Endpoints
---------
========  =======================  =========================================
Method    Path                     Purpose
========  =======================  =========================================
GET       ``/<text>[.<ext>]``      Identicon for ``text`` (png/gif/jpg/svg)
other     any                      405 with ``Allow: GET``
========  =======================  =========================================

Query parameters: ``size`` (raster only, default 512), ``mirror`` (subset of
``xy``, default ``x``), ``monochrome`` (presence flag).

Usage
-----
CLI (installed entry point)::

    pixicon-server --port 3000 --verbose

Direct invocation::

    python -m pixicon.api.main
"""

from __future__ import annotations

import argparse
import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response

from pixicon import __version__
from pixicon.api.validation import first_values, parse_request
from pixicon.core.config import PixiconConfig, config
from pixicon.core.errors import MethodNotAllowedError, PixiconError
from pixicon.core.pipeline import render_identicon

logger = logging.getLogger(__name__)

# Every method is routed to the handler so that non-GET requests receive the
# plain-text 405 below instead of the framework's JSON one.
_ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Pixicon",
    description="Deterministic 8x8 identicons rendered as PNG, GIF, JPEG or SVG.",
    version=__version__,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)
app.state.config = config


# ---------------------------------------------------------------------------
# Error handling and access logging.
# ---------------------------------------------------------------------------


def _error_response(status_code: int, message: str, headers: dict | None = None) -> PlainTextResponse:
    return PlainTextResponse(f"error: {message}", status_code=status_code, headers=headers)


@app.exception_handler(PixiconError)
async def pixicon_error_handler(request: Request, exc: PixiconError) -> PlainTextResponse:
    """Render a :class:`PixiconError` as a one-line plain-text response.

    ``MethodNotAllowedError`` additionally carries the ``Allow`` header.
    """
    headers = None
    if isinstance(exc, MethodNotAllowedError):
        headers = {"Allow": exc.allowed}
    return _error_response(exc.status_code, exc.message, headers)


@app.middleware("http")
async def access_log(request: Request, call_next):
    """Log ``METHOD URI - status (duration)`` when ``config.verbose`` is set."""
    if not request.app.state.config.verbose:
        return await call_next(request)

    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    uri = request.url.path
    if request.url.query:
        uri = f"{uri}?{request.url.query}"
    logger.info(f"{request.method} {uri} - {response.status_code} ({elapsed_ms:.2f}ms)")
    return response


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.api_route("/{path:path}", methods=_ROUTED_METHODS)
def serve_identicon(path: str, request: Request) -> Response:
    """Serve the identicon named by the request path.

    This endpoint:

    1. Rejects anything but GET with 405 and ``Allow: GET``.
    2. Picks the output format from the path extension (404 if unknown).
    3. Parses ``size`` (raster only) and ``mirror`` (400 on bad values).
    4. Chooses the derived or monochrome palette.
    5. Generates, renders and encodes the image.

    Declared synchronous so that rendering runs in the server's threadpool.

    Args:
        path: Percent-decoded path after the leading ``/``.
        request: The incoming request.

    Returns:
        The encoded image with its ``Content-Type``.

    Raises:
        PixiconError: Converted to a plain-text response by
            :func:`pixicon_error_handler`.
    """
    if request.method != "GET":
        raise MethodNotAllowedError(request.method)

    cfg: PixiconConfig = request.app.state.config
    query = first_values(request.query_params.multi_items())
    params = parse_request(f"/{path}", query, cfg)

    try:
        rendered = render_identicon(
            params.text,
            params.output_format,
            size=params.size,
            mirror_x=params.mirror_x,
            mirror_y=params.mirror_y,
            monochrome=params.monochrome,
            cfg=cfg,
        )
    except (OSError, ValueError, OverflowError, MemoryError) as e:
        reason = str(e) or type(e).__name__
        logger.error(f"Failed to render {params.output_format.value} for {path!r}: {reason}")
        return _error_response(500, reason)

    return Response(content=rendered.body, media_type=rendered.content_type)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """Launch the uvicorn ASGI server.

    Host, port and verbosity default to :data:`~pixicon.core.config.config`
    (``PIXICON_SERVER_HOST``, ``PIXICON_SERVER_PORT``, ``PIXICON_VERBOSE``)
    and can be overridden on the command line.

    This function is registered as the ``pixicon-server`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    parser = argparse.ArgumentParser(prog="pixicon-server", description="Serve identicons over HTTP")
    parser.add_argument("--host", default=config.server_host, help="host to run the server on")
    parser.add_argument("-p", "--port", type=int, default=config.server_port, help="port to run the server on")
    parser.add_argument("-v", "--verbose", action="store_true", default=config.verbose, help="log every request")
    args = parser.parse_args(argv)

    cfg = PixiconConfig(server_host=args.host, server_port=args.port, verbose=args.verbose)
    app.state.config = cfg

    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Starting server on http://{cfg.server_host}:{cfg.server_port}")

    uvicorn.run(app, host=cfg.server_host, port=cfg.server_port, reload=False)


if __name__ == "__main__":
    main()
