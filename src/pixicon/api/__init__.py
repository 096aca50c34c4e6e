"""Pixicon FastAPI HTTP layer.

Modules
-------
main
    FastAPI application with the identicon route and the ``main()``
    server entry point.
models
    Pydantic model of a parsed identicon request.
validation
    Path and query string parsing.
"""
