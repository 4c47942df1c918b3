"""
Exception handlers for the pixelkit API.

Maps the typed pixelkit errors to HTTP responses with the body
{"error": <error type>, "detail": <message>}.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pixelkit.core.exceptions import (
    DecodeError,
    EncodeError,
    InvalidRegion,
    OutOfBounds,
    PixelkitError,
)

logger = logging.getLogger(__name__)

# Checked in order, first match wins
ERROR_STATUS_CODES = (
    (DecodeError, 400),
    (EncodeError, 400),
    (InvalidRegion, 422),
    (OutOfBounds, 422),
)


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


async def pixelkit_error_handler(request: Request, exc: PixelkitError) -> JSONResponse:
    """Handle typed pixelkit errors."""
    status_code = 400
    for error_type, code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            status_code = code
            break

    logger.warning(f"{request.method} {request.url.path} failed: {exc}")
    return _error_response(status_code, exc)


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Handle invalid operation arguments (negative feather, bad median, ...)."""
    logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return _error_response(422, exc)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "InternalError", "detail": f"Internal server error: {str(exc)}"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the app."""
    app.add_exception_handler(PixelkitError, pixelkit_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
