"""
Exception handlers for the canvas application.

Handles:
- Request validation errors (422)
- HTTP exceptions
- Canvas errors (missing project or node, exchange already running)
- General unhandled exceptions
"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException
from config.settings import config
from services.infrastructure.http.error_handler import CanvasError

logger = logging.getLogger(__name__)


def _request_path(request: Request) -> str:
    return getattr(request.url, 'path', '') if request and request.url else ''


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors (422 Unprocessable Entity).

    These occur when request body/parameters don't match the expected schema.
    """
    errors = exc.errors() if hasattr(exc, 'errors') else []
    error_details = []
    for error in errors:
        loc = error.get('loc', [])
        msg = error.get('msg', '')
        error_details.append(f"{'.'.join(str(x) for x in loc)}: {msg}")

    error_summary = '; '.join(error_details[:3])
    if len(error_details) > 3:
        error_summary += f" ... and {len(error_details) - 3} more"

    logger.debug("Request validation error on %s: %s", _request_path(request), error_summary)

    return JSONResponse(
        status_code=422,
        content={
            "detail": error_details,
            "message": "Request validation failed. Please check your request parameters."
        }
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Handle HTTP exceptions.

    Returns FastAPI-standard format: {"detail": "error message"}
    """
    if exc.status_code < 500:
        logger.debug("HTTP %s on %s: %s", exc.status_code, _request_path(request), exc.detail)
    else:
        logger.warning("HTTP %s on %s: %s", exc.status_code, _request_path(request), exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


async def canvas_exception_handler(request: Request, exc: CanvasError):
    """Map canvas errors onto their HTTP status with a ``detail`` message."""
    logger.debug("Canvas error %s on %s: %s", exc.status_code, _request_path(request), exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc)}
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.error(
        "Unhandled exception on %s: %s: %s",
        _request_path(request), type(exc).__name__, exc,
        exc_info=True
    )

    error_response = {"error": "An unexpected error occurred. Please try again later."}

    # Add debug info in development mode
    if config.debug:
        error_response["debug"] = str(exc)

    return JSONResponse(
        status_code=500,
        content=error_response
    )


def setup_exception_handlers(app: FastAPI):
    """
    Register all exception handlers with the FastAPI application.
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(CanvasError, canvas_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
