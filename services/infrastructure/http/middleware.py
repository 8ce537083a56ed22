"""
Middleware configuration for the canvas application.

Handles:
- CORS configuration
- GZip compression
- Request body size limiting
- Request/response logging
"""

import time
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from config.settings import config

logger = logging.getLogger(__name__)

# Chat requests may carry a base64 image attachment
MAX_REQUEST_BODY_SIZE = 10 * 1024 * 1024  # 10MB

# Assistant exchanges wait on one or more model calls
SLOW_EXCHANGE_SECONDS = 30
SLOW_REQUEST_SECONDS = 2


async def limit_request_body_size(request: Request, call_next):
    """
    Reject requests whose Content-Length exceeds MAX_REQUEST_BODY_SIZE.

    Note: This checks Content-Length header, which can be spoofed.
    """
    content_length = request.headers.get('content-length')
    if content_length:
        try:
            size = int(content_length)
        except ValueError:
            size = 0
        if size > MAX_REQUEST_BODY_SIZE:
            client_ip = request.client.host if request.client else 'unknown'
            logger.warning(
                "Rejected %.1fMB request body from %s on %s",
                size / 1024 / 1024, client_ip, request.url.path
            )
            return JSONResponse(
                status_code=413,
                content={
                    "detail": f"Request body too large. Maximum size is {MAX_REQUEST_BODY_SIZE // 1024 // 1024}MB"
                }
            )

    return await call_next(request)


async def log_requests(request: Request, call_next):
    """
    Log all HTTP requests and responses with timing information.
    """
    start_time = time.time()

    response = await call_next(request)

    response_time = time.time() - start_time
    client_host = request.client.host if request.client else 'unknown'
    logger.debug(
        "Request: %s %s from %s Response: %s in %.3fs",
        request.method, request.url.path, client_host, response.status_code, response_time
    )

    is_exchange = request.url.path.endswith('/chat') or request.url.path.endswith('/expand')
    if is_exchange and response_time > SLOW_EXCHANGE_SECONDS:
        logger.warning(
            "Slow assistant exchange: %s %s took %.3fs",
            request.method, request.url.path, response_time
        )
    elif not is_exchange and response_time > SLOW_REQUEST_SECONDS:
        logger.warning(
            "Slow request: %s %s took %.3fs",
            request.method, request.url.path, response_time
        )

    return response


def setup_middleware(app: FastAPI):
    """
    Register all middleware with the FastAPI application.

    Order matters - middleware is executed in reverse order of registration.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # log_requests runs first, then limit_request_body_size
    app.middleware("http")(limit_request_body_size)
    app.middleware("http")(log_requests)
