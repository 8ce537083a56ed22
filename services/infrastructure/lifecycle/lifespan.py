"""
Lifespan management for the canvas application.

Handles FastAPI application startup and shutdown lifecycle:
- LLM configuration check
- Project registry creation
- Resource cleanup on shutdown (capture streams, shared HTTP clients)
"""

import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from clients.llm import close_httpx_clients
from config.settings import config
from services.canvas.project_registry import ProjectRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Handles application initialization and cleanup.
    """
    startup_start = time.time()
    fastapi_app.state.start_time = startup_start
    fastapi_app.state.is_shutting_down = False

    # Only log startup messages from first worker to avoid repetition
    worker_id = os.getenv('UVICORN_WORKER_ID', '0')
    is_main_worker = (worker_id == '0' or not worker_id)

    if is_main_worker:
        logger.debug("=" * 80)
        logger.debug("FastAPI Application Starting")
        logger.debug("=" * 80)

    if not config.validate_qwen_config():
        logger.warning(
            "[LIFESPAN] QWEN_API_KEY/QWEN_API_URL not configured; "
            "assistant requests will fail until they are set"
        )

    if getattr(fastapi_app.state, 'registry', None) is None:
        fastapi_app.state.registry = ProjectRegistry()

    if is_main_worker:
        logger.info(
            "[LIFESPAN] Canvas service v%s ready in %.2fs",
            config.version, time.time() - startup_start
        )

    try:
        yield
    finally:
        fastapi_app.state.is_shutting_down = True
        logger.debug("[LIFESPAN] Shutting down...")

        fastapi_app.state.registry.close_all()
        logger.debug("[LIFESPAN] Capture streams released")

        try:
            await close_httpx_clients()
            logger.debug("[LIFESPAN] httpx clients closed")
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("[LIFESPAN] Failed to close httpx clients: %s", e)
