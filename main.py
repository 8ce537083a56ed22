"""
Infinite Canvas - AI-Assisted Visual Workspace (FastAPI)
========================================================

Async web service behind an infinite canvas: projects of freely placed
nodes and edges, a pan/zoom viewport, and an assistant that builds mind
maps and interactive components on the canvas through tool calls.

Version: See VERSION file (centralized version management)
Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License

Features:
- FastAPI with Pydantic models for type safety
- Uvicorn ASGI server
- Auto-generated OpenAPI documentation at /docs (DEBUG only)
- DashScope OpenAI-compatible chat completions with tool calling
"""

# Third-party imports
from fastapi import FastAPI

# First-party imports
from config.settings import config
from routers.register import register_routers
from services.infrastructure.utils.logging_config import setup_logging
from services.infrastructure.lifecycle.lifespan import lifespan
from services.infrastructure.http.middleware import setup_middleware
from services.infrastructure.http.exception_handlers import setup_exception_handlers
from services.infrastructure.process.server_launcher import run_server

# Setup logging (must happen early, before other modules use logger)
logger = setup_logging()

# ============================================================================
# FASTAPI APPLICATION INITIALIZATION
# ============================================================================

app = FastAPI(
    title="Infinite Canvas API",
    description="AI-assisted infinite canvas workspace with FastAPI + Uvicorn",
    version=config.version,
    # Disable Swagger UI in production (only enable in DEBUG mode)
    docs_url="/docs" if config.debug else None,
    redoc_url="/redoc" if config.debug else None,
    lifespan=lifespan
)

# ============================================================================
# MIDDLEWARE & EXCEPTION HANDLERS
# ============================================================================

setup_middleware(app)
setup_exception_handlers(app)

# ============================================================================
# ROUTER REGISTRATION
# ============================================================================

register_routers(app)

# ============================================================================
# APPLICATION ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    run_server()
