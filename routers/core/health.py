"""
Health check endpoints for the canvas application.

Provides:
- Basic health check
- Application status endpoint
"""

import time
import logging

from fastapi import APIRouter, Request

from clients.llm.http_client_manager import get_httpx_manager
from config.settings import config
from models.responses import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint"""
    return HealthResponse(status="ok", version=config.version)


@router.get("/status")
async def get_status(request: Request):
    """Application status endpoint with uptime, projects and pooled LLM connections"""
    state = request.app.state
    uptime = time.time() - state.start_time if hasattr(state, 'start_time') else 0
    registry = getattr(state, 'registry', None)

    return {
        "status": "running",
        "framework": "FastAPI",
        "version": config.version,
        "uptime_seconds": round(uptime, 1),
        "projects": len(registry.list_projects()) if registry is not None else 0,
        "llm_configured": config.validate_qwen_config(),
        "llm_connections": get_httpx_manager().providers,
        "timestamp": time.time()
    }
