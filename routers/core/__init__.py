"""
Core Infrastructure Routers

Core application infrastructure endpoints: health checks and status.
"""

from .health import router as health_router

__all__ = [
    "health_router",
]
