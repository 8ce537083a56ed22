"""
API Router Module
=================

Main API router that combines all canvas sub-routers:
- Projects
- Canvas nodes and edges
- Viewport
- Assistant
"""

from fastapi import APIRouter

from . import assistant, canvas, projects, viewport

# Create main router with prefix and tags
router = APIRouter(prefix="/api", tags=["api"])

# Include all sub-routers
router.include_router(projects.router)
router.include_router(canvas.router)
router.include_router(viewport.router)
router.include_router(assistant.router)

__all__ = ["router"]
