"""Services package for the canvas application.

This package contains:
- Canvas services (viewport, graph store, interactions, workspaces)
- Infrastructure services (HTTP handlers, lifecycle, logging)
- LLM (Large Language Model) services

Import directly from subpackages:
    from services.llm import llm_service
    from services.canvas.workspace import Workspace
"""

__all__ = []
