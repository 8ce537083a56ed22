"""
Canvas API Dependencies
=======================

FastAPI dependencies shared by the canvas routers:
- Project registry lookup (stored on ``app.state`` by the lifespan)
- Workspace lookup by project id
- Node lookup that turns a missing id into a 404

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from fastapi import Depends, Request

from models.domain.canvas import CanvasNodeBase
from services.canvas.project_registry import ProjectRegistry
from services.canvas.workspace import Workspace
from services.infrastructure.http.error_handler import NodeNotFoundError


def get_registry(request: Request) -> ProjectRegistry:
    """Registry of the running application, created on first use."""
    registry = getattr(request.app.state, 'registry', None)
    if registry is None:
        registry = ProjectRegistry()
        request.app.state.registry = registry
    return registry


def get_workspace(project_id: str, registry: ProjectRegistry = Depends(get_registry)) -> Workspace:
    """Open workspace of ``project_id``; raises ProjectNotFoundError (404)."""
    return registry.get_workspace(project_id)


def require_node(workspace: Workspace, node_id: str) -> CanvasNodeBase:
    node = workspace.store.get_node(node_id)
    if node is None:
        raise NodeNotFoundError(node_id)
    return node
