"""
Request Models

Pydantic request models for API endpoints.
"""

from .requests_canvas import (
    CreateProjectRequest,
    RenameProjectRequest,
    AddNodeRequest,
    MoveNodeRequest,
    ResizeNodeRequest,
    UpdateContentRequest,
    LinkNodesRequest,
    ViewportSizeRequest,
    WheelRequest,
    ChatRequest,
)

__all__ = [
    'CreateProjectRequest',
    'RenameProjectRequest',
    'AddNodeRequest',
    'MoveNodeRequest',
    'ResizeNodeRequest',
    'UpdateContentRequest',
    'LinkNodesRequest',
    'ViewportSizeRequest',
    'WheelRequest',
    'ChatRequest',
]
