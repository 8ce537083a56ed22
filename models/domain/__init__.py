"""
Domain Models

Pydantic models representing the canvas workspace entities.
"""

from .canvas import (
    CanvasNode,
    CanvasNodeBase,
    CANVAS_NODE_ADAPTER,
    Edge,
    LinkingState,
    NodeDraft,
    Point,
    ViewState,
    ViewportSize,
    build_node,
    generate_id,
    morph_node,
    MIN_NODE_WIDTH,
    MIN_NODE_HEIGHT,
)
from .conversation import ChatMessage, ImageAttachment, TokenUsage
from .project import Project, DEFAULT_PROJECT_NAME

__all__ = [
    'CanvasNode',
    'CanvasNodeBase',
    'CANVAS_NODE_ADAPTER',
    'Edge',
    'LinkingState',
    'NodeDraft',
    'Point',
    'ViewState',
    'ViewportSize',
    'build_node',
    'generate_id',
    'morph_node',
    'MIN_NODE_WIDTH',
    'MIN_NODE_HEIGHT',
    'ChatMessage',
    'ImageAttachment',
    'TokenUsage',
    'Project',
    'DEFAULT_PROJECT_NAME',
]
