"""
Infinite Canvas Pydantic Models
===============================

Domain, request and response models for FastAPI type safety and validation.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from .common import NodeKind, ChatRole, LinkHandle, LLMModel

from .domain import (
    CanvasNode,
    CanvasNodeBase,
    Edge,
    NodeDraft,
    ViewState,
    ViewportSize,
    ChatMessage,
    ImageAttachment,
    TokenUsage,
    Project,
)

from .requests.requests_canvas import (
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

from .responses import (
    HealthResponse,
    ProjectSummary,
    ProjectListResponse,
    GraphResponse,
    NodeResponse,
    ViewportResponse,
    ChatResponse,
)

__all__ = [
    # Enums
    'NodeKind',
    'ChatRole',
    'LinkHandle',
    'LLMModel',
    # Domain
    'CanvasNode',
    'CanvasNodeBase',
    'Edge',
    'NodeDraft',
    'ViewState',
    'ViewportSize',
    'ChatMessage',
    'ImageAttachment',
    'TokenUsage',
    'Project',
    # Requests
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
    # Responses
    'HealthResponse',
    'ProjectSummary',
    'ProjectListResponse',
    'GraphResponse',
    'NodeResponse',
    'ViewportResponse',
    'ChatResponse',
]
