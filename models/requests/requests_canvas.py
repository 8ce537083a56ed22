"""Canvas Workspace Request Models.

Pydantic models for validating project, node, edge, viewport and assistant
API requests.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from models.common import LLMModel, NodeKind
from models.domain.conversation import ImageAttachment


class CreateProjectRequest(BaseModel):
    """Request model for creating a project"""
    name: Optional[str] = Field(
        None, max_length=200,
        description="Project name (auto-named 'Untitled Project N' when omitted)"
    )

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank names as omitted"""
        if v is None:
            return None
        v = v.strip()
        return v or None


class RenameProjectRequest(BaseModel):
    """Request model for renaming a project"""
    name: str = Field(..., min_length=1, max_length=200)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Reject names that are only whitespace"""
        v = v.strip()
        if not v:
            raise ValueError('name must not be blank')
        return v


class AddNodeRequest(BaseModel):
    """Request model for adding a node from the toolbar or as a child"""
    type: NodeKind = Field(NodeKind.TEXT, description="Node type")
    content: Any = Field(None, description="Initial content (type default when omitted)")
    width: Optional[float] = Field(None, gt=0, allow_inf_nan=False, description="Width override")
    height: Optional[float] = Field(None, gt=0, allow_inf_nan=False, description="Height override")
    parent_id: Optional[str] = Field(
        None, description="Attach under this node and re-run the radial layout"
    )

    class Config:
        """Configuration for AddNodeRequest JSON schema"""
        json_schema_extra = {
            "example": {
                "type": "text",
                "content": "Photosynthesis",
                "parent_id": None
            }
        }


class MoveNodeRequest(BaseModel):
    """Request model for moving a node (logical coordinates)"""
    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)


class ResizeNodeRequest(BaseModel):
    """Request model for resizing a node; clamped to the minimum size"""
    width: float = Field(..., allow_inf_nan=False)
    height: float = Field(..., allow_inf_nan=False)


class UpdateContentRequest(BaseModel):
    """Request model for replacing node content"""
    content: Any = Field(..., description="New content matching the node's type")


class LinkNodesRequest(BaseModel):
    """Request model for linking two nodes"""
    source_node_id: str = Field(..., min_length=1)
    target_node_id: str = Field(..., min_length=1)


class ViewportSizeRequest(BaseModel):
    """Request model for reporting the on-screen canvas size"""
    width: float = Field(..., gt=0, allow_inf_nan=False)
    height: float = Field(..., gt=0, allow_inf_nan=False)


class WheelRequest(BaseModel):
    """Request model for one wheel event over the canvas"""
    delta_x: float = Field(0.0, allow_inf_nan=False)
    delta_y: float = Field(0.0, allow_inf_nan=False)
    cursor_x: float = Field(0.0, allow_inf_nan=False, description="Pointer x relative to the container")
    cursor_y: float = Field(0.0, allow_inf_nan=False, description="Pointer y relative to the container")
    zoom: bool = Field(False, description="True when Ctrl/Cmd is held")


class ChatRequest(BaseModel):
    """Request model for one canvas assistant message"""
    message: str = Field('', max_length=10000, description="User message")
    image: Optional[ImageAttachment] = Field(None, description="Attached image")
    reference_node_id: Optional[str] = Field(None, description="Canvas node the user points at")
    model: Optional[LLMModel] = Field(None, description="Override the configured assistant model")

    class Config:
        """Configuration for ChatRequest JSON schema"""
        json_schema_extra = {
            "example": {
                "message": "Create a mind map of the water cycle",
                "reference_node_id": None,
                "model": "qwen"
            }
        }
