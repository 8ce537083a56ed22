"""
Response Models
===============

Pydantic models for API response validation and documentation.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from typing import List
from datetime import datetime
from pydantic import BaseModel, Field

from models.domain.canvas import CanvasNode, Edge, ViewState
from models.domain.conversation import ChatMessage


class HealthResponse(BaseModel):
    """Response model for /health endpoint"""
    status: str = Field(..., description="Health status")
    version: str = Field(..., description="Application version")

    class Config:
        """Configuration for HealthResponse JSON schema"""
        json_schema_extra = {
            "example": {
                "status": "ok",
                "version": "1.0.0"
            }
        }


class ProjectSummary(BaseModel):
    """Project list entry"""
    id: str
    name: str
    updated_at: datetime
    node_count: int = 0


class ProjectListResponse(BaseModel):
    """Response model for listing projects"""
    projects: List[ProjectSummary] = Field(default_factory=list)


class GraphResponse(BaseModel):
    """Nodes and edges after a mutation"""
    nodes: List[CanvasNode] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)


class NodeResponse(BaseModel):
    """A single node plus the graph it now belongs to"""
    node: CanvasNode
    nodes: List[CanvasNode] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)


class ViewportResponse(BaseModel):
    """Current view state"""
    view: ViewState


class ChatResponse(BaseModel):
    """Turns appended by one assistant exchange, plus the resulting graph"""
    messages: List[ChatMessage] = Field(default_factory=list)
    nodes: List[CanvasNode] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)
