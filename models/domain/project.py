"""
Project Domain Model
====================

The workspace aggregate: nodes, edges and conversation of one canvas.
Plain serializable data; durable storage is handled outside the core.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field

from models.domain.canvas import CanvasNode, Edge, generate_id
from models.domain.conversation import ChatMessage


DEFAULT_PROJECT_NAME = 'Untitled Project'


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(BaseModel):
    """A named canvas with its graph and chat history"""
    id: str = Field(default_factory=lambda: generate_id('proj'))
    name: str = DEFAULT_PROJECT_NAME
    updated_at: datetime = Field(default_factory=_utcnow)
    nodes: List[CanvasNode] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)
    chat_history: List[ChatMessage] = Field(default_factory=list)

    def touch(self) -> None:
        """Mark the project as modified now."""
        self.updated_at = _utcnow()
