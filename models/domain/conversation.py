"""
Conversation Domain Models
==========================

Append-only chat history owned by a workspace.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from models.common import ChatRole
from models.domain.canvas import CanvasNode


class TokenUsage(BaseModel):
    """Token accounting reported by a model call"""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_usage_dict(cls, usage: Optional[Dict[str, Any]]) -> Optional['TokenUsage']:
        """Build from an OpenAI-style ``usage`` dict; ``None`` when absent."""
        if not usage:
            return None
        return cls(
            prompt_tokens=int(usage.get('prompt_tokens') or 0),
            completion_tokens=int(usage.get('completion_tokens') or 0),
            total_tokens=int(usage.get('total_tokens') or 0),
        )


class ImageAttachment(BaseModel):
    """Image attached to a user turn (base64 data)"""
    data: str = Field(..., min_length=1)
    mime_type: str = 'image/png'

    @property
    def data_url(self) -> str:
        """Data URL form accepted by multimodal chat endpoints."""
        return f"data:{self.mime_type};base64,{self.data}"


class ChatMessage(BaseModel):
    """One conversation turn"""
    role: ChatRole
    text: str = ''
    image: Optional[ImageAttachment] = None
    reference: Optional[CanvasNode] = None
    model: Optional[str] = None
    token_usage: Optional[TokenUsage] = None
