"""
Common Pydantic Models and Enums
=================================

Shared enumerations used across canvas domain models, requests and responses.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from enum import Enum


class NodeKind(str, Enum):
    """Closed set of canvas node types"""
    TEXT = "text"
    IMAGE = "image"
    YOUTUBE = "youtube"
    WEBSITE = "website"
    CODE = "code"
    AUDIO = "audio"
    VIDEO = "video"
    LOADING = "loading"
    SEARCH_RESULT = "search_result"
    SCREEN = "screen"


# Node kinds backed by a live media stream while mounted
CAPTURE_NODE_KINDS = frozenset({NodeKind.AUDIO, NodeKind.VIDEO, NodeKind.SCREEN})


class ChatRole(str, Enum):
    """Conversation turn roles"""
    USER = "user"
    MODEL = "model"


class LinkHandle(str, Enum):
    """Connection handles on the sides of a node"""
    LEFT = "left"
    RIGHT = "right"


class LLMModel(str, Enum):
    """Supported LLM models"""
    QWEN = "qwen"
    DEEPSEEK = "deepseek"
    KIMI = "kimi"
