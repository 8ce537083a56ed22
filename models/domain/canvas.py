"""
Canvas Domain Models
====================

Nodes, edges and viewport state for one infinite-canvas workspace.

Node behaviour varies by its ``type`` tag, so every tag gets its own model and
``CanvasNode`` is the discriminated union over them. Replacing a node's type
and content together (a ``loading`` placeholder becoming a ``code`` node) goes
through ``morph_node`` so the new content is validated against its new shape.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union
import json
import random
import string
import time

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from models.common import LinkHandle, NodeKind


# Minimum node size enforced on resize
MIN_NODE_WIDTH = 200.0
MIN_NODE_HEIGHT = 100.0

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_id(prefix: str = 'id') -> str:
    """Generate an opaque id such as ``node_1712345678901_k3j9x0abc``."""
    suffix = ''.join(random.choices(_ID_ALPHABET, k=9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


class Point(BaseModel):
    """A 2D point (screen or logical space depending on context)"""
    model_config = ConfigDict(allow_inf_nan=False)

    x: float
    y: float


class ViewportSize(BaseModel):
    """Size of the on-screen canvas container in pixels"""
    model_config = ConfigDict(allow_inf_nan=False)

    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class ViewState(BaseModel):
    """Screen-space translation plus uniform zoom factor"""
    model_config = ConfigDict(allow_inf_nan=False)

    x: float = 0.0
    y: float = 0.0
    scale: float = 1.0


# ============================================================================
# NODE CONTENT SHAPES
# ============================================================================

class ImageContent(BaseModel):
    """Inline image payload (base64 data)"""
    data: str
    mime_type: str = 'image/png'


class YouTubeContent(BaseModel):
    """Embedded YouTube video"""
    video_id: str
    url: str
    title: Optional[str] = None


class WebsiteContent(BaseModel):
    """Embedded web page"""
    url: str
    title: Optional[str] = None
    summary: Optional[str] = None


class SearchResultContent(BaseModel):
    """Result list of a web search"""
    query: str
    results: List[Dict[str, Any]] = Field(default_factory=list)


# ============================================================================
# NODE VARIANTS
# ============================================================================

class CanvasNodeBase(BaseModel):
    """Geometry shared by every node variant (logical, unscaled space)"""
    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    x: float = 0.0
    y: float = 0.0
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)

    @property
    def center(self) -> Tuple[float, float]:
        """Geometric center of the node box."""
        return self.x + self.width / 2, self.y + self.height / 2


class TextNode(CanvasNodeBase):
    type: Literal['text'] = 'text'
    content: str = ''


class CodeNode(CanvasNodeBase):
    type: Literal['code'] = 'code'
    content: str = ''


class LoadingNode(CanvasNodeBase):
    """Transient placeholder, replaced in place once its job finishes"""
    type: Literal['loading'] = 'loading'
    content: str = ''


class ImageNode(CanvasNodeBase):
    type: Literal['image'] = 'image'
    content: Optional[ImageContent] = None


class YouTubeNode(CanvasNodeBase):
    type: Literal['youtube'] = 'youtube'
    content: Optional[YouTubeContent] = None


class WebsiteNode(CanvasNodeBase):
    type: Literal['website'] = 'website'
    content: Optional[WebsiteContent] = None


class SearchResultNode(CanvasNodeBase):
    type: Literal['search_result'] = 'search_result'
    content: Optional[SearchResultContent] = None


class AudioNode(CanvasNodeBase):
    type: Literal['audio'] = 'audio'
    content: Optional[str] = None


class VideoNode(CanvasNodeBase):
    type: Literal['video'] = 'video'
    content: Optional[str] = None


class ScreenNode(CanvasNodeBase):
    type: Literal['screen'] = 'screen'
    content: Optional[str] = None


CanvasNode = Annotated[
    Union[
        TextNode,
        CodeNode,
        LoadingNode,
        ImageNode,
        YouTubeNode,
        WebsiteNode,
        SearchResultNode,
        AudioNode,
        VideoNode,
        ScreenNode,
    ],
    Field(discriminator='type'),
]

CANVAS_NODE_ADAPTER: TypeAdapter = TypeAdapter(CanvasNode)


class NodeDraft(BaseModel):
    """A node that has not been given an id yet"""
    model_config = ConfigDict(allow_inf_nan=False)

    type: NodeKind = NodeKind.TEXT
    content: Any = None
    x: float = 0.0
    y: float = 0.0
    width: float = Field(300.0, gt=0)
    height: float = Field(200.0, gt=0)


def build_node(draft: NodeDraft, node_id: str) -> CanvasNodeBase:
    """Materialize a draft into the node variant matching its type."""
    data = draft.model_dump(mode='json', exclude={'content'})
    data['id'] = node_id
    if draft.content is not None:
        data['content'] = draft.content
    return CANVAS_NODE_ADAPTER.validate_python(data)


def morph_node(node: CanvasNodeBase, **updates: Any) -> CanvasNodeBase:
    """
    Return a copy of ``node`` with ``updates`` applied, re-validated as a node.

    Used whenever ``type`` and ``content`` change together so the result is
    always the variant matching the new tag.
    """
    data = node.model_dump(mode='json')
    data.update(updates)
    if isinstance(data.get('type'), NodeKind):
        data['type'] = data['type'].value
    return CANVAS_NODE_ADAPTER.validate_python(data)


def node_content_summary(node: CanvasNodeBase, limit: int = 200) -> str:
    """JSON-encoded node content cut to ``limit`` characters."""
    content = node.model_dump(mode='json', include={'content'}).get('content')
    encoded = json.dumps(content, ensure_ascii=False, separators=(",", ":"))
    return encoded[:limit]


# ============================================================================
# EDGES AND LINKING
# ============================================================================

class Edge(BaseModel):
    """Directed relation between two nodes"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    from_id: str = Field(..., alias='from')
    to_id: str = Field(..., alias='to')

    def touches(self, node_id: str) -> bool:
        """True when the node is either endpoint of this edge."""
        return self.from_id == node_id or self.to_id == node_id


class LinkingState(BaseModel):
    """Ephemeral state of a link drag between node handles"""
    source_node_id: str
    source_handle: LinkHandle
    cursor_point: Point
