"""
Canvas Workspace
================

One open project with everything that operates on it: the graph store, the
viewport, pointer interactions, capture streams and the assistant.

``is_processing`` is raised for the duration of an assistant exchange. It only
gates a second exchange; canvas and viewport operations stay available while
the model call is pending.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Any, Dict, List, Optional, Tuple
import logging

from agents.canvas.component_generator import ComponentGenerator
from agents.canvas.tool_orchestrator import GENERIC_ERROR_TEXT, ToolOrchestrator
from config.settings import config
from models.common import CAPTURE_NODE_KINDS, ChatRole, NodeKind
from models.domain.canvas import CanvasNodeBase, NodeDraft, ViewportSize
from models.domain.conversation import ChatMessage, ImageAttachment
from models.domain.project import Project
from prompts.canvas_assistant import get_prompt
from services.canvas.graph_store import GraphStore
from services.canvas.interaction import InteractionController
from services.canvas.media_capture import MediaCaptureManager, StreamProvider
from services.canvas.viewport import ViewportEngine
from services.infrastructure.http.error_handler import ExchangeInProgressError
from services.llm import LLMService


logger = logging.getLogger(__name__)

EXPAND_ERROR_TEXT = 'Sorry, I encountered an error while trying to expand on that.'

# (width, height, initial content) for nodes added from the toolbar
DEFAULT_NODE_SPECS: Dict[NodeKind, Tuple[float, float, Any]] = {
    NodeKind.TEXT: (250.0, 120.0, ''),
    NodeKind.CODE: (450.0, 300.0, '// Start coding...'),
    NodeKind.YOUTUBE: (320.0, 350.0, None),
    NodeKind.WEBSITE: (400.0, 300.0, None),
    NodeKind.VIDEO: (320.0, 240.0, None),
    NodeKind.SCREEN: (480.0, 270.0, None),
}
FALLBACK_NODE_SPEC: Tuple[float, float, Any] = (300.0, 200.0, None)


class Workspace:
    """Runtime state around one project."""

    def __init__(
        self,
        project: Project,
        stream_provider: Optional[StreamProvider] = None,
        llm: Optional[LLMService] = None,
        component_generator: Optional[ComponentGenerator] = None,
        viewport_size: Optional[ViewportSize] = None
    ):
        self.project = project
        self.store = GraphStore(project)
        self.viewport = ViewportEngine(size=viewport_size or ViewportSize(
            width=config.CANVAS_VIEWPORT_WIDTH,
            height=config.CANVAS_VIEWPORT_HEIGHT
        ))
        self.interactions = InteractionController(self.store, self.viewport)
        self.captures = MediaCaptureManager(stream_provider)
        self.orchestrator = ToolOrchestrator(
            self.store,
            llm=llm,
            component_generator=component_generator
        )
        self.is_processing = False

    # ============================================================================
    # NODES
    # ============================================================================

    def add_node_of_type(
        self,
        kind: NodeKind,
        content: Any = None,
        parent_id: Optional[str] = None,
        width: Optional[float] = None,
        height: Optional[float] = None
    ) -> CanvasNodeBase:
        """
        Add a node with the default size and content of its type.

        Without a parent the node is centered in the current viewport.
        Capture nodes open their stream immediately.
        """
        default_width, default_height, default_content = DEFAULT_NODE_SPECS.get(kind, FALLBACK_NODE_SPEC)
        draft = NodeDraft(
            type=kind,
            content=default_content if content is None else content,
            width=width or default_width,
            height=height or default_height
        )
        node = self.store.add_node(
            draft,
            parent_id=parent_id,
            view_state=self.viewport.state,
            viewport_size=self.viewport.size
        )
        if kind in CAPTURE_NODE_KINDS:
            self.captures.mount(node)
        return node

    def mount_node(self, node_id: str) -> bool:
        """Open the capture stream of a node being shown again."""
        node = self.store.get_node(node_id)
        if node is None:
            return False
        return self.captures.mount(node) is not None

    def unmount_node(self, node_id: str) -> bool:
        """Release the capture stream of a node that is no longer shown."""
        return self.captures.unmount(node_id)

    def delete_node(self, node_id: str) -> List[CanvasNodeBase]:
        self.captures.unmount(node_id)
        return self.store.delete_node(node_id)

    def clear_canvas(self) -> None:
        """Remove every node and edge; the conversation is kept."""
        self.captures.release_all()
        self.store.clear()
        logger.info("[Workspace] Cleared canvas of project %s", self.project.id)

    # ============================================================================
    # ASSISTANT
    # ============================================================================

    async def send_message(
        self,
        text: str,
        image: Optional[ImageAttachment] = None,
        reference_node_id: Optional[str] = None,
        model: Optional[str] = None
    ) -> List[ChatMessage]:
        """
        Run one assistant exchange for a user message.

        Returns:
            The appended turns (empty if the message carried nothing)

        Raises:
            ExchangeInProgressError: If an exchange is already running
        """
        self._check_idle()
        reference = self.store.get_node(reference_node_id)
        if not text.strip() and image is None and reference is None:
            return []

        message = ChatMessage(role=ChatRole.USER, text=text, image=image, reference=reference)
        return await self._run_exchange(message, None, GENERIC_ERROR_TEXT, model)

    async def expand_node(self, node_id: str, model: Optional[str] = None) -> List[ChatMessage]:
        """
        Ask the assistant to grow a mind map out of a text node.

        Non-text and empty nodes are ignored.
        """
        self._check_idle()
        node = self.store.get_node(node_id)
        if node is None or node.type != NodeKind.TEXT.value or not node.content:
            return []

        prompt = get_prompt('expand_node', content=node.content)
        message = ChatMessage(role=ChatRole.USER, text=f"(Expanding node) {prompt}")
        return await self._run_exchange(message, node_id, EXPAND_ERROR_TEXT, model)

    def _check_idle(self) -> None:
        if self.is_processing:
            raise ExchangeInProgressError(self.project.id)

    async def _run_exchange(
        self,
        message: ChatMessage,
        initial_parent_id: Optional[str],
        error_text: str,
        model: Optional[str]
    ) -> List[ChatMessage]:
        self.is_processing = True
        try:
            return await self.orchestrator.run_exchange(
                message,
                initial_parent_id=initial_parent_id,
                error_text=error_text,
                model=model
            )
        finally:
            self.is_processing = False

    def close(self) -> None:
        """Release every capture stream held by this workspace."""
        self.captures.release_all()
