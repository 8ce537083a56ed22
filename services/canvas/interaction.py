"""
Canvas Interaction State Machines
=================================

Pointer-driven drag, resize and link gestures over canvas nodes.

Each machine captures the pointer position and the node geometry on press.
Every move computes the screen-space delta from the press point, divides it by
the current viewport scale and applies it to the captured geometry, so the
result never drifts from the pointer. Release deactivates the machine.

These machines are the in-process API for a pointer front end; the HTTP
layer exposes only finished edits such as moves, resizes and links.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import List, Optional, Tuple
import logging

from models.common import LinkHandle
from models.domain.canvas import Edge, LinkingState, MIN_NODE_WIDTH, MIN_NODE_HEIGHT
from services.canvas.graph_store import GraphStore
from services.canvas.viewport import ViewportEngine


logger = logging.getLogger(__name__)


class _PointerMachine:
    """Shared press/move/release bookkeeping."""

    def __init__(self, store: GraphStore, viewport: ViewportEngine):
        self.store = store
        self.viewport = viewport
        self.node_id: Optional[str] = None
        self._start_pointer: Tuple[float, float] = (0.0, 0.0)
        self._start_geometry: Tuple[float, float] = (0.0, 0.0)

    @property
    def active(self) -> bool:
        return self.node_id is not None

    def _logical_delta(self, pointer_x: float, pointer_y: float) -> Tuple[float, float]:
        scale = self.viewport.state.scale
        return (
            (pointer_x - self._start_pointer[0]) / scale,
            (pointer_y - self._start_pointer[1]) / scale
        )

    def release(self) -> None:
        self.node_id = None


class NodeDragMachine(_PointerMachine):
    """Moves a node with the pointer."""

    def press(self, node_id: str, pointer_x: float, pointer_y: float) -> bool:
        node = self.store.get_node(node_id)
        if node is None:
            return False
        self.node_id = node_id
        self._start_pointer = (pointer_x, pointer_y)
        self._start_geometry = (node.x, node.y)
        return True

    def move(self, pointer_x: float, pointer_y: float) -> None:
        if not self.active:
            return
        dx, dy = self._logical_delta(pointer_x, pointer_y)
        self.store.move_node(self.node_id, self._start_geometry[0] + dx, self._start_geometry[1] + dy)


class NodeResizeMachine(_PointerMachine):
    """Resizes a node from its bottom-right corner."""

    def press(self, node_id: str, pointer_x: float, pointer_y: float) -> bool:
        node = self.store.get_node(node_id)
        if node is None:
            return False
        self.node_id = node_id
        self._start_pointer = (pointer_x, pointer_y)
        self._start_geometry = (node.width, node.height)
        return True

    def move(self, pointer_x: float, pointer_y: float) -> None:
        if not self.active:
            return
        dx, dy = self._logical_delta(pointer_x, pointer_y)
        self.store.resize_node(
            self.node_id,
            max(MIN_NODE_WIDTH, self._start_geometry[0] + dx),
            max(MIN_NODE_HEIGHT, self._start_geometry[1] + dy)
        )


class LinkDragMachine:
    """
    Drags a floating edge end from a node handle.

    The cursor point is kept in logical coordinates so the preview curve can
    be drawn in canvas space. Releasing over a different node links the two;
    releasing anywhere else, or over the starting node, creates nothing.
    """

    def __init__(self, store: GraphStore, viewport: ViewportEngine):
        self.store = store
        self.viewport = viewport
        self.state: Optional[LinkingState] = None

    @property
    def active(self) -> bool:
        return self.state is not None

    def press(self, node_id: str, handle: LinkHandle, pointer_x: float, pointer_y: float) -> bool:
        if self.store.get_node(node_id) is None:
            return False
        self.state = LinkingState(
            source_node_id=node_id,
            source_handle=handle,
            cursor_point=self.viewport.screen_to_logical(pointer_x, pointer_y)
        )
        return True

    def move(self, pointer_x: float, pointer_y: float) -> None:
        if self.state is None:
            return
        self.state = self.state.model_copy(
            update={'cursor_point': self.viewport.screen_to_logical(pointer_x, pointer_y)}
        )

    def release(self, target_node_id: Optional[str] = None) -> Optional[List[Edge]]:
        """
        End the drag.

        Returns:
            The updated edge list when a link was made, otherwise None
        """
        state, self.state = self.state, None
        if state is None or not target_node_id:
            return None
        if target_node_id == state.source_node_id:
            logger.debug("[Interaction] Discarded self-link on %s", target_node_id)
            return None
        if self.store.get_node(target_node_id) is None:
            return None
        return self.store.link_nodes(state.source_node_id, target_node_id)


class InteractionController:
    """
    Routes document-level pointer moves and releases to whichever gesture
    is active. At most one node gesture runs at a time.
    """

    def __init__(self, store: GraphStore, viewport: ViewportEngine):
        self.viewport = viewport
        self.drag = NodeDragMachine(store, viewport)
        self.resize = NodeResizeMachine(store, viewport)
        self.link = LinkDragMachine(store, viewport)

    @property
    def busy(self) -> bool:
        return self.drag.active or self.resize.active or self.link.active or self.viewport.is_panning

    def start_drag(self, node_id: str, pointer_x: float, pointer_y: float) -> bool:
        if self.busy:
            return False
        return self.drag.press(node_id, pointer_x, pointer_y)

    def start_resize(self, node_id: str, pointer_x: float, pointer_y: float) -> bool:
        if self.busy:
            return False
        return self.resize.press(node_id, pointer_x, pointer_y)

    def start_link(self, node_id: str, handle: LinkHandle, pointer_x: float, pointer_y: float) -> bool:
        if self.busy:
            return False
        return self.link.press(node_id, handle, pointer_x, pointer_y)

    def pointer_move(self, pointer_x: float, pointer_y: float) -> None:
        if self.drag.active:
            self.drag.move(pointer_x, pointer_y)
        elif self.resize.active:
            self.resize.move(pointer_x, pointer_y)
        elif self.link.active:
            self.link.move(pointer_x, pointer_y)
        elif self.viewport.is_panning:
            self.viewport.pan_move(pointer_x, pointer_y)

    def pointer_up(self, target_node_id: Optional[str] = None) -> Optional[List[Edge]]:
        """Release every gesture; returns the new edge list if a link was made."""
        self.drag.release()
        self.resize.release()
        self.viewport.end_pan()
        if self.link.active:
            return self.link.release(target_node_id)
        return None
