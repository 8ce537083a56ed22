"""
Interaction State Machine Tests
===============================

Unit tests for pointer gestures over nodes:
- Drag and resize follow the pointer at any zoom level
- Link drags create, deduplicate or discard edges
- One gesture at a time

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import pytest

from models.common import LinkHandle, NodeKind
from models.domain.canvas import MIN_NODE_HEIGHT, MIN_NODE_WIDTH, NodeDraft, ViewState
from services.canvas.interaction import InteractionController
from services.canvas.viewport import MIDDLE_BUTTON, ViewportEngine


@pytest.fixture
def viewport():
    return ViewportEngine()


@pytest.fixture
def controller(store, viewport):
    return InteractionController(store, viewport)


def _add(store, x=0.0, y=0.0, width=250.0, height=120.0):
    return store.add_node(NodeDraft(type=NodeKind.TEXT, content='n', x=x, y=y, width=width, height=height))


class TestNodeDrag:
    """Dragging nodes"""

    def test_drag_follows_pointer_divided_by_scale(self, store, viewport, controller):
        node = _add(store, x=100, y=100)
        viewport.state = ViewState(scale=2.0)

        assert controller.start_drag(node.id, 500, 500) is True
        controller.pointer_move(540, 460)
        controller.pointer_move(600, 520)

        moved = store.get_node(node.id)
        assert (moved.x, moved.y) == (150, 110)

    def test_release_stops_drag(self, store, controller):
        node = _add(store)
        controller.start_drag(node.id, 0, 0)
        controller.pointer_up()
        controller.pointer_move(100, 100)
        assert (store.get_node(node.id).x, store.get_node(node.id).y) == (0, 0)

    def test_missing_node_does_not_start(self, controller):
        assert controller.start_drag('node_missing', 0, 0) is False
        assert controller.busy is False


class TestNodeResize:
    """Resizing nodes"""

    def test_resize_tracks_pointer(self, store, controller):
        node = _add(store, width=300, height=200)
        controller.start_resize(node.id, 10, 10)
        controller.pointer_move(60, 35)
        resized = store.get_node(node.id)
        assert (resized.width, resized.height) == (350, 225)

    def test_resize_never_below_minimum(self, store, controller):
        node = _add(store, width=300, height=200)
        controller.start_resize(node.id, 0, 0)
        controller.pointer_move(-1000, -1000)
        resized = store.get_node(node.id)
        assert (resized.width, resized.height) == (MIN_NODE_WIDTH, MIN_NODE_HEIGHT)


class TestLinkDrag:
    """Linking nodes through handles"""

    def test_cursor_point_is_logical(self, store, viewport, controller):
        node = _add(store)
        viewport.state = ViewState(x=100, y=0, scale=0.5)
        controller.start_link(node.id, LinkHandle.RIGHT, 100, 0)
        controller.pointer_move(200, 50)

        state = controller.link.state
        assert state.source_handle == LinkHandle.RIGHT
        assert (state.cursor_point.x, state.cursor_point.y) == (200, 100)

    def test_release_over_other_node_links(self, store, controller):
        a = _add(store)
        b = _add(store, x=500)
        controller.start_link(a.id, LinkHandle.RIGHT, 0, 0)
        edges = controller.pointer_up(b.id)

        assert len(edges) == 1
        assert (edges[0].from_id, edges[0].to_id) == (a.id, b.id)
        assert controller.link.state is None

    def test_repeated_link_is_deduplicated(self, store, controller):
        a = _add(store)
        b = _add(store, x=500)
        for _ in range(3):
            controller.start_link(a.id, LinkHandle.LEFT, 0, 0)
            controller.pointer_up(b.id)
        assert len(store.edges) == 1

    @pytest.mark.parametrize("target", [None, 'self', 'node_missing'])
    def test_release_without_valid_target_creates_nothing(self, store, controller, target):
        a = _add(store)
        controller.start_link(a.id, LinkHandle.RIGHT, 0, 0)
        assert controller.pointer_up(a.id if target == 'self' else target) is None
        assert store.edges == []
        assert controller.busy is False


class TestController:
    """Gesture arbitration"""

    def test_one_gesture_at_a_time(self, store, controller):
        a = _add(store)
        controller.start_drag(a.id, 0, 0)
        assert controller.start_resize(a.id, 0, 0) is False
        assert controller.start_link(a.id, LinkHandle.RIGHT, 0, 0) is False

    def test_pointer_move_pans_when_no_node_gesture(self, viewport, controller):
        viewport.begin_pan(MIDDLE_BUTTON, 0, 0)
        controller.pointer_move(25, -10)
        assert (viewport.state.x, viewport.state.y) == (25, -10)
        controller.pointer_up()
        assert viewport.is_panning is False
