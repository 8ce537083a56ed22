"""
Viewport Engine Tests
=====================

Unit tests for the pan/zoom transform:
- Wheel pan and cursor-anchored wheel zoom
- Pan gestures and their button/modifier rules
- Stepped zoom, reset and fit-to-content

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import pytest

from models.domain.canvas import TextNode, ViewState, ViewportSize
from services.canvas.viewport import (
    LEFT_BUTTON,
    MAX_SCALE,
    MIDDLE_BUTTON,
    MIN_SCALE,
    ViewportEngine,
)


@pytest.fixture
def viewport():
    return ViewportEngine(size=ViewportSize(width=1000, height=800))


def _node(node_id, x, y, width, height):
    return TextNode(id=node_id, x=x, y=y, width=width, height=height, content=node_id)


class TestCoordinateConversion:
    """screen <-> logical mapping"""

    def test_identity_at_default_state(self, viewport):
        point = viewport.screen_to_logical(120, 45)
        assert (point.x, point.y) == (120, 45)

    def test_applies_translation_and_scale(self):
        viewport = ViewportEngine(state=ViewState(x=100, y=50, scale=2.0))
        point = viewport.screen_to_logical(300, 250)
        assert (point.x, point.y) == (100, 100)

    def test_logical_to_screen_inverts(self):
        viewport = ViewportEngine(state=ViewState(x=-30, y=12, scale=0.5))
        logical = viewport.screen_to_logical(400, 300)
        screen = viewport.logical_to_screen(logical.x, logical.y)
        assert screen.x == pytest.approx(400)
        assert screen.y == pytest.approx(300)


class TestWheel:
    """Wheel pan and zoom"""

    def test_plain_wheel_pans_by_delta(self, viewport):
        state = viewport.handle_wheel(10, -20, 500, 400)
        assert (state.x, state.y, state.scale) == (-10, 20, 1.0)

    def test_zoom_wheel_keeps_cursor_point_fixed(self, viewport):
        viewport.state = ViewState(x=40, y=-60, scale=1.3)
        before = viewport.screen_to_logical(350, 220)

        viewport.handle_wheel(0, -4, 350, 220, zoom_modifier=True)

        after = viewport.screen_to_logical(350, 220)
        assert viewport.state.scale > 1.3
        assert after.x == pytest.approx(before.x)
        assert after.y == pytest.approx(before.y)

    def test_zoom_wheel_clamps_scale(self, viewport):
        for _ in range(100):
            viewport.handle_wheel(0, -50, 0, 0, zoom_modifier=True)
        assert viewport.state.scale == MAX_SCALE

        for _ in range(100):
            viewport.handle_wheel(0, 50, 0, 0, zoom_modifier=True)
        assert viewport.state.scale == MIN_SCALE


class TestPanGesture:
    """Middle-button or modified left-button pans"""

    def test_middle_button_pans(self, viewport):
        assert viewport.begin_pan(MIDDLE_BUTTON, 100, 100) is True
        viewport.pan_move(130, 90)
        viewport.pan_move(150, 95)
        assert (viewport.state.x, viewport.state.y) == (50, -5)

        viewport.end_pan()
        viewport.pan_move(500, 500)
        assert (viewport.state.x, viewport.state.y) == (50, -5)

    def test_left_button_needs_modifier(self, viewport):
        assert viewport.begin_pan(LEFT_BUTTON, 0, 0) is False
        assert viewport.begin_pan(LEFT_BUTTON, 0, 0, pan_modifier=True) is True

    def test_press_over_node_never_pans(self, viewport):
        assert viewport.begin_pan(MIDDLE_BUTTON, 0, 0, over_node=True) is False
        assert viewport.is_panning is False


class TestZoomControls:
    """Stepped zoom, reset and fit"""

    def test_zoom_in_and_out_are_bounded(self, viewport):
        for _ in range(20):
            viewport.zoom_in()
        assert viewport.state.scale == MAX_SCALE
        for _ in range(40):
            viewport.zoom_out()
        assert viewport.state.scale == MIN_SCALE

    def test_reset(self, viewport):
        viewport.state = ViewState(x=12, y=34, scale=1.7)
        assert viewport.reset() == ViewState()

    def test_fit_empty_canvas_resets(self, viewport):
        viewport.state = ViewState(x=12, y=34, scale=1.7)
        assert viewport.fit_to_content([]) == ViewState()

    def test_fit_never_zooms_past_100_percent(self, viewport):
        state = viewport.fit_to_content([_node('a', 0, 0, 200, 100)])
        assert state.scale == 1.0
        # Content centered in the 1000x800 container
        assert state.x == pytest.approx(400)
        assert state.y == pytest.approx(350)

    def test_fit_scales_down_large_content(self, viewport):
        nodes = [_node('a', -1000, -500, 200, 100), _node('b', 2800, 1400, 200, 100)]
        state = viewport.fit_to_content(nodes)

        assert state.scale < 1.0
        top_left = viewport.logical_to_screen(-1000, -500)
        bottom_right = viewport.logical_to_screen(3000, 1500)
        assert top_left.x >= 0 and top_left.y >= 0
        assert bottom_right.x <= 1000 and bottom_right.y <= 800
