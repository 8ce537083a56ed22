"""
Viewport Engine
===============

Maps the infinite logical canvas onto the bounded on-screen container.

The state is a screen-space translation plus a uniform scale. Every consumer
converts screen points with ``logical = (screen - translation) / scale``.

Gestures:
- Plain wheel pans by the wheel delta.
- Wheel with the zoom modifier zooms around the cursor, keeping the logical
  point under the pointer fixed.
- Middle-button drag, or left-button drag with the pan modifier held, pans by
  the pointer delta. A drag that starts over a node never pans.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Iterable, Optional, Tuple
import logging

from models.domain.canvas import CanvasNodeBase, Point, ViewState, ViewportSize


logger = logging.getLogger(__name__)

MIN_SCALE = 0.1
MAX_SCALE = 2.0
WHEEL_ZOOM_FACTOR = 0.05
ZOOM_STEP = 1.2
FIT_PADDING = 100.0

MIDDLE_BUTTON = 1
LEFT_BUTTON = 0


def clamp_scale(scale: float) -> float:
    """Clamp a zoom factor to the supported range."""
    return max(MIN_SCALE, min(MAX_SCALE, scale))


class ViewportEngine:
    """Pan/zoom state machine over ``ViewState``."""

    def __init__(self, state: Optional[ViewState] = None, size: Optional[ViewportSize] = None):
        self.state = state or ViewState()
        self.size = size or ViewportSize(width=1280, height=800)
        self._panning = False
        self._last_pointer: Tuple[float, float] = (0.0, 0.0)

    @property
    def is_panning(self) -> bool:
        return self._panning

    def resize(self, size: ViewportSize) -> None:
        """Record the current on-screen container size."""
        self.size = size

    # ------------------------------------------------------------------
    # Coordinate conversion
    # ------------------------------------------------------------------

    def screen_to_logical(self, screen_x: float, screen_y: float) -> Point:
        """Convert a container-relative screen point to logical canvas space."""
        return Point(
            x=(screen_x - self.state.x) / self.state.scale,
            y=(screen_y - self.state.y) / self.state.scale
        )

    def logical_to_screen(self, logical_x: float, logical_y: float) -> Point:
        """Inverse of ``screen_to_logical``."""
        return Point(
            x=logical_x * self.state.scale + self.state.x,
            y=logical_y * self.state.scale + self.state.y
        )

    # ------------------------------------------------------------------
    # Wheel
    # ------------------------------------------------------------------

    def handle_wheel(
        self,
        delta_x: float,
        delta_y: float,
        cursor_x: float,
        cursor_y: float,
        zoom_modifier: bool = False
    ) -> ViewState:
        """
        Apply one wheel event.

        Args:
            delta_x: Horizontal wheel delta
            delta_y: Vertical wheel delta
            cursor_x: Pointer x relative to the container
            cursor_y: Pointer y relative to the container
            zoom_modifier: True when Ctrl/Cmd is held (zoom instead of pan)

        Returns:
            The new view state
        """
        if not zoom_modifier:
            self.state = ViewState(
                x=self.state.x - delta_x,
                y=self.state.y - delta_y,
                scale=self.state.scale
            )
            return self.state

        scale = self.state.scale
        new_scale = clamp_scale(scale - delta_y * WHEEL_ZOOM_FACTOR * scale)
        ratio = new_scale / scale - 1
        self.state = ViewState(
            x=self.state.x - (cursor_x - self.state.x) * ratio,
            y=self.state.y - (cursor_y - self.state.y) * ratio,
            scale=new_scale
        )
        return self.state

    # ------------------------------------------------------------------
    # Pan gesture
    # ------------------------------------------------------------------

    def begin_pan(
        self,
        button: int,
        pointer_x: float,
        pointer_y: float,
        pan_modifier: bool = False,
        over_node: bool = False
    ) -> bool:
        """
        Start a pan gesture if the press qualifies.

        Returns:
            True when panning started
        """
        can_pan = button == MIDDLE_BUTTON or (button == LEFT_BUTTON and pan_modifier)
        if not can_pan or over_node:
            return False
        self._panning = True
        self._last_pointer = (pointer_x, pointer_y)
        return True

    def pan_move(self, pointer_x: float, pointer_y: float) -> ViewState:
        """Translate by the pointer delta since the previous move."""
        if not self._panning:
            return self.state
        dx = pointer_x - self._last_pointer[0]
        dy = pointer_y - self._last_pointer[1]
        self._last_pointer = (pointer_x, pointer_y)
        self.state = ViewState(x=self.state.x + dx, y=self.state.y + dy, scale=self.state.scale)
        return self.state

    def end_pan(self) -> None:
        self._panning = False

    # ------------------------------------------------------------------
    # Programmatic zoom
    # ------------------------------------------------------------------

    def zoom_in(self) -> ViewState:
        self.state = self.state.model_copy(update={'scale': min(MAX_SCALE, self.state.scale * ZOOM_STEP)})
        return self.state

    def zoom_out(self) -> ViewState:
        self.state = self.state.model_copy(update={'scale': max(MIN_SCALE, self.state.scale / ZOOM_STEP)})
        return self.state

    def reset(self) -> ViewState:
        self.state = ViewState()
        return self.state

    def fit_to_content(self, nodes: Iterable[CanvasNodeBase], padding: float = FIT_PADDING) -> ViewState:
        """
        Scale and center the view so every node is visible.

        Never zooms in past 100% and never below MIN_SCALE. An empty canvas
        or a bounding box with zero width or height falls back to ``reset``.
        """
        nodes = list(nodes)
        if not nodes:
            return self.reset()

        min_x = min(node.x for node in nodes)
        min_y = min(node.y for node in nodes)
        max_x = max(node.x + node.width for node in nodes)
        max_y = max(node.y + node.height for node in nodes)

        content_width = max_x - min_x
        content_height = max_y - min_y
        if content_width == 0 or content_height == 0:
            return self.reset()

        scale = clamp_scale(min(
            self.size.width / (content_width + padding * 2),
            self.size.height / (content_height + padding * 2),
            1.0
        ))
        self.state = ViewState(
            x=(self.size.width - content_width * scale) / 2 - min_x * scale,
            y=(self.size.height - content_height * scale) / 2 - min_y * scale,
            scale=scale
        )
        logger.debug(
            "[Viewport] Fit %d nodes: scale=%.3f offset=(%.1f, %.1f)",
            len(nodes), scale, self.state.x, self.state.y
        )
        return self.state
