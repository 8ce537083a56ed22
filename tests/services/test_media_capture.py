"""
Media Capture Tests
===================

Unit tests for capture stream ownership:
- One scope per mounted capture node
- Release on unmount, idempotent release, release_all

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from unittest.mock import Mock

import pytest

from models.common import NodeKind
from models.domain.canvas import ScreenNode, TextNode, VideoNode
from services.canvas.media_capture import CaptureScope, MediaCaptureManager


@pytest.fixture
def provider():
    provider = Mock()
    provider.open.side_effect = lambda node_id, kind: Mock(name=f"stream-{node_id}")
    return provider


@pytest.fixture
def manager(provider):
    return MediaCaptureManager(provider)


def _video(node_id='v1'):
    return VideoNode(id=node_id, width=320, height=240)


class TestMount:
    """Opening streams"""

    def test_capture_node_gets_scope(self, manager, provider):
        scope = manager.mount(_video())
        assert scope is not None
        assert scope.kind == NodeKind.VIDEO
        provider.open.assert_called_once_with('v1', NodeKind.VIDEO)
        assert manager.active_node_ids == ['v1']

    def test_mount_is_idempotent(self, manager, provider):
        first = manager.mount(_video())
        assert manager.mount(_video()) is first
        assert provider.open.call_count == 1

    def test_non_capture_node_is_ignored(self, manager, provider):
        assert manager.mount(TextNode(id='t', width=250, height=120)) is None
        provider.open.assert_not_called()

    def test_no_provider_no_scope(self):
        assert MediaCaptureManager().mount(_video()) is None


class TestRelease:
    """Releasing streams"""

    def test_unmount_stops_stream(self, manager):
        scope = manager.mount(_video())
        assert manager.unmount('v1') is True
        scope.stream.stop.assert_called_once()
        assert manager.get('v1') is None
        assert manager.unmount('v1') is False

    def test_scope_release_is_idempotent(self):
        stream = Mock()
        scope = CaptureScope('s', NodeKind.SCREEN, stream)
        with scope:
            pass
        scope.release()
        stream.stop.assert_called_once()

    def test_release_all_continues_past_failures(self, manager):
        failing = manager.mount(_video('v1'))
        failing.stream.stop.side_effect = RuntimeError("device gone")
        other = manager.mount(ScreenNode(id='s1', width=480, height=270))

        manager.release_all()

        other.stream.stop.assert_called_once()
        assert manager.active_node_ids == []
