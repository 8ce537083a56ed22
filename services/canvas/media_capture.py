"""
Media Capture Scopes
====================

Camera, screen and microphone streams owned by capture nodes.

A stream is opened when a capture node mounts and is held by a
``CaptureScope`` tied to that node id. The scope is released when the node
unmounts, when it is deleted, when the canvas is cleared and when the
workspace closes. Release is idempotent.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Dict, List, Optional, Protocol
import logging

from models.common import CAPTURE_NODE_KINDS, NodeKind
from models.domain.canvas import CanvasNodeBase


logger = logging.getLogger(__name__)


class MediaStream(Protocol):
    """A live capture stream"""

    def stop(self) -> None:
        ...


class StreamProvider(Protocol):
    """Opens capture streams for a node kind (camera, screen, microphone)"""

    def open(self, node_id: str, kind: NodeKind) -> MediaStream:
        ...


class CaptureScope:
    """Ownership of one stream by one node."""

    def __init__(self, node_id: str, kind: NodeKind, stream: MediaStream):
        self.node_id = node_id
        self.kind = kind
        self.stream = stream
        self.released = False

    def release(self) -> None:
        if self.released:
            return
        self.released = True
        self.stream.stop()
        logger.debug("[MediaCapture] Released %s stream of node %s", self.kind.value, self.node_id)

    def __enter__(self) -> 'CaptureScope':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()


class MediaCaptureManager:
    """Per-workspace table of open capture scopes keyed by node id."""

    def __init__(self, provider: Optional[StreamProvider] = None):
        self.provider = provider
        self._scopes: Dict[str, CaptureScope] = {}

    @property
    def active_node_ids(self) -> List[str]:
        return list(self._scopes)

    def get(self, node_id: str) -> Optional[CaptureScope]:
        return self._scopes.get(node_id)

    def mount(self, node: CanvasNodeBase) -> Optional[CaptureScope]:
        """
        Open the stream for a capture node.

        Non-capture nodes and workspaces without a provider get no scope.
        Mounting an already mounted node returns its existing scope.
        """
        kind = NodeKind(node.type)
        if kind not in CAPTURE_NODE_KINDS or self.provider is None:
            return None
        existing = self._scopes.get(node.id)
        if existing is not None:
            return existing

        scope = CaptureScope(node.id, kind, self.provider.open(node.id, kind))
        self._scopes[node.id] = scope
        logger.debug("[MediaCapture] Opened %s stream for node %s", kind.value, node.id)
        return scope

    def unmount(self, node_id: str) -> bool:
        """Release the scope of a node. Returns True if one was open."""
        scope = self._scopes.pop(node_id, None)
        if scope is None:
            return False
        scope.release()
        return True

    def release_all(self) -> None:
        """Release every open scope, continuing past streams that fail to stop."""
        scopes = list(self._scopes.values())
        self._scopes.clear()
        for scope in scopes:
            try:
                scope.release()
            except Exception as e:
                logger.warning("[MediaCapture] Failed to stop stream of node %s: %s", scope.node_id, e)
