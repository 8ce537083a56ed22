"""
Canvas Graph Store
==================

Mutation surface over the nodes and edges of one project.

Every mutation builds a new list and swaps it into the project in one
assignment (last writer wins), then returns the updated collection. Operations
that reference a node or edge that does not exist are silent no-ops.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Any, Dict, List, Optional
import logging

from agents.mind_maps.radial_layout import layout_mind_map_children, nodes_overlap
from models.domain.canvas import (
    CanvasNodeBase,
    Edge,
    NodeDraft,
    ViewState,
    ViewportSize,
    build_node,
    generate_id,
    morph_node,
    MIN_NODE_WIDTH,
    MIN_NODE_HEIGHT,
)
from models.domain.project import Project


logger = logging.getLogger(__name__)


class GraphStore:
    """Node/edge collections of a project plus the primitives that change them."""

    def __init__(self, project: Project):
        self.project = project

    @property
    def nodes(self) -> List[CanvasNodeBase]:
        return self.project.nodes

    @property
    def edges(self) -> List[Edge]:
        return self.project.edges

    def _commit(self, nodes: Optional[List[CanvasNodeBase]] = None, edges: Optional[List[Edge]] = None) -> None:
        if nodes is not None:
            self.project.nodes = nodes
        if edges is not None:
            self.project.edges = edges
        self.project.touch()

    # ============================================================================
    # QUERIES
    # ============================================================================

    def get_node(self, node_id: Optional[str]) -> Optional[CanvasNodeBase]:
        if not node_id:
            return None
        for node in self.project.nodes:
            if node.id == node_id:
                return node
        return None

    def children_of(self, parent_id: str) -> List[CanvasNodeBase]:
        """Existing targets of edges leaving ``parent_id``, in edge order."""
        children = []
        seen = set()
        for edge in self.project.edges:
            if edge.from_id != parent_id or edge.to_id in seen:
                continue
            child = self.get_node(edge.to_id)
            if child is not None:
                children.append(child)
                seen.add(child.id)
        return children

    def parent_of(self, node_id: str) -> Optional[CanvasNodeBase]:
        """Source of the first edge pointing at ``node_id``."""
        for edge in self.project.edges:
            if edge.to_id == node_id:
                return self.get_node(edge.from_id)
        return None

    # ============================================================================
    # NODE MUTATIONS
    # ============================================================================

    def add_node(
        self,
        draft: NodeDraft,
        parent_id: Optional[str] = None,
        view_state: Optional[ViewState] = None,
        viewport_size: Optional[ViewportSize] = None
    ) -> CanvasNodeBase:
        """
        Add a node, optionally as a mind-map child of ``parent_id``.

        With a parent, a parent->child edge is created and the whole child set
        of the parent is re-laid out radially, moving existing siblings too.
        Without one, the node is centered in the current viewport when the
        view state and size are known.

        Returns:
            The node as stored
        """
        node = build_node(draft, generate_id('node'))
        parent = self.get_node(parent_id)

        if parent is not None:
            edge = Edge(id=generate_id('edge'), from_id=parent.id, to_id=node.id)
            children = self.children_of(parent.id) + [node]
            grandparent = self.parent_of(parent.id)
            positions = {
                position.id: position
                for position in layout_mind_map_children(parent, children, grandparent)
            }

            placed = positions[node.id]
            node = morph_node(node, x=placed.x, y=placed.y)

            nodes = []
            for existing in self.project.nodes:
                position = positions.get(existing.id)
                if position is not None:
                    existing = morph_node(existing, x=position.x, y=position.y)
                nodes.append(existing)
            nodes.append(node)
            self._commit(nodes=nodes, edges=self.project.edges + [edge])
            self._log_overlaps(node, exclude={parent.id})
            logger.debug(
                "[GraphStore] Added %s node %s under %s (%d siblings re-laid out)",
                node.type, node.id, parent.id, len(children) - 1
            )
            return node

        if parent_id:
            logger.warning("[GraphStore] Parent node %s not found, adding %s unattached", parent_id, node.id)
        elif view_state is not None and viewport_size is not None:
            node = morph_node(
                node,
                x=(viewport_size.width / 2 - node.width / 2 - view_state.x) / view_state.scale,
                y=(viewport_size.height / 2 - node.height / 2 - view_state.y) / view_state.scale
            )

        self._commit(nodes=self.project.nodes + [node])
        logger.debug("[GraphStore] Added %s node %s", node.type, node.id)
        return node

    def _update_node(self, node_id: str, **updates: Any) -> List[CanvasNodeBase]:
        found = False
        nodes = []
        for node in self.project.nodes:
            if node.id == node_id:
                node = morph_node(node, **updates)
                found = True
            nodes.append(node)
        if found:
            self._commit(nodes=nodes)
        else:
            logger.debug("[GraphStore] Node %s not found, ignoring update %s", node_id, list(updates))
        return self.project.nodes

    def move_node(self, node_id: str, x: float, y: float) -> List[CanvasNodeBase]:
        return self._update_node(node_id, x=x, y=y)

    def resize_node(self, node_id: str, width: float, height: float) -> List[CanvasNodeBase]:
        """Resize, never below the minimum node size."""
        return self._update_node(
            node_id,
            width=max(MIN_NODE_WIDTH, width),
            height=max(MIN_NODE_HEIGHT, height)
        )

    def set_content(self, node_id: str, content: Any) -> List[CanvasNodeBase]:
        return self._update_node(node_id, content=content)

    def replace_node(self, node_id: str, **updates: Any) -> Optional[CanvasNodeBase]:
        """
        Change several fields at once, typically ``type`` and ``content`` together.

        Returns:
            The updated node, or None if it no longer exists
        """
        self._update_node(node_id, **updates)
        return self.get_node(node_id)

    def delete_node(self, node_id: str) -> List[CanvasNodeBase]:
        """Remove a node and every edge that starts or ends at it."""
        nodes = [node for node in self.project.nodes if node.id != node_id]
        edges = [edge for edge in self.project.edges if not edge.touches(node_id)]
        removed_edges = len(self.project.edges) - len(edges)
        self._commit(nodes=nodes, edges=edges)
        logger.debug("[GraphStore] Deleted node %s and %d edges", node_id, removed_edges)
        return self.project.nodes

    def clear(self) -> None:
        """Remove every node and edge."""
        self._commit(nodes=[], edges=[])

    # ============================================================================
    # EDGE MUTATIONS
    # ============================================================================

    def add_edge(self, from_id: str, to_id: str) -> List[Edge]:
        edge = Edge(id=generate_id('edge'), from_id=from_id, to_id=to_id)
        self._commit(edges=self.project.edges + [edge])
        return self.project.edges

    def link_nodes(self, from_id: str, to_id: str) -> List[Edge]:
        """
        Interactive link: replaces any existing edge with the same direction
        instead of adding a duplicate.
        """
        if self.get_node(from_id) is None or self.get_node(to_id) is None:
            logger.debug("[GraphStore] Link %s -> %s references a missing node", from_id, to_id)
            return self.project.edges
        edge = Edge(id=generate_id('edge'), from_id=from_id, to_id=to_id)
        edges = [
            existing for existing in self.project.edges
            if existing.from_id != from_id or existing.to_id != to_id
        ]
        self._commit(edges=edges + [edge])
        return self.project.edges

    def remove_edge(self, edge_id: str) -> List[Edge]:
        edges = [edge for edge in self.project.edges if edge.id != edge_id]
        if len(edges) != len(self.project.edges):
            self._commit(edges=edges)
        return self.project.edges

    def _log_overlaps(self, node: CanvasNodeBase, exclude: set) -> None:
        """Radial placement only guards siblings; report other collisions."""
        collisions: List[Dict[str, str]] = []
        for other in self.project.nodes:
            if other.id == node.id or other.id in exclude:
                continue
            if nodes_overlap(node, other):
                collisions.append({'id': other.id, 'type': other.type})
        if collisions:
            logger.debug("[GraphStore] Node %s overlaps %s", node.id, collisions)
