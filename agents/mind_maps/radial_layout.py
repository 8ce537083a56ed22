"""
Radial Mind Map Layout
======================

Places a parent node's children evenly around it on a circle.

- Without a grandparent the children cover the full circle, starting straight
  up (-pi/2), with one angle step per child so the last child never lands on
  the first.
- With a grandparent the children cover the half circle facing away from it,
  so a mind map keeps growing outward instead of folding back over ancestors.
  The two extreme children sit exactly on the ends of that half circle.

One shared radius is used for all children of a placement, sized by the
parent and the largest child plus a fixed clearance. Siblings' angular extent
is not inspected, so large sibling sets can still crowd each other.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Protocol
import logging
import math


logger = logging.getLogger(__name__)

# Gap between the parent's bounding circle and its children's
RADIAL_CLEARANCE = 80.0


class NodeBox(Protocol):
    """Anything with an id and top-left based geometry"""
    id: str
    x: float
    y: float
    width: float
    height: float


@dataclass
class NodePosition:
    """Data structure for node positioning"""
    id: str
    x: float
    y: float
    angle: Optional[float] = None


def box_center(node: NodeBox) -> Tuple[float, float]:
    """Geometric center of a top-left anchored box."""
    return node.x + node.width / 2, node.y + node.height / 2


def layout_mind_map_children(
    parent: NodeBox,
    children: Sequence[NodeBox],
    grandparent: Optional[NodeBox] = None
) -> List[NodePosition]:
    """
    Compute new top-left positions for every child of ``parent``.

    Args:
        parent: Node the children hang off
        children: All current children, existing ones and the new one,
            in placement order
        grandparent: Parent of ``parent`` if it has one

    Returns:
        One NodePosition per child, in the same order as ``children``
    """
    if not children:
        return []

    parent_cx, parent_cy = box_center(parent)

    start_angle = -math.pi / 2
    angle_range = 2 * math.pi
    full_circle = True

    if grandparent is not None:
        grand_cx, grand_cy = box_center(grandparent)
        angle_from_grandparent = math.atan2(parent_cy - grand_cy, parent_cx - grand_cx)
        start_angle = angle_from_grandparent - math.pi / 2
        angle_range = math.pi
        full_circle = False

    total = len(children)
    if total > 1:
        angle_step = angle_range / (total if full_circle else total - 1)
    else:
        angle_step = 0.0

    max_child_width = max(child.width for child in children)
    max_child_height = max(child.height for child in children)
    radius = (
        max(parent.width, parent.height) / 2
        + max(max_child_width, max_child_height) / 2
        + RADIAL_CLEARANCE
    )

    positions = []
    for index, child in enumerate(children):
        angle = start_angle + index * angle_step
        positions.append(NodePosition(
            id=child.id,
            x=parent_cx + radius * math.cos(angle) - child.width / 2,
            y=parent_cy + radius * math.sin(angle) - child.height / 2,
            angle=angle
        ))

    logger.debug(
        "[RadialLayout] Placed %d children of %s at radius %.1f (%s)",
        total, parent.id, radius, 'full circle' if full_circle else 'half circle'
    )
    return positions


def nodes_overlap(first: NodeBox, second: NodeBox) -> bool:
    """Check if two top-left anchored boxes overlap."""
    horizontal_overlap = first.x < second.x + second.width and second.x < first.x + first.width
    vertical_overlap = first.y < second.y + second.height and second.y < first.y + first.height
    return horizontal_overlap and vertical_overlap
