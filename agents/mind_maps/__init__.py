"""
Mind Maps Module

Radial placement of mind-map children around their parent node.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from .radial_layout import NodePosition, RADIAL_CLEARANCE, layout_mind_map_children, nodes_overlap

__all__ = ['NodePosition', 'RADIAL_CLEARANCE', 'layout_mind_map_children', 'nodes_overlap']
