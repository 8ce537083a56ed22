"""
Canvas Services
===============

Viewport transform, graph mutations, pointer interactions, capture streams
and the workspace/project layer that ties them together.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

__all__ = []
