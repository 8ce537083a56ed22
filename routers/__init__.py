"""
Infinite Canvas FastAPI Routers
===============================

This package contains all FastAPI route modules organized by functionality.

Routers:
- api/: Project, canvas, viewport and assistant endpoints
- core/: Health and status endpoints

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from . import api

__all__ = [
    "api",
]
