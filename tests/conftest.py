"""
Pytest Configuration
====================

Ensures project root is in Python path for imports and provides shared
canvas fixtures.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent.absolute()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from models.domain.project import Project  # noqa: E402
from services.canvas.graph_store import GraphStore  # noqa: E402


@pytest.fixture
def project():
    """Empty project."""
    return Project(name='Test Project')


@pytest.fixture
def store(project):
    """Graph store over the empty project."""
    return GraphStore(project)
