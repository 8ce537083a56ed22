"""
Project Registry Tests
======================

Unit tests for project naming, ordering and workspace lifetime.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from unittest.mock import Mock

import pytest

from services.canvas.project_registry import ProjectRegistry
from services.infrastructure.http.error_handler import ProjectNotFoundError


class TestProjectNames:
    """Auto-naming of new projects"""

    def test_default_project_created(self):
        registry = ProjectRegistry()
        assert [project.name for project in registry.list_projects()] == ['Untitled Project']

    def test_next_free_number(self):
        registry = ProjectRegistry()
        second = registry.create_project()
        third = registry.create_project()
        assert (second.name, third.name) == ('Untitled Project 2', 'Untitled Project 3')

    def test_gap_is_reused(self):
        registry = ProjectRegistry(create_default=False)
        registry.create_project('Untitled Project')
        registry.create_project('Untitled Project 3')
        assert registry.next_project_name() == 'Untitled Project 2'


class TestProjects:
    """Lookup and ordering"""

    def test_list_most_recent_first(self):
        registry = ProjectRegistry(create_default=False)
        older = registry.create_project('a')
        newer = registry.create_project('b')
        registry.rename_project(older.id, 'a2')
        assert [project.id for project in registry.list_projects()] == [older.id, newer.id]

    def test_unknown_project(self):
        registry = ProjectRegistry(create_default=False)
        with pytest.raises(ProjectNotFoundError) as exc_info:
            registry.get_project('proj_missing')
        assert exc_info.value.status_code == 404


class TestWorkspaces:
    """Workspace per project"""

    def test_workspace_opened_once(self):
        factory = Mock()
        registry = ProjectRegistry(workspace_factory=factory, create_default=False)
        project = registry.create_project()

        first = registry.get_workspace(project.id)
        assert registry.get_workspace(project.id) is first
        factory.assert_called_once_with(project)

    def test_close_all(self):
        factory = Mock()
        registry = ProjectRegistry(workspace_factory=factory, create_default=False)
        project = registry.create_project()
        workspace = registry.get_workspace(project.id)

        registry.close_all()

        workspace.close.assert_called_once()
