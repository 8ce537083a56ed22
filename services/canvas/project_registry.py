"""
Project Registry
================

In-memory list of projects and the workspace opened for each. Durable
storage is left to an external persistence layer; projects are plain
pydantic models that dump to JSON.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Callable, Dict, List, Optional
import logging

from models.domain.project import DEFAULT_PROJECT_NAME, Project
from services.canvas.workspace import Workspace
from services.infrastructure.http.error_handler import ProjectNotFoundError


logger = logging.getLogger(__name__)


class ProjectRegistry:
    """Projects by id, in creation order."""

    def __init__(
        self,
        workspace_factory: Optional[Callable[[Project], Workspace]] = None,
        create_default: bool = True
    ):
        self._workspace_factory = workspace_factory or Workspace
        self._projects: Dict[str, Project] = {}
        self._workspaces: Dict[str, Workspace] = {}
        if create_default:
            self.create_project()

    def next_project_name(self, base: str = DEFAULT_PROJECT_NAME) -> str:
        """``base``, or ``base N`` for the smallest N >= 2 not yet taken."""
        existing = {project.name for project in self._projects.values()}
        if base not in existing:
            return base
        counter = 2
        while f"{base} {counter}" in existing:
            counter += 1
        return f"{base} {counter}"

    def create_project(self, name: Optional[str] = None) -> Project:
        project = Project(name=name or self.next_project_name())
        self._projects[project.id] = project
        logger.info("[ProjectRegistry] Created project %s (%s)", project.id, project.name)
        return project

    def list_projects(self) -> List[Project]:
        """Most recently updated first."""
        return sorted(self._projects.values(), key=lambda project: project.updated_at, reverse=True)

    def get_project(self, project_id: str) -> Project:
        project = self._projects.get(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    def rename_project(self, project_id: str, name: str) -> Project:
        project = self.get_project(project_id)
        project.name = name
        project.touch()
        return project

    def get_workspace(self, project_id: str) -> Workspace:
        """Workspace of a project, opened on first use."""
        workspace = self._workspaces.get(project_id)
        if workspace is None:
            workspace = self._workspace_factory(self.get_project(project_id))
            self._workspaces[project_id] = workspace
        return workspace

    def close_all(self) -> None:
        """Release the resources of every open workspace."""
        for workspace in self._workspaces.values():
            workspace.close()
        self._workspaces.clear()
