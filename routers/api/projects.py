"""Project API Router.

API endpoints for the project list:
- POST /api/projects - Create a project (auto-named when no name is given)
- GET /api/projects - List projects, most recently updated first
- GET /api/projects/{project_id} - Full project (nodes, edges, chat history)
- PATCH /api/projects/{project_id} - Rename a project

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import logging

from fastapi import APIRouter, Depends

from models.domain.project import Project
from models.requests.requests_canvas import CreateProjectRequest, RenameProjectRequest
from models.responses import ProjectListResponse, ProjectSummary
from services.canvas.project_registry import ProjectRegistry

from .dependencies import get_registry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["projects"])


def _summary(project: Project) -> ProjectSummary:
    return ProjectSummary(
        id=project.id,
        name=project.name,
        updated_at=project.updated_at,
        node_count=len(project.nodes)
    )


@router.post("/projects", response_model=Project)
async def create_project(
    req: CreateProjectRequest,
    registry: ProjectRegistry = Depends(get_registry)
):
    """Create an empty project."""
    return registry.create_project(req.name)


@router.get("/projects", response_model=ProjectListResponse)
async def list_projects(registry: ProjectRegistry = Depends(get_registry)):
    """List projects, most recently updated first."""
    return ProjectListResponse(projects=[_summary(project) for project in registry.list_projects()])


@router.get("/projects/{project_id}", response_model=Project)
async def get_project(project_id: str, registry: ProjectRegistry = Depends(get_registry)):
    return registry.get_project(project_id)


@router.patch("/projects/{project_id}", response_model=ProjectSummary)
async def rename_project(
    project_id: str,
    req: RenameProjectRequest,
    registry: ProjectRegistry = Depends(get_registry)
):
    project = registry.rename_project(project_id, req.name)
    logger.debug("[ProjectsAPI] Renamed project %s to %s", project_id, req.name)
    return _summary(project)
