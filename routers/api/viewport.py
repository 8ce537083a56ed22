"""Viewport API Router.

API endpoints for the pan/zoom transform of one project:
- GET /api/projects/{project_id}/viewport - Current view state
- PUT /api/projects/{project_id}/viewport/size - Report the on-screen size
- POST /api/projects/{project_id}/viewport/wheel - Apply a wheel event
- POST /api/projects/{project_id}/viewport/zoom_in - Step zoom in
- POST /api/projects/{project_id}/viewport/zoom_out - Step zoom out
- POST /api/projects/{project_id}/viewport/reset - Back to the origin at 100%
- POST /api/projects/{project_id}/viewport/fit - Fit every node into view

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from fastapi import APIRouter, Depends

from models.domain.canvas import ViewportSize
from models.requests.requests_canvas import ViewportSizeRequest, WheelRequest
from models.responses import ViewportResponse
from services.canvas.workspace import Workspace

from .dependencies import get_workspace

router = APIRouter(prefix="/projects/{project_id}/viewport", tags=["viewport"])


@router.get("", response_model=ViewportResponse)
async def get_viewport(workspace: Workspace = Depends(get_workspace)):
    return ViewportResponse(view=workspace.viewport.state)


@router.put("/size", response_model=ViewportResponse)
async def set_viewport_size(req: ViewportSizeRequest, workspace: Workspace = Depends(get_workspace)):
    workspace.viewport.resize(ViewportSize(width=req.width, height=req.height))
    return ViewportResponse(view=workspace.viewport.state)


@router.post("/wheel", response_model=ViewportResponse)
async def wheel(req: WheelRequest, workspace: Workspace = Depends(get_workspace)):
    """Pan by the wheel delta, or zoom around the cursor when ``zoom`` is set."""
    view = workspace.viewport.handle_wheel(
        req.delta_x, req.delta_y, req.cursor_x, req.cursor_y, zoom_modifier=req.zoom
    )
    return ViewportResponse(view=view)


@router.post("/zoom_in", response_model=ViewportResponse)
async def zoom_in(workspace: Workspace = Depends(get_workspace)):
    return ViewportResponse(view=workspace.viewport.zoom_in())


@router.post("/zoom_out", response_model=ViewportResponse)
async def zoom_out(workspace: Workspace = Depends(get_workspace)):
    return ViewportResponse(view=workspace.viewport.zoom_out())


@router.post("/reset", response_model=ViewportResponse)
async def reset_viewport(workspace: Workspace = Depends(get_workspace)):
    return ViewportResponse(view=workspace.viewport.reset())


@router.post("/fit", response_model=ViewportResponse)
async def fit_to_content(workspace: Workspace = Depends(get_workspace)):
    return ViewportResponse(view=workspace.viewport.fit_to_content(workspace.store.nodes))
