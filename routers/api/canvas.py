"""Canvas Graph API Router.

API endpoints for nodes and edges of one project:
- POST /api/projects/{project_id}/nodes - Add a node (centered, or under a parent)
- PATCH /api/projects/{project_id}/nodes/{node_id}/position - Move a node
- PATCH /api/projects/{project_id}/nodes/{node_id}/size - Resize a node
- PATCH /api/projects/{project_id}/nodes/{node_id}/content - Replace content
- DELETE /api/projects/{project_id}/nodes/{node_id} - Delete a node and its edges
- POST /api/projects/{project_id}/nodes/{node_id}/mount - Reopen a capture stream
- POST /api/projects/{project_id}/nodes/{node_id}/unmount - Release a capture stream
- POST /api/projects/{project_id}/nodes/{node_id}/expand - Grow a mind map from a text node
- POST /api/projects/{project_id}/clear - Remove every node and edge
- POST /api/projects/{project_id}/edges - Link two nodes
- DELETE /api/projects/{project_id}/edges/{edge_id} - Remove an edge

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from models.requests.requests_canvas import (
    AddNodeRequest,
    LinkNodesRequest,
    MoveNodeRequest,
    ResizeNodeRequest,
    UpdateContentRequest,
)
from models.responses import ChatResponse, GraphResponse, NodeResponse
from services.canvas.workspace import Workspace

from .dependencies import get_workspace, require_node

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects/{project_id}", tags=["canvas"])


def _graph(workspace: Workspace) -> GraphResponse:
    return GraphResponse(nodes=workspace.store.nodes, edges=workspace.store.edges)


def _invalid_content(error: ValidationError) -> HTTPException:
    details = [
        f"{'.'.join(str(x) for x in item.get('loc', []))}: {item.get('msg', '')}"
        for item in error.errors()
    ]
    return HTTPException(status_code=422, detail=details)


# ============================================================================
# NODES
# ============================================================================

@router.post("/nodes", response_model=NodeResponse)
async def add_node(req: AddNodeRequest, workspace: Workspace = Depends(get_workspace)):
    """
    Add a node of the given type.

    Without ``parent_id`` the node is centered in the viewport; with one it is
    linked under that parent and placed by the radial layout.
    """
    if req.parent_id is not None:
        require_node(workspace, req.parent_id)
    try:
        node = workspace.add_node_of_type(
            req.type,
            content=req.content,
            parent_id=req.parent_id,
            width=req.width,
            height=req.height
        )
    except ValidationError as e:
        raise _invalid_content(e) from e
    return NodeResponse(node=node, nodes=workspace.store.nodes, edges=workspace.store.edges)


@router.patch("/nodes/{node_id}/position", response_model=GraphResponse)
async def move_node(node_id: str, req: MoveNodeRequest, workspace: Workspace = Depends(get_workspace)):
    require_node(workspace, node_id)
    workspace.store.move_node(node_id, req.x, req.y)
    return _graph(workspace)


@router.patch("/nodes/{node_id}/size", response_model=GraphResponse)
async def resize_node(node_id: str, req: ResizeNodeRequest, workspace: Workspace = Depends(get_workspace)):
    """Resize a node; sizes below the minimum are clamped."""
    require_node(workspace, node_id)
    workspace.store.resize_node(node_id, req.width, req.height)
    return _graph(workspace)


@router.patch("/nodes/{node_id}/content", response_model=GraphResponse)
async def update_node_content(
    node_id: str,
    req: UpdateContentRequest,
    workspace: Workspace = Depends(get_workspace)
):
    require_node(workspace, node_id)
    try:
        workspace.store.set_content(node_id, req.content)
    except ValidationError as e:
        raise _invalid_content(e) from e
    return _graph(workspace)


@router.delete("/nodes/{node_id}", response_model=GraphResponse)
async def delete_node(node_id: str, workspace: Workspace = Depends(get_workspace)):
    """Delete a node together with every edge touching it."""
    require_node(workspace, node_id)
    workspace.delete_node(node_id)
    return _graph(workspace)


@router.post("/nodes/{node_id}/mount")
async def mount_node(node_id: str, workspace: Workspace = Depends(get_workspace)):
    require_node(workspace, node_id)
    return {"node_id": node_id, "capturing": workspace.mount_node(node_id)}


@router.post("/nodes/{node_id}/unmount")
async def unmount_node(node_id: str, workspace: Workspace = Depends(get_workspace)):
    require_node(workspace, node_id)
    return {"node_id": node_id, "released": workspace.unmount_node(node_id)}


@router.post("/nodes/{node_id}/expand", response_model=ChatResponse)
async def expand_node(node_id: str, workspace: Workspace = Depends(get_workspace)):
    """
    Ask the assistant to build a mind map rooted at a text node.

    Non-text or empty nodes are accepted and change nothing.
    """
    require_node(workspace, node_id)
    messages = await workspace.expand_node(node_id)
    return ChatResponse(messages=messages, nodes=workspace.store.nodes, edges=workspace.store.edges)


@router.post("/clear", response_model=GraphResponse)
async def clear_canvas(workspace: Workspace = Depends(get_workspace)):
    workspace.clear_canvas()
    return _graph(workspace)


# ============================================================================
# EDGES
# ============================================================================

@router.post("/edges", response_model=GraphResponse)
async def link_nodes(req: LinkNodesRequest, workspace: Workspace = Depends(get_workspace)):
    """
    Link two nodes with the same rules as a finished handle drag.

    A link onto the source node itself is discarded; an existing edge with
    the same direction is replaced instead of duplicated. A pointer gesture
    in progress on the workspace is left untouched.
    """
    require_node(workspace, req.source_node_id)
    if req.target_node_id == req.source_node_id:
        return _graph(workspace)
    require_node(workspace, req.target_node_id)
    workspace.store.link_nodes(req.source_node_id, req.target_node_id)
    return _graph(workspace)


@router.delete("/edges/{edge_id}", response_model=GraphResponse)
async def remove_edge(edge_id: str, workspace: Workspace = Depends(get_workspace)):
    """Remove an edge; unknown ids are ignored."""
    workspace.store.remove_edge(edge_id)
    return _graph(workspace)
