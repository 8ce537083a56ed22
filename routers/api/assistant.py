"""Canvas Assistant API Router.

- POST /api/projects/{project_id}/chat - Send one message to the assistant;
  returns the conversation turns it appended and the resulting graph

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import logging

from fastapi import APIRouter, Depends

from models.requests.requests_canvas import ChatRequest
from models.responses import ChatResponse
from services.canvas.workspace import Workspace

from .dependencies import get_workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects/{project_id}", tags=["assistant"])


@router.post("/chat", response_model=ChatResponse)
async def chat(req: ChatRequest, workspace: Workspace = Depends(get_workspace)):
    """
    Run one assistant exchange.

    Returns 409 while another exchange of the same project is still running.
    """
    messages = await workspace.send_message(
        req.message,
        image=req.image,
        reference_node_id=req.reference_node_id,
        model=req.model.value if req.model else None
    )
    logger.debug(
        "[AssistantAPI] Project %s: %d turns appended, %d nodes on canvas",
        workspace.project.id, len(messages), len(workspace.store.nodes)
    )
    return ChatResponse(messages=messages, nodes=workspace.store.nodes, edges=workspace.store.edges)
