"""
Canvas Tool Orchestrator
========================

Runs one assistant exchange: a user turn in, as many model rounds as the
model needs, and at most one final model turn out.

Each round sends the working message list plus the tool declarations. If the
response carries tool calls they are executed one after another, in order,
and the raw calls plus one result per call are appended to the working list
before the next round. A response without tool calls ends the exchange; its
text (if any) becomes the persisted model turn.

Calls that omit ``parentNodeId`` attach to a carried-forward parent. It
starts each round at the exchange's initial parent, and when unset it becomes
the first node created in the round, so a model can lay down a root and its
children in one response.

Any failure, from the model call or from a tool, aborts the exchange and
appends one apology turn. Nodes already created stay on the canvas.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Any, Dict, List, Optional, Tuple
import logging

from agents.canvas.canvas_tools import (
    CANVAS_TOOLS,
    CREATE_COMPONENT,
    CREATE_NODE,
    UNKNOWN_FUNCTION_RESULT,
    missing_arguments,
)
from agents.canvas.component_generator import COMPONENT_ERROR_HTML, ComponentGenerator
from clients.llm.base import ModelResponse, ToolCall
from config.settings import config
from models.common import ChatRole, NodeKind
from models.domain.canvas import NodeDraft
from models.domain.conversation import ChatMessage, TokenUsage
from prompts.canvas_assistant import get_prompt
from services.canvas.graph_store import GraphStore
from services.infrastructure.http.error_handler import LLMServiceError
from services.llm import LLMService, llm_service
from services.llm.llm_message_builder import LLMMessageBuilder


logger = logging.getLogger(__name__)

GENERIC_ERROR_TEXT = 'Sorry, I encountered an error.'
TOO_MANY_TOOL_CALLS_TEXT = 'Stopped: too many tool calls.'

# Geometry of nodes created by tools
TOOL_NODE_SIZE = (250.0, 100.0)
PLACEHOLDER_NODE_SIZE = (300.0, 200.0)
COMPONENT_NODE_SIZE = (450.0, 300.0)
PLACEHOLDER_CONTENT = 'Generating component...'


class _ParentPointer:
    """Carried-forward parent for calls in one round."""

    def __init__(self, initial: Optional[str]):
        self.node_id = initial

    def resolve(self, explicit: Optional[str]) -> Optional[str]:
        return explicit or self.node_id

    def offer(self, node_id: str) -> None:
        if not self.node_id:
            self.node_id = node_id


class ToolOrchestrator:
    """Drives the model/tool loop for one workspace graph."""

    def __init__(
        self,
        store: GraphStore,
        llm: Optional[LLMService] = None,
        component_generator: Optional[ComponentGenerator] = None,
        model: Optional[str] = None,
        max_tool_rounds: Optional[int] = None
    ):
        self.store = store
        self.llm = llm or llm_service
        self.component_generator = component_generator or ComponentGenerator(llm=self.llm)
        self.model = model
        self.max_tool_rounds = max_tool_rounds
        self.message_builder = LLMMessageBuilder()

    @property
    def history(self) -> List[ChatMessage]:
        return self.store.project.chat_history

    def _append_turn(self, message: ChatMessage) -> None:
        self.store.project.chat_history = self.history + [message]
        self.store.project.touch()

    async def run_exchange(
        self,
        user_message: ChatMessage,
        initial_parent_id: Optional[str] = None,
        error_text: str = GENERIC_ERROR_TEXT,
        model: Optional[str] = None
    ) -> List[ChatMessage]:
        """
        Run one exchange to completion.

        Args:
            user_message: The user turn starting the exchange
            initial_parent_id: Parent for tool-created nodes that name none
            error_text: Model turn appended if the exchange fails
            model: Model id overriding the configured assistant model

        Returns:
            The turns appended to the conversation, user turn included
        """
        model = model or self.model or config.CANVAS_ASSISTANT_MODEL
        max_rounds = self.max_tool_rounds or config.CANVAS_MAX_TOOL_ROUNDS
        start = len(self.history)

        self._append_turn(user_message)
        messages = self.message_builder.history_to_messages(
            self.history, get_prompt('canvas_assistant_system')
        )

        rounds = 0
        try:
            while True:
                response = await self.llm.generate(messages, model=model, tools=CANVAS_TOOLS)

                if not response.tool_calls:
                    self._finish(response, model)
                    break

                rounds += 1
                if rounds > max_rounds:
                    logger.warning(
                        "[ToolOrchestrator] Exchange exceeded %d tool rounds, stopping", max_rounds
                    )
                    self._append_turn(ChatMessage(role=ChatRole.MODEL, text=TOO_MANY_TOOL_CALLS_TEXT, model=model))
                    break

                results = await self.execute_tool_calls(response.tool_calls, initial_parent_id)
                messages.extend(self.message_builder.tool_round_messages(response, results))
        except LLMServiceError as e:
            logger.error("[ToolOrchestrator] Exchange failed after %d tool rounds: %s", rounds, e)
            self._append_turn(ChatMessage(role=ChatRole.MODEL, text=error_text))
        except Exception as e:  # pylint: disable=broad-except
            logger.exception("[ToolOrchestrator] Exchange aborted after %d tool rounds: %s", rounds, e)
            self._append_turn(ChatMessage(role=ChatRole.MODEL, text=error_text))

        return self.history[start:]

    def _finish(self, response: ModelResponse, model: str) -> None:
        text = response.text
        if not text.strip():
            logger.debug("[ToolOrchestrator] Final response carried no text")
            return
        self._append_turn(ChatMessage(
            role=ChatRole.MODEL,
            text=text,
            model=response.model or model,
            token_usage=TokenUsage.from_usage_dict(response.usage)
        ))

    # ============================================================================
    # TOOL EXECUTION
    # ============================================================================

    async def execute_tool_calls(
        self,
        calls: List[ToolCall],
        initial_parent_id: Optional[str] = None
    ) -> List[Tuple[ToolCall, Dict[str, Any]]]:
        """
        Execute one round of tool calls sequentially.

        Returns:
            (call, result) pairs in call order
        """
        parent = _ParentPointer(initial_parent_id)
        results = []
        for call in calls:
            result = await self._execute(call, parent)
            logger.debug("[ToolOrchestrator] %s -> %s", call.name, result)
            results.append((call, result))
        return results

    async def _execute(self, call: ToolCall, parent: _ParentPointer) -> Dict[str, Any]:
        if call.name not in (CREATE_NODE, CREATE_COMPONENT):
            logger.warning("[ToolOrchestrator] Model called unknown tool %r", call.name)
            return dict(UNKNOWN_FUNCTION_RESULT)

        missing = missing_arguments(call)
        if missing:
            return {'error': f"Missing required argument: {', '.join(missing)}"}

        if call.name == CREATE_NODE:
            return self._create_node(call.args, parent)
        return await self._create_component(call.args, parent)

    def _create_node(self, args: Dict[str, Any], parent: _ParentPointer) -> Dict[str, Any]:
        node_type = NodeKind.CODE if args.get('nodeType') == NodeKind.CODE.value else NodeKind.TEXT
        width, height = TOOL_NODE_SIZE
        node = self.store.add_node(
            NodeDraft(type=node_type, content=args['content'], width=width, height=height),
            parent_id=parent.resolve(args.get('parentNodeId'))
        )
        parent.offer(node.id)
        return {'nodeId': node.id}

    async def _create_component(self, args: Dict[str, Any], parent: _ParentPointer) -> Dict[str, Any]:
        width, height = PLACEHOLDER_NODE_SIZE
        placeholder = self.store.add_node(
            NodeDraft(type=NodeKind.LOADING, content=PLACEHOLDER_CONTENT, width=width, height=height),
            parent_id=parent.resolve(args.get('parentNodeId'))
        )
        parent.offer(placeholder.id)

        document = COMPONENT_ERROR_HTML
        try:
            document = await self.component_generator.generate_document(args['prompt'])
        finally:
            width, height = COMPONENT_NODE_SIZE
            self.store.replace_node(
                placeholder.id,
                type=NodeKind.CODE,
                content=document,
                width=width,
                height=height
            )
        return {'nodeId': placeholder.id, 'status': 'completed'}
