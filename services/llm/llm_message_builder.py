"""
LLM Message Builder
===================

Centralizes conversion of canvas chat history and tool rounds into the
OpenAI-compatible ``messages`` array sent to DashScope.

Replay policy: only the final text of earlier model turns is replayed. The
assistant ``tool_calls`` messages and ``tool`` results of a round exist only
inside the exchange that produced them.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Dict, List, Optional, Any, Sequence, Tuple
import json
import logging

from clients.llm.base import ModelResponse, ToolCall
from models.common import ChatRole
from models.domain.canvas import CanvasNodeBase, node_content_summary
from models.domain.conversation import ChatMessage

logger = logging.getLogger(__name__)


class LLMMessageBuilder:
    """Builds chat messages for single prompts and canvas conversations."""

    @staticmethod
    def build_chat_messages(
        prompt: str = '',
        system_message: Optional[str] = None,
        messages: Optional[List[Dict[str, Any]]] = None
    ) -> List[Dict[str, Any]]:
        """
        Build chat messages array from prompt/system_message or use provided messages.

        Args:
            prompt: User message/prompt (used if messages is not provided)
            system_message: Optional system message (used if messages is not provided)
            messages: Optional list of message dicts for multi-turn conversations.
                     If provided, overrides prompt and system_message.

        Returns:
            List of message dicts ready for LLM API
        """
        if messages is not None:
            # Make a copy to avoid mutating the original
            return list(messages)

        chat_messages = []
        if system_message:
            chat_messages.append({"role": "system", "content": system_message})
        if prompt:
            chat_messages.append({"role": "user", "content": prompt})

        return chat_messages

    @staticmethod
    def reference_summary(node: CanvasNodeBase) -> str:
        """Text part describing a canvas node the user pointed at."""
        return (
            f'The user is referencing a "{node.type}" node on the canvas. '
            f'Node content summary: {node_content_summary(node)}'
        )

    @staticmethod
    def user_content_parts(message: ChatMessage) -> List[Dict[str, Any]]:
        """
        Content parts of a user turn: text, then image, then node reference.

        Returns:
            List of parts (empty when the turn carries nothing)
        """
        parts: List[Dict[str, Any]] = []
        if message.text:
            parts.append({"type": "text", "text": message.text})
        if message.image is not None:
            parts.append({"type": "image_url", "image_url": {"url": message.image.data_url}})
        if message.reference is not None:
            parts.append({"type": "text", "text": LLMMessageBuilder.reference_summary(message.reference)})
        return parts

    @staticmethod
    def history_to_messages(
        history: Sequence[ChatMessage],
        system_instruction: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Convert stored conversation turns into chat messages.

        User turns with no parts are skipped. Model turns become a single
        assistant text message.
        """
        messages: List[Dict[str, Any]] = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})

        for message in history:
            if message.role == ChatRole.USER:
                parts = LLMMessageBuilder.user_content_parts(message)
                if parts:
                    messages.append({"role": "user", "content": parts})
            else:
                messages.append({"role": "assistant", "content": message.text})

        return messages

    @staticmethod
    def tool_round_messages(
        response: ModelResponse,
        results: Sequence[Tuple[ToolCall, Dict[str, Any]]]
    ) -> List[Dict[str, Any]]:
        """
        Messages appended to the working history after one tool round.

        One assistant message carrying the raw tool calls, followed by one
        ``tool`` message per call in execution order.
        """
        tool_calls = []
        round_messages: List[Dict[str, Any]] = []
        for index, (call, result) in enumerate(results):
            call_id = call.id or f"call_{index}"
            tool_calls.append({
                "id": call_id,
                "type": "function",
                "function": {"name": call.name, "arguments": call.raw_arguments}
            })
            round_messages.append({
                "role": "tool",
                "tool_call_id": call_id,
                "name": call.name,
                "content": json.dumps(result, ensure_ascii=False)
            })

        assistant_message = {
            "role": "assistant",
            "content": response.text,
            "tool_calls": tool_calls
        }
        return [assistant_message] + round_messages
