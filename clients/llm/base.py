"""
Base Classes and Common Utilities for LLM Clients

Provides the client interface plus the normalized response shape the canvas
assistant consumes: free text parts, structured tool calls and token usage.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
from abc import ABC, abstractmethod
import json
import logging

logger = logging.getLogger(__name__)


@dataclass
class ToolCall:
    """One structured function invocation requested by the model"""
    name: str
    args: Dict[str, Any] = field(default_factory=dict)
    id: str = ''
    raw_arguments: str = '{}'


@dataclass
class ModelResponse:
    """Normalized result of one chat completion"""
    text_parts: List[str] = field(default_factory=list)
    tool_calls: List[ToolCall] = field(default_factory=list)
    usage: Dict[str, int] = field(default_factory=dict)
    model: Optional[str] = None

    @property
    def text(self) -> str:
        return ''.join(self.text_parts)


class BaseLLMClient(ABC):
    """
    Base class for LLM clients.

    Provides common interface and shared functionality.
    """

    def __init__(self, default_temperature: float = 0.7):
        """
        Initialize base LLM client.

        Args:
            default_temperature: Default temperature for sampling
        """
        self.default_temperature = default_temperature

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Provider model name sent with each request."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[Dict],
        temperature: Optional[float] = None,
        max_tokens: int = 1000,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Send chat completion request.

        Args:
            messages: List of message dictionaries
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response
            **kwargs: Additional parameters (tools, tool_choice)

        Returns:
            Dict with 'content' and 'usage' keys, plus 'tool_calls' when the
            model requested function calls
        """

    def _get_temperature(self, temperature: Optional[float]) -> float:
        """
        Get temperature value, using default if not specified.

        Args:
            temperature: Optional temperature value

        Returns:
            Temperature value to use
        """
        return temperature if temperature is not None else self.default_temperature


def extract_usage(data: Dict[str, Any]) -> Dict[str, int]:
    """
    Extract usage data from an OpenAI-compatible completion body.

    Args:
        data: Parsed response JSON

    Returns:
        Dict with usage statistics (empty when the provider sent none)
    """
    usage = data.get('usage') or {}
    if not usage:
        return {}
    return {
        'prompt_tokens': int(usage.get('prompt_tokens') or 0),
        'completion_tokens': int(usage.get('completion_tokens') or 0),
        'total_tokens': int(usage.get('total_tokens') or 0)
    }


def parse_tool_calls(raw_tool_calls: Optional[List[Dict[str, Any]]]) -> List[ToolCall]:
    """
    Convert OpenAI-style ``tool_calls`` into ToolCall objects.

    Arguments that are not a JSON object decode to an empty dict; the tool
    executor then reports the missing fields back to the model.
    """
    calls = []
    for raw in raw_tool_calls or []:
        if not isinstance(raw, dict):
            logger.warning("[LLMClient] Skipping malformed tool call: %r", raw)
            continue
        function = raw.get('function')
        if not isinstance(function, dict):
            function = {}
        name = function.get('name') or ''
        arguments = function.get('arguments') or '{}'
        if isinstance(arguments, dict):
            args = arguments
            arguments = json.dumps(arguments, ensure_ascii=False)
        else:
            try:
                args = json.loads(arguments)
            except (json.JSONDecodeError, TypeError):
                logger.warning("[LLMClient] Tool call %s has invalid JSON arguments: %r", name, arguments)
                args = {}
                if not isinstance(arguments, str):
                    arguments = '{}'
            if not isinstance(args, dict):
                args = {}
        calls.append(ToolCall(name=name, args=args, id=raw.get('id') or '', raw_arguments=arguments))
    return calls
