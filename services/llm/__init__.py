"""
LLM Service Layer
=================

Centralized service for all LLM operations of the canvas workspace.
Provides a unified API over the DashScope clients and a single error type
(``LLMServiceError``) for callers to recover from.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Callable, Dict, List, Optional, Any, Tuple
import logging
import time

from clients.llm.base import BaseLLMClient, ModelResponse, parse_tool_calls
from config.settings import config
from services.infrastructure.http.error_handler import LLMServiceError
from services.llm.llm_message_builder import LLMMessageBuilder

logger = logging.getLogger(__name__)


class LLMService:
    """
    Centralized LLM service for the canvas assistant.

    Usage:
        from services.llm import llm_service

        # Single prompt
        text, usage = await llm_service.chat_with_usage("Hello", model='qwen')

        # Function calling round
        response = await llm_service.generate(messages, tools=CANVAS_TOOLS)
    """

    def __init__(self, client_factory: Optional[Callable[[str], BaseLLMClient]] = None):
        """
        Args:
            client_factory: Returns the client for a model id; defaults to
                ``clients.llm.get_llm_client``
        """
        self._client_factory = client_factory
        self.message_builder = LLMMessageBuilder()

    def _get_client(self, model: str) -> BaseLLMClient:
        if self._client_factory is None:
            from clients.llm import get_llm_client
            self._client_factory = get_llm_client
        return self._client_factory(model)

    # ============================================================================
    # BASIC METHODS
    # ============================================================================

    async def generate(
        self,
        messages: List[Dict[str, Any]],
        model: str = 'qwen',
        tools: Optional[List[Dict[str, Any]]] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> ModelResponse:
        """
        One chat completion with optional function calling.

        Args:
            messages: Full message array (system message first)
            model: LLM model id
            tools: OpenAI-style tool declarations
            temperature: Sampling temperature (None uses model default)
            max_tokens: Maximum tokens in response (None uses LLM_MAX_TOKENS)

        Returns:
            ModelResponse with text parts, tool calls and usage

        Raises:
            LLMServiceError: On any transport, provider or model failure
        """
        start_time = time.time()
        try:
            logger.debug(
                "[LLMService] generate() - model=%s, messages_count=%s, tools=%s",
                model, len(messages), len(tools or [])
            )
            client = self._get_client(model)
            kwargs: Dict[str, Any] = {}
            if tools:
                kwargs['tools'] = tools
            response = await client.chat_completion(
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens or config.LLM_MAX_TOKENS,
                **kwargs
            )
        except LLMServiceError:
            logger.error("[LLMService] %s failed after %.2fs", model, time.time() - start_time)
            raise
        except Exception as e:
            logger.error("[LLMService] %s failed after %.2fs: %s", model, time.time() - start_time, e)
            raise LLMServiceError(f"Chat failed for model {model}: {e}") from e

        content = response.get('content') or ''
        result = ModelResponse(
            text_parts=[content] if content else [],
            tool_calls=parse_tool_calls(response.get('tool_calls')),
            usage=response.get('usage') or {},
            model=response.get('model') or model
        )
        logger.info(
            "[LLMService] %s responded in %.2fs (%d tool calls)",
            model, time.time() - start_time, len(result.tool_calls)
        )
        return result

    async def chat_with_usage(
        self,
        prompt: str = '',
        model: str = 'qwen',
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        system_message: Optional[str] = None,
        messages: Optional[List[Dict[str, Any]]] = None
    ) -> Tuple[str, dict]:
        """
        Chat completion that returns both content and usage data.

        Args:
            prompt: User message/prompt (used if messages is not provided)
            model: LLM model to use
            temperature: Sampling temperature (None uses model default)
            max_tokens: Maximum tokens in response
            system_message: Optional system message (used if messages is not provided)
            messages: Optional list of message dicts for multi-turn conversations.
                     If provided, overrides prompt and system_message.

        Returns:
            Tuple of (content: str, usage_data: dict)
        """
        chat_messages = self.message_builder.build_chat_messages(
            prompt=prompt,
            system_message=system_message,
            messages=messages
        )
        response = await self.generate(
            chat_messages,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens
        )
        return response.text, response.usage


# Singleton instance
llm_service = LLMService()

__all__ = ["llm_service", "LLMService"]
