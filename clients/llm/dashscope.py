"""
DashScope LLM Clients

Clients for the Alibaba Cloud DashScope OpenAI-compatible chat endpoint:
- QwenClient: Qwen models (qwen-plus-latest)
- DeepSeekClient: DeepSeek via DashScope
- KimiClient: Kimi (Moonshot AI) via DashScope

All use httpx with HTTP/2 support and DashScope error parsing. Function
calling goes through the standard ``tools`` payload.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Dict, List, Optional, Any
import json
import logging

import httpx

from clients.llm.base import BaseLLMClient, extract_usage
from clients.llm.http_client_manager import get_httpx_manager
from config.settings import config
from services.infrastructure.http.error_handler import (
    LLMRateLimitError,
    LLMProviderError,
    LLMAccessDeniedError,
    LLMTimeoutError
)
from services.llm.error_parsers.dashscope_error_parser import parse_and_raise_dashscope_error

logger = logging.getLogger(__name__)


class DashScopeClient(BaseLLMClient):
    """Async client for a DashScope-hosted chat model using httpx with HTTP/2 support."""

    provider = 'dashscope'
    display_name = 'DashScope'

    def __init__(
        self,
        model_id: str = 'qwen',
        default_temperature: float = 0.7,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            model_id: Model identifier ('qwen', 'deepseek', 'kimi')
            default_temperature: Sampling temperature when the caller gives none
            http_client: Client to send requests with; the shared pooled
                client is used when omitted
        """
        super().__init__(default_temperature=default_temperature)
        self.model_id = model_id
        self._http_client = http_client

    @property
    def api_url(self) -> str:
        return config.QWEN_API_URL

    @property
    def api_key(self) -> Optional[str]:
        return config.QWEN_API_KEY

    @property
    def model_name(self) -> str:
        return config.get_model_name(self.model_id)

    async def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return await get_httpx_manager().get_client(self.provider, timeout=config.LLM_TIMEOUT)

    async def chat_completion(
        self,
        messages: List[Dict],
        temperature: Optional[float] = None,
        max_tokens: int = 1000,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Send chat completion request (async).

        Args:
            messages: List of message dictionaries with 'role' and 'content'.
                     Supports multimodal content:
                     - Text: {"role": "user", "content": "text"}
                     - Mixed: {"role": "user", "content": [{"type": "text", "text": "..."},
                       {"type": "image_url", "image_url": {"url": "data:..."}}]}
                     - Tool rounds: assistant messages with 'tool_calls' followed
                       by {"role": "tool", "tool_call_id": "...", "content": "..."}
            temperature: Sampling temperature (0.0 to 2.0), None uses default
            max_tokens: Maximum tokens in response
            **kwargs: Additional parameters:
                - tools: Function calling tools array
                - tool_choice: Tool selection strategy
                - parallel_tool_calls: Enable parallel tool calls

        Returns:
            Dict with 'content', 'usage' and 'model' keys.
            If tool_calls are present, includes 'tool_calls' key.
        """
        payload: Dict[str, Any] = {
            "model": self.model_name,
            "messages": messages,
            "temperature": self._get_temperature(temperature),
            "max_tokens": max_tokens,
            "stream": False,
            "enable_thinking": False
        }

        # Add function calling parameters if provided
        if kwargs.get("tools"):
            payload["tools"] = kwargs.pop("tools")
        if "tool_choice" in kwargs:
            payload["tool_choice"] = kwargs.pop("tool_choice")
        if "parallel_tool_calls" in kwargs:
            payload["parallel_tool_calls"] = kwargs.pop("parallel_tool_calls")
        kwargs.pop("tools", None)

        if kwargs:
            logger.debug('[%sClient] Additional kwargs passed through: %s', self.display_name, list(kwargs.keys()))
            payload.update(kwargs)

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        try:
            client = await self._get_http_client()
            response = await client.post(self.api_url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error('%s API timeout', self.display_name)
            raise LLMTimeoutError(f"{self.display_name} API timeout") from e
        except httpx.HTTPError as e:
            logger.error('%s HTTP error: %s', self.display_name, e)
            raise LLMProviderError(
                f"{self.display_name} HTTP error: {e}",
                provider=self.model_id,
                error_code='HTTPError'
            ) from e

        if response.status_code != 200:
            self._raise_for_error(response.status_code, response.text)

        data = response.json()
        choices = data.get('choices', [])
        message = choices[0].get('message', {}) if choices else {}
        result = {
            'content': message.get('content') or '',
            'usage': extract_usage(data),
            'model': data.get('model') or self.model_name
        }
        tool_calls = message.get('tool_calls')
        if tool_calls:
            result['tool_calls'] = tool_calls
        return result

    def _raise_for_error(self, status_code: int, error_text: str) -> None:
        logger.error('%s API error %d: %s', self.display_name, status_code, error_text)

        try:
            error_data = json.loads(error_text)
        except json.JSONDecodeError as exc:
            # Fallback for non-JSON errors
            if status_code == 429:
                raise LLMRateLimitError(f"{self.display_name} rate limit: {error_text}") from exc
            if status_code == 401:
                raise LLMAccessDeniedError(
                    f"Unauthorized: {error_text}",
                    provider=self.model_id,
                    error_code='Unauthorized'
                ) from exc
            raise LLMProviderError(
                f"{self.display_name} API error ({status_code}): {error_text}",
                provider=self.model_id,
                error_code=f'HTTP{status_code}'
            ) from exc

        # This function always raises an exception, never returns
        parse_and_raise_dashscope_error(status_code, error_text, error_data)


class QwenClient(DashScopeClient):
    """Qwen generation model."""

    display_name = 'Qwen'

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__('qwen', default_temperature=0.7, http_client=http_client)


class DeepSeekClient(DashScopeClient):
    """DeepSeek via DashScope; lower temperature, it is a reasoning model."""

    display_name = 'DeepSeek'

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__('deepseek', default_temperature=0.6, http_client=http_client)


class KimiClient(DashScopeClient):
    """Kimi (Moonshot AI) via DashScope."""

    display_name = 'Kimi'

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__('kimi', default_temperature=0.7, http_client=http_client)
