"""
LLM Clients Package

Provides LLM clients for the DashScope-hosted models:
- QwenClient, DeepSeekClient, KimiClient

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Dict
import logging

from clients.llm.base import BaseLLMClient, ModelResponse, ToolCall
from clients.llm.dashscope import DashScopeClient, QwenClient, DeepSeekClient, KimiClient
from clients.llm.http_client_manager import close_httpx_clients

logger = logging.getLogger(__name__)

_CLIENT_CLASSES = {
    'qwen': QwenClient,
    'deepseek': DeepSeekClient,
    'kimi': KimiClient,
}

_clients: Dict[str, BaseLLMClient] = {}


def get_llm_client(model_id: str = 'qwen') -> BaseLLMClient:
    """
    Get an LLM client by model ID.

    Args:
        model_id: 'qwen', 'deepseek' or 'kimi'

    Returns:
        Shared client instance for that model

    Raises:
        ValueError: If the model id is not supported
    """
    client = _clients.get(model_id)
    if client is not None:
        return client

    client_cls = _CLIENT_CLASSES.get(model_id)
    if client_cls is None:
        logger.error('LLM client not available for model "%s"', model_id)
        raise ValueError(f"Unsupported model: {model_id}")

    client = client_cls()
    _clients[model_id] = client
    logger.debug('Using %s LLM client', model_id)
    return client


__all__ = [
    'BaseLLMClient',
    'ModelResponse',
    'ToolCall',
    'DashScopeClient',
    'QwenClient',
    'DeepSeekClient',
    'KimiClient',
    'get_llm_client',
    'close_httpx_clients',
]
