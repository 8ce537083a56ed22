"""
External API Clients Package

This package contains clients for external services:
- LLM: Qwen, DeepSeek, Kimi chat completion clients (DashScope)

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from .llm import get_llm_client, close_httpx_clients

__all__ = [
    'get_llm_client',
    'close_httpx_clients',
]
