"""Infinite Canvas Configuration Module.

This module provides centralized configuration management for the canvas
service. It handles environment variable loading, validation, and provides a
clean interface for accessing configuration values throughout the application.

Features:
- Dynamic environment variable loading with .env support
- Property-based configuration access for real-time updates
- Validation with default values for every configuration option

Environment Variables:
- QWEN_API_KEY: Required for the canvas assistant
- See env.example for complete configuration options

Usage:
    from config.settings import config
    api_key = config.QWEN_API_KEY
    is_valid = config.validate_qwen_config()

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
import logging

from dotenv import load_dotenv

from config.base_config import BaseConfig
from config.llm_config import LLMConfigMixin
from config.canvas_config import CanvasConfigMixin

logger = logging.getLogger(__name__)

load_dotenv()  # Load environment variables from .env file


class Config(
    BaseConfig,
    LLMConfigMixin,
    CanvasConfigMixin
):
    """
    Centralized configuration management for the canvas service.

    Combines all configuration mixins to provide a unified interface
    for accessing configuration values throughout the application.
    """


# Create global configuration instance
config = Config()
