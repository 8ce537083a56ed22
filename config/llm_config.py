"""LLM configuration settings.

This module provides LLM-related configuration properties for the DashScope
OpenAI-compatible endpoint and the Qwen, DeepSeek and Kimi models behind it.
"""
import logging
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)


class LLMConfigMixin:
    """Mixin class for LLM configuration properties.

    This mixin expects the class to inherit from BaseConfig or provide
    a _get_cached_value method.
    """

    if TYPE_CHECKING:
        def _get_cached_value(self, _key: str, _default: Any = None) -> Any:
            """Type stub: method provided by BaseConfig."""
            return _default

        def _get_int(self, _key: str, default: int, _minimum: int, _maximum: int) -> int:
            """Type stub: method provided by BaseConfig."""
            return default

    @property
    def QWEN_API_KEY(self):
        """Get Qwen API key from environment."""
        api_key = self._get_cached_value('QWEN_API_KEY')
        if not api_key or not isinstance(api_key, str):
            logger.warning("Invalid or missing QWEN_API_KEY")
            return None
        return api_key.strip()

    @property
    def QWEN_API_URL(self):
        """Get Qwen API URL."""
        default_url = 'https://dashscope.aliyuncs.com/compatible-mode/v1/chat/completions'
        return self._get_cached_value('QWEN_API_URL', default_url)

    @property
    def QWEN_MODEL_GENERATION(self):
        """Model for generation tasks (higher quality)"""
        return self._get_cached_value('QWEN_MODEL_GENERATION', 'qwen-plus-latest')

    @property
    def DEEPSEEK_MODEL(self):
        """DeepSeek model served through DashScope"""
        return self._get_cached_value('DEEPSEEK_MODEL', 'deepseek-v3.1')

    @property
    def KIMI_MODEL(self):
        """Kimi model served through DashScope"""
        return self._get_cached_value('KIMI_MODEL', 'Moonshot-Kimi-K2-Instruct')

    @property
    def LLM_MAX_TOKENS(self):
        """Unified max tokens setting for all LLM calls."""
        return self._get_int('LLM_MAX_TOKENS', 4000, 1, 32000)

    @property
    def LLM_TIMEOUT(self):
        """Per-request timeout in seconds for LLM HTTP calls."""
        return self._get_int('LLM_TIMEOUT', 60, 5, 600)

    def get_model_name(self, model_id: str) -> str:
        """
        Map a model identifier to the provider model name.

        Args:
            model_id: Model identifier ('qwen', 'deepseek', 'kimi')

        Returns:
            Provider model name, defaulting to the Qwen generation model
        """
        model_map = {
            'qwen': self.QWEN_MODEL_GENERATION,
            'deepseek': self.DEEPSEEK_MODEL,
            'kimi': self.KIMI_MODEL,
        }
        return model_map.get(model_id, self.QWEN_MODEL_GENERATION)

    def validate_qwen_config(self) -> bool:
        """
        Validate Qwen API configuration.

        Returns:
            bool: True if Qwen configuration is valid, False otherwise
        """
        if not self.QWEN_API_KEY:
            return False

        if not self.QWEN_API_URL.startswith(('http://', 'https://')):
            return False

        if self.LLM_MAX_TOKENS <= 0 or self.LLM_TIMEOUT <= 0:
            return False

        return True
