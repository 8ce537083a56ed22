"""Canvas workspace configuration settings.

Limits and defaults for the canvas assistant and the viewport.
"""
import logging
from typing import TYPE_CHECKING, Any

from models.common import LLMModel

logger = logging.getLogger(__name__)


class CanvasConfigMixin:
    """Mixin class for canvas configuration properties.

    This mixin expects the class to inherit from BaseConfig.
    """

    if TYPE_CHECKING:
        def _get_cached_value(self, _key: str, _default: Any = None) -> Any:
            """Type stub: method provided by BaseConfig."""
            return _default

        def _get_int(self, _key: str, default: int, _minimum: int, _maximum: int) -> int:
            """Type stub: method provided by BaseConfig."""
            return default

    @property
    def CANVAS_MAX_TOOL_ROUNDS(self) -> int:
        """Tool-call rounds allowed in one assistant exchange."""
        return self._get_int('CANVAS_MAX_TOOL_ROUNDS', 8, 1, 100)

    @property
    def CANVAS_VIEWPORT_WIDTH(self) -> int:
        """Viewport width assumed until a client reports its size."""
        return self._get_int('CANVAS_VIEWPORT_WIDTH', 1280, 1, 16384)

    @property
    def CANVAS_VIEWPORT_HEIGHT(self) -> int:
        """Viewport height assumed until a client reports its size."""
        return self._get_int('CANVAS_VIEWPORT_HEIGHT', 800, 1, 16384)

    def _get_model_id(self, key: str) -> str:
        value = (self._get_cached_value(key, LLMModel.QWEN.value) or '').lower()
        if value not in {model.value for model in LLMModel}:
            logger.warning("Invalid %s '%s', using qwen", key, value)
            return LLMModel.QWEN.value
        return value

    @property
    def CANVAS_ASSISTANT_MODEL(self) -> str:
        """Model id answering canvas chat ('qwen', 'deepseek', 'kimi')."""
        return self._get_model_id('CANVAS_ASSISTANT_MODEL')

    @property
    def COMPONENT_MODEL(self) -> str:
        """Model id generating interactive HTML components."""
        return self._get_model_id('COMPONENT_MODEL')
