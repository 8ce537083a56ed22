"""Error types.

LLM failures raised by the model clients and canvas failures raised by the
workspace layer. Both are caught at the boundary that can recover: the tool
orchestrator for LLM errors, the FastAPI exception handlers for canvas errors.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Optional


class LLMServiceError(Exception):
    """Base exception for LLM service errors."""


class LLMTimeoutError(LLMServiceError):
    """Raised when LLM call times out."""


class LLMValidationError(LLMServiceError):
    """Raised when response doesn't match expected format."""


class LLMRateLimitError(LLMServiceError):
    """Raised when API rate limit is exceeded."""


class LLMContentFilterError(LLMServiceError):
    """Raised when content is flagged by safety filter."""


class LLMProviderError(LLMServiceError):
    """Raised for provider-specific errors with error code."""
    def __init__(self, message: str, provider: Optional[str] = None, error_code: Optional[str] = None):
        super().__init__(message)
        self.provider = provider
        self.error_code = error_code
        self.user_message: Optional[str] = None  # User-friendly error message


class LLMInvalidParameterError(LLMProviderError):
    """Raised when API parameters are invalid."""
    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        error_code: Optional[str] = None,
        provider: Optional[str] = None
    ):
        super().__init__(message, provider=provider, error_code=error_code)
        self.parameter = parameter


class LLMQuotaExhaustedError(LLMProviderError):
    """Raised when quota is exhausted."""


class LLMModelNotFoundError(LLMProviderError):
    """Raised when model doesn't exist."""


class LLMAccessDeniedError(LLMProviderError):
    """Raised when access is denied."""


# ============================================================================
# CANVAS ERRORS
# ============================================================================

class CanvasError(Exception):
    """Base exception for workspace-level errors."""
    status_code = 400


class ProjectNotFoundError(CanvasError):
    """Raised when a project id is unknown."""
    status_code = 404

    def __init__(self, project_id: str):
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id


class NodeNotFoundError(CanvasError):
    """Raised by the HTTP layer when a node id is unknown."""
    status_code = 404

    def __init__(self, node_id: str):
        super().__init__(f"Node not found: {node_id}")
        self.node_id = node_id


class ExchangeInProgressError(CanvasError):
    """Raised when a chat message is sent while another exchange is running."""
    status_code = 409

    def __init__(self, project_id: str):
        super().__init__(f"An assistant exchange is already running for project {project_id}")
        self.project_id = project_id
