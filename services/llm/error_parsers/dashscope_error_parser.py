"""
DashScope Error Parser
======================

Maps DashScope API error responses to the LLM exception hierarchy.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Dict, NoReturn, Optional, Tuple
import json
import logging
import re

from services.infrastructure.http.error_handler import (
    LLMAccessDeniedError,
    LLMContentFilterError,
    LLMInvalidParameterError,
    LLMModelNotFoundError,
    LLMProviderError,
    LLMQuotaExhaustedError,
    LLMRateLimitError,
    LLMServiceError,
    LLMTimeoutError,
)

logger = logging.getLogger(__name__)

_CONTENT_FILTER_CODES = {'DataInspectionFailed', 'data_inspection_failed'}
_QUOTA_CODES = {'Arrearage', 'insufficient_quota', 'QuotaExhausted', 'AllocationQuota.FreeTierOnly'}


def _extract_code_and_message(error_text: str, error_data: Optional[Dict]) -> Tuple[str, str]:
    """
    Pull ``code`` and ``message`` out of the several shapes DashScope uses:
    ``{"error": {"code", "message"}}``, ``{"code", "message"}``,
    ``{"error": "..."}`` or plain text.
    """
    if error_data is None:
        try:
            error_data = json.loads(error_text)
        except (json.JSONDecodeError, TypeError):
            error_data = {}
    if not isinstance(error_data, dict):
        error_data = {}

    error_info = error_data.get('error') or error_data
    if isinstance(error_info, str):
        return '', error_info

    error_code = str(error_info.get('code') or '')
    error_message = str(error_info.get('message') or error_text)

    # "400-InvalidParameter: message"
    if not error_code:
        code_match = re.match(r'(\d+)-([A-Za-z.]+)', error_message)
        if code_match:
            error_code = code_match.group(2)
            if ':' in error_message:
                error_message = error_message.split(':', 1)[-1].strip()

    return error_code, error_message


def parse_dashscope_error(
    status_code: int,
    error_text: str,
    error_data: Optional[Dict] = None
) -> Tuple[LLMServiceError, str]:
    """
    Parse DashScope API error and return appropriate exception with user-friendly message.

    Args:
        status_code: HTTP status code
        error_text: Raw error text from API
        error_data: Parsed error JSON data (if available)

    Returns:
        Tuple of (exception, user_friendly_message)
    """
    error_code, error_message = _extract_code_and_message(error_text, error_data)
    error_msg_lower = error_message.lower()

    if error_code in _CONTENT_FILTER_CODES or 'inappropriate content' in error_msg_lower:
        return LLMContentFilterError(
            f"Content filter triggered: {error_message}"
        ), "The request was blocked by the content safety filter."

    if error_code in _QUOTA_CODES or 'quota' in error_msg_lower:
        return LLMQuotaExhaustedError(
            f"Quota exhausted: {error_message}",
            provider='dashscope',
            error_code=error_code or 'QuotaExhausted'
        ), "The model quota is exhausted."

    if status_code == 400:
        parameter_match = re.search(r"parameter[ `'\"]+([A-Za-z_.]+)", error_message)
        return LLMInvalidParameterError(
            f"Invalid parameter: {error_message}",
            parameter=parameter_match.group(1) if parameter_match else None,
            error_code=error_code or 'InvalidParameter',
            provider='dashscope'
        ), "The request to the model was invalid."

    if status_code in (401, 403):
        return LLMAccessDeniedError(
            f"Access denied: {error_message}",
            provider='dashscope',
            error_code=error_code or ('Unauthorized' if status_code == 401 else 'AccessDenied')
        ), "Authentication failed. Please check the API key."

    if status_code == 404 or error_code == 'ModelNotFound':
        return LLMModelNotFoundError(
            f"Model not found: {error_message}",
            provider='dashscope',
            error_code=error_code or 'ModelNotFound'
        ), "The configured model does not exist."

    if status_code == 429:
        return LLMRateLimitError(
            f"DashScope rate limit: {error_message}"
        ), "Too many requests. Please try again later."

    if status_code in (504, 408) or 'timeout' in error_msg_lower:
        return LLMTimeoutError(
            f"DashScope timeout: {error_message}"
        ), "The model took too long to respond."

    return LLMProviderError(
        f"DashScope API error ({status_code}): {error_message}",
        provider='dashscope',
        error_code=error_code or f'HTTP{status_code}'
    ), f"API error: {error_message}"


def parse_and_raise_dashscope_error(
    status_code: int,
    error_text: str,
    error_data: Optional[Dict] = None
) -> NoReturn:
    """
    Parse DashScope error and raise appropriate exception.

    Raises:
        Appropriate LLMServiceError subclass based on error type
    """
    exception, user_message = parse_dashscope_error(status_code, error_text, error_data)

    logger.error(
        "DashScope API error (%d): %s - %s",
        status_code,
        exception.__class__.__name__,
        str(exception),
        extra={
            'status_code': status_code,
            'error_code': getattr(exception, 'error_code', None),
            'user_message': user_message
        }
    )

    if isinstance(exception, LLMProviderError):
        exception.user_message = user_message
    raise exception
