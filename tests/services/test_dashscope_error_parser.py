"""
DashScope Error Parser Tests
============================

Unit tests for mapping DashScope error responses onto LLM exceptions.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import json

import pytest

from services.infrastructure.http.error_handler import (
    LLMAccessDeniedError,
    LLMContentFilterError,
    LLMInvalidParameterError,
    LLMModelNotFoundError,
    LLMProviderError,
    LLMQuotaExhaustedError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from services.llm.error_parsers import parse_and_raise_dashscope_error, parse_dashscope_error


def _body(code, message):
    data = {"error": {"code": code, "message": message}}
    return json.dumps(data), data


class TestParseDashScopeError:
    """Status and code mapping"""

    @pytest.mark.parametrize("status,code,message,expected", [
        (400, 'DataInspectionFailed', 'Input data may contain inappropriate content.', LLMContentFilterError),
        (400, 'Arrearage', 'Access denied, please make sure your account is in good standing.',
         LLMQuotaExhaustedError),
        (400, 'InvalidParameter', "Required parameter 'messages' missing", LLMInvalidParameterError),
        (401, 'InvalidApiKey', 'Invalid API-key provided.', LLMAccessDeniedError),
        (403, 'AccessDenied', 'Access denied.', LLMAccessDeniedError),
        (404, 'ModelNotFound', 'Model not exist.', LLMModelNotFoundError),
        (429, 'Throttling.RateQuota', 'Requests rate limit exceeded', LLMRateLimitError),
        (504, 'RequestTimeOut', 'Request timed out', LLMTimeoutError),
        (500, 'InternalError', 'Internal server error', LLMProviderError),
    ])
    def test_mapping(self, status, code, message, expected):
        text, data = _body(code, message)
        exception, user_message = parse_dashscope_error(status, text, data)
        assert type(exception) is expected
        assert user_message

    def test_invalid_parameter_name_extracted(self):
        text, data = _body('InvalidParameter', "Required parameter 'messages' missing")
        exception, _ = parse_dashscope_error(400, text, data)
        assert exception.parameter == 'messages'

    def test_flat_body_and_prefixed_code(self):
        text = json.dumps({"message": "400-InvalidParameter: bad temperature"})
        exception, _ = parse_dashscope_error(400, text)
        assert isinstance(exception, LLMInvalidParameterError)
        assert exception.error_code == 'InvalidParameter'

    def test_plain_text_body(self):
        exception, _ = parse_dashscope_error(502, 'Bad Gateway')
        assert isinstance(exception, LLMProviderError)
        assert exception.error_code == 'HTTP502'


class TestParseAndRaise:
    """Always raises, with a user message on provider errors"""

    def test_raises_with_user_message(self):
        text, data = _body('InvalidApiKey', 'Invalid API-key provided.')
        with pytest.raises(LLMAccessDeniedError) as exc_info:
            parse_and_raise_dashscope_error(401, text, data)
        assert exc_info.value.user_message
