"""
LLM Service Tests
=================

Unit tests for response normalization and error wrapping.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from unittest.mock import AsyncMock, Mock

import pytest

from services.infrastructure.http.error_handler import LLMRateLimitError, LLMServiceError
from services.llm import LLMService


def _service(chat_completion):
    client = Mock()
    client.chat_completion = chat_completion
    factory = Mock(return_value=client)
    return LLMService(client_factory=factory), factory, client


class TestGenerate:
    """generate()"""

    @pytest.mark.asyncio
    async def test_normalizes_tool_calls_and_usage(self):
        service, factory, client = _service(AsyncMock(return_value={
            'content': '',
            'usage': {'prompt_tokens': 3, 'completion_tokens': 4, 'total_tokens': 7},
            'model': 'qwen-plus-latest',
            'tool_calls': [{
                'id': 'call_1',
                'type': 'function',
                'function': {'name': 'createNode', 'arguments': '{"content": "Root"}'}
            }]
        }))

        response = await service.generate([{"role": "user", "content": "hi"}], model='qwen', tools=[{'x': 1}])

        factory.assert_called_once_with('qwen')
        assert client.chat_completion.call_args.kwargs['tools'] == [{'x': 1}]
        assert response.text == ''
        assert response.tool_calls[0].name == 'createNode'
        assert response.tool_calls[0].args == {'content': 'Root'}
        assert response.usage['total_tokens'] == 7
        assert response.model == 'qwen-plus-latest'

    @pytest.mark.asyncio
    async def test_invalid_arguments_become_empty_args(self):
        service, _, _ = _service(AsyncMock(return_value={
            'content': '',
            'tool_calls': [{'id': 'c', 'function': {'name': 'createNode', 'arguments': '{not json'}}]
        }))
        response = await service.generate([])
        assert response.tool_calls[0].args == {}
        assert response.tool_calls[0].raw_arguments == '{not json'

    @pytest.mark.asyncio
    async def test_non_string_arguments_become_empty_args(self):
        service, _, _ = _service(AsyncMock(return_value={
            'content': '',
            'tool_calls': [
                {'id': 'a', 'function': {'name': 'createNode', 'arguments': 123}},
                {'id': 'b', 'function': {'name': 'createNode', 'arguments': ['x']}},
                'garbage',
                {'id': 'c', 'function': None},
            ]
        }))
        response = await service.generate([])

        assert [call.id for call in response.tool_calls] == ['a', 'b', 'c']
        assert all(call.args == {} for call in response.tool_calls)
        assert response.tool_calls[0].raw_arguments == '{}'
        assert response.tool_calls[2].name == ''

    @pytest.mark.asyncio
    async def test_llm_errors_pass_through(self):
        service, _, _ = _service(AsyncMock(side_effect=LLMRateLimitError("slow down")))
        with pytest.raises(LLMRateLimitError):
            await service.generate([])

    @pytest.mark.asyncio
    async def test_other_errors_are_wrapped(self):
        service, _, _ = _service(AsyncMock(side_effect=ValueError("Unsupported model: x")))
        with pytest.raises(LLMServiceError) as exc_info:
            await service.generate([], model='x')
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestChatWithUsage:
    """chat_with_usage()"""

    @pytest.mark.asyncio
    async def test_returns_text_and_usage(self):
        service, _, client = _service(AsyncMock(return_value={'content': '<p>ok</p>', 'usage': {'total_tokens': 5}}))
        text, usage = await service.chat_with_usage('make a clock', system_message='sys')

        assert text == '<p>ok</p>'
        assert usage == {'total_tokens': 5}
        sent = client.chat_completion.call_args.kwargs['messages']
        assert sent == [{"role": "system", "content": "sys"}, {"role": "user", "content": "make a clock"}]
