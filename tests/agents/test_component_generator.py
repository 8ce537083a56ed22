"""
Component Generator Tests
=========================

Unit tests for interactive component synthesis.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from unittest.mock import AsyncMock, Mock

import pytest

from agents.canvas.component_generator import COMPONENT_ERROR_HTML, ComponentGenerator, strip_code_fence
from services.infrastructure.http.error_handler import LLMTimeoutError


def _generator(**chat_kwargs):
    llm = Mock()
    llm.chat_with_usage = AsyncMock(**chat_kwargs)
    return ComponentGenerator(llm=llm, model='qwen'), llm


class TestStripCodeFence:
    """Markdown fence removal"""

    def test_fenced_html(self):
        assert strip_code_fence("```html\n<p>hi</p>\n```") == '<p>hi</p>'

    def test_bare_document_untouched(self):
        assert strip_code_fence('  <!DOCTYPE html><p>x</p> ') == '<!DOCTYPE html><p>x</p>'


class TestGenerateDocument:
    """generate_document()"""

    @pytest.mark.asyncio
    async def test_uses_component_system_prompt(self):
        generator, llm = _generator(return_value=('```html\n<canvas></canvas>\n```', {'total_tokens': 9}))
        document = await generator.generate_document('a drawing app')

        assert document == '<canvas></canvas>'
        kwargs = llm.chat_with_usage.call_args.kwargs
        assert kwargs['prompt'] == 'a drawing app'
        assert kwargs['model'] == 'qwen'
        assert 'sandboxed iframe' in kwargs['system_message']

    @pytest.mark.asyncio
    async def test_model_failure_returns_error_html(self):
        generator, _ = _generator(side_effect=LLMTimeoutError("timeout"))
        assert await generator.generate_document('x') == COMPONENT_ERROR_HTML

    @pytest.mark.asyncio
    async def test_empty_output_returns_error_html(self):
        generator, _ = _generator(return_value=('   ', {}))
        assert await generator.generate_document('x') == COMPONENT_ERROR_HTML
