"""
Interactive Component Generator
===============================

Second, independent model call that turns a short description into a
self-contained HTML document for a code node. The document is meant to run
in a sandboxed frame: inline styles and scripts, no network, no storage.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Optional
import logging
import re

from config.settings import config
from prompts.canvas_assistant import get_prompt
from services.infrastructure.http.error_handler import LLMServiceError
from services.llm import LLMService, llm_service


logger = logging.getLogger(__name__)

COMPONENT_ERROR_HTML = '<p>Sorry, an error occurred while generating the component.</p>'

_FENCE_PATTERN = re.compile(r'^```[a-zA-Z]*\s*\n(.*?)\n?```$', re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Remove a single surrounding markdown code fence, if present."""
    text = text.strip()
    match = _FENCE_PATTERN.match(text)
    return match.group(1).strip() if match else text


class ComponentGenerator:
    """Generates HTML documents for interactive code nodes."""

    def __init__(self, llm: Optional[LLMService] = None, model: Optional[str] = None):
        self.llm = llm or llm_service
        self.model = model

    async def generate_document(self, prompt: str) -> str:
        """
        Generate a complete HTML page for ``prompt``.

        Never raises for model failures: the error paragraph is returned
        instead so the placeholder node always resolves.
        """
        model = self.model or config.COMPONENT_MODEL
        try:
            text, usage = await self.llm.chat_with_usage(
                prompt=prompt,
                model=model,
                system_message=get_prompt('component_generator_system')
            )
        except LLMServiceError as e:
            logger.error("[ComponentGenerator] Generation failed for prompt %r: %s", prompt[:80], e)
            return COMPONENT_ERROR_HTML

        document = strip_code_fence(text)
        if not document:
            logger.warning("[ComponentGenerator] %s returned an empty document", model)
            return COMPONENT_ERROR_HTML

        logger.debug(
            "[ComponentGenerator] Generated %d chars (%s tokens)",
            len(document), usage.get('total_tokens', '?')
        )
        return document
