"""
Canvas Assistant Module

Agents that let the model extend the canvas: tool declarations, the
tool-calling exchange loop and the interactive component generator.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from .canvas_tools import CANVAS_TOOLS, CREATE_NODE, CREATE_COMPONENT
from .component_generator import ComponentGenerator, COMPONENT_ERROR_HTML
from .tool_orchestrator import ToolOrchestrator, GENERIC_ERROR_TEXT, TOO_MANY_TOOL_CALLS_TEXT

__all__ = [
    'CANVAS_TOOLS',
    'CREATE_NODE',
    'CREATE_COMPONENT',
    'ComponentGenerator',
    'COMPONENT_ERROR_HTML',
    'ToolOrchestrator',
    'GENERIC_ERROR_TEXT',
    'TOO_MANY_TOOL_CALLS_TEXT',
]
