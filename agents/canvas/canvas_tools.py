"""
Canvas Tool Declarations
========================

The two functions the canvas assistant may call, declared in the
OpenAI-compatible ``tools`` format accepted by DashScope.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Any, Dict, List

from clients.llm.base import ToolCall


CREATE_NODE = 'createNode'
CREATE_COMPONENT = 'createComponent'

# Result returned to the model for a tool name it invented
UNKNOWN_FUNCTION_RESULT = {'error': 'Unknown function'}

CANVAS_TOOLS: List[Dict[str, Any]] = [
    {
        'type': 'function',
        'function': {
            'name': CREATE_NODE,
            'description': 'Creates a new node on the canvas. Use this to build mind maps and diagrams for the user.',
            'parameters': {
                'type': 'object',
                'properties': {
                    'content': {
                        'type': 'string',
                        'description': 'The text content to be placed inside the node.'
                    },
                    'parentNodeId': {
                        'type': 'string',
                        'description': 'Optional. The ID of the parent node to connect this new node to.'
                    },
                    'nodeType': {
                        'type': 'string',
                        'description': "The type of node to create. Defaults to 'text'.",
                        'enum': ['text', 'code']
                    }
                },
                'required': ['content']
            }
        }
    },
    {
        'type': 'function',
        'function': {
            'name': CREATE_COMPONENT,
            'description': (
                'Creates a new code node containing a fully functional web component (HTML, CSS, JS) '
                'based on a user prompt. Use this when the user asks to create a game, a tool, or any '
                'visual interactive element.'
            ),
            'parameters': {
                'type': 'object',
                'properties': {
                    'prompt': {
                        'type': 'string',
                        'description': (
                            'A detailed description of the web component to create. '
                            'e.g., "a simple drawing app with different colors"'
                        )
                    },
                    'parentNodeId': {
                        'type': 'string',
                        'description': 'Optional. The ID of the parent node to connect this new node to.'
                    }
                },
                'required': ['prompt']
            }
        }
    },
]

_REQUIRED_ARGS = {
    tool['function']['name']: tool['function']['parameters']['required']
    for tool in CANVAS_TOOLS
}


def missing_arguments(call: ToolCall) -> List[str]:
    """Required string arguments that are absent or not strings."""
    return [
        name for name in _REQUIRED_ARGS.get(call.name, [])
        if not isinstance(call.args.get(name), str)
    ]
