"""
LLM Error Parsers

Error parsing utilities for LLM providers.
"""

from .dashscope_error_parser import parse_dashscope_error, parse_and_raise_dashscope_error

__all__ = [
    "parse_dashscope_error",
    "parse_and_raise_dashscope_error",
]
