"""
Response backends: pluggable producers of advisor responses.
"""

from conductor.backends.base import ResponseBackend
from conductor.backends.llm import LLMResponseBackend
from conductor.backends.mock import MockResponseBackend
from conductor.backends.response_parser import ParseError, parse_advisor_response

__all__ = [
    "ResponseBackend",
    "LLMResponseBackend",
    "MockResponseBackend",
    "ParseError",
    "parse_advisor_response",
]
