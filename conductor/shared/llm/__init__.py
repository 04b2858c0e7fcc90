"""LLM client utilities."""

from conductor.shared.llm.client import (
    DEFAULT_MODEL,
    get_cached_client,
    call_llm_with_usage,
    get_llm_response_with_usage,
)

__all__ = [
    "DEFAULT_MODEL",
    "get_cached_client",
    "call_llm_with_usage",
    "get_llm_response_with_usage",
]
