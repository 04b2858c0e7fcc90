"""
Shared infrastructure for the advisor team.

Modules:
- llm: OpenAI client with retry logic
- logging: Structured JSON logging
- contracts: Advisor response and consensus contracts
"""

from conductor.shared.llm.client import get_cached_client, get_llm_response_with_usage
from conductor.shared.logging.config import setup_logging, log_state_transition

__all__ = [
    "get_cached_client",
    "get_llm_response_with_usage",
    "setup_logging",
    "log_state_transition",
]
