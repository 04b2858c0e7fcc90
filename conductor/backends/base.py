"""
Response backend interface.

A backend turns (advisor context, query) into one AdvisorResponseV1. The
context is the advisor's context map plus a ``confidence`` key holding the
advisor's confidence at dispatch time.

Backends are called from worker threads, one call per advisor, and must be
safe to call concurrently for different advisors.
"""

from typing import Any, Dict

from conductor.shared.contracts import AdvisorResponseV1


class ResponseBackend:
    """Base class for advisor response generation."""

    name = "base"

    def respond(self, context: Dict[str, Any], query: str) -> AdvisorResponseV1:
        """
        Produce one advisor's response to ``query``.

        Raises:
            BackendResponseError: If no usable response can be produced
        """
        raise NotImplementedError
