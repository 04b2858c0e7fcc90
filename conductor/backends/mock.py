"""
Deterministic mock backend.

Templated responses with no external calls, used by default when no LLM
backend is configured and throughout the tests.
"""

import threading
from typing import Any, Dict, Iterable, List, Optional, Tuple

from conductor.backends.base import ResponseBackend
from conductor.orchestration.errors import BackendResponseError
from conductor.shared.contracts import AdvisorResponseV1


MOCK_IMPLEMENTATION_STEPS = [
    "Step 1: Analysis and planning",
    "Step 2: Implementation approach",
    "Step 3: Testing and validation",
]

HIGH_PRIORITY_THRESHOLD = 8


class MockResponseBackend(ResponseBackend):
    """
    Templated responses derived from the advisor's role and expertise.

    Args:
        failing: Advisor names whose calls raise BackendResponseError
        confidence_overrides: Per-advisor confidence to report instead of
            the dispatch-time confidence
    """

    name = "mock"

    def __init__(
        self,
        failing: Optional[Iterable[str]] = None,
        confidence_overrides: Optional[Dict[str, float]] = None,
    ):
        self.failing = set(failing or ())
        self.confidence_overrides = dict(confidence_overrides or {})
        self.calls: List[Tuple[str, str]] = []
        self._lock = threading.Lock()

    def respond(self, context: Dict[str, Any], query: str) -> AdvisorResponseV1:
        advisor = context.get("advisor") or {}
        name = advisor.get("name", "unknown")

        with self._lock:
            self.calls.append((name, query))

        if name in self.failing:
            raise BackendResponseError(name, "mock backend configured to fail")

        role = advisor.get("role", "Advisor")
        expertise = ", ".join((advisor.get("expertise") or [])[:3])
        confidence = self.confidence_overrides.get(name, context.get("confidence", 0.0))

        return AdvisorResponseV1(
            recommendation=f"{role} recommendation for: {query}",
            reasoning=f"Based on my expertise in {expertise}",
            confidence=confidence,
            priority="high" if advisor.get("priority", 0) >= HIGH_PRIORITY_THRESHOLD else "medium",
            implementation_steps=list(MOCK_IMPLEMENTATION_STEPS),
        )

    def called_advisors(self) -> List[str]:
        with self._lock:
            return [name for name, _ in self.calls]
