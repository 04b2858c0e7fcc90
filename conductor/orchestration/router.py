"""
Consultation routing.

Selects the advisors relevant to a free-text query with deterministic
keyword matching: an advisor is selected when any of its trigger
substrings occurs anywhere in the lower-cased query.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from conductor.orchestration.config import OrchestratorConfig, DEFAULT_CONFIG
from conductor.orchestration.lifecycle import LifecycleManager
from conductor.orchestration.schemas import AdvisorStatus


logger = logging.getLogger(__name__)


DEFAULT_KEYWORD_TABLE: Dict[str, List[str]] = {
    "@pm": ["requirements", "user story", "feature", "roadmap", "business", "product"],
    "@design": ["ui", "ux", "design", "interface", "user experience", "accessibility", "mockup"],
    "@frontend": ["react", "component", "ui", "frontend", "javascript", "typescript", "css"],
    "@backend": ["api", "database", "server", "backend", "endpoint", "performance"],
    "@security": ["security", "auth", "authentication", "vulnerability", "owasp", "encrypt"],
    "@qa": ["test", "testing", "quality", "bug", "coverage", "automation"],
    "@devops": ["deploy", "ci/cd", "pipeline", "docker", "cloud", "infrastructure"],
    "@reviewer": ["code", "review", "quality", "architecture", "pattern", "best practice"],
}


def _dedupe(names: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for name in names:
        if name not in seen:
            seen.append(name)
    return seen


class ConsultationRouter:
    """Keyword-driven advisor selection."""

    def __init__(
        self,
        lifecycle: LifecycleManager,
        keyword_table: Optional[Mapping[str, Sequence[str]]] = None,
        config: Optional[OrchestratorConfig] = None,
    ):
        self.lifecycle = lifecycle
        self.keyword_table = dict(keyword_table if keyword_table is not None else DEFAULT_KEYWORD_TABLE)
        self.config = config or DEFAULT_CONFIG

    def match_keywords(self, query: str) -> List[str]:
        """
        Apply the keyword table and the two fallback rules.

        Rules, in order:
        1. A query mentioning "code" always includes the code reviewer.
        2. A query matching nothing goes to the default generalist pair.

        Args:
            query: Free-text query

        Returns:
            Selected advisor names in keyword-table order, before filtering
            against the live set
        """
        query_lower = query.lower()
        relevant = [
            name
            for name, triggers in self.keyword_table.items()
            if any(trigger in query_lower for trigger in triggers)
        ]

        if "code" in query_lower and self.config.code_reviewer not in relevant:
            relevant.append(self.config.code_reviewer)

        if not relevant:
            relevant.extend(self.config.default_advisors)

        return relevant

    def route(self, query: str, explicit_advisors: Optional[Sequence[str]] = None) -> List[str]:
        """
        Select the advisors that should answer ``query``.

        Args:
            query: Free-text query
            explicit_advisors: Optional override. When given it is used
                verbatim, filtered to live advisors that are ready.

        Returns:
            Advisor names to dispatch, never containing unknown names
        """
        if explicit_advisors:
            selected = [
                name
                for name in _dedupe(explicit_advisors)
                if self.lifecycle.status_of(name) == AdvisorStatus.READY
            ]
            dropped = [name for name in explicit_advisors if name not in selected]
            if dropped:
                logger.info(f"[router] Dropping explicit advisors not ready: {dropped}")
            logger.info(f"[router] Explicit routing | advisors={selected}")
            return selected

        matched = self.match_keywords(query)
        selected = [name for name in matched if name in self.lifecycle]
        logger.info(
            f"[router] Keyword routing | matched={matched}, selected={selected}"
        )
        return selected
