"""
Configuration for the advisor orchestrator.

Centralizes the tunable knobs of initialization, routing and consultation
so behavior can be adjusted without touching the orchestration code.
"""

import os
from dataclasses import dataclass, field, fields, replace
from typing import Optional, Tuple


@dataclass
class OrchestratorConfig:
    """
    Configuration for the advisor orchestrator.

    Attributes:
        initial_confidence: Confidence assigned when an advisor first becomes ready
        confidence_seed: When set, initial confidence is sampled from
            confidence_range with a random generator seeded by this value
        confidence_range: Bounds for sampled initial confidence
        advisor_timeout_seconds: Upper bound on one backend call, counted from its dispatch
        max_parallel_advisors: Most advisor calls in flight at once for one consultation
        default_advisors: Fallback pair when no keyword matches a query
        code_reviewer: Advisor added to every query that mentions "code"
        model: LLM model used by the OpenAI response backend
        config_dir_name: Directory under the project root holding conductor.config.json
    """

    # Initial confidence policy
    initial_confidence: float = 0.9
    confidence_seed: Optional[int] = None
    confidence_range: Tuple[float, float] = (0.85, 1.0)

    # Consultation execution
    advisor_timeout_seconds: float = 60.0
    max_parallel_advisors: int = 4

    # Routing
    default_advisors: Tuple[str, ...] = field(default_factory=lambda: ("@pm", "@reviewer"))
    code_reviewer: str = "@reviewer"

    # LLM configuration
    model: str = "gpt-4.1-mini"

    # Project configuration
    config_dir_name: str = ".conductor"

    @classmethod
    def from_env(cls) -> "OrchestratorConfig":
        """
        Build a configuration from CONDUCTOR_* environment variables.

        Unset variables keep their defaults.
        """
        overrides = {}

        if os.environ.get("CONDUCTOR_ADVISOR_TIMEOUT"):
            overrides["advisor_timeout_seconds"] = float(os.environ["CONDUCTOR_ADVISOR_TIMEOUT"])
        if os.environ.get("CONDUCTOR_MAX_PARALLEL"):
            overrides["max_parallel_advisors"] = int(os.environ["CONDUCTOR_MAX_PARALLEL"])
        if os.environ.get("CONDUCTOR_MODEL"):
            overrides["model"] = os.environ["CONDUCTOR_MODEL"]
        if os.environ.get("CONDUCTOR_INITIAL_CONFIDENCE"):
            overrides["initial_confidence"] = float(os.environ["CONDUCTOR_INITIAL_CONFIDENCE"])
        if os.environ.get("CONDUCTOR_CONFIDENCE_SEED"):
            overrides["confidence_seed"] = int(os.environ["CONDUCTOR_CONFIDENCE_SEED"])

        return get_config(**overrides)


# Default configuration instance
DEFAULT_CONFIG = OrchestratorConfig()


def get_config(**overrides) -> OrchestratorConfig:
    """
    Create a configuration with optional overrides.

    Args:
        **overrides: Field values to replace on DEFAULT_CONFIG; None values
            are ignored so callers can pass optional arguments straight through

    Returns:
        OrchestratorConfig with specified overrides applied

    Raises:
        TypeError: If an override names a field that does not exist
    """
    known = {f.name for f in fields(OrchestratorConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise TypeError(f"Unknown orchestrator config fields: {sorted(unknown)}")

    return replace(
        DEFAULT_CONFIG,
        **{key: value for key, value in overrides.items() if value is not None},
    )
