"""
Prompt builders for LLM-backed advisors.

These functions construct the actual prompts sent to the LLM from an
advisor's context map.
"""

from typing import Any, Dict

from conductor.backends.prompts.templates import (
    AdvisorPromptConfig,
    ADVISOR_SYSTEM_PROMPT_TEMPLATE,
    ADVISOR_USER_PROMPT_TEMPLATE,
)
from conductor.orchestration.lifecycle import clamp_confidence


def build_prompt_config(context: Dict[str, Any]) -> AdvisorPromptConfig:
    """
    Build the prompt configuration from an advisor context.

    Args:
        context: Advisor context map with a ``confidence`` key

    Returns:
        Validated AdvisorPromptConfig
    """
    advisor = context.get("advisor") or {}
    project_specific = advisor.get("project_specific") or {}

    return AdvisorPromptConfig(
        name=advisor.get("name", "@advisor"),
        role=advisor.get("role", "Advisor"),
        expertise=advisor.get("expertise") or [],
        special_instructions=advisor.get("special_instructions") or [],
        technical_stack=advisor.get("technical_stack") or [],
        project_path=context.get("project_path"),
        framework=project_specific.get("framework"),
        language=project_specific.get("language"),
        experience_level=project_specific.get("experience_level"),
        dependencies={
            str(key): str(value)
            for key, value in (project_specific.get("dependencies") or {}).items()
        },
        confidence=clamp_confidence(context.get("confidence", 0.0)),
    )


def build_system_prompt(context: Dict[str, Any]) -> str:
    """
    Build the system prompt for one advisor.

    Args:
        context: Advisor context map with a ``confidence`` key

    Returns:
        Complete system prompt string
    """
    return build_prompt_config(context).format_prompt(ADVISOR_SYSTEM_PROMPT_TEMPLATE)


def build_user_prompt(query: str) -> str:
    return ADVISOR_USER_PROMPT_TEMPLATE.format(query=query.strip())
