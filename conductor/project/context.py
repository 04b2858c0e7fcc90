"""
Advisor context generation.

Merges project metadata with an advisor's definition into the context map
an advisor instance carries and hands to the response backend.
"""

from typing import Any, Dict

from conductor.project.config_source import ProjectConfig
from conductor.registry.schemas import AdvisorDefinition


CODE_REVIEWERS = frozenset({"@reviewer", "@frontend", "@backend", "@security"})
ARCHITECTURE_PLANNERS = frozenset({"@backend", "@frontend", "@reviewer"})
UI_DESIGNERS = frozenset({"@design", "@frontend"})
PROJECT_MANAGERS = frozenset({"@pm", "@reviewer"})


def generate_advisor_context(
    definition: AdvisorDefinition,
    project_config: ProjectConfig,
) -> Dict[str, Any]:
    """
    Build the advisor-specific section of an instance context.

    Args:
        definition: The advisor's static definition
        project_config: Loaded project configuration

    Returns:
        Dict with role, expertise, instructions, stack, project-specific
        metadata and capability flags
    """
    config = project_config.config or {}
    package_info = project_config.package_info or {}
    project_context = config.get("projectContext") or {}

    return {
        "name": definition.name,
        "role": definition.role,
        "priority": definition.priority,
        "context_template": definition.context_template,
        "expertise": list(definition.expertise),
        "special_instructions": list(definition.special_instructions),
        "technical_stack": list(definition.technical_stack),
        "project_specific": {
            "framework": project_context.get("framework") or config.get("framework"),
            "language": project_context.get("language"),
            "dependencies": package_info.get("dependencies") or {},
            "scripts": package_info.get("scripts") or {},
            "has_database": project_context.get("hasDatabase"),
            "has_authentication": project_context.get("hasAuthentication"),
            "experience_level": config.get("experienceLevel"),
        },
        "capabilities": {
            "can_review_code": definition.name in CODE_REVIEWERS,
            "can_plan_architecture": definition.name in ARCHITECTURE_PLANNERS,
            "can_design_ui": definition.name in UI_DESIGNERS,
            "can_manage_project": definition.name in PROJECT_MANAGERS,
        },
    }


def build_instance_context(
    definition: AdvisorDefinition,
    project_config: ProjectConfig,
) -> Dict[str, Any]:
    """Full context map for one advisor instance: project section plus ``advisor``."""
    return {
        **project_config.as_context(),
        "advisor": generate_advisor_context(definition, project_config),
    }
