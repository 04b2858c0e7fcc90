"""
Project configuration: loading project metadata and turning it into
per-advisor context.
"""

from conductor.project.config_source import ProjectConfig, ProjectConfigSource, normalize_advisor_name
from conductor.project.context import build_instance_context, generate_advisor_context

__all__ = [
    "ProjectConfig",
    "ProjectConfigSource",
    "normalize_advisor_name",
    "build_instance_context",
    "generate_advisor_context",
]
