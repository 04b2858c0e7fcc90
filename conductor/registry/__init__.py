"""
Advisor registry: the static roster of advisor definitions.
"""

from conductor.registry.definitions import DEFAULT_ADVISOR_DEFINITIONS
from conductor.registry.registry import AdvisorRegistry
from conductor.registry.schemas import AdvisorDefinition

__all__ = ["AdvisorDefinition", "AdvisorRegistry", "DEFAULT_ADVISOR_DEFINITIONS"]
