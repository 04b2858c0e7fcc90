"""
Conductor: a team of specialized software advisors.

Modules:
- registry: Advisor definitions and the built-in roster
- orchestration: Dependency resolution, lifecycle, routing, consensus
- graph: LangGraph consultation pipeline
- backends: Mock and OpenAI response backends
- project: Project configuration and advisor context
- shared: LLM client, logging, output contracts
"""

from conductor.orchestration.orchestrator import AdvisorOrchestrator

__all__ = ["AdvisorOrchestrator"]
