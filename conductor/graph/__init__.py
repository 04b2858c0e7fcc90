"""
Consultation graph: route -> consult -> synthesize.
"""

from conductor.graph.build import create_consultation_graph, route_after_routing
from conductor.graph.state import ConsultationState

__all__ = [
    "create_consultation_graph",
    "route_after_routing",
    "ConsultationState",
]
