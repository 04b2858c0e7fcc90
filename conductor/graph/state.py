"""
Consultation state schema.

Defines the state that flows through the consultation graph, carrying the
request, the routed advisors and the synthesis output between nodes.
"""

from typing import Any, Callable, List, Optional, TypedDict, Annotated
import operator


class ConsultationState(TypedDict):
    """
    State schema for the consultation graph.

    ``request`` is a ConsultationRequest; the route node replaces it with a
    copy whose required_advisors hold the routed advisors.
    """

    # Input
    request: Any
    explicit_advisors: Optional[List[str]]
    cancel_check: Optional[Callable[[], bool]]

    # Routing output
    selected_advisors: List[str]

    # Consultation output
    records: List[Any]
    failed_advisors: List[str]

    # Synthesis output
    result: Optional[Any]

    # Tracking
    errors: Annotated[List[str], operator.add]
    messages: Annotated[List[dict], operator.add]
