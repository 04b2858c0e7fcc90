"""
Consultation graph construction.

Builds the graph that sequences route -> consult -> synthesize for one
consultation. When routing selects nobody the consult node is skipped and
synthesis produces an empty consensus.

Node functions close over the router and synthesizer of the owning
orchestrator, so each orchestrator compiles its own graph.
"""

import logging
from typing import Any, Callable, Dict, Literal, Optional

from langgraph.graph import StateGraph, END

from conductor.graph.state import ConsultationState
from conductor.orchestration.router import ConsultationRouter
from conductor.orchestration.schemas import ConsultationRequest
from conductor.orchestration.synthesizer import ConsensusSynthesizer, build_consensus


logger = logging.getLogger(__name__)


DispatchHook = Callable[[ConsultationRequest], None]


def route_after_routing(state: ConsultationState) -> Literal["consult", "synthesize"]:
    """
    Skip the consult node when routing selected no advisors.

    Args:
        state: Current consultation state

    Returns:
        Name of the next node to execute
    """
    request = state["request"]
    _log = f"[consultation={request.id}] [graph=consultation] [router=route_after_routing] "

    if state.get("selected_advisors"):
        logger.info(f"{_log}Routing to 'consult' | advisors={state['selected_advisors']}")
        return "consult"

    logger.info(f"{_log}Routing to 'synthesize' | no advisors selected")
    return "synthesize"


def create_consultation_graph(
    router: ConsultationRouter,
    synthesizer: ConsensusSynthesizer,
    on_dispatch: Optional[DispatchHook] = None,
):
    """
    Create and compile the consultation graph.

    Graph structure:
        route -> consult -> synthesize -> END
        route -> synthesize -> END          (nobody selected)

    Args:
        router: Selects the advisors for the query
        synthesizer: Runs the advisors and aggregates their responses
        on_dispatch: Called with the routed request before any advisor runs

    Returns:
        Compiled graph ready for invocation
    """

    def route_node(state: ConsultationState) -> Dict[str, Any]:
        request: ConsultationRequest = state["request"]
        _log = f"[consultation={request.id}] [graph=consultation] [node=route] "
        logger.info(f"{_log}Entering node | query={request.query[:50]!r}")

        selected = router.route(request.query, state.get("explicit_advisors"))
        routed = request.model_copy(update={"required_advisors": list(selected)})
        if on_dispatch is not None:
            on_dispatch(routed)

        return {
            "request": routed,
            "selected_advisors": list(selected),
            "messages": [
                {
                    "role": "system",
                    "node": "route",
                    "content": f"Selected advisors: {', '.join(selected) or 'none'}",
                }
            ],
        }

    def consult_node(state: ConsultationState) -> Dict[str, Any]:
        request: ConsultationRequest = state["request"]
        _log = f"[consultation={request.id}] [graph=consultation] [node=consult] "
        logger.info(f"{_log}Entering node | advisors={state['selected_advisors']}")

        records, failed = synthesizer.gather(
            request,
            state["selected_advisors"],
            cancel_check=state.get("cancel_check"),
        )

        return {
            "records": records,
            "failed_advisors": failed,
            "errors": [f"{name} failed to respond" for name in failed],
            "messages": [
                {
                    "role": "system",
                    "node": "consult",
                    "content": f"{len(records)} advisors responded, {len(failed)} failed",
                }
            ],
        }

    def synthesize_node(state: ConsultationState) -> Dict[str, Any]:
        request: ConsultationRequest = state["request"]
        _log = f"[consultation={request.id}] [graph=consultation] [node=synthesize] "

        result = build_consensus(
            request,
            state.get("records") or [],
            state.get("failed_advisors") or [],
        )
        logger.info(
            f"{_log}Consensus built | participants={result.participant_count}, "
            f"level={result.consensus_level} -> END"
        )

        return {
            "result": result,
            "messages": [
                {
                    "role": "system",
                    "node": "synthesize",
                    "content": f"Consensus from {result.participant_count} advisors",
                }
            ],
        }

    graph = StateGraph(ConsultationState)

    graph.add_node("route", route_node)
    graph.add_node("consult", consult_node)
    graph.add_node("synthesize", synthesize_node)

    graph.set_entry_point("route")

    graph.add_conditional_edges(
        "route",
        route_after_routing,
        {
            "consult": "consult",
            "synthesize": "synthesize",
        },
    )

    graph.add_edge("consult", "synthesize")
    graph.add_edge("synthesize", END)

    app = graph.compile()

    return app
