"""
FastAPI endpoints for the advisor team.

Thin HTTP surface over one process-wide AdvisorOrchestrator. The project
root comes from CONDUCTOR_PROJECT_ROOT (default: current directory) and
the backend is the OpenAI backend when CONDUCTOR_BACKEND=openai, the mock
backend otherwise.

Endpoints are plain ``def`` so FastAPI runs the blocking consultation on
its worker thread pool.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from conductor.backends import LLMResponseBackend, MockResponseBackend
from conductor.orchestration.config import OrchestratorConfig
from conductor.orchestration.errors import CircularDependencyError, ProjectConfigError
from conductor.orchestration.orchestrator import AdvisorOrchestrator
from conductor.orchestration.schemas import AdvisorStatusView, ConsultationPriority
from conductor.shared.contracts import ConsensusResultV1


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/team", tags=["team"])

# Process-wide orchestrator
_orchestrator: Optional[AdvisorOrchestrator] = None


def get_orchestrator() -> AdvisorOrchestrator:
    """Get or create the process-wide orchestrator."""
    global _orchestrator
    if _orchestrator is None:
        config = OrchestratorConfig.from_env()
        if os.environ.get("CONDUCTOR_BACKEND", "mock").lower() == "openai":
            backend = LLMResponseBackend(model=config.model, timeout=config.advisor_timeout_seconds)
        else:
            backend = MockResponseBackend()
        _orchestrator = AdvisorOrchestrator(
            project_root=os.environ.get("CONDUCTOR_PROJECT_ROOT", "."),
            backend=backend,
            config=config,
        )
    return _orchestrator


# ============================================================================
# Request/Response Models
# ============================================================================


class InitializeRequest(BaseModel):
    """Request to initialize advisors."""

    advisors: Optional[List[str]] = Field(
        default=None,
        description="Advisors to initialize (default: project's enabled advisors, else all)",
    )


class InitializeResponse(BaseModel):
    """Initialization outcome."""

    order: List[str] = Field(description="Resolved initialization order")
    advisors: List[AdvisorStatusView] = Field(description="Status of every live advisor")


class ConsultRequest(BaseModel):
    """Request to consult the team."""

    query: str = Field(min_length=1, description="Free-text question for the team")
    advisors: Optional[List[str]] = Field(
        default=None, description="Explicit advisors to consult instead of keyword routing"
    )
    priority: ConsultationPriority = Field(default=ConsultationPriority.MEDIUM)


class TeamStatusResponse(BaseModel):
    """Status of the whole team."""

    advisors: List[AdvisorStatusView]
    summary: Dict[str, Any]


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/initialize", response_model=InitializeResponse)
def initialize_team(
    request: InitializeRequest,
    orchestrator: AdvisorOrchestrator = Depends(get_orchestrator),
):
    """Initialize advisors in dependency order."""
    _log = "[api=initialize] "
    logger.info(f"{_log}Initializing | requested={request.advisors}")

    try:
        order = orchestrator.initialize_agents(request.advisors)
    except CircularDependencyError as e:
        logger.warning(f"{_log}{e}")
        raise HTTPException(status_code=409, detail=str(e))
    except ProjectConfigError as e:
        logger.error(f"{_log}{e}")
        raise HTTPException(status_code=422, detail=str(e))

    return InitializeResponse(order=order, advisors=orchestrator.get_agent_status())


@router.post("/consult", response_model=ConsensusResultV1)
def consult_team(
    request: ConsultRequest,
    orchestrator: AdvisorOrchestrator = Depends(get_orchestrator),
):
    """Route a query to the relevant advisors and return their consensus."""
    logger.info(f"[api=consult] Consulting | query={request.query[:50]!r}")
    return orchestrator.consult_team(
        request.query,
        explicit_agents=request.advisors,
        priority=request.priority,
    )


@router.get("/status", response_model=TeamStatusResponse)
def team_status(orchestrator: AdvisorOrchestrator = Depends(get_orchestrator)):
    """Status of every live advisor plus team summary."""
    return TeamStatusResponse(
        advisors=orchestrator.get_agent_status(),
        summary=orchestrator.team_summary(),
    )


@router.get("/status/{name}", response_model=AdvisorStatusView)
def advisor_status(name: str, orchestrator: AdvisorOrchestrator = Depends(get_orchestrator)):
    """Status of one advisor. Accepts names with or without the leading '@'."""
    if not name.startswith("@"):
        name = f"@{name}"
    view = orchestrator.get_agent_status(name)
    if view is None:
        raise HTTPException(status_code=404, detail=f"Advisor {name} not found")
    return view


@router.post("/shutdown")
def shutdown_team(orchestrator: AdvisorOrchestrator = Depends(get_orchestrator)):
    """Take every advisor offline."""
    orchestrator.shutdown()
    return {"status": "offline"}
