"""
Advisor orchestrator.

The facade over the orchestration core. One orchestrator owns one session:
the live advisor set (through its LifecycleManager) and the map of
consultations currently in flight.

Usage:
    orchestrator = AdvisorOrchestrator("/path/to/project")
    orchestrator.initialize_agents()
    result = orchestrator.consult_team("review my authentication flow")
    orchestrator.shutdown()
"""

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from conductor.backends.base import ResponseBackend
from conductor.backends.mock import MockResponseBackend
from conductor.graph.build import create_consultation_graph
from conductor.orchestration.config import OrchestratorConfig, DEFAULT_CONFIG
from conductor.orchestration.errors import InvalidStateTransitionError
from conductor.orchestration.events import LoggingEventListener, OrchestratorEventListener
from conductor.orchestration.lifecycle import LifecycleManager
from conductor.orchestration.resolver import DependencyResolver
from conductor.orchestration.router import ConsultationRouter
from conductor.orchestration.schemas import (
    AdvisorStatus,
    AdvisorStatusView,
    ConsultationPriority,
    ConsultationRequest,
)
from conductor.orchestration.synthesizer import CancelCheck, ConsensusSynthesizer
from conductor.project.config_source import ProjectConfig, ProjectConfigSource
from conductor.project.context import build_instance_context
from conductor.registry.registry import AdvisorRegistry
from conductor.shared.contracts import ConsensusResultV1


logger = logging.getLogger(__name__)


class AdvisorOrchestrator:
    """
    Coordinates the advisor team for one project.

    Args:
        project_root: Root directory of the project being advised
        registry: Advisor definitions; the built-in roster when omitted
        backend: Response backend; the mock backend when omitted
        config: Orchestrator configuration
        config_source: Loader for the project's configuration files
        listener: Receives lifecycle and consultation events
    """

    def __init__(
        self,
        project_root: Union[str, Path] = ".",
        registry: Optional[AdvisorRegistry] = None,
        backend: Optional[ResponseBackend] = None,
        config: Optional[OrchestratorConfig] = None,
        config_source: Optional[ProjectConfigSource] = None,
        listener: Optional[OrchestratorEventListener] = None,
    ):
        self.project_root = Path(project_root)
        self.config = config or DEFAULT_CONFIG
        self.registry = registry or AdvisorRegistry()
        self.backend = backend or MockResponseBackend()
        self.config_source = config_source or ProjectConfigSource(self.config.config_dir_name)
        self.listener = listener or LoggingEventListener()

        self.resolver = DependencyResolver(self.registry)
        self.lifecycle = LifecycleManager(self.config, self.listener)
        self.router = ConsultationRouter(self.lifecycle, config=self.config)
        self.synthesizer = ConsensusSynthesizer(self.lifecycle, self.backend, self.config)

        self.project_config: Optional[ProjectConfig] = None
        self._active: Dict[str, ConsultationRequest] = {}
        self._active_lock = threading.Lock()
        self._graph = create_consultation_graph(
            self.router,
            self.synthesizer,
            on_dispatch=self._on_dispatch,
        )

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def _load_project_config(self) -> ProjectConfig:
        if self.project_config is None:
            self.project_config = self.config_source.load(self.project_root)
        return self.project_config

    def initialize_agents(self, names: Optional[Sequence[str]] = None) -> List[str]:
        """
        Instantiate advisors in dependency order and bring them to ready.

        With no names, the project's enabled advisors are used, or the
        whole registry if the project enables none.

        Args:
            names: Advisors to initialize; unknown names are dropped

        Returns:
            The resolved initialization order

        Raises:
            CircularDependencyError: If the requested subset has a cycle.
                Raised before any instance is created.
            ProjectConfigError: If a project configuration file is unreadable
        """
        project_config = self._load_project_config()
        requested = list(names) if names else project_config.enabled_advisors

        order = self.resolver.resolve(requested)
        logger.info(f"[orchestrator] Initializing advisors | order={order}")

        for name in order:
            definition = self.registry.get(name)
            self.lifecycle.create(definition)
            try:
                context = build_instance_context(definition, project_config)
            except Exception as e:
                logger.exception(f"[advisor={name}] [lifecycle] Context generation failed: {e}")
                self.lifecycle.fail(name, f"Context generation failed: {e}")
                continue

            try:
                self.lifecycle.mark_ready(name, context)
            except InvalidStateTransitionError as e:
                logger.warning(f"[advisor={name}] [lifecycle] {e}")

        ready = self.lifecycle.ready_names()
        logger.info(f"[orchestrator] Team ready | ready={len(ready)}/{len(order)}")
        return order

    # ------------------------------------------------------------------
    # Consultation
    # ------------------------------------------------------------------

    def _on_dispatch(self, request: ConsultationRequest) -> None:
        with self._active_lock:
            self._active[request.id] = request
        self.listener.on_consultation_started(request)

    def consult_team(
        self,
        query: str,
        explicit_agents: Optional[Sequence[str]] = None,
        priority: Union[str, ConsultationPriority] = ConsultationPriority.MEDIUM,
        cancel_check: Optional[CancelCheck] = None,
    ) -> ConsensusResultV1:
        """
        Route a query to the relevant advisors and synthesize their answers.

        Args:
            query: Free-text developer query
            explicit_agents: Advisors to consult instead of keyword routing
            priority: Consultation priority
            cancel_check: Callable returning True once the caller no longer
                wants the result

        Returns:
            ConsensusResultV1; empty when no advisor participated

        Raises:
            ConsultationCancelledError: If cancel_check reported cancellation
        """
        request = ConsultationRequest(
            query=query,
            priority=ConsultationPriority(priority),
        )

        try:
            final_state = self._graph.invoke(
                {
                    "request": request,
                    "explicit_advisors": list(explicit_agents) if explicit_agents else None,
                    "cancel_check": cancel_check,
                    "selected_advisors": [],
                    "records": [],
                    "failed_advisors": [],
                    "result": None,
                    "errors": [],
                    "messages": [],
                }
            )
        finally:
            with self._active_lock:
                self._active.pop(request.id, None)

        result: ConsensusResultV1 = final_state["result"]
        self.listener.on_consultation_completed(final_state["request"], result)
        return result

    @property
    def active_consultations(self) -> Dict[str, ConsultationRequest]:
        """Consultations currently in flight, by id."""
        with self._active_lock:
            return dict(self._active)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_agent_status(
        self, name: Optional[str] = None
    ) -> Union[Optional[AdvisorStatusView], List[AdvisorStatusView]]:
        """
        Status of one advisor, or of all advisors when ``name`` is omitted.

        Returns:
            A snapshot, None for an unknown name, or a list of snapshots
        """
        if name is None:
            return self.lifecycle.snapshots()
        return self.lifecycle.snapshot(name)

    def team_summary(self) -> Dict[str, object]:
        """Ready count, total count and average confidence of the ready advisors."""
        views = self.lifecycle.snapshots()
        ready = [view for view in views if view.status == AdvisorStatus.READY]
        average = sum(view.confidence for view in ready) / len(ready) if ready else None
        return {
            "ready": len(ready),
            "total": len(views),
            "average_confidence": average,
            "average_confidence_percent": round(average * 100) if average is not None else None,
        }

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def shutdown(self) -> None:
        """Take every advisor offline and clear the session."""
        names = self.lifecycle.shutdown_all()
        with self._active_lock:
            self._active.clear()
        logger.info(f"[orchestrator] Shutdown complete | advisors={names}")
