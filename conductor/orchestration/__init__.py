"""
Orchestration core: dependency resolution, lifecycle, routing and
consensus synthesis.

The AdvisorOrchestrator facade lives in conductor.orchestration.orchestrator
and is re-exported from the top-level package.
"""

from conductor.orchestration.config import OrchestratorConfig, DEFAULT_CONFIG, get_config
from conductor.orchestration.errors import (
    ConductorError,
    CircularDependencyError,
    UnknownAdvisorError,
    InvalidStateTransitionError,
    BackendResponseError,
    ConsultationCancelledError,
    ProjectConfigError,
)
from conductor.orchestration.events import (
    OrchestratorEventListener,
    LoggingEventListener,
    RecordingEventListener,
)
from conductor.orchestration.lifecycle import LifecycleManager, clamp_confidence
from conductor.orchestration.resolver import DependencyResolver
from conductor.orchestration.router import ConsultationRouter, DEFAULT_KEYWORD_TABLE
from conductor.orchestration.schemas import (
    AdvisorInstance,
    AdvisorStatus,
    AdvisorStatusView,
    ConsultationPriority,
    ConsultationRequest,
)
from conductor.orchestration.synthesizer import ConsensusSynthesizer, build_consensus

__all__ = [
    "OrchestratorConfig",
    "DEFAULT_CONFIG",
    "get_config",
    "ConductorError",
    "CircularDependencyError",
    "UnknownAdvisorError",
    "InvalidStateTransitionError",
    "BackendResponseError",
    "ConsultationCancelledError",
    "ProjectConfigError",
    "OrchestratorEventListener",
    "LoggingEventListener",
    "RecordingEventListener",
    "LifecycleManager",
    "clamp_confidence",
    "DependencyResolver",
    "ConsultationRouter",
    "DEFAULT_KEYWORD_TABLE",
    "AdvisorInstance",
    "AdvisorStatus",
    "AdvisorStatusView",
    "ConsultationPriority",
    "ConsultationRequest",
    "ConsensusSynthesizer",
    "build_consensus",
]
