"""
Typed notifications from the orchestrator.

Listeners receive explicit callbacks for advisor transitions and
consultation boundaries. The base class ignores every event so listeners
only override what they need.
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from conductor.orchestration.schemas import AdvisorStatus
from conductor.shared.logging.config import log_state_transition

if TYPE_CHECKING:
    from conductor.orchestration.schemas import AdvisorInstance, ConsultationRequest
    from conductor.shared.contracts.consensus_output import ConsensusResultV1


logger = logging.getLogger(__name__)


class OrchestratorEventListener:
    """Callback interface between the orchestrator and its observers."""

    def on_advisor_transition(
        self,
        instance: "AdvisorInstance",
        previous: AdvisorStatus,
        current: AdvisorStatus,
    ) -> None:
        pass

    def on_advisor_initialized(self, instance: "AdvisorInstance") -> None:
        pass

    def on_consultation_started(self, request: "ConsultationRequest") -> None:
        pass

    def on_consultation_completed(
        self,
        request: "ConsultationRequest",
        result: "ConsensusResultV1",
    ) -> None:
        pass


class LoggingEventListener(OrchestratorEventListener):
    """Default listener: writes every event to the log."""

    def __init__(self, logger_: Optional[logging.Logger] = None):
        self.logger = logger_ or logger

    def on_advisor_transition(self, instance, previous, current) -> None:
        log_state_transition(
            "advisor_transition",
            {
                "advisor": instance.name,
                "status": current.value,
                "confidence": round(instance.confidence, 4),
                "current_task": instance.current_task,
            },
            extra={"previous": previous.value},
            logger=self.logger,
        )

    def on_advisor_initialized(self, instance) -> None:
        self.logger.info(
            f"[advisor={instance.name}] [lifecycle] Initialized | "
            f"role={instance.definition.role}, confidence={instance.confidence:.2f}"
        )

    def on_consultation_started(self, request) -> None:
        self.logger.info(
            f"[consultation={request.id}] Processing consultation | "
            f"advisors={request.required_advisors}, priority={request.priority.value}"
        )

    def on_consultation_completed(self, request, result) -> None:
        level = "n/a" if result.consensus_level is None else f"{result.consensus_level:.2f}"
        self.logger.info(
            f"[consultation={request.id}] Consultation complete | "
            f"participants={result.participant_count}, consensus={level}, "
            f"failed={result.failed_advisors}"
        )


class RecordingEventListener(OrchestratorEventListener):
    """Listener that keeps every event in memory, in arrival order."""

    def __init__(self):
        self.events: List[tuple] = []

    def on_advisor_transition(self, instance, previous, current) -> None:
        self.events.append(("transition", instance.name, previous, current))

    def on_advisor_initialized(self, instance) -> None:
        self.events.append(("initialized", instance.name))

    def on_consultation_started(self, request) -> None:
        self.events.append(("started", request.id))

    def on_consultation_completed(self, request, result) -> None:
        self.events.append(("completed", request.id, result.participant_count))

    def transitions_for(self, name: str) -> List[AdvisorStatus]:
        """Target states of every transition ``name`` went through."""
        return [event[3] for event in self.events if event[0] == "transition" and event[1] == name]
