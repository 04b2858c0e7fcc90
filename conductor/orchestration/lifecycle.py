"""
Advisor lifecycle management.

Owns the live set of advisor instances and enforces the lifecycle state
machine:

    [initializing] -> ready        construction and context generation succeeded
    ready          -> busy         consultation task assigned
    busy           -> ready        task completed
    any            -> error        unrecoverable fault
    any            -> offline      shutdown (terminal)

Every mutation of an instance happens while holding that instance's lock,
so a worker thread that owns an advisor during a consultation is the only
writer of its state.
"""

import logging
import random
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from conductor.orchestration.config import OrchestratorConfig, DEFAULT_CONFIG
from conductor.orchestration.errors import InvalidStateTransitionError, UnknownAdvisorError
from conductor.orchestration.events import OrchestratorEventListener
from conductor.orchestration.schemas import AdvisorInstance, AdvisorStatus, AdvisorStatusView
from conductor.registry.schemas import AdvisorDefinition


logger = logging.getLogger(__name__)


ALLOWED_TRANSITIONS: Dict[AdvisorStatus, frozenset] = {
    AdvisorStatus.INITIALIZING: frozenset(
        {AdvisorStatus.READY, AdvisorStatus.ERROR, AdvisorStatus.OFFLINE}
    ),
    AdvisorStatus.READY: frozenset(
        {AdvisorStatus.BUSY, AdvisorStatus.ERROR, AdvisorStatus.OFFLINE}
    ),
    AdvisorStatus.BUSY: frozenset(
        {AdvisorStatus.READY, AdvisorStatus.ERROR, AdvisorStatus.OFFLINE}
    ),
    AdvisorStatus.ERROR: frozenset({AdvisorStatus.ERROR, AdvisorStatus.OFFLINE}),
    AdvisorStatus.OFFLINE: frozenset(),
}


def clamp_confidence(value: float) -> float:
    """Clamp a reported confidence into [0.0, 1.0]."""
    return max(0.0, min(1.0, float(value)))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LifecycleManager:
    """Tracks advisor instances through their lifecycle."""

    def __init__(
        self,
        config: Optional[OrchestratorConfig] = None,
        listener: Optional[OrchestratorEventListener] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.listener = listener or OrchestratorEventListener()
        self._instances: Dict[str, AdvisorInstance] = {}
        self._lock = threading.Lock()
        self._rng = (
            random.Random(self.config.confidence_seed)
            if self.config.confidence_seed is not None
            else None
        )

    # ------------------------------------------------------------------
    # Live set
    # ------------------------------------------------------------------

    def get(self, name: str) -> Optional[AdvisorInstance]:
        with self._lock:
            return self._instances.get(name)

    def names(self) -> List[str]:
        with self._lock:
            return list(self._instances)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._instances

    def __len__(self) -> int:
        with self._lock:
            return len(self._instances)

    def _require(self, name: str) -> AdvisorInstance:
        instance = self.get(name)
        if instance is None:
            raise UnknownAdvisorError(name)
        return instance

    def status_of(self, name: str) -> Optional[AdvisorStatus]:
        instance = self.get(name)
        return instance.status if instance else None

    def ready_names(self) -> List[str]:
        return [name for name in self.names() if self.status_of(name) == AdvisorStatus.READY]

    def create(self, definition: AdvisorDefinition) -> AdvisorInstance:
        """
        Add a new instance in the initializing state.

        A live instance with the same name is taken offline and replaced.
        """
        previous = self.get(definition.name)
        if previous is not None:
            logger.info(f"[advisor={definition.name}] [lifecycle] Replacing live instance")
            self._try_transition(previous, AdvisorStatus.OFFLINE)

        instance = AdvisorInstance(definition=definition)
        with self._lock:
            self._instances[definition.name] = instance
        return instance

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _transition(
        self,
        instance: AdvisorInstance,
        target: AdvisorStatus,
        mutate: Optional[Callable[[AdvisorInstance], None]] = None,
    ) -> AdvisorStatus:
        """
        Move ``instance`` to ``target`` under its lock.

        Returns:
            The state the instance was in before the transition

        Raises:
            InvalidStateTransitionError: If the transition is not allowed
        """
        with instance.lock:
            previous = instance.status
            if target not in ALLOWED_TRANSITIONS[previous]:
                raise InvalidStateTransitionError(instance.name, previous.value, target.value)
            instance.status = target
            instance.last_activity = _utcnow()
            if mutate is not None:
                mutate(instance)

        self.listener.on_advisor_transition(instance, previous, target)
        return previous

    def _try_transition(self, instance: AdvisorInstance, target: AdvisorStatus) -> bool:
        try:
            self._transition(instance, target)
            return True
        except InvalidStateTransitionError as e:
            logger.warning(f"[advisor={instance.name}] [lifecycle] {e}")
            return False

    def _initial_confidence(self) -> float:
        if self._rng is not None:
            low, high = self.config.confidence_range
            return clamp_confidence(self._rng.uniform(low, high))
        return clamp_confidence(self.config.initial_confidence)

    def mark_ready(self, name: str, context: Optional[Dict[str, Any]] = None) -> AdvisorInstance:
        """
        Initializing -> ready, attaching the generated context.

        The first time an instance becomes ready its confidence is set from
        the initial confidence policy.
        """
        instance = self._require(name)
        first_confidence = None if instance.has_been_ready else self._initial_confidence()

        def apply(target: AdvisorInstance) -> None:
            if context is not None:
                target.context = dict(context)
            if not target.has_been_ready:
                target.confidence = first_confidence
                target.has_been_ready = True
            target.error = None

        self._transition(instance, AdvisorStatus.READY, apply)
        self.listener.on_advisor_initialized(instance)
        return instance

    def begin_task(self, name: str, task: str) -> Tuple[Dict[str, Any], float]:
        """
        Ready -> busy for one consultation task.

        Returns:
            A copy of the advisor's context and its confidence at dispatch time

        Raises:
            UnknownAdvisorError: If the advisor is not live
            InvalidStateTransitionError: If the advisor is not ready
        """
        instance = self._require(name)

        def apply(target: AdvisorInstance) -> None:
            target.current_task = task

        self._transition(instance, AdvisorStatus.BUSY, apply)
        with instance.lock:
            return dict(instance.context), instance.confidence

    def complete_task(self, name: str, confidence: float) -> float:
        """
        Busy -> ready after a successful response.

        Returns:
            The clamped confidence now stored on the instance
        """
        instance = self._require(name)
        clamped = clamp_confidence(confidence)

        def apply(target: AdvisorInstance) -> None:
            target.confidence = clamped
            target.current_task = None

        self._transition(instance, AdvisorStatus.READY, apply)
        return clamped

    def fail(self, name: str, reason: str) -> bool:
        """
        Any state -> error. Returns False if the advisor was already offline or unknown.
        """
        instance = self.get(name)
        if instance is None:
            logger.warning(f"[advisor={name}] [lifecycle] Cannot mark unknown advisor as error")
            return False

        def apply(target: AdvisorInstance) -> None:
            target.error = reason
            target.current_task = None

        try:
            self._transition(instance, AdvisorStatus.ERROR, apply)
        except InvalidStateTransitionError as e:
            logger.warning(f"[advisor={name}] [lifecycle] {e}")
            return False

        logger.warning(f"[advisor={name}] [lifecycle] Marked as error: {reason}")
        return True

    def shutdown_all(self) -> List[str]:
        """
        Take every live advisor offline and clear the live set.

        Returns:
            Names of the advisors that were taken offline
        """
        with self._lock:
            instances = list(self._instances.values())
            self._instances.clear()

        for instance in instances:
            self._try_transition(instance, AdvisorStatus.OFFLINE)
            logger.info(f"[advisor={instance.name}] [lifecycle] Offline")

        return [instance.name for instance in instances]

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def snapshot(self, name: str) -> Optional[AdvisorStatusView]:
        instance = self.get(name)
        if instance is None:
            return None
        with instance.lock:
            return AdvisorStatusView(
                name=instance.name,
                role=instance.definition.role,
                status=instance.status,
                confidence=instance.confidence,
                current_task=instance.current_task,
                last_activity=instance.last_activity,
                error=instance.error,
            )

    def snapshots(self) -> List[AdvisorStatusView]:
        return [view for view in (self.snapshot(name) for name in self.names()) if view]
