"""
Consensus synthesis.

Dispatches one query to the selected advisors on a thread pool, collects
their responses and aggregates them into a ConsensusResultV1:

1. Each worker moves its advisor ready -> busy, calls the response
   backend, and moves it busy -> ready with the reported confidence.
2. A backend failure marks that advisor error and excludes it.
3. Each call has its own timeout, counted from its dispatch. Advisors
   that overrun it are marked error. Their late completion is rejected by
   the lifecycle state machine and discarded.
4. An advisor taken offline mid-call (shutdown) is dropped without
   aborting the consultation.
5. Records are kept in dispatch order; consensus level is the mean of
   their confidences.
"""

import logging
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from conductor.backends.base import ResponseBackend
from conductor.orchestration.config import OrchestratorConfig, DEFAULT_CONFIG
from conductor.orchestration.errors import (
    BackendResponseError,
    ConsultationCancelledError,
    InvalidStateTransitionError,
    UnknownAdvisorError,
)
from conductor.orchestration.lifecycle import LifecycleManager, clamp_confidence
from conductor.orchestration.schemas import ConsultationRequest
from conductor.shared.contracts import ConsensusResultV1, RecommendationRecord


logger = logging.getLogger(__name__)


CancelCheck = Callable[[], bool]

TASK_PREVIEW_LENGTH = 30


def describe_task(query: str) -> str:
    """Current-task label shown while an advisor works on ``query``."""
    return f"Analyzing: {query[:TASK_PREVIEW_LENGTH]}..."


def build_consensus(
    request: ConsultationRequest,
    records: Sequence[RecommendationRecord],
    failed_advisors: Sequence[str] = (),
) -> ConsensusResultV1:
    """
    Aggregate recommendation records into a consensus result.

    Args:
        request: The originating consultation
        records: Participant records in dispatch order
        failed_advisors: Advisors excluded because of failures

    Returns:
        ConsensusResultV1. With no records, consensus_level is None and
        the result is empty.
    """
    if not records:
        return ConsensusResultV1(
            consultation_id=request.id,
            query=request.query,
            consensus_level=None,
            participant_count=0,
            average_confidence_percent=None,
            recommendations=[],
            failed_advisors=list(failed_advisors),
        )

    level = clamp_confidence(sum(record.confidence for record in records) / len(records))
    return ConsensusResultV1(
        consultation_id=request.id,
        query=request.query,
        consensus_level=level,
        participant_count=len(records),
        average_confidence_percent=round(level * 100),
        recommendations=list(records),
        failed_advisors=list(failed_advisors),
    )


class ConsensusSynthesizer:
    """Runs advisor consultations and builds their consensus."""

    def __init__(
        self,
        lifecycle: LifecycleManager,
        backend: ResponseBackend,
        config: Optional[OrchestratorConfig] = None,
    ):
        self.lifecycle = lifecycle
        self.backend = backend
        self.config = config or DEFAULT_CONFIG

    def _consult_one(self, name: str, request: ConsultationRequest) -> Optional[RecommendationRecord]:
        """
        One advisor's part of a consultation. Runs on a worker thread.

        Returns:
            The advisor's record, or None if the advisor had to be skipped

        Raises:
            BackendResponseError: If the backend failed (the advisor is
                already marked error)
        """
        _log = f"[consultation={request.id}] [advisor={name}] "

        instance = self.lifecycle.get(name)
        if instance is None:
            logger.warning(f"{_log}Skipping advisor that is no longer live")
            return None
        role = instance.definition.role

        try:
            context, confidence = self.lifecycle.begin_task(name, describe_task(request.query))
        except (UnknownAdvisorError, InvalidStateTransitionError) as e:
            logger.warning(f"{_log}Skipping advisor: {e}")
            return None

        context["confidence"] = confidence

        try:
            response = self.backend.respond(context, request.query)
        except BackendResponseError as e:
            self.lifecycle.fail(name, e.message)
            raise
        except Exception as e:
            self.lifecycle.fail(name, str(e))
            raise BackendResponseError(name, str(e)) from e

        try:
            stored = self.lifecycle.complete_task(name, response.confidence)
        except UnknownAdvisorError as e:
            logger.warning(f"{_log}Discarding response from advisor taken offline: {e}")
            return None
        except InvalidStateTransitionError as e:
            logger.warning(f"{_log}Discarding late response: {e}")
            return None

        logger.debug(f"{_log}Response recorded | confidence={stored:.2f}")

        return RecommendationRecord(
            advisor=name,
            role=role,
            confidence=stored,
            recommendation=response.recommendation,
            reasoning=response.reasoning,
            priority=response.priority,
            implementation_steps=list(response.implementation_steps),
        )

    def gather(
        self,
        request: ConsultationRequest,
        advisors: Sequence[str],
        cancel_check: Optional[CancelCheck] = None,
    ) -> Tuple[List[RecommendationRecord], List[str]]:
        """
        Consult ``advisors`` in parallel and collect their records.

        At most ``max_parallel_advisors`` calls are in flight at once. Each
        call gets its own ``advisor_timeout_seconds`` budget starting when it
        is dispatched, so advisors waiting for a free slot lose no time. A
        call that overruns its budget stops counting against the limit and
        the next advisor is dispatched in its place.

        Args:
            request: The consultation being run
            advisors: Advisor names in dispatch order
            cancel_check: Callable returning True when the caller has
                abandoned the consultation

        Returns:
            Tuple of (records in dispatch order, failed advisor names)

        Raises:
            ConsultationCancelledError: If cancel_check reports cancellation
                before dispatch or after the join
        """
        _log = f"[consultation={request.id}] [synthesizer] "

        if cancel_check is not None and cancel_check():
            raise ConsultationCancelledError(request.id)

        if not advisors:
            return [], []

        timeout = self.config.advisor_timeout_seconds
        max_parallel = max(1, min(self.config.max_parallel_advisors, len(advisors)))
        logger.info(
            f"{_log}Dispatching | advisors={list(advisors)}, "
            f"parallel={max_parallel}, timeout={timeout}s"
        )

        queue = list(dict.fromkeys(advisors))
        futures: Dict[str, Future] = {}
        deadlines: Dict[str, float] = {}
        in_flight: Set[str] = set()
        timed_out: Set[str] = set()

        # One thread per advisor: a call that overran its deadline keeps its
        # thread, so the next dispatch always starts immediately.
        executor = ThreadPoolExecutor(max_workers=len(queue), thread_name_prefix="advisor")
        try:
            while queue or in_flight:
                while queue and len(in_flight) < max_parallel:
                    name = queue.pop(0)
                    futures[name] = executor.submit(self._consult_one, name, request)
                    deadlines[name] = time.monotonic() + timeout
                    in_flight.add(name)

                next_deadline = min(deadlines[name] for name in in_flight)
                wait(
                    [futures[name] for name in in_flight],
                    timeout=max(0.0, next_deadline - time.monotonic()),
                    return_when=FIRST_COMPLETED,
                )

                now = time.monotonic()
                for name in list(in_flight):
                    if futures[name].done():
                        in_flight.discard(name)
                    elif now >= deadlines[name]:
                        in_flight.discard(name)
                        timed_out.add(name)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        if cancel_check is not None and cancel_check():
            logger.info(f"{_log}Cancelled after join, discarding partial results")
            raise ConsultationCancelledError(request.id)

        records: List[RecommendationRecord] = []
        failed: List[str] = []

        for name, future in futures.items():
            if name in timed_out:
                self.lifecycle.fail(name, f"Timed out after {timeout}s")
                failed.append(name)
                continue

            try:
                record = future.result()
            except BackendResponseError as e:
                logger.warning(f"{_log}Excluding {name}: {e}")
                failed.append(name)
                continue
            except Exception as e:
                logger.exception(f"{_log}Excluding {name} after unexpected error: {e}")
                self.lifecycle.fail(name, str(e))
                failed.append(name)
                continue

            if record is not None:
                records.append(record)

        logger.info(
            f"{_log}Gathered | participants={[r.advisor for r in records]}, failed={failed}"
        )
        return records, failed

    def synthesize(
        self,
        request: ConsultationRequest,
        advisors: Sequence[str],
        cancel_check: Optional[CancelCheck] = None,
    ) -> ConsensusResultV1:
        """Consult ``advisors`` and aggregate their responses."""
        records, failed = self.gather(request, advisors, cancel_check)
        return build_consensus(request, records, failed)
