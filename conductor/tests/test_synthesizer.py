"""
Tests for consensus synthesis.

Covers the mean-confidence aggregate, per-advisor failure isolation,
timeouts, cancellation and the zero-participant outcome.
"""

import threading
import time

import pytest
from pydantic import ValidationError

from conductor.backends import MockResponseBackend, ResponseBackend
from conductor.orchestration.config import get_config
from conductor.orchestration.errors import ConsultationCancelledError
from conductor.orchestration.lifecycle import LifecycleManager
from conductor.orchestration.schemas import AdvisorStatus, ConsultationRequest
from conductor.orchestration.synthesizer import ConsensusSynthesizer, build_consensus, describe_task
from conductor.registry import AdvisorRegistry
from conductor.shared.contracts import AdvisorResponseV1, RecommendationRecord


# ============================================================================
# Test Fixtures
# ============================================================================


def _make_lifecycle(names, **config_overrides):
    """Lifecycle with the given roster advisors ready, context mirroring the definition."""
    registry = AdvisorRegistry()
    lifecycle = LifecycleManager(get_config(**config_overrides))
    for name in names:
        definition = registry.get(name)
        lifecycle.create(definition)
        lifecycle.mark_ready(
            name,
            {
                "advisor": {
                    "name": name,
                    "role": definition.role,
                    "priority": definition.priority,
                    "expertise": list(definition.expertise),
                }
            },
        )
    return lifecycle


def _make_record(advisor, confidence):
    """Create a recommendation record for aggregation tests."""
    return RecommendationRecord(
        advisor=advisor,
        role="Role",
        confidence=confidence,
        recommendation="Do it",
        reasoning="Because",
        priority="medium",
    )


class _BlockingBackend(ResponseBackend):
    """Backend that blocks one advisor until released."""

    def __init__(self, blocked):
        self.blocked = blocked
        self.release = threading.Event()
        self.fallback = MockResponseBackend()

    def respond(self, context, query):
        if context["advisor"]["name"] == self.blocked:
            self.release.wait(5)
        return self.fallback.respond(context, query)


class _ExplodingBackend(ResponseBackend):
    """Backend that raises a plain exception for every advisor."""

    def respond(self, context, query):
        raise RuntimeError("connection reset")


class _SlowBackend(ResponseBackend):
    """Backend that takes a fixed time for every advisor."""

    def __init__(self, delay):
        self.delay = delay
        self.fallback = MockResponseBackend()

    def respond(self, context, query):
        time.sleep(self.delay)
        return self.fallback.respond(context, query)


class _FinishLastBackend(ResponseBackend):
    """Backend where one advisor answers only after every other advisor is ready again."""

    def __init__(self, lifecycle, last, others):
        self.lifecycle = lifecycle
        self.last = last
        self.others = others
        self.finished = []
        self.fallback = MockResponseBackend()

    def _others_done(self):
        return len(self.finished) == len(self.others) and all(
            self.lifecycle.status_of(name) == AdvisorStatus.READY for name in self.others
        )

    def respond(self, context, query):
        name = context["advisor"]["name"]
        if name == self.last:
            deadline = time.monotonic() + 5
            while not self._others_done() and time.monotonic() < deadline:
                time.sleep(0.01)
        self.finished.append(name)
        return self.fallback.respond(context, query)


class _ShutdownBackend(ResponseBackend):
    """Backend that shuts the whole team down while answering one advisor."""

    def __init__(self, lifecycle, trigger):
        self.lifecycle = lifecycle
        self.trigger = trigger
        self.fallback = MockResponseBackend()

    def respond(self, context, query):
        if context["advisor"]["name"] == self.trigger:
            self.lifecycle.shutdown_all()
        return self.fallback.respond(context, query)


class _CrashingSynthesizer(ConsensusSynthesizer):
    """Synthesizer whose worker raises an unexpected error for one advisor."""

    def __init__(self, lifecycle, backend, crashing):
        super().__init__(lifecycle, backend)
        self.crashing = crashing

    def _consult_one(self, name, request):
        if name == self.crashing:
            raise RuntimeError("worker crashed")
        return super()._consult_one(name, request)


class _FixedBackend(ResponseBackend):
    """Backend reporting a fixed confidence per advisor."""

    def __init__(self, confidences):
        self.confidences = confidences

    def respond(self, context, query):
        name = context["advisor"]["name"]
        return AdvisorResponseV1(
            recommendation=f"{name} says hi",
            reasoning="fixed",
            confidence=self.confidences[name],
        )


# ============================================================================
# TestBuildConsensus
# ============================================================================


class TestBuildConsensus:
    """Tests for the consensus aggregate."""

    def test_mean_confidence(self):
        """Consensus level is the arithmetic mean of participant confidences."""
        request = ConsultationRequest(query="q")
        result = build_consensus(
            request, [_make_record("@a", 0.9), _make_record("@b", 0.6), _make_record("@c", 0.3)]
        )

        assert result.consensus_level == pytest.approx(0.6)
        assert result.average_confidence_percent == 60
        assert result.participant_count == 3
        assert result.consultation_id == request.id

    def test_zero_participants_is_explicit_empty(self):
        """No records yields no consensus level rather than NaN."""
        result = build_consensus(ConsultationRequest(query="q"), [], ["@a"])

        assert result.is_empty
        assert result.consensus_level is None
        assert result.average_confidence_percent is None
        assert result.failed_advisors == ["@a"]

    def test_result_is_frozen(self):
        """Consensus results cannot be modified after synthesis."""
        result = build_consensus(ConsultationRequest(query="q"), [_make_record("@a", 0.5)])
        with pytest.raises(ValidationError):
            result.participant_count = 5


# ============================================================================
# TestSynthesize
# ============================================================================


class TestSynthesize:
    """Tests for running a consultation through the synthesizer."""

    def test_all_advisors_respond(self):
        """Every selected advisor contributes one record, in dispatch order."""
        names = ["@security", "@backend", "@reviewer"]
        lifecycle = _make_lifecycle(names)
        synthesizer = ConsensusSynthesizer(lifecycle, MockResponseBackend())

        result = synthesizer.synthesize(ConsultationRequest(query="secure the api"), names)

        assert [r.advisor for r in result.recommendations] == names
        assert result.participant_count == 3
        assert 0.0 <= result.consensus_level <= 1.0
        for name in names:
            assert lifecycle.status_of(name) == AdvisorStatus.READY

    def test_mock_response_shape(self):
        """The mock backend's templated fields flow into the record."""
        lifecycle = _make_lifecycle(["@backend"])
        synthesizer = ConsensusSynthesizer(lifecycle, MockResponseBackend())

        result = synthesizer.synthesize(ConsultationRequest(query="scale it"), ["@backend"])
        record = result.recommendations[0]

        assert record.role == "Backend Engineer"
        assert record.recommendation == "Backend Engineer recommendation for: scale it"
        assert record.priority == "high"
        assert len(record.implementation_steps) == 3
        assert record.confidence == pytest.approx(0.9)

    def test_one_failure_is_isolated(self):
        """A failing advisor is excluded and marked error; the rest still count."""
        names = ["@pm", "@backend", "@reviewer"]
        lifecycle = _make_lifecycle(names)
        synthesizer = ConsensusSynthesizer(lifecycle, MockResponseBackend(failing={"@backend"}))

        result = synthesizer.synthesize(ConsultationRequest(query="anything"), names)

        assert result.participant_count == 2
        assert [r.advisor for r in result.recommendations] == ["@pm", "@reviewer"]
        assert result.failed_advisors == ["@backend"]
        assert lifecycle.status_of("@backend") == AdvisorStatus.ERROR

    def test_plain_exceptions_are_wrapped(self):
        """Any backend exception counts as that advisor failing."""
        lifecycle = _make_lifecycle(["@pm"])
        synthesizer = ConsensusSynthesizer(lifecycle, _ExplodingBackend())

        result = synthesizer.synthesize(ConsultationRequest(query="q"), ["@pm"])

        assert result.is_empty
        assert result.failed_advisors == ["@pm"]
        assert lifecycle.snapshot("@pm").error == "connection reset"

    def test_reported_confidence_is_clamped(self):
        """Out-of-range confidences are clamped before aggregation."""
        lifecycle = _make_lifecycle(["@pm", "@qa"])
        synthesizer = ConsensusSynthesizer(lifecycle, _FixedBackend({"@pm": 1.5, "@qa": -1.0}))

        result = synthesizer.synthesize(ConsultationRequest(query="q"), ["@pm", "@qa"])

        assert [r.confidence for r in result.recommendations] == [1.0, 0.0]
        assert result.consensus_level == pytest.approx(0.5)
        assert lifecycle.snapshot("@pm").confidence == 1.0

    def test_busy_advisor_is_skipped(self):
        """An advisor that is not ready is excluded without being marked failed."""
        lifecycle = _make_lifecycle(["@pm", "@qa"])
        lifecycle.begin_task("@qa", "another consultation")
        synthesizer = ConsensusSynthesizer(lifecycle, MockResponseBackend())

        result = synthesizer.synthesize(ConsultationRequest(query="q"), ["@pm", "@qa"])

        assert [r.advisor for r in result.recommendations] == ["@pm"]
        assert result.failed_advisors == []
        assert lifecycle.status_of("@qa") == AdvisorStatus.BUSY

    def test_no_advisors(self):
        """An empty selection synthesizes an empty consensus."""
        synthesizer = ConsensusSynthesizer(_make_lifecycle([]), MockResponseBackend())
        result = synthesizer.synthesize(ConsultationRequest(query="q"), [])
        assert result.is_empty

    def test_timeout_marks_error_and_discards_late_response(self):
        """Advisors that miss the deadline are marked error; their late answers are ignored."""
        lifecycle = _make_lifecycle(["@pm", "@backend"], advisor_timeout_seconds=0.2)
        backend = _BlockingBackend(blocked="@backend")
        synthesizer = ConsensusSynthesizer(lifecycle, backend, lifecycle.config)

        try:
            result = synthesizer.synthesize(ConsultationRequest(query="q"), ["@pm", "@backend"])
        finally:
            backend.release.set()

        assert [r.advisor for r in result.recommendations] == ["@pm"]
        assert result.failed_advisors == ["@backend"]
        assert lifecycle.status_of("@backend") == AdvisorStatus.ERROR
        assert "Timed out" in lifecycle.snapshot("@backend").error

    def test_records_follow_dispatch_order_not_completion_order(self):
        """The first advisor dispatched finishes last but is still listed first."""
        names = ["@security", "@backend", "@reviewer"]
        lifecycle = _make_lifecycle(names)
        backend = _FinishLastBackend(lifecycle, last="@security", others=["@backend", "@reviewer"])
        synthesizer = ConsensusSynthesizer(lifecycle, backend)

        result = synthesizer.synthesize(ConsultationRequest(query="secure the api"), names)

        assert backend.finished[-1] == "@security"
        assert [r.advisor for r in result.recommendations] == names

    def test_timeout_is_per_call_not_per_batch(self):
        """Queued advisors get their full budget once a slot frees up."""
        names = ["@pm", "@qa"]
        lifecycle = _make_lifecycle(names, max_parallel_advisors=1, advisor_timeout_seconds=0.5)
        synthesizer = ConsensusSynthesizer(lifecycle, _SlowBackend(0.3), lifecycle.config)

        result = synthesizer.synthesize(ConsultationRequest(query="q"), names)

        assert result.failed_advisors == []
        assert [r.advisor for r in result.recommendations] == names
        assert lifecycle.status_of("@qa") == AdvisorStatus.READY

    def test_overrun_call_frees_its_slot(self):
        """An advisor that overruns its deadline does not starve the advisors queued behind it."""
        names = ["@backend", "@pm"]
        lifecycle = _make_lifecycle(names, max_parallel_advisors=1, advisor_timeout_seconds=0.2)
        backend = _BlockingBackend(blocked="@backend")
        synthesizer = ConsensusSynthesizer(lifecycle, backend, lifecycle.config)

        try:
            result = synthesizer.synthesize(ConsultationRequest(query="q"), names)
        finally:
            backend.release.set()

        assert result.failed_advisors == ["@backend"]
        assert [r.advisor for r in result.recommendations] == ["@pm"]

    def test_shutdown_during_call_does_not_abort(self):
        """Advisors taken offline mid-consultation are dropped, not raised."""
        names = ["@pm", "@qa"]
        lifecycle = _make_lifecycle(names)
        synthesizer = ConsensusSynthesizer(lifecycle, _ShutdownBackend(lifecycle, trigger="@pm"))

        result = synthesizer.synthesize(ConsultationRequest(query="q"), names)

        assert "@pm" not in [r.advisor for r in result.recommendations]
        assert result.failed_advisors == []
        assert len(lifecycle) == 0

    def test_unexpected_worker_error_counts_as_failure(self):
        """A worker that raises something other than a backend error only fails its advisor."""
        names = ["@pm", "@qa"]
        lifecycle = _make_lifecycle(names)
        synthesizer = _CrashingSynthesizer(lifecycle, MockResponseBackend(), crashing="@qa")

        result = synthesizer.synthesize(ConsultationRequest(query="q"), names)

        assert [r.advisor for r in result.recommendations] == ["@pm"]
        assert result.failed_advisors == ["@qa"]
        assert lifecycle.status_of("@qa") == AdvisorStatus.ERROR
        assert lifecycle.snapshot("@qa").error == "worker crashed"

    def test_task_label(self):
        """Busy advisors show a preview of the query they are working on."""
        assert describe_task("x" * 40) == "Analyzing: " + "x" * 30 + "..."


# ============================================================================
# TestCancellation
# ============================================================================


class TestCancellation:
    """Tests for cancelled consultations."""

    def test_cancelled_before_dispatch(self):
        """A consultation cancelled up front runs no advisor."""
        lifecycle = _make_lifecycle(["@pm"])
        backend = MockResponseBackend()
        synthesizer = ConsensusSynthesizer(lifecycle, backend)

        with pytest.raises(ConsultationCancelledError):
            synthesizer.synthesize(ConsultationRequest(query="q"), ["@pm"], cancel_check=lambda: True)

        assert backend.calls == []
        assert lifecycle.status_of("@pm") == AdvisorStatus.READY

    def test_cancelled_after_join_discards_results(self):
        """Cancellation after the advisors ran produces no consensus."""
        lifecycle = _make_lifecycle(["@pm"])
        synthesizer = ConsensusSynthesizer(lifecycle, MockResponseBackend())
        checks = iter([False, True])

        with pytest.raises(ConsultationCancelledError):
            synthesizer.synthesize(
                ConsultationRequest(query="q"), ["@pm"], cancel_check=lambda: next(checks)
            )

        assert lifecycle.status_of("@pm") == AdvisorStatus.READY
