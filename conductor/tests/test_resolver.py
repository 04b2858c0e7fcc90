"""
Tests for dependency resolution.

Covers topological validity, priority ordering among independent
advisors, unknown-name filtering and cycle detection.
"""

import pytest

from conductor.orchestration.errors import CircularDependencyError
from conductor.orchestration.resolver import DependencyResolver
from conductor.registry import AdvisorDefinition, AdvisorRegistry


# ============================================================================
# Test Fixtures
# ============================================================================


def _make_definition(name, priority=5, dependencies=()):
    """Create a minimal advisor definition for testing."""
    return AdvisorDefinition(
        name=name,
        role=f"{name} role",
        priority=priority,
        dependencies=frozenset(dependencies),
    )


def _make_resolver(*definitions):
    """Resolver over the given definitions, or the default roster."""
    registry = AdvisorRegistry(definitions) if definitions else AdvisorRegistry()
    return DependencyResolver(registry)


def _assert_topological(order, registry):
    """Every in-subset dependency precedes its dependent."""
    position = {name: i for i, name in enumerate(order)}
    for name in order:
        for dep in registry.get(name).dependencies:
            if dep in position:
                assert position[dep] < position[name], f"{dep} must precede {name}"


# ============================================================================
# TestResolveOrder
# ============================================================================


class TestResolveOrder:
    """Tests for the resolved initialization order."""

    def test_frontend_design_pm_chain(self):
        """Requesting a dependency chain out of order yields the chain in order."""
        resolver = _make_resolver()
        assert resolver.resolve(["@frontend", "@design", "@pm"]) == ["@pm", "@design", "@frontend"]

    def test_full_roster_order(self):
        """The full roster resolves deterministically, priority first among free advisors."""
        resolver = _make_resolver()
        assert resolver.resolve() == [
            "@backend",
            "@pm",
            "@reviewer",
            "@security",
            "@design",
            "@frontend",
            "@qa",
            "@devops",
        ]

    def test_full_roster_is_topological(self):
        """Dependencies always come before dependents."""
        resolver = _make_resolver()
        order = resolver.resolve()
        _assert_topological(order, resolver.registry)
        assert sorted(order) == sorted(resolver.registry.all_names())

    def test_empty_request_means_all(self):
        """An empty list resolves the whole registry."""
        resolver = _make_resolver()
        assert resolver.resolve([]) == resolver.resolve(None)

    def test_deterministic_across_calls(self):
        """The same subset always resolves to the same order."""
        resolver = _make_resolver()
        subset = ["@qa", "@devops", "@security", "@backend", "@frontend"]
        assert resolver.resolve(subset) == resolver.resolve(list(reversed(subset)))

    def test_out_of_subset_dependencies_ignored(self):
        """Dependencies outside the requested subset do not constrain or add advisors."""
        resolver = _make_resolver()
        assert resolver.resolve(["@qa"]) == ["@qa"]

    def test_independent_advisors_ordered_by_priority_then_name(self):
        """Without constraints, higher priority goes first and ties sort by name."""
        resolver = _make_resolver(
            _make_definition("@low", priority=1),
            _make_definition("@b", priority=9),
            _make_definition("@a", priority=9),
        )
        assert resolver.resolve() == ["@a", "@b", "@low"]

    def test_dependency_beats_priority(self):
        """A high-priority advisor still waits for a low-priority dependency."""
        resolver = _make_resolver(
            _make_definition("@base", priority=1),
            _make_definition("@top", priority=10, dependencies={"@base"}),
        )
        assert resolver.resolve() == ["@base", "@top"]


# ============================================================================
# TestResolveFiltering
# ============================================================================


class TestResolveFiltering:
    """Tests for unknown and duplicate names."""

    def test_unknown_names_dropped(self):
        """Unknown names are dropped without raising."""
        resolver = _make_resolver()
        assert resolver.resolve(["@nobody", "@pm"]) == ["@pm"]

    def test_only_unknown_names_gives_empty_order(self):
        """A request of only unknown names resolves to nothing."""
        resolver = _make_resolver()
        assert resolver.resolve(["@nobody"]) == []

    def test_duplicates_collapsed(self):
        """Each advisor appears exactly once."""
        resolver = _make_resolver()
        assert resolver.resolve(["@pm", "@pm", "@design"]) == ["@pm", "@design"]


# ============================================================================
# TestCycleDetection
# ============================================================================


class TestCycleDetection:
    """Tests for circular dependency detection."""

    def test_two_advisor_cycle_raises(self):
        """@a <-> @b is rejected."""
        resolver = _make_resolver(
            _make_definition("@a", dependencies={"@b"}),
            _make_definition("@b", dependencies={"@a"}),
        )
        with pytest.raises(CircularDependencyError) as exc_info:
            resolver.resolve(["@a", "@b"])

        assert exc_info.value.advisor in {"@a", "@b"}
        assert exc_info.value.cycle[0] == exc_info.value.cycle[-1]

    def test_self_dependency_is_a_cycle(self):
        """An advisor depending on itself is a self-cycle."""
        resolver = _make_resolver(_make_definition("@a", dependencies={"@a"}))
        with pytest.raises(CircularDependencyError) as exc_info:
            resolver.resolve()

        assert exc_info.value.cycle == ["@a", "@a"]

    def test_three_advisor_cycle_reports_path(self):
        """The reported cycle walks the dependency edges."""
        resolver = _make_resolver(
            _make_definition("@a", dependencies={"@b"}),
            _make_definition("@b", dependencies={"@c"}),
            _make_definition("@c", dependencies={"@a"}),
        )
        with pytest.raises(CircularDependencyError) as exc_info:
            resolver.resolve()

        assert exc_info.value.cycle == ["@a", "@b", "@c", "@a"]
        assert "Circular dependency detected" in str(exc_info.value)

    def test_cycle_outside_subset_not_reported(self):
        """A cycle only matters when both ends are requested."""
        resolver = _make_resolver(
            _make_definition("@a", dependencies={"@b"}),
            _make_definition("@b", dependencies={"@a"}),
        )
        assert resolver.resolve(["@a"]) == ["@a"]
