"""
Dependency resolution for advisor initialization.

Turns a requested subset of advisor names into an initialization order in
which every advisor comes after the advisors it depends on. Cycles are
detected with a three-color depth-first traversal; the order itself is
built with Kahn's algorithm so that advisors free of mutual constraints
are ordered by descending priority, then by name.
"""

import heapq
import logging
from typing import Dict, Iterable, List, Optional, Set

from conductor.orchestration.errors import CircularDependencyError
from conductor.registry.registry import AdvisorRegistry


logger = logging.getLogger(__name__)


_UNVISITED = 0
_IN_PROGRESS = 1
_DONE = 2


class DependencyResolver:
    """Resolves advisor subsets against a registry."""

    def __init__(self, registry: AdvisorRegistry):
        self.registry = registry

    def _select(self, names: Optional[Iterable[str]]) -> List[str]:
        """Collapse duplicates and drop names the registry does not know."""
        if not names:
            return sorted(self.registry.all_names())

        selected: List[str] = []
        for name in names:
            if name in selected:
                continue
            if name not in self.registry:
                logger.debug(f"[resolver] Dropping unknown advisor {name!r}")
                continue
            selected.append(name)
        return selected

    def _edges(self, subset: List[str]) -> Dict[str, List[str]]:
        """In-subset dependencies of each advisor, in name order."""
        members = set(subset)
        edges: Dict[str, List[str]] = {}
        for name in subset:
            definition = self.registry.get(name)
            edges[name] = sorted(dep for dep in definition.dependencies if dep in members)
        return edges

    def _check_cycles(self, subset: List[str], edges: Dict[str, List[str]]) -> None:
        """
        Depth-first traversal with three colors.

        Raises:
            CircularDependencyError: On reaching an advisor that is still in progress
        """
        color = {name: _UNVISITED for name in subset}
        path: List[str] = []

        def visit(name: str) -> None:
            if color[name] == _DONE:
                return
            if color[name] == _IN_PROGRESS:
                cycle = path[path.index(name):] + [name]
                raise CircularDependencyError(name, cycle)

            color[name] = _IN_PROGRESS
            path.append(name)
            for dep in edges[name]:
                visit(dep)
            path.pop()
            color[name] = _DONE

        for name in subset:
            visit(name)

    def resolve(self, names: Optional[Iterable[str]] = None) -> List[str]:
        """
        Resolve a requested subset into a safe initialization order.

        Args:
            names: Requested advisor names. None or empty means every
                registered advisor. Unknown names are silently dropped.

        Returns:
            Each valid name exactly once, dependencies first

        Raises:
            CircularDependencyError: If the subset contains a cycle. No
                partial order is returned.
        """
        subset = self._select(names)
        edges = self._edges(subset)

        self._check_cycles(subset, edges)

        remaining: Dict[str, int] = {name: len(deps) for name, deps in edges.items()}
        dependents: Dict[str, Set[str]] = {name: set() for name in subset}
        for name, deps in edges.items():
            for dep in deps:
                dependents[dep].add(name)

        heap = [self._sort_key(name) for name, count in remaining.items() if count == 0]
        heapq.heapify(heap)

        order: List[str] = []
        while heap:
            _, name = heapq.heappop(heap)
            order.append(name)
            for dependent in dependents[name]:
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    heapq.heappush(heap, self._sort_key(dependent))

        logger.info(f"[resolver] Resolved order: {order}")
        return order

    def _sort_key(self, name: str):
        return (-self.registry.get(name).priority, name)
