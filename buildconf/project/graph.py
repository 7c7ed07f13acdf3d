"""Subproject evaluation graph.

Evaluation dependencies form a directed graph over subprojects: an edge
``a -> b`` means ``a`` is evaluated only after ``b``. The graph combines
the build-wide fan-in (every subproject after the designated one) with
per-subproject ``depends_on`` declarations, and must be acyclic.

The topological order is stable: among subprojects that are ready, the
one declared first is evaluated first.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from buildconf.errors import CycleError, UnknownProjectError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationGraph:
    """Evaluation dependencies between subprojects.

    Attributes:
        root_project: Name of the root project, always evaluated first.
        nodes: Subproject names in declaration order.
        edges: Subproject name to the subprojects it is evaluated after.
        order: Topological evaluation order of the subprojects.
    """

    root_project: str
    nodes: tuple[str, ...]
    edges: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    order: tuple[str, ...] = ()

    def dependencies_of(self, name: str) -> tuple[str, ...]:
        """Return the subprojects ``name`` is evaluated after."""
        if name not in self.edges:
            raise UnknownProjectError(name)
        return self.edges[name]

    def position(self, name: str) -> int:
        """Return the index of a subproject in the evaluation order."""
        try:
            return self.order.index(name)
        except ValueError:
            raise UnknownProjectError(name) from None


def find_cycle(
    nodes: Sequence[str], edges: Mapping[str, Sequence[str]]
) -> list[str] | None:
    """Find one dependency cycle, if any.

    Returns:
        Names along the cycle with the first repeated at the end, or None.
    """
    visiting: list[str] = []
    on_path: set[str] = set()
    done: set[str] = set()

    def visit(node: str) -> list[str] | None:
        visiting.append(node)
        on_path.add(node)
        for dep in edges.get(node, ()):
            if dep in on_path:
                start = visiting.index(dep)
                return visiting[start:] + [dep]
            if dep not in done:
                cycle = visit(dep)
                if cycle:
                    return cycle
        visiting.pop()
        on_path.discard(node)
        done.add(node)
        return None

    for node in nodes:
        if node not in done:
            cycle = visit(node)
            if cycle:
                return cycle
    return None


def topological_order(
    nodes: Sequence[str], edges: Mapping[str, Sequence[str]]
) -> tuple[str, ...]:
    """Order nodes so every node follows all of its dependencies.

    Raises:
        CycleError: If the edges contain a cycle.
    """
    remaining = list(nodes)
    placed: set[str] = set()
    order: list[str] = []
    while remaining:
        for node in remaining:
            if all(dep in placed for dep in edges.get(node, ())):
                break
        else:
            cycle = find_cycle(remaining, edges) or remaining[:1] * 2
            raise CycleError(cycle)
        remaining.remove(node)
        placed.add(node)
        order.append(node)
    return tuple(order)


def build_evaluation_graph(
    root_project: str,
    projects: Iterable[tuple[str, Sequence[str]]],
    evaluation_depends_on: str | None = None,
) -> EvaluationGraph:
    """Build the evaluation graph and its topological order.

    Args:
        root_project: Name of the root project.
        projects: Pairs of (subproject name, explicit dependencies).
        evaluation_depends_on: Subproject every other one is evaluated after.

    Returns:
        Frozen EvaluationGraph.

    Raises:
        UnknownProjectError: If a reference names a missing subproject.
        CycleError: If the dependencies are circular.
    """
    declared = [(name, tuple(deps)) for name, deps in projects]
    nodes = tuple(name for name, _ in declared)
    known = set(nodes)

    if evaluation_depends_on is not None and evaluation_depends_on not in known:
        raise UnknownProjectError(
            evaluation_depends_on, referenced_by="evaluation_depends_on"
        )

    edges: dict[str, tuple[str, ...]] = {}
    for name, deps in declared:
        for dep in deps:
            if dep not in known:
                raise UnknownProjectError(dep, referenced_by=f":{name}")
        merged = list(deps)
        # The designated subproject does not wait on itself
        if evaluation_depends_on is not None and name != evaluation_depends_on:
            if evaluation_depends_on not in merged:
                merged.insert(0, evaluation_depends_on)
        edges[name] = tuple(merged)

    order = topological_order(nodes, edges)
    logger.info(
        "Evaluation order: :%s, %s",
        root_project,
        ", ".join(f":{name}" for name in order) or "(no subprojects)",
    )
    return EvaluationGraph(
        root_project=root_project, nodes=nodes, edges=edges, order=order
    )


__all__ = [
    "EvaluationGraph",
    "build_evaluation_graph",
    "find_cycle",
    "topological_order",
]
