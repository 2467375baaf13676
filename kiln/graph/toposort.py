"""Cycle-detecting topological ordering of the dependency graph."""

from __future__ import annotations

from typing import Dict, List

from ..errors import CycleError
from ..models import DependencyGraph

_ON_STACK = 1
_DONE = 2


def topo_sort(graph: DependencyGraph) -> List[str]:
    """Order nodes so every node follows the dependencies present in ``graph``.

    Dependencies missing from the graph are skipped; javac reports them later.
    Raises :class:`CycleError` naming the first node re-entered while on the stack.
    """
    state: Dict[str, int] = {}
    order: List[str] = []

    def visit(name: str) -> None:
        current = state.get(name)
        if current == _ON_STACK:
            raise CycleError(name)
        if current == _DONE:
            return
        node = graph.get(name)
        if node is None:
            return
        state[name] = _ON_STACK
        for dep in node.deps:
            visit(dep)
        state[name] = _DONE
        order.append(name)

    for name in graph:
        visit(name)
    return order


__all__ = ["topo_sort"]
