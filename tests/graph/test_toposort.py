"""Tests for the cycle-detecting topological sort."""

from __future__ import annotations

from pathlib import Path

import pytest

from kiln.errors import CycleError
from kiln.graph import topo_sort
from kiln.models import Node


def _graph(edges: dict[str, tuple[str, ...]]) -> dict[str, Node]:
    return {name: Node(name=name, path=Path(name), deps=deps) for name, deps in edges.items()}


def _assert_dependencies_first(order: list[str], graph: dict[str, Node]) -> None:
    position = {name: index for index, name in enumerate(order)}
    for node in graph.values():
        for dep in node.deps:
            if dep in graph:
                assert position[dep] < position[node.name], (dep, node.name)


def test_topo_sort_orders_dependencies_first() -> None:
    graph = _graph(
        {
            "Main.java": ("Runner.java", "Cool.java"),
            "Runner.java": ("Util.java",),
            "Cool.java": ("Util.java",),
            "Util.java": (),
        }
    )

    order = topo_sort(graph)

    assert sorted(order) == sorted(graph)
    _assert_dependencies_first(order, graph)
    assert order == ["Util.java", "Runner.java", "Cool.java", "Main.java"]


def test_topo_sort_skips_dangling_dependencies() -> None:
    graph = _graph({"Main.java": ("Missing.java",)})

    assert topo_sort(graph) == ["Main.java"]


def test_topo_sort_detects_two_node_cycle() -> None:
    graph = _graph({"B.java": ("A.java",), "A.java": ("B.java",)})

    with pytest.raises(CycleError) as excinfo:
        topo_sort(graph)

    assert excinfo.value.node in {"A.java", "B.java"}
    assert "Circular dependency" in str(excinfo.value)


def test_topo_sort_detects_self_dependency() -> None:
    graph = _graph({"A.java": ("A.java",)})

    with pytest.raises(CycleError) as excinfo:
        topo_sort(graph)

    assert excinfo.value.node == "A.java"


def test_topo_sort_detects_long_cycle_behind_acyclic_prefix() -> None:
    graph = _graph(
        {
            "Main.java": ("A.java",),
            "A.java": ("B.java",),
            "B.java": ("C.java",),
            "C.java": ("A.java",),
        }
    )

    with pytest.raises(CycleError) as excinfo:
        topo_sort(graph)

    assert excinfo.value.node == "A.java"


def test_topo_sort_accepts_diamond() -> None:
    graph = _graph(
        {
            "Top.java": ("Left.java", "Right.java"),
            "Left.java": ("Base.java",),
            "Right.java": ("Base.java",),
            "Base.java": (),
        }
    )

    order = topo_sort(graph)

    _assert_dependencies_first(order, graph)
    assert order.count("Base.java") == 1
