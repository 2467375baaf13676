"""Plain-text rendering of the dependency graph."""

from __future__ import annotations

from typing import List, Sequence, Set

from .models import JAVA_SUFFIX, DependencyGraph

_BRANCH = "└─"


def render_tree(graph: DependencyGraph, root: str, *, missing: Sequence[str] = ()) -> str:
    """Render ``graph`` from ``root``; repeated subtrees print once.

    ``missing`` lists declared dependencies with no source file; they are
    summarised after the tree.
    """
    lines: List[str] = ["Dependency Tree:", ""]
    _render(graph, root, 0, set(), lines)
    if missing:
        lines.append("")
        lines.append(f"Missing dependencies: {', '.join(missing)}")
    lines.append("")
    lines.append("Implicit dependencies are marked (implicit)")
    return "\n".join(lines) + "\n"


def _render(
    graph: DependencyGraph,
    name: str,
    depth: int,
    shown: Set[str],
    lines: List[str],
) -> None:
    indent = "  " * depth
    if name in shown:
        lines.append(f"{indent}{_BRANCH}  {name} (already shown)")
        return
    node = graph.get(name)
    if node is None:
        lines.append(f"{indent}{_BRANCH} {name} (missing)")
        return
    shown.add(name)
    lines.append(name if depth == 0 else f"{indent}{_BRANCH} {name}")

    for dep in node.deps:
        _render(graph, dep, depth + 1, shown, lines)

    child_indent = "  " * (depth + 1)
    for class_name in node.implicit_deps:
        dep_file = f"{class_name}{JAVA_SUFFIX}"
        if dep_file in node.deps:
            continue
        lines.append(f"{child_indent}{_BRANCH}  {dep_file} (implicit)")
        if dep_file in graph:
            _render(graph, dep_file, depth + 2, shown, lines)


__all__ = ["render_tree"]
