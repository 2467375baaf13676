"""Depth-first construction of the source dependency graph."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from ..errors import DuplicateSourceError
from ..logging import get_logger
from ..models import JAVA_SUFFIX, DependencyGraph, GraphBuildResult, Node
from .parser import parse_dependencies


class GraphBuilder:
    """Walks ``using`` directives from an entry file and records every reachable node."""

    def __init__(self, base_dir: Path, *, fold_implicit: bool = False) -> None:
        self.base_dir = base_dir
        self.fold_implicit = fold_implicit
        self.logger = get_logger("graph.builder")
        self.dangling: Dict[str, List[str]] = {}
        self._visited: Dict[str, Path] = {}

    def build(self, entry: Path) -> GraphBuildResult:
        graph: DependencyGraph = {}
        self._visited = {}
        self.dangling = {}
        self._visit(entry, graph)
        return GraphBuildResult(graph=graph, dangling=self.dangling)

    def _visit(self, path: Path, graph: DependencyGraph) -> None:
        name = path.name
        resolved = path.resolve()
        previous = self._visited.get(name)
        if previous is not None:
            if previous != resolved:
                raise DuplicateSourceError(name, previous, resolved)
            return
        self._visited[name] = resolved

        parsed = parse_dependencies(path)
        deps = list(parsed.declared)
        if parsed.implicit:
            self._report_implicit(name, parsed.implicit)
            if self.fold_implicit:
                for class_name in parsed.implicit:
                    dep_file = f"{class_name}{JAVA_SUFFIX}"
                    if dep_file not in deps:
                        deps.append(dep_file)

        for dep in deps:
            dep_path = self.base_dir / dep
            if dep_path.exists():
                self._visit(dep_path, graph)
            else:
                self.logger.warning("Dependency not found: %s (declared by %s)", dep, name)
                self.dangling.setdefault(name, []).append(dep)

        graph[name] = Node(
            name=name,
            path=path,
            deps=tuple(deps),
            implicit_deps=tuple(parsed.implicit),
        )

    def _report_implicit(self, name: str, implicit: List[str]) -> None:
        self.logger.warning(
            "%s references classes without declaring them in header: %s",
            name,
            ", ".join(implicit),
        )
        for class_name in implicit:
            if self.fold_implicit:
                self.logger.warning("  Auto-including '%s%s' in compilation", class_name, JAVA_SUFFIX)
            else:
                self.logger.warning(
                    "  Add 'using \"%s%s\"' to the header comment", class_name, JAVA_SUFFIX
                )


def build_dependency_graph(
    entry: Path, base_dir: Path, *, fold_implicit: bool = False
) -> DependencyGraph:
    """Return the graph of every source reachable from ``entry``."""
    return GraphBuilder(base_dir, fold_implicit=fold_implicit).build(entry).graph


__all__ = ["GraphBuilder", "build_dependency_graph"]
