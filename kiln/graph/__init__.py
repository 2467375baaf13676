"""Dependency discovery, graph construction and ordering."""

from .builder import GraphBuilder, build_dependency_graph
from .parser import ParsedDependencies, parse_dependencies, parse_header_dependencies
from .toposort import topo_sort

__all__ = [
    "GraphBuilder",
    "ParsedDependencies",
    "build_dependency_graph",
    "parse_dependencies",
    "parse_header_dependencies",
    "topo_sort",
]
