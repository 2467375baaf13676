"""Per-node rebuild decisions.

Staleness is judged from a file's own bytes only. A node whose dependency
changed is not rebuilt unless its own source changed too; javac's type checks
catch most resulting mismatches, and ``--force`` (or the opt-in transitive
mode below) covers the rest.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Set

from .models import DependencyGraph, Node, artifact_path
from .stores import FingerprintCache, compute_fingerprint


def needs_rebuild(node: Node, cache: FingerprintCache, out_dir: Path, *, force: bool = False) -> bool:
    """Return True when ``node`` must be handed to javac."""
    if force:
        return True
    if not artifact_path(node.name, out_dir).exists():
        return True
    entry = cache.get(node.name)
    if entry is None:
        return True
    return compute_fingerprint(node.path) != entry.hash


def expand_transitive(graph: DependencyGraph, order: Iterable[str], stale: Iterable[str]) -> List[str]:
    """Close ``stale`` over reverse dependencies, returned in ``order``."""
    dependents: Dict[str, Set[str]] = {}
    for node in graph.values():
        for dep in node.deps:
            dependents.setdefault(dep, set()).add(node.name)

    closed: Set[str] = set()
    pending = list(stale)
    while pending:
        name = pending.pop()
        if name in closed:
            continue
        closed.add(name)
        pending.extend(dependents.get(name, ()))
    return [name for name in order if name in closed]


__all__ = ["expand_transitive", "needs_rebuild"]
