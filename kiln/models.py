"""Core data models shared across kiln components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

JAVA_SUFFIX = ".java"
CLASS_SUFFIX = ".class"


@dataclass(frozen=True)
class Node:
    """One reachable source file in the dependency graph."""

    name: str
    path: Path
    deps: Tuple[str, ...] = ()
    implicit_deps: Tuple[str, ...] = ()


DependencyGraph = Dict[str, Node]


@dataclass
class GraphBuildResult:
    """A discovered graph plus the declared dependencies that had no file."""

    graph: DependencyGraph
    dangling: Dict[str, List[str]] = field(default_factory=dict)

    def missing_names(self) -> List[str]:
        """Distinct dangling file names in first-declared order."""
        seen: List[str] = []
        for deps in self.dangling.values():
            for dep in deps:
                if dep not in seen:
                    seen.append(dep)
        return seen


@dataclass(frozen=True)
class CacheEntry:
    """Fingerprint-store record for a successfully compiled source."""

    hash: str
    class_path: str


@dataclass
class BuildOutcome:
    """Result of a build invocation."""

    order: List[str]
    compiled: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def up_to_date(self) -> bool:
        return not self.compiled


def class_name_for(name: str) -> str:
    """Strip the .java suffix from a leaf filename, if present."""
    if name.endswith(JAVA_SUFFIX):
        return name[: -len(JAVA_SUFFIX)]
    return name


def artifact_path(name: str, out_dir: Path) -> Path:
    """Return where javac places the compiled class for ``name``."""
    return out_dir / f"{class_name_for(name)}{CLASS_SUFFIX}"
