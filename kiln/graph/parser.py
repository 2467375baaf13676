"""Extracts declared and implicit dependencies from Java source headers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set

from ..errors import SourceReadError
from ..logging import get_logger
from ..models import JAVA_SUFFIX, class_name_for

_USING_PREFIX = 'using "'
_BLOCK_OPEN = "/*"
_BLOCK_CLOSE = "*/"
_LINE_COMMENT = "//"

_PUBLIC_CLASS_RE = re.compile(r"^\s*public\s+class\s+(\w+)", re.MULTILINE)
_CLASS_DECL_RE = re.compile(r"^\s*(?:public\s+)?class\s+(\w+)", re.MULTILINE)
_CLASS_REF_RE = re.compile(r"\b([A-Z][A-Za-z0-9_]*)\b")

logger = get_logger("graph.parser")


@dataclass(frozen=True)
class ParsedDependencies:
    """Declared leaf filenames and implicit class names for one source file."""

    declared: List[str] = field(default_factory=list)
    implicit: List[str] = field(default_factory=list)


def parse_header_dependencies(text: str) -> List[str]:
    """Return the ``using "..."`` targets from the first top-of-file comment block."""
    deps: List[str] = []
    in_block = False
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith(_BLOCK_OPEN):
            in_block = True
        if in_block:
            deps.extend(_using_targets(line))
        if line.endswith(_BLOCK_CLOSE):
            break
        if not in_block and line and not line.startswith(_LINE_COMMENT):
            break
    return deps


def _using_targets(line: str) -> Iterable[str]:
    start = line.find(_USING_PREFIX)
    while start != -1:
        rest_start = start + len(_USING_PREFIX)
        end = line.find('"', rest_start)
        if end == -1:
            return
        yield line[rest_start:end]
        start = line.find(_USING_PREFIX, end + 1)


def find_public_classes(directory: Path, *, exclude: Optional[Path] = None) -> Set[str]:
    """Collect public class names declared by sibling ``.java`` files."""
    classes: Set[str] = set()
    try:
        candidates = sorted(directory.iterdir())
    except OSError as exc:
        logger.debug("Cannot list %s for implicit dependency scan: %s", directory, exc)
        return classes
    excluded = _safe_resolve(exclude) if exclude is not None else None
    for candidate in candidates:
        if candidate.suffix != JAVA_SUFFIX or not candidate.is_file():
            continue
        if excluded is not None and _safe_resolve(candidate) == excluded:
            continue
        try:
            content = candidate.read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue
        classes.update(match.group(1) for match in _PUBLIC_CLASS_RE.finditer(content))
    return classes


def find_class_references(text: str, declared: Iterable[str]) -> List[str]:
    """Return capitalized identifiers referenced outside comments and the header.

    The file's own class and classes already declared in the header are left out.
    Results are de-duplicated in first-seen order.
    """
    declared_classes = {class_name_for(dep) for dep in declared}
    own_match = _CLASS_DECL_RE.search(text)
    own_class = own_match.group(1) if own_match else None

    references: List[str] = []
    seen: Set[str] = set()
    in_header = True
    in_block_comment = False
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith(_BLOCK_OPEN):
            in_block_comment = True
        if in_block_comment:
            if line.endswith(_BLOCK_CLOSE):
                in_block_comment = False
                in_header = False
            continue
        if line.startswith(_LINE_COMMENT):
            continue
        if in_header and line:
            in_header = False
        if in_header:
            continue
        for match in _CLASS_REF_RE.finditer(line):
            name = match.group(1)
            if name == own_class or name in declared_classes or name in seen:
                continue
            seen.add(name)
            references.append(name)
    return references


def parse_dependencies(path: Path) -> ParsedDependencies:
    """Parse declared dependencies and detect implicit sibling-class references."""
    text = _read_source(path)
    declared = parse_header_dependencies(text)
    public_classes = find_public_classes(path.parent, exclude=path)
    implicit = [
        name for name in find_class_references(text, declared) if name in public_classes
    ]
    return ParsedDependencies(declared=declared, implicit=implicit)


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceReadError(path, exc.strerror or str(exc)) from exc


def _safe_resolve(path: Path) -> Path:
    try:
        return path.resolve()
    except OSError:
        return path.absolute()


__all__ = [
    "ParsedDependencies",
    "find_class_references",
    "find_public_classes",
    "parse_dependencies",
    "parse_header_dependencies",
]
