"""Read-only Java API documentation index used for "did you mean" hints."""

from __future__ import annotations

import gzip
import json
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from ..logging import get_logger

logger = get_logger("docs")


class Overload(BaseModel):
    signature: str
    description: str = ""
    deprecated: bool = False


class DocMethod(BaseModel):
    name: str
    overloads: List[Overload] = Field(default_factory=list)


class DocClass(BaseModel):
    name: str
    methods: List[DocMethod] = Field(default_factory=list)


class DocPackage(BaseModel):
    package: str
    description: str = ""
    classes: List[DocClass] = Field(default_factory=list)


class JavaDocs(BaseModel):
    packages: List[DocPackage] = Field(default_factory=list)


class DocsIndex:
    """Lookup of classes by simple or fully-qualified name."""

    def __init__(self, docs: JavaDocs) -> None:
        self.docs = docs
        self._classes: Dict[str, DocClass] = {}
        for package in docs.packages:
            for doc_class in package.classes:
                self._classes[f"{package.package}.{doc_class.name}"] = doc_class
                self._classes.setdefault(doc_class.name, doc_class)

    def classes(self, name: str) -> Optional[DocClass]:
        return self._classes.get(name)

    def methods_of(self, doc_class: DocClass) -> List[Tuple[str, str]]:
        """Return ``(method name, signature)`` for every overload of ``doc_class``."""
        return [
            (method.name, overload.signature)
            for method in doc_class.methods
            for overload in method.overloads
        ]

    def __len__(self) -> int:
        return len(self._classes)


def load_docs_index(path: Path) -> Optional[DocsIndex]:
    """Load a docs index from JSON or gzip-compressed JSON; None when unusable."""
    try:
        raw = path.read_bytes()
    except OSError as exc:
        logger.warning("Documentation index %s unavailable: %s", path, exc)
        return None
    try:
        if path.suffix == ".gz":
            raw = gzip.decompress(raw)
        docs = JavaDocs.model_validate(json.loads(raw.decode("utf-8")))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Ignoring invalid documentation index %s: %s", path, exc)
        return None
    index = DocsIndex(docs)
    logger.debug("Loaded documentation index with %d class names", len(index))
    return index


def edit_distance(left: str, right: str) -> int:
    """Levenshtein distance between two strings."""
    if len(left) < len(right):
        left, right = right, left
    previous = list(range(len(right) + 1))
    for i, left_char in enumerate(left, start=1):
        current = [i]
        for j, right_char in enumerate(right, start=1):
            cost = 0 if left_char == right_char else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def suggest_methods(
    docs: Optional[DocsIndex], class_name: str, method_name: str, *, max_distance: int = 2
) -> List[Tuple[str, str]]:
    """Return ``(name, signature)`` suggestions for an unknown method on ``class_name``.

    Case-insensitive matches with a different spelling win and contribute every
    overload. Otherwise methods within ``max_distance`` edits of the lowercased
    name are returned closest first, three methods at most with two overloads each.
    """
    if docs is None:
        return []
    doc_class = docs.classes(class_name)
    if doc_class is None:
        return []

    wanted = method_name.lower()
    exact = [
        method
        for method in doc_class.methods
        if method.name.lower() == wanted and method.name != method_name
    ]
    if exact:
        return [(method.name, overload.signature) for method in exact for overload in method.overloads]

    scored = [
        (edit_distance(wanted, method.name.lower()), method)
        for method in doc_class.methods
    ]
    close = sorted((item for item in scored if item[0] <= max_distance), key=lambda item: item[0])
    suggestions: List[Tuple[str, str]] = []
    for _, method in close[:3]:
        for overload in method.overloads[:2]:
            suggestions.append((method.name, overload.signature))
    return suggestions


__all__ = [
    "DocClass",
    "DocMethod",
    "DocPackage",
    "DocsIndex",
    "JavaDocs",
    "Overload",
    "edit_distance",
    "load_docs_index",
    "suggest_methods",
]
