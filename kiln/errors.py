"""Exception hierarchy raised by the kiln build engine."""

from __future__ import annotations

from pathlib import Path


class KilnError(RuntimeError):
    """Base class for fatal build, run and tree failures."""


class EntryNotFoundError(KilnError):
    """Raised when the entry source file cannot be located."""

    def __init__(self, entry: str) -> None:
        super().__init__(f"File not found: {entry}")
        self.entry = entry


class SourceReadError(KilnError):
    """Raised when a reachable source file cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path


class DuplicateSourceError(KilnError):
    """Raised when two different files share a leaf filename in one graph."""

    def __init__(self, name: str, first: Path, second: Path) -> None:
        super().__init__(
            f"Duplicate source filename {name!r}: {first} and {second} "
            "cannot both be part of one build"
        )
        self.name = name
        self.paths = (first, second)


class CycleError(KilnError):
    """Raised when the dependency graph contains a cycle."""

    def __init__(self, node: str) -> None:
        super().__init__(f"Circular dependency detected involving: {node}")
        self.node = node


class CompileError(KilnError):
    """Raised when javac exits with a non-zero status."""

    def __init__(self, report: str, raw_output: str = "") -> None:
        super().__init__(report)
        self.report = report
        self.raw_output = raw_output


class InvalidEntryError(KilnError):
    """Raised when the entry filename does not carry the .java extension."""

    def __init__(self, entry: str) -> None:
        super().__init__(f"Invalid Java file: {entry}")
        self.entry = entry


class RunError(KilnError):
    """Raised when the launched program exits with a non-zero status."""

    def __init__(self, returncode: int) -> None:
        super().__init__(f"Program exited with status code: {returncode}")
        self.returncode = returncode


class ToolchainError(KilnError):
    """Raised when javac or java cannot be launched at all."""


__all__ = [
    "CompileError",
    "CycleError",
    "DuplicateSourceError",
    "EntryNotFoundError",
    "InvalidEntryError",
    "KilnError",
    "RunError",
    "SourceReadError",
    "ToolchainError",
]
