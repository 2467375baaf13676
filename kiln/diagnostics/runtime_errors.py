"""Classification and formatting of the java runtime's standard error."""

from __future__ import annotations

from typing import List

from .compile_errors import SEPARATOR_WIDTH

STACK_OVERFLOW_MARKER = "StackOverflowError"
EXCEPTION_MARKER = "Exception"
_FRAME_PREFIX = "at "
_MAX_FRAMES = 10


def classify_runtime_error(text: str) -> str:
    """Return ``"stack_overflow"``, ``"exception"`` or ``"other"``."""
    lines = text.splitlines()
    if any(STACK_OVERFLOW_MARKER in line for line in lines):
        return "stack_overflow"
    if any(EXCEPTION_MARKER in line for line in lines):
        return "exception"
    return "other"


def format_runtime_errors(text: str) -> str:
    kind = classify_runtime_error(text)
    if kind == "stack_overflow":
        return _format_stack_overflow(text)
    if kind == "exception":
        return _format_exception(text)
    return f"Warning:\n{text}"


def _frames(lines: List[str]) -> List[str]:
    return [line.strip() for line in lines if line.strip().startswith(_FRAME_PREFIX)]


def _format_stack_overflow(text: str) -> str:
    frames = _frames(text.splitlines())
    out = [
        "",
        "Stack Overflow Error - Infinite Recursion Detected!",
        "-" * SEPARATOR_WIDTH,
        "",
        "  This usually happens when:",
        "    • A method calls itself without a proper base case",
        "    • Methods call each other in a circular pattern",
        "    • A loop condition never becomes false",
        "",
    ]
    if frames:
        out.append("  Top of call stack (most recent calls):")
        out.append("")
        for number, frame in enumerate(frames[:_MAX_FRAMES], start=1):
            out.append(f"    {number}. {frame}")
        if len(frames) > _MAX_FRAMES:
            out.append("")
            out.append(f"    ... and {len(frames) - _MAX_FRAMES} more recursive calls")
    out.append("")
    out.append("-" * SEPARATOR_WIDTH)
    out.append("Add a base case or exit condition to prevent infinite recursion.")
    return "\n".join(out) + "\n"


def _format_exception(text: str) -> str:
    out = ["", "Runtime Error", "-" * SEPARATOR_WIDTH]
    for position, raw in enumerate(text.splitlines()):
        line = raw.strip()
        if not line:
            continue
        if position == 0 and EXCEPTION_MARKER in line:
            out.append("")
            out.append(f"  {line}")
        elif line.startswith(_FRAME_PREFIX):
            marker = "→" if ".java:" in line else "·"
            out.append(f"    {marker} {line}")
        elif line.startswith("Caused by:"):
            out.append("")
            out.append(f"  ↳ {line}")
        else:
            out.append(f"  {line}")
    out.append("")
    out.append("-" * SEPARATOR_WIDTH)
    out.append("Check the stack trace above to find the issue.")
    return "\n".join(out) + "\n"


__all__ = ["classify_runtime_error", "format_runtime_errors"]
