"""Parsing and enrichment of javac error output."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..docs import DocsIndex, suggest_methods

_ERROR_MARKER = ": error:"
_SUMMARY_RE = re.compile(r"^(\d+)\s+errors?$")
_CONTEXT_WINDOW = 10
_MAX_SUGGESTIONS = 3
SEPARATOR_WIDTH = 60


@dataclass
class CompilerDiagnostic:
    """One ``<path>:<line>: error: <message>`` group from javac."""

    path: str
    line: Optional[int]
    message: str
    source_line: Optional[str] = None
    caret: Optional[str] = None
    context: List[str] = field(default_factory=list)
    symbol: Optional[str] = None
    location: Optional[str] = None


@dataclass
class CompilerReport:
    """All diagnostics parsed from one javac run."""

    diagnostics: List[CompilerDiagnostic]
    reported_count: Optional[int] = None


def parse_compiler_output(text: str) -> CompilerReport:
    """Split javac output into structured diagnostics."""
    lines = text.splitlines()
    diagnostics: List[CompilerDiagnostic] = []
    reported: Optional[int] = None
    index = 0
    while index < len(lines):
        stripped = lines[index].strip()
        summary = _SUMMARY_RE.match(stripped)
        if summary:
            reported = int(summary.group(1))
            index += 1
            continue
        if not _is_header(stripped):
            index += 1
            continue
        diagnostic, index = _parse_group(lines, index)
        diagnostics.append(diagnostic)
    return CompilerReport(diagnostics=diagnostics, reported_count=reported)


def _parse_group(lines: Sequence[str], start: int) -> tuple[CompilerDiagnostic, int]:
    header = lines[start].strip()
    marker = header.find(_ERROR_MARKER)
    location_part = header[:marker]
    message = header[marker + len(_ERROR_MARKER):].strip()
    path, _, line_text = location_part.rpartition(":")
    line_number = int(line_text) if line_text.isdigit() else None
    if not path:
        path = location_part
    diagnostic = CompilerDiagnostic(path=path, line=line_number, message=message)

    cursor = start + 1
    if cursor < len(lines):
        code_line = lines[cursor]
        code = code_line.strip()
        if code and not code.startswith("^") and not _is_detail(code) and not _is_header(code):
            diagnostic.source_line = code
            cursor += 1
            if cursor < len(lines) and lines[cursor].lstrip().startswith("^"):
                caret_line = lines[cursor]
                leading = len(code_line) - len(code_line.lstrip())
                caret_indent = len(caret_line) - len(caret_line.lstrip())
                diagnostic.caret = " " * max(caret_indent - leading, 0) + caret_line.strip()
                cursor += 1

    limit = min(len(lines), start + _CONTEXT_WINDOW)
    while cursor < limit:
        detail = lines[cursor].strip()
        if not detail:
            break
        if _is_detail(detail):
            diagnostic.context.append(detail)
            _capture_symbol(diagnostic, detail)
        elif ".java:" in detail or _SUMMARY_RE.match(detail):
            break
        else:
            diagnostic.context.append(detail)
        cursor += 1
    return diagnostic, cursor


def _is_header(line: str) -> bool:
    return ".java:" in line and _ERROR_MARKER in line


def _is_detail(line: str) -> bool:
    return line.startswith("symbol:") or line.startswith("location:")


def _capture_symbol(diagnostic: CompilerDiagnostic, detail: str) -> None:
    if detail.startswith("symbol:"):
        method_at = detail.find("method ")
        if method_at != -1:
            name = detail[method_at + len("method "):].split("(", 1)[0].strip()
            if name:
                diagnostic.symbol = name
        return
    for keyword in ("type ", "class "):
        found = detail.find(keyword)
        if found == -1:
            continue
        words = detail[found + len(keyword):].split()
        if words:
            diagnostic.location = words[0]
        return


def format_compile_errors(text: str, docs: Optional[DocsIndex] = None) -> str:
    """Render javac output as a readable report with method suggestions."""
    report = parse_compiler_output(text)
    out: List[str] = ["", "Compilation Failed"]
    if not report.diagnostics:
        out.append("")
        out.extend(f"  {line}" for line in text.splitlines())
        return "\n".join(out) + "\n"

    for number, diagnostic in enumerate(report.diagnostics, start=1):
        heading = f"Error #{number} "
        out.append("")
        out.append(heading + "-" * (SEPARATOR_WIDTH - len(heading)))
        out.append(f"  File: {diagnostic.path}")
        if diagnostic.line is not None:
            out.append(f"  Line: {diagnostic.line}")
        out.append(f"  Message: {diagnostic.message}")
        if diagnostic.source_line:
            out.append("")
            out.append(f"  {diagnostic.source_line}")
            if diagnostic.caret:
                out.append(f"  {diagnostic.caret}")
        for detail in diagnostic.context:
            bullet = "• " if _is_detail(detail) else ""
            out.append(f"    {bullet}{detail}")
        out.extend(_suggestion_lines(diagnostic, docs))

    count = report.reported_count
    if count is None:
        count = len(report.diagnostics)
    out.append("")
    out.append("-" * SEPARATOR_WIDTH)
    out.append(f"{count} {'error' if count == 1 else 'errors'}")
    out.append("")
    out.append("Fix the errors above and try again.")
    return "\n".join(out) + "\n"


def _suggestion_lines(diagnostic: CompilerDiagnostic, docs: Optional[DocsIndex]) -> List[str]:
    if not diagnostic.symbol or not diagnostic.location:
        return []
    suggestions = suggest_methods(docs, diagnostic.location, diagnostic.symbol)
    if not suggestions:
        return []
    lines = [
        "",
        "  Did you mean:",
        f"    Instead of {diagnostic.location}.{diagnostic.symbol}(), try:",
    ]
    lines.extend(f"      • {signature}" for _, signature in suggestions[:_MAX_SUGGESTIONS])
    if len(suggestions) > _MAX_SUGGESTIONS:
        lines.append(f"      • ... and {len(suggestions) - _MAX_SUGGESTIONS} more overload(s)")
    return lines


__all__ = [
    "CompilerDiagnostic",
    "CompilerReport",
    "format_compile_errors",
    "parse_compiler_output",
]
