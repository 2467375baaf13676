"""Readable reports for javac and java failures."""

from .compile_errors import CompilerDiagnostic, format_compile_errors, parse_compiler_output
from .runtime_errors import classify_runtime_error, format_runtime_errors

__all__ = [
    "CompilerDiagnostic",
    "classify_runtime_error",
    "format_compile_errors",
    "format_runtime_errors",
    "parse_compiler_output",
]
