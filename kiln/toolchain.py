"""Invocation of the external javac compiler and java runtime."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Sequence

from .errors import ToolchainError
from .logging import get_logger


@dataclass(frozen=True)
class ProcessResult:
    """Captured outcome of one external process."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def combined_output(self) -> str:
        return f"{self.stdout}{self.stderr}" if self.stdout else self.stderr


ProcessRunner = Callable[[Sequence[str]], ProcessResult]


class JavaToolchain:
    """Builds javac/java command lines and runs them through a replaceable runner."""

    def __init__(
        self,
        *,
        javac: str = "javac",
        java: str = "java",
        runner: ProcessRunner | None = None,
    ) -> None:
        self.javac = javac
        self.java = java
        self._runner = runner or self._default_runner
        self.logger = get_logger("toolchain")

    def compile_command(self, out_dir: Path, sources: Iterable[Path]) -> list[str]:
        return [self.javac, "-d", str(out_dir), *(str(source) for source in sources)]

    def run_command(self, out_dir: Path, class_name: str, jvm_opts: Iterable[str] = ()) -> list[str]:
        return [self.java, "-cp", str(out_dir), *jvm_opts, class_name]

    def compile(self, out_dir: Path, sources: Sequence[Path]) -> ProcessResult:
        args = self.compile_command(out_dir, sources)
        self.logger.debug("Running %s", " ".join(args))
        return self._run(args)

    def run(self, out_dir: Path, class_name: str, jvm_opts: Iterable[str] = ()) -> ProcessResult:
        args = self.run_command(out_dir, class_name, jvm_opts)
        self.logger.debug("Running %s", " ".join(args))
        return self._run(args)

    def _run(self, args: Sequence[str]) -> ProcessResult:
        try:
            return self._runner(args)
        except OSError as exc:
            raise ToolchainError(f"Failed to run {args[0]}: {exc}") from exc

    @staticmethod
    def _default_runner(args: Sequence[str]) -> ProcessResult:
        completed = subprocess.run(
            list(args),
            check=False,
            text=True,
            capture_output=True,
            errors="replace",
        )
        return ProcessResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )


__all__ = ["JavaToolchain", "ProcessResult", "ProcessRunner"]
