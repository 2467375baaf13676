"""Pipeline orchestration for build, run and tree flows."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO

from .config import KilnConfig
from .diagnostics import format_compile_errors, format_runtime_errors
from .docs import DocsIndex, load_docs_index
from .errors import CompileError, EntryNotFoundError, InvalidEntryError, KilnError, RunError
from .graph import GraphBuilder, topo_sort
from .logging import get_logger
from .models import JAVA_SUFFIX, BuildOutcome, CacheEntry, GraphBuildResult, artifact_path
from .staleness import expand_transitive, needs_rebuild
from .stores import FingerprintCache, compute_fingerprint
from .toolchain import JavaToolchain
from .tree import render_tree


class Orchestrator:
    """Coordinates graph discovery, incremental compilation and program runs."""

    def __init__(
        self,
        config: KilnConfig | None = None,
        *,
        toolchain: JavaToolchain | None = None,
        docs: DocsIndex | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.config = config or KilnConfig()
        self.toolchain = toolchain or JavaToolchain(javac=self.config.javac, java=self.config.java)
        self._docs = docs
        self._docs_loaded = docs is not None
        self._stdout = stdout
        self._stderr = stderr
        self.logger = get_logger("orchestrator")

    # ------------------------------------------------------------------
    # Public operations

    def resolve_entry(self, entry: str) -> Path:
        """Locate the entry file relative to the CWD first, then ``src_dir``."""
        candidate = Path(entry)
        if candidate.exists():
            return candidate
        candidate = self.config.src_dir / entry
        if candidate.exists():
            return candidate
        raise EntryNotFoundError(entry)

    def build_graph(self, entry_path: Path) -> GraphBuildResult:
        builder = GraphBuilder(
            self.config.src_dir, fold_implicit=self.config.auto_include_implicit_deps
        )
        return builder.build(entry_path)

    def run_build(self, entry: str, *, force: bool = False) -> BuildOutcome:
        """Compile the stale part of the graph rooted at ``entry`` in one javac call."""
        entry_path = self.resolve_entry(entry)
        self.logger.info("Checking dependencies...")
        discovered = self.build_graph(entry_path)
        graph = discovered.graph
        missing = discovered.missing_names()
        if missing:
            self.logger.warning(
                "%d declared dependency file(s) not found: %s", len(missing), ", ".join(missing)
            )
        self.logger.debug("Dependency graph:")
        for name, node in graph.items():
            self.logger.debug("  %s -> %s", name, list(node.deps))

        order = topo_sort(graph)
        self.logger.debug("Build order: %s", order)

        out_dir = self.config.out_dir
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise KilnError(f"Failed to create output directory: {exc}") from exc
        cache = FingerprintCache(self.config.cache_file)
        self.logger.debug("Loaded %d cache entries from %s", len(cache), self.config.cache_file)

        stale = [
            name for name in order if needs_rebuild(graph[name], cache, out_dir, force=force)
        ]
        if self.config.transitive_rebuild and stale:
            stale = expand_transitive(graph, order, stale)
        stale_set = set(stale)
        outcome = BuildOutcome(order=list(order))
        for name in order:
            if name in stale_set:
                outcome.compiled.append(name)
            else:
                outcome.skipped.append(name)
                self.logger.debug("  Skipped %s (no changes)", name)

        if outcome.up_to_date:
            self.logger.info("Everything up to date (skipped %d files)", len(outcome.skipped))
            return outcome

        self.logger.info("Compiling %d file(s)...", len(outcome.compiled))
        for name in outcome.compiled:
            self.logger.info("  %s", name)

        sources = [graph[name].path for name in outcome.compiled]
        result = self.toolchain.compile(out_dir, sources)
        if not result.ok:
            raw = result.combined_output
            raise CompileError(format_compile_errors(raw, self._load_docs()), raw)

        for name in outcome.compiled:
            node = graph[name]
            cache.store(
                name,
                CacheEntry(
                    hash=compute_fingerprint(node.path),
                    class_path=str(artifact_path(name, out_dir)),
                ),
            )
        cache.persist()

        if outcome.skipped:
            self.logger.info(
                "Build complete (%d compiled, %d skipped)",
                len(outcome.compiled),
                len(outcome.skipped),
            )
        else:
            self.logger.info("Build complete (%d compiled)", len(outcome.compiled))
        return outcome

    def run_program(self, entry: str, *, force: bool = False) -> int:
        """Build ``entry`` and launch its class with the configured JVM options."""
        self.run_build(entry, force=force)
        class_name = entry_class_name(entry)

        self.logger.info("Running %s...", class_name)
        result = self.toolchain.run(self.config.out_dir, class_name, self.config.jvm_opts)
        stdout = self._stdout or sys.stdout
        stdout.write(result.stdout)
        stdout.flush()
        if result.stderr:
            stderr = self._stderr or sys.stderr
            stderr.write("\n" + format_runtime_errors(result.stderr))
            stderr.flush()
        if not result.ok:
            raise RunError(result.returncode)
        return result.returncode

    def run_tree(self, entry: str) -> str:
        """Return the rendered dependency tree for ``entry``."""
        entry_path = self.resolve_entry(entry)
        result = self.build_graph(entry_path)
        return render_tree(result.graph, entry_path.name, missing=result.missing_names())

    # ------------------------------------------------------------------
    # Internal helpers

    def _load_docs(self) -> Optional[DocsIndex]:
        if not self._docs_loaded:
            self._docs_loaded = True
            if self.config.docs_index is not None:
                self._docs = load_docs_index(self.config.docs_index)
        return self._docs


def entry_class_name(entry: str) -> str:
    """Derive the runnable class name from an entry filename."""
    name = Path(entry).name
    if not name.endswith(JAVA_SUFFIX) or name == JAVA_SUFFIX:
        raise InvalidEntryError(entry)
    return name[: -len(JAVA_SUFFIX)]
