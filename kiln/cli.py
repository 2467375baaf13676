"""CLI entrypoints for kiln commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .clean import clean
from .config import ConfigError, KilnConfig, load_config
from .errors import CompileError, KilnError, RunError
from .init import init_config
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator


def _add_global_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    """Register flags accepted both before and after the subcommand."""
    flags = (
        (("-v", "--verbose"), "Print the dependency graph and build order."),
        (("-f", "--force"), "Rebuild every file, ignoring the cache."),
        (("--auto-implicit",), "Include implicit dependencies in compilation."),
        (("--transitive",), "Also rebuild files whose dependencies were rebuilt."),
    )
    for names, help_text in flags:
        kwargs: dict[str, object] = {"action": "store_true", "help": help_text}
        kwargs["default"] = argparse.SUPPRESS if suppress_default else False
        parser.add_argument(*names, **kwargs)


def _add_entry_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="Entry Java file (defaults to the configured entrypoint or Main.java).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kiln",
        description="A fast, incremental build tool for Java.",
    )
    _add_global_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Build the given Java file and its dependencies.",
    )
    _add_global_options(build_parser, suppress_default=True)
    _add_entry_argument(build_parser)

    run_parser = subparsers.add_parser(
        "run",
        help="Build and run the given Java file.",
    )
    _add_global_options(run_parser, suppress_default=True)
    _add_entry_argument(run_parser)

    clean_parser = subparsers.add_parser("clean", help="Remove build artifacts and the cache.")
    _add_global_options(clean_parser, suppress_default=True)

    tree_parser = subparsers.add_parser("tree", help="Show the dependency tree.")
    _add_global_options(tree_parser, suppress_default=True)
    _add_entry_argument(tree_parser)

    init_parser = subparsers.add_parser(
        "init",
        help="Create a starter .kiln.yml in the current directory.",
    )
    init_parser.add_argument(
        "--force",
        dest="init_force",
        action="store_true",
        help="Overwrite an existing .kiln.yml.",
    )
    init_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Increase log verbosity for troubleshooting.",
    )

    return parser


def _load_effective_config(args: argparse.Namespace) -> KilnConfig:
    try:
        config = load_config(Path("."))
    except ConfigError as exc:
        get_logger("cli").warning("%s; using default configuration", exc)
        config = KilnConfig()
    if getattr(args, "auto_implicit", False):
        config.auto_include_implicit_deps = True
    if getattr(args, "transitive", False):
        config.transitive_rebuild = True
    return config


def _exit_status(returncode: int) -> int:
    """Map a child return code to a shell status; signal deaths become 128 + signal."""
    if returncode < 0:
        return 128 - returncode
    return returncode or 1


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for kiln commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(getattr(args, "verbose", False)))

    if args.command == "init":
        try:
            init_config(Path("."), force=bool(getattr(args, "init_force", False)))
        except KilnError as exc:
            parser.exit(1, f"kiln init failed: {exc}\n")
        return

    config = _load_effective_config(args)

    if args.command == "clean":
        try:
            clean(config)
        except KilnError as exc:
            parser.exit(1, f"kiln clean failed: {exc}\n")
        return

    orchestrator = Orchestrator(config)
    entry = config.resolve_entry_name(args.file)
    force = bool(getattr(args, "force", False))

    try:
        if args.command == "build":
            orchestrator.run_build(entry, force=force)
        elif args.command == "run":
            orchestrator.run_program(entry, force=force)
        elif args.command == "tree":
            print(orchestrator.run_tree(entry), end="")
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except CompileError as exc:
        parser.exit(1, exc.report)
    except RunError as exc:
        parser.exit(_exit_status(exc.returncode), f"kiln {args.command} failed: {exc}\n")
    except KilnError as exc:
        parser.exit(1, f"kiln {args.command} failed: {exc}\nRun with --verbose for more details.\n")


if __name__ == "__main__":
    main(sys.argv[1:])
