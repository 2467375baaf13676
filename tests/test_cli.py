"""CLI parser and command dispatch tests."""

from __future__ import annotations

from pathlib import Path

import pytest

import kiln.cli as cli
from kiln.cli import _build_parser, main
from kiln.orchestrator import Orchestrator
from kiln.toolchain import ProcessResult

MAIN_ONLY = "public class Main {\n    public static void main(String[] args) {}\n}\n"


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, recording_runner):
    """Run the CLI inside ``tmp_path`` with javac/java replaced by the recorder."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        cli,
        "Orchestrator",
        lambda config: Orchestrator(config, toolchain=recording_runner.toolchain()),
    )
    return tmp_path


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "build"])
    assert args.verbose is True
    assert args.command == "build"
    assert args.file is None


def test_cli_accepts_flags_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["run", "App.java", "-v", "--force", "--auto-implicit"])
    assert args.command == "run"
    assert args.file == "App.java"
    assert args.verbose is True
    assert args.force is True
    assert args.auto_implicit is True
    assert args.transitive is False


def test_cli_accepts_init_force_flag() -> None:
    parser = _build_parser()
    args = parser.parse_args(["init", "--force"])
    assert args.command == "init"
    assert args.init_force is True


def test_cli_requires_command() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args([])


def test_build_command_compiles_default_entrypoint(project: Path, recording_runner) -> None:
    (project / "Main.java").write_text(MAIN_ONLY, encoding="utf-8")

    main(["build"])

    assert recording_runner.compiled_names() == ["Main.java"]
    assert (project / "out" / "Main.class").exists()
    assert (project / "kiln-cache.json").exists()


def test_build_command_honours_config_entrypoint(project: Path, recording_runner) -> None:
    (project / "App.java").write_text("public class App {}\n", encoding="utf-8")
    (project / ".kiln.yml").write_text("entrypoint: App.java\n", encoding="utf-8")

    main(["build"])

    assert recording_runner.compiled_names() == ["App.java"]


def test_build_command_exits_with_compile_report(project: Path, recording_runner, capsys) -> None:
    (project / "Main.java").write_text(MAIN_ONLY, encoding="utf-8")
    recording_runner.compile_result = ProcessResult(
        returncode=1,
        stderr="Main.java:1: error: ';' expected\npublic class Main {\n                 ^\n1 error\n",
    )

    with pytest.raises(SystemExit) as excinfo:
        main(["build"])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "Compilation Failed" in err
    assert "';' expected" in err


def test_build_command_reports_missing_entry(project: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["build", "Nope.java"])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "kiln build failed: File not found: Nope.java" in err
    assert "Run with --verbose for more details." in err


def test_run_command_exits_with_program_status(project: Path, recording_runner) -> None:
    (project / "Main.java").write_text(MAIN_ONLY, encoding="utf-8")
    recording_runner.run_result = ProcessResult(returncode=4, stderr="oops\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["run"])

    assert excinfo.value.code == 4
    assert recording_runner.calls[-1][-1] == "Main"


def test_tree_command_prints_tree(project: Path, recording_runner, capsys) -> None:
    (project / "A.java").write_text('/* using "B.java" */\npublic class A {}\n', encoding="utf-8")
    (project / "B.java").write_text("public class B {}\n", encoding="utf-8")

    main(["tree", "A.java"])

    out = capsys.readouterr().out
    assert "Dependency Tree:" in out
    assert "A.java\n  └─ B.java\n" in out
    assert recording_runner.calls == []


def test_invalid_config_falls_back_to_defaults(project: Path, recording_runner) -> None:
    (project / "Main.java").write_text(MAIN_ONLY, encoding="utf-8")
    (project / ".kiln.yml").write_text("- not\n- a mapping\n", encoding="utf-8")

    main(["build"])

    assert recording_runner.compiled_names() == ["Main.java"]


def test_init_refuses_to_overwrite(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)

    main(["init"])
    assert (tmp_path / ".kiln.yml").exists()

    with pytest.raises(SystemExit) as excinfo:
        main(["init"])
    assert excinfo.value.code == 1
    assert "already exists" in capsys.readouterr().err

    main(["init", "--force"])


def test_clean_command_removes_artifacts(project: Path) -> None:
    (project / "out").mkdir()
    (project / "out" / "Main.class").write_bytes(b"class")
    (project / "kiln-cache.json").write_text("{}", encoding="utf-8")

    main(["clean"])

    assert not (project / "out").exists()
    assert not (project / "kiln-cache.json").exists()


def test_build_command_reports_unusable_out_dir(project: Path, capsys) -> None:
    (project / "Main.java").write_text(MAIN_ONLY, encoding="utf-8")
    (project / "out").write_text("not a directory", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["build"])

    assert excinfo.value.code == 1
    assert "Failed to create output directory" in capsys.readouterr().err


def test_run_command_maps_signal_death_to_shell_status(project: Path, recording_runner) -> None:
    (project / "Main.java").write_text(MAIN_ONLY, encoding="utf-8")
    recording_runner.run_result = ProcessResult(returncode=-9)

    with pytest.raises(SystemExit) as excinfo:
        main(["run"])

    assert excinfo.value.code == 137
