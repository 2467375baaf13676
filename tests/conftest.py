from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.source_tree import RecordingRunner, SourceTree


@pytest.fixture(autouse=True)
def _reset_kiln_logger():
    """Undo configure_logging side effects so caplog keeps seeing kiln records."""
    yield
    logger = logging.getLogger("kiln")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def source_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> SourceTree:
    """Provide a Java source tree rooted at ``tmp_path/src`` with CWD at ``tmp_path``."""
    monkeypatch.chdir(tmp_path)
    return SourceTree(tmp_path)


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()
