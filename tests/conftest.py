# tests/conftest.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from clerk import config
from clerk.tasks.task_store import TaskStore

from .fakes import FakeClock


@pytest.fixture()
def store(tmp_path: Path) -> TaskStore:
    """Real JSON store in a per-test directory (the file does not exist yet)."""
    return TaskStore(tmp_path / "clerk-db.json")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """
    Point the CLI at a temp task file and keep it from touching the real home dir.

    Returns the task file path. Root logging handlers installed by the CLI are
    removed afterwards so later tests do not log into a closed CliRunner stream.
    """
    db_path = tmp_path / "clerk-db.json"
    monkeypatch.setenv("CLERK_DB_PATH", str(db_path))
    monkeypatch.setenv("CLERK_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("CLERK_LOG_TO_FILE", "false")
    monkeypatch.setenv("CLERK_TICK_SECONDS", "0.01")
    monkeypatch.setattr(config, "_SETTINGS", None)

    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield db_path
    for h in list(root.handlers):
        if h not in saved_handlers:
            root.removeHandler(h)
    for h in saved_handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(saved_level)
