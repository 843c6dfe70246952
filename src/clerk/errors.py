# src/clerk/errors.py

"""
Error taxonomy.

The data layer raises these; only the CLI turns them into a fatal exit.
A missing store file is not an error (it loads as an empty collection).
"""

from __future__ import annotations

from pathlib import Path


class ClerkError(Exception):
    """Base class for every failure clerk reports to the user."""


class StoreError(ClerkError):
    """The task file could not be read, parsed or written."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{message} ({self.path})"
        super().__init__(message)


class TaskNotFoundError(ClerkError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task {task_id} does not exist.")
