# src/clerk/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from ..errors import StoreError
from .task_models import Tasks

logger = logging.getLogger(__name__)


class TaskStore:
    """
    JSON file task store.

    Every operation is load-all / mutate / save-all:
    - load() reads the whole document (a missing file is an empty collection)
    - save() rewrites the whole document

    There is no locking; two processes saving at once race and the last write wins.
    Saves go through a sibling temp file + os.replace, so a crash mid-write leaves
    the previous document in place.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Tasks:
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError:
            logger.debug("TaskStore %s does not exist yet, starting empty.", self._path)
            return Tasks()
        except OSError as exc:
            raise StoreError(f"Failed to read task file: {exc.strerror or exc}", self._path) from exc
        except UnicodeDecodeError as exc:
            raise StoreError(f"Task file is not valid UTF-8: {exc.reason}", self._path) from exc

        try:
            tasks = Tasks.from_json(json.loads(raw))
        except json.JSONDecodeError as exc:
            raise StoreError(f"Task file is not valid JSON: {exc}", self._path) from exc
        except (ValueError, TypeError, AttributeError) as exc:
            raise StoreError(f"Task file is malformed: {exc}", self._path) from exc

        logger.debug("TaskStore loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Tasks) -> None:
        payload = json.dumps(tasks.to_json(), ensure_ascii=False, indent=2)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StoreError(f"Failed to write task file: {exc.strerror or exc}", self._path) from exc

        logger.debug("TaskStore saved %d tasks to %s", len(tasks), self._path)

    @staticmethod
    def next_id(tasks: Tasks) -> int:
        """max(existing ids) + 1, never below 1."""
        return max([0, *tasks.ids()]) + 1
