# src/clerk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- configures logging,
- wires the concrete TaskStore the commands operate on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..config import Settings, get_settings
from ..logging_setup import setup_logging
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AppContext:
    settings: Settings
    store: TaskStore


def create_app_context(*, settings: Settings | None = None, db_path: Path | None = None) -> AppContext:
    """
    Build the AppContext handed to every command.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    An explicit db_path (the --db option) wins over settings.db_path.
    """
    if settings is None:
        settings = get_settings()

    level_name = settings.log_level.upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(console_level, int):
        console_level = logging.WARNING
    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        log_to_file=settings.log_to_file,
    )

    store = TaskStore(db_path or settings.db_path)
    logger.debug("%s using task file %s", settings.app_name, store.path)
    return AppContext(settings=settings, store=store)
