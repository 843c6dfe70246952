# src/clerk/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "clerk.log"

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """Only clerk's own records reach the terminal; anything else needs ERROR."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "clerk" or record.name.startswith("clerk."):
            return True
        return record.levelno >= logging.ERROR


def _console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    # stdout carries reports and the live timer line, so logs stay on stderr.
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(_ConsoleNoiseFilter())
    return handler


def _file_handler(log_dir: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(str(log_dir / LOG_FILE_NAME), encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = "~/.clerk",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    log_to_file: bool = True,
) -> None:
    """
    Install clerk's handlers on the root logger, replacing any already there.

    Each CLI invocation calls this once. The console only shows warnings by
    default (a duplicate running event, a failed command); the file under
    `log_dir` keeps every store load/save and lifecycle change.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)
    root.addHandler(_console_handler(console_level, formatter))
    if log_to_file:
        root.addHandler(_file_handler(Path(log_dir).expanduser(), file_level, formatter))

    logging.captureWarnings(True)
