# src/clerk/core/timer.py

"""
Interactive timer shown by `clerk start`.

The task is started (and persisted) first, then a counter is redrawn every tick
until the cancellation token is set (SIGINT/SIGTERM) or another process stops
the task. On cancellation the task is stopped before run_timer returns.
"""

from __future__ import annotations

import logging
import signal
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager, nullcontext
from typing import TextIO

from ..tasks.task_api import Clock, start_task, stop_task
from ..tasks.task_models import Task, local_now
from ..tasks.task_store import TaskStore
from .duration import format_duration

logger = logging.getLogger(__name__)

_STOP_SIGNALS = ("SIGINT", "SIGTERM")


@contextmanager
def cancel_on_signals(stop_event: threading.Event) -> Iterator[None]:
    """
    Set `stop_event` on SIGINT/SIGTERM for the duration of the block.

    Previous handlers are restored on exit. Signal handlers can only be installed
    from the main thread; elsewhere this is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, stopping timer...", signum)
        stop_event.set()

    previous: dict[int, object] = {}
    for name in _STOP_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is None:
            # SIGTERM is missing on some platforms.
            continue
        previous[signum] = signal.signal(signum, _handle_signal)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def _still_running(store: TaskStore, task_id: int) -> bool:
    task = store.load().find(task_id)
    if task is None:
        logger.info("Task %s was deleted while the timer was running.", task_id)
        return False
    if not task.is_running:
        logger.info("Task %s was stopped elsewhere.", task_id)
        return False
    return True


def run_timer(
    store: TaskStore,
    task_id: int,
    *,
    stop_event: threading.Event | None = None,
    tick: float = 1.0,
    out: TextIO | None = None,
    handle_signals: bool = True,
    now: Clock = local_now,
) -> Task:
    """
    Start the task, show a live counter, stop the task when cancelled.

    The signal handlers cover everything from start_task to stop_task, so an
    interrupt at any point only sets stop_event and the stop is always saved.
    """
    out = out or sys.stdout
    stop_event = stop_event or threading.Event()

    with cancel_on_signals(stop_event) if handle_signals else nullcontext():
        task = start_task(store, task_id, now=now)
        started = task.events[-1].start_time

        cancelled = False
        while True:
            out.write(f"\rTime Elapsed: {format_duration(now() - started)}")
            out.flush()
            if stop_event.wait(tick):
                cancelled = True
                break
            if not _still_running(store, task_id):
                break

        out.write("\n")
        out.flush()

        if cancelled:
            return stop_task(store, task_id, now=now)
        return store.load().find(task_id) or task
