# src/clerk/tasks/task_api.py

"""
Task lifecycle operations.

Each helper loads the full collection from the store, mutates it and saves it
back before returning. Clocks are injectable (`now`) so callers can pin time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..errors import TaskNotFoundError
from .task_models import Event, Task, Tasks, local_now
from .task_store import TaskStore

Clock = Callable[[], datetime]

logger = logging.getLogger(__name__)


def _require(tasks: Tasks, task_id: int) -> Task:
    task = tasks.find(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


def get_task(store: TaskStore, task_id: int) -> Task:
    return _require(store.load(), task_id)


def add_task(
    store: TaskStore,
    *,
    title: str,
    description: str = "",
    now: Clock = local_now,
) -> int:
    if not title or not title.strip():
        raise ValueError("title is required")

    tasks = store.load()
    task = Task(
        id=store.next_id(tasks),
        title=title.strip(),
        description=description or "",
        create_time=now(),
    )
    tasks.tasks.append(task)
    store.save(tasks)

    logger.info("Task added id=%s title=%r", task.id, task.title)
    return task.id


def edit_task(
    store: TaskStore,
    task_id: int,
    *,
    title: str | None = None,
    description: str | None = None,
) -> Task:
    """Replace the title and/or description. None leaves a field as is."""
    if title is not None and not title.strip():
        raise ValueError("title cannot be empty")

    tasks = store.load()
    task = _require(tasks, task_id)
    if title is not None:
        task.title = title.strip()
    if description is not None:
        task.description = description
    store.save(tasks)

    logger.info("Task edited id=%s", task_id)
    return task


def delete_task(store: TaskStore, task_id: int) -> bool:
    """
    Remove the first task with this id. Unknown ids are a silent no-op.
    Returns True if something was removed.
    """
    tasks = store.load()
    removed = False
    for i, t in enumerate(tasks.tasks):
        if t.id == task_id:
            del tasks.tasks[i]
            removed = True
            break
    store.save(tasks)

    if removed:
        logger.info("Task deleted id=%s", task_id)
    else:
        logger.debug("Delete ignored, no task id=%s", task_id)
    return removed


def start_task(store: TaskStore, task_id: int, *, now: Clock = local_now) -> Task:
    """
    Open a new event on the task.

    A new event is appended even if one is already open, so calling start twice
    without a stop leaves two running events (stop closes both).
    """
    tasks = store.load()
    task = _require(tasks, task_id)

    started = now()
    if task.start_time is None:
        task.start_time = started
    if task.is_running:
        logger.warning("Task %s already has a running event; opening another one.", task_id)
    task.events.append(Event(start_time=started))
    store.save(tasks)

    logger.info("Task started id=%s at=%s", task_id, started.isoformat())
    return task


def stop_task(store: TaskStore, task_id: int, *, now: Clock = local_now) -> Task:
    """Close every open event of the task with the same timestamp."""
    tasks = store.load()
    task = _require(tasks, task_id)

    stopped = now()
    closed = 0
    for event in task.events:
        if event.end_time is None:
            event.end_time = stopped
            closed += 1
    if closed:
        task.end_time = stopped
    store.save(tasks)

    logger.info("Task stopped id=%s closed_events=%d", task_id, closed)
    return task
