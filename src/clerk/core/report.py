# src/clerk/core/report.py

"""Plain-text task reports (short table and verbose blocks)."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from ..tasks.task_models import Task, local_now
from .duration import event_duration, format_duration, time_spent

SEPARATOR = "-" * 48


def format_time(value: datetime | None) -> str:
    """Local time as "Jan  2 15:04:05 2006"; unset renders empty."""
    if value is None:
        return ""
    local = value.astimezone()
    return f"{local:%b} {local.day:>2} {local:%H:%M:%S %Y}"


def render_short(tasks: Iterable[Task], now: datetime) -> str:
    lines = ["", "Id  TimeSpent Title"]
    for t in tasks:
        spent = format_duration(time_spent(t.events, now))
        lines.append(f"{t.id:<3d} {spent}  {t.title}")
    lines.append("")
    return "\n".join(lines) + "\n"


def _render_verbose_task(t: Task, now: datetime) -> list[str]:
    lines = [
        SEPARATOR,
        f"[{t.id}] {t.title}",
        "",
        t.description,
        "",
        f"Time Created: {format_time(t.create_time)}",
        f"Time Started: {format_time(t.start_time)}",
        f"Time Ended: {format_time(t.end_time)}",
        f"Time Spent: {format_duration(time_spent(t.events, now))}",
        "",
        "Elapsed  Start                End",
    ]
    for e in t.events:
        elapsed = format_duration(event_duration(e, now))
        lines.append(f"{elapsed} {format_time(e.start_time)} {format_time(e.end_time)}")
    lines.append("")
    return lines


def render_verbose(tasks: Iterable[Task], now: datetime) -> str:
    lines: list[str] = []
    for t in tasks:
        lines.extend(_render_verbose_task(t, now))
    return "\n".join(lines) + "\n" if lines else ""


def render_tasks(tasks: Iterable[Task], *, verbose: bool = False, now: datetime | None = None) -> str:
    now = now or local_now()
    if verbose:
        return render_verbose(tasks, now)
    return render_short(tasks, now)
