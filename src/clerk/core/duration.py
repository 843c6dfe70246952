# src/clerk/core/duration.py

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from ..tasks.task_models import Event


def format_duration(span: timedelta) -> str:
    """
    HH:MM:SS with whole-unit truncation.

    Hours are not wrapped at 24 and may take more than two digits.
    Negative spans (clock moved backwards) render as 00:00:00.
    """
    total = max(0, int(span.total_seconds()))
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def event_duration(event: Event, now: datetime) -> timedelta:
    end = event.end_time if event.end_time is not None else now
    return end - event.start_time


def time_spent(events: Iterable[Event], now: datetime) -> timedelta:
    return sum((event_duration(e, now) for e in events), timedelta())
