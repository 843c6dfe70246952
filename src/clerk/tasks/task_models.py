# src/clerk/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# The original Go tool serialized unset times as the zero time.Time value.
_ZERO_TIME_PREFIX = "0001-01-01T00:00:00"
_EXTRA_FRACTION = re.compile(r"(\.\d{6})\d+")


def local_now() -> datetime:
    """Current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


def time_to_json(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


def time_from_json(raw: Any) -> datetime | None:
    """
    Parse a persisted timestamp.

    Accepts RFC 3339 strings with or without a UTC offset ("Z" included) and
    with up to nanosecond precision. None, "" and the Go zero time mean unset.
    Naive values are interpreted as local time.
    """
    if raw is None or raw == "":
        return None
    if not isinstance(raw, str):
        raise ValueError(f"timestamp must be a string, got {type(raw).__name__}")
    if raw.startswith(_ZERO_TIME_PREFIX):
        return None

    text = _EXTRA_FRACTION.sub(r"\1", raw.strip())
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.astimezone()
    return value


@dataclass(slots=True)
class Event:
    """One timed interval. An unset end_time means the interval is still running."""

    start_time: datetime
    end_time: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def to_json(self) -> dict[str, Any]:
        return {
            "StartTime": time_to_json(self.start_time),
            "EndTime": time_to_json(self.end_time),
        }

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> Event:
        start = time_from_json(raw.get("StartTime"))
        if start is None:
            raise ValueError("event is missing StartTime")
        return cls(start_time=start, end_time=time_from_json(raw.get("EndTime")))


@dataclass(slots=True)
class Task:
    id: int
    title: str
    description: str
    create_time: datetime

    events: list[Event] = field(default_factory=list)
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def open_events(self) -> list[Event]:
        return [e for e in self.events if e.is_open]

    @property
    def is_running(self) -> bool:
        return any(e.is_open for e in self.events)

    def to_json(self) -> dict[str, Any]:
        return {
            "Id": self.id,
            "Title": self.title,
            "Description": self.description,
            "Events": [e.to_json() for e in self.events],
            "CreateTime": time_to_json(self.create_time),
            "StartTime": time_to_json(self.start_time),
            "EndTime": time_to_json(self.end_time),
        }

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> Task:
        task_id = raw.get("Id")
        # bool is an int subclass; reject it explicitly.
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise ValueError(f"task Id must be an integer, got {task_id!r}")

        create_time = time_from_json(raw.get("CreateTime"))
        if create_time is None:
            raise ValueError(f"task {task_id} is missing CreateTime")

        return cls(
            id=task_id,
            title=str(raw.get("Title") or ""),
            description=str(raw.get("Description") or ""),
            create_time=create_time,
            events=[Event.from_json(e) for e in (raw.get("Events") or [])],
            start_time=time_from_json(raw.get("StartTime")),
            end_time=time_from_json(raw.get("EndTime")),
        )


@dataclass(slots=True)
class Tasks:
    """The whole persisted collection, in insertion order."""

    tasks: list[Task] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self):
        return iter(self.tasks)

    def find(self, task_id: int) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def ids(self) -> list[int]:
        return [t.id for t in self.tasks]

    def to_json(self) -> dict[str, Any]:
        return {"Tasks": [t.to_json() for t in self.tasks]}

    @classmethod
    def from_json(cls, raw: Any) -> Tasks:
        if not isinstance(raw, dict):
            raise ValueError("task file must contain a JSON object")
        items = raw.get("Tasks") or []
        if not isinstance(items, list):
            raise ValueError("'Tasks' must be a list")
        return cls(tasks=[Task.from_json(t) for t in items])
