# tests/test_task_store.py

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from clerk.errors import StoreError
from clerk.tasks.task_models import Event, Task, Tasks
from clerk.tasks.task_store import TaskStore


def _sample_tasks() -> Tasks:
    t0 = datetime(2026, 1, 5, 9, 0, 0, 123456, tzinfo=timezone.utc)
    return Tasks(
        tasks=[
            Task(
                id=1,
                title="Write report",
                description="quarterly numbers",
                create_time=t0,
                events=[
                    Event(start_time=t0, end_time=t0 + timedelta(minutes=30)),
                    Event(start_time=t0 + timedelta(hours=1)),
                ],
                start_time=t0,
                end_time=t0 + timedelta(minutes=30),
            ),
            Task(id=4, title="Review", description="", create_time=t0 + timedelta(days=1)),
        ]
    )


def test_missing_file_loads_empty(store: TaskStore) -> None:
    assert not store.path.exists()
    tasks = store.load()
    assert len(tasks) == 0
    assert tasks.tasks == []


def test_save_then_load_round_trip(store: TaskStore) -> None:
    original = _sample_tasks()
    store.save(original)

    loaded = store.load()
    assert loaded == original
    assert loaded.tasks[0].events[1].end_time is None
    assert loaded.tasks[1].start_time is None


def test_saved_document_layout(store: TaskStore) -> None:
    store.save(_sample_tasks())

    raw = store.path.read_text("utf-8")
    data = json.loads(raw)
    assert list(data) == ["Tasks"]
    first = data["Tasks"][0]
    assert list(first) == [
        "Id",
        "Title",
        "Description",
        "Events",
        "CreateTime",
        "StartTime",
        "EndTime",
    ]
    assert first["Events"][1]["EndTime"] is None
    # indented, not a single line
    assert '\n  "Tasks"' in raw


def test_save_leaves_no_temp_file(store: TaskStore) -> None:
    store.save(_sample_tasks())
    store.save(Tasks())
    assert [p.name for p in store.path.parent.iterdir()] == [store.path.name]


def test_save_creates_parent_dirs(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "nested" / "dir" / "db.json")
    store.save(_sample_tasks())
    assert len(store.load()) == 2


def test_invalid_json_raises_store_error(store: TaskStore) -> None:
    store.path.write_text("{not json", "utf-8")
    with pytest.raises(StoreError) as exc_info:
        store.load()
    assert exc_info.value.path == store.path
    assert "not valid JSON" in str(exc_info.value)


def test_malformed_task_raises_store_error(store: TaskStore) -> None:
    store.path.write_text(json.dumps({"Tasks": [{"Id": "one", "Title": "x"}]}), "utf-8")
    with pytest.raises(StoreError):
        store.load()


def test_unreadable_path_raises_store_error(tmp_path: Path) -> None:
    # A directory where the file should be: reading fails with something other than "not found".
    (tmp_path / "db").mkdir()
    with pytest.raises(StoreError):
        TaskStore(tmp_path / "db").load()


def test_loads_file_written_by_go_tool(store: TaskStore) -> None:
    store.path.write_text(
        json.dumps(
            {
                "Tasks": [
                    {
                        "Id": 2,
                        "Title": "Legacy",
                        "Description": "from the old binary",
                        "Events": [
                            {
                                "StartTime": "2020-05-01T10:00:00.123456789-07:00",
                                "EndTime": "0001-01-01T00:00:00Z",
                            }
                        ],
                        "CreateTime": "2020-05-01T09:59:00Z",
                        "StartTime": "2020-05-01T10:00:00.123456789-07:00",
                        "EndTime": "0001-01-01T00:00:00Z",
                    }
                ]
            }
        ),
        "utf-8",
    )

    task = store.load().tasks[0]
    assert task.id == 2
    assert task.end_time is None
    assert task.events[0].is_open
    assert task.events[0].start_time == datetime(
        2020, 5, 1, 17, 0, 0, 123456, tzinfo=timezone.utc
    )
    assert task.create_time == datetime(2020, 5, 1, 9, 59, tzinfo=timezone.utc)


def test_next_id() -> None:
    assert TaskStore.next_id(Tasks()) == 1
    assert TaskStore.next_id(_sample_tasks()) == 5


def test_invalid_utf8_raises_store_error(store: TaskStore) -> None:
    store.path.write_bytes(b'{"Tasks": [{"Title": "\xff\xfe"}]}')
    with pytest.raises(StoreError) as exc_info:
        store.load()
    assert exc_info.value.path == store.path
    assert "not valid UTF-8" in str(exc_info.value)


def test_failed_save_removes_temp_file(tmp_path: Path) -> None:
    # os.replace cannot put a file over an existing directory.
    target = tmp_path / "db"
    target.mkdir()
    store = TaskStore(target)

    with pytest.raises(StoreError):
        store.save(_sample_tasks())

    assert not (tmp_path / "db.tmp").exists()
    assert target.is_dir()
