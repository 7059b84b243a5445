# tests/test_storage.py

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from models import Task
from storage import (
    FileStorage,
    SnapshotError,
    StorageError,
    decode_snapshot,
    encode_snapshot,
    parse_timestamp,
)


def _entry(**overrides):
    entry = {
        "id": "a1",
        "title": "Buy milk",
        "completed": False,
        "createdAt": "2024-03-01T09:00:00+00:00",
        "completedAt": None,
    }
    entry.update(overrides)
    return entry


def test_file_storage_missing_slot_is_none(tmp_path: Path) -> None:
    assert FileStorage(tmp_path / "data").get_item("tasks") is None


def test_file_storage_overwrites_slot_atomically(tmp_path: Path) -> None:
    fs = FileStorage(tmp_path / "data")
    fs.set_item("tasks", "[1]")
    fs.set_item("tasks", "[2]")

    assert fs.get_item("tasks") == "[2]"
    assert fs.path_for("tasks") == tmp_path / "data" / "tasks.json"
    # only the slot file, no temp leftovers
    assert [p.name for p in (tmp_path / "data").iterdir()] == ["tasks.json"]


def test_snapshot_round_trip_preserves_fields_and_order() -> None:
    created = datetime(2024, 3, 1, 9, 0, 0, 123456, tzinfo=timezone.utc)
    done = datetime(2024, 3, 2, 18, 30, tzinfo=timezone.utc)
    tasks = [
        Task(id="b", title="Second first", created_at=created),
        Task(id="a", title="Done one", completed=True, created_at=created, completed_at=done),
    ]

    text = encode_snapshot(tasks)
    restored = decode_snapshot(text)

    assert restored == tasks
    raw = json.loads(text)
    assert [e["id"] for e in raw] == ["b", "a"]
    assert set(raw[0]) == {"id", "title", "completed", "createdAt", "completedAt"}
    assert raw[0]["completedAt"] is None


def test_decode_accepts_browser_style_timestamps() -> None:
    text = json.dumps([
        _entry(completed=True, createdAt="2024-03-01T09:00:00.000Z", completedAt="2024-03-01T10:15:30.500Z"),
        {"id": "b2", "title": "No completedAt key", "completed": False, "createdAt": "2024-03-01T09:00:00"},
    ])

    first, second = decode_snapshot(text)

    assert first.created_at == datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    assert first.completed_at == datetime(2024, 3, 1, 10, 15, 30, 500000, tzinfo=timezone.utc)
    assert second.completed_at is None
    assert second.created_at.tzinfo is timezone.utc


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        json.dumps({"id": "a1"}),
        json.dumps(["a1"]),
        json.dumps([_entry(id=7)]),
        json.dumps([_entry(title="   ")]),
        json.dumps([_entry(completed="yes")]),
        json.dumps([_entry(createdAt="yesterday")]),
        json.dumps([_entry(completed=True)]),
        json.dumps([_entry(completedAt="2024-03-01T10:00:00+00:00")]),
        json.dumps([_entry(), _entry()]),
    ],
)
def test_decode_rejects_malformed_snapshots(text: str) -> None:
    with pytest.raises(SnapshotError):
        decode_snapshot(text)


def test_parse_timestamp_requires_string() -> None:
    with pytest.raises(SnapshotError):
        parse_timestamp(12345)


def test_file_storage_invalid_utf8_is_snapshot_error(tmp_path: Path) -> None:
    (tmp_path / "tasks.json").write_bytes(b"\xff\xfe")

    with pytest.raises(SnapshotError):
        FileStorage(tmp_path).get_item("tasks")


def test_file_storage_unencodable_value_is_storage_error(tmp_path: Path) -> None:
    with pytest.raises(StorageError):
        FileStorage(tmp_path).set_item("tasks", '["\udcff"]')


def test_decode_rejects_deeply_nested_json() -> None:
    with pytest.raises(SnapshotError):
        decode_snapshot("[" * 100000 + "]" * 100000)


def test_task_repr_shows_timestamps() -> None:
    created = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    text = repr(Task(id="a", title="A", created_at=created))

    assert "created_at=" in text
    assert "completed_at=None" in text
