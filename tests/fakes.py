# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from models import ListName, Task
from storage import StorageError


class MemoryStorage:
    """In-memory KeyValueStorage; ``writes`` counts set_item calls."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
        self.writes += 1


class BrokenStorage:
    """Backend whose every read and write fails."""

    def get_item(self, key: str) -> str | None:
        raise StorageError("disk on fire")

    def set_item(self, key: str, value: str) -> None:
        raise StorageError("disk on fire")


class FakeClock:
    """Deterministic clock: each call is one minute after the previous one."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(minutes=1)
        return current


class SequentialIds:
    def __init__(self, prefix: str = "t") -> None:
        self.prefix = prefix
        self.n = 0

    def __call__(self) -> str:
        self.n += 1
        return f"{self.prefix}{self.n}"


@dataclass
class RecordingRenderer:
    """
    Renderer fake that records every call as a tuple.

    render_item records (name, task_id, list, completed) so tests can assert
    on what was drawn without holding on to the live Task object.
    """

    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def clear(self, target_list: ListName) -> None:
        self.calls.append(("clear", target_list))

    def render_item(self, task: Task, target_list: ListName) -> None:
        self.calls.append(("render_item", task.id, target_list, task.completed))

    def remove_item(self, task_id: str) -> None:
        self.calls.append(("remove_item", task_id))

    def update_title(self, task_id: str, title: str) -> None:
        self.calls.append(("update_title", task_id, title))

    def show_empty_placeholder(self, target_list: ListName) -> None:
        self.calls.append(("show_empty_placeholder", target_list))

    def hide_empty_placeholder(self, target_list: ListName) -> None:
        self.calls.append(("hide_empty_placeholder", target_list))

    def set_counts(self, pending_count: int, completed_count: int) -> None:
        self.calls.append(("set_counts", pending_count, completed_count))

    def open_editor(self, task_id: str, text: str) -> None:
        self.calls.append(("open_editor", task_id, text))

    def close_editor(self, task_id: str) -> None:
        self.calls.append(("close_editor", task_id))

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def reset(self) -> None:
        self.calls.clear()
