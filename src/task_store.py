"""Task store: the ordered task collection and its snapshot round-trip.

Every mutation writes the full list back to the storage slot before
returning, so a new store on the same backend always sees it.
Invalid titles and unknown ids are silent no-ops; storage and snapshot
failures are logged and never raised.
"""
from __future__ import annotations
import logging
import uuid
from datetime import datetime
from typing import Callable, Iterator, List, Optional

from models import Task, utcnow
from storage import (
    TASKS_KEY,
    KeyValueStorage,
    SnapshotError,
    StorageError,
    decode_snapshot,
    encode_snapshot,
)

logger = logging.getLogger(__name__)


def new_task_id() -> str:
    return uuid.uuid4().hex


class TaskStore:
    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = TASKS_KEY,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = new_task_id,
    ):
        self._storage = storage
        self._key = key
        self._clock = clock
        self._id_factory = id_factory
        self._tasks: List[Task] = []
        self.load()

    # -------------------- persistence --------------------
    def load(self) -> None:
        """Replace the in-memory list with the stored snapshot.

        Absent/empty slot -> empty store. Unreadable or malformed snapshot
        -> empty store plus a log record; the bad value is left in place
        until the next save overwrites it.
        """
        self._tasks = []
        try:
            raw = self._storage.get_item(self._key)
        except StorageError:
            logger.exception("Could not read slot %r; starting with an empty list", self._key)
            return
        except SnapshotError as exc:
            logger.warning("Discarding unreadable snapshot in slot %r: %s", self._key, exc)
            return
        if raw is None or not raw.strip():
            logger.info("No saved tasks in slot %r", self._key)
            return
        try:
            self._tasks = decode_snapshot(raw)
        except SnapshotError as exc:
            logger.warning("Discarding unreadable snapshot in slot %r: %s", self._key, exc)
            return
        logger.info("Loaded %d task(s) from slot %r", len(self._tasks), self._key)

    def save(self) -> None:
        try:
            self._storage.set_item(self._key, encode_snapshot(self._tasks))
        except StorageError:
            logger.exception("Could not save %d task(s) to slot %r", len(self._tasks), self._key)

    # -------------------- queries --------------------
    def get(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def all(self) -> List[Task]:
        return list(self._tasks)

    def pending(self) -> List[Task]:
        return [t for t in self._tasks if not t.completed]

    def completed(self) -> List[Task]:
        return [t for t in self._tasks if t.completed]

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __contains__(self, task_id: object) -> bool:
        return any(t.id == task_id for t in self._tasks)

    # -------------------- mutations --------------------
    def add(self, title: str) -> Optional[Task]:
        title = (title or '').strip()
        if not title:
            logger.debug("Rejected add with empty title")
            return None
        task = Task(id=self._allocate_id(), title=title, created_at=self._clock())
        self._tasks.append(task)
        self.save()
        logger.debug("Task added id=%s", task.id)
        return task

    def update(self, task_id: str, new_title: str) -> None:
        task = self.get(task_id)
        new_title = (new_title or '').strip()
        if task is None or not new_title:
            return
        task.title = new_title
        self.save()
        logger.debug("Task renamed id=%s", task_id)

    def delete(self, task_id: str) -> None:
        task = self.get(task_id)
        if task is None:
            return
        self._tasks.remove(task)
        self.save()
        logger.debug("Task deleted id=%s", task_id)

    def toggle_complete(self, task_id: str) -> None:
        task = self.get(task_id)
        if task is None:
            return
        task.toggle_complete(self._clock())
        self.save()
        logger.debug("Task id=%s completed=%s", task_id, task.completed)

    # -------------------- id management --------------------
    def _allocate_id(self) -> str:
        tid = self._id_factory()
        while tid in self:
            tid = self._id_factory()
        return tid
