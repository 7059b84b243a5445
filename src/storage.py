"""Persistence helpers: snapshot codec and key-value slot storage.

The whole task list is written as one JSON array into a single named slot
("tasks"). A slot in FileStorage is one file, <directory>/<key>.json,
replaced atomically on every write.
"""
from __future__ import annotations
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Protocol, Union

from models import Task

logger = logging.getLogger(__name__)

TASKS_KEY = 'tasks'
DEFAULT_DATA_DIR = Path(__file__).parent.parent / 'data'


class StorageError(Exception):
    """The key-value backend could not be read or written."""


class SnapshotError(ValueError):
    """A stored snapshot is not a valid task list."""


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


class FileStorage:
    """One file per slot inside ``directory``."""

    def __init__(self, directory: Union[str, Path] = DEFAULT_DATA_DIR):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f'{key}.json'

    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding='utf-8')
        except UnicodeDecodeError as exc:
            raise SnapshotError(f'{path} is not valid UTF-8: {exc}') from exc
        except OSError as exc:
            raise StorageError(f'cannot read {path}: {exc}') from exc

    def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=str(self.directory), prefix=f'.{key}.', suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(value)
                os.replace(tmp, path)
                logger.debug("Wrote slot %r to %s (%d chars)", key, path, len(value))
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except (OSError, UnicodeEncodeError) as exc:
            raise StorageError(f'cannot write {path}: {exc}') from exc


# -------------------- snapshot codec --------------------
def encode_snapshot(tasks: List[Task]) -> str:
    """Serialize tasks, in order, as a pretty-printed JSON array."""
    return json.dumps([t.to_dict() for t in tasks], indent=4, ensure_ascii=False)


def decode_snapshot(text: str) -> List[Task]:
    """Parse a snapshot back into Tasks.

    Any defect rejects the whole snapshot with SnapshotError: bad JSON, a
    non-list document, missing or mistyped fields, unparseable timestamps,
    empty titles, duplicate ids, or completedAt disagreeing with completed.
    """
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise SnapshotError(f'invalid JSON: {exc}') from exc
    if not isinstance(data, list):
        raise SnapshotError(f'expected a list, got {type(data).__name__}')
    tasks: List[Task] = []
    seen = set()
    for index, raw in enumerate(data):
        task = _task_from_entry(raw, index)
        if task.id in seen:
            raise SnapshotError(f'entry {index}: duplicate id {task.id!r}')
        seen.add(task.id)
        tasks.append(task)
    return tasks


def _task_from_entry(raw: Any, index: int) -> Task:
    if not isinstance(raw, dict):
        raise SnapshotError(f'entry {index}: expected an object')
    tid = raw.get('id')
    title = raw.get('title')
    completed = raw.get('completed')
    if not isinstance(tid, str) or not tid:
        raise SnapshotError(f'entry {index}: bad id')
    if not isinstance(title, str) or not title.strip():
        raise SnapshotError(f'entry {index}: bad title')
    if not isinstance(completed, bool):
        raise SnapshotError(f'entry {index}: bad completed flag')
    created_at = parse_timestamp(raw.get('createdAt'), index, 'createdAt')
    completed_raw = raw.get('completedAt')
    completed_at = None if completed_raw is None else parse_timestamp(completed_raw, index, 'completedAt')
    if completed != (completed_at is not None):
        raise SnapshotError(f'entry {index}: completedAt does not match completed')
    return Task(
        id=tid,
        title=title.strip(),
        completed=completed,
        created_at=created_at,
        completed_at=completed_at,
    )


def parse_timestamp(value: Any, index: int = 0, name: str = 'timestamp') -> datetime:
    """Parse an ISO-8601 string; a trailing 'Z' and naive values mean UTC."""
    if not isinstance(value, str):
        raise SnapshotError(f'entry {index}: {name} is not a string')
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        dt = datetime.fromisoformat(text)
    except ValueError as exc:
        raise SnapshotError(f'entry {index}: bad {name} {value!r}') from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
