"""Data models for the terminal to-do list.

Exposes the Task dataclass plus the two names used to address the
presentation lists. Persisted field names are camelCase ("createdAt",
"completedAt") so snapshots stay readable by the browser version of the
list; the Python attributes use snake_case.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ListName(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Task:
    """A single to-do item.

    Fields:
        id: Opaque unique string, never reused.
        title: Trimmed, non-empty text.
        completed: Completion flag.
        created_at: When the task was created (aware datetime).
        completed_at: When it was completed; None while pending.
    """
    id: str
    title: str
    completed: bool = False
    created_at: datetime = field(default_factory=utcnow)
    completed_at: Optional[datetime] = None

    @property
    def list_name(self) -> ListName:
        return ListName.COMPLETED if self.completed else ListName.PENDING

    def toggle_complete(self, now: Optional[datetime] = None) -> None:
        self.completed = not self.completed
        self.completed_at = (now or utcnow()) if self.completed else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'completed': self.completed,
            'createdAt': self.created_at.isoformat(),
            'completedAt': self.completed_at.isoformat() if self.completed_at else None,
        }
