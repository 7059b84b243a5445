"""Renderer port: what the view controller needs from a presentation layer.

The controller only talks to this Protocol, so it can be driven without
any terminal attached (tests use a recording fake).
"""
from __future__ import annotations
from typing import Protocol

from models import ListName, Task


class Renderer(Protocol):
    def clear(self, target_list: ListName) -> None: ...

    def render_item(self, task: Task, target_list: ListName) -> None:
        """Append an item for ``task`` at the end of ``target_list``."""
        ...

    def remove_item(self, task_id: str) -> None: ...

    def update_title(self, task_id: str, title: str) -> None: ...

    def show_empty_placeholder(self, target_list: ListName) -> None: ...

    def hide_empty_placeholder(self, target_list: ListName) -> None: ...

    def set_counts(self, pending_count: int, completed_count: int) -> None: ...

    def open_editor(self, task_id: str, text: str) -> None:
        """Show an edit field for the item, pre-filled with ``text`` and focused."""
        ...

    def close_editor(self, task_id: str) -> None: ...
