"""View controller: turns user intents into store calls and render steps.

Each intent mutates the store first (which persists), then issues only the
render instructions that mutation needs. Placeholder visibility is tracked
here so show/hide are sent on transitions only.

Edit sub-state is per pending task: VIEWING (default) or EDITING.
Completed tasks never enter EDITING.
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import List, Optional, Set

from models import ListName, Task
from renderer import Renderer
from task_store import TaskStore

logger = logging.getLogger(__name__)


class EditState(str, Enum):
    VIEWING = "viewing"
    EDITING = "editing"


class ViewController:
    def __init__(self, store: TaskStore, renderer: Renderer):
        self.store = store
        self.renderer = renderer
        self._editing: Set[str] = set()
        self._placeholders: Set[ListName] = set()

    # -------------------- full refresh --------------------
    def render_all(self) -> None:
        """Redraw both lists from the store (start-up only)."""
        self._editing.clear()
        for name in ListName:
            self.renderer.clear(name)
        self._placeholders.clear()
        for task in self.store.pending():
            self.renderer.render_item(task, ListName.PENDING)
        for task in self.store.completed():
            self.renderer.render_item(task, ListName.COMPLETED)
        self._refresh_summary()

    # -------------------- structural intents --------------------
    def add(self, title: str) -> Optional[Task]:
        task = self.store.add(title)
        if task is None:
            return None
        self._render_into(task, ListName.PENDING)
        self._refresh_summary()
        return task

    def delete(self, task_id: str) -> None:
        if self.store.get(task_id) is None:
            return
        self.store.delete(task_id)
        self._editing.discard(task_id)
        self.renderer.remove_item(task_id)
        self._refresh_summary()

    def toggle_complete(self, task_id: str) -> None:
        task = self.store.get(task_id)
        if task is None:
            return
        self.store.toggle_complete(task_id)
        self._editing.discard(task_id)
        self.renderer.remove_item(task_id)
        self._render_into(task, task.list_name)
        self._refresh_summary()

    # -------------------- edit sub-state --------------------
    def edit_state(self, task_id: str) -> EditState:
        return EditState.EDITING if task_id in self._editing else EditState.VIEWING

    def editing_ids(self) -> List[str]:
        return [t.id for t in self.store.pending() if t.id in self._editing]

    def begin_edit(self, task_id: str) -> bool:
        task = self.store.get(task_id)
        if task is None or task.completed:
            return False
        self._editing.add(task_id)
        self.renderer.open_editor(task_id, task.title)
        return True

    def commit_edit(self, task_id: str, new_title: str) -> bool:
        """Apply the edited title; False if rejected (still editing) or not editing."""
        if task_id not in self._editing:
            return False
        title = (new_title or '').strip()
        if not title:
            logger.debug("Rejected empty title for id=%s", task_id)
            return False
        self.store.update(task_id, title)
        self._editing.discard(task_id)
        self.renderer.update_title(task_id, title)
        self.renderer.close_editor(task_id)
        return True

    def cancel_edit(self, task_id: str) -> None:
        if task_id not in self._editing:
            return
        self._editing.discard(task_id)
        self.renderer.close_editor(task_id)

    # -------------------- helpers --------------------
    def _render_into(self, task: Task, target: ListName) -> None:
        if target in self._placeholders:
            self.renderer.hide_empty_placeholder(target)
            self._placeholders.discard(target)
        self.renderer.render_item(task, target)

    def _refresh_summary(self) -> None:
        counts = {
            ListName.PENDING: len(self.store.pending()),
            ListName.COMPLETED: len(self.store.completed()),
        }
        self.renderer.set_counts(counts[ListName.PENDING], counts[ListName.COMPLETED])
        for name, count in counts.items():
            if count == 0 and name not in self._placeholders:
                self.renderer.show_empty_placeholder(name)
                self._placeholders.add(name)
            elif count > 0 and name in self._placeholders:
                self.renderer.hide_empty_placeholder(name)
                self._placeholders.discard(name)
