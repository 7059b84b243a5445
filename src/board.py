"""Terminal board: a Renderer that draws the pending and completed lists.

The board keeps its own row model, updated only through the Renderer
calls issued by the view controller, and draws it as two side-by-side
columns. Items are numbered across both columns in display order
(pending first); the CLI addresses tasks by these numbers.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Mapping, Optional, Set, Tuple
import re, shutil

from models import ListName, Task
from theme import (
    color, HEADER_COLOR, LIST_COLOR, ID_COLOR, EMPTY_COLOR, DATE_COLOR, EDIT_COLOR, BOLD,
)

COLUMNS: Tuple[ListName, ...] = (ListName.PENDING, ListName.COMPLETED)
HEADER_TITLES: Dict[ListName, str] = {ListName.PENDING: "PENDING", ListName.COMPLETED: "COMPLETED"}
PLACEHOLDERS: Dict[ListName, str] = {
    ListName.PENDING: "No pending tasks",
    ListName.COMPLETED: "No completed tasks",
}
MIN_COL_WIDTH = 24
SEP = " | "
EDIT_MARK = "✎ "
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

Line = Tuple[str, str]  # (visible text, styled text)


def format_date(dt: Optional[datetime]) -> str:
    """'Oct 19, 2026, 10:30 AM' in local time; '' for None."""
    if dt is None:
        return ''
    local = dt.astimezone()
    return f"{local:%b} {local.day}, {local:%Y}, {local:%I:%M %p}"


@dataclass
class Item:
    task_id: str
    title: str
    completed: bool
    created_at: datetime
    completed_at: Optional[datetime] = None

    @classmethod
    def from_task(cls, task: Task) -> "Item":
        return cls(task.id, task.title, task.completed, task.created_at, task.completed_at)


class TerminalBoard:
    def __init__(self) -> None:
        self.columns: Dict[ListName, List[Item]] = {name: [] for name in COLUMNS}
        self.placeholders: Set[ListName] = set()
        self.counts: Dict[ListName, int] = {name: 0 for name in COLUMNS}
        self.editors: Dict[str, str] = {}

    # -------------------- Renderer --------------------
    def clear(self, target_list: ListName) -> None:
        for item in self.columns[target_list]:
            self.editors.pop(item.task_id, None)
        self.columns[target_list] = []
        self.placeholders.discard(target_list)

    def render_item(self, task: Task, target_list: ListName) -> None:
        self.columns[target_list].append(Item.from_task(task))

    def remove_item(self, task_id: str) -> None:
        for name in COLUMNS:
            self.columns[name] = [i for i in self.columns[name] if i.task_id != task_id]
        self.editors.pop(task_id, None)

    def update_title(self, task_id: str, title: str) -> None:
        item = self.find(task_id)
        if item is not None:
            item.title = title

    def show_empty_placeholder(self, target_list: ListName) -> None:
        self.placeholders.add(target_list)

    def hide_empty_placeholder(self, target_list: ListName) -> None:
        self.placeholders.discard(target_list)

    def set_counts(self, pending_count: int, completed_count: int) -> None:
        self.counts[ListName.PENDING] = pending_count
        self.counts[ListName.COMPLETED] = completed_count

    def open_editor(self, task_id: str, text: str) -> None:
        self.editors[task_id] = text

    def close_editor(self, task_id: str) -> None:
        self.editors.pop(task_id, None)

    # -------------------- lookup --------------------
    def find(self, task_id: str) -> Optional[Item]:
        for name in COLUMNS:
            for item in self.columns[name]:
                if item.task_id == task_id:
                    return item
        return None

    def numbered_ids(self) -> List[str]:
        return [item.task_id for name in COLUMNS for item in self.columns[name]]

    def task_id_for(self, number: int) -> Optional[str]:
        ids = self.numbered_ids()
        if 1 <= number <= len(ids):
            return ids[number - 1]
        return None

    def editor_text(self, task_id: str) -> Optional[str]:
        return self.editors.get(task_id)

    # -------------------- display --------------------
    def display(self, echo: Callable[[str], None] = print) -> None:
        term_width = shutil.get_terminal_size((120, 30)).columns
        for line in self.render_lines(term_width):
            echo(line)

    def render_lines(self, term_width: int) -> List[str]:
        numbers = {tid: n for n, tid in enumerate(self.numbered_ids(), start=1)}
        widths = self._compute_column_widths(term_width, numbers)
        cells = {name: self._column_lines(name, widths[name], numbers) for name in COLUMNS}
        rows = max(len(cells[name]) for name in COLUMNS)
        header = SEP.join(self._pad(color(self._header(name), HEADER_COLOR, BOLD), widths[name]) for name in COLUMNS)
        rule = SEP.join(color('-' * widths[name], HEADER_COLOR) for name in COLUMNS)
        out = [header, rule]
        for r in range(rows):
            row: List[str] = []
            for name in COLUMNS:
                col = cells[name]
                row.append(self._pad(col[r][1], widths[name]) if r < len(col) else ' ' * widths[name])
            out.append(SEP.join(row).rstrip())
        return out

    def _header(self, name: ListName) -> str:
        return f"{HEADER_TITLES[name]} ({self.counts[name]})"

    # ---- width calculation ----
    def _compute_column_widths(self, term_width: int, numbers: Mapping[str, int]) -> Dict[ListName, int]:
        sep_total = len(SEP) * (len(COLUMNS) - 1)
        widths: Dict[ListName, int] = {}
        for name in COLUMNS:
            longest = len(self._header(name))
            if name in self.placeholders:
                longest = max(longest, len(PLACEHOLDERS[name]))
            for item in self.columns[name]:
                prefix = len(f"{numbers[item.task_id]}. ")
                for text in self._item_texts(item):
                    longest = max(longest, prefix + len(text))
            widths[name] = max(MIN_COL_WIDTH, longest)
        total = sum(widths.values()) + sep_total
        if total > term_width:
            target_space = max(term_width - sep_total, len(COLUMNS) * MIN_COL_WIDTH)
            while sum(widths.values()) > target_space:
                widest = max(COLUMNS, key=lambda n: widths[n])
                if widths[widest] <= MIN_COL_WIDTH:
                    break
                widths[widest] -= 1
        else:
            extra = term_width - total
            i = 0
            while extra > 0:
                widths[COLUMNS[i % len(COLUMNS)]] += 1
                extra -= 1
                i += 1
        return widths

    def _item_texts(self, item: Item) -> List[str]:
        texts = [item.title, f"Created: {format_date(item.created_at)}"]
        if item.completed:
            texts.append(f"Completed: {format_date(item.completed_at)}")
        if item.task_id in self.editors:
            texts.append(EDIT_MARK + self.editors[item.task_id])
        return texts

    # ---- wrapping ----
    def _column_lines(self, name: ListName, width: int, numbers: Mapping[str, int]) -> List[Line]:
        if not self.columns[name]:
            if name in self.placeholders:
                return [(PLACEHOLDERS[name], color(PLACEHOLDERS[name], EMPTY_COLOR))]
            return []
        lines: List[Line] = []
        for item in self.columns[name]:
            lines.extend(self._item_lines(item, name, width, numbers[item.task_id]))
        return lines

    def _item_lines(self, item: Item, name: ListName, width: int, number: int) -> List[Line]:
        prefix_visible = f"{number}. "
        prefix_colored = color(f"{number}.", ID_COLOR) + ' '
        indent = ' ' * len(prefix_visible)
        limit = max(1, width - len(prefix_visible))
        list_col = LIST_COLOR.get(name, '')
        lines: List[Line] = []
        for idx, raw in enumerate(wrap_words(item.title, limit) or ['<untitled>']):
            lead_v, lead_c = (prefix_visible, prefix_colored) if idx == 0 else (indent, indent)
            lines.append((lead_v + raw, lead_c + color(raw, list_col)))
        for text in self._item_texts(item)[1:]:
            style = EDIT_COLOR if text.startswith(EDIT_MARK) else DATE_COLOR
            for raw in wrap_words(text, limit):
                lines.append((indent + raw, indent + color(raw, style)))
        return lines

    @classmethod
    def _pad(cls, styled: str, width: int) -> str:
        pad = width - cls._visible_len(styled)
        return styled + ' ' * pad if pad > 0 else styled

    @staticmethod
    def _visible_len(s: str) -> int:
        return len(ANSI_RE.sub('', s))

    def __str__(self) -> str:
        return (f'Pending: {self.counts[ListName.PENDING]} tasks, '
                f'Completed: {self.counts[ListName.COMPLETED]} tasks')


def wrap_words(text: str, limit: int) -> List[str]:
    """Greedy word wrap; a single word longer than ``limit`` gets its own line."""
    lines: List[str] = []
    current = ''
    for w in text.split():
        candidate = w if not current else current + ' ' + w
        if len(candidate) <= limit:
            current = candidate
        else:
            if current:
                lines.append(current)
            current = w
    if current:
        lines.append(current)
    return lines
