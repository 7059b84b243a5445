"""Command-line interface loop for the to-do list.

Typed commands become controller intents; the board is cleared and
redrawn after each one. Tasks are addressed by the numbers shown on the
board. Every mutation is persisted by the store, so exiting needs no
extra save step.
"""
import logging
import os
from typing import Callable, Optional

import click

from board import TerminalBoard
from controller import EditState, ViewController

logger = logging.getLogger(__name__)

CANCEL_WORD = ':cancel'


# --- terminal control helpers ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home); 3J first
# is more reliable in some terminals.
def _clear_screen() -> None:
    click.echo("\033[3J\033[H\033[2J\033[H", nl=False)


def _enter_alt_screen() -> None:
    click.echo("\033[?1049h", nl=False)


def _leave_alt_screen() -> None:
    click.echo("\033[?1049l", nl=False)


def truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


class CLI:
    def __init__(self, controller: ViewController, board: TerminalBoard, alt_screen: Optional[bool] = None):
        self.controller = controller
        self.board = board
        # Alt screen default ON; disable with TODO_ALT_SCREEN=0 (or false/no/off)
        if alt_screen is None:
            alt_screen = truthy_env(os.getenv("TODO_ALT_SCREEN"), True)
        self.alt_screen: bool = alt_screen
        self.notice: Optional[str] = None

    def run(self) -> None:
        """Main REPL loop; the board is cleared/redrawn each cycle."""
        exit_message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                self._redraw()
                line = input("\n: ").strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return to the list...")
                    continue
                if lower == 'exit':
                    exit_message = "Goodbye."
                    break
                self.handle_command(line)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                click.echo(exit_message)

    def _redraw(self) -> None:
        _clear_screen()
        click.echo("To-do list:")
        self.board.display(click.echo)
        if self.notice:
            click.echo(f"\n{self.notice}")
            self.notice = None

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> None:
        tokens = line.split()
        if not tokens:
            return
        cmd = tokens[0].lower()
        logger.debug("Command %r", cmd)
        handlers: dict[str, Callable[[list[str]], None]] = {
            'add': self._cmd_add,
            'done': self._cmd_toggle,
            'x': self._cmd_toggle,
            'rm': self._cmd_rm,
            'edit': self._cmd_edit,
        }
        handler = handlers.get(cmd)
        if handler is None:
            self.notice = "Unknown command. Type 'help' for instructions."
            return
        handler(tokens)

    def _resolve(self, tokens: list[str], usage: str) -> Optional[str]:
        if len(tokens) != 2:
            self.notice = usage
            return None
        raw = tokens[1].rstrip('.')
        if not raw.isdigit():
            self.notice = "Invalid number."
            return None
        task_id = self.board.task_id_for(int(raw))
        if task_id is None:
            self.notice = f"No task #{raw}."
        return task_id

    # ---- individual command helpers ----
    def _cmd_add(self, tokens: list[str]) -> None:
        if len(tokens) > 1:  # inline shorthand
            title = ' '.join(tokens[1:])
        else:
            title = input("Enter task title: ")
        if self.controller.add(title) is None:
            self.notice = "Title required."

    def _cmd_toggle(self, tokens: list[str]) -> None:
        task_id = self._resolve(tokens, "Usage: done <n>")
        if task_id is not None:
            self.controller.toggle_complete(task_id)

    def _cmd_rm(self, tokens: list[str]) -> None:
        task_id = self._resolve(tokens, "Usage: rm <n>")
        if task_id is not None:
            self.controller.delete(task_id)

    def _cmd_edit(self, tokens: list[str]) -> None:
        task_id = self._resolve(tokens, "Usage: edit <n>")
        if task_id is None:
            return
        if not self.controller.begin_edit(task_id):
            self.notice = "Completed tasks cannot be edited."
            return
        self.edit_loop(task_id)

    def edit_loop(self, task_id: str) -> None:
        """Prompt until the edit is committed or cancelled.

        Enter keeps the pre-filled title; ':cancel', Ctrl-C or EOF cancels.
        """
        while self.controller.edit_state(task_id) is EditState.EDITING:
            self._redraw()
            draft = self.board.editor_text(task_id) or ''
            try:
                text = click.prompt(f"\nNew title ({CANCEL_WORD} to discard)", default=draft, show_default=False)
            except click.exceptions.Abort:
                text = CANCEL_WORD
            if text.strip() == CANCEL_WORD:
                self.controller.cancel_edit(task_id)
            elif not self.controller.commit_edit(task_id, text):
                self.notice = "Title required."

    # -------------------- user-interactive flows --------------------
    def _help(self) -> None:
        click.echo("Commands:")
        click.echo("  add                 Add a new task (prompts for title)")
        click.echo("  add <title...>      Shorthand add with inline title (e.g., add buy milk)")
        click.echo("  done <n>            Toggle task n between pending and completed (alias: x)")
        click.echo("  edit <n>            Edit the title of pending task n (':cancel' to discard)")
        click.echo("  rm <n>              Delete task n")
        click.echo("  help                Show this help (press Enter to return)")
        click.echo("  exit                Exit (tasks are saved after every change)")
