"""Main entry point for the terminal to-do list.

Builds every collaborator explicitly (storage -> store -> board ->
controller -> CLI) and hands them to each other.
"""
import logging
from pathlib import Path
from typing import Optional

import click

from board import TerminalBoard
from cli import CLI
from controller import ViewController
from logging_setup import setup_logging
from storage import DEFAULT_DATA_DIR, FileStorage
from task_store import TaskStore

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


def build_app(data_dir: Path, alt_screen: Optional[bool] = None) -> CLI:
    store = TaskStore(FileStorage(data_dir))
    board = TerminalBoard()
    controller = ViewController(store, board)
    controller.render_all()
    return CLI(controller, board, alt_screen=alt_screen)


@click.command()
@click.option('--data-dir', type=click.Path(file_okay=False, path_type=Path),
              envvar='TODO_DATA_DIR', default=DEFAULT_DATA_DIR, show_default=True,
              help='Directory holding tasks.json and the log file.')
@click.option('--alt-screen/--no-alt-screen', default=None,
              help='Use the terminal alternate screen (default: TODO_ALT_SCREEN or on).')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False),
              envvar='TODO_LOG_LEVEL', default='WARNING', show_default=True,
              help='Console log level.')
def main(data_dir: Path, alt_screen: Optional[bool], log_level: str) -> None:
    """Interactive terminal to-do list."""
    log_file = setup_logging(log_dir=data_dir, console_level=getattr(logging, log_level.upper()))
    logger.info("Starting; data_dir=%s log=%s", data_dir, log_file)
    build_app(data_dir, alt_screen).run()


if __name__ == "__main__":
    main()
