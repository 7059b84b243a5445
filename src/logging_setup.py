"""Logging configuration for the terminal to-do list.

The board redraws the whole screen, so the console handler defaults to
WARNING and everything else goes to a log file in the data directory.
"""
from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Union

LOG_FILE_NAME = 'todo.log'
APP_LOGGERS = ('board', 'cli', 'controller', 'main', 'models', 'storage', 'task_store', 'theme')


class _ConsoleNoiseFilter(logging.Filter):
    """Keep app records; third-party and py.warnings only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.split('.', 1)[0] in APP_LOGGERS:
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: Union[str, Path],
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """Configure the root logger once, before the first record.

    Returns the path of the log file.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
