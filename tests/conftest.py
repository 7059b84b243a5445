# tests/conftest.py

from __future__ import annotations

import pytest

from board import TerminalBoard
from controller import ViewController
from task_store import TaskStore

from .fakes import FakeClock, MemoryStorage, RecordingRenderer, SequentialIds


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(storage: MemoryStorage, clock: FakeClock) -> TaskStore:
    """Empty store on in-memory storage with deterministic time and ids."""
    return TaskStore(storage, clock=clock, id_factory=SequentialIds())


@pytest.fixture()
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def controller(store: TaskStore, renderer: RecordingRenderer) -> ViewController:
    ctl = ViewController(store, renderer)
    ctl.render_all()
    renderer.reset()
    return ctl


@pytest.fixture()
def board_controller(store: TaskStore) -> tuple[ViewController, TerminalBoard]:
    """Controller driving the real terminal board."""
    board = TerminalBoard()
    ctl = ViewController(store, board)
    ctl.render_all()
    return ctl, board
