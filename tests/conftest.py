from typing import List

import pytest

from application.task_store import TaskStore
from core.task import Task
from infrastructure.todo_file_parser import parse_file
from interface.tui_keymap import dispatch_key
from interface.tui_state import TuiState

TODAY = "2025-06-10"


class MemoryRepository:
    def __init__(self, tasks=None):
        self.tasks: List[Task] = list(tasks or [])
        self.saves = 0

    def load(self) -> List[Task]:
        return [task.clone() for task in self.tasks]

    def save(self, tasks: List[Task]) -> None:
        self.saves += 1
        self.tasks = [task.clone() for task in tasks]


@pytest.fixture
def make_state():
    """Build a headless TuiState over an in-memory repository from todo.txt lines."""

    def _make(*lines, **kwargs) -> TuiState:
        repo = MemoryRepository(parse_file("\n".join(lines)))
        store = TaskStore.load(repo)
        kwargs.setdefault("today", lambda: TODAY)
        return TuiState(store, **kwargs)

    return _make


@pytest.fixture
def press():
    def _press(state: TuiState, *keys: str) -> None:
        for key in keys:
            dispatch_key(state, key)

    return _press


@pytest.fixture
def type_text(press):
    def _type(state: TuiState, text: str) -> None:
        press(state, *["space" if ch == " " else ch for ch in text])

    return _type
