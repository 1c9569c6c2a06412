"""Bounded undo history of whole task-list snapshots."""

from typing import List, Optional

from core.task import Task

MAX_HISTORY_SIZE = 50


class UndoHistory:
    def __init__(self, max_size: int = MAX_HISTORY_SIZE):
        self.max_size = max_size
        self._stack: List[List[Task]] = []

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def can_undo(self) -> bool:
        return bool(self._stack)

    def snapshot(self, tasks: List[Task]) -> None:
        """Push a deep copy of ``tasks``; the oldest entry is evicted on overflow."""
        self._stack.append([task.clone() for task in tasks])
        if len(self._stack) > self.max_size:
            del self._stack[0 : len(self._stack) - self.max_size]

    def pop(self) -> Optional[List[Task]]:
        if not self._stack:
            return None
        return self._stack.pop()

    def clear(self) -> None:
        self._stack.clear()
