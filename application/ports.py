from typing import List, Protocol

from core.task import Task


class TaskRepository(Protocol):
    def load(self) -> List[Task]:
        ...

    def save(self, tasks: List[Task]) -> None:
        ...
