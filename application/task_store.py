import logging
from typing import Iterable, List, Optional

from application.ports import TaskRepository
from core.errors import TaskNotFoundError, ValidationError
from core.task import Task, today_iso

logger = logging.getLogger("todo_tui.store")

PATCHABLE_FIELDS = ("completed", "priority", "creation_date", "completion_date", "text")


class TaskStore:
    """Ordered in-memory task collection with write-through persistence.

    Without a repository the store is memory-only. Every mutation writes the
    whole collection back through the repository; a failed write raises
    ``StorageError`` after the in-memory change has already been applied.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None, repository: Optional[TaskRepository] = None):
        self.repository = repository
        self._tasks: List[Task] = list(tasks or [])

    @classmethod
    def load(cls, repository: TaskRepository) -> "TaskStore":
        return cls(repository.load(), repository=repository)

    @property
    def tasks(self) -> List[Task]:
        return self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def _max_id(self) -> int:
        return max((task.id for task in self._tasks), default=0)

    def next_id(self) -> int:
        return self._max_id() + 1

    def get(self, task_id: int) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def find(self, task_id: int) -> Optional[Task]:
        try:
            return self.get(task_id)
        except TaskNotFoundError:
            return None

    def save(self) -> None:
        if self.repository is not None:
            self.repository.save(self._tasks)

    def reload(self) -> None:
        if self.repository is None:
            return
        self._tasks = list(self.repository.load())

    # Mutations -----------------------------------------------------------

    def add(self, task: Task) -> Task:
        task.id = self.next_id()
        if not task.creation_date:
            task.creation_date = today_iso()
        task.rederive()
        self._tasks.append(task)
        self.save()
        return task

    def update(self, task_id: int, **patch) -> Task:
        unknown = set(patch) - set(PATCHABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot patch fields: {', '.join(sorted(unknown))}")
        task = self.get(task_id)
        for name, value in patch.items():
            setattr(task, name, value)
        if "text" in patch:
            task.rederive()
        self.save()
        return task

    def delete(self, task_id: int) -> Task:
        task = self.get(task_id)
        self._tasks.remove(task)
        self.save()
        return task

    def toggle_completion(self, task_id: int, today: Optional[str] = None) -> Task:
        task = self.get(task_id)
        task.completed = not task.completed
        task.completion_date = (today or today_iso()) if task.completed else None
        self.save()
        return task

    def replace_all(self, tasks: Iterable[Task]) -> None:
        self._tasks = list(tasks)
        self.save()

    def purge_completed(self) -> int:
        kept = [task for task in self._tasks if not task.completed]
        removed = len(self._tasks) - len(kept)
        if removed:
            self.replace_all(kept)
            logger.info("purged %d completed tasks", removed)
        return removed
