"""Filter & sort engine: pure functions from task state to the visible list."""

from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Iterable, List, Optional

from core.task import Task


class FilterKind(str, Enum):
    PRIORITY = "priority"
    PROJECT = "project"
    CONTEXT = "context"
    DUE = "due"
    DONE_TODAY = "done-today"
    ACTIVE = "active"


class SortMode(str, Enum):
    PRIORITY = "priority"
    DATE = "date"
    PROJECT = "project"
    CONTEXT = "context"

    @classmethod
    def from_string(cls, value: str) -> Optional["SortMode"]:
        token = (value or "").strip().lower()
        for mode in cls:
            if mode.value == token:
                return mode
        return None

    def next(self) -> "SortMode":
        order = list(SortMode)
        return order[(order.index(self) + 1) % len(order)]


@dataclass(frozen=True)
class ActiveFilter:
    kind: FilterKind
    value: str = ""

    @property
    def label(self) -> str:
        if self.kind == FilterKind.PRIORITY:
            return f"({self.value})"
        if self.kind == FilterKind.PROJECT:
            return f"+{self.value}"
        if self.kind == FilterKind.CONTEXT:
            return f"@{self.value}"
        if self.kind == FilterKind.DUE:
            return "DUE/OVERDUE"
        if self.kind == FilterKind.DONE_TODAY:
            return "DONE TODAY"
        return "ACTIVE"


def matches_filter(task: Task, active: ActiveFilter, today: str) -> bool:
    kind = active.kind
    if kind == FilterKind.PRIORITY:
        return task.priority == active.value
    if kind == FilterKind.PROJECT:
        return active.value in task.projects
    if kind == FilterKind.CONTEXT:
        return active.value in task.contexts
    if kind == FilterKind.DUE:
        return task.is_due_or_overdue(today)
    if kind == FilterKind.DONE_TODAY:
        return task.completed_on(today)
    return not task.completed


def matches_search(task: Task, search: str) -> bool:
    needle = search.lower()
    if needle in task.text.lower():
        return True
    return any(needle in tag.lower() for tag in task.contexts + task.projects)


def _sort_key_value(task: Task, mode: SortMode) -> Optional[str]:
    if mode == SortMode.PRIORITY:
        return task.priority
    if mode == SortMode.DATE:
        return task.creation_date
    if mode == SortMode.PROJECT:
        return task.projects[0] if task.projects else None
    return task.contexts[0] if task.contexts else None


def _compare(a: Task, b: Task, mode: SortMode) -> int:
    if a.completed != b.completed:
        return 1 if a.completed else -1
    key_a = _sort_key_value(a, mode)
    key_b = _sort_key_value(b, mode)
    if key_a != key_b:
        if key_a is None:
            return 1
        if key_b is None:
            return -1
        return -1 if key_a < key_b else 1
    return a.id - b.id


def sort_tasks(tasks: Iterable[Task], mode: SortMode) -> List[Task]:
    """Active before completed, then by the sort key (missing last), then by id."""
    return sorted(tasks, key=cmp_to_key(lambda a, b: _compare(a, b, mode)))


def compute_visible(
    tasks: Iterable[Task],
    *,
    today: str,
    active_filter: Optional[ActiveFilter] = None,
    search: str = "",
    show_completed: bool = False,
    sort_mode: SortMode = SortMode.PRIORITY,
) -> List[Task]:
    if active_filter is not None:
        selected = [task for task in tasks if matches_filter(task, active_filter, today)]
    elif show_completed:
        selected = list(tasks)
    else:
        selected = [task for task in tasks if not task.completed]
    if search:
        selected = [task for task in selected if matches_search(task, search)]
    return sort_tasks(selected, sort_mode)
