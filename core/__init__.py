from .errors import StartupError, StorageError, TaskNotFoundError, TodoError, ValidationError
from .priority import (
    LETTER_PRIORITIES,
    NUMBER_PRIORITIES,
    PriorityMode,
    is_valid_priority,
    priority_symbols,
)
from .task import Task, extract_tags, strip_tags, today_iso

__all__ = [
    "Task",
    "extract_tags",
    "strip_tags",
    "today_iso",
    # Priorities
    "PriorityMode",
    "LETTER_PRIORITIES",
    "NUMBER_PRIORITIES",
    "priority_symbols",
    "is_valid_priority",
    # Errors
    "TodoError",
    "StartupError",
    "TaskNotFoundError",
    "ValidationError",
    "StorageError",
]
