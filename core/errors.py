"""Error taxonomy shared by the store, storage and interface layers."""


class TodoError(Exception):
    """Base class for todo-tui errors."""


class StartupError(TodoError):
    """No usable backing file could be resolved."""


class TaskNotFoundError(TodoError, KeyError):
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")

    def __str__(self) -> str:
        return self.args[0]


class ValidationError(TodoError, ValueError):
    """Malformed user input (bad date, priority outside the active mode, ...)."""


class StorageError(TodoError):
    """Reading or writing the backing file failed."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path
