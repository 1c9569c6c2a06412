import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from application.ports import TaskRepository
from core.errors import StartupError, StorageError
from core.task import Task
from infrastructure.todo_file_parser import TodoFileParser

logger = logging.getLogger("todo_tui.storage")

TODO_FILE_ENV = "TODO_FILE"
TODO_FILENAME = "todo.txt"

STARTUP_HINT = (
    "No todo.txt file found.\n"
    "Create ./todo.txt or ~/todo.txt, pass one explicitly with `todo -f path/to/todo.txt`,\n"
    "or point the TODO_FILE environment variable at it: export TODO_FILE=~/todo.txt"
)


def resolve_todo_path(explicit: Union[str, Path, None] = None) -> Path:
    """Unified resolver for the backing todo.txt file.

    Priority:
    1. Explicit path (``-f/--file``), whether or not it exists yet.
    2. TODO_FILE env variable.
    3. ./todo.txt when it exists.
    4. ~/todo.txt when it exists.
    """
    if explicit:
        return Path(explicit).expanduser()

    env_path = os.environ.get(TODO_FILE_ENV)
    if env_path:
        return Path(env_path).expanduser()

    local = Path.cwd() / TODO_FILENAME
    if local.exists():
        return local

    home = Path.home() / TODO_FILENAME
    if home.exists():
        return home

    raise StartupError(STARTUP_HINT)


class FileTaskRepository(TaskRepository):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> List[Task]:
        """Parse the backing file; a missing file is an empty task list."""
        if not self.path.exists():
            logger.debug("todo file %s does not exist yet", self.path)
            return []
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}", self.path) from exc
        tasks = TodoFileParser.parse_file(content)
        logger.debug("loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: List[Task]) -> None:
        content = TodoFileParser.serialize_file(tasks)
        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
            if self.path.exists():
                shutil.copymode(self.path, tmp_name)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            logger.error("failed to write %s: %s", self.path, exc)
            raise StorageError(f"Cannot write {self.path}: {exc}", self.path) from exc
        finally:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        logger.debug("saved %d tasks to %s", len(tasks), self.path)
