"""Explicit state container for the interactive UI.

One ``TuiState`` is owned by the event loop and handed to every action
function; nothing else holds UI state.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional

from prompt_toolkit.buffer import Buffer
from prompt_toolkit.clipboard import Clipboard, InMemoryClipboard

from application.history import UndoHistory
from application.task_store import TaskStore
from application.view import ActiveFilter, SortMode, compute_visible
from core.errors import TaskNotFoundError, ValidationError
from core.priority import PriorityMode
from core.task import Task, today_iso
from infrastructure.todo_file_parser import FORMAT_NONE

from .tui_elements import element_count
from .tui_entry import Scheduler, SearchDebouncer, new_buffer
from .tui_themes import DEFAULT_THEME


class Panel(str, Enum):
    TASKS = "tasks"
    PRIORITIES = "priorities"
    STATS = "stats"
    PROJECTS = "projects"
    CONTEXTS = "contexts"

    @property
    def label(self) -> str:
        return self.value.capitalize()


PANEL_RING = (Panel.TASKS, Panel.PRIORITIES, Panel.STATS, Panel.PROJECTS, Panel.CONTEXTS)


class EntryMode(str, Enum):
    NEW_TASK = "new-task"
    EDIT_TASK = "edit-task"
    SEARCH = "search"
    ADD_PROJECT = "add-project"
    ADD_CONTEXT = "add-context"
    ADD_DUE_DATE = "add-due-date"
    CONFIRM = "confirm"
    COMMAND = "command"


class Overlay(str, Enum):
    NONE = "none"
    HELP = "help"
    SETTINGS = "settings"
    THEMES = "themes"
    FORMAT_MISMATCH = "format-mismatch"


ENTRY_HINT = "Enter to save, ESC to cancel"


@dataclass
class TextEntry:
    mode: EntryMode
    prompt: str
    buffer: Buffer = field(default_factory=new_buffer)
    target_id: Optional[int] = None
    on_yes: Optional[Callable[["TuiState"], None]] = None
    on_no: Optional[Callable[["TuiState"], None]] = None
    saved_search: str = ""
    saved_cursor: int = 0
    hint: str = ENTRY_HINT

    @property
    def text(self) -> str:
        return self.buffer.text


SettingsSaver = Callable[[str, str], None]


class TuiState:
    def __init__(
        self,
        store: TaskStore,
        *,
        history: Optional[UndoHistory] = None,
        priority_mode: PriorityMode = PriorityMode.LETTER,
        theme_name: str = DEFAULT_THEME,
        today: Callable[[], str] = today_iso,
        settings_saver: Optional[SettingsSaver] = None,
        search_scheduler: Optional[Scheduler] = None,
        clipboard: Optional[Clipboard] = None,
    ):
        self.store = store
        self.history = history or UndoHistory()
        self.priority_mode = priority_mode
        self.theme_name = theme_name
        self.today = today
        self.settings_saver = settings_saver
        self.clipboard = clipboard or InMemoryClipboard()
        self.debouncer = SearchDebouncer(search_scheduler)

        self.focus = Panel.TASKS
        self.panel_cursors: Dict[Panel, int] = {panel: 0 for panel in PANEL_RING}
        self.element_index = 0

        self.active_filter: Optional[ActiveFilter] = None
        self.search = ""
        self.show_completed = False
        self.sort_mode = SortMode.PRIORITY
        self.highlight_overdue = True
        self.visible: List[Task] = []

        self.entry: Optional[TextEntry] = None
        self.overlay = Overlay.NONE
        self.settings_index = 0
        self.theme_index = 0
        self.dialog_index = 0
        self.file_format = FORMAT_NONE

        self.yanked: Optional[Task] = None
        self.status_message = ""
        self.should_exit = False
        self.refresh_view()

    # Cursor helpers ------------------------------------------------------

    @property
    def task_cursor(self) -> int:
        return self.panel_cursors[Panel.TASKS]

    @task_cursor.setter
    def task_cursor(self, value: int) -> None:
        self.panel_cursors[Panel.TASKS] = value

    @property
    def current_task(self) -> Optional[Task]:
        if 0 <= self.task_cursor < len(self.visible):
            return self.visible[self.task_cursor]
        return None

    @property
    def editing(self) -> bool:
        return self.entry is not None

    def select_task(self, task_id: int) -> None:
        for index, task in enumerate(self.visible):
            if task.id == task_id:
                self.task_cursor = index
                self.element_index = 0
                return

    # View ----------------------------------------------------------------

    def refresh_view(self) -> None:
        """Recompute the visible list and pull cursors back into range."""
        self.visible = compute_visible(
            self.store.tasks,
            today=self.today(),
            active_filter=self.active_filter,
            search=self.search,
            show_completed=self.show_completed,
            sort_mode=self.sort_mode,
        )
        self.clamp_cursors()

    def clamp_cursors(self) -> None:
        total = len(self.visible)
        self.task_cursor = max(0, min(self.task_cursor, total - 1)) if total else 0
        task = self.current_task
        if task is None:
            self.element_index = 0
        else:
            self.element_index = max(0, min(self.element_index, element_count(task) - 1))

    @contextmanager
    def mutate(self) -> Iterator[None]:
        """Snapshot for undo, let the caller change the store, then recompute the view."""
        self.history.snapshot(self.store.tasks)
        try:
            yield
        except (TaskNotFoundError, ValidationError):
            # nothing changed, drop the snapshot
            self.history.pop()
            raise
        finally:
            self.refresh_view()

    # Misc ----------------------------------------------------------------

    def set_status_message(self, message: str) -> None:
        self.status_message = message

    def save_settings(self) -> None:
        if self.settings_saver is not None:
            self.settings_saver(self.priority_mode.value, self.theme_name)
