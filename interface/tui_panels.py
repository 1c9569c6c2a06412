"""Panel model: focus ring, per-panel items and the filter each selection applies."""

from collections import Counter
from typing import Dict, List, Optional, Tuple

from application.view import ActiveFilter, FilterKind
from core.priority import priority_symbols
from core.task import Task

from .tui_elements import element_count
from .tui_state import PANEL_RING, Panel, TuiState

STATS_FILTERS = (FilterKind.DUE, FilterKind.DONE_TODAY, FilterKind.ACTIVE)


def priority_items(state: TuiState) -> List[str]:
    return list(priority_symbols(state.priority_mode))


def priority_counts(tasks: List[Task]) -> Dict[str, int]:
    """Priority histogram over active (not completed) tasks."""
    return dict(Counter(task.priority for task in tasks if task.priority and not task.completed))


def stats_items(state: TuiState) -> List[Tuple[str, str]]:
    """The three fixed stats rows, computed over the whole unfiltered task set."""
    tasks = state.store.tasks
    today = state.today()
    due = sum(1 for task in tasks if task.is_due_or_overdue(today))
    done_today = sum(1 for task in tasks if task.completed_on(today))
    active = sum(1 for task in tasks if not task.completed)
    return [
        ("Due/Overdue", str(due)),
        ("Done today", str(done_today)),
        ("Active", f"{active}/{len(tasks)}"),
    ]


def project_items(tasks: List[Task]) -> List[str]:
    return sorted({project for task in tasks for project in task.projects})


def context_items(tasks: List[Task]) -> List[str]:
    return sorted({context for task in tasks for context in task.contexts})


def panel_item_count(state: TuiState, panel: Panel) -> int:
    if panel == Panel.TASKS:
        return len(state.visible)
    if panel == Panel.PRIORITIES:
        return len(priority_items(state))
    if panel == Panel.STATS:
        return len(STATS_FILTERS)
    if panel == Panel.PROJECTS:
        return len(project_items(state.store.tasks))
    return len(context_items(state.store.tasks))


def panel_filter_for(state: TuiState, panel: Panel, index: int) -> Optional[ActiveFilter]:
    """The active filter selecting ``index`` in ``panel`` would apply, if any."""
    if panel == Panel.PRIORITIES:
        items = priority_items(state)
        return ActiveFilter(FilterKind.PRIORITY, items[index]) if 0 <= index < len(items) else None
    if panel == Panel.STATS:
        return ActiveFilter(STATS_FILTERS[index]) if 0 <= index < len(STATS_FILTERS) else None
    if panel == Panel.PROJECTS:
        items = project_items(state.store.tasks)
        return ActiveFilter(FilterKind.PROJECT, items[index]) if 0 <= index < len(items) else None
    if panel == Panel.CONTEXTS:
        items = context_items(state.store.tasks)
        return ActiveFilter(FilterKind.CONTEXT, items[index]) if 0 <= index < len(items) else None
    return None


def clamp_panel_cursor(state: TuiState, panel: Panel) -> int:
    total = panel_item_count(state, panel)
    cursor = max(0, min(state.panel_cursors[panel], total - 1)) if total else 0
    state.panel_cursors[panel] = cursor
    return cursor


def cycle_focus(state: TuiState) -> None:
    index = PANEL_RING.index(state.focus)
    state.focus = PANEL_RING[(index + 1) % len(PANEL_RING)]
    state.panel_cursors[state.focus] = 0
    if state.focus == Panel.TASKS:
        state.element_index = 0


def move_panel_cursor(state: TuiState, delta: int) -> None:
    """Move the focused panel's cursor by ``delta``, clamping to its item count."""
    panel = state.focus
    total = panel_item_count(state, panel)
    if total <= 0:
        state.panel_cursors[panel] = 0
        return
    state.panel_cursors[panel] = max(0, min(state.panel_cursors[panel] + delta, total - 1))
    if panel == Panel.TASKS:
        state.element_index = 0


def jump_panel_cursor(state: TuiState, last: bool) -> None:
    panel = state.focus
    total = panel_item_count(state, panel)
    state.panel_cursors[panel] = max(0, total - 1) if last else 0
    if panel == Panel.TASKS:
        state.element_index = 0


def move_element_cursor(state: TuiState, delta: int) -> None:
    task = state.current_task
    if state.focus != Panel.TASKS or task is None:
        return
    state.element_index = max(0, min(state.element_index + delta, element_count(task) - 1))


def apply_panel_selection(state: TuiState) -> None:
    """Enter in a non-Tasks panel: filter by the selection and return to Tasks."""
    active = panel_filter_for(state, state.focus, clamp_panel_cursor(state, state.focus))
    if active is None:
        return
    state.active_filter = active
    focus_tasks(state)
    state.task_cursor = 0
    state.element_index = 0
    state.refresh_view()


def focus_tasks(state: TuiState) -> None:
    state.focus = Panel.TASKS
