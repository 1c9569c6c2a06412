"""Normal-mode actions. Every function takes the ``TuiState`` it acts on."""

import logging
import re
from typing import Optional

from application.view import SortMode
from core.priority import SHIFTED_DIGITS, PriorityMode, is_valid_priority
from core.task import Task
from infrastructure.todo_file_parser import TodoFileParser

from .tui_editing import start_editing
from .tui_elements import UNDELETABLE, ElementKind, task_elements
from .tui_panels import (
    apply_panel_selection,
    cycle_focus,
    focus_tasks,
    jump_panel_cursor,
    move_element_cursor,
    move_panel_cursor,
)
from .tui_state import EntryMode, Overlay, Panel, TuiState

logger = logging.getLogger("todo_tui.tui")


def selected_task(state: TuiState) -> Optional[Task]:
    """The task under the cursor, only while the Tasks panel has focus."""
    if state.focus != Panel.TASKS:
        return None
    return state.current_task


# Navigation --------------------------------------------------------------


def move_vertical(state: TuiState, delta: int) -> None:
    move_panel_cursor(state, delta)


def move_horizontal(state: TuiState, delta: int) -> None:
    move_element_cursor(state, delta)


def jump_to_edge(state: TuiState, last: bool) -> None:
    jump_panel_cursor(state, last)


def cycle_panel(state: TuiState) -> None:
    cycle_focus(state)


def escape_or_quit(state: TuiState) -> None:
    if state.focus != Panel.TASKS:
        focus_tasks(state)
        return
    if state.active_filter is not None or state.search:
        state.active_filter = None
        state.search = ""
        state.task_cursor = 0
        state.element_index = 0
        state.refresh_view()
        return
    request_exit(state)


def request_exit(state: TuiState) -> None:
    state.should_exit = True


def activate_selection(state: TuiState) -> None:
    if state.focus == Panel.TASKS:
        start_edit_task(state)
    else:
        apply_panel_selection(state)


# Task mutations ----------------------------------------------------------


def toggle_completion(state: TuiState) -> None:
    task = selected_task(state)
    if task is None:
        return
    with state.mutate():
        state.store.toggle_completion(task.id, today=state.today())


def priority_for_key(state: TuiState, key: str) -> Optional[str]:
    if state.priority_mode == PriorityMode.NUMBER:
        symbol = SHIFTED_DIGITS.get(key, key)
    else:
        symbol = key
    return symbol if is_valid_priority(symbol, state.priority_mode) else None


def set_priority(state: TuiState, symbol: Optional[str]) -> None:
    task = selected_task(state)
    if task is None or not is_valid_priority(symbol, state.priority_mode) or task.priority == symbol:
        return
    with state.mutate():
        state.store.update(task.id, priority=symbol)
    state.select_task(task.id)


def set_priority_from_key(state: TuiState, key: str) -> None:
    set_priority(state, priority_for_key(state, key))


def _remove_tokens(text: str, pattern: str) -> str:
    return re.sub(r"(^|\s+)" + pattern + r"(?=\s|$)", "", text).strip()


def delete_selected_element(state: TuiState) -> None:
    task = selected_task(state)
    if task is None:
        return
    elements = task_elements(task)
    index = max(0, min(state.element_index, len(elements) - 1))
    element = elements[index]
    if element.kind in UNDELETABLE:
        return
    if element.kind == ElementKind.PRIORITY:
        if not task.priority:
            return
        patch = {"priority": None}
    elif element.kind == ElementKind.DATE:
        patch = {"creation_date": None}
    elif element.kind == ElementKind.PROJECT:
        patch = {"text": _remove_tokens(task.text, re.escape("+" + element.value))}
    elif element.kind == ElementKind.CONTEXT:
        patch = {"text": _remove_tokens(task.text, re.escape("@" + element.value))}
    else:
        patch = {"text": _remove_tokens(task.text, re.escape(element.key) + r":\S+")}
    with state.mutate():
        state.store.update(task.id, **patch)
    state.select_task(task.id)
    state.element_index = max(0, index - 1)
    state.clamp_cursors()


def delete_task(state: TuiState, task_id: int) -> None:
    if state.store.find(task_id) is None:
        return
    with state.mutate():
        state.store.delete(task_id)


def confirm_delete_task(state: TuiState) -> None:
    task = selected_task(state)
    if task is None:
        return
    task_id = task.id
    start_editing(state, EntryMode.CONFIRM, "Delete task? (y/n):", on_yes=lambda s: delete_task(s, task_id))


def purge_completed(state: TuiState) -> None:
    if not any(task.completed for task in state.store.tasks):
        return
    with state.mutate():
        removed = state.store.purge_completed()
    state.set_status_message(f"Purged {removed} completed tasks")


def confirm_purge_completed(state: TuiState) -> None:
    count = sum(1 for task in state.store.tasks if task.completed)
    if not count:
        state.set_status_message("No completed tasks to purge")
        return
    start_editing(state, EntryMode.CONFIRM, f"Purge {count} completed tasks? (y/n):", on_yes=purge_completed)


def convert_all_priorities(state: TuiState, target: PriorityMode) -> None:
    converted = TodoFileParser.convert_priorities(state.store.tasks, target.value)
    with state.mutate():
        state.store.replace_all(converted)
    logger.info("converted priorities to %s", target.value)


def undo(state: TuiState) -> None:
    previous = state.history.pop()
    if previous is None:
        state.set_status_message("Nothing to undo")
        return
    try:
        state.store.replace_all(previous)
    finally:
        state.refresh_view()


def yank_task(state: TuiState) -> None:
    task = selected_task(state)
    if task is None:
        return
    state.yanked = task.clone()
    state.clipboard.set_text(TodoFileParser.serialize_task(task))
    state.set_status_message(f"Yanked task {task.id}")


def paste_task(state: TuiState) -> None:
    source = state.yanked
    if source is None:
        return
    with state.mutate():
        task = state.store.add(
            Task.create(0, source.text, priority=source.priority, creation_date=state.today())
        )
    focus_tasks(state)
    state.select_task(task.id)


# Command bar openers -----------------------------------------------------


def start_edit_task(state: TuiState) -> None:
    task = selected_task(state)
    if task is None:
        return
    start_editing(state, EntryMode.EDIT_TASK, "Edit task:", task.text, target_id=task.id)


def start_new_task(state: TuiState) -> None:
    start_editing(state, EntryMode.NEW_TASK, "New task:")


def start_add_project(state: TuiState) -> None:
    task = selected_task(state)
    if task is not None:
        start_editing(state, EntryMode.ADD_PROJECT, "Project tag (without +):", target_id=task.id)


def start_add_context(state: TuiState) -> None:
    task = selected_task(state)
    if task is not None:
        start_editing(state, EntryMode.ADD_CONTEXT, "Context tag (without @):", target_id=task.id)


def start_add_due_date(state: TuiState) -> None:
    task = selected_task(state)
    if task is not None:
        start_editing(state, EntryMode.ADD_DUE_DATE, "Due date (YYYY-MM-DD):", task.due or "", target_id=task.id)


def start_search(state: TuiState) -> None:
    focus_tasks(state)
    start_editing(state, EntryMode.SEARCH, "Search:", state.search)


def start_command(state: TuiState) -> None:
    start_editing(state, EntryMode.COMMAND, ":")


# View toggles ------------------------------------------------------------


def toggle_show_completed(state: TuiState) -> None:
    state.show_completed = not state.show_completed
    state.refresh_view()


def toggle_overdue_highlight(state: TuiState) -> None:
    state.highlight_overdue = not state.highlight_overdue


def cycle_sort(state: TuiState) -> None:
    set_sort_mode(state, state.sort_mode.next())


def set_sort_mode(state: TuiState, mode: SortMode) -> None:
    state.sort_mode = mode
    state.refresh_view()


def toggle_help(state: TuiState) -> None:
    state.overlay = Overlay.NONE if state.overlay == Overlay.HELP else Overlay.HELP


def close_overlay(state: TuiState) -> None:
    state.overlay = Overlay.NONE


def open_settings(state: TuiState) -> None:
    state.overlay = Overlay.SETTINGS
    state.settings_index = 0


def refresh_from_file(state: TuiState) -> None:
    state.store.reload()
    state.refresh_view()
    state.set_status_message(f"Reloaded {len(state.store)} tasks")


def save_now(state: TuiState) -> None:
    state.store.save()
    state.set_status_message("Saved")
