"""Commit handlers for the command bar, one per entry mode.

Each handler returns True when it owns the entry's mode; ``save_edit``
stops at the first one that does.
"""

import re

from core.priority import split_priority_prefix
from core.task import Task, is_iso_date

from .tui_state import EntryMode, Panel, TextEntry, TuiState

DUE_TOKEN = re.compile(r"(?<!\S)due:\S+")


def _append_token(text: str, token: str) -> str:
    return " ".join(part for part in (text.strip(), token) if part)


def _clean_tag(value: str, prefix: str) -> str:
    tag = value.strip()
    if tag.startswith(prefix):
        tag = tag[1:]
    return tag


def handle_new_task(state: TuiState, entry: TextEntry) -> bool:
    if entry.mode != EntryMode.NEW_TASK:
        return False
    value = entry.text.strip()
    if not value:
        return True
    priority, text = split_priority_prefix(value, state.priority_mode)
    with state.mutate():
        task = state.store.add(Task.create(0, text, priority=priority, creation_date=state.today()))
    state.focus = Panel.TASKS
    state.select_task(task.id)
    return True


def handle_edit_task(state: TuiState, entry: TextEntry) -> bool:
    if entry.mode != EntryMode.EDIT_TASK:
        return False
    task = state.store.find(entry.target_id)
    value = entry.text.strip()
    if task is None or not value or value == task.text:
        return True
    with state.mutate():
        state.store.update(task.id, text=value)
    return True


def handle_search(state: TuiState, entry: TextEntry) -> bool:
    if entry.mode != EntryMode.SEARCH:
        return False
    state.debouncer.cancel()
    state.search = entry.text.strip()
    state.task_cursor = 0
    state.element_index = 0
    state.refresh_view()
    return True


def _append_tag(state: TuiState, entry: TextEntry, prefix: str) -> None:
    task = state.store.find(entry.target_id)
    tag = _clean_tag(entry.text, prefix)
    if task is None or not tag or any(ch.isspace() for ch in tag):
        return
    existing = task.projects if prefix == "+" else task.contexts
    if tag in existing:
        return
    with state.mutate():
        state.store.update(task.id, text=_append_token(task.text, f"{prefix}{tag}"))


def handle_add_project(state: TuiState, entry: TextEntry) -> bool:
    if entry.mode != EntryMode.ADD_PROJECT:
        return False
    _append_tag(state, entry, "+")
    return True


def handle_add_context(state: TuiState, entry: TextEntry) -> bool:
    if entry.mode != EntryMode.ADD_CONTEXT:
        return False
    _append_tag(state, entry, "@")
    return True


def handle_add_due_date(state: TuiState, entry: TextEntry) -> bool:
    if entry.mode != EntryMode.ADD_DUE_DATE:
        return False
    task = state.store.find(entry.target_id)
    value = entry.text.strip()
    if task is None or not value:
        return True
    if not is_iso_date(value):
        state.set_status_message("Invalid date, use YYYY-MM-DD")
        state.entry = entry
        return True
    if DUE_TOKEN.search(task.text):
        text = DUE_TOKEN.sub(f"due:{value}", task.text, count=1)
    else:
        text = _append_token(task.text, f"due:{value}")
    if text == task.text:
        return True
    with state.mutate():
        state.store.update(task.id, text=text)
    return True


def handle_confirm(state: TuiState, entry: TextEntry) -> bool:
    if entry.mode != EntryMode.CONFIRM:
        return False
    answer = entry.text.strip().lower()
    if answer in ("y", "yes"):
        if entry.on_yes is not None:
            entry.on_yes(state)
    elif entry.on_no is not None:
        entry.on_no(state)
    return True


def handle_command(state: TuiState, entry: TextEntry) -> bool:
    if entry.mode != EntryMode.COMMAND:
        return False
    from .command_palette import run_command

    run_command(state, entry.text)
    return True


EDIT_HANDLERS = (
    handle_new_task,
    handle_edit_task,
    handle_search,
    handle_add_project,
    handle_add_context,
    handle_add_due_date,
    handle_confirm,
    handle_command,
)
