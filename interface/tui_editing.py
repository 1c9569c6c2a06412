"""Command bar lifecycle: open a text entry, commit it, or cancel it."""

from typing import Callable, Optional

from .edit_handlers import EDIT_HANDLERS
from .tui_entry import edit_buffer, new_buffer
from .tui_state import EntryMode, TextEntry, TuiState


def start_editing(
    state: TuiState,
    mode: EntryMode,
    prompt: str,
    value: str = "",
    *,
    target_id: Optional[int] = None,
    on_yes: Optional[Callable[[TuiState], None]] = None,
    on_no: Optional[Callable[[TuiState], None]] = None,
) -> TextEntry:
    entry = TextEntry(mode, prompt, new_buffer(value), target_id=target_id, on_yes=on_yes, on_no=on_no)
    if mode == EntryMode.SEARCH:
        entry.saved_search = state.search
        entry.saved_cursor = state.task_cursor

        def _on_change(_buffer) -> None:
            state.debouncer.submit(lambda: apply_live_search(state, entry))

        entry.buffer.on_text_changed += _on_change
    state.entry = entry
    return entry


def apply_live_search(state: TuiState, entry: TextEntry) -> None:
    if state.entry is not entry:
        return
    state.search = entry.text
    state.task_cursor = 0
    state.element_index = 0
    state.refresh_view()


def edit_entry(state: TuiState, key: str) -> None:
    if state.entry is not None:
        edit_buffer(state.entry.buffer, key)


def save_edit(state: TuiState) -> None:
    entry = state.entry
    if entry is None:
        return
    state.entry = None
    for handler in EDIT_HANDLERS:
        if handler(state, entry):
            break


def cancel_edit(state: TuiState) -> None:
    entry = state.entry
    if entry is None:
        return
    state.entry = None
    if entry.mode == EntryMode.SEARCH:
        state.debouncer.cancel()
        state.search = entry.saved_search
        state.task_cursor = entry.saved_cursor
        state.refresh_view()
