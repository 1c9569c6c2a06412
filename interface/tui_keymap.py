"""Key dispatch table: (input mode, key predicate) -> handler.

Keys arrive as prompt_toolkit-style names (``up``, ``enter``, ``escape``,
``tab``, ``space``, ``backspace``, ``delete``, ``home``, ``end``, ``c-v``)
or as the literal character typed. The first matching binding of the
current mode wins; unmatched keys are no-ops.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from core.errors import StorageError, TaskNotFoundError, ValidationError

from . import tui_actions as actions
from .tui_editing import cancel_edit, edit_entry, save_edit
from .tui_format_dialog import activate_dialog_option, ignore_dialog, move_dialog_selection
from .tui_settings import (
    activate_settings_option,
    apply_selected_theme,
    close_theme_selector,
    move_settings_selection,
    move_theme_selection,
    toggle_priority_mode,
)
from .tui_state import Overlay, TuiState

logger = logging.getLogger("todo_tui.tui")

Handler = Callable[[TuiState, str], None]
Predicate = Callable[[TuiState, str], bool]


class InputMode(str, Enum):
    NORMAL = "normal"
    TEXT_ENTRY = "text-entry"
    HELP = "help"
    SETTINGS = "settings"
    THEMES = "themes"
    DIALOG = "dialog"


@dataclass(frozen=True)
class KeyBinding:
    handler: Handler
    keys: Tuple[str, ...] = ()
    when: Optional[Predicate] = None

    def matches(self, state: TuiState, key: str) -> bool:
        if self.keys and key not in self.keys:
            return False
        return self.when is None or self.when(state, key)


def _do(action: Callable[[TuiState], None]) -> Handler:
    return lambda state, key: action(state)


def _is_priority_key(state: TuiState, key: str) -> bool:
    return actions.priority_for_key(state, key) is not None


def _any_key(state: TuiState, key: str) -> bool:
    return True


NORMAL_BINDINGS = (
    KeyBinding(lambda s, k: actions.move_vertical(s, -1), ("up", "k")),
    KeyBinding(lambda s, k: actions.move_vertical(s, 1), ("down", "j")),
    KeyBinding(lambda s, k: actions.move_horizontal(s, -1), ("left", "h")),
    KeyBinding(lambda s, k: actions.move_horizontal(s, 1), ("right", "l")),
    KeyBinding(lambda s, k: actions.jump_to_edge(s, last=False), ("g", "home")),
    # Before the priority predicate: G always means go-bottom, even in letter mode.
    KeyBinding(lambda s, k: actions.jump_to_edge(s, last=True), ("G", "end")),
    KeyBinding(_do(actions.cycle_panel), ("tab",)),
    KeyBinding(_do(actions.escape_or_quit), ("escape", "q")),
    KeyBinding(_do(actions.activate_selection), ("enter",)),
    KeyBinding(_do(actions.start_edit_task), ("e",)),
    KeyBinding(_do(actions.toggle_completion), ("space",)),
    KeyBinding(actions.set_priority_from_key, when=_is_priority_key),
    KeyBinding(_do(actions.start_add_project), ("p",)),
    KeyBinding(_do(actions.start_add_context), ("c",)),
    KeyBinding(_do(actions.start_add_due_date), ("d",)),
    KeyBinding(_do(actions.start_new_task), ("n", "a")),
    KeyBinding(_do(actions.confirm_delete_task), ("x",)),
    KeyBinding(_do(actions.delete_selected_element), ("delete", "backspace")),
    KeyBinding(_do(actions.toggle_show_completed), ("v",)),
    KeyBinding(_do(actions.start_search), ("/",)),
    KeyBinding(_do(actions.cycle_sort), ("s",)),
    KeyBinding(_do(actions.undo), ("u",)),
    KeyBinding(_do(actions.toggle_help), ("?",)),
    KeyBinding(_do(actions.toggle_overdue_highlight), ("o",)),
    KeyBinding(_do(actions.refresh_from_file), ("r",)),
    KeyBinding(_do(actions.confirm_purge_completed), ("z",)),
    KeyBinding(_do(actions.open_settings), (",",)),
    KeyBinding(_do(actions.start_command), (":",)),
    KeyBinding(_do(actions.yank_task), ("y",)),
    KeyBinding(_do(actions.paste_task), ("c-v",)),
)

TEXT_ENTRY_BINDINGS = (
    KeyBinding(_do(save_edit), ("enter",)),
    KeyBinding(_do(cancel_edit), ("escape",)),
    KeyBinding(edit_entry, when=_any_key),
)

HELP_BINDINGS = (KeyBinding(_do(actions.close_overlay), when=_any_key),)

SETTINGS_BINDINGS = (
    KeyBinding(lambda s, k: move_settings_selection(s, -1), ("up", "k")),
    KeyBinding(lambda s, k: move_settings_selection(s, 1), ("down", "j")),
    KeyBinding(_do(activate_settings_option), ("enter",)),
    KeyBinding(_do(toggle_priority_mode), ("1",)),
    KeyBinding(_do(actions.close_overlay), ("escape", "q")),
)

THEME_BINDINGS = (
    KeyBinding(lambda s, k: move_theme_selection(s, -1), ("up", "k")),
    KeyBinding(lambda s, k: move_theme_selection(s, 1), ("down", "j")),
    KeyBinding(_do(apply_selected_theme), ("enter",)),
    KeyBinding(_do(close_theme_selector), ("escape", "q")),
)

DIALOG_BINDINGS = (
    KeyBinding(lambda s, k: move_dialog_selection(s, -1), ("up", "k")),
    KeyBinding(lambda s, k: move_dialog_selection(s, 1), ("down", "j")),
    KeyBinding(_do(activate_dialog_option), ("enter",)),
    KeyBinding(lambda s, k: activate_dialog_option(s, int(k) - 1), ("1", "2", "3")),
    KeyBinding(_do(ignore_dialog), ("escape", "q")),
)

BINDINGS: Dict[InputMode, Tuple[KeyBinding, ...]] = {
    InputMode.NORMAL: NORMAL_BINDINGS,
    InputMode.TEXT_ENTRY: TEXT_ENTRY_BINDINGS,
    InputMode.HELP: HELP_BINDINGS,
    InputMode.SETTINGS: SETTINGS_BINDINGS,
    InputMode.THEMES: THEME_BINDINGS,
    InputMode.DIALOG: DIALOG_BINDINGS,
}

_OVERLAY_MODES = {
    Overlay.HELP: InputMode.HELP,
    Overlay.SETTINGS: InputMode.SETTINGS,
    Overlay.THEMES: InputMode.THEMES,
    Overlay.FORMAT_MISMATCH: InputMode.DIALOG,
}


def current_mode(state: TuiState) -> InputMode:
    # An open command bar wins over overlays (settings asks for confirmation through it).
    if state.entry is not None:
        return InputMode.TEXT_ENTRY
    return _OVERLAY_MODES.get(state.overlay, InputMode.NORMAL)


def find_binding(state: TuiState, key: str) -> Optional[KeyBinding]:
    for binding in BINDINGS[current_mode(state)]:
        if binding.matches(state, key):
            return binding
    return None


def dispatch_key(state: TuiState, key: str) -> bool:
    """Handle one key press to completion. Returns False when nothing was bound."""
    keep_message = state.entry is not None
    if not keep_message:
        state.status_message = ""
    binding = find_binding(state, key)
    if binding is None:
        return False
    try:
        binding.handler(state, key)
    except (TaskNotFoundError, ValidationError) as exc:
        logger.debug("ignored %r: %s", key, exc)
    except StorageError as exc:
        logger.error("write failed: %s", exc)
        state.set_status_message(f"Save failed: {exc}")
    return True
