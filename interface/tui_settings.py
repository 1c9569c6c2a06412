"""Settings overlay and theme selector helpers."""

import logging
from typing import Any, Dict, List

from core.priority import PriorityMode

from .tui_actions import convert_all_priorities
from .tui_editing import start_editing
from .tui_state import EntryMode, Overlay, TuiState
from .tui_themes import DEFAULT_THEME, THEME_LABELS, THEMES, theme_names

logger = logging.getLogger("todo_tui.tui")

MODE_LABELS = {
    PriorityMode.LETTER: "Letter (A-Z)",
    PriorityMode.NUMBER: "Number (0-9)",
}

CONVERT_LABELS = {
    PriorityMode.NUMBER: "letters to numbers (A→0, B→1, etc.)",
    PriorityMode.LETTER: "numbers to letters (0→A, 1→B, etc.)",
}


def _file_label(state: TuiState) -> str:
    repository = state.store.repository
    path = getattr(repository, "path", None)
    return str(path) if path else "(memory only)"


def build_settings_options(state: TuiState) -> List[Dict[str, Any]]:
    return [
        {
            "label": "Priority mode",
            "value": MODE_LABELS[state.priority_mode],
            "hint": "Enter or 1 toggles letter/number priorities",
            "action": "toggle_priority_mode",
        },
        {
            "label": "Theme",
            "value": THEME_LABELS.get(state.theme_name, state.theme_name),
            "hint": "Enter opens the theme selector",
            "action": "choose_theme",
        },
        {
            "label": "Todo file",
            "value": _file_label(state),
            "hint": "Set with -f/--file or TODO_FILE",
            "action": None,
            "disabled": True,
            "disabled_msg": "The todo file is chosen at startup",
        },
    ]


def move_settings_selection(state: TuiState, delta: int) -> None:
    total = len(build_settings_options(state))
    state.settings_index = max(0, min(state.settings_index + delta, total - 1))


def activate_settings_option(state: TuiState) -> None:
    options = build_settings_options(state)
    option = options[max(0, min(state.settings_index, len(options) - 1))]
    if option.get("disabled"):
        state.set_status_message(option.get("disabled_msg") or "Option unavailable")
        return
    action = option.get("action")
    if action == "toggle_priority_mode":
        toggle_priority_mode(state)
    elif action == "choose_theme":
        open_theme_selector(state)


def switch_priority_mode(state: TuiState, mode: PriorityMode) -> None:
    if state.priority_mode == mode:
        return
    state.priority_mode = mode
    state.save_settings()
    state.refresh_view()
    logger.info("priority mode switched to %s", mode.value)


def toggle_priority_mode(state: TuiState) -> None:
    target = PriorityMode.NUMBER if state.priority_mode == PriorityMode.LETTER else PriorityMode.LETTER
    count = sum(1 for task in state.store.tasks if task.priority)
    if not count:
        switch_priority_mode(state, target)
        return

    def _convert_and_switch(s: TuiState) -> None:
        convert_all_priorities(s, target)
        switch_priority_mode(s, target)

    def _switch_only(s: TuiState) -> None:
        switch_priority_mode(s, target)

    start_editing(
        state,
        EntryMode.CONFIRM,
        f"Convert {count} priorities {CONVERT_LABELS[target]}? (y/n):",
        "y",
        on_yes=_convert_and_switch,
        on_no=_switch_only,
    )


# Theme selector -----------------------------------------------------------


def open_theme_selector(state: TuiState) -> None:
    names = theme_names()
    state.theme_index = names.index(state.theme_name) if state.theme_name in names else 0
    state.overlay = Overlay.THEMES


def move_theme_selection(state: TuiState, delta: int) -> None:
    total = len(THEMES)
    state.theme_index = max(0, min(state.theme_index + delta, total - 1))


def set_theme(state: TuiState, name: str) -> bool:
    if name not in THEMES:
        return False
    if name != state.theme_name:
        state.theme_name = name
        state.save_settings()
    return True


def apply_selected_theme(state: TuiState) -> None:
    names = theme_names()
    set_theme(state, names[max(0, min(state.theme_index, len(names) - 1))])
    state.overlay = Overlay.NONE


def close_theme_selector(state: TuiState) -> None:
    state.overlay = Overlay.NONE


def resolve_theme_name(name: str) -> str:
    return name if name in THEMES else DEFAULT_THEME
