"""Colon commands typed into the command bar (``:wq``, ``:sort date``, ...)."""

import logging
from typing import Callable, Dict, List

from application.view import SortMode

from . import tui_actions as actions
from .tui_settings import open_theme_selector, set_theme
from .tui_state import TuiState

logger = logging.getLogger("todo_tui.commands")

CommandHandler = Callable[[TuiState, List[str]], None]


def _quit(state: TuiState, args: List[str]) -> None:
    actions.request_exit(state)


def _write(state: TuiState, args: List[str]) -> None:
    actions.save_now(state)


def _write_quit(state: TuiState, args: List[str]) -> None:
    actions.save_now(state)
    actions.request_exit(state)


def _help(state: TuiState, args: List[str]) -> None:
    actions.toggle_help(state)


def _settings(state: TuiState, args: List[str]) -> None:
    actions.open_settings(state)


def _undo(state: TuiState, args: List[str]) -> None:
    actions.undo(state)


def _sort(state: TuiState, args: List[str]) -> None:
    if not args:
        actions.cycle_sort(state)
        return
    mode = SortMode.from_string(args[0])
    if mode is None:
        logger.warning("unknown sort mode: %s", args[0])
        state.set_status_message(f"Unknown sort mode: {args[0]}")
        return
    actions.set_sort_mode(state, mode)


def _theme(state: TuiState, args: List[str]) -> None:
    if not args:
        open_theme_selector(state)
        return
    name = args[0].lower()
    if not set_theme(state, name):
        logger.warning("unknown theme: %s", name)
        state.set_status_message(f"Unknown theme: {name}")


COMMANDS: Dict[str, CommandHandler] = {
    "q": _quit,
    "quit": _quit,
    "w": _write,
    "write": _write,
    "wq": _write_quit,
    "x": _write_quit,
    "help": _help,
    "set": _settings,
    "settings": _settings,
    "sort": _sort,
    "u": _undo,
    "undo": _undo,
    "theme": _theme,
}


def run_command(state: TuiState, raw: str) -> bool:
    """Execute one colon command; unknown commands are logged and ignored."""
    parts = raw.strip().lstrip(":").split()
    if not parts:
        return False
    name, args = parts[0].lower(), parts[1:]
    handler = COMMANDS.get(name)
    if handler is None:
        logger.warning("unknown command: %s", raw.strip())
        state.set_status_message(f"Unknown command: {name}")
        return False
    handler(state, args)
    return True
