"""Startup dialog shown when the file's priorities disagree with the configured mode."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core.priority import PriorityMode
from infrastructure.todo_file_parser import FORMAT_MIXED, TodoFileParser

from .tui_actions import convert_all_priorities
from .tui_settings import switch_priority_mode
from .tui_state import Overlay, TuiState

logger = logging.getLogger("todo_tui.tui")

FORMAT_LABELS = {
    "letter": "letter (A-Z)",
    "number": "number (0-9)",
    "mixed": "mixed letter and number",
}


@dataclass(frozen=True)
class DialogOption:
    label: str
    action: str
    mode: Optional[PriorityMode] = None


def detect_mismatch(state: TuiState) -> Optional[str]:
    """File format that conflicts with the configured mode, or None.

    Mixed files always conflict; a single format conflicts only when it
    differs from the configured mode.
    """
    fmt = TodoFileParser.detect_priority_format(state.store.tasks)
    if fmt == FORMAT_MIXED:
        return fmt
    if fmt in (PriorityMode.LETTER.value, PriorityMode.NUMBER.value) and fmt != state.priority_mode.value:
        return fmt
    return None


def open_format_dialog_if_needed(state: TuiState) -> bool:
    fmt = detect_mismatch(state)
    if fmt is None:
        return False
    state.file_format = fmt
    state.dialog_index = 0
    state.overlay = Overlay.FORMAT_MISMATCH
    logger.info("priority format mismatch: file=%s settings=%s", fmt, state.priority_mode.value)
    return True


def dialog_options(state: TuiState) -> List[DialogOption]:
    if state.file_format == FORMAT_MIXED:
        return [
            DialogOption("Convert all to letters (A-Z)", "convert", PriorityMode.LETTER),
            DialogOption("Convert all to numbers (0-9)", "convert", PriorityMode.NUMBER),
            DialogOption("Ignore", "ignore"),
        ]
    file_mode = PriorityMode.from_string(state.file_format)
    settings_mode = state.priority_mode
    return [
        DialogOption(f"Convert file to {settings_mode.value} priorities", "convert", settings_mode),
        DialogOption(f"Switch to {file_mode.value} priority mode", "switch", file_mode),
        DialogOption("Ignore", "ignore"),
    ]


def move_dialog_selection(state: TuiState, delta: int) -> None:
    total = len(dialog_options(state))
    state.dialog_index = max(0, min(state.dialog_index + delta, total - 1))


def activate_dialog_option(state: TuiState, index: Optional[int] = None) -> None:
    options = dialog_options(state)
    chosen = state.dialog_index if index is None else index
    if not 0 <= chosen < len(options):
        return
    option = options[chosen]
    state.overlay = Overlay.NONE
    if option.action == "convert":
        convert_all_priorities(state, option.mode)
        switch_priority_mode(state, option.mode)
    elif option.action == "switch":
        switch_priority_mode(state, option.mode)


def ignore_dialog(state: TuiState) -> None:
    state.overlay = Overlay.NONE


def render_format_dialog(state: TuiState, width: int) -> FormattedText:
    options = dialog_options(state)
    box_width = max(40, min(72, width - 4))
    inner = box_width - 2
    if state.file_format == FORMAT_MIXED:
        message = "The file mixes letter and number priorities."
    else:
        message = (
            f"The file uses {FORMAT_LABELS.get(state.file_format, state.file_format)} priorities, "
            f"but your settings use {FORMAT_LABELS[state.priority_mode.value]}."
        )

    lines: List[Tuple[str, str]] = []
    lines.append(("class:border", "+" + "=" * box_width + "+\n"))
    lines.append(("class:border", "| "))
    lines.append(("class:header", "Priority Format Mismatch".center(inner)))
    lines.append(("class:border", " |\n"))
    lines.append(("class:border", "+" + "-" * box_width + "+\n"))
    for chunk in _wrap(message, inner):
        lines.append(("class:border", "| "))
        lines.append(("class:text", chunk.ljust(inner)))
        lines.append(("class:border", " |\n"))
    lines.append(("class:border", "|" + " " * box_width + "|\n"))
    for idx, option in enumerate(options):
        selected = idx == state.dialog_index
        row = f"{'▸' if selected else ' '} {idx + 1}. {option.label}"
        lines.append(("class:border", "| "))
        lines.append(("class:selected" if selected else "class:text", row[:inner].ljust(inner)))
        lines.append(("class:border", " |\n"))
    lines.append(("class:border", "+" + "=" * box_width + "+\n"))
    lines.append(("class:muted", "j/k or arrows move, Enter or 1-3 choose, ESC ignores"))
    return FormattedText(lines)


def _wrap(text: str, width: int) -> List[str]:
    words = text.split()
    rows: List[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if len(candidate) > width and current:
            rows.append(current)
            current = word
        else:
            current = candidate
    if current:
        rows.append(current)
    return rows
