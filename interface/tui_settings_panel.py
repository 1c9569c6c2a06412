"""Settings panel and theme selector renderers."""

from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText

from .tui_display import pad_display
from .tui_settings import build_settings_options
from .tui_state import TuiState
from .tui_themes import THEME_LABELS, get_theme_colors, theme_names

SWATCH_KEYS = ("priority_high", "priority_medium", "priority_low", "success", "project", "context", "date")


def _command_bar(state: TuiState, inner_width: int) -> List[Tuple[str, str]]:
    entry = state.entry
    if entry is None:
        return []
    text = entry.text
    cursor = entry.buffer.cursor_position
    at = text[cursor] if cursor < len(text) else " "
    return [
        ("class:border", "| "),
        ("class:header", entry.prompt + " "),
        ("class:text", text[:cursor]),
        ("class:cursor", at),
        ("class:text", text[cursor + 1 :].ljust(max(0, inner_width - len(entry.prompt) - len(text) - 2))),
        ("class:border", " |\n"),
    ]


def render_settings_panel(state: TuiState, width: int) -> FormattedText:
    options = build_settings_options(state)
    box_width = max(50, min(90, width - 4))
    inner_width = max(30, box_width - 2)
    label_width = max(14, max(len(opt["label"]) for opt in options) + 2)
    value_width = max(10, inner_width - label_width - 2)
    state.settings_index = max(0, min(state.settings_index, len(options) - 1))

    lines: List[Tuple[str, str]] = []
    lines.append(("class:border", "+" + "=" * box_width + "+\n"))
    lines.append(("class:border", "| "))
    lines.append(("class:header", "Settings".center(inner_width)))
    lines.append(("class:border", " |\n"))
    lines.append(("class:border", "+" + "-" * box_width + "+\n"))

    for idx, option in enumerate(options):
        prefix = "▸" if idx == state.settings_index else " "
        label_text = option["label"][:label_width].ljust(label_width)
        value_text = option["value"]
        if len(value_text) > value_width:
            value_text = "…" + value_text[-(value_width - 1) :]
        row_text = f"{prefix} {label_text}{value_text.ljust(value_width)}"
        if idx == state.settings_index:
            style = "class:selected"
        elif option.get("disabled"):
            style = "class:text.dim"
        else:
            style = "class:text"
        lines.append(("class:border", "| "))
        lines.append((style, row_text[:inner_width].ljust(inner_width)))
        lines.append(("class:border", " |\n"))

    hint = options[state.settings_index].get("hint", "")
    lines.append(("class:border", "+" + "-" * box_width + "+\n"))
    lines.append(("class:border", "| "))
    lines.append(("class:text.dim", hint[:inner_width].ljust(inner_width)))
    lines.append(("class:border", " |\n"))
    lines.extend(_command_bar(state, inner_width))
    lines.append(("class:border", "+" + "=" * box_width + "+\n"))
    if state.status_message:
        lines.append(("class:warning", state.status_message + "\n"))
    lines.append(("class:muted", "j/k move, Enter select, 1 toggle priority mode, ESC/q close"))
    return FormattedText(lines)


def render_theme_selector(state: TuiState, width: int) -> FormattedText:
    names = theme_names()
    box_width = max(40, min(60, width - 4))
    inner_width = box_width - 2
    label_width = max(len(label) for label in THEME_LABELS.values()) + 4

    lines: List[Tuple[str, str]] = []
    lines.append(("class:border", "+" + "=" * box_width + "+\n"))
    lines.append(("class:border", "| "))
    lines.append(("class:header", "Select Theme".center(inner_width)))
    lines.append(("class:border", " |\n"))
    lines.append(("class:border", "+" + "-" * box_width + "+\n"))
    for idx, name in enumerate(names):
        selected = idx == state.theme_index
        marker = "●" if name == state.theme_name else " "
        label = f"{'▸' if selected else ' '} {marker} {THEME_LABELS.get(name, name)}"
        colors = get_theme_colors(name)
        swatch_width = len(SWATCH_KEYS) * 2
        lines.append(("class:border", "| "))
        lines.append(("class:selected" if selected else "class:text", pad_display(label, label_width)))
        for key in SWATCH_KEYS:
            lines.append((f"bg:{colors[key]}", "  "))
        lines.append(("", " " * max(0, inner_width - label_width - swatch_width)))
        lines.append(("class:border", " |\n"))
    lines.append(("class:border", "+" + "=" * box_width + "+\n"))
    lines.append(("class:muted", "j/k move, Enter apply, ESC/q close"))
    return FormattedText(lines)
