"""Full-frame renderer: TuiState -> prompt_toolkit FormattedText.

Nothing here mutates task data; the whole frame is rebuilt on every redraw.
"""

from typing import Dict, List, Optional

from prompt_toolkit.formatted_text import FormattedText

from core.priority import priority_level
from core.task import Task, strip_tags

from .tui_display import Fragment, fit_fragments, fragments_width
from .tui_elements import ElementKind, TaskElement, task_elements
from .tui_format_dialog import render_format_dialog
from .tui_help import render_help
from .tui_panels import context_items, priority_counts, priority_items, project_items, stats_items
from .tui_settings_panel import render_settings_panel, render_theme_selector
from .tui_state import Overlay, Panel, TuiState

PANEL_ROWS = 5
STATS_WIDTH = 22
PROJECTS_WIDTH = 17
# top border + separator + bar rows + label row + bottom border + two status lines
CHROME_LINES = 1 + 1 + PANEL_ROWS + 1 + 1 + 2
SUB_LEVELS = 8
PARTIAL_BLOCKS = " ▁▂▃▄▅▆▇█"
STATS_STYLES = ("class:priority.high", "class:success", "class:muted")

Line = List[Fragment]


def render_frame(state: TuiState, width: int, height: int) -> FormattedText:
    if state.overlay == Overlay.HELP:
        return render_help(state, width)
    if state.overlay == Overlay.SETTINGS:
        return render_settings_panel(state, width)
    if state.overlay == Overlay.THEMES:
        return render_theme_selector(state, width)
    if state.overlay == Overlay.FORMAT_MISMATCH:
        return render_format_dialog(state, width)
    return render_main(state, width, height)


def render_main(state: TuiState, width: int, height: int) -> FormattedText:
    width = max(40, width)
    lines: List[Line] = [_title_line(state, width)]
    lines.extend(_task_rows(state, width, max(1, height - CHROME_LINES)))
    lines.append([("class:border", "├" + "─" * (width - 2) + "┤")])
    lines.extend(_panel_rows(state, width))
    lines.append([("class:border", "└" + "─" * (width - 2) + "┘")])
    lines.extend(_status_lines(state, width))

    fragments: List[Fragment] = []
    for index, line in enumerate(lines):
        if index:
            fragments.append(("", "\n"))
        fragments.extend(line)
    return FormattedText(fragments)


# Header & task list ---------------------------------------------------------


def _title_line(state: TuiState, width: int) -> Line:
    title: Line = [("class:header", f" Todo.txt ({len(state.visible)} tasks) ")]
    if state.active_filter is not None:
        title.append(("class:title.filter", f"[Filter: {state.active_filter.label}] "))
    if state.search:
        title.append(("class:title.search", f"[Search: {state.search}] "))
    border = "class:border.focus" if state.focus == Panel.TASKS else "class:border"
    line: Line = [(border, "┌─")] + title
    pad = width - 1 - fragments_width(line)
    if pad > 0:
        line.append((border, "─" * pad))
    return fit_fragments(line, width - 1) + [(border, "┐")]


def priority_style(symbol: Optional[str]) -> str:
    return f"class:priority.{priority_level(symbol)}"


def _element_fragment(task: Task, element: TaskElement) -> Fragment:
    kind = element.kind
    if kind == ElementKind.CHECKBOX:
        return ("class:success", "[✓]") if task.completed else ("class:muted", "[○]")
    if kind == ElementKind.PRIORITY:
        if task.priority:
            return (priority_style(task.priority), f"({task.priority})")
        return ("class:priority.none", "(-)")
    if kind == ElementKind.DATE:
        return ("class:date", element.value)
    if kind == ElementKind.TEXT:
        style = "class:completed" if task.completed else "class:text"
        return (style, strip_tags(task.text) or " ")
    if kind == ElementKind.PROJECT:
        return ("class:project", f"+{element.value}")
    if kind == ElementKind.CONTEXT:
        return ("class:context", f"@{element.value}")
    return ("class:meta.key", f"{element.key}:{element.value}")


def task_fragments(state: TuiState, task: Task, selected_element: Optional[int] = None) -> Line:
    today = state.today()
    highlight = state.highlight_overdue and (task.is_overdue(today) or task.is_due_today(today))
    fragments: Line = []
    for index, element in enumerate(task_elements(task)):
        if index:
            fragments.append(("", " "))
        style, text = _element_fragment(task, element)
        if index == selected_element:
            style = "class:selected"
        elif highlight and element.kind in (ElementKind.TEXT, ElementKind.METADATA):
            style = "class:overdue"
        fragments.append((style, text))
    return fragments


def _task_rows(state: TuiState, width: int, max_rows: int) -> List[Line]:
    body_width = width - 5
    total = len(state.visible)
    rows: List[Line] = []
    if not total:
        message = "No tasks found. Press 'n' to add a task."
        rows.append([("class:border", "│   ")] + fit_fragments([("class:muted", message)], body_width) + [("class:border", "│")])
    cursor = state.task_cursor
    start = max(0, min(cursor - max_rows // 2, total - max_rows))
    end = min(total, start + max_rows)
    for index in range(start, end):
        task = state.visible[index]
        selected = index == cursor
        prefix = ("class:pointer", "│ > ") if selected else ("class:border", "│   ")
        element = state.element_index if selected and state.focus == Panel.TASKS else None
        body = fit_fragments(task_fragments(state, task, element), body_width)
        rows.append([prefix] + body + [("class:border", "│")])
    while len(rows) < max_rows:
        rows.append([("class:border", "│"), ("", " " * (width - 2)), ("class:border", "│")])
    return rows


# Bottom panels --------------------------------------------------------------


def bar_levels(counts: List[int]) -> List[int]:
    """Bar heights in eighths of a row (PANEL_ROWS * 8 is a full bar)."""
    peak = max(counts + [1])
    total_levels = PANEL_ROWS * SUB_LEVELS
    levels = []
    for count in counts:
        if count <= 0 or count / peak < 0.01:
            levels.append(0)
        else:
            levels.append(max(1, round(count / peak * total_levels)))
    return levels


def _bar_char(level: int, row: int) -> str:
    bottom = row * SUB_LEVELS
    if level >= bottom + SUB_LEVELS:
        return PARTIAL_BLOCKS[-1]
    if level > bottom:
        return PARTIAL_BLOCKS[level - bottom]
    return " "


def _divider(state: TuiState, panel: Panel) -> Fragment:
    return ("class:border.focus" if state.focus == panel else "class:border", "│")


def _scroll_offset(state: TuiState, panel: Panel, total: int) -> int:
    if state.focus != panel:
        return 0
    cursor = state.panel_cursors[panel]
    return max(0, min(cursor - PANEL_ROWS + 1, total - PANEL_ROWS))


def _list_cell(state: TuiState, panel: Panel, items: List[str], row: int, prefix: str, style: str, width: int) -> Line:
    index = _scroll_offset(state, panel, len(items)) + row
    if index >= len(items):
        return fit_fragments([], width)
    selected = state.focus == panel and state.panel_cursors[panel] == index
    cursor = "> " if selected else "  "
    return fit_fragments([("class:selected" if selected else style, f"{cursor}{prefix}{items[index]}")], width)


def _stats_cell(state: TuiState, stats, row: int) -> Line:
    if row >= len(stats):
        return fit_fragments([], STATS_WIDTH)
    label, value = stats[row]
    selected = state.focus == Panel.STATS and state.panel_cursors[Panel.STATS] == row
    if selected:
        return fit_fragments([("class:selected", f"> {label.upper()}: {value}")], STATS_WIDTH)
    style = STATS_STYLES[row]
    return fit_fragments([(style, f"  {label.upper()}: "), (f"{style} bold", value)], STATS_WIDTH)


def _panel_rows(state: TuiState, width: int) -> List[Line]:
    symbols = priority_items(state)
    counts_by_symbol: Dict[str, int] = priority_counts(state.store.tasks)
    levels = bar_levels([counts_by_symbol.get(symbol, 0) for symbol in symbols])
    stats = stats_items(state)
    projects = project_items(state.store.tasks)
    contexts = context_items(state.store.tasks)
    contexts_width = max(0, width - 2 - (len(symbols) * 2 - 1) - STATS_WIDTH - PROJECTS_WIDTH - 12)
    priority_cursor = state.panel_cursors[Panel.PRIORITIES] if state.focus == Panel.PRIORITIES else None

    rows: List[Line] = []
    for row in range(PANEL_ROWS):
        bar_row = PANEL_ROWS - 1 - row
        line: Line = [("class:border", "│"), ("", " ")]
        for index, symbol in enumerate(symbols):
            char = _bar_char(levels[index], bar_row)
            style = priority_style(symbol)
            if index == priority_cursor and char != " ":
                style = "class:selected"
            line.append((style, char))
            if index < len(symbols) - 1:
                line.append(("", " "))
        line += [("", " "), _divider(state, Panel.STATS), ("", " ")]
        line += _stats_cell(state, stats, row)
        line += [("", " "), _divider(state, Panel.PROJECTS), ("", " ")]
        line += _list_cell(state, Panel.PROJECTS, projects, row, "+", "class:project", PROJECTS_WIDTH)
        line += [("", " "), _divider(state, Panel.CONTEXTS), ("", " ")]
        line += _list_cell(state, Panel.CONTEXTS, contexts, row, "@", "class:context", contexts_width)
        rows.append(fit_fragments(line, width - 1) + [("class:border", "│")])

    label_line: Line = [("class:border", "│"), ("", " ")]
    for index, symbol in enumerate(symbols):
        style = "class:selected" if index == priority_cursor else priority_style(symbol)
        label_line.append((style, symbol))
        if index < len(symbols) - 1:
            label_line.append(("", " "))
    label_line += [("", " "), _divider(state, Panel.STATS), ("", " ")]
    label_line += fit_fragments([("class:muted", "  Stats")], STATS_WIDTH)
    label_line += [("", " "), _divider(state, Panel.PROJECTS), ("", " ")]
    label_line += fit_fragments([("class:muted", f"  Projects ({len(projects)})")], PROJECTS_WIDTH)
    label_line += [("", " "), _divider(state, Panel.CONTEXTS), ("", " ")]
    label_line += fit_fragments([("class:muted", f"  Contexts ({len(contexts)})")], contexts_width)
    rows.append(fit_fragments(label_line, width - 1) + [("class:border", "│")])
    return rows


# Status bar -----------------------------------------------------------------


def _status_lines(state: TuiState, width: int) -> List[Line]:
    entry = state.entry
    if entry is not None:
        text = entry.text
        cursor = entry.buffer.cursor_position
        at = text[cursor] if cursor < len(text) else " "
        prompt_line: Line = [
            ("class:header", entry.prompt + " "),
            ("class:text", text[:cursor]),
            ("class:cursor", at),
            ("class:text", text[cursor + 1 :]),
        ]
        hint_line: Line = [("class:muted", entry.hint)]
        if state.status_message:
            hint_line += [("class:border", "  │  "), ("class:warning", state.status_message)]
        return [fit_fragments(prompt_line, width), fit_fragments(hint_line, width)]

    shortcuts = [
        ("?", " Help"),
        ("TAB", " Panels"),
        ("space", " Toggle Done"),
        ("e", " Edit"),
        ("n", " New"),
        ("v", " Hide Completed" if state.show_completed else " Show All"),
        ("q", " Quit"),
    ]
    first: Line = []
    for index, (key, label) in enumerate(shortcuts):
        if index:
            first.append(("class:border", "  │  "))
        first += [("class:muted", key), ("class:text", label)]

    if state.focus == Panel.TASKS:
        panel: Fragment = ("class:muted", f"Panel: {state.focus.label}")
    else:
        panel = ("class:header", f"Panel: {state.focus.label} (press Enter to filter, ESC to return)")
    completed = "Showing completed" if state.show_completed else "Hiding completed"
    second: Line = [panel, ("class:border", "  │  "), ("class:muted", f"{completed} | Sort: {state.sort_mode.value}")]
    if state.status_message:
        second += [("class:border", "  │  "), ("class:warning", state.status_message)]
    return [fit_fragments(first, width), fit_fragments(second, width)]
