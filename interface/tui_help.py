from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core.priority import PriorityMode

from .tui_display import pad_display
from .tui_state import TuiState


def help_sections(state: TuiState) -> List[Tuple[str, List[Tuple[str, str]]]]:
    if state.priority_mode == PriorityMode.NUMBER:
        priority_row = ("0-9, !@#...", "Set priority (0-9)")
    else:
        priority_row = ("Shift+Letter", "Set priority (A-Z, G is go-bottom)")
    return [
        (
            "Navigation",
            [
                ("Up/k, Down/j", "Move up/down (tasks or within panels)"),
                ("Left/h, Right/l", "Move between task elements"),
                ("Tab", "Cycle through panels"),
                ("g, G", "Go to top/bottom"),
            ],
        ),
        (
            "Panel Actions",
            [
                ("Enter", "Filter by selected item (in non-task panels)"),
                ("ESC", "Return to tasks panel, then clear filter"),
            ],
        ),
        (
            "Task Actions",
            [
                ("space", "Toggle task completion"),
                ("Enter, e", "Edit task text"),
                priority_row,
                ("p", "Add project tag (+tag)"),
                ("c", "Add context tag (@tag)"),
                ("d", "Add due date"),
                ("n, a", "Add new task"),
                ("x", "Delete task"),
                ("Delete/Bksp", "Delete selected element"),
                ("y, Ctrl+V", "Yank task / paste a copy"),
            ],
        ),
        (
            "View",
            [
                ("v", "Toggle show/hide completed tasks"),
                ("o", "Toggle highlight overdue/due today"),
                ("/", "Search tasks"),
                ("s", "Cycle sort mode"),
                ("r", "Refresh from file"),
            ],
        ),
        (
            "Other",
            [
                ("u", "Undo last action"),
                ("z", "Purge all completed tasks"),
                (",", "Settings"),
                (":", "Command (q, w, wq, sort, theme, undo, help)"),
                ("?", "Show this help"),
                ("q, ESC", "Quit"),
            ],
        ),
    ]


def render_help(state: TuiState, width: int) -> FormattedText:
    key_width = 18
    fragments: List[Tuple[str, str]] = [("class:header", "Keyboard Shortcuts\n\n")]
    for title, rows in help_sections(state):
        fragments.append(("class:project", f"{title}:\n"))
        for keys, description in rows:
            fragments.append(("class:text", "  " + pad_display(keys, key_width)))
            fragments.append(("class:text.dim", f"{description[: max(10, width - key_width - 4)]}\n"))
        fragments.append(("", "\n"))
    fragments.append(("class:muted", "Press any key to close help..."))
    return FormattedText(fragments)
