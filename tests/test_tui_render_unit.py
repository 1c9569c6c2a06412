#!/usr/bin/env python3
"""Unit tests for the frame renderer."""

from prompt_toolkit.formatted_text import fragment_list_to_text

from interface.tui_display import display_width
from interface.tui_render import bar_levels, render_frame, task_fragments


def _frame(state, width=100, height=30):
    return fragment_list_to_text(render_frame(state, width, height))


class TestMainFrame:
    """Tests for the main task screen."""

    def test_frame_fills_terminal(self, make_state):
        state = make_state("(A) 2025-01-01 Call Mom +Family @phone due:2025-12-15", "Walk dog")
        lines = _frame(state, 100, 30).split("\n")
        assert len(lines) == 30
        assert all(display_width(line) == 100 for line in lines)

    def test_header_and_rows(self, make_state):
        state = make_state("(A) 2025-01-01 Call Mom +Family @phone due:2025-12-15", "Walk dog")
        text = _frame(state)
        assert " Todo.txt (2 tasks) " in text
        assert "│ > [○] (A) 2025-01-01 Call Mom +Family @phone due:2025-12-15" in text
        assert "│   [○] (-) Walk dog" in text

    def test_filter_and_search_labels(self, make_state, press, type_text):
        state = make_state("(A) Buy milk", "(B) other")
        press(state, "tab", "enter", "/")
        type_text(state, "milk")
        press(state, "enter")
        first_line = _frame(state).split("\n")[0]
        assert "[Filter: (A)]" in first_line
        assert "[Search: milk]" in first_line
        assert "(1 tasks)" in first_line

    def test_empty_list_message(self, make_state):
        assert "No tasks found. Press 'n' to add a task." in _frame(make_state())

    def test_completed_checkbox(self, make_state, press):
        state = make_state("x 2025-06-10 done")
        press(state, "v")
        assert "[✓]" in _frame(state)

    def test_status_lines(self, make_state, press):
        state = make_state("a +p")
        text = _frame(state)
        assert "Panel: Tasks" in text
        assert "Hiding completed | Sort: priority" in text
        press(state, "tab", "tab", "tab")
        assert "Panel: Projects (press Enter to filter, ESC to return)" in _frame(state)

    def test_panel_labels(self, make_state):
        text = _frame(make_state("a +home @desk", "b +work"), width=140)
        assert "Projects (2)" in text
        assert "Contexts (1)" in text
        assert "+home" in text and "@desk" in text
        assert "ACTIVE: 2/2" in text

    def test_entry_prompt_replaces_shortcuts(self, make_state, press):
        state = make_state("a")
        press(state, "n")
        text = _frame(state)
        assert "New task:" in text
        assert "Enter to save, ESC to cancel" in text
        assert "Toggle Done" not in text

    def test_status_message_shown(self, make_state, press):
        state = make_state("a")
        press(state, "u")
        assert "Nothing to undo" in _frame(state)


class TestOverlayFrames:
    """Overlays replace the main frame."""

    def test_help(self, make_state, press):
        state = make_state("a")
        press(state, "?")
        text = _frame(state)
        assert "Keyboard Shortcuts" in text
        assert text.endswith("Press any key to close help...")
        assert "Todo.txt" not in text

    def test_settings(self, make_state, press):
        state = make_state("a")
        press(state, ",")
        text = _frame(state)
        assert "Settings" in text
        assert "Letter (A-Z)" in text

    def test_theme_selector(self, make_state, press):
        state = make_state("a")
        press(state, ",", "j", "enter")
        text = _frame(state)
        assert "Select Theme" in text
        assert "Catppuccin" in text


class TestTaskFragments:
    """Tests for per-element styling."""

    def test_overdue_highlight_toggle(self, make_state, press):
        state = make_state("Pay due:2025-06-01")
        task = state.store.get(1)
        fragments = task_fragments(state, task)
        assert fragments[4] == ("class:overdue", "Pay")
        press(state, "o")
        assert task_fragments(state, task)[4] == ("class:text", "Pay")

    def test_selected_element_style(self, make_state):
        state = make_state("(A) Call")
        fragments = task_fragments(state, state.store.get(1), selected_element=1)
        assert fragments[0] == ("class:muted", "[○]")
        assert fragments[2] == ("class:selected", "(A)")
        assert fragments[4] == ("class:text", "Call")


class TestBars:
    def test_bar_levels(self):
        assert bar_levels([4, 2, 0]) == [40, 20, 0]

    def test_small_counts_get_visible_bar(self):
        assert bar_levels([1000, 1])[1] == 0
        assert bar_levels([50, 1])[1] >= 1
