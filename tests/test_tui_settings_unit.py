#!/usr/bin/env python3
"""Unit tests for the settings overlay and theme selector."""

from core.priority import PriorityMode
from interface.tui_settings import (
    build_settings_options,
    open_theme_selector,
    resolve_theme_name,
    set_theme,
)
from interface.tui_state import EntryMode, Overlay
from interface.tui_themes import DEFAULT_THEME, theme_names


def _saver(calls):
    return lambda mode, theme: calls.append((mode, theme))


class TestSettingsOptions:
    """Tests for build_settings_options."""

    def test_rows(self, make_state):
        options = build_settings_options(make_state("a"))
        assert [opt["label"] for opt in options] == ["Priority mode", "Theme", "Todo file"]
        assert options[0]["value"] == "Letter (A-Z)"
        assert options[2]["disabled"]

    def test_disabled_row_shows_message(self, make_state, press):
        state = make_state("a")
        press(state, ",", "j", "j", "j", "enter")
        assert state.settings_index == 2
        assert state.status_message == "The todo file is chosen at startup"


class TestPriorityModeToggle:
    """Tests for toggling priority mode from settings."""

    def test_toggle_without_priorities_switches_directly(self, make_state, press):
        calls = []
        state = make_state("plain", settings_saver=_saver(calls))
        press(state, ",", "enter")
        assert state.priority_mode == PriorityMode.NUMBER
        assert calls == [("number", DEFAULT_THEME)]

    def test_toggle_with_priorities_confirms_and_converts(self, make_state, press):
        calls = []
        state = make_state("(A) a", "(C) c", settings_saver=_saver(calls))
        press(state, ",", "1")
        assert state.entry.mode == EntryMode.CONFIRM
        assert state.entry.text == "y"
        assert "Convert 2 priorities" in state.entry.prompt
        press(state, "enter")
        assert state.priority_mode == PriorityMode.NUMBER
        assert [t.priority for t in state.store.tasks] == ["0", "2"]
        assert state.overlay == Overlay.SETTINGS
        assert calls == [("number", DEFAULT_THEME)]

    def test_decline_conversion_switches_only(self, make_state, press, type_text):
        state = make_state("(A) a")
        press(state, ",", "1", "backspace")
        type_text(state, "n")
        press(state, "enter")
        assert state.priority_mode == PriorityMode.NUMBER
        assert state.store.get(1).priority == "A"

    def test_escape_cancels_toggle(self, make_state, press):
        state = make_state("(A) a")
        press(state, ",", "1", "escape")
        assert state.priority_mode == PriorityMode.LETTER
        assert state.overlay == Overlay.SETTINGS


class TestThemeSelector:
    """Tests for the theme selector overlay."""

    def test_open_from_settings_and_apply(self, make_state, press):
        calls = []
        state = make_state("a", settings_saver=_saver(calls))
        press(state, ",", "j", "enter")
        assert state.overlay == Overlay.THEMES
        assert state.theme_index == theme_names().index(DEFAULT_THEME)
        press(state, "j", "enter")
        assert state.overlay == Overlay.NONE
        assert state.theme_name == theme_names()[1]
        assert calls == [("letter", theme_names()[1])]

    def test_escape_keeps_theme(self, make_state, press):
        state = make_state("a")
        open_theme_selector(state)
        press(state, "j", "j", "escape")
        assert state.theme_name == DEFAULT_THEME
        assert state.overlay == Overlay.NONE

    def test_set_theme(self, make_state):
        calls = []
        state = make_state(settings_saver=_saver(calls))
        assert set_theme(state, "nord")
        assert not set_theme(state, "nope")
        assert set_theme(state, "nord")
        assert calls == [("letter", "nord")]

    def test_resolve_theme_name(self):
        assert resolve_theme_name("dracula") == "dracula"
        assert resolve_theme_name("bogus") == DEFAULT_THEME
