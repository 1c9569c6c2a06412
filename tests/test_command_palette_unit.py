#!/usr/bin/env python3
"""Unit tests for colon commands."""

import logging

from application.view import SortMode
from interface.command_palette import COMMANDS, run_command
from interface.tui_state import Overlay


class TestRunCommand:
    """Tests for run_command."""

    def test_quit(self, make_state):
        state = make_state("a")
        assert run_command(state, "q")
        assert state.should_exit

    def test_write_quit_saves(self, make_state):
        state = make_state("a")
        saves = state.store.repository.saves
        run_command(state, ":wq")
        assert state.store.repository.saves == saves + 1
        assert state.should_exit

    def test_sort_with_mode(self, make_state):
        state = make_state("a")
        run_command(state, "sort context")
        assert state.sort_mode == SortMode.CONTEXT
        run_command(state, "sort")
        assert state.sort_mode == SortMode.PRIORITY

    def test_unknown_sort_mode(self, make_state):
        state = make_state("a")
        run_command(state, "sort sideways")
        assert state.sort_mode == SortMode.PRIORITY
        assert state.status_message == "Unknown sort mode: sideways"

    def test_theme_command(self, make_state):
        state = make_state("a")
        run_command(state, "theme nord")
        assert state.theme_name == "nord"
        run_command(state, "theme")
        assert state.overlay == Overlay.THEMES

    def test_unknown_command_logged(self, make_state, caplog):
        state = make_state("a")
        with caplog.at_level(logging.WARNING, logger="todo_tui.commands"):
            assert run_command(state, "frobnicate now") is False
        assert state.status_message == "Unknown command: frobnicate"
        assert any("frobnicate" in record.getMessage() for record in caplog.records)

    def test_empty_command(self, make_state):
        assert run_command(make_state(), "   ") is False

    def test_aliases_registered(self):
        for name in ("q", "quit", "w", "write", "wq", "x", "help", "set", "sort", "u", "undo", "theme"):
            assert name in COMMANDS


class TestCommandBar:
    """Colon commands typed through the key table."""

    def test_typed_command(self, make_state, press, type_text):
        state = make_state("a")
        press(state, ":")
        type_text(state, "sort date")
        press(state, "enter")
        assert state.sort_mode == SortMode.DATE
        assert state.entry is None

    def test_typed_undo(self, make_state, press, type_text):
        state = make_state("a")
        press(state, "space", ":")
        type_text(state, "undo")
        press(state, "enter")
        assert not state.store.get(1).completed
