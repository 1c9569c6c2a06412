#!/usr/bin/env python3
"""prompt_toolkit wiring of TodoTUI: key bindings, escape latency, end-to-end keys."""

import pytest
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.keys import Keys
from prompt_toolkit.output import DummyOutput

from application.task_store import TaskStore
from core.priority import PriorityMode
from core.task import Task
from interface.tui_app import TodoTUI
from interface.tui_state import Overlay


@pytest.fixture
def pipe_input():
    with create_pipe_input() as inp:
        yield inp


def _tui(pipe_input, *texts, **kwargs):
    store = TaskStore([Task.create(i + 1, text) for i, text in enumerate(texts)])
    return TodoTUI(store, app_input=pipe_input, app_output=DummyOutput(), today=lambda: "2025-06-10", **kwargs)


class TestKeyBindings:
    """Tests for the key binding table handed to prompt_toolkit."""

    def test_escape_binding_is_eager(self, pipe_input):
        tui = _tui(pipe_input, "a")
        esc_bindings = [b for b in tui.app.key_bindings.bindings if b.keys == (Keys.Escape,)]
        assert esc_bindings, "Escape binding not found"
        assert all(b.eager() for b in esc_bindings)

    def test_escape_does_not_wait_for_sequences(self, pipe_input):
        tui = _tui(pipe_input, "a")
        assert tui.app.key_bindings.timeout == 0

    def test_ttimeoutlen_from_env(self, pipe_input, monkeypatch):
        monkeypatch.setenv("TODO_TUI_TTIMEOUT", "0.2")
        assert _tui(pipe_input, "a").app.ttimeoutlen == pytest.approx(0.2)
        monkeypatch.setenv("TODO_TUI_TTIMEOUT", "garbage")
        assert _tui(pipe_input, "a").app.ttimeoutlen == pytest.approx(0.05)

    def test_unknown_theme_falls_back(self, pipe_input):
        assert _tui(pipe_input, "a", theme="nope").state.theme_name == "catppuccin"

    def test_format_dialog_opens_on_mismatch(self, pipe_input):
        store = TaskStore([Task.create(1, "a", priority="1")])
        tui = TodoTUI(store, priority_mode=PriorityMode.LETTER, app_input=pipe_input, app_output=DummyOutput())
        assert tui.state.overlay == Overlay.FORMAT_MISMATCH

    def test_handle_key_exits_app_on_quit(self, pipe_input):
        tui = _tui(pipe_input, "a")
        exits = []
        tui.app.exit = lambda **kwargs: exits.append(kwargs)
        tui.handle_key("j")
        assert exits == []
        tui.handle_key("q")
        assert exits == [{}]

    def test_render_uses_output_size(self, pipe_input):
        tui = _tui(pipe_input, "a")
        text = "".join(fragment[1] for fragment in tui._render())
        rows, columns = tui.app.output.get_size()
        assert len(text.split("\n")) == rows
        assert "Todo.txt (1 tasks)" in text


class TestRunLoop:
    """Keys fed through a pipe reach the key table."""

    def test_type_new_task_then_quit(self, pipe_input):
        tui = _tui(pipe_input, "existing")
        pipe_input.send_text("nBuy milk\rq")
        tui.run()
        assert [t.text for t in tui.state.store.tasks] == ["existing", "Buy milk"]
        assert tui.state.should_exit

    def test_space_toggles_completion(self, pipe_input):
        tui = _tui(pipe_input, "a", "b")
        pipe_input.send_text(" q")
        tui.run()
        assert tui.state.store.get(1).completed
