#!/usr/bin/env python3
"""TUI application - TodoTUI class and cmd_tui command."""

import asyncio
import logging
import os
from typing import Any, Callable, Optional

from prompt_toolkit.application import Application
from prompt_toolkit.clipboard import InMemoryClipboard
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import DynamicStyle, Style

import config
from application.task_store import TaskStore
from core.priority import PriorityMode
from core.task import today_iso
from infrastructure.file_repository import FileTaskRepository, resolve_todo_path

from .tui_format_dialog import open_format_dialog_if_needed
from .tui_keymap import dispatch_key
from .tui_render import render_frame
from .tui_settings import resolve_theme_name
from .tui_state import SettingsSaver, TuiState
from .tui_themes import DEFAULT_THEME, build_style

logger = logging.getLogger("todo_tui.tui")

FAREWELL = "✨ Done! Your tasks are saved."

# prompt_toolkit key name -> name understood by the key table
NAMED_KEYS = {
    "up": "up",
    "down": "down",
    "left": "left",
    "right": "right",
    "home": "home",
    "end": "end",
    "enter": "enter",
    "tab": "tab",
    "escape": "escape",
    "backspace": "backspace",
    "delete": "delete",
    "c-a": "c-a",
    "c-e": "c-e",
    "c-v": "c-v",
}


class TodoTUI:
    def __init__(
        self,
        store: TaskStore,
        *,
        priority_mode: PriorityMode = PriorityMode.LETTER,
        theme: str = DEFAULT_THEME,
        settings_saver: Optional[SettingsSaver] = None,
        app_input: Any = None,
        app_output: Any = None,
        today: Callable[[], str] = today_iso,
    ):
        self.state = TuiState(
            store,
            priority_mode=priority_mode,
            theme_name=resolve_theme_name(theme),
            today=today,
            settings_saver=settings_saver,
            search_scheduler=self._schedule,
            clipboard=InMemoryClipboard(),
        )
        open_format_dialog_if_needed(self.state)
        self._style_cache = (None, None)

        self.kb = self._build_key_bindings()
        self.app = Application(
            layout=Layout(
                Window(
                    content=FormattedTextControl(self._render, show_cursor=False),
                    always_hide_cursor=True,
                    wrap_lines=False,
                )
            ),
            key_bindings=self.kb,
            style=DynamicStyle(self._current_style),
            full_screen=True,
            input=app_input,
            output=app_output,
        )
        # Esc must feel instant; prompt_toolkit waits 0.5s by default to tell a bare
        # Escape from the start of an escape sequence. Slow SSH links can raise it.
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("TODO_TUI_TTIMEOUT", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05

    # Wiring --------------------------------------------------------------

    def _build_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()
        kb.timeout = 0

        @kb.add("c-c", eager=True)
        def _(event):
            event.app.exit()

        for pt_key, name in NAMED_KEYS.items():
            kb.add(pt_key, eager=True)(self._named_handler(name))

        @kb.add(Keys.Any)
        def _(event):
            data = event.data
            if data == " ":
                self.handle_key("space")
            elif len(data) == 1 and data.isprintable():
                self.handle_key(data)

        return kb

    def _named_handler(self, name: str):
        def handler(event) -> None:
            self.handle_key(name)

        return handler

    def handle_key(self, key: str) -> None:
        dispatch_key(self.state, key)
        if self.state.should_exit:
            self.app.exit()

    def _schedule(self, delay: float, callback: Callable[[], None]):
        def fire() -> None:
            callback()
            self.app.invalidate()

        return asyncio.get_running_loop().call_later(delay, fire)

    # Rendering -----------------------------------------------------------

    def _current_style(self) -> Style:
        name, style = self._style_cache
        if name != self.state.theme_name or style is None:
            style = build_style(self.state.theme_name)
            self._style_cache = (self.state.theme_name, style)
        return style

    def _render(self) -> FormattedText:
        size = self.app.output.get_size()
        return render_frame(self.state, size.columns, size.rows)

    def run(self) -> None:
        self.app.run()


def cmd_tui(args) -> int:
    path = resolve_todo_path(getattr(args, "file", None))
    store = TaskStore.load(FileTaskRepository(path))
    logger.debug("starting TUI on %s (%d tasks)", path, len(store))
    tui = TodoTUI(
        store,
        priority_mode=PriorityMode.from_string(config.get_priority_mode()),
        theme=getattr(args, "theme", None) or config.get_theme(),
        settings_saver=config.save_ui_settings,
    )
    tui.run()
    print(FAREWELL)
    return 0
