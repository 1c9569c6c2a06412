#!/usr/bin/env python3
"""
todo: todo.txt manager (CLI + full-screen TUI).

This is a thin facade that wires the argparse parser to the command modules.
"""

import argparse
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from typing import List, Optional

import config
from core.errors import TodoError

from .cli_commands import cmd_add, cmd_delete, cmd_depri, cmd_do, cmd_edit, cmd_list, cmd_pri
from .cli_io import print_error
from .cli_parser import build_parser as build_cli_parser
from .tui_app import TodoTUI, cmd_tui
from .tui_themes import THEMES

__all__ = [
    "cmd_add",
    "cmd_list",
    "cmd_do",
    "cmd_edit",
    "cmd_delete",
    "cmd_pri",
    "cmd_depri",
    "cmd_tui",
    "TodoTUI",
    "build_parser",
    "main",
]

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging() -> Optional[logging.Handler]:
    """Attach a DEBUG file handler when TODO_TUI_LOG names a file."""
    log_path = os.environ.get("TODO_TUI_LOG")
    if not log_path:
        return None
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("todo_tui")
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    return handler


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    return build_cli_parser(commands=sys.modules[__name__], themes=THEMES, default_theme=config.get_theme())


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    configure_logging()
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.version:
        try:
            print(pkg_version("todo-tui"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    if not getattr(args, "command", None):
        args = parser.parse_args(argv + ["list"])
    try:
        return args.func(args)
    except TodoError as exc:
        logging.getLogger("todo_tui").debug("%s failed: %s", args.command, exc)
        return print_error(args.command, str(exc))


if __name__ == "__main__":
    sys.exit(main())
