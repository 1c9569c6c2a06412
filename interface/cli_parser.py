"""CLI parser construction for the todo.txt CLI/TUI."""

import argparse
from typing import Any, Mapping


def build_parser(commands: Any, themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo",
        description="todo.txt task manager: one-shot commands or the interactive TUI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-f", "--file", dest="file", help="path to todo.txt (overrides TODO_FILE)")
    parser.add_argument("--version", action="store_true", help="print version and exit")

    sub = parser.add_subparsers(dest="command", help="Commands")

    # tui
    tui_p = sub.add_parser("tui", aliases=["interactive", "i"], help="Start the interactive TUI")
    tui_p.add_argument("--theme", choices=list(themes.keys()), default=default_theme, help="color theme")
    tui_p.set_defaults(func=commands.cmd_tui)

    # add
    ap = sub.add_parser("add", help="Add a task; a leading (X) sets its priority")
    ap.add_argument("text", nargs="+")
    ap.set_defaults(func=commands.cmd_add)

    # list
    lp = sub.add_parser("list", aliases=["ls"], help="List tasks")
    lp.add_argument("-a", "--all", action="store_true", help="include completed tasks")
    lp.add_argument("-p", "--project", help="only tasks tagged +PROJECT")
    lp.add_argument("-c", "--context", help="only tasks tagged @CONTEXT")
    lp.add_argument("--priority", help="only tasks with this priority")
    lp.add_argument("-s", "--search", help="case-insensitive text search")
    lp.set_defaults(func=commands.cmd_list)

    # do
    dp = sub.add_parser("do", help="Mark a task as completed")
    dp.add_argument("task_id", type=int)
    dp.set_defaults(func=commands.cmd_do)

    # edit
    ep = sub.add_parser("edit", help="Replace a task's text")
    ep.add_argument("task_id", type=int)
    ep.add_argument("text", nargs="+")
    ep.set_defaults(func=commands.cmd_edit)

    # delete
    rp = sub.add_parser("delete", aliases=["rm"], help="Delete a task")
    rp.add_argument("task_id", type=int)
    rp.set_defaults(func=commands.cmd_delete)

    # pri / depri
    pp = sub.add_parser("pri", help="Set a task's priority")
    pp.add_argument("task_id", type=int)
    pp.add_argument("priority")
    pp.set_defaults(func=commands.cmd_pri)

    dpp = sub.add_parser("depri", help="Remove a task's priority")
    dpp.add_argument("task_id", type=int)
    dpp.set_defaults(func=commands.cmd_depri)

    return parser
