"""JSON output of the one-shot CLI.

Every command prints exactly one document on stdout::

    {"ok": true, "command": "add", "message": "Added task 3", "data": {...}}

and returns the process exit code (0 on success, 1 on error).
"""

import json
from typing import Any, Dict, Optional


def _emit(document: Dict[str, Any]) -> None:
    print(json.dumps(document, ensure_ascii=False, indent=2))


def print_result(command: str, message: str, data: Optional[Dict[str, Any]] = None) -> int:
    _emit({"ok": True, "command": command, "message": message, "data": data or {}})
    return 0


def print_error(command: Optional[str], message: str) -> int:
    _emit({"ok": False, "command": command, "message": message, "data": {}})
    return 1


__all__ = ["print_result", "print_error"]
