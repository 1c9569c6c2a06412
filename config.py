from __future__ import annotations

import os
import yaml
from pathlib import Path
from typing import Dict, Any

USER_CONFIG_PATH = Path(os.environ.get("TODO_TUI_CONFIG") or Path.home() / ".todo_tui_config.yaml")

DEFAULT_PRIORITY_MODE = "letter"
DEFAULT_THEME = "catppuccin"
PRIORITY_MODES = ("letter", "number")


def _load_config() -> Dict[str, Any]:
    if not USER_CONFIG_PATH.exists():
        return {}
    try:
        data = yaml.safe_load(USER_CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any]) -> None:
    if not data:
        if USER_CONFIG_PATH.exists():
            USER_CONFIG_PATH.unlink()
        return
    USER_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    USER_CONFIG_PATH.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def get_priority_mode() -> str:
    value = str(_load_config().get("priorityMode", "")).strip().lower()
    return value if value in PRIORITY_MODES else DEFAULT_PRIORITY_MODE


def set_priority_mode(value: str) -> None:
    value = (value or "").strip().lower()
    if value not in PRIORITY_MODES:
        raise ValueError(f"Invalid priority mode: {value!r}")
    data = _load_config()
    data["priorityMode"] = value
    _save_config(data)


def get_theme() -> str:
    return str(_load_config().get("theme", "") or "").strip() or DEFAULT_THEME


def set_theme(value: str) -> None:
    data = _load_config()
    value = (value or "").strip()
    if value:
        data["theme"] = value
    else:
        data.pop("theme", None)
    _save_config(data)


def save_ui_settings(priority_mode: str, theme: str) -> None:
    """Persist both interactive settings in one write."""
    data = _load_config()
    changed = False
    if priority_mode in PRIORITY_MODES and data.get("priorityMode") != priority_mode:
        data["priorityMode"] = priority_mode
        changed = True
    if theme and data.get("theme") != theme:
        data["theme"] = theme
        changed = True
    if changed:
        _save_config(data)
