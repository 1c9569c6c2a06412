#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict, List

from prompt_toolkit.styles import Style


THEME_COLORS: Dict[str, Dict[str, str]] = {
    "catppuccin": {
        "priority_high": "#f38ba8",
        "priority_medium": "#fab387",
        "priority_low": "#89b4fa",
        "success": "#a6e3a1",
        "muted": "#6c7086",
        "border": "#585b70",
        "highlight": "#f9e2af",
        "overdue": "#eba0ac",
        "project": "#cba6f7",
        "context": "#94e2d5",
        "date": "#f5c2e7",
        "text": "#cdd6f4",
        "text_dim": "#a6adc8",
        "background": "#1e1e2e",
        "selection": "#45475a",
    },
    "dracula": {
        "priority_high": "#ff5555",
        "priority_medium": "#ffb86c",
        "priority_low": "#8be9fd",
        "success": "#50fa7b",
        "muted": "#6272a4",
        "border": "#44475a",
        "highlight": "#f1fa8c",
        "overdue": "#ff79c6",
        "project": "#bd93f9",
        "context": "#8be9fd",
        "date": "#ff79c6",
        "text": "#f8f8f2",
        "text_dim": "#6272a4",
        "background": "#282a36",
        "selection": "#44475a",
    },
    "nord": {
        "priority_high": "#bf616a",
        "priority_medium": "#d08770",
        "priority_low": "#81a1c1",
        "success": "#a3be8c",
        "muted": "#4c566a",
        "border": "#3b4252",
        "highlight": "#ebcb8b",
        "overdue": "#bf616a",
        "project": "#b48ead",
        "context": "#88c0d0",
        "date": "#d08770",
        "text": "#eceff4",
        "text_dim": "#d8dee9",
        "background": "#2e3440",
        "selection": "#434c5e",
    },
    "gruvbox": {
        "priority_high": "#fb4934",
        "priority_medium": "#fe8019",
        "priority_low": "#83a598",
        "success": "#b8bb26",
        "muted": "#665c54",
        "border": "#504945",
        "highlight": "#fabd2f",
        "overdue": "#cc241d",
        "project": "#d3869b",
        "context": "#8ec07c",
        "date": "#d79921",
        "text": "#ebdbb2",
        "text_dim": "#a89984",
        "background": "#282828",
        "selection": "#3c3836",
    },
    "tokyo-night": {
        "priority_high": "#f7768e",
        "priority_medium": "#ff9e64",
        "priority_low": "#7aa2f7",
        "success": "#9ece6a",
        "muted": "#565f89",
        "border": "#3b4261",
        "highlight": "#e0af68",
        "overdue": "#db4b4b",
        "project": "#bb9af7",
        "context": "#73daca",
        "date": "#ff9e64",
        "text": "#c0caf5",
        "text_dim": "#9aa5ce",
        "background": "#1a1b26",
        "selection": "#33467c",
    },
    "solarized": {
        "priority_high": "#dc322f",
        "priority_medium": "#cb4b16",
        "priority_low": "#268bd2",
        "success": "#859900",
        "muted": "#586e75",
        "border": "#073642",
        "highlight": "#b58900",
        "overdue": "#dc322f",
        "project": "#6c71c4",
        "context": "#2aa198",
        "date": "#d33682",
        "text": "#839496",
        "text_dim": "#657b83",
        "background": "#002b36",
        "selection": "#073642",
    },
    "one-dark": {
        "priority_high": "#e06c75",
        "priority_medium": "#d19a66",
        "priority_low": "#61afef",
        "success": "#98c379",
        "muted": "#5c6370",
        "border": "#3e4451",
        "highlight": "#e5c07b",
        "overdue": "#be5046",
        "project": "#c678dd",
        "context": "#56b6c2",
        "date": "#d19a66",
        "text": "#abb2bf",
        "text_dim": "#828997",
        "background": "#282c34",
        "selection": "#3e4451",
    },
    "monokai": {
        "priority_high": "#ff6188",
        "priority_medium": "#fc9867",
        "priority_low": "#78dce8",
        "success": "#a9dc76",
        "muted": "#727072",
        "border": "#49483e",
        "highlight": "#ffd866",
        "overdue": "#ff6188",
        "project": "#ab9df2",
        "context": "#78dce8",
        "date": "#fc9867",
        "text": "#fcfcfa",
        "text_dim": "#939293",
        "background": "#2d2a2e",
        "selection": "#49483e",
    },
}

THEME_LABELS: Dict[str, str] = {
    "catppuccin": "Catppuccin",
    "dracula": "Dracula",
    "nord": "Nord",
    "gruvbox": "Gruvbox",
    "tokyo-night": "Tokyo Night",
    "solarized": "Solarized",
    "one-dark": "One Dark",
    "monokai": "Monokai",
}

DEFAULT_THEME = "catppuccin"


def _style_classes(c: Dict[str, str]) -> Dict[str, str]:
    return {
        "": c["text"],  # terminal background stays untouched
        "text": c["text"],
        "text.dim": c["text_dim"],
        "muted": c["muted"],
        "border": c["border"],
        "border.focus": f"{c['highlight']} bold",
        "header": f"{c['highlight']} bold",
        "title.filter": f"{c['priority_high']} bold",
        "title.search": f"{c['context']} bold",
        "priority.high": f"{c['priority_high']} bold",
        "priority.medium": c["priority_medium"],
        "priority.low": c["priority_low"],
        "priority.none": c["muted"],
        "success": c["success"],
        "warning": f"{c['priority_medium']} bold",
        "project": c["project"],
        "context": c["context"],
        "date": c["date"],
        "meta.key": c["muted"],
        "completed": f"{c['muted']} strike",
        "overdue": f"{c['overdue']} bold",
        "cursor": f"bg:{c['highlight']} {c['background']}",
        "selected": f"bg:{c['selection']} {c['highlight']} bold",
        "pointer": f"{c['highlight']} bold",
        "bar": c["priority_low"],
    }


THEMES: Dict[str, Dict[str, str]] = {name: _style_classes(colors) for name, colors in THEME_COLORS.items()}


def theme_names() -> List[str]:
    return list(THEMES.keys())


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)  # defensive copy


def get_theme_colors(theme: str) -> Dict[str, str]:
    return dict(THEME_COLORS.get(theme) or THEME_COLORS[DEFAULT_THEME])


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    palette = get_theme_palette(theme)
    return Style.from_dict(palette)
