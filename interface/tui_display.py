"""Display utilities: text width, trimming and padding with proper Unicode width handling."""

from typing import List, Tuple

from wcwidth import wcwidth

Fragment = Tuple[str, str]


def _char_width(ch: str) -> int:
    w = wcwidth(ch)
    if w is None or w < 0:
        return 0
    return w


def display_width(text: str) -> int:
    """Return visual width of text accounting for wide/narrow characters."""
    return sum(_char_width(ch) for ch in text)


def trim_display(text: str, width: int) -> str:
    """Trim text so visible width doesn't exceed specified width."""
    acc = []
    used = 0
    for ch in text:
        w = _char_width(ch)
        if used + w > width:
            break
        acc.append(ch)
        used += w
    return "".join(acc)


def pad_display(text: str, width: int) -> str:
    """Trim and pad with spaces to exact visible width."""
    trimmed = trim_display(text, width)
    trimmed_width = display_width(trimmed)
    if trimmed_width < width:
        trimmed += " " * (width - trimmed_width)
    return trimmed


def fragments_width(fragments: List[Fragment]) -> int:
    return sum(display_width(text) for _, text in fragments)


def fit_fragments(fragments: List[Fragment], width: int, fill_style: str = "") -> List[Fragment]:
    """Trim a fragment list to ``width`` cells, padding the remainder with spaces."""
    fitted: List[Fragment] = []
    used = 0
    for style, text in fragments:
        if used >= width:
            break
        text_width = display_width(text)
        if used + text_width > width:
            text = trim_display(text, width - used)
            text_width = display_width(text)
        fitted.append((style, text))
        used += text_width
    if used < width:
        fitted.append((fill_style, " " * (width - used)))
    return fitted
