import re
from enum import Enum
from string import ascii_uppercase, digits
from typing import Optional, Tuple


class PriorityMode(str, Enum):
    LETTER = "letter"
    NUMBER = "number"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "PriorityMode":
        token = (value or "").strip().lower()
        for mode in cls:
            if mode.value == token:
                return mode
        return cls.LETTER


LETTER_PRIORITIES: Tuple[str, ...] = tuple(ascii_uppercase)
NUMBER_PRIORITIES: Tuple[str, ...] = tuple(digits)

# Shift+digit on a US layout; lets number mode mirror the Shift+letter gesture.
SHIFTED_DIGITS = {
    "!": "1",
    "@": "2",
    "#": "3",
    "$": "4",
    "%": "5",
    "^": "6",
    "&": "7",
    "*": "8",
    "(": "9",
    ")": "0",
}


def priority_symbols(mode: PriorityMode) -> Tuple[str, ...]:
    return NUMBER_PRIORITIES if mode == PriorityMode.NUMBER else LETTER_PRIORITIES


def is_valid_priority(symbol: Optional[str], mode: PriorityMode) -> bool:
    return bool(symbol) and symbol in priority_symbols(mode)


def priority_format_of(symbol: str) -> Optional[PriorityMode]:
    if symbol in LETTER_PRIORITIES:
        return PriorityMode.LETTER
    if symbol in NUMBER_PRIORITIES:
        return PriorityMode.NUMBER
    return None


def letter_to_number(symbol: str) -> str:
    """A=0 ... I=8; J and beyond clamp to 9."""
    return str(min(ord(symbol) - ord("A"), 9))


def number_to_letter(symbol: str) -> str:
    return chr(ord("A") + int(symbol))


def priority_level(symbol: Optional[str]) -> str:
    """Colour bucket for a priority symbol: high, medium, low or none."""
    if not symbol:
        return "none"
    if symbol in NUMBER_PRIORITIES:
        value = int(symbol)
        if value <= 2:
            return "high"
        if value <= 5:
            return "medium"
        return "low"
    if symbol <= "C":
        return "high"
    if symbol <= "F":
        return "medium"
    return "low"


PRIORITY_PREFIX = re.compile(r"^\(([A-Z0-9])\)\s+(.+)$")


def split_priority_prefix(value: str, mode: PriorityMode) -> Tuple[Optional[str], str]:
    """Split a leading ``(X) `` off new-task text when X is valid for ``mode``."""
    value = value.strip()
    match = PRIORITY_PREFIX.match(value)
    if match and is_valid_priority(match.group(1), mode):
        return match.group(1), match.group(2).strip()
    return None, value
