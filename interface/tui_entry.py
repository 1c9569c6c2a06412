"""Single-line editing and debounced search for the command bar."""

from typing import Any, Callable, Optional

from prompt_toolkit.buffer import Buffer

SEARCH_DEBOUNCE_SECONDS = 0.15

Scheduler = Callable[[float, Callable[[], None]], Any]


class SearchDebouncer:
    """Coalesce rapid search updates.

    ``scheduler(delay, callback)`` must return a handle with ``cancel()``
    (``asyncio`` loop ``call_later`` fits). Without a scheduler the callback
    runs immediately, which keeps headless use deterministic.
    """

    def __init__(self, scheduler: Optional[Scheduler] = None, delay: float = SEARCH_DEBOUNCE_SECONDS):
        self.scheduler = scheduler
        self.delay = delay
        self._pending = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def submit(self, callback: Callable[[], None]) -> None:
        self.cancel()
        if self.scheduler is None:
            callback()
            return

        def _fire() -> None:
            self._pending = None
            callback()

        self._pending = self.scheduler(self.delay, _fire)

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None


def new_buffer(value: str = "") -> Buffer:
    buffer = Buffer(multiline=False)
    buffer.text = value
    buffer.cursor_position = len(value)
    return buffer


def is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def edit_buffer(buffer: Buffer, key: str) -> bool:
    """Apply one editing key to ``buffer``; False when the key is not an editing key."""
    if key == "left":
        buffer.cursor_left()
    elif key == "right":
        buffer.cursor_right()
    elif key in ("home", "c-a"):
        buffer.cursor_position = 0
    elif key in ("end", "c-e"):
        buffer.cursor_position = len(buffer.text)
    elif key == "backspace":
        buffer.delete_before_cursor(1)
    elif key == "delete":
        buffer.delete(1)
    elif key == "space":
        buffer.insert_text(" ")
    elif is_printable(key):
        buffer.insert_text(key)
    else:
        return False
    return True
