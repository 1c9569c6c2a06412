import re
from typing import List, Optional

from core.priority import (
    PriorityMode,
    letter_to_number,
    number_to_letter,
    priority_format_of,
)
from core.task import DATE_RE, Task

FORMAT_LETTER = "letter"
FORMAT_NUMBER = "number"
FORMAT_MIXED = "mixed"
FORMAT_NONE = "none"


class TodoFileParser:
    """Text <-> Task conversion for todo.txt lines.

    Field order on a line is fixed: completion marker, completion date,
    priority, creation date, text. Tags stay inside ``text``; the derived
    ``projects``/``contexts``/``metadata`` fields are re-extracted from it.
    """

    PRIORITY_PATTERN = re.compile(r"^\(([A-Z0-9])\)$")
    DATE_PATTERN = DATE_RE

    @staticmethod
    def _first_token(remaining: str) -> str:
        parts = remaining.split(None, 1)
        return parts[0] if parts else ""

    @classmethod
    def parse_line(cls, line: str, task_id: int) -> Optional[Task]:
        remaining = line.strip()
        if not remaining:
            return None

        completed = False
        completion_date = None
        priority = None
        creation_date = None

        if remaining.startswith("x "):
            completed = True
            remaining = remaining[2:].strip()
            token = cls._first_token(remaining)
            if token and cls.DATE_PATTERN.match(token):
                completion_date = token
                remaining = remaining[len(token):].strip()

        # "x (A) ..." without a completion date keeps "(A)" as text
        if not completed or completion_date:
            token = cls._first_token(remaining)
            match = cls.PRIORITY_PATTERN.match(token) if token else None
            if match:
                priority = match.group(1)
                remaining = remaining[len(token):].strip()

        token = cls._first_token(remaining)
        if token and cls.DATE_PATTERN.match(token):
            creation_date = token
            remaining = remaining[len(token):].strip()

        return Task.create(
            task_id,
            remaining,
            completed=completed,
            priority=priority,
            creation_date=creation_date,
            completion_date=completion_date,
        )

    @staticmethod
    def serialize_task(task: Task) -> str:
        parts: List[str] = []
        if task.completed:
            parts.append("x")
            if task.completion_date:
                parts.append(task.completion_date)
        if task.priority:
            parts.append(f"({task.priority})")
        if task.creation_date:
            parts.append(task.creation_date)
        if task.text:
            parts.append(task.text)
        return " ".join(parts)

    @classmethod
    def parse_file(cls, content: str) -> List[Task]:
        """Parse file content; ids run 1..N over non-blank lines."""
        tasks: List[Task] = []
        for line in content.splitlines():
            task = cls.parse_line(line, len(tasks) + 1)
            if task:
                tasks.append(task)
        return tasks

    @classmethod
    def serialize_file(cls, tasks: List[Task]) -> str:
        return "\n".join(cls.serialize_task(task) for task in tasks) + "\n"

    @staticmethod
    def detect_priority_format(tasks: List[Task]) -> str:
        has_letter = has_number = False
        for task in tasks:
            if not task.priority:
                continue
            fmt = priority_format_of(task.priority)
            if fmt == PriorityMode.LETTER:
                has_letter = True
            elif fmt == PriorityMode.NUMBER:
                has_number = True
        if has_letter and has_number:
            return FORMAT_MIXED
        if has_letter:
            return FORMAT_LETTER
        if has_number:
            return FORMAT_NUMBER
        return FORMAT_NONE

    @staticmethod
    def convert_priorities(tasks: List[Task], target_format: str) -> List[Task]:
        """Return copies of ``tasks`` with every priority expressed in ``target_format``."""
        target = PriorityMode(target_format)
        converted: List[Task] = []
        for task in tasks:
            clone = task.clone()
            if clone.priority:
                current = priority_format_of(clone.priority)
                if target == PriorityMode.NUMBER and current == PriorityMode.LETTER:
                    clone.priority = letter_to_number(clone.priority)
                elif target == PriorityMode.LETTER and current == PriorityMode.NUMBER:
                    clone.priority = number_to_letter(clone.priority)
            converted.append(clone)
        return converted


parse_line = TodoFileParser.parse_line
serialize_task = TodoFileParser.serialize_task
parse_file = TodoFileParser.parse_file
serialize_file = TodoFileParser.serialize_file
detect_priority_format = TodoFileParser.detect_priority_format
convert_priorities = TodoFileParser.convert_priorities
