import copy
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def today_iso() -> str:
    return date.today().isoformat()


def is_iso_date(value: str) -> bool:
    """Check the YYYY-MM-DD shape and that the date actually exists."""
    if not value or not DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _is_tag_token(token: str, prefix: str) -> bool:
    return len(token) > 1 and token.startswith(prefix)


def _metadata_pair(token: str) -> Optional[Tuple[str, str]]:
    if ":" not in token or token[0] in "+@":
        return None
    key, _, rest = token.partition(":")
    value = rest.split(":", 1)[0]
    if not key or not value:
        return None
    return key, value


def extract_tags(text: str) -> Tuple[List[str], List[str], Dict[str, str]]:
    """Pull ``+project``, ``@context`` and ``key:value`` tokens out of task text."""
    projects: List[str] = []
    contexts: List[str] = []
    metadata: Dict[str, str] = {}
    for token in text.split():
        if _is_tag_token(token, "+"):
            projects.append(token[1:])
        elif _is_tag_token(token, "@"):
            contexts.append(token[1:])
        else:
            pair = _metadata_pair(token)
            if pair:
                metadata[pair[0]] = pair[1]
    return projects, contexts, metadata


def strip_tags(text: str) -> str:
    """Task text without its tag and metadata tokens, for display."""
    kept = [
        token
        for token in text.split()
        if not (_is_tag_token(token, "+") or _is_tag_token(token, "@") or _metadata_pair(token))
    ]
    return " ".join(kept)


@dataclass
class Task:
    id: int
    text: str
    completed: bool = False
    priority: Optional[str] = None
    creation_date: Optional[str] = None
    completion_date: Optional[str] = None
    projects: List[str] = field(default_factory=list)
    contexts: List[str] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(cls, task_id: int, text: str, **fields) -> "Task":
        task = cls(id=task_id, text=text, **fields)
        task.rederive()
        return task

    def rederive(self) -> None:
        """Reset projects/contexts/metadata from the current text."""
        self.projects, self.contexts, self.metadata = extract_tags(self.text)

    def clone(self) -> "Task":
        return copy.deepcopy(self)

    @property
    def due(self) -> Optional[str]:
        return self.metadata.get("due")

    def is_overdue(self, today: str) -> bool:
        return not self.completed and bool(self.due) and self.due < today

    def is_due_today(self, today: str) -> bool:
        return not self.completed and self.due == today

    def is_due_or_overdue(self, today: str) -> bool:
        return not self.completed and bool(self.due) and self.due <= today

    def completed_on(self, day: str) -> bool:
        return self.completed and self.completion_date == day
