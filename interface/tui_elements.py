"""Addressable sub-tokens of a task row (the element cursor walks these)."""

from dataclasses import dataclass
from enum import Enum
from typing import List

from core.task import Task


class ElementKind(str, Enum):
    CHECKBOX = "checkbox"
    PRIORITY = "priority"
    DATE = "date"
    TEXT = "text"
    PROJECT = "project"
    CONTEXT = "context"
    METADATA = "metadata"


UNDELETABLE = frozenset({ElementKind.CHECKBOX, ElementKind.TEXT})


@dataclass(frozen=True)
class TaskElement:
    kind: ElementKind
    value: str = ""
    key: str = ""


def task_elements(task: Task) -> List[TaskElement]:
    # The priority slot is always present so columns stay aligned.
    elements = [
        TaskElement(ElementKind.CHECKBOX),
        TaskElement(ElementKind.PRIORITY, task.priority or ""),
    ]
    if task.creation_date:
        elements.append(TaskElement(ElementKind.DATE, task.creation_date))
    elements.append(TaskElement(ElementKind.TEXT, task.text))
    elements.extend(TaskElement(ElementKind.PROJECT, project) for project in task.projects)
    elements.extend(TaskElement(ElementKind.CONTEXT, context) for context in task.contexts)
    elements.extend(TaskElement(ElementKind.METADATA, value, key) for key, value in task.metadata.items())
    return elements


def element_count(task: Task) -> int:
    return len(task_elements(task))
