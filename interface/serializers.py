"""JSON contract for tasks in structured CLI output."""

from typing import Any, Dict

from core.task import Task
from infrastructure.todo_file_parser import TodoFileParser


def task_to_dict(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "completed": task.completed,
        "priority": task.priority,
        "creation_date": task.creation_date,
        "completion_date": task.completion_date,
        "text": task.text,
        "projects": list(task.projects),
        "contexts": list(task.contexts),
        "metadata": dict(task.metadata),
        "line": TodoFileParser.serialize_task(task),
    }
