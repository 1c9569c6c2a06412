"""One-shot CLI commands over the same TaskStore the TUI uses.

Every command prints a structured JSON response and returns its exit code.
Domain errors propagate to ``todo_app.main`` which turns them into
structured error responses.
"""

import argparse
from typing import List

import config
from application.task_store import TaskStore
from application.view import SortMode, compute_visible
from core.errors import ValidationError
from core.priority import PriorityMode, is_valid_priority, split_priority_prefix
from core.task import Task, today_iso
from infrastructure.file_repository import FileTaskRepository, resolve_todo_path

from .cli_io import print_result
from .serializers import task_to_dict


def _open_store(args: argparse.Namespace) -> TaskStore:
    path = resolve_todo_path(getattr(args, "file", None))
    return TaskStore.load(FileTaskRepository(path))


def _configured_mode() -> PriorityMode:
    return PriorityMode.from_string(config.get_priority_mode())


def _task_response(command: str, task: Task, message: str) -> int:
    return print_result(command, message, {"task": task_to_dict(task)})


def cmd_add(args: argparse.Namespace) -> int:
    store = _open_store(args)
    priority, text = split_priority_prefix(" ".join(args.text), _configured_mode())
    if not text:
        raise ValidationError("Task text is empty")
    task = store.add(Task.create(0, text, priority=priority, creation_date=today_iso()))
    return _task_response("add", task, f"Added task {task.id}")


def cmd_list(args: argparse.Namespace) -> int:
    store = _open_store(args)
    tasks: List[Task] = compute_visible(
        store.tasks,
        today=today_iso(),
        active_filter=None,
        search=getattr(args, "search", None) or "",
        show_completed=bool(getattr(args, "all", False)),
        sort_mode=SortMode.PRIORITY,
    )

    project = (getattr(args, "project", None) or "").lstrip("+")
    if project:
        tasks = [t for t in tasks if project in t.projects]

    context = (getattr(args, "context", None) or "").lstrip("@")
    if context:
        tasks = [t for t in tasks if context in t.contexts]

    priority = (getattr(args, "priority", None) or "").upper()
    if priority:
        tasks = [t for t in tasks if t.priority == priority]

    data = {
        "total": len(tasks),
        "filters": {
            "all": bool(getattr(args, "all", False)),
            "project": project,
            "context": context,
            "priority": priority,
            "search": getattr(args, "search", None) or "",
        },
        "tasks": [task_to_dict(task) for task in tasks],
    }
    return print_result("list", f"{len(tasks)} tasks", data)


def cmd_do(args: argparse.Namespace) -> int:
    store = _open_store(args)
    task = store.get(args.task_id)
    if task.completed:
        return _task_response("do", task, f"Task {task.id} is already completed")
    task = store.toggle_completion(task.id, today_iso())
    return _task_response("do", task, f"Completed task {task.id}")


def cmd_edit(args: argparse.Namespace) -> int:
    store = _open_store(args)
    text = " ".join(args.text).strip()
    if not text:
        raise ValidationError("Task text is empty")
    task = store.update(args.task_id, text=text)
    return _task_response("edit", task, f"Updated task {task.id}")


def cmd_delete(args: argparse.Namespace) -> int:
    store = _open_store(args)
    task = store.delete(args.task_id)
    return _task_response("delete", task, f"Deleted task {task.id}")


def cmd_pri(args: argparse.Namespace) -> int:
    store = _open_store(args)
    mode = _configured_mode()
    priority = args.priority.strip().strip("()").upper()
    if not is_valid_priority(priority, mode):
        raise ValidationError(f"Priority {args.priority!r} is not valid in {mode.value} mode")
    task = store.update(args.task_id, priority=priority)
    return _task_response("pri", task, f"Task {task.id} → ({priority})")


def cmd_depri(args: argparse.Namespace) -> int:
    store = _open_store(args)
    task = store.update(args.task_id, priority=None)
    return _task_response("depri", task, f"Cleared priority of task {task.id}")


__all__ = ["cmd_add", "cmd_list", "cmd_do", "cmd_edit", "cmd_delete", "cmd_pri", "cmd_depri"]
