#!/usr/bin/env python3
"""Unit tests for TaskStore."""

from typing import List

import pytest

from application.task_store import TaskStore
from core.errors import StorageError, TaskNotFoundError, ValidationError
from core.task import Task


class MemoryRepository:
    """In-memory stand-in for FileTaskRepository."""

    def __init__(self, tasks=None):
        self.tasks: List[Task] = list(tasks or [])
        self.saves = 0

    def load(self) -> List[Task]:
        return [task.clone() for task in self.tasks]

    def save(self, tasks: List[Task]) -> None:
        self.saves += 1
        self.tasks = [task.clone() for task in tasks]


class FailingRepository(MemoryRepository):
    def save(self, tasks):
        raise StorageError("disk full")


def _store(*texts) -> TaskStore:
    return TaskStore([Task.create(i + 1, text) for i, text in enumerate(texts)], repository=MemoryRepository())


class TestAdd:
    """Tests for TaskStore.add."""

    def test_assigns_next_id_and_saves(self):
        store = _store("a", "b")
        task = store.add(Task.create(0, "c +proj"))
        assert task.id == 3
        assert task.projects == ["proj"]
        assert store.repository.saves == 1
        assert [t.text for t in store.repository.tasks] == ["a", "b", "c +proj"]

    def test_defaults_creation_date(self):
        task = _store().add(Task.create(0, "x"))
        assert task.creation_date

    def test_deleted_inner_id_not_reused(self):
        store = _store("a", "b", "c")
        store.delete(2)
        assert store.add(Task.create(0, "d")).id == 4

    def test_id_follows_current_max_after_replace(self):
        store = _store("a", "b")
        before = [t.clone() for t in store.tasks]
        store.add(Task.create(0, "c"))
        store.replace_all(before)
        assert store.add(Task.create(0, "d")).id == 3
        assert [t.id for t in store.tasks] == [1, 2, 3]

    def test_next_id_on_empty_store(self):
        assert TaskStore().next_id() == 1


class TestUpdate:
    """Tests for TaskStore.update."""

    def test_text_change_rederives(self):
        store = _store("write +docs")
        task = store.update(1, text="write @desk due:2025-01-01")
        assert task.projects == []
        assert task.contexts == ["desk"]
        assert task.due == "2025-01-01"

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            _store("a").update(1, projects=["x"])

    def test_missing_task(self):
        with pytest.raises(TaskNotFoundError) as exc:
            _store("a").update(99, text="b")
        assert exc.value.task_id == 99
        assert "99" in str(exc.value)


class TestToggleAndDelete:
    """Tests for toggle_completion, delete and purge_completed."""

    def test_toggle_sets_and_clears_completion_date(self):
        store = _store("a")
        task = store.toggle_completion(1, today="2025-06-10")
        assert task.completed and task.completion_date == "2025-06-10"
        task = store.toggle_completion(1, today="2025-06-11")
        assert not task.completed and task.completion_date is None

    def test_toggle_keeps_priority(self):
        store = TaskStore([Task.create(1, "a", priority="A")])
        assert store.toggle_completion(1).priority == "A"

    def test_delete_missing_raises(self):
        with pytest.raises(TaskNotFoundError):
            _store("a").delete(5)

    def test_find_returns_none(self):
        assert _store("a").find(5) is None

    def test_purge_completed(self):
        store = _store("a", "b", "c")
        store.toggle_completion(1)
        store.toggle_completion(3)
        assert store.purge_completed() == 2
        assert [t.id for t in store.tasks] == [2]
        assert store.purge_completed() == 0


class TestPersistence:
    """Tests for load/reload and failed writes."""

    def test_load_and_reload(self):
        repo = MemoryRepository([Task.create(1, "a")])
        store = TaskStore.load(repo)
        assert len(store) == 1
        repo.tasks.append(Task.create(2, "b"))
        store.reload()
        assert [t.id for t in store.tasks] == [1, 2]

    def test_failed_write_keeps_memory_change(self):
        store = TaskStore([Task.create(1, "a")], repository=FailingRepository())
        with pytest.raises(StorageError):
            store.update(1, text="b")
        assert store.get(1).text == "b"

    def test_memory_only_store(self):
        store = TaskStore()
        store.add(Task.create(0, "a"))
        store.save()
        assert len(store) == 1
