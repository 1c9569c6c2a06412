#!/usr/bin/env python3
"""Unit tests for UndoHistory."""

from application.history import MAX_HISTORY_SIZE, UndoHistory
from core.task import Task


class TestUndoHistory:
    """Tests for snapshot/pop bookkeeping."""

    def test_snapshot_is_deep_copy(self):
        history = UndoHistory()
        tasks = [Task.create(1, "a +p")]
        history.snapshot(tasks)
        tasks[0].text = "changed"
        tasks[0].projects.append("q")
        restored = history.pop()
        assert restored[0].text == "a +p"
        assert restored[0].projects == ["p"]

    def test_pop_empty(self):
        history = UndoHistory()
        assert history.pop() is None
        assert not history.can_undo

    def test_lifo_order(self):
        history = UndoHistory()
        history.snapshot([Task.create(1, "first")])
        history.snapshot([Task.create(1, "second")])
        assert history.pop()[0].text == "second"
        assert history.pop()[0].text == "first"

    def test_bounded_to_max_size(self):
        history = UndoHistory()
        for i in range(MAX_HISTORY_SIZE + 10):
            history.snapshot([Task.create(1, f"v{i}")])
        assert len(history) == MAX_HISTORY_SIZE == 50
        texts = []
        while history.can_undo:
            texts.append(history.pop()[0].text)
        assert texts[-1] == "v10"
        assert texts[0] == f"v{MAX_HISTORY_SIZE + 9}"

    def test_clear(self):
        history = UndoHistory(max_size=3)
        history.snapshot([])
        history.clear()
        assert len(history) == 0
