from pathlib import Path

import pytest

from core.errors import StartupError, StorageError
from core.task import Task
from infrastructure.file_repository import FileTaskRepository, resolve_todo_path


def test_file_repository_roundtrip(tmp_path: Path):
    repo = FileTaskRepository(tmp_path / "todo.txt")
    tasks = [
        Task.create(1, "Call Mom +Family @phone due:2025-12-15", priority="A", creation_date="2025-12-10"),
        Task.create(2, "Pay rent", completed=True, completion_date="2025-12-11"),
    ]

    repo.save(tasks)
    loaded = repo.load()

    assert (tmp_path / "todo.txt").read_text(encoding="utf-8") == (
        "(A) 2025-12-10 Call Mom +Family @phone due:2025-12-15\n" "x 2025-12-11 Pay rent\n"
    )
    assert loaded == tasks


def test_missing_file_loads_empty(tmp_path: Path):
    repo = FileTaskRepository(tmp_path / "nope" / "todo.txt")
    assert not repo.exists()
    assert repo.load() == []


def test_save_creates_parent_and_leaves_no_temp_files(tmp_path: Path):
    target = tmp_path / "sub" / "todo.txt"
    FileTaskRepository(target).save([Task.create(1, "one")])
    assert target.read_text(encoding="utf-8") == "one\n"
    assert [p.name for p in target.parent.iterdir()] == ["todo.txt"]


def test_save_replaces_existing_content(tmp_path: Path):
    target = tmp_path / "todo.txt"
    target.write_text("old line\nanother\n", encoding="utf-8")
    target.chmod(0o600)
    FileTaskRepository(target).save([Task.create(1, "new")])
    assert target.read_text(encoding="utf-8") == "new\n"
    assert target.stat().st_mode & 0o777 == 0o600


def test_save_failure_raises_storage_error(tmp_path: Path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    repo = FileTaskRepository(blocker / "todo.txt")
    with pytest.raises(StorageError) as exc:
        repo.save([Task.create(1, "a")])
    assert exc.value.path == blocker / "todo.txt"


class TestResolveTodoPath:
    """Tests for resolve_todo_path priority order."""

    @pytest.fixture(autouse=True)
    def isolated(self, monkeypatch, tmp_path):
        home = tmp_path / "home"
        work = tmp_path / "work"
        home.mkdir()
        work.mkdir()
        monkeypatch.setenv("HOME", str(home))
        monkeypatch.delenv("TODO_FILE", raising=False)
        monkeypatch.chdir(work)
        return home, work

    def test_explicit_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TODO_FILE", str(tmp_path / "env.txt"))
        assert resolve_todo_path(tmp_path / "explicit.txt") == tmp_path / "explicit.txt"

    def test_env_var(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TODO_FILE", str(tmp_path / "env.txt"))
        assert resolve_todo_path() == tmp_path / "env.txt"

    def test_local_then_home(self, isolated):
        home, work = isolated
        (home / "todo.txt").write_text("", encoding="utf-8")
        assert resolve_todo_path() == home / "todo.txt"
        (work / "todo.txt").write_text("", encoding="utf-8")
        assert resolve_todo_path().resolve() == (work / "todo.txt").resolve()

    def test_nothing_found(self):
        with pytest.raises(StartupError) as exc:
            resolve_todo_path()
        assert "TODO_FILE" in str(exc.value)
