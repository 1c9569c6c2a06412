#!/usr/bin/env python3
"""CLI commands end to end through main()."""

import json

import pytest

import config
from interface import todo_app


@pytest.fixture
def todo_file(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "USER_CONFIG_PATH", tmp_path / "cfg.yaml")
    monkeypatch.delenv("TODO_TUI_LOG", raising=False)
    path = tmp_path / "todo.txt"
    path.write_text(
        "(B) 2025-01-01 Write report +work @office\n"
        "Buy milk +home @shop\n"
        "x 2025-01-05 2025-01-01 Old thing +work\n"
        "(A) Call Mom @phone\n",
        encoding="utf-8",
    )
    return path


def run(capsys, *argv):
    code = todo_app.main(list(argv))
    out = capsys.readouterr().out
    return code, json.loads(out)


class TestList:
    """Tests for the list command."""

    def test_default_command_is_list(self, todo_file, capsys):
        code, body = run(capsys, "-f", str(todo_file))
        assert code == 0
        assert body["command"] == "list"
        assert body["ok"] is True
        assert set(body) == {"ok", "command", "message", "data"}
        assert body["message"] == f"{body['data']['total']} tasks"
        assert [t["id"] for t in body["data"]["tasks"]] == [4, 1, 2]

    def test_list_all_and_filters(self, todo_file, capsys):
        _, body = run(capsys, "-f", str(todo_file), "ls", "-a", "-p", "work")
        assert [t["id"] for t in body["data"]["tasks"]] == [1, 3]
        _, body = run(capsys, "-f", str(todo_file), "list", "-c", "@shop")
        assert [t["text"] for t in body["data"]["tasks"]] == ["Buy milk +home @shop"]
        _, body = run(capsys, "-f", str(todo_file), "list", "--priority", "a")
        assert [t["id"] for t in body["data"]["tasks"]] == [4]
        _, body = run(capsys, "-f", str(todo_file), "list", "-s", "MILK")
        assert body["data"]["total"] == 1

    def test_task_payload_shape(self, todo_file, capsys):
        _, body = run(capsys, "-f", str(todo_file), "list")
        task = body["data"]["tasks"][1]
        assert task["line"] == "(B) 2025-01-01 Write report +work @office"
        assert task["projects"] == ["work"]
        assert task["contexts"] == ["office"]
        assert "timestamp" in body


class TestMutations:
    """Tests for add/do/edit/delete/pri/depri."""

    def test_add_with_priority(self, todo_file, capsys):
        code, body = run(capsys, "-f", str(todo_file), "add", "(C)", "Plan", "trip", "+travel")
        assert code == 0
        task = body["data"]["task"]
        assert task["id"] == 5
        assert task["priority"] == "C"
        assert task["text"] == "Plan trip +travel"
        assert task["creation_date"]
        assert todo_file.read_text(encoding="utf-8").splitlines()[-1].endswith("Plan trip +travel")

    def test_do(self, todo_file, capsys):
        code, body = run(capsys, "-f", str(todo_file), "do", "2")
        assert code == 0
        assert body["data"]["task"]["completed"] is True
        assert todo_file.read_text(encoding="utf-8").splitlines()[1].startswith("x ")
        _, body = run(capsys, "-f", str(todo_file), "do", "2")
        assert "already completed" in body["message"]

    def test_edit_rederives_tags(self, todo_file, capsys):
        _, body = run(capsys, "-f", str(todo_file), "edit", "2", "Buy", "oat", "milk", "@market")
        task = body["data"]["task"]
        assert task["projects"] == []
        assert task["contexts"] == ["market"]

    def test_delete(self, todo_file, capsys):
        code, _ = run(capsys, "-f", str(todo_file), "rm", "3")
        assert code == 0
        assert "Old thing" not in todo_file.read_text(encoding="utf-8")

    def test_pri_and_depri(self, todo_file, capsys):
        _, body = run(capsys, "-f", str(todo_file), "pri", "2", "d")
        assert body["data"]["task"]["priority"] == "D"
        _, body = run(capsys, "-f", str(todo_file), "depri", "2")
        assert body["data"]["task"]["priority"] is None

    def test_pri_validated_against_mode(self, todo_file, capsys):
        code, body = run(capsys, "-f", str(todo_file), "pri", "2", "7")
        assert code == 1
        assert body["ok"] is False
        config.set_priority_mode("number")
        code, body = run(capsys, "-f", str(todo_file), "pri", "2", "7")
        assert code == 0
        assert body["data"]["task"]["priority"] == "7"


class TestErrors:
    """Error responses."""

    def test_missing_task(self, todo_file, capsys):
        code, body = run(capsys, "-f", str(todo_file), "do", "42")
        assert code == 1
        assert body["ok"] is False
        assert "42" in body["message"]

    def test_no_todo_file(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setattr(config, "USER_CONFIG_PATH", tmp_path / "cfg.yaml")
        monkeypatch.delenv("TODO_FILE", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.chdir(tmp_path)
        code, body = run(capsys, "list")
        assert code == 1
        assert "TODO_FILE" in body["message"]

    def test_version(self, capsys):
        assert todo_app.main(["--version"]) == 0
        assert capsys.readouterr().out.strip()


class TestParser:
    def test_build_parser_has_core_commands(self):
        help_text = todo_app.build_parser().format_help()
        for name in ("tui", "add", "list", "do", "edit", "delete", "pri", "depri"):
            assert name in help_text
