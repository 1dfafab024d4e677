"""Tests for TaskService."""

from __future__ import annotations

from dashctl.infrastructure.store import DocumentStore
from dashctl.services.tasks import TaskService
from tests.conftest import read_json, run


class TestAddTask:
    def test_add(self, store: DocumentStore) -> None:
        result = run(TaskService(store).add("Buy milk", priority="high"))
        assert result.ok
        assert result.op == "add_task"
        assert result.data["title"] == "Buy milk"
        assert result.data["priority"] == "high"
        assert result.data["done"] is False
        assert read_json(store.paths.primary)["tasks"][0]["id"] == result.data["id"]

    def test_newest_first(self, store: DocumentStore) -> None:
        svc = TaskService(store)
        run(svc.add("first"))
        run(svc.add("second"))
        titles = [item["title"] for item in run(svc.list()).data["items"]]
        assert titles == ["second", "first"]

    def test_title_trimmed(self, store: DocumentStore) -> None:
        assert run(TaskService(store).add("  padded  ")).data["title"] == "padded"

    def test_blank_title_rejected(self, store: DocumentStore) -> None:
        result = run(TaskService(store).add("   "))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
        assert not store.paths.primary.exists()

    def test_priority_case_insensitive(self, store: DocumentStore) -> None:
        assert run(TaskService(store).add("x", priority="LOW")).data["priority"] == "low"

    def test_unknown_priority_rejected(self, store: DocumentStore) -> None:
        result = run(TaskService(store).add("x", priority="urgent"))
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
        assert result.error.detail == {"priority": "urgent"}


class TestEditTask:
    def test_mark_done(self, store: DocumentStore) -> None:
        svc = TaskService(store)
        task_id = run(svc.add("x")).data["id"]
        result = run(svc.edit(task_id, done=True))
        assert result.ok
        assert result.data["done"] is True
        assert result.data["fields_changed"] == ["done"]

    def test_no_change(self, store: DocumentStore) -> None:
        svc = TaskService(store)
        task_id = run(svc.add("x", priority="high")).data["id"]
        result = run(svc.edit(task_id, title="x", priority="high"))
        assert result.data["fields_changed"] == []

    def test_multiple_fields(self, store: DocumentStore) -> None:
        svc = TaskService(store)
        task_id = run(svc.add("x")).data["id"]
        result = run(svc.edit(task_id, title="y", priority="low"))
        assert result.data["fields_changed"] == ["title", "priority"]
        assert run(svc.list()).data["items"][0]["title"] == "y"

    def test_not_found(self, store: DocumentStore) -> None:
        result = run(TaskService(store).edit("missing", done=True))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail == {"id": "missing"}

    def test_empty_title_rejected(self, store: DocumentStore) -> None:
        result = run(TaskService(store).edit("any", title=" "))
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"


class TestDeleteTask:
    def test_delete(self, store: DocumentStore) -> None:
        svc = TaskService(store)
        task_id = run(svc.add("x")).data["id"]
        result = run(svc.delete(task_id))
        assert result.ok
        assert result.data == {"id": task_id, "title": "x"}
        assert run(svc.list()).data["count"] == 0

    def test_not_found(self, store: DocumentStore) -> None:
        result = run(TaskService(store).delete("missing"))
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"


class TestListTasks:
    def test_empty(self, store: DocumentStore) -> None:
        result = run(TaskService(store).list())
        assert result.ok
        assert result.data == {"items": [], "count": 0}
