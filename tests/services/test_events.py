"""Tests for EventService."""

from __future__ import annotations

from dashctl.infrastructure.store import DocumentStore
from dashctl.services.events import EventService
from tests.conftest import run


class TestAddEvent:
    def test_when_canonicalized(self, store: DocumentStore) -> None:
        result = run(EventService(store).add("Dentist", "2026-05-01T10:00:00+02:00"))
        assert result.ok
        assert result.data["when"] == "2026-05-01T08:00:00.000Z"

    def test_date_only(self, store: DocumentStore) -> None:
        result = run(EventService(store).add("Holiday", "2026-12-25"))
        assert result.data["when"] == "2026-12-25T00:00:00.000Z"

    def test_bad_when_rejected(self, store: DocumentStore) -> None:
        result = run(EventService(store).add("Dentist", "next tuesday"))
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
        assert result.error.detail == {"when": "next tuesday"}

    def test_blank_title_rejected(self, store: DocumentStore) -> None:
        result = run(EventService(store).add(" ", "2026-12-25"))
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"


class TestListEvents:
    def test_sorted_by_when(self, store: DocumentStore) -> None:
        svc = EventService(store)
        run(svc.add("later", "2026-06-01"))
        run(svc.add("sooner", "2026-01-01"))
        titles = [item["title"] for item in run(svc.list()).data["items"]]
        assert titles == ["sooner", "later"]


class TestDeleteEvent:
    def test_delete(self, store: DocumentStore) -> None:
        svc = EventService(store)
        event_id = run(svc.add("x", "2026-01-01")).data["id"]
        assert run(svc.delete(event_id)).data == {"id": event_id, "title": "x"}

    def test_delete_missing(self, store: DocumentStore) -> None:
        result = run(EventService(store).delete("nope"))
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
