"""Tests for FocusService."""

from __future__ import annotations

import pytest

from dashctl.infrastructure.store import DocumentStore
from dashctl.services.focus import FocusService
from tests.conftest import run


class TestLogFocus:
    def test_default_minutes(self, store: DocumentStore) -> None:
        result = run(FocusService(store).log())
        assert result.ok
        assert result.op == "log_focus"
        assert result.data["minutes"] == 25

    @pytest.mark.parametrize("minutes", [0, -5, True, 2.5])
    def test_invalid_minutes(self, store: DocumentStore, minutes: object) -> None:
        result = run(FocusService(store).log(minutes))  # type: ignore[arg-type]
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"


class TestListFocus:
    def test_total_minutes(self, store: DocumentStore) -> None:
        svc = FocusService(store)
        run(svc.log(25))
        run(svc.log(10))
        result = run(svc.list())
        assert result.data["count"] == 2
        assert result.data["total_minutes"] == 35
        assert [item["minutes"] for item in result.data["items"]] == [10, 25]
