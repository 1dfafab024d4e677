"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from dashctl.services.result import CONFLICT, NOT_FOUND, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="add_task", data={"id": "1760000000000-a1b2c3"})
        assert result.ok is True
        assert result.op == "add_task"
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code=NOT_FOUND, message="task not found: t1")
        result = ServiceResult(ok=False, op="delete_task", error=error)
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail == {}

    def test_failure_shorthand(self) -> None:
        result = ServiceResult.failure(
            "create_launchpad", CONFLICT, "duplicate", url="https://a/", existing_id="l1"
        )
        assert result.ok is False
        assert result.data == {}
        assert result.error is not None
        assert result.error.detail == {"url": "https://a/", "existing_id": "l1"}

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="stats", data={"totalTasks": 2}, meta={"k": 1})
        parsed = json.loads(result.model_dump_json())
        assert parsed["data"]["totalTasks"] == 2
        assert parsed["meta"] == {"k": 1}

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="stats")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]
