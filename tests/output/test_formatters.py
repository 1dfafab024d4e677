"""Tests for output mode selection."""

import json

from dashctl.output.formatters import OutputSettings, format_result
from dashctl.services.result import ServiceResult


def _tasks() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="list_tasks",
        data={"items": [{"id": "t1", "title": "Buy milk", "priority": "high"}], "count": 1},
    )


class TestFormatResult:
    def test_default_is_rich(self) -> None:
        output = format_result(_tasks())
        assert "Buy milk" in output
        assert "1 tasks" in output

    def test_json(self) -> None:
        output = format_result(_tasks(), settings=OutputSettings(json_output=True))
        parsed = json.loads(output)
        assert parsed["op"] == "list_tasks"
        assert parsed["data"]["count"] == 1

    def test_quiet(self) -> None:
        assert format_result(_tasks(), settings=OutputSettings(quiet=True)) == "t1"

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(_tasks(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["ok"] is True
