"""Tests for operation-specific Rich renderers."""

from dashctl.output.renderers import render_quiet, render_result
from dashctl.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("add_task", "VALIDATION_FAILED", "title is required"))
        assert "ERROR" in output
        assert "add_task" in output
        assert "title is required" in output

    def test_verbose_shows_detail(self) -> None:
        result = _err("create_launchpad", "CONFLICT", "dup", existing_id="l1")
        output = render_result(result, verbose=True)
        assert "detail" in output
        assert "existing_id: l1" in output

    def test_detail_hidden_without_verbose(self) -> None:
        result = _err("create_launchpad", "CONFLICT", "dup", existing_id="l1")
        assert "existing_id" not in render_result(result)

    def test_message_not_parsed_as_markup(self) -> None:
        output = render_result(_err("add_task", "VALIDATION_FAILED", "bad [bold]input[/bold]"))
        assert "[bold]input[/bold]" in output


# ── Mutations ─────────────────────────────────────────────────────────


class TestMutationRenderer:
    def test_add_task(self) -> None:
        output = render_result(
            _ok("add_task", id="t1", title="Buy milk", priority="high", done=False)
        )
        assert "OK" in output
        assert "add_task" in output
        assert "id: t1" in output
        assert "priority: high" in output

    def test_fields_changed(self) -> None:
        output = render_result(_ok("edit_task", id="t1", fields_changed=["title", "done"]))
        assert "fields_changed: title, done" in output

    def test_no_fields_changed(self) -> None:
        output = render_result(_ok("edit_launchpad", id="l1", fields_changed=[]))
        assert "fields_changed: none" in output

    def test_launch(self) -> None:
        output = render_result(_ok("launch", id="l1", url="https://a.example/", launchCount=3))
        assert "url: https://a.example/" in output
        assert "launchCount: 3" in output

    def test_verbose_renders_telemetry(self) -> None:
        result = ServiceResult(
            ok=True,
            op="add_task",
            data={"id": "t1"},
            meta={
                "telemetry": {
                    "name": "TaskService.add",
                    "duration_ms": 12.5,
                    "children": [
                        {
                            "name": "store.update",
                            "duration_ms": 10.0,
                            "annotations": {"queued": 0},
                        }
                    ],
                }
            },
        )
        output = render_result(result, verbose=True)
        assert "TaskService.add" in output
        assert "store.update" in output
        assert "queued=0" in output


# ── Lists ─────────────────────────────────────────────────────────────


class TestListRenderers:
    def test_tasks_table(self) -> None:
        output = render_result(
            _ok(
                "list_tasks",
                items=[
                    {"id": "t1", "title": "Buy milk", "priority": "high", "done": True},
                    {"id": "t2", "title": "[red]markup[/red]", "priority": "low", "done": False},
                ],
                count=2,
            )
        )
        assert "Buy milk" in output
        assert "[red]markup[/red]" in output
        assert "2 tasks" in output

    def test_focus_totals(self) -> None:
        output = render_result(
            _ok("list_focus", items=[{"id": "f1", "minutes": 25}], count=1, total_minutes=25)
        )
        assert "1 sessions" in output
        assert "25 minutes total" in output

    def test_journals(self) -> None:
        output = render_result(
            _ok("list_journals", items=[{"id": "j1", "text": "dear diary"}], count=1)
        )
        assert "dear diary" in output
        assert "1 entries" in output

    def test_events(self) -> None:
        output = render_result(
            _ok(
                "list_events",
                items=[{"id": "e1", "title": "Dentist", "when": "2026-05-01T08:00:00.000Z"}],
                count=1,
            )
        )
        assert "Dentist" in output
        assert "2026-05-01T08:00:00.000Z" in output

    def test_launchpad_verbose_columns(self) -> None:
        result = _ok(
            "list_launchpad",
            items=[
                {
                    "id": "l1",
                    "name": "Docs",
                    "url": "https://docs.python.org/",
                    "launchCount": 2,
                    "enabled": False,
                    "lastLaunchedAt": None,
                    "description": "reference",
                }
            ],
            count=1,
        )
        assert "reference" not in render_result(result)
        verbose = render_result(result, verbose=True)
        assert "reference" in verbose
        assert "no" in verbose
        assert "1 items" in verbose


# ── Summaries ─────────────────────────────────────────────────────────


class TestSummaryRenderers:
    def test_stats(self) -> None:
        output = render_result(
            _ok(
                "stats",
                totalTasks=3,
                doneTasks=1,
                focusMinutesToday=45,
                journalsCount=2,
                eventsCount=0,
                launchpadCount=4,
            )
        )
        assert "1/3 done" in output
        assert "45 min" in output
        assert "launchpad items: 4" in output

    def test_check(self) -> None:
        output = render_result(
            _ok(
                "check",
                data_dir="/tmp/data",
                primary="ok",
                backup="not_found",
                staging_present=False,
                healthy=True,
                counts={"tasks": 2, "launchpad": 1},
            )
        )
        assert "primary: ok" in output
        assert "counts: tasks=2, launchpad=1" in output

    def test_unknown_op_generic(self) -> None:
        output = render_result(_ok("something_new", answer=42))
        assert "answer: 42" in output


# ── Quiet mode ────────────────────────────────────────────────────────


class TestQuiet:
    def test_list_ids(self) -> None:
        result = _ok("list_tasks", items=[{"id": "a"}, {"id": "b"}], count=2)
        assert render_quiet(result) == "a\nb"

    def test_single_id(self) -> None:
        assert render_quiet(_ok("add_task", id="t1")) == "t1"

    def test_no_id(self) -> None:
        assert render_quiet(_ok("stats", totalTasks=0)) == "OK: stats"

    def test_error(self) -> None:
        output = render_quiet(_err("launch", "DISABLED", "launchpad item is disabled: l1"))
        assert output.startswith("ERROR: launch")
        assert "disabled" in output
