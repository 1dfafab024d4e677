"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from dashctl.output.console import (
    create_console,
    get_output,
    style_for_priority,
    style_for_state,
)

if TYPE_CHECKING:
    from rich.console import Console

    from dashctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    # For list results, return IDs only
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict) and "id" in item)

    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="dash.ok")
    op = Text(f"  {result.op}", style="dash.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="dash.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="dash.id")
    elif key in ("title", "name"):
        v = Text(str(value), style="dash.title")
    elif key == "url":
        v = Text(str(value), style="dash.url")
    elif key == "priority":
        v = Text(str(value), style=style_for_priority(str(value)))
    elif key in ("primary", "backup"):
        v = Text(str(value), style=style_for_state(str(value)))
    elif key in ("createdAt", "updatedAt", "when"):
        v = Text(str(value), style="dash.time")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += f"  ({', '.join(f'{k}={v}' for k, v in annotations.items())})"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _table(*columns: str) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for column in columns:
        style = {"ID": "dash.id", "Title": "dash.title", "Name": "dash.title"}.get(column)
        table.add_column(column, style=style, no_wrap=column == "ID")
    return table


def _cells(*values: Any) -> list[Text]:
    """Wrap cell values as Text so user content is never parsed as markup."""
    return [v if isinstance(v, Text) else Text(str(v)) for v in values]


def _print_table(console: Console, result: ServiceResult, table: Table, noun: str) -> None:
    console.print(table)
    count = result.data.get("count", 0)
    console.print(f"\n{count} {noun}")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="dash.error")
    op = Text(f"  {result.op}", style="dash.op")
    sep = Text(": ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Mutation renderer ─────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render add/edit/delete/launch results."""
    _status_line(console, result)
    mutation_keys = (
        "id",
        "title",
        "name",
        "url",
        "text",
        "priority",
        "done",
        "minutes",
        "when",
        "enabled",
        "launchCount",
    )
    for key in mutation_keys:
        if key in result.data:
            _field(console, key, result.data[key])
    if "fields_changed" in result.data:
        _field(console, "fields_changed", ", ".join(result.data["fields_changed"]) or "none")
    if verbose:
        _render_meta(console, result)


# ── List renderers ────────────────────────────────────────────────────


def _render_tasks(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    columns = ["ID", "Title", "Priority", "Done"]
    if verbose:
        columns.append("Created")
    table = _table(*columns)
    for item in result.data.get("items", []):
        priority = str(item.get("priority", ""))
        row: list[Any] = [
            str(item.get("id", "")),
            str(item.get("title", "")),
            Text(priority, style=style_for_priority(priority)),
            "x" if item.get("done") else "",
        ]
        if verbose:
            row.append(str(item.get("createdAt", "")))
        table.add_row(*_cells(*row))
    _print_table(console, result, table, "tasks")


def _render_focus(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = _table("ID", "Minutes", "Created")
    for item in result.data.get("items", []):
        table.add_row(
            *_cells(item.get("id", ""), item.get("minutes", ""), item.get("createdAt", ""))
        )
    _print_table(console, result, table, "sessions")
    console.print(f"{result.data.get('total_minutes', 0)} minutes total")


def _render_journals(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = _table("ID", "Created", "Text")
    for item in result.data.get("items", []):
        table.add_row(
            *_cells(item.get("id", ""), item.get("createdAt", ""), item.get("text", ""))
        )
    _print_table(console, result, table, "entries")


def _render_events(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = _table("ID", "When", "Title")
    for item in result.data.get("items", []):
        table.add_row(
            *_cells(item.get("id", ""), item.get("when", ""), item.get("title", ""))
        )
    _print_table(console, result, table, "events")


def _render_launchpad(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    columns = ["ID", "Name", "URL", "Launches", "Enabled"]
    if verbose:
        columns.extend(["Last Launched", "Description"])
    table = _table(*columns)
    for item in result.data.get("items", []):
        row = [
            str(item.get("id", "")),
            str(item.get("name", "")),
            str(item.get("url", "")),
            str(item.get("launchCount", 0)),
            "yes" if item.get("enabled") else "no",
        ]
        if verbose:
            row.extend([str(item.get("lastLaunchedAt") or "-"), str(item.get("description", ""))])
        table.add_row(*_cells(*row))
    _print_table(console, result, table, "items")


# ── Summary renderers ─────────────────────────────────────────────────


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "tasks", f"{d.get('doneTasks', 0)}/{d.get('totalTasks', 0)} done")
    _field(console, "focus today", f"{d.get('focusMinutesToday', 0)} min")
    _field(console, "journal entries", d.get("journalsCount", 0))
    _field(console, "events", d.get("eventsCount", 0))
    _field(console, "launchpad items", d.get("launchpadCount", 0))
    if verbose:
        _render_meta(console, result)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    for key in ("data_dir", "primary", "backup", "staging_present", "healthy"):
        if key in d:
            _field(console, key, d[key])
    counts = d.get("counts")
    if counts:
        _field(console, "counts", ", ".join(f"{k}={v}" for k, v in counts.items()))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_Renderer = Callable[..., None]

_OP_RENDERERS: dict[str, _Renderer] = {
    # Mutations
    "add_task": _render_mutation,
    "edit_task": _render_mutation,
    "delete_task": _render_mutation,
    "log_focus": _render_mutation,
    "add_journal": _render_mutation,
    "delete_journal": _render_mutation,
    "add_event": _render_mutation,
    "delete_event": _render_mutation,
    "create_launchpad": _render_mutation,
    "edit_launchpad": _render_mutation,
    "launch": _render_mutation,
    "delete_launchpad": _render_mutation,
    # Lists
    "list_tasks": _render_tasks,
    "list_focus": _render_focus,
    "list_journals": _render_journals,
    "list_events": _render_events,
    "list_launchpad": _render_launchpad,
    # Summaries
    "stats": _render_stats,
    "check": _render_check,
}
