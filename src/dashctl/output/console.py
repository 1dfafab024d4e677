"""Rich Console factory and the dashctl theme.

Renderers print into a Console backed by ``StringIO`` and hand the text
back to the formatter, so every output path stays ``ServiceResult -> str``.
Rich drops color codes on its own when the buffer is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DASH_THEME = Theme(
    {
        # status lines
        "dash.ok": "bold green",
        "dash.error": "bold red",
        "dash.op": "bold cyan",
        "dash.key": "dim",
        # entity fields
        "dash.id": "bold blue",
        "dash.title": "bold",
        "dash.url": "underline blue",
        "dash.time": "dim",
        "dash.priority.high": "bold red",
        "dash.priority.medium": "yellow",
        "dash.priority.low": "dim",
        # document file states reported by `check`
        "dash.state.ok": "green",
        "dash.state.missing": "yellow",
        "dash.state.bad": "bold red",
    }
)

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Console that renders into a fresh StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=DASH_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Text rendered so far by a console from :func:`create_console`."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_priority(priority: str) -> str:
    """Style for a task priority; empty for unknown values."""
    if priority in ("high", "medium", "low"):
        return f"dash.priority.{priority}"
    return ""


def style_for_state(state: str) -> str:
    """Style for a document file state (``ok``, ``not_found``, ``corrupt`` ...)."""
    if state == "ok":
        return "dash.state.ok"
    if state == "not_found":
        return "dash.state.missing"
    return "dash.state.bad"
