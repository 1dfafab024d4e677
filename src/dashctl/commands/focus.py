"""Command group: focus timer sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dashctl.commands._base import DashGroup

if TYPE_CHECKING:
    from dashctl.commands._context import AppContext

_FOCUS_EXAMPLES = """\
  dashctl focus log
  dashctl focus log --minutes 50
  dashctl focus list"""


@click.group(cls=DashGroup, examples=_FOCUS_EXAMPLES)
@click.pass_obj
def focus(app: AppContext) -> None:
    """Record focus sessions."""


@focus.command(
    examples="""\
  dashctl focus log
  dashctl focus log -m 50"""
)
@click.option("-m", "--minutes", type=int, default=25, show_default=True, help="Session length.")
@click.pass_obj
def log(app: AppContext, minutes: int) -> None:
    """Log a finished focus session."""
    from dashctl.services.focus import FocusService

    app.run(FocusService(app.store).log(minutes), op="log_focus")


@focus.command("list", examples="  dashctl focus list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List focus sessions, newest first."""
    from dashctl.services.focus import FocusService

    app.run(FocusService(app.store).list(), op="list_focus")
