"""Command: dashboard summary."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dashctl.commands._base import DashCommand

if TYPE_CHECKING:
    from dashctl.commands._context import AppContext


@click.command(
    cls=DashCommand,
    examples="""\
  dashctl stats
  dashctl --json stats""",
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Show task, focus, journal, event and launchpad totals."""
    from dashctl.services.stats import StatsService

    app.run(StatsService(app.store).summary(), op="stats")
