"""Command: document file health check."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dashctl.commands._base import DashCommand

if TYPE_CHECKING:
    from dashctl.commands._context import AppContext


@click.command(
    cls=DashCommand,
    examples="""\
  dashctl check
  dashctl --json check
  dashctl --data-dir ./backup-copy check""",
)
@click.pass_obj
def check(app: AppContext) -> None:
    """Report the state of the primary, backup and staging files."""
    from dashctl.services.check import CheckService

    app.run(CheckService(app.store).check(), op="check")
