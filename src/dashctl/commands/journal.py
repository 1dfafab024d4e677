"""Command group: journal entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dashctl.commands._base import DashGroup

if TYPE_CHECKING:
    from dashctl.commands._context import AppContext

_JOURNAL_EXAMPLES = """\
  dashctl journal add "Shipped the backup rotation fix"
  dashctl journal list
  dashctl journal delete 1760000000000-a1b2c3"""


@click.group(cls=DashGroup, examples=_JOURNAL_EXAMPLES)
@click.pass_obj
def journal(app: AppContext) -> None:
    """Keep a journal."""


@journal.command(examples='  dashctl journal add "Long walk, clear head"')
@click.argument("text")
@click.pass_obj
def add(app: AppContext, text: str) -> None:
    """Add a journal entry."""
    from dashctl.services.journal import JournalService

    app.run(JournalService(app.store).add(text), op="add_journal")


@journal.command(examples="  dashctl journal delete 1760000000000-a1b2c3")
@click.argument("entry_id")
@click.pass_obj
def delete(app: AppContext, entry_id: str) -> None:
    """Delete a journal entry."""
    from dashctl.services.journal import JournalService

    app.run(JournalService(app.store).delete(entry_id), op="delete_journal")


@journal.command("list", examples="  dashctl journal list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List journal entries, newest first."""
    from dashctl.services.journal import JournalService

    app.run(JournalService(app.store).list(), op="list_journals")
