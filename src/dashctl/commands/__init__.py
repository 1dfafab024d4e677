"""Subcommand modules for dashctl.

Provides register_commands() which uses deferred imports to keep
``dashctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    5 groups (one per collection) + 2 standalone commands.
    """
    # --- Groups ---
    from dashctl.commands.events import event
    from dashctl.commands.focus import focus
    from dashctl.commands.journal import journal
    from dashctl.commands.launchpad import launchpad
    from dashctl.commands.tasks import task

    cli.add_command(task)
    cli.add_command(focus)
    cli.add_command(journal)
    cli.add_command(event)
    cli.add_command(launchpad)

    # --- Standalone commands ---
    from dashctl.commands.check import check
    from dashctl.commands.stats import stats

    cli.add_command(stats)
    cli.add_command(check)
