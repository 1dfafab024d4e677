"""Command group: launchpad shortcuts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dashctl.commands._base import DashGroup

if TYPE_CHECKING:
    from dashctl.commands._context import AppContext

_LAUNCHPAD_EXAMPLES = """\
  dashctl launchpad add "Docs" https://docs.python.org
  dashctl launchpad add "Tracker" https://tracker.example.com -d "Team issues"
  dashctl launchpad launch 1760000000000-a1b2c3
  dashctl launchpad edit 1760000000000-a1b2c3 --disable
  dashctl launchpad list"""


@click.group(cls=DashGroup, examples=_LAUNCHPAD_EXAMPLES)
@click.pass_obj
def launchpad(app: AppContext) -> None:
    """Manage launchpad shortcuts."""


@launchpad.command(
    examples="""\
  dashctl launchpad add "Docs" https://docs.python.org
  dashctl launchpad add "Tracker" https://tracker.example.com -d "Team issues\""""
)
@click.argument("name")
@click.argument("url")
@click.option("-d", "--description", default="", help="Short description.")
@click.pass_obj
def add(app: AppContext, name: str, url: str, description: str) -> None:
    """Add a shortcut to URL (fails if the URL is already on the launchpad)."""
    from dashctl.services.launchpad import LaunchpadService

    app.run(LaunchpadService(app.store).create(name, url, description), op="create_launchpad")


@launchpad.command(
    examples="""\
  dashctl launchpad edit 1760000000000-a1b2c3 --name "Python docs"
  dashctl launchpad edit 1760000000000-a1b2c3 --url https://docs.python.org/3/
  dashctl launchpad edit 1760000000000-a1b2c3 --disable"""
)
@click.argument("item_id")
@click.option("--name", default=None, help="New name.")
@click.option("--url", default=None, help="New URL.")
@click.option("-d", "--description", default=None, help="New description.")
@click.option("--enable/--disable", "enabled", default=None, help="Enable or disable launching.")
@click.pass_obj
def edit(
    app: AppContext,
    item_id: str,
    name: str | None,
    url: str | None,
    description: str | None,
    enabled: bool | None,
) -> None:
    """Edit a launchpad item."""
    from dashctl.services.launchpad import LaunchpadService

    app.run(
        LaunchpadService(app.store).edit(
            item_id, name=name, url=url, description=description, enabled=enabled
        ),
        op="edit_launchpad",
    )


@launchpad.command(examples="  dashctl launchpad launch 1760000000000-a1b2c3")
@click.argument("item_id")
@click.pass_obj
def launch(app: AppContext, item_id: str) -> None:
    """Record a launch of an enabled item and print its URL."""
    from dashctl.services.launchpad import LaunchpadService

    app.run(LaunchpadService(app.store).launch(item_id), op="launch")


@launchpad.command(examples="  dashctl launchpad delete 1760000000000-a1b2c3")
@click.argument("item_id")
@click.pass_obj
def delete(app: AppContext, item_id: str) -> None:
    """Delete a launchpad item."""
    from dashctl.services.launchpad import LaunchpadService

    app.run(LaunchpadService(app.store).delete(item_id), op="delete_launchpad")


@launchpad.command(
    "list",
    examples="""\
  dashctl launchpad list
  dashctl -v launchpad list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List launchpad items, most recently updated first."""
    from dashctl.services.launchpad import LaunchpadService

    app.run(LaunchpadService(app.store).list(), op="list_launchpad")
