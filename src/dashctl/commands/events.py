"""Command group: calendar events."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dashctl.commands._base import DashGroup

if TYPE_CHECKING:
    from dashctl.commands._context import AppContext

_EVENT_EXAMPLES = """\
  dashctl event add "Dentist" 2026-11-03T09:30:00+01:00
  dashctl event add "Quarterly review" 2026-12-01
  dashctl event list"""


@click.group(cls=DashGroup, examples=_EVENT_EXAMPLES)
@click.pass_obj
def event(app: AppContext) -> None:
    """Manage calendar events."""


@event.command(
    examples="""\
  dashctl event add "Dentist" 2026-11-03T09:30:00+01:00
  dashctl event add "Quarterly review" 2026-12-01"""
)
@click.argument("title")
@click.argument("when")
@click.pass_obj
def add(app: AppContext, title: str, when: str) -> None:
    """Add an event at WHEN (ISO-8601 date or date-time)."""
    from dashctl.services.events import EventService

    app.run(EventService(app.store).add(title, when), op="add_event")


@event.command(examples="  dashctl event delete 1760000000000-a1b2c3")
@click.argument("event_id")
@click.pass_obj
def delete(app: AppContext, event_id: str) -> None:
    """Delete an event."""
    from dashctl.services.events import EventService

    app.run(EventService(app.store).delete(event_id), op="delete_event")


@event.command("list", examples="  dashctl event list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List events, soonest first."""
    from dashctl.services.events import EventService

    app.run(EventService(app.store).list(), op="list_events")
