"""Command group: tasks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dashctl.commands._base import DashGroup

if TYPE_CHECKING:
    from dashctl.commands._context import AppContext

_PRIORITY = click.Choice(["high", "medium", "low"], case_sensitive=False)

_TASK_EXAMPLES = """\
  dashctl task add "Buy milk"
  dashctl task add "Renew passport" --priority high
  dashctl task done 1760000000000-a1b2c3
  dashctl task list"""


@click.group(cls=DashGroup, examples=_TASK_EXAMPLES)
@click.pass_obj
def task(app: AppContext) -> None:
    """Manage tasks."""


@task.command(
    examples="""\
  dashctl task add "Buy milk"
  dashctl task add "Renew passport" --priority high
  dashctl --json task add "Call the bank" -p low"""
)
@click.argument("title")
@click.option("-p", "--priority", type=_PRIORITY, default="medium", help="Task priority.")
@click.pass_obj
def add(app: AppContext, title: str, priority: str) -> None:
    """Add a task."""
    from dashctl.services.tasks import TaskService

    app.run(TaskService(app.store).add(title, priority=priority), op="add_task")


@task.command(
    examples="""\
  dashctl task edit 1760000000000-a1b2c3 --title "Buy oat milk"
  dashctl task edit 1760000000000-a1b2c3 --priority low --undone"""
)
@click.argument("task_id")
@click.option("--title", default=None, help="New title.")
@click.option("-p", "--priority", type=_PRIORITY, default=None, help="New priority.")
@click.option("--done/--undone", default=None, help="Mark done or not done.")
@click.pass_obj
def edit(
    app: AppContext,
    task_id: str,
    title: str | None,
    priority: str | None,
    done: bool | None,
) -> None:
    """Edit a task's title, priority or done flag."""
    from dashctl.services.tasks import TaskService

    app.run(
        TaskService(app.store).edit(task_id, title=title, done=done, priority=priority),
        op="edit_task",
    )


@task.command(examples="  dashctl task done 1760000000000-a1b2c3")
@click.argument("task_id")
@click.pass_obj
def done(app: AppContext, task_id: str) -> None:
    """Mark a task done."""
    from dashctl.services.tasks import TaskService

    app.run(TaskService(app.store).edit(task_id, done=True), op="edit_task")


@task.command(examples="  dashctl task delete 1760000000000-a1b2c3")
@click.argument("task_id")
@click.pass_obj
def delete(app: AppContext, task_id: str) -> None:
    """Delete a task."""
    from dashctl.services.tasks import TaskService

    app.run(TaskService(app.store).delete(task_id), op="delete_task")


@task.command(
    "list",
    examples="""\
  dashctl task list
  dashctl -q task list
  dashctl --json task list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List tasks, newest first."""
    from dashctl.services.tasks import TaskService

    app.run(TaskService(app.store).list(), op="list_tasks")
