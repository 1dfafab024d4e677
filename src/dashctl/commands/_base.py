"""Click base classes with ``--examples`` support.

``DashCommand`` and ``DashGroup`` accept an ``examples`` string. Passing
``--examples`` prints it and exits before any argument validation, so
``dashctl task add --examples`` works without a title. ``--help`` stays
short; examples are available on demand.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Adds an eager ``--examples`` flag when an ``examples`` text is given."""

    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return

        def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
            if not value or ctx.resilient_parsing:
                return
            click.echo(f"Examples for '{ctx.command_path}':\n")
            click.echo(examples)
            ctx.exit(0)

        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=show_examples,
                help="Show usage examples.",
            )
        )


class DashCommand(_ExamplesMixin, click.Command):
    """Click Command that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class DashGroup(_ExamplesMixin, click.Group):
    """Click Group that supports an ``--examples`` flag.

    Subcommands created with ``@group.command(...)`` are DashCommands, so
    they take ``examples=`` without an explicit ``cls=``.
    """

    command_class = DashCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
