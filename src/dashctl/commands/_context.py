"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy store construction, the event loop
bridge for async services, and centralized result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import TYPE_CHECKING, Any

import click

from dashctl.output.formatters import OutputSettings, format_result
from dashctl.services.result import INTERNAL_ERROR, STORE_BUSY, ServiceResult

if TYPE_CHECKING:
    from dashctl.config.settings import DashSettings
    from dashctl.infrastructure.store import DocumentStore

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The store is lazily
    created on first use so ``--help`` and ``--version`` never touch
    the data directory.
    """

    def __init__(self, settings: DashSettings) -> None:
        self.settings = settings
        self._store: DocumentStore | None = None

        # Configure structured logging
        from dashctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from dashctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> DocumentStore:
        """The document store (created lazily on first access)."""
        if self._store is None:
            from dashctl.infrastructure.store import DocumentStore

            self._store = DocumentStore.from_settings(self.settings)
        return self._store

    def run(self, call: Coroutine[Any, Any, ServiceResult], *, op: str) -> None:
        """Run an async service call to completion and emit its result.

        File-system failures propagate out of the store unchanged; here
        they become an ``INTERNAL_ERROR`` result named *op*.
        """
        from dashctl.infrastructure.serializer import StoreBusyError

        async def _complete() -> ServiceResult:
            try:
                return await call
            finally:
                if self._store is not None:
                    await self._store.aclose()

        try:
            result = asyncio.run(_complete())
        except StoreBusyError as exc:
            result = ServiceResult.failure(op, STORE_BUSY, str(exc), pending=exc.pending)
        except OSError as exc:
            logger.error("Store I/O failed during %s: %s", op, exc)
            result = ServiceResult.failure(
                op,
                INTERNAL_ERROR,
                f"storage error: {exc.strerror or exc}",
                path=str(exc.filename) if exc.filename else None,
            )
        self.emit(result)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
