"""DocumentStore: recovery loader and mutation transactions.

The store owns the document files and exactly one :class:`WriteSerializer`.
No other component writes the files.

Load (``load()``):
  primary -> backup -> fresh default. A readable primary is returned
  without queueing. Any recovery runs as a serialized job: a backup that
  normalizes is written back to the primary (self-healing); if the backup
  fails too, an empty Document is written so later loads find a valid
  primary. Corruption and absence are logged, never raised.

Transaction (``update(mutate)``):
  Serialized load (fresh from disk) -> ``mutate(draft)`` -> normalize ->
  write. ``mutate`` returns an Outcome value; business failures such as
  "not found" are data, not exceptions. The draft is written back even
  when the Outcome reports a failure. If ``mutate`` raises, the draft is
  abandoned and the exception reaches the caller.

Fatal I/O errors (permissions, disk full, directory creation) propagate
unchanged from every operation.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from dashctl.domain.entities import Document
from dashctl.domain.normalize import normalize
from dashctl.infrastructure.filesystem import (
    BACKUP_NAME,
    PRIMARY_NAME,
    ReadErrorKind,
    ReadResult,
    StorePaths,
    discard_staging,
    read_document,
    write_document,
)
from dashctl.infrastructure.serializer import WriteSerializer

if TYPE_CHECKING:
    from dashctl.config.settings import DashSettings

logger = logging.getLogger(__name__)

_O = TypeVar("_O")


class DocumentStore:
    """Durable single-file document store.

    Args:
        data_dir: Directory holding the primary, backup and staging files.
        primary_name: File name of the primary document.
        backup_name: File name of the last-known-good snapshot.
        max_pending: Backpressure limit for the write queue (0 = unbounded).
        fsync: Flush writes to disk before the atomic rename.
    """

    def __init__(
        self,
        data_dir: Path,
        *,
        primary_name: str = PRIMARY_NAME,
        backup_name: str = BACKUP_NAME,
        max_pending: int = 0,
        fsync: bool = True,
    ) -> None:
        self.paths = StorePaths.in_directory(
            data_dir, primary_name=primary_name, backup_name=backup_name
        )
        self._fsync = fsync
        self._serializer = WriteSerializer(max_pending=max_pending)

    @classmethod
    def from_settings(cls, settings: DashSettings) -> DocumentStore:
        """Build the store described by the ``[store]`` settings section."""
        return cls(
            settings.resolved_data_dir,
            primary_name=settings.store.primary_name,
            backup_name=settings.store.backup_name,
            max_pending=settings.store.max_pending,
            fsync=settings.store.fsync,
        )

    @property
    def pending(self) -> int:
        """Serialized jobs queued or running."""
        return self._serializer.pending

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def load(self) -> Document:
        """Return the current Document, recovering from corruption if needed.

        Not serialized against in-flight transactions when the primary is
        readable; atomic rename guarantees a complete document either way.
        """
        primary = await self._read(self.paths.primary)
        if primary.ok:
            return normalize(primary.raw)
        return await self._serializer.submit(self._load_or_recover)

    async def persist(self, document: Document) -> None:
        """Write *document* as-is (serialized with transactions)."""
        await self._serializer.submit(functools.partial(self._write, document))

    async def update(self, mutate: Callable[[Document], _O | Awaitable[_O]]) -> _O:
        """Run one load-mutate-persist transaction and return its Outcome.

        *mutate* may be a plain function or a coroutine function.
        """
        return await self._serializer.submit(functools.partial(self._transact, mutate))

    async def diagnose(self) -> dict[str, Any]:
        """Report the state of each document file without repairing anything."""
        primary = await self._read(self.paths.primary)
        backup = await self._read(self.paths.backup)
        staging = await asyncio.to_thread(self.paths.staging.exists)
        report: dict[str, Any] = {
            "data_dir": str(self.paths.directory),
            "primary": _file_state(primary),
            "backup": _file_state(backup),
            "staging_present": staging,
            "pending": self.pending,
        }
        if primary.ok:
            report["counts"] = normalize(primary.raw).counts()
        return report

    async def aclose(self) -> None:
        """Drain queued jobs and stop the write serializer."""
        await self._serializer.aclose()

    # ------------------------------------------------------------------
    # Serialized jobs
    # ------------------------------------------------------------------

    async def _transact(self, mutate: Callable[[Document], _O | Awaitable[_O]]) -> _O:
        draft = await self._load_or_recover()
        outcome = mutate(draft)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        # Written even when the outcome reports a business failure.
        await self._write(normalize(draft))
        return outcome

    async def _load_or_recover(self) -> Document:
        primary = await self._read(self.paths.primary)
        if primary.ok:
            return normalize(primary.raw)

        if primary.error is not ReadErrorKind.NOT_FOUND:
            logger.warning(
                "Primary document %s is %s: %s", primary.path, primary.error, primary.detail
            )
        if await asyncio.to_thread(discard_staging, self.paths):
            logger.warning("Discarded unfinished write %s", self.paths.staging)

        backup = await self._read(self.paths.backup)
        if backup.ok:
            document = normalize(backup.raw)
            await self._write(document, rotate=False)
            logger.warning("Restored %s from backup %s", self.paths.primary, backup.path)
            return document

        if backup.error is not ReadErrorKind.NOT_FOUND:
            logger.warning("Backup document %s is %s: %s", backup.path, backup.error, backup.detail)
        document = Document()
        await self._write(document, rotate=False)
        if primary.error is ReadErrorKind.NOT_FOUND and backup.error is ReadErrorKind.NOT_FOUND:
            logger.info("Initialized empty document at %s", self.paths.primary)
        else:
            logger.warning("Reset %s to an empty document", self.paths.primary)
        return document

    async def _write(self, document: Document, *, rotate: bool = True) -> None:
        await write_document(self.paths, document, rotate=rotate, fsync=self._fsync)
        logger.debug("Wrote %s (%s)", self.paths.primary, document.counts())

    async def _read(self, path: Path) -> ReadResult:
        return await asyncio.to_thread(read_document, path)


def _file_state(result: ReadResult) -> str:
    return "ok" if result.ok else str(result.error)
