"""File I/O for the dashboard document.

INVARIANT: The primary file only ever changes by ``os.replace`` of a fully
written staging file. A reader sees the complete old document or the
complete new one, never a partial write.

Reads never raise for absence or corruption. They return a
:class:`ReadResult` tagged with a :class:`ReadErrorKind` so the recovery
logic in :mod:`dashctl.infrastructure.store` branches on the kind of
failure rather than on exception text. Writes propagate every ``OSError``
unchanged and do not retry.

The blocking primitives here are run on worker threads by
:func:`write_document` and by the store, one ``await`` per file-system call.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import os
import shutil
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any

from dashctl.domain.entities import Document

PRIMARY_NAME = "dashboard.json"
BACKUP_NAME = "dashboard.backup.json"
STAGING_SUFFIX = ".tmp"


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StorePaths:
    """Locations of the primary, backup and staging files."""

    directory: Path
    primary: Path
    backup: Path
    staging: Path

    @classmethod
    def in_directory(
        cls,
        directory: Path,
        *,
        primary_name: str = PRIMARY_NAME,
        backup_name: str = BACKUP_NAME,
    ) -> StorePaths:
        primary = directory / primary_name
        return cls(
            directory=directory,
            primary=primary,
            backup=directory / backup_name,
            staging=primary.with_name(primary.name + STAGING_SUFFIX),
        )


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


class ReadErrorKind(StrEnum):
    """Why a document file could not be used."""

    NOT_FOUND = "not_found"
    UNREADABLE = "unreadable"
    CORRUPT = "corrupt"


@dataclass(frozen=True)
class ReadResult:
    """Outcome of reading one document file.

    Exactly one of ``raw`` (the decoded JSON object) and ``error`` is set.
    """

    path: Path
    raw: dict[str, Any] | None = None
    error: ReadErrorKind | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


def read_document(path: Path) -> ReadResult:
    """Read and decode the JSON object stored at *path*."""
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        return ReadResult(path, error=ReadErrorKind.NOT_FOUND)
    except OSError as exc:
        return ReadResult(path, error=ReadErrorKind.UNREADABLE, detail=str(exc))

    try:
        # Bytes input also accepts a leading UTF-8 BOM.
        raw = json.loads(data)
    except (ValueError, RecursionError) as exc:
        return ReadResult(path, error=ReadErrorKind.CORRUPT, detail=str(exc))

    if not isinstance(raw, dict):
        detail = f"top-level JSON value is {type(raw).__name__}, expected object"
        return ReadResult(path, error=ReadErrorKind.CORRUPT, detail=detail)
    return ReadResult(path, raw=raw)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def render_document(document: Document) -> str:
    """Stable textual form: 2-space indented JSON plus a trailing newline."""
    return json.dumps(document.to_raw(), indent=2, ensure_ascii=False) + "\n"


def ensure_directory(paths: StorePaths) -> None:
    paths.directory.mkdir(parents=True, exist_ok=True)


def rotate_backup(paths: StorePaths) -> bool:
    """Copy the current primary over the backup.

    The copy goes to a side file that replaces the backup in one
    ``os.replace``, so the backup is always a complete snapshot. Returns
    False when there is no primary yet (first run). Any other failure
    propagates.
    """
    pending = paths.backup.with_name(paths.backup.name + STAGING_SUFFIX)
    try:
        shutil.copyfile(paths.primary, pending)
        os.replace(pending, paths.backup)
    except FileNotFoundError:
        if paths.primary.exists():
            raise
        return False
    except BaseException:
        with contextlib.suppress(OSError):
            pending.unlink()
        raise
    return True


def write_staging(paths: StorePaths, text: str, *, fsync: bool = True) -> None:
    """Write *text* to the staging file, flushed to disk when *fsync* is set."""
    with open(paths.staging, "w", encoding="utf-8", newline="\n") as fh:
        fh.write(text)
        fh.flush()
        if fsync:
            os.fsync(fh.fileno())


def commit_staging(paths: StorePaths, *, fsync: bool = True) -> None:
    """Atomically replace the primary with the staging file."""
    os.replace(paths.staging, paths.primary)
    if fsync and os.name == "posix":
        # Persist the rename itself.
        fd = os.open(paths.directory, os.O_RDONLY)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)


def discard_staging(paths: StorePaths) -> bool:
    """Remove a leftover staging file. Returns True if one existed."""
    try:
        paths.staging.unlink()
    except FileNotFoundError:
        return False
    return True


async def write_document(
    paths: StorePaths,
    document: Document,
    *,
    rotate: bool = True,
    fsync: bool = True,
) -> None:
    """Persist *document*: mkdir, backup copy, staging write, atomic rename.

    Args:
        paths: Target file locations.
        document: The document to write, serialized as-is.
        rotate: Copy the current primary to the backup first. Recovery
            passes False so a corrupt primary never replaces a good backup.
        fsync: Flush the staging file and the directory entry to disk.

    Raises:
        OSError: Any file-system failure, unchanged. A staging file left by
            a failed write is removed before the error propagates.
    """
    text = render_document(document)
    await asyncio.to_thread(ensure_directory, paths)
    if rotate:
        await asyncio.to_thread(rotate_backup, paths)
    try:
        await asyncio.to_thread(write_staging, paths, text, fsync=fsync)
        await asyncio.to_thread(commit_staging, paths, fsync=fsync)
    except BaseException:
        with contextlib.suppress(OSError):
            discard_staging(paths)
        raise
