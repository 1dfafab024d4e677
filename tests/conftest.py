"""Shared pytest fixtures and test helpers for dashctl tests."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Coroutine, Iterator
from pathlib import Path
from typing import Any, TypeVar

import pytest
from click.testing import CliRunner

from dashctl.infrastructure.store import DocumentStore
from dashctl.services.telemetry import disable_telemetry

_T = TypeVar("_T")


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory for the document files (not created up front)."""
    return tmp_path / "data"


@pytest.fixture
def store(data_dir: Path) -> DocumentStore:
    """DocumentStore on a temp directory, without fsync to keep tests fast."""
    return DocumentStore(data_dir, fsync=False)


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp project root so the CLI writes to ``tmp_path/data``.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test
    classes.
    """
    monkeypatch.delenv("DASHCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    """``-v`` enables telemetry for the whole thread; switch it off again."""
    yield
    disable_telemetry()


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def run(coro: Coroutine[Any, Any, _T]) -> _T:
    """Drive a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


def write_json(path: Path, payload: Any) -> None:
    """Write *payload* as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))
