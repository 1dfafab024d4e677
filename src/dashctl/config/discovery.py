"""Locate and read ``dashctl.toml``.

Lookup order: ``--config`` path, then the ``DASHCTL_CONFIG`` env var, then
a walk up from the start directory (the way git finds ``.git/``). The
directory holding the file becomes the project root that a relative
``[store] data_dir`` resolves against.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "dashctl.toml"
CONFIG_ENV_VAR = "DASHCTL_CONFIG"


@dataclass(frozen=True)
class ConfigLocation:
    """Where configuration comes from.

    Attributes:
        path: The TOML file in use, or None when running on defaults.
        project_root: Base directory for relative paths.
    """

    path: Path | None
    project_root: Path


def find_config(start: Path | None = None) -> Path | None:
    """Return the config named by ``DASHCTL_CONFIG`` or the nearest ``dashctl.toml``.

    An env var pointing at a missing file disables the walk-up.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        return candidate if candidate.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def locate_config(
    *, explicit: str | Path | None = None, project_root: Path | None = None
) -> ConfigLocation:
    """Resolve the config file and project root for one CLI invocation.

    Args:
        explicit: ``--config`` value. Must name an existing file.
        project_root: Fixed project root. Also the walk-up start directory.

    Raises:
        click.ClickException: *explicit* does not exist.
    """
    if explicit:
        path: Path | None = Path(explicit)
        if not path.is_file():
            raise click.ClickException(f"Config file not found: {explicit}")
    else:
        path = find_config(project_root)

    if project_root is None:
        project_root = path.parent.resolve() if path else Path.cwd()
    return ConfigLocation(path=path, project_root=project_root)


def read_toml(path: Path | None) -> dict[str, Any]:
    """Decode *path*, or return an empty table when there is no file.

    Raises:
        click.ClickException: The file is not valid TOML.
    """
    if path is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc
