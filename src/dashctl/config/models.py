"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, dashctl.toml only contains
overrides. A fresh checkout needs no config file at all. Sections are
composed into :class:`dashctl.config.settings.DashSettings`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from dashctl.infrastructure.filesystem import BACKUP_NAME, PRIMARY_NAME

# --- dashctl.toml sections ---


class StoreConfig(BaseModel):
    """[store] section.

    A relative ``data_dir`` resolves against the project root (the
    directory holding ``dashctl.toml``, or the CWD without one).
    """

    model_config = {"frozen": True}

    data_dir: Path = Path("data")
    primary_name: str = PRIMARY_NAME
    backup_name: str = BACKUP_NAME
    max_pending: int = Field(default=0, ge=0)
    fsync: bool = True

