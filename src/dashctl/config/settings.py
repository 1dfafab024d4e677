"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs:   CLI flags passed by Click
  2. Env vars:      ``DASHCTL_*`` prefix (``DASHCTL_STORE__FSYNC=false``)
  3. TOML file:     ``dashctl.toml`` discovered via walk-up
  4. Code defaults: baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` fed by
:func:`dashctl.config.discovery.locate_config`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from dashctl.config.discovery import locate_config, read_toml
from dashctl.config.models import StoreConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``dashctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class DashSettings(BaseSettings):
    """Unified settings for the entire dashctl CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.  Stored in
    ``click.Context.obj`` at the CLI root level.

    Attributes:
        project_root: Directory relative data paths resolve against
            (parent of ``dashctl.toml``, or CWD if no config found).
        config_path: The TOML file in use, or None.
        data_dir: ``--data-dir`` override for ``[store] data_dir``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DASHCTL_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (not in TOML, derived from config location) ---
    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    data_dir: Path | None = None

    # --- TOML sections ---
    store: StoreConfig = Field(default_factory=StoreConfig)

    @property
    def resolved_data_dir(self) -> Path:
        """Absolute directory of the document files."""
        directory = self.data_dir or self.store.data_dir
        if not directory.is_absolute():
            directory = self.project_root / directory
        return directory

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> DashSettings:
        """Construct settings from CLI invocation.

        Discovers ``dashctl.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides. Flags passed
        as None are dropped so they do not mask env or TOML values.
        """
        location = locate_config(explicit=config_path, project_root=project_root)
        flags = {key: value for key, value in cli_flags.items() if value is not None}

        _tls.toml_path = location.path
        try:
            return cls(
                project_root=location.project_root,
                config_path=location.path,
                **flags,
            )
        finally:
            _tls.toml_path = None
