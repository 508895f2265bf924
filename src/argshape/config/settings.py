"""CLI settings assembled from flags, ARGSHAPE_* env vars and argshape.toml.

Sources, strongest first:

1. keyword arguments (the CLI flags that were actually given)
2. ``ARGSHAPE_*`` environment variables, ``__`` separating nested fields
3. the ``argshape.toml`` file, found by walking up from the cwd
4. model defaults

``compile()`` and friends never look at settings; only the CLI does.
"""

from __future__ import annotations

import os
import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from argshape.config.models import CompileOptions

CONFIG_FILENAME = "argshape.toml"
CONFIG_ENV_VAR = "ARGSHAPE_CONFIG"

# TOML file for the settings object currently being built.
_active_toml: ContextVar[Path | None] = ContextVar("argshape_active_toml", default=None)


def find_config(start: Path | None = None) -> Path | None:
    """Locate argshape.toml.

    ARGSHAPE_CONFIG, when set, names the file directly (None if it does
    not exist). Otherwise every directory from *start* (default: cwd) up
    to the filesystem root is searched.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _read_toml(path: Path | None) -> dict[str, Any]:
    if path is None or not path.is_file():
        return {}
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"{path} is not valid TOML: {exc}") from exc


class ArgshapeTomlSource(PydanticBaseSettingsSource):
    """Settings source backed by the table at the top of argshape.toml."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._table = _read_toml(path)

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self._table.get(field_name), field_name, field_name in self._table

    def __call__(self) -> dict[str, Any]:
        return {
            name: self._table[name] for name in self.settings_cls.model_fields if name in self._table
        }


class ArgshapeSettings(BaseSettings):
    """Frozen settings for one CLI invocation.

    Attributes:
        config_path: The argshape.toml these settings were read from.
        compile: Path separator and wildcard marker for schema files.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ARGSHAPE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    compile: CompileOptions = Field(default_factory=CompileOptions)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # No dotenv or secrets directory support.
        return init_settings, env_settings, ArgshapeTomlSource(settings_cls, _active_toml.get())

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> ArgshapeSettings:
        """Build settings for the CLI.

        An explicit *config_path* that does not exist is ignored rather
        than searched for. Without one, argshape.toml is discovered from
        *start*.
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(start)

        token = _active_toml.set(toml_path)
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _active_toml.reset(token)
