"""Schema and input file loading for the CLI.

Schema files are JSON (a mapping or a list of mappings) or TOML (one
mapping, or several under a ``[[fragments]]`` array of tables). Input
documents are always JSON.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any

from argshape.errors import ArgshapeError


class LoadError(ArgshapeError):
    """A schema or input document could not be read or decoded."""


def load_schema(path: Path) -> Any:
    """Read a schema document from *path*.

    Raises:
        LoadError: If the file is unreadable or not valid JSON/TOML.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LoadError(f"Cannot read {path}: {exc.strerror}") from exc

    if path.suffix.lower() == ".toml":
        try:
            data: Any = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise LoadError(f"Invalid TOML in {path}: {exc}") from exc
        fragments = data.get("fragments")
        if isinstance(fragments, list) and len(data) == 1:
            return fragments
        return data

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise LoadError(f"Invalid JSON in {path}: {exc}") from exc


def load_input(text: str, *, source: str = "<stdin>") -> Any:
    """Decode a JSON input document (object or array)."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise LoadError(f"Invalid JSON in {source}: {exc}") from exc
