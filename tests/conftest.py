"""Shared pytest fixtures for argshape tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from argshape.services.result import ValidationReport


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Write a JSON document under tmp_path and return its path."""

    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def reports() -> list[ValidationReport]:
    """Collector usable as an ``on_invalid`` callback via ``reports.append``."""
    return []


@pytest.fixture(autouse=True)
def _restore_logging(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep CLI logging setup and ARGSHAPE_* env vars from leaking between tests."""
    for var in ("ARGSHAPE_CONFIG", "ARGSHAPE_VERBOSE", "ARGSHAPE_JSON_OUTPUT"):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("argshape")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
