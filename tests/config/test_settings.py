"""Tests for settings discovery and priority."""

from pathlib import Path

import pytest

from argshape.config.settings import ArgshapeSettings, find_config


def _write_config(directory: Path, body: str) -> Path:
    path = directory / "argshape.toml"
    path.write_text(body, encoding="utf-8")
    return path


class TestFindConfig:
    def test_walks_up(self, tmp_path: Path) -> None:
        config = _write_config(tmp_path, "")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == config.resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        other = tmp_path / "other.toml"
        other.write_text("", encoding="utf-8")
        _write_config(tmp_path, "")
        monkeypatch.setenv("ARGSHAPE_CONFIG", str(other))
        assert find_config(tmp_path) == other

    def test_env_var_pointing_nowhere(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ARGSHAPE_CONFIG", str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None


class TestArgshapeSettings:
    def test_defaults(self, tmp_path: Path) -> None:
        settings = ArgshapeSettings.from_cli(start=tmp_path)
        assert settings.json_output is False
        assert settings.compile.separator == "."

    def test_toml_values(self, tmp_path: Path) -> None:
        _write_config(tmp_path, 'quiet = true\n\n[compile]\nseparator = "/"\nwildcard = "*"\n')
        settings = ArgshapeSettings.from_cli(start=tmp_path)
        assert settings.quiet is True
        assert settings.compile.separator == "/"
        assert settings.config_path is not None

    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config(tmp_path, "[compile]\nwildcard = \"*\"\n")
        monkeypatch.setenv("ARGSHAPE_COMPILE__WILDCARD", "@")
        settings = ArgshapeSettings.from_cli(start=tmp_path)
        assert settings.compile.wildcard == "@"

    def test_cli_flags_beat_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ARGSHAPE_VERBOSE", "false")
        settings = ArgshapeSettings.from_cli(start=tmp_path, verbose=True)
        assert settings.verbose is True

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text("json_output = true\n", encoding="utf-8")
        settings = ArgshapeSettings.from_cli(config_path=str(path))
        assert settings.json_output is True
        assert settings.config_path == path
