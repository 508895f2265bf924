"""Tests for the root CLI group."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from argshape import __version__
from argshape.cli import cli


class TestRootGroup:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_command_shows_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "check" in result.output
        assert "explain" in result.output

    def test_config_file_sets_compile_options(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "argshape.toml"
        config.write_text('json_output = true\n\n[compile]\nseparator = "/"\n', encoding="utf-8")
        schema = tmp_path / "schema.json"
        schema.write_text(json.dumps({"opts/n": "number=1"}), encoding="utf-8")
        result = cli_runner.invoke(cli, ["-c", str(config), "check", str(schema)], input="{}")
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"]["value"] == {"opts": {"n": 1}}

    def test_env_enables_json(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ARGSHAPE_JSON_OUTPUT", "true")
        schema = tmp_path / "schema.json"
        schema.write_text(json.dumps({"a": "number"}), encoding="utf-8")
        result = cli_runner.invoke(cli, ["check", str(schema)], input="[3]")
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["ok"] is True
