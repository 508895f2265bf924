"""The ``argshape`` command group."""

from __future__ import annotations

import click

from argshape import __version__
from argshape.commands import register_commands
from argshape.commands._context import AppContext
from argshape.config.settings import ArgshapeSettings


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="argshape")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only an OK or ERROR line.")
@click.option("-v", "--verbose", is_flag=True, help="Show extra detail and debug logs.")
@click.option("--log-json", is_flag=True, help="Write log records to stderr as JSON lines.")
@click.option(
    "-c", "--config", "config_path", default=None, help="Read this argshape.toml instead of searching."
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Validate and normalize arguments against an argshape schema."""
    given = {
        name: True
        for name, on in (
            ("json_output", json_output),
            ("quiet", quiet),
            ("verbose", verbose),
            ("log_json", log_json),
        )
        if on
    }
    # Flags left off must not override ARGSHAPE_* or argshape.toml.
    ctx.obj = AppContext(ArgshapeSettings.from_cli(config_path=config_path, **given))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
