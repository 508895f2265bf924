"""Per-invocation state handed to every subcommand via ``@click.pass_obj``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from pydantic import ValidationError

from argshape.config.logging import configure_logging
from argshape.config.models import CompileOptions
from argshape.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from argshape.config.settings import ArgshapeSettings
    from argshape.services.result import ServiceResult


class AppContext:
    """Settings plus the two things every command needs: options and emit."""

    def __init__(self, settings: ArgshapeSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        Successful results go to stdout, with warnings on stderr unless
        the output is JSON (which already carries them). Failed results
        go to stderr and end the process with status 1.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if self.output.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)

    def compile_options(
        self, *, separator: str | None = None, wildcard: str | None = None
    ) -> CompileOptions:
        """Settings-level compile options with per-command overrides applied.

        Raises:
            click.BadParameter: If the overrides make an invalid combination.
        """
        overrides = {
            name: value
            for name, value in (("separator", separator), ("wildcard", wildcard))
            if value is not None
        }
        if not overrides:
            return self.settings.compile
        try:
            return CompileOptions.model_validate(
                {**self.settings.compile.model_dump(), **overrides}
            )
        except ValidationError as exc:
            raise click.BadParameter(exc.errors()[0]["msg"]) from exc
