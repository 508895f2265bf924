"""Shared Click command class.

Commands keep ``--help`` short and put worked invocations behind an
eager ``--examples`` flag.
"""

from __future__ import annotations

from typing import Any

import click


class ArgshapeCommand(click.Command):
    """A click.Command taking an ``examples=`` block of sample invocations."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    is_eager=True,
                    expose_value=False,
                    callback=self._print_examples,
                    help="Print usage examples and exit.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Usage examples for {ctx.command_path}:\n\n{self.examples}")
        ctx.exit()
