"""Subcommand modules for argshape.

Provides register_commands() with deferred imports so ``argshape --help``
stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from argshape.commands.check import check
    from argshape.commands.explain import explain

    cli.add_command(check)
    cli.add_command(explain)
