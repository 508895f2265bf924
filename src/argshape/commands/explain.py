"""Command: show the compiled rule table of a schema file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from argshape.commands._base import ArgshapeCommand

if TYPE_CHECKING:
    from argshape.commands._context import AppContext


@click.command(
    cls=ArgshapeCommand,
    examples="""\
  argshape explain schema.json
  argshape -v explain schema.toml
  argshape --json explain schema.json""",
)
@click.argument("schema", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--separator", default=None, help="Path separator used in the schema.")
@click.option("--wildcard", default=None, help="Wildcard segment marker used in the schema.")
@click.pass_obj
def explain(
    app: AppContext, schema: Path, separator: str | None, wildcard: str | None
) -> None:
    """List the rules SCHEMA compiles to, in declaration order."""
    from argshape.errors import format_error
    from argshape.services.loader import LoadError, load_schema
    from argshape.services.operations import explain_schema
    from argshape.services.result import ServiceError, ServiceResult

    options = app.compile_options(separator=separator, wildcard=wildcard)
    try:
        schema_doc = load_schema(schema)
    except LoadError as exc:
        app.emit(
            ServiceResult(
                ok=False,
                op="explain",
                error=ServiceError(code="LOAD_ERROR", message=format_error(exc)),
            )
        )
        return
    app.emit(explain_schema(schema_doc, options=options))
