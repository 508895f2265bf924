"""Command: validate a JSON document against a schema file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import click
import structlog

from argshape.commands._base import ArgshapeCommand

if TYPE_CHECKING:
    from argshape.commands._context import AppContext

log = structlog.get_logger("argshape.cli")


@click.command(
    cls=ArgshapeCommand,
    examples="""\
  argshape check schema.json input.json
  echo '[1, "x"]' | argshape check schema.json
  argshape --json check schema.toml input.json
  argshape check --wildcard '*' schema.json input.json""",
)
@click.argument("schema", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--separator", default=None, help="Path separator used in the schema.")
@click.option("--wildcard", default=None, help="Wildcard segment marker used in the schema.")
@click.pass_obj
def check(
    app: AppContext,
    schema: Path,
    input_file: TextIO,
    separator: str | None,
    wildcard: str | None,
) -> None:
    """Validate INPUT_FILE (JSON object or array, default stdin) against SCHEMA."""
    from argshape.errors import format_error
    from argshape.services.loader import LoadError, load_input, load_schema
    from argshape.services.operations import check_input
    from argshape.services.result import ServiceError, ServiceResult

    options = app.compile_options(separator=separator, wildcard=wildcard)
    source = getattr(input_file, "name", "<stdin>")
    try:
        schema_doc = load_schema(schema)
        data = load_input(input_file.read(), source=source)
    except LoadError as exc:
        app.emit(
            ServiceResult(
                ok=False,
                op="check",
                error=ServiceError(code="LOAD_ERROR", message=format_error(exc)),
            )
        )
        return

    log.debug("schema_loaded", path=str(schema), source=source)
    app.emit(check_input(schema_doc, data, options=options))
