"""Human-readable rendering of ServiceResult, one renderer per op.

Ops without a dedicated renderer print their data as ``key: json`` lines.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from argshape.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from argshape.services.result import ServiceResult

type Renderer = Callable[..., None]


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* with Rich and return the text."""
    console = create_console()
    renderer = _OP_RENDERERS.get(result.op, _render_generic) if result.ok else _render_error
    renderer(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One status line for ``--quiet``."""
    if result.ok:
        return f"OK: {result.op}"
    return f"ERROR: {result.op}: {_error_message(result)}"


def _error_message(result: ServiceResult) -> str:
    return result.error.message if result.error else "Unknown error"


def _dump(value: Any) -> str:
    return json.dumps(value, default=repr, ensure_ascii=False)


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="arg.ok"), Text(f"  {result.op}", style="arg.op"), sep="")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="arg.key"), Text(_dump(value)), sep="")


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    console.print(Text(json.dumps(result.data.get("value", {}), indent=2, default=repr)))
    if verbose:
        console.print(Text(f"  passed: {result.data.get('passed', 0)}", style="arg.key"))


def _render_explain(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Path", style="arg.path", no_wrap=True)
    table.add_column("Types", style="arg.type")
    table.add_column("Optional")
    table.add_column("Default")
    for rule in result.data.get("rules", []):
        table.add_row(
            Text(rule["path"]),
            " | ".join(rule["types"]) or "any",
            "yes" if rule["optional"] else "",
            Text(_dump(rule["default"])) if rule["has_default"] else "",
        )
    console.print(table)
    if verbose:
        positional = ", ".join(result.data.get("positional", []))
        console.print(Text(f"  positional: {positional}", style="arg.key"))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = _error_message(result)
    console.print(
        Text("ERROR", style="arg.error"),
        Text(f"  {result.op}", style="arg.op"),
        Text(f": {msg}"),
        sep="",
    )
    if err is None:
        return

    rows = err.detail.get("errors") or []
    if rows:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Key", style="arg.path", no_wrap=True)
        table.add_column("Expected", style="arg.type")
        table.add_column("Got")
        table.add_column("Value")
        for row in rows:
            table.add_row(
                Text(row["key"]),
                " | ".join(row["expected"]) or "valid value",
                row["type"],
                Text(_dump(row["value"])),
            )
        console.print(table)

    if verbose:
        for key, value in err.detail.items():
            if key != "errors":
                console.print(Text(f"  {key}: ", style="arg.key"), Text(_dump(value)), sep="")


_OP_RENDERERS: dict[str, Renderer] = {
    "check": _render_check,
    "explain": _render_explain,
}
