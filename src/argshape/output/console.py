"""Rich console setup shared by every renderer.

Renderers draw into an in-memory console and hand back plain strings,
so the CLI decides where text goes. A buffer is never a terminal, so
Rich leaves out color codes unless forced.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

ARGSHAPE_THEME = Theme(
    {
        "arg.ok": "bold green",
        "arg.error": "bold red",
        "arg.warning": "bold yellow",
        "arg.op": "bold cyan",
        "arg.key": "dim",
        "arg.path": "bold blue",
        "arg.type": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Return a themed console writing into a fresh buffer."""
    return Console(
        file=StringIO(),
        theme=ARGSHAPE_THEME,
        width=width or DEFAULT_WIDTH,
        no_color=no_color,
        highlight=False,
    )


def get_output(console: Console) -> str:
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console was not created by create_console()")
    return buffer.getvalue()
