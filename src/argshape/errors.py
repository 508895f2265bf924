"""Typed error taxonomy.

Three kinds of failure exist:

- SchemaError: the schema itself is malformed. Raised by ``compile()``,
  never deferred to call time.
- Field failures: aggregated into a ValidationReport, never raised one
  at a time. ``InvalidArguments`` wraps the whole report when the caller
  supplied no ``on_invalid`` callback.
- Anything raised by user callbacks (``validate``, ``catch``,
  ``transform``) propagates untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from argshape.services.result import ValidationReport

__all__ = [
    "ArgshapeError",
    "InvalidArguments",
    "SchemaError",
    "format_error",
]


class ArgshapeError(Exception):
    """Base class for all errors raised by argshape itself."""


class SchemaError(ArgshapeError, ValueError):
    """Malformed pattern, option, or path in a schema fragment."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path!r}: {message}"
        super().__init__(message)


class InvalidArguments(ArgshapeError):
    """One or more fields failed and no ``on_invalid`` callback was given."""

    def __init__(self, report: ValidationReport) -> None:
        self.report = report
        keys = ", ".join(err.key for err in report.errors)
        super().__init__(f"Invalid arguments: {keys}")


def format_error(e: BaseException) -> str:
    """Return a short, uniform message like 'SchemaError: detail'."""
    name = e.__class__.__name__
    msg = str(e).strip()
    return f"{name}: {msg}" if msg else name
