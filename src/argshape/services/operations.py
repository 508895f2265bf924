"""CLI-facing operations returning ServiceResult.

Each operation turns library outcomes (reports, SchemaError) into the
``ServiceResult`` envelope the output layer knows how to render.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from argshape.config.models import CompileOptions
from argshape.domain.types import ABSENT
from argshape.errors import SchemaError
from argshape.services.compiler import compile_schema
from argshape.services.result import FieldError, ServiceError, ServiceResult
from argshape.services.validator import compile

logger = logging.getLogger(__name__)


def _plain(value: Any) -> Any:
    return None if value is ABSENT else value


def _error_row(err: FieldError) -> dict[str, Any]:
    return {
        "key": err.key,
        "value": _plain(err.value),
        "type": err.type,
        "expected": list(err.expected),
    }


def _dropped_keys(data: Any, roots: tuple[str, ...]) -> list[str]:
    if not isinstance(data, Mapping):
        return []
    dropped = [str(key) for key in data if key not in roots]
    return [f"Dropped undeclared key(s): {', '.join(dropped)}"] if dropped else []


def _schema_failure(op: str, exc: SchemaError) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="SCHEMA_ERROR",
            message=str(exc),
            detail={"path": exc.path} if exc.path is not None else {},
        ),
    )


def check_input(
    schema: Any, data: Any, *, options: CompileOptions | None = None
) -> ServiceResult:
    """Validate one input document against a schema document."""
    op = "check"
    try:
        validator = compile(schema, options=options)
    except SchemaError as exc:
        return _schema_failure(op, exc)

    try:
        report = validator.check(data)
    except TypeError as exc:
        return ServiceResult(
            ok=False, op=op, error=ServiceError(code="BAD_INPUT", message=str(exc))
        )

    if report.ok:
        return ServiceResult(
            ok=True,
            op=op,
            data={"value": report.value, "passed": len(report.passed)},
            warnings=_dropped_keys(data, validator.rules.roots),
        )

    logger.debug("Input rejected with %d error(s)", len(report.errors))
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="INVALID_ARGUMENTS",
            message=f"{len(report.errors)} field(s) failed validation",
            detail={
                "errors": [_error_row(err) for err in report.errors],
                "value": report.value,
            },
        ),
    )


def explain_schema(schema: Any, *, options: CompileOptions | None = None) -> ServiceResult:
    """Describe the compiled rule table of a schema document."""
    op = "explain"
    try:
        table = compile_schema(schema, options=options)
    except SchemaError as exc:
        return _schema_failure(op, exc)

    rules = [
        {
            "path": key,
            "types": list(rule.types),
            "optional": rule.optional,
            "default": _plain(rule.default),
            "has_default": rule.has_default,
        }
        for key, rule in table.items()
    ]
    return ServiceResult(
        ok=True,
        op=op,
        data={"count": len(rules), "positional": list(table.top_level_keys), "rules": rules},
    )
