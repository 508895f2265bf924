"""Result contracts.

ValidationReport is what ``on_invalid`` receives and what ``check()``
returns. ServiceResult is the envelope the CLI commands emit.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    """One failed field: where, what was given, what was expected."""

    model_config = {"frozen": True}

    key: str
    value: Any = None
    type: str
    expected: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        wanted = " | ".join(self.expected) if self.expected else "a valid value"
        return f"{self.key}: expected {wanted}, got {self.type}"


class ValidationReport(BaseModel):
    """Aggregated outcome of one validation run.

    Attributes:
        ok: True when no field failed.
        value: The normalized output (partial when ``ok`` is False).
        passed: Dotted key to final value for matched, defaulted and
            caught fields. List indexes in these keys are input positions;
            ``value`` is compacted after omitted elements are removed, so
            ``tags.2`` may sit at ``value["tags"][1]``.
        failed: Dotted key to the raw value of every failed field, also
            keyed by input position.
        errors: One FieldError per failed field, in evaluation order.
    """

    model_config = {"frozen": True}

    ok: bool
    value: dict[str, Any] = Field(default_factory=dict)
    passed: dict[str, Any] = Field(default_factory=dict)
    failed: dict[str, Any] = Field(default_factory=dict)
    errors: list[FieldError] = Field(default_factory=list)


class ServiceError(BaseModel):
    """Machine-readable failure: a stable ``code`` plus human text."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """What ``check_input`` and ``explain_schema`` hand to the output layer.

    Attributes:
        ok: False when ``error`` is set.
        op: ``"check"`` or ``"explain"``; selects the renderer.
        data: Payload of a successful operation.
        warnings: Things worth telling the user that did not fail the run.
        error: Why the operation failed.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
