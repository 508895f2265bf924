"""Field validator: the per-field pipeline.

    type match -> validate -> default -> catch -> (fail | omit) -> transform

Only ``catch`` can turn a failure into a value chosen at call time;
``default`` substitutes a value fixed at compile time. Exceptions from
user callbacks are not intercepted.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass
from typing import Any

from argshape.domain.rules import CatchContext, FieldState, Rule
from argshape.domain.types import ABSENT, TypeRegistry
from argshape.services.result import FieldError


@dataclass(frozen=True)
class FieldOutcome:
    """Terminal state and final value of one field."""

    key: str
    state: FieldState
    value: Any
    type: str | None = None
    error: FieldError | None = None


def match_type(rule: Rule, value: Any, types: TypeRegistry) -> str | None:
    """Return the first declared type *value* matches, or None.

    With no declared types any present value matches under its own type
    name. A missing value only matches an explicit ``undefined``.
    """
    if not rule.types:
        return None if value is ABSENT else types.type_name(value)
    for name in rule.types:
        if types.matches(value, name):
            return name
    return None


def run_validate(rule: Rule, value: Any, matched_type: str) -> bool:
    """Apply the rule's custom check. A regex is searched in ``str(value)``."""
    check = rule.validate
    if check is None:
        return True
    if isinstance(check, re.Pattern):
        return check.search(str(value)) is not None
    return bool(check(value, matched_type))


def validate_field(rule: Rule, key: str, value: Any, *, types: TypeRegistry) -> FieldOutcome:
    """Run the full pipeline for one value against one rule.

    Args:
        rule: Compiled rule for the field.
        key: Concrete dotted key, e.g. ``items.1.id``.
        value: The candidate value, ``ABSENT`` if missing.
        types: Type capability used for matching and naming.
    """
    matched_type = match_type(rule, value, types)
    if matched_type is not None and not run_validate(rule, value, matched_type):
        failed_type: str | None = matched_type
        matched_type = None
    else:
        failed_type = None

    if matched_type is not None:
        state = FieldState.MATCHED
    elif rule.has_default:
        # Each run gets its own copy; the Rule is shared by every call.
        value = copy.deepcopy(rule.default)
        matched_type = types.type_name(value)
        state = FieldState.DEFAULTED
    else:
        recovered = ABSENT
        if rule.catch is not None:
            context = CatchContext(
                key=key, value=value, type=failed_type or types.type_name(value)
            )
            recovered = rule.catch(context)
        if recovered is not ABSENT:
            value = recovered
            matched_type = types.type_name(value)
            state = FieldState.CAUGHT
        elif rule.optional:
            return FieldOutcome(key=key, state=FieldState.OMITTED, value=value)
        else:
            error = FieldError(
                key=key, value=value, type=types.type_name(value), expected=rule.types
            )
            return FieldOutcome(key=key, state=FieldState.FAILED, value=value, error=error)

    if rule.transform is not None:
        value = rule.transform(value, matched_type)
    return FieldOutcome(key=key, state=state, value=value, type=matched_type)
