"""Compiled rule records and field outcome states.

A Rule is plain data: the field validator decides what to do with it.
Callback slots hold opaque callables; nothing here invokes them.

INVARIANT: Stage order is type match, validate, default, catch,
transform. A field reaches exactly one FieldState per run.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from argshape.domain.types import ABSENT, WILDCARD, Sentinel

type Segment = str | Sentinel
type ValidateFn = Callable[[Any, str], Any] | re.Pattern[str]
type TransformFn = Callable[[Any, str], Any]


class FieldState(StrEnum):
    """Terminal state of one field in one validation run."""

    MATCHED = "matched"
    DEFAULTED = "defaulted"
    CAUGHT = "caught"
    OMITTED = "omitted"
    FAILED = "failed"

    @property
    def succeeded(self) -> bool:
        return self in (FieldState.MATCHED, FieldState.DEFAULTED, FieldState.CAUGHT)


@dataclass(frozen=True)
class CatchContext:
    """What a catch handler is told about the value it may recover."""

    key: str
    value: Any
    type: str


type CatchFn = Callable[[CatchContext], Any]


@dataclass(frozen=True)
class Rule:
    """Compiled contract for one field path.

    Attributes:
        path: Segments of the dotted path; ``WILDCARD`` marks a list element.
        types: Acceptable type names, first match wins. Empty accepts any
            present value.
        validate: Predicate ``(value, matched_type)`` or a regex searched
            against ``str(value)``.
        default: Substitute on no match; ``ABSENT`` when not declared.
        optional: Drop the field silently instead of failing.
        catch: Recovery handler receiving a :class:`CatchContext`.
        transform: ``(value, matched_type) -> value`` applied on success.
    """

    path: tuple[Segment, ...]
    types: tuple[str, ...] = ()
    validate: ValidateFn | None = None
    default: Any = ABSENT
    optional: bool = False
    catch: CatchFn | None = None
    transform: TransformFn | None = None

    @property
    def depth(self) -> int:
        return len(self.path)

    @property
    def has_default(self) -> bool:
        return self.default is not ABSENT

    @property
    def has_wildcard(self) -> bool:
        return WILDCARD in self.path


def format_path(
    path: tuple[Segment | int, ...], separator: str = ".", wildcard: str = WILDCARD.value
) -> str:
    """Render abstract or concrete path segments as one key string.

    Pass the separator and wildcard the schema was written with, so the
    key reads like the schema and distinct paths never share a key.

    >>> format_path(("items", WILDCARD, "id"))
    'items.$.id'
    >>> format_path(("items", 1, "id"))
    'items.1.id'
    """
    return separator.join(
        wildcard if seg is WILDCARD else str(seg) for seg in path
    )
