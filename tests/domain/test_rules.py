"""Tests for Rule records and field states."""

import dataclasses

import pytest

from argshape.domain.rules import CatchContext, FieldState, Rule, format_path
from argshape.domain.types import ABSENT, WILDCARD


class TestRule:
    def test_depth_and_wildcard(self) -> None:
        rule = Rule(path=("items", WILDCARD, "id"), types=("number",))
        assert rule.depth == 3
        assert rule.has_wildcard

    def test_defaults(self) -> None:
        rule = Rule(path=("a",))
        assert rule.types == ()
        assert rule.default is ABSENT
        assert not rule.has_default
        assert not rule.optional
        assert not rule.has_wildcard

    def test_none_is_a_real_default(self) -> None:
        assert Rule(path=("a",), default=None).has_default

    def test_frozen(self) -> None:
        rule = Rule(path=("a",))
        with pytest.raises(dataclasses.FrozenInstanceError):
            rule.optional = True  # type: ignore[misc]


class TestFieldState:
    @pytest.mark.parametrize(
        "state,succeeded",
        [
            (FieldState.MATCHED, True),
            (FieldState.DEFAULTED, True),
            (FieldState.CAUGHT, True),
            (FieldState.OMITTED, False),
            (FieldState.FAILED, False),
        ],
    )
    def test_succeeded(self, state: FieldState, succeeded: bool) -> None:
        assert state.succeeded is succeeded


class TestFormatPath:
    def test_concrete_indexes(self) -> None:
        assert format_path(("items", 1, "id")) == "items.1.id"

    def test_wildcard(self) -> None:
        assert format_path(("tags", WILDCARD)) == "tags.$"

    def test_custom_separator(self) -> None:
        assert format_path(("a", "b"), separator="/") == "a/b"

    def test_custom_wildcard(self) -> None:
        assert format_path(("items", WILDCARD, "id"), separator="/", wildcard="*") == "items/*/id"


def test_catch_context_fields() -> None:
    ctx = CatchContext(key="s", value=42, type="number")
    assert (ctx.key, ctx.value, ctx.type) == ("s", 42, "number")
