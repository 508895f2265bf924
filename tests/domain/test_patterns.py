"""Tests for the pattern grammar."""

import re

import pytest

from argshape.domain.patterns import parse_literal, parse_pattern, parse_shorthand
from argshape.domain.types import ABSENT, DEFAULT_TYPES
from argshape.errors import SchemaError


class Point:
    pass


class TestParseLiteral:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("true", True),
            ("false", False),
            ("5", 5),
            ("-3", -3),
            ("0.25", 0.25),
            ("1e3", 1000.0),
            ("null", None),
            ("'5'", "5"),
            ('"quoted"', "quoted"),
            ("hello", "hello"),
            ("", ""),
        ],
    )
    def test_best_matching_primitive(self, text: str, expected: object) -> None:
        result = parse_literal(text)
        assert result == expected
        assert type(result) is type(expected)


class TestShorthand:
    def test_single_type(self) -> None:
        rule = parse_shorthand("number")
        assert rule.types == ("number",)
        assert rule.optional is False
        assert rule.default is ABSENT

    def test_union(self) -> None:
        assert parse_shorthand("number|boolean").types == ("number", "boolean")

    def test_union_whitespace_and_duplicates(self) -> None:
        assert parse_shorthand(" number | string |number").types == ("number", "string")

    def test_optional(self) -> None:
        rule = parse_shorthand("string?")
        assert rule.types == ("string",)
        assert rule.optional is True

    def test_default(self) -> None:
        rule = parse_shorthand("number=5")
        assert rule.default == 5
        assert rule.has_default
        assert rule.optional is False

    def test_default_keeps_everything_after_first_equals(self) -> None:
        assert parse_shorthand("string=a=b").default == "a=b"

    def test_empty_means_any(self) -> None:
        assert parse_shorthand("").types == ()

    def test_bare_question_mark_is_optional_any(self) -> None:
        rule = parse_shorthand("?")
        assert rule.types == ()
        assert rule.optional is True

    def test_both_modifiers_rejected(self) -> None:
        with pytest.raises(SchemaError, match="mutually exclusive"):
            parse_shorthand("number?=5", path="n")

    @pytest.mark.parametrize("text", ["number|", "|number", "num ber", "number??", "1abc"])
    def test_malformed_names_rejected(self, text: str) -> None:
        with pytest.raises(SchemaError):
            parse_shorthand(text)


class TestParsePattern:
    def test_none_is_any(self) -> None:
        assert parse_pattern(None).types == ()

    def test_constructor(self) -> None:
        assert parse_pattern(int).types == ("number",)
        assert parse_pattern(dict).types == ("object",)

    def test_user_class(self) -> None:
        assert parse_pattern(Point).types == ("Point",)

    def test_constructor_through_custom_registry(self) -> None:
        registry = DEFAULT_TYPES.extend("point", lambda v: isinstance(v, Point), Point)
        assert parse_pattern(Point, types=registry).types == ("point",)

    def test_union_of_names_and_constructors(self) -> None:
        assert parse_pattern([int, "string", float]).types == ("number", "string")

    def test_union_rejects_modifiers(self) -> None:
        with pytest.raises(SchemaError):
            parse_pattern(["number?"])

    def test_union_rejects_other_members(self) -> None:
        with pytest.raises(SchemaError):
            parse_pattern([1, 2])

    def test_regex_becomes_validate(self) -> None:
        pattern = re.compile(r"^\d+$")
        rule = parse_pattern(pattern)
        assert rule.types == ()
        assert rule.validate is pattern

    def test_unsupported_pattern(self) -> None:
        with pytest.raises(SchemaError, match="unsupported pattern"):
            parse_pattern(42, path="x")


class TestLonghand:
    def test_all_options(self) -> None:
        def validate(v: object, t: str) -> bool:
            return True

        def catch(ctx: object) -> str:
            return "X"

        def transform(v: object, t: str) -> object:
            return v

        rule = parse_pattern(
            {
                "type": "string",
                "validate": validate,
                "default": None,
                "optional": True,
                "catch": catch,
                "transform": transform,
            }
        )
        assert rule.types == ("string",)
        assert rule.validate is validate
        assert rule.has_default and rule.default is None
        assert rule.optional is True
        assert rule.catch is catch
        assert rule.transform is transform

    def test_type_shorthand_modifiers_apply(self) -> None:
        rule = parse_pattern({"type": "number=3"})
        assert rule.default == 3

    def test_explicit_option_overrides_shorthand(self) -> None:
        rule = parse_pattern({"type": "number=3", "default": 7})
        assert rule.default == 7
        rule = parse_pattern({"type": "number?", "optional": False})
        assert rule.optional is False

    def test_type_may_be_constructor_or_list(self) -> None:
        assert parse_pattern({"type": int}).types == ("number",)
        assert parse_pattern({"type": [int, str]}).types == ("number", "string")

    def test_no_type_means_any(self) -> None:
        assert parse_pattern({"validate": lambda v, t: True}).types == ()

    def test_unknown_option_rejected(self) -> None:
        with pytest.raises(SchemaError, match="unknown rule option"):
            parse_pattern({"type": "string", "required": True})

    def test_nested_type_rejected(self) -> None:
        with pytest.raises(SchemaError):
            parse_pattern({"type": {"type": "string"}})

    def test_non_callable_callbacks_rejected(self) -> None:
        with pytest.raises(SchemaError, match="'catch' must be callable"):
            parse_pattern({"type": "string", "catch": "X"})
        with pytest.raises(SchemaError, match="'validate'"):
            parse_pattern({"type": "string", "validate": "^x$"})

    def test_error_carries_path(self) -> None:
        with pytest.raises(SchemaError) as excinfo:
            parse_pattern({"bogus": 1}, path="opts.size")
        assert excinfo.value.path == "opts.size"
