"""Tests for the error taxonomy."""

import pytest

from argshape.errors import ArgshapeError, InvalidArguments, SchemaError, format_error
from argshape.services.result import FieldError, ValidationReport


class TestSchemaError:
    def test_path_prefixes_message(self) -> None:
        err = SchemaError("empty path segment", path="a..b")
        assert str(err) == "'a..b': empty path segment"
        assert err.path == "a..b"

    def test_without_path(self) -> None:
        assert str(SchemaError("bad")) == "bad"

    def test_hierarchy(self) -> None:
        assert issubclass(SchemaError, ArgshapeError)
        assert issubclass(SchemaError, ValueError)


def test_invalid_arguments_lists_keys() -> None:
    report = ValidationReport(
        ok=False,
        errors=[
            FieldError(key="a", type="string", expected=("number",)),
            FieldError(key="items.1.id", type="undefined", expected=("number",)),
        ],
    )
    err = InvalidArguments(report)
    assert err.report is report
    assert str(err) == "Invalid arguments: a, items.1.id"


@pytest.mark.parametrize(
    "exc,expected",
    [
        (SchemaError("bad"), "SchemaError: bad"),
        (KeyError(), "KeyError"),
        (ValueError("  spaced  "), "ValueError: spaced"),
    ],
)
def test_format_error(exc: BaseException, expected: str) -> None:
    assert format_error(exc) == expected
