"""Tests for CompileOptions."""

import pytest
from pydantic import ValidationError

from argshape.config.models import CompileOptions


class TestCompileOptions:
    def test_defaults(self) -> None:
        opts = CompileOptions()
        assert opts.separator == "."
        assert opts.wildcard == "$"

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            CompileOptions().separator = "/"  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"separator": ""}, "separator must not be empty"),
            ({"wildcard": ""}, "wildcard must not be empty"),
            ({"separator": ".", "wildcard": "$."}, "must not contain the separator"),
        ],
    )
    def test_invalid_markers(self, kwargs: dict[str, str], message: str) -> None:
        with pytest.raises(ValidationError, match=message):
            CompileOptions(**kwargs)

    def test_multi_character_markers(self) -> None:
        opts = CompileOptions(separator="::", wildcard="*")
        assert opts.separator == "::"
