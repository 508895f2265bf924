"""Pydantic configuration models with code-baked defaults."""

from __future__ import annotations

from pydantic import BaseModel, model_validator


class CompileOptions(BaseModel):
    """How schema paths are written.

    ``"items.$.id"`` splits on ``separator`` and treats a ``wildcard``
    segment as "every element of this list".
    """

    model_config = {"frozen": True}

    separator: str = "."
    wildcard: str = "$"

    @model_validator(mode="after")
    def _check_markers(self) -> CompileOptions:
        if not self.separator:
            raise ValueError("separator must not be empty")
        if not self.wildcard:
            raise ValueError("wildcard must not be empty")
        if self.separator in self.wildcard:
            raise ValueError("wildcard must not contain the separator")
        return self
