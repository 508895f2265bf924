"""argshape: declarative argument validation and normalization.

Compile a schema once, then normalize positional tuples, lists, or
mappings into one validated dict::

    import argshape

    v = argshape.compile({"name": "string", "size": "number=10", "tags.$": "string"})
    v.parse(("box",))  # {"name": "box", "size": 10}
"""

from __future__ import annotations

from argshape.config.models import CompileOptions
from argshape.domain.rules import CatchContext, FieldState, Rule
from argshape.domain.types import ABSENT, DEFAULT_TYPES, WILDCARD, TypeName, TypeRegistry
from argshape.errors import ArgshapeError, InvalidArguments, SchemaError
from argshape.services.result import FieldError, ValidationReport
from argshape.services.validator import Validator, WrappedHandler, compile

__version__ = "0.4.0"

__all__ = [
    "ABSENT",
    "DEFAULT_TYPES",
    "WILDCARD",
    "ArgshapeError",
    "CatchContext",
    "CompileOptions",
    "FieldError",
    "FieldState",
    "InvalidArguments",
    "Rule",
    "SchemaError",
    "TypeName",
    "TypeRegistry",
    "ValidationReport",
    "Validator",
    "WrappedHandler",
    "__version__",
    "compile",
]
