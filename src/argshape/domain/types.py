"""Type names, sentinels, and the type predicate registry.

The registry is the capability the compiler and field validator consult
to answer two questions about a runtime value: what is its type name, and
does it match a given type name. Constructors (``int``, ``dict``, user
classes) are mapped to canonical names so ``{"n": int}`` and
``{"n": "number"}`` compile to the same rule.

INVARIANT: A TypeRegistry is never mutated. ``extend()`` returns a copy.
"""

from __future__ import annotations

import datetime as _dt
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum, StrEnum
from types import MappingProxyType
from typing import Any

type Predicate = Callable[[Any], bool]


class Sentinel(Enum):
    """Marker values that can never collide with user data."""

    ABSENT = "absent"
    WILDCARD = "$"

    def __repr__(self) -> str:
        return f"<{self.name}>"


# A missing value, or a catch handler declining to recover.
ABSENT = Sentinel.ABSENT
# A path segment standing for every element of a list.
WILDCARD = Sentinel.WILDCARD


class TypeName(StrEnum):
    """Canonical type names understood by the default registry."""

    UNDEFINED = "undefined"
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    BYTES = "bytes"
    REGEXP = "regexp"
    DATE = "date"
    ARRAY = "array"
    OBJECT = "object"
    FUNCTION = "function"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


# Order matters: the first matching predicate names the value.
_BUILTIN_PREDICATES: tuple[tuple[str, Predicate], ...] = (
    (TypeName.UNDEFINED, lambda v: v is ABSENT),
    (TypeName.NULL, lambda v: v is None),
    (TypeName.BOOLEAN, lambda v: isinstance(v, bool)),
    (TypeName.NUMBER, _is_number),
    (TypeName.STRING, lambda v: isinstance(v, str)),
    (TypeName.BYTES, lambda v: isinstance(v, (bytes, bytearray))),
    (TypeName.REGEXP, lambda v: isinstance(v, re.Pattern)),
    (TypeName.DATE, lambda v: isinstance(v, _dt.date)),
    (TypeName.ARRAY, _is_array),
    (TypeName.OBJECT, lambda v: isinstance(v, Mapping)),
    (TypeName.FUNCTION, callable),
)

_BUILTIN_CONSTRUCTORS: dict[type, str] = {
    type(None): TypeName.NULL,
    bool: TypeName.BOOLEAN,
    int: TypeName.NUMBER,
    float: TypeName.NUMBER,
    str: TypeName.STRING,
    bytes: TypeName.BYTES,
    bytearray: TypeName.BYTES,
    re.Pattern: TypeName.REGEXP,
    _dt.date: TypeName.DATE,
    list: TypeName.ARRAY,
    tuple: TypeName.ARRAY,
    Sequence: TypeName.ARRAY,
    dict: TypeName.OBJECT,
    Mapping: TypeName.OBJECT,
}


@dataclass(frozen=True)
class TypeRegistry:
    """Immutable registry of named type predicates and constructor aliases.

    Attributes:
        predicates: Ordered ``(name, predicate)`` pairs. The first
            predicate accepting a value supplies its type name.
        constructors: Constructor to canonical name aliases.
    """

    predicates: tuple[tuple[str, Predicate], ...] = _BUILTIN_PREDICATES
    constructors: Mapping[type, str] = field(
        default_factory=lambda: MappingProxyType(dict(_BUILTIN_CONSTRUCTORS))
    )

    def type_name(self, value: Any) -> str:
        """Return the canonical type name of *value*.

        Values no predicate accepts are named after their class.
        """
        for name, predicate in self.predicates:
            if predicate(value):
                return name
        return type(value).__name__

    def matches(self, value: Any, name: str) -> bool:
        """Check whether *value* is of the type called *name*.

        Unregistered names are compared against the class names along
        the value's MRO, so user classes work without registration.
        """
        for registered, predicate in self.predicates:
            if registered == name:
                return bool(predicate(value))
        return any(cls.__name__ == name for cls in type(value).__mro__)

    def name_for(self, constructor: type) -> str:
        """Map a constructor reference to its canonical type name."""
        for cls in constructor.__mro__:
            if cls in self.constructors:
                return self.constructors[cls]
        return constructor.__name__

    def knows(self, name: str) -> bool:
        """True if *name* has a registered predicate."""
        return any(registered == name for registered, _ in self.predicates)

    def extend(self, name: str, predicate: Predicate, *constructors: type) -> TypeRegistry:
        """Return a new registry with *name* added (or replaced).

        A replaced name keeps its position; a new name is appended, so
        existing names keep naming precedence in ``type_name()``.
        """
        if self.knows(name):
            predicates = tuple(
                (n, predicate if n == name else p) for n, p in self.predicates
            )
        else:
            predicates = (*self.predicates, (name, predicate))
        aliases = dict(self.constructors)
        for ctor in constructors:
            aliases[ctor] = name
        return TypeRegistry(predicates=predicates, constructors=MappingProxyType(aliases))


DEFAULT_TYPES = TypeRegistry()
