"""Pattern grammar: turn one schema pattern into a Rule.

Accepted pattern forms:

- Shorthand string ``name[|name...][?|=default]``. ``?`` marks the field
  optional, ``=literal`` supplies a default. The two trailing modifiers
  are mutually exclusive.
- A constructor such as ``int`` or a user class, mapped through the
  type registry.
- A list or tuple of names/constructors, read as a union.
- A compiled regex, matched against ``str(value)`` of any type.
- A longhand mapping with ``type``, ``validate``, ``default``,
  ``optional``, ``catch`` and ``transform`` keys.

Malformed patterns raise SchemaError at compile time.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from argshape.domain.rules import Rule
from argshape.domain.types import ABSENT, DEFAULT_TYPES, TypeRegistry
from argshape.errors import SchemaError

LONGHAND_KEYS = frozenset({"type", "validate", "default", "optional", "catch", "transform"})

_TYPE_NAME = re.compile(r"^[A-Za-z_][\w-]*$")
_INTEGER = re.compile(r"^[+-]?\d+$")
_FLOAT = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")


def parse_literal(text: str) -> Any:
    """Parse a shorthand default into the best matching primitive.

    Examples:
        >>> parse_literal("true")
        True
        >>> parse_literal("5")
        5
        >>> parse_literal("0.5")
        0.5
        >>> parse_literal("'5'")
        '5'
        >>> parse_literal("hello")
        'hello'
    """
    s = text.strip()
    if s in ("true", "false"):
        return s == "true"
    if s in ("null", "None"):
        return None
    if _INTEGER.match(s):
        return int(s)
    if _FLOAT.match(s):
        return float(s)
    if len(s) >= 2 and s[0] == s[-1] and s[0] in "'\"":
        return s[1:-1]
    return s


def _split_names(body: str, path: str | None) -> tuple[str, ...]:
    if not body.strip():
        return ()
    names: list[str] = []
    for raw in body.split("|"):
        name = raw.strip()
        if not _TYPE_NAME.match(name):
            raise SchemaError(f"invalid type name {name!r}", path=path)
        if name not in names:
            names.append(name)
    return tuple(names)


def parse_shorthand(text: str, *, path: str | None = None) -> Rule:
    """Parse ``name[|name...][?|=default]`` into a Rule with an empty path."""
    body, has_default, literal = text.partition("=")
    optional = False
    if body.rstrip().endswith("?"):
        if has_default:
            raise SchemaError("'?' and '=' modifiers are mutually exclusive", path=path)
        optional = True
        body = body.rstrip()[:-1]
    default = parse_literal(literal) if has_default else ABSENT
    return Rule(path=(), types=_split_names(body, path), default=default, optional=optional)


def _union(items: list[Any] | tuple[Any, ...], registry: TypeRegistry, path: str | None) -> Rule:
    names: list[str] = []
    for item in items:
        if isinstance(item, type):
            name = registry.name_for(item)
        elif isinstance(item, str):
            parsed = _split_names(item, path)
            if len(parsed) != 1:
                raise SchemaError(f"union member {item!r} must be one type name", path=path)
            name = parsed[0]
        else:
            raise SchemaError(
                f"union members must be names or classes, got {type(item).__name__}",
                path=path,
            )
        if name not in names:
            names.append(name)
    return Rule(path=(), types=tuple(names))


def _check_callable(spec: Mapping[str, Any], key: str, path: str | None) -> Any:
    fn = spec.get(key)
    if fn is not None and not callable(fn):
        raise SchemaError(f"{key!r} must be callable, got {type(fn).__name__}", path=path)
    return fn


def _parse_longhand(
    spec: Mapping[str, Any], registry: TypeRegistry, path: str | None
) -> Rule:
    unknown = sorted(str(k) for k in spec if k not in LONGHAND_KEYS)
    if unknown:
        raise SchemaError(f"unknown rule option(s): {', '.join(unknown)}", path=path)

    type_spec = spec.get("type")
    if isinstance(type_spec, Mapping):
        raise SchemaError("'type' cannot be a nested rule", path=path)
    base = parse_pattern(type_spec, types=registry, path=path)

    validate = spec.get("validate")
    if validate is not None and not (callable(validate) or isinstance(validate, re.Pattern)):
        raise SchemaError(
            f"'validate' must be callable or a compiled regex, got {type(validate).__name__}",
            path=path,
        )

    return replace(
        base,
        validate=validate if validate is not None else base.validate,
        default=spec["default"] if "default" in spec else base.default,
        optional=bool(spec["optional"]) if "optional" in spec else base.optional,
        catch=_check_callable(spec, "catch", path),
        transform=_check_callable(spec, "transform", path),
    )


def parse_pattern(
    spec: Any,
    *,
    types: TypeRegistry = DEFAULT_TYPES,
    path: str | None = None,
) -> Rule:
    """Normalize any accepted pattern form into a Rule with an empty path.

    Args:
        spec: The pattern as written in the schema fragment.
        types: Registry used to resolve constructor references.
        path: Dotted path of the field, only used in error messages.

    Raises:
        SchemaError: If the pattern is malformed.
    """
    if spec is None:
        return Rule(path=())
    if isinstance(spec, str):
        return parse_shorthand(spec, path=path)
    if isinstance(spec, type):
        return Rule(path=(), types=(types.name_for(spec),))
    if isinstance(spec, re.Pattern):
        return Rule(path=(), validate=spec)
    if isinstance(spec, (list, tuple)):
        return _union(spec, types, path)
    if isinstance(spec, Mapping):
        return _parse_longhand(spec, types, path)
    raise SchemaError(f"unsupported pattern of type {type(spec).__name__}", path=path)
