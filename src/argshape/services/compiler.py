"""Schema compiler: fragments in, flat RuleTable out.

Fragments are merged in order. A later fragment's rule for an identical
path fully replaces the earlier one; sibling paths never interact.
Compilation is pure: the same fragments always produce the same table.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import Any

from argshape.config.models import CompileOptions
from argshape.domain.patterns import parse_pattern
from argshape.domain.rules import Rule, Segment, format_path
from argshape.domain.types import DEFAULT_TYPES, WILDCARD, TypeRegistry
from argshape.errors import SchemaError

logger = logging.getLogger(__name__)


class RuleTable(Mapping[str, Rule]):
    """Read-only map of path key to Rule, in declaration order.

    Keys are written with the separator and wildcard the schema used.
    """

    def __init__(self, rules: Mapping[str, Rule], options: CompileOptions | None = None) -> None:
        self._options = options or CompileOptions()
        self._rules: Mapping[str, Rule] = MappingProxyType(dict(rules))
        self._paths = frozenset(rule.path for rule in self._rules.values())
        # sorted() is stable, so siblings keep declaration order.
        self._by_depth = tuple(sorted(self._rules.values(), key=lambda r: r.depth))
        self._top_level = tuple(
            str(rule.path[0]) for rule in self._rules.values() if rule.depth == 1
        )
        roots: dict[str, None] = {}
        for rule in self._rules.values():
            roots.setdefault(str(rule.path[0]), None)
        self._roots = tuple(roots)

    def __getitem__(self, key: str) -> Rule:
        return self._rules[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleTable({list(self._rules)!r})"

    @property
    def options(self) -> CompileOptions:
        return self._options

    def key_for(self, path: tuple[Segment | int, ...]) -> str:
        """Render a rule or concrete path in the schema's own notation."""
        return format_path(path, self._options.separator, self._options.wildcard)

    @property
    def by_depth(self) -> tuple[Rule, ...]:
        """Rules ordered parents first."""
        return self._by_depth

    @property
    def top_level_keys(self) -> tuple[str, ...]:
        """Keys that take part in positional mapping, in declaration order."""
        return self._top_level

    @property
    def roots(self) -> tuple[str, ...]:
        """First segment of every declared path, in first-seen order."""
        return self._roots

    def has_path(self, path: tuple[Segment, ...]) -> bool:
        return path in self._paths


def split_path(raw: Any, options: CompileOptions) -> tuple[Segment, ...]:
    """Split a dotted path into segments, marking wildcard segments.

    Raises:
        SchemaError: On non-string keys, empty segments, or a leading wildcard.
    """
    if not isinstance(raw, str):
        raise SchemaError(f"path must be a string, got {type(raw).__name__}", path=repr(raw))
    parts = raw.split(options.separator)
    if any(not part for part in parts):
        raise SchemaError("empty path segment", path=raw)
    segments = tuple(WILDCARD if part == options.wildcard else part for part in parts)
    if segments[0] is WILDCARD:
        raise SchemaError("path cannot start with a wildcard", path=raw)
    return segments


def _fragments(schema: Any) -> list[Mapping[Any, Any]]:
    if isinstance(schema, Mapping):
        return [schema]
    if isinstance(schema, (list, tuple)):
        for index, fragment in enumerate(schema):
            if not isinstance(fragment, Mapping):
                raise SchemaError(
                    f"schema fragment #{index} must be a mapping, got {type(fragment).__name__}"
                )
        return list(schema)
    raise SchemaError(f"schema must be a mapping or a list of mappings, got {type(schema).__name__}")


def compile_schema(
    schema: Any,
    *,
    types: TypeRegistry = DEFAULT_TYPES,
    options: CompileOptions | None = None,
) -> RuleTable:
    """Compile one fragment or an ordered list of fragments into a RuleTable.

    Args:
        schema: A mapping of dotted path to pattern, or a list of them.
        types: Registry resolving constructor references.
        options: Path separator and wildcard marker.

    Raises:
        SchemaError: On any malformed fragment, path, or pattern.
    """
    opts = options or CompileOptions()
    rules: dict[str, Rule] = {}
    fragments = _fragments(schema)
    for fragment in fragments:
        for raw_path, spec in fragment.items():
            path = split_path(raw_path, opts)
            rule = replace(parse_pattern(spec, types=types, path=raw_path), path=path)
            key = format_path(path, opts.separator, opts.wildcard)
            if key in rules:
                logger.debug("Rule for %s replaced by a later fragment", key)
            rules[key] = rule
    logger.debug("Compiled %d rule(s) from %d fragment(s)", len(rules), len(fragments))
    return RuleTable(rules, opts)
