"""Compiled validators and their entry points.

``compile()`` turns schema fragments into an immutable Validator. Each
``check``/``parse``/``wrap`` call allocates its own ValidationRun, so
one Validator can serve any number of concurrent callers.

INVARIANT: Every field is evaluated before the invalid path is taken.
Callers see all failures in one report, never just the first.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from argshape.config.models import CompileOptions
from argshape.domain.rules import FieldState
from argshape.domain.types import ABSENT, DEFAULT_TYPES, TypeRegistry
from argshape.errors import InvalidArguments
from argshape.services.compiler import RuleTable, compile_schema
from argshape.services.field import FieldOutcome, validate_field
from argshape.services.normalizer import normalize_input
from argshape.services.resolver import WorkingTree, resolve
from argshape.services.result import FieldError, ValidationReport

logger = logging.getLogger(__name__)

type OnInvalid = Callable[[ValidationReport], Any]


@dataclass
class ValidationRun:
    """Ephemeral state of one validation call. Never shared."""

    validator: Validator
    tree: WorkingTree
    outcomes: list[FieldOutcome] = field(default_factory=list)

    def execute(self) -> ValidationReport:
        table = self.validator.rules
        types = self.validator.types
        passed: dict[str, Any] = {}
        failed: dict[str, Any] = {}
        errors: list[FieldError] = []

        for rule in table.by_depth:
            for task in resolve(rule, self.tree, table):
                outcome = validate_field(rule, task.dotted, task.value, types=types)
                self.outcomes.append(outcome)
                if outcome.state.succeeded:
                    self.tree.write(task, outcome.value)
                    if outcome.value is not ABSENT:
                        passed[outcome.key] = outcome.value
                    continue
                self.tree.blocked.add(task.path)
                self.tree.discard(task)
                if outcome.state is FieldState.FAILED and outcome.error is not None:
                    failed[outcome.key] = outcome.value
                    errors.append(outcome.error)

        value = self.tree.finalize(table)
        logger.debug(
            "Validated %d field(s): %d passed, %d failed",
            len(self.outcomes),
            len(passed),
            len(failed),
        )
        return ValidationReport(
            ok=not errors, value=value, passed=passed, failed=failed, errors=errors
        )


class Validator:
    """A compiled schema. Immutable and reusable.

    Usage::

        v = compile({"a": "number", "b": "string=x"})
        v.parse((1,))                    # {"a": 1, "b": "x"}
        v.parse({"a": "nope"}, on_invalid=print)

        @v.wrap
        def handler(args): ...
    """

    __slots__ = ("_options", "_rules", "_types")

    def __init__(
        self,
        rules: RuleTable,
        *,
        types: TypeRegistry = DEFAULT_TYPES,
        options: CompileOptions | None = None,
    ) -> None:
        self._rules = rules
        self._types = types
        self._options = options or CompileOptions()

    def __repr__(self) -> str:
        return f"Validator({list(self._rules)!r})"

    @property
    def rules(self) -> RuleTable:
        return self._rules

    @property
    def types(self) -> TypeRegistry:
        return self._types

    @property
    def options(self) -> CompileOptions:
        return self._options

    def check(self, data: Any, keywords: Mapping[str, Any] | None = None) -> ValidationReport:
        """Validate *data* and return the full report. Never calls back."""
        candidate = normalize_input(data, self._rules.top_level_keys, keywords)
        run = ValidationRun(validator=self, tree=WorkingTree(root=candidate))
        return run.execute()

    def parse(self, data: Any, on_invalid: OnInvalid | None = None) -> dict[str, Any]:
        """Normalize and validate *data*, returning the output dict.

        When a field fails, *on_invalid* is called once with the report
        and the partial output (passed fields only) is still returned.

        Raises:
            InvalidArguments: If a field failed and no *on_invalid* was given.
        """
        report = self.check(data)
        if not report.ok:
            if on_invalid is None:
                raise InvalidArguments(report)
            on_invalid(report)
        return report.value

    def wrap[R](
        self, handler: Callable[..., R], on_invalid: OnInvalid | None = None
    ) -> WrappedHandler[R]:
        """Return a callable validating its arguments before calling *handler*.

        Also usable as a decorator, and on methods: the receiver is
        passed through and never validated.
        """
        return WrappedHandler(self, handler, on_invalid)


class WrappedHandler[R]:
    """Callable returned by :meth:`Validator.wrap`.

    Positional arguments map onto the schema's top-level keys, keyword
    arguments by name. The handler receives the normalized dict. When
    looked up on an instance it binds like a function, so
    ``handler(self, args)`` sees the original receiver.
    """

    def __init__(
        self,
        validator: Validator,
        handler: Callable[..., R],
        on_invalid: OnInvalid | None = None,
    ) -> None:
        self._validator = validator
        self._handler = handler
        self._on_invalid = on_invalid
        functools.update_wrapper(self, handler)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._invoke((), args, kwargs)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return functools.partial(self._bound_call, instance)

    def _bound_call(self, receiver: Any, *args: Any, **kwargs: Any) -> Any:
        return self._invoke((receiver,), args, kwargs)

    def _invoke(
        self, receiver: tuple[Any, ...], args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> Any:
        report = self._validator.check(args, kwargs)
        if report.ok:
            return self._handler(*receiver, report.value)
        if self._on_invalid is None:
            raise InvalidArguments(report)
        return self._on_invalid(report)


def compile(
    schema: Any,
    *,
    types: TypeRegistry = DEFAULT_TYPES,
    options: CompileOptions | None = None,
) -> Validator:
    """Compile schema fragments into a reusable :class:`Validator`.

    Args:
        schema: A mapping of dotted path to pattern, or a list of such
            mappings merged in order (later wins on identical paths).
        types: Type capability; extend :data:`DEFAULT_TYPES` for custom names.
        options: Path separator and wildcard marker.

    Raises:
        SchemaError: If any fragment, path, or pattern is malformed.
    """
    rules = compile_schema(schema, types=types, options=options)
    return Validator(rules, types=types, options=options)
