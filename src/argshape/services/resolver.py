"""Path resolver: expand compiled paths against a run's working tree.

Rules are resolved parents first. Walking a path descends through
mapping children by key and through list elements at wildcard segments.
Every container the walk descends into is shallow-copied once, so the
caller's input is never mutated.

A subtree is skipped (no tasks, no errors) when:

- an ancestor's own rule failed or was omitted,
- an ancestor that has a rule is missing,
- the walk meets a value that is not a container of the right kind,
  including a wildcard over a non-list.

A missing intermediate that has no rule of its own is created as an
empty dict so child defaults have somewhere to land. ``finalize()``
removes it again if nothing was written into it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from argshape.domain.rules import Rule, Segment
from argshape.domain.types import ABSENT, WILDCARD
from argshape.services.compiler import RuleTable

type Concrete = tuple[str | int, ...]


@dataclass
class Task:
    """One concrete place a rule applies to."""

    rule: Rule
    container: dict[str, Any] | list[Any]
    key: str | int
    path: Concrete
    value: Any
    # ``path`` rendered in the schema's notation, e.g. ``items.1.id``.
    dotted: str


@dataclass
class WorkingTree:
    """Run-local output under construction.

    Attributes:
        root: The top-level output dict (already a copy of the input).
        blocked: Concrete paths whose subtree must not be visited.
    """

    root: dict[str, Any]
    blocked: set[Concrete] = field(default_factory=set)
    _owned: dict[int, Any] = field(default_factory=dict)
    _created: list[tuple[dict[str, Any], str, dict[str, Any]]] = field(default_factory=list)
    _removals: list[tuple[list[Any], int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._owned[id(self.root)] = self.root

    def descend(self, node: dict[str, Any] | list[Any], key: str | int) -> Any:
        """Return ``node[key]``, swapping in a private copy of containers."""
        child = node[key]  # type: ignore[index]
        if id(child) in self._owned:
            return child
        if isinstance(child, Mapping):
            child = dict(child)
        elif isinstance(child, (list, tuple)):
            child = list(child)
        else:
            return child
        node[key] = child  # type: ignore[index]
        self._owned[id(child)] = child
        return child

    def create(self, node: dict[str, Any], key: str) -> dict[str, Any]:
        """Materialize an implicit intermediate mapping."""
        child: dict[str, Any] = {}
        node[key] = child
        self._owned[id(child)] = child
        self._created.append((node, key, child))
        return child

    def write(self, task: Task, value: Any) -> None:
        if value is ABSENT:
            self.discard(task)
            return
        task.container[task.key] = value  # type: ignore[index]

    def discard(self, task: Task) -> None:
        """Drop a field from the output; list elements go at finalize time."""
        if isinstance(task.container, list):
            self._removals.append((task.container, int(task.key)))
        else:
            task.container.pop(str(task.key), None)

    def finalize(self, table: RuleTable) -> dict[str, Any]:
        """Apply deferred removals and prune what the schema never declared."""
        by_list: dict[int, tuple[list[Any], set[int]]] = {}
        for container, index in self._removals:
            by_list.setdefault(id(container), (container, set()))[1].add(index)
        for container, indexes in by_list.values():
            for index in sorted(indexes, reverse=True):
                del container[index]

        for parent, key, child in reversed(self._created):
            if not child and parent.get(key) is child:
                del parent[key]

        declared = set(table.roots)
        for key in [k for k in self.root if k not in declared]:
            del self.root[key]
        return self.root


def _children(node: Any, segment: Segment) -> list[str | int]:
    if segment is WILDCARD:
        return list(range(len(node))) if isinstance(node, list) else []
    return [segment] if isinstance(node, dict) else []  # type: ignore[list-item]


def resolve(rule: Rule, tree: WorkingTree, table: RuleTable) -> list[Task]:
    """Expand *rule* into concrete tasks over *tree*.

    Must be called in ``table.by_depth`` order, after every shallower
    rule's outcome has been written to the tree.
    """
    frontier: list[tuple[Any, Concrete]] = [(tree.root, ())]
    for depth, segment in enumerate(rule.path[:-1], start=1):
        ruled = table.has_path(rule.path[:depth])
        step: list[tuple[Any, Concrete]] = []
        for node, prefix in frontier:
            for key in _children(node, segment):
                path = (*prefix, key)
                if path in tree.blocked:
                    continue
                if isinstance(key, str) and key not in node:
                    if not ruled:
                        step.append((tree.create(node, key), path))
                    continue
                child = tree.descend(node, key)
                if isinstance(child, (dict, list)):
                    step.append((child, path))
        frontier = step

    tasks: list[Task] = []
    leaf = rule.path[-1]
    for node, prefix in frontier:
        for key in _children(node, leaf):
            value = node.get(key, ABSENT) if isinstance(node, dict) else node[key]
            path = (*prefix, key)
            tasks.append(
                Task(
                    rule=rule,
                    container=node,
                    key=key,
                    path=path,
                    value=value,
                    dotted=table.key_for(path),
                )
            )
    return tasks
