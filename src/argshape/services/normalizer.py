"""Input normalizer: every accepted input shape becomes one keyed dict.

Positional values map onto the schema's top-level keys in declaration
order. Keys that only exist as dotted paths take no part. Missing
positions stay unset; extra positions are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def normalize_input(
    data: Any,
    positional_keys: Sequence[str],
    keywords: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Convert *data* into a fresh keyed dict.

    Args:
        data: A mapping (taken as-is), or a tuple/list of positional values.
        positional_keys: Top-level keys in declaration order.
        keywords: Keyword arguments merged over the positional mapping.

    Raises:
        TypeError: If *data* is neither a mapping nor a tuple/list.
    """
    if isinstance(data, Mapping):
        out = dict(data)
    elif isinstance(data, (list, tuple)):
        out = dict(zip(positional_keys, data, strict=False))
    else:
        raise TypeError(
            f"expected a mapping or a sequence of arguments, got {type(data).__name__}"
        )
    if keywords:
        out.update(keywords)
    return out
