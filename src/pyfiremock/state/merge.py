"""Deterministic write merge policy.

``set(merge=True)`` and ``update()`` differ on purpose:

* :func:`shallow_merge` replaces whole top-level values.
* :func:`apply_field_updates` patches individual leaves addressed by
  dotted paths and keeps every sibling at every level.

All functions return fresh structures and never mutate their inputs.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from pyfiremock.field_path import FieldKey, parse_field_path


def shallow_merge(current: Mapping[str, Any] | None, incoming: Mapping[str, Any]) -> dict[str, Any]:
    """Overwrite top-level keys of *current* (absent counts as empty)."""
    merged: dict[str, Any] = copy.deepcopy(dict(current)) if current is not None else {}
    merged.update(copy.deepcopy(dict(incoming)))
    return merged


def apply_field_updates(current: Mapping[str, Any], updates: Mapping[FieldKey, Any]) -> dict[str, Any]:
    """Apply dot-path *updates* to a copy of *current*.

    Intermediate components that are missing or not mappings are
    replaced by empty dicts; only the addressed leaf is overwritten.
    """
    patched: dict[str, Any] = copy.deepcopy(dict(current))
    for key, value in updates.items():
        parts = parse_field_path(key)
        target = patched
        for part in parts[:-1]:
            child = target.get(part)
            if not isinstance(child, dict):
                child = {}
                target[part] = child
            target = child
        target[parts[-1]] = copy.deepcopy(value)
    return patched


def read_field(data: Mapping[str, Any] | None, key: FieldKey) -> Any:
    """Walk *data* along *key*; ``None`` when any component is missing."""
    value: Any = data
    for part in parse_field_path(key):
        if not isinstance(value, Mapping) or part not in value:
            return None
        value = value[part]
    return value


def same_value(left: Any, right: Any) -> bool:
    """Structural equality that also requires matching types at every level.

    ``1``, ``1.0`` and ``True`` compare equal in Python but are distinct
    stored values here.
    """
    if type(left) is not type(right):
        return False
    if isinstance(left, Mapping):
        if left.keys() != right.keys():
            return False
        return all(same_value(left[key], right[key]) for key in left)
    if isinstance(left, (list, tuple)):
        if len(left) != len(right):
            return False
        return all(same_value(a, b) for a, b in zip(left, right))
    return bool(left == right)


def is_change(before: Mapping[str, Any] | None, after: Mapping[str, Any] | None) -> bool:
    """Whether a write moved the stored value (existence, content or value types)."""
    if before is None or after is None:
        return before is not after
    return not same_value(dict(before), dict(after))
