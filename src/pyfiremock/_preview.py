"""One-line summaries of stored documents for DEBUG logs.

Documents written in tests can be large (bulk fixtures, long arrays).
The summary keeps the first few entries of every mapping and array,
shortens long strings and collapses deep nesting, so a single write
never floods the log.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PreviewLimits:
    max_string: int = 256
    max_entries: int = 20
    max_depth: int = 4


def summarize_document(data: Mapping[str, Any] | None, limits: PreviewLimits | None = None) -> str:
    """Render *data* as a bounded single-line string (``<absent>`` for ``None``)."""
    if data is None:
        return "<absent>"
    return _render(data, limits or PreviewLimits(), 0)


def _render(value: Any, limits: PreviewLimits, depth: int) -> str:
    if isinstance(value, Mapping):
        if depth >= limits.max_depth:
            return f"{{…{len(value)} keys}}"
        entries = list(value.items())[: limits.max_entries]
        shown = [f"{key}={_render(item, limits, depth + 1)}" for key, item in entries]
        return "{" + ", ".join(shown + _overflow(len(value), limits)) + "}"

    if isinstance(value, (list, tuple)):
        if depth >= limits.max_depth:
            return f"[…{len(value)} items]"
        shown = [_render(item, limits, depth + 1) for item in value[: limits.max_entries]]
        return "[" + ", ".join(shown + _overflow(len(value), limits)) + "]"

    if isinstance(value, str) and len(value) > limits.max_string:
        return f"{value[: limits.max_string]!r}+{len(value) - limits.max_string}ch"

    return repr(value)


def _overflow(total: int, limits: PreviewLimits) -> list[str]:
    hidden = total - limits.max_entries
    return [f"+{hidden} more"] if hidden > 0 else []
