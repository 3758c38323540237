"""Snapshot listener records and call-shape normalization.

``on_snapshot`` accepts several call shapes. They are all reduced to a
single :class:`Observer` by :func:`parse_listener_args` before any
subscription side effect happens.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pyfiremock.exceptions import FiremockInvalidArgumentError
from pyfiremock.models.options import SnapshotListenOptions


class SnapshotEvent(StrEnum):
    NEXT = "snapshot:next"
    COMPLETE = "snapshot:complete"


@dataclass(frozen=True)
class Observer:
    """Canonical listener record."""

    next: Callable[[Any], None]
    error: Callable[[BaseException], None] | None = None
    complete: Callable[[], None] | None = None


@dataclass(frozen=True)
class DocumentChange:
    """A write that landed at ``path``; ``data`` is the stored value after it."""

    path: str
    data: dict[str, Any] | None


def _is_observer_like(value: Any) -> bool:
    if isinstance(value, Mapping):
        return "next" in value or "error" in value or "complete" in value
    return not callable(value) and callable(getattr(value, "next", None))


def _observer_from(value: Any) -> Observer:
    if isinstance(value, Mapping):
        on_next = value.get("next")
        on_error = value.get("error")
        on_complete = value.get("complete")
    else:
        on_next = getattr(value, "next", None)
        on_error = getattr(value, "error", None)
        on_complete = getattr(value, "complete", None)
    return _build(on_next, on_error, on_complete)


def _build(on_next: Any, on_error: Any = None, on_complete: Any = None) -> Observer:
    if not callable(on_next):
        raise FiremockInvalidArgumentError("Snapshot listener requires a callable 'next'")
    if on_error is not None and not callable(on_error):
        raise FiremockInvalidArgumentError("Snapshot listener 'error' must be callable")
    if on_complete is not None and not callable(on_complete):
        raise FiremockInvalidArgumentError("Snapshot listener 'complete' must be callable")
    return Observer(next=on_next, error=on_error, complete=on_complete)


def _is_listen_options(value: Any) -> bool:
    return isinstance(value, (SnapshotListenOptions, Mapping)) and not _is_observer_like(value)


def parse_listener_args(args: tuple[Any, ...]) -> Observer:
    """Normalize ``on_snapshot`` positional arguments into an :class:`Observer`.

    Accepted shapes::

        (on_next)
        (on_next, on_error, on_complete)
        (observer)
        (options, on_next[, on_error[, on_complete]])
        (options, observer)

    *observer* is a mapping with ``next``/``error``/``complete`` keys or
    an object with those attributes. *options* is ignored.
    """
    if not args:
        raise FiremockInvalidArgumentError("on_snapshot requires a listener")

    first, rest = args[0], args[1:]

    if callable(first) and not _is_observer_like(first):
        if len(rest) > 2:
            raise FiremockInvalidArgumentError("on_snapshot accepts at most three callbacks")
        return _build(first, *rest)

    if _is_listen_options(first) and rest:
        second, tail = rest[0], rest[1:]
        if _is_observer_like(second):
            if tail:
                raise FiremockInvalidArgumentError("Unexpected arguments after observer")
            return _observer_from(second)
        if len(tail) > 2:
            raise FiremockInvalidArgumentError("on_snapshot accepts at most three callbacks")
        return _build(second, *tail)

    if rest:
        raise FiremockInvalidArgumentError("Unexpected arguments after observer")
    return _observer_from(first)
