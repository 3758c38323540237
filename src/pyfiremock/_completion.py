"""Settled awaitables returned by store operations.

Every store operation performs its in-memory effect (and listener
fan-out) at call time. The caller receives a :class:`Completion` that is
already settled: awaiting it returns the result or raises the stored
error. No event loop is needed to create one, so operations can also be
driven from synchronous code via :meth:`Completion.result`.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Completion(Generic[T]):
    """An awaitable holding either a result or an exception."""

    __slots__ = ("_result", "_error")

    def __init__(self, result: T | None = None, *, error: BaseException | None = None) -> None:
        self._result = result
        self._error = error

    @classmethod
    def resolved(cls, result: T | None = None) -> Completion[T]:
        return cls(result)

    @classmethod
    def failed(cls, error: BaseException) -> Completion[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Whether the operation succeeded."""
        return self._error is None

    def exception(self) -> BaseException | None:
        return self._error

    def result(self) -> T:
        """Return the result, raising the stored error if the operation failed."""
        if self._error is not None:
            raise self._error
        return self._result  # type: ignore[return-value]

    async def _settle(self) -> T:
        return self.result()

    def __await__(self) -> Generator[Any, None, T]:
        return self._settle().__await__()

    def __repr__(self) -> str:
        if self._error is not None:
            return f"<Completion failed={self._error!r}>"
        return f"<Completion result={self._result!r}>"
