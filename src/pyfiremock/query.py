"""Query surface.

Filtering, ordering and pagination are not emulated. Every query
builder raises :class:`~pyfiremock.exceptions.FiremockNotImplementedError`
so tests relying on them fail loudly instead of silently seeing
unfiltered data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NoReturn

from pyfiremock.exceptions import FiremockNotImplementedError

if TYPE_CHECKING:
    from pyfiremock.firestore import MockFirestore


def _unsupported(operation: str) -> NoReturn:
    raise FiremockNotImplementedError(f"Query.{operation}() is not supported by the emulator")


class Query:
    def __init__(self, firestore: MockFirestore) -> None:
        self.firestore = firestore

    def where(self, field_path: Any, op_str: str, value: Any) -> Query:
        _unsupported("where")

    def order_by(self, field_path: Any, direction: str = "asc") -> Query:
        _unsupported("order_by")

    def limit(self, limit: int) -> Query:
        _unsupported("limit")

    def limit_to_last(self, limit: int) -> Query:
        _unsupported("limit_to_last")

    def start_at(self, *field_values: Any) -> Query:
        _unsupported("start_at")

    def start_after(self, *field_values: Any) -> Query:
        _unsupported("start_after")

    def end_before(self, *field_values: Any) -> Query:
        _unsupported("end_before")

    def end_at(self, *field_values: Any) -> Query:
        _unsupported("end_at")
