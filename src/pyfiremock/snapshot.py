"""Point-in-time views of documents and collections."""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

from pyfiremock.field_path import FieldKey
from pyfiremock.models import LOCAL_METADATA, SnapshotMetadata, SnapshotOptions, coerce_model
from pyfiremock.state.merge import read_field, same_value

if TYPE_CHECKING:
    from pyfiremock.collection import CollectionReference
    from pyfiremock.document import DocumentReference
    from pyfiremock.firestore import MockFirestore


class DocumentSnapshot:
    """Immutable view of one document at read time.

    The raw stored data is copied when the snapshot is taken, so later
    writes never show through. :meth:`data` runs the reference's
    converter on every call; :meth:`get` reads raw stored fields.
    """

    __slots__ = ("_ref", "_data", "_metadata")

    def __init__(
        self,
        ref: DocumentReference,
        data: dict[str, Any] | None,
        *,
        metadata: SnapshotMetadata = LOCAL_METADATA,
    ) -> None:
        self._ref = ref
        self._data = copy.deepcopy(data) if data is not None else None
        self._metadata = metadata

    @property
    def ref(self) -> DocumentReference:
        return self._ref

    @property
    def id(self) -> str:
        return self._ref.id

    @property
    def firestore(self) -> MockFirestore:
        return self._ref.firestore

    @property
    def exists(self) -> bool:
        return self._data is not None

    @property
    def metadata(self) -> SnapshotMetadata:
        return self._metadata

    def data(self, options: SnapshotOptions | dict[str, Any] | None = None) -> Any:
        """Converted document data, or ``None`` if the document does not exist."""
        if self._data is None:
            return None
        snapshot_options = coerce_model(SnapshotOptions, options)
        return self._ref.converter.from_firestore(copy.deepcopy(self._data), snapshot_options)

    def get(self, field_path: FieldKey) -> Any:
        """Raw stored value at *field_path*; ``None`` if any component is missing."""
        return copy.deepcopy(read_field(self._data, field_path))

    def is_equal(self, other: DocumentSnapshot) -> bool:
        if self.exists != other.exists:
            return False
        return same_value(self._data, other._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocumentSnapshot):
            return NotImplemented
        return self.is_equal(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DocumentSnapshot(path={self._ref.path!r}, exists={self.exists})"


class CollectionSnapshot:
    """View of a collection's existing direct child documents.

    ``changed`` is the snapshot of the descendant document whose write
    produced this notification, or ``None`` for reads and the initial
    listener delivery.
    """

    __slots__ = ("_query", "_docs", "_changed", "_metadata")

    def __init__(
        self,
        query: CollectionReference,
        docs: list[DocumentSnapshot],
        *,
        changed: DocumentSnapshot | None = None,
        metadata: SnapshotMetadata = LOCAL_METADATA,
    ) -> None:
        self._query = query
        self._docs = list(docs)
        self._changed = changed
        self._metadata = metadata

    @property
    def query(self) -> CollectionReference:
        return self._query

    @property
    def docs(self) -> list[DocumentSnapshot]:
        return list(self._docs)

    @property
    def size(self) -> int:
        return len(self._docs)

    @property
    def empty(self) -> bool:
        return not self._docs

    @property
    def changed(self) -> DocumentSnapshot | None:
        return self._changed

    @property
    def metadata(self) -> SnapshotMetadata:
        return self._metadata

    def for_each(self, callback: Callable[[DocumentSnapshot], None]) -> None:
        for doc in self._docs:
            callback(doc)

    def __iter__(self) -> Iterator[DocumentSnapshot]:
        return iter(self._docs)

    def __len__(self) -> int:
        return len(self._docs)

    def is_equal(self, other: CollectionSnapshot) -> bool:
        if not self._query.is_equal(other._query):
            return False
        if len(self._docs) != len(other._docs):
            return False
        return all(
            mine.ref.path == theirs.ref.path and mine.is_equal(theirs)
            for mine, theirs in zip(self._docs, other._docs)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CollectionSnapshot):
            return NotImplemented
        return self.is_equal(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CollectionSnapshot(path={self._query.path!r}, size={self.size})"
