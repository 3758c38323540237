"""Collection reference handles."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pyfiremock._completion import Completion
from pyfiremock._paths import is_direct_child, split_path
from pyfiremock.converter import DEFAULT_CONVERTER, Converter
from pyfiremock.document import DocumentReference
from pyfiremock.exceptions import FiremockInvalidPathError
from pyfiremock.models import GetOptions, coerce_model
from pyfiremock.query import Query
from pyfiremock.snapshot import CollectionSnapshot, DocumentSnapshot
from pyfiremock.state.emitter import ListenerRegistration
from pyfiremock.state.events import DocumentChange, parse_listener_args

if TYPE_CHECKING:
    from pyfiremock.firestore import MockFirestore

_logger = logging.getLogger(__name__)


class CollectionReference(Query):
    """Handle on a collection path.

    Collections hold no state of their own: membership is derived from
    the store on demand, and listeners hear about every write to any
    document below this path through bubbling.
    """

    def __init__(
        self,
        firestore: MockFirestore,
        id: str,
        parent: DocumentReference | None,
        converter: Converter[Any] = DEFAULT_CONVERTER,
    ) -> None:
        super().__init__(firestore)
        self.id = id
        self.parent = parent
        self.converter = converter

    @property
    def path(self) -> str:
        base = self.parent.path if self.parent is not None else ""
        return f"{base}/{self.id}"

    def doc(self, document_id: str | None = None) -> DocumentReference:
        """Child document handle; an omitted id is generated by the store."""
        if document_id is None:
            document_id = self.firestore.store.next_id()
        parts = split_path(document_id)
        if len(parts) != 1 or parts[0] != document_id:
            raise FiremockInvalidPathError(
                f"Document id must be a single non-empty segment: {document_id!r}",
                path=f"{self.path}/{document_id}",
            )
        return DocumentReference(self.firestore, document_id, self, self.converter)

    def add(self, data: Any) -> Completion[DocumentReference]:
        """Create a document with a generated id holding *data*."""
        ref = self.doc()
        written = ref.set(data)
        if not written.ok:
            return Completion.failed(written.exception())  # type: ignore[arg-type]
        return Completion.resolved(ref)

    def with_converter(self, converter: Converter[Any] | None) -> CollectionReference:
        return CollectionReference(self.firestore, self.id, self.parent, converter or DEFAULT_CONVERTER)

    def is_equal(self, other: Any) -> bool:
        return (
            isinstance(other, CollectionReference)
            and self.firestore is other.firestore
            and self.path == other.path
            and self.converter == other.converter
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CollectionReference):
            return NotImplemented
        return self.is_equal(other)

    def __hash__(self) -> int:
        return hash((id(self.firestore), self.path))

    def __repr__(self) -> str:
        return f"CollectionReference(path={self.path!r})"

    def get(self, options: GetOptions | dict[str, Any] | None = None) -> Completion[CollectionSnapshot]:
        coerce_model(GetOptions, options)
        return Completion.resolved(self._snapshot())

    def on_snapshot(self, *args: Any) -> ListenerRegistration:
        """Listen to this collection.

        Delivers a :class:`CollectionSnapshot` immediately and again after
        every change to any document below this collection.
        """
        observer = parse_listener_args(args)
        emitter = self.firestore.store.emitter_for(self.path)
        _logger.debug("Collection listener attached path=%s listeners=%d", self.path, len(emitter) + 1)
        return emitter.listen(observer, self._snapshot(), self._snapshot_for_change)

    def _snapshot(self, changed: DocumentSnapshot | None = None) -> CollectionSnapshot:
        docs = [
            DocumentSnapshot(self.doc(path.rsplit("/", 1)[-1]), data)
            for path, data in self.firestore.store.children(self.path)
        ]
        return CollectionSnapshot(self, docs, changed=changed)

    def _snapshot_for_change(self, change: DocumentChange) -> CollectionSnapshot:
        if is_direct_child(self.path, change.path):
            ref = self.doc(change.path.rsplit("/", 1)[-1])
        else:
            ref = self.firestore.doc(change.path)
        return self._snapshot(changed=DocumentSnapshot(ref, change.data))
