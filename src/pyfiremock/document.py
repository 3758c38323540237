"""Document reference handles: reads, writes and listeners."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pyfiremock._completion import Completion
from pyfiremock.converter import DEFAULT_CONVERTER, Converter
from pyfiremock.exceptions import (
    FiremockInvalidArgumentError,
    FiremockNotFoundError,
    FiremockUnsupportedOptionError,
)
from pyfiremock.field_path import FieldPath
from pyfiremock.models import GetOptions, SetOptions, coerce_model
from pyfiremock.snapshot import DocumentSnapshot
from pyfiremock.state.emitter import ListenerRegistration
from pyfiremock.state.events import DocumentChange, SnapshotEvent, parse_listener_args
from pyfiremock.state.merge import apply_field_updates, is_change, shallow_merge

if TYPE_CHECKING:
    from pyfiremock.collection import CollectionReference
    from pyfiremock.firestore import MockFirestore
    from pyfiremock.state.store import DocumentStore

_logger = logging.getLogger(__name__)


class DocumentReference:
    """Handle on a document path.

    Handles are cheap values: any number of them may point at the same
    path and they all share the stored data and listeners kept by the
    owning :class:`~pyfiremock.firestore.MockFirestore`.

    Writes apply immediately and notify listeners before returning a
    settled :class:`~pyfiremock._completion.Completion`. Malformed
    arguments raise right away; ``update`` on a missing document fails
    through the completion instead.
    """

    def __init__(
        self,
        firestore: MockFirestore,
        id: str,
        parent: CollectionReference,
        converter: Converter[Any] = DEFAULT_CONVERTER,
    ) -> None:
        self.firestore = firestore
        self.id = id
        self.parent = parent
        self.converter = converter

    @property
    def path(self) -> str:
        return f"{self.parent.path}/{self.id}"

    @property
    def _store(self) -> DocumentStore:
        return self.firestore.store

    def collection(self, collection_path: str) -> CollectionReference:
        return self.firestore.collection(f"{self.path}/{collection_path}")

    def with_converter(self, converter: Converter[Any] | None) -> DocumentReference:
        converter = converter or DEFAULT_CONVERTER
        return DocumentReference(
            self.firestore,
            self.id,
            self.parent.with_converter(converter),
            converter,
        )

    def is_equal(self, other: Any) -> bool:
        return (
            isinstance(other, DocumentReference)
            and self.firestore is other.firestore
            and self.path == other.path
            and self.converter == other.converter
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocumentReference):
            return NotImplemented
        return self.is_equal(other)

    def __hash__(self) -> int:
        return hash((id(self.firestore), self.path))

    def __repr__(self) -> str:
        return f"DocumentReference(path={self.path!r})"

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set(
        self,
        data: Any,
        options: SetOptions | Mapping[str, Any] | None = None,
        *,
        merge: bool | None = None,
        merge_fields: list[str | FieldPath] | None = None,
    ) -> Completion[None]:
        """Write *data*, replacing the document or shallow-merging into it."""
        set_options = coerce_model(SetOptions, options)
        overrides: dict[str, Any] = {}
        if merge is not None:
            overrides["merge"] = merge
        if merge_fields is not None:
            overrides["merge_fields"] = merge_fields
        if overrides:
            set_options = coerce_model(SetOptions, {**set_options.model_dump(), **overrides})

        if set_options.merge_fields:
            raise FiremockUnsupportedOptionError(
                "Option merge_fields is not supported",
                option="merge_fields",
            )

        raw = self.converter.to_firestore(data)
        if not isinstance(raw, Mapping):
            raise FiremockInvalidArgumentError(
                f"Converter produced {type(raw).__name__}, expected a mapping"
            )

        before = self._store.get(self.path)
        after = shallow_merge(before, raw) if set_options.merge else dict(raw)
        self._commit(before, after, operation="set")
        return Completion.resolved(None)

    def update(self, data: Any, *more_fields_and_values: Any) -> Completion[None]:
        """Patch fields addressed by dotted keys, keeping all siblings."""
        if isinstance(data, (str, FieldPath)):
            raise FiremockUnsupportedOptionError(
                "Document updating by field is not supported",
                option="field_path_update",
            )
        if not isinstance(data, Mapping) or more_fields_and_values:
            raise FiremockInvalidArgumentError("update() expects a single mapping of field paths to values")

        before = self._store.get(self.path)
        if before is None:
            _logger.debug("Update rejected, document missing path=%s", self.path)
            return Completion.failed(
                FiremockNotFoundError(f"No document to update: {self.path}", path=self.path)
            )

        after = apply_field_updates(before, data)
        self._commit(before, after, operation="update")
        return Completion.resolved(None)

    def delete(self) -> Completion[None]:
        before = self._store.get(self.path)
        self._commit(before, None, operation="delete")
        return Completion.resolved(None)

    def _commit(
        self,
        before: dict[str, Any] | None,
        after: dict[str, Any] | None,
        *,
        operation: str,
    ) -> None:
        changed = is_change(before, after)
        self._store.set(self.path, after)
        if not changed:
            _logger.debug("%s left document unchanged path=%s", operation, self.path)
            return
        self._emit_change()

    def _emit_change(self) -> None:
        """Notify this path, then every ancestor collection up to the root."""
        store = self._store
        change = DocumentChange(path=self.path, data=store.get(self.path))

        delivered = 0
        if store.has_emitter(self.path):
            delivered += store.emitter_for(self.path).emit(SnapshotEvent.NEXT, change)

        collection: CollectionReference | None = self.parent
        while collection is not None:
            if store.has_emitter(collection.path):
                delivered += store.emitter_for(collection.path).emit(SnapshotEvent.NEXT, change)
            owner = collection.parent
            collection = owner.parent if owner is not None else None

        _logger.debug("Change emitted path=%s deliveries=%d", self.path, delivered)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, options: GetOptions | Mapping[str, Any] | None = None) -> Completion[DocumentSnapshot]:
        """Snapshot of the current data; never fails for a missing document."""
        coerce_model(GetOptions, options)
        return Completion.resolved(self._snapshot())

    def on_snapshot(self, *args: Any) -> ListenerRegistration:
        """Listen to this document.

        Accepts ``(on_next)``, ``(on_next, on_error, on_complete)``,
        ``(observer)`` and any of those preceded by listen options. The
        current snapshot is delivered before this call returns, then one
        snapshot per subsequent change.
        """
        observer = parse_listener_args(args)
        emitter = self._store.emitter_for(self.path)
        _logger.debug("Document listener attached path=%s listeners=%d", self.path, len(emitter) + 1)
        return emitter.listen(observer, self._snapshot(), self._snapshot_for_change)

    def _snapshot(self) -> DocumentSnapshot:
        return DocumentSnapshot(self, self._store.get(self.path))

    def _snapshot_for_change(self, change: DocumentChange) -> DocumentSnapshot:
        return DocumentSnapshot(self, change.data)
