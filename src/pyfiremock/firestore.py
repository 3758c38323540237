"""Entry point for resolving collection and document references."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pyfiremock._completion import Completion
from pyfiremock._paths import collection_segments, document_segments
from pyfiremock.collection import CollectionReference
from pyfiremock.document import DocumentReference
from pyfiremock.exceptions import FiremockNotImplementedError
from pyfiremock.models import FirestoreSettings, coerce_model
from pyfiremock.state.store import DocumentStore

if TYPE_CHECKING:
    from pyfiremock.app import MockApp

_logger = logging.getLogger(__name__)


class MockFirestore:
    """In-memory stand-in for a document database client.

    Owns one :class:`~pyfiremock.state.store.DocumentStore`; every
    reference resolved through this object shares it.
    """

    def __init__(self, app: MockApp) -> None:
        self.app = app
        self._store = DocumentStore(app.config)
        self._settings = FirestoreSettings()

    @property
    def store(self) -> DocumentStore:
        return self._store

    @property
    def current_settings(self) -> FirestoreSettings:
        return self._settings

    def collection(self, collection_path: str) -> CollectionReference:
        return self._child(collection_segments(collection_path))  # type: ignore[return-value]

    def doc(self, document_path: str) -> DocumentReference:
        return self._child(document_segments(document_path))  # type: ignore[return-value]

    def _child(self, segments: list[str]) -> CollectionReference | DocumentReference:
        """Build the reference chain for already validated *segments*."""
        root, *rest = segments
        ref: CollectionReference | DocumentReference = CollectionReference(self, root, None)
        for segment in rest:
            if isinstance(ref, CollectionReference):
                ref = DocumentReference(self, segment, ref)
            else:
                ref = CollectionReference(self, segment, ref)
        return ref

    def next_id(self) -> str:
        return self._store.next_id()

    def collection_group(self, collection_id: str) -> Any:
        raise FiremockNotImplementedError("collection_group() is not supported by the emulator")

    def batch(self) -> Any:
        raise FiremockNotImplementedError("Batched writes are not supported by the emulator")

    def run_transaction(self, update_function: Callable[[Any], Any]) -> Any:
        raise FiremockNotImplementedError("Transactions are not supported by the emulator")

    def settings(self, settings: FirestoreSettings | dict[str, Any]) -> None:
        self._settings = coerce_model(FirestoreSettings, settings)
        _logger.debug("Settings recorded %s", self._settings.model_dump(exclude_defaults=True))

    def enable_persistence(self, **_options: Any) -> Completion[None]:
        return Completion.resolved(None)

    def clear_persistence(self) -> Completion[None]:
        return Completion.resolved(None)

    def enable_network(self) -> Completion[None]:
        return Completion.resolved(None)

    def disable_network(self) -> Completion[None]:
        return Completion.resolved(None)

    def wait_for_pending_writes(self) -> Completion[None]:
        return Completion.resolved(None)

    def terminate(self) -> Completion[None]:
        """Complete every listener and discard all stored documents."""
        self._store.close()
        return Completion.resolved(None)

    def __repr__(self) -> str:
        return f"MockFirestore(app={self.app.name!r})"
