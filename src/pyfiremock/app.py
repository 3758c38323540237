"""Application handle owning the emulated services."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pyfiremock._completion import Completion
from pyfiremock.config import FiremockConfig
from pyfiremock.firestore import MockFirestore

_logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "[DEFAULT]"


class MockApp:
    """Owner of a :class:`MockFirestore` and its store.

    All emulated state lives exactly as long as the app: :meth:`delete`
    completes every listener and discards every document.

    Usage::

        app = MockApp()
        db = app.firestore()
        await db.doc("users/alice").set({"name": "Alice"})
    """

    def __init__(
        self,
        name: str = DEFAULT_APP_NAME,
        options: Mapping[str, Any] | None = None,
        *,
        config: FiremockConfig | None = None,
    ) -> None:
        self.name = name
        self.config = config or FiremockConfig()
        self.options: dict[str, Any] = {"projectId": self.config.project_id, **dict(options or {})}
        self._firestore: MockFirestore | None = None

    def firestore(self) -> MockFirestore:
        if self._firestore is None:
            self._firestore = MockFirestore(self)
            _logger.debug("Firestore created app=%s", self.name)
        return self._firestore

    def delete(self) -> Completion[None]:
        firestore = self._firestore
        self._firestore = None
        if firestore is not None:
            firestore.terminate()
        _logger.debug("App deleted app=%s", self.name)
        return Completion.resolved(None)

    def __repr__(self) -> str:
        return f"MockApp(name={self.name!r})"
