"""In-memory document store.

One store backs one ``MockFirestore``. Every reference handle that
resolves to the same canonical path reads and writes the same entry
here and shares the same emitter.
"""

from __future__ import annotations

import copy
import itertools
import logging
from typing import Any

from pyfiremock._paths import is_direct_child
from pyfiremock._preview import PreviewLimits, summarize_document
from pyfiremock.config import FiremockConfig
from pyfiremock.state.emitter import EventEmitter

_logger = logging.getLogger(__name__)


class DocumentStore:
    """Canonical path -> stored value, and canonical path -> emitter.

    A stored value of ``None`` marks a document that does not exist
    (never written, or deleted). Entries are never removed on delete so
    emitters keep resolving for late subscribers.
    """

    def __init__(self, config: FiremockConfig | None = None) -> None:
        self._config = config or FiremockConfig()
        self._data: dict[str, dict[str, Any] | None] = {}
        self._emitters: dict[str, EventEmitter] = {}
        self._ids = itertools.count()
        self._preview_limits = PreviewLimits(
            max_string=self._config.log_max_string,
            max_entries=self._config.log_max_entries,
        )

    @property
    def config(self) -> FiremockConfig:
        return self._config

    def get(self, path: str) -> dict[str, Any] | None:
        """Stored value at *path* (the live object; callers copy before exposing it)."""
        return self._data.get(path)

    def exists(self, path: str) -> bool:
        return self._data.get(path) is not None

    def set(self, path: str, value: dict[str, Any] | None) -> None:
        """Replace the stored value at *path* unconditionally."""
        self._data[path] = copy.deepcopy(value) if value is not None else None
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(
                "Store write path=%s data=%s",
                path,
                summarize_document(value, self._preview_limits),
            )

    def emitter_for(self, path: str) -> EventEmitter:
        emitter = self._emitters.get(path)
        if emitter is None:
            emitter = EventEmitter(path, raise_listener_errors=self._config.raise_listener_errors)
            self._emitters[path] = emitter
        return emitter

    def has_emitter(self, path: str) -> bool:
        return path in self._emitters

    def next_id(self) -> str:
        return f"{self._config.auto_id_prefix}{next(self._ids)}"

    def children(self, collection_path: str) -> list[tuple[str, dict[str, Any]]]:
        """Present direct child documents of *collection_path*, in path order."""
        present = [
            (path, value)
            for path, value in self._data.items()
            if value is not None and is_direct_child(collection_path, path)
        ]
        return sorted(present, key=lambda item: item[0])

    def paths(self) -> list[str]:
        """Canonical paths of all existing documents."""
        return sorted(path for path, value in self._data.items() if value is not None)

    def close(self) -> None:
        """Complete every listener and discard all state."""
        emitters = list(self._emitters.values())
        _logger.debug("Store closing documents=%d emitters=%d", len(self.paths()), len(emitters))
        for emitter in emitters:
            emitter.close()
        self._emitters.clear()
        self._data.clear()
