"""Per-path listener registry."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pyfiremock.state.events import Observer, SnapshotEvent

_logger = logging.getLogger(__name__)


class ListenerRegistration:
    """Handle returned by ``on_snapshot``.

    Calling it (or :meth:`unsubscribe`) detaches exactly this listener.
    Repeated calls are no-ops.
    """

    __slots__ = ("_emitter", "observer", "_active")

    def __init__(self, emitter: EventEmitter, observer: Observer) -> None:
        self._emitter = emitter
        self.observer = observer
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        self._emitter._remove(self)

    def __call__(self) -> None:
        self.unsubscribe()


class EventEmitter:
    """Ordered ``next``/``error``/``complete`` fan-out for one canonical path.

    Emission iterates over a copy of the current registrations, so a
    listener added from inside a callback does not see the in-flight
    event, and a listener removed mid-emission receives nothing more.
    """

    def __init__(self, path: str, *, raise_listener_errors: bool = False) -> None:
        self.path = path
        self._raise_listener_errors = raise_listener_errors
        self._registrations: list[ListenerRegistration] = []

    def __len__(self) -> int:
        return len(self._registrations)

    def subscribe(self, observer: Observer) -> ListenerRegistration:
        registration = ListenerRegistration(self, observer)
        self._registrations.append(registration)
        return registration

    def listen(
        self,
        observer: Observer,
        initial: Any,
        transform: Callable[[Any], Any],
    ) -> ListenerRegistration:
        """Deliver *initial* to *observer* right away, then subscribe it.

        Payloads emitted later are passed through *transform* before
        reaching ``observer.next``.
        """
        self.deliver(observer, initial)

        def on_next(payload: Any) -> None:
            observer.next(transform(payload))

        return self.subscribe(Observer(next=on_next, error=observer.error, complete=observer.complete))

    def _remove(self, registration: ListenerRegistration) -> None:
        self._registrations = [r for r in self._registrations if r is not registration]

    def emit(self, event: SnapshotEvent, payload: Any = None) -> int:
        """Deliver *event* to every active listener; returns the delivery count."""
        delivered = 0
        for registration in tuple(self._registrations):
            if not registration.active:
                continue
            observer = registration.observer
            if event == SnapshotEvent.NEXT:
                self.deliver(observer, payload)
            else:
                if observer.complete is None:
                    continue
                observer.complete()
            delivered += 1
        return delivered

    def deliver(self, observer: Observer, payload: Any) -> None:
        """Call ``observer.next``, routing a failure to ``observer.error`` or the log."""
        try:
            observer.next(payload)
        except Exception as exc:
            if self._raise_listener_errors:
                raise
            if observer.error is not None:
                observer.error(exc)
                return
            _logger.warning("Snapshot listener failed path=%s", self.path, exc_info=True)

    def close(self) -> None:
        """Send ``complete`` to every listener and drop all registrations."""
        self.emit(SnapshotEvent.COMPLETE)
        for registration in self._registrations:
            registration._active = False
        self._registrations = []
