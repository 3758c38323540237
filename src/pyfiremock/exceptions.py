"""Custom exception hierarchy for pyfiremock."""

from __future__ import annotations


class FiremockError(Exception):
    """Base exception for all pyfiremock errors."""


class FiremockConfigError(FiremockError):
    """Invalid or missing configuration."""


class FiremockInvalidArgumentError(FiremockError, ValueError):
    """A call received an argument of the wrong shape or value."""


class FiremockInvalidPathError(FiremockInvalidArgumentError):
    """Path does not resolve to the requested reference kind.

    Collections live at paths with an odd number of segments and
    documents at paths with an even (non-zero) number of segments.
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class FiremockUnsupportedOptionError(FiremockError):
    """A write option the emulator does not implement was requested."""

    def __init__(self, message: str, *, option: str = "") -> None:
        self.option = option
        super().__init__(message)


class FiremockNotFoundError(FiremockError):
    """The targeted document does not exist.

    Raised through the returned completion of ``update()``, not
    synchronously from the call itself.
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class FiremockNotImplementedError(FiremockError, NotImplementedError):
    """Operation is not part of this emulation (queries, transactions, batches)."""
