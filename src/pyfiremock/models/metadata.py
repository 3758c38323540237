"""Snapshot metadata model."""

from __future__ import annotations

from pyfiremock.models._base import FiremockBaseModel


class SnapshotMetadata(FiremockBaseModel):
    """Metadata attached to every snapshot.

    The emulator applies writes synchronously and has no cache layer, so
    both flags are always false.
    """

    has_pending_writes: bool = False
    from_cache: bool = False

    def is_equal(self, other: SnapshotMetadata) -> bool:
        return self == other


#: Shared metadata instance for all emulator snapshots.
LOCAL_METADATA = SnapshotMetadata()
