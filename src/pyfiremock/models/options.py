"""Option models accepted by reads, writes and listeners."""

from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict

from pyfiremock.field_path import FieldPath
from pyfiremock.models._base import FiremockBaseModel


class SetOptions(FiremockBaseModel):
    """Options for ``DocumentReference.set``."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    merge: bool = False
    """Shallow-merge top-level keys over the existing document."""

    merge_fields: tuple[str | FieldPath, ...] | None = None
    """Restrict the merge to these fields. Not supported by the emulator."""


class SnapshotOptions(FiremockBaseModel):
    """Options passed through to ``Converter.from_firestore``."""

    server_timestamps: Literal["estimate", "previous", "none"] = "none"


class SnapshotListenOptions(FiremockBaseModel):
    """Options accepted (and ignored) by ``on_snapshot``."""

    include_metadata_changes: bool = False


class GetOptions(FiremockBaseModel):
    """Options accepted (and ignored) by ``get``."""

    source: Literal["default", "server", "cache"] = "default"


class FirestoreSettings(FiremockBaseModel):
    """Client settings recorded by ``MockFirestore.settings``."""

    host: str | None = None
    ssl: bool | None = None
    ignore_undefined_properties: bool = False
    cache_size_bytes: int | None = None
    experimental_force_long_polling: bool = False
