"""Option and metadata models."""

from pyfiremock.models._base import FiremockBaseModel, coerce_model
from pyfiremock.models.metadata import LOCAL_METADATA, SnapshotMetadata
from pyfiremock.models.options import (
    FirestoreSettings,
    GetOptions,
    SetOptions,
    SnapshotListenOptions,
    SnapshotOptions,
)

__all__ = [
    "FiremockBaseModel",
    "FirestoreSettings",
    "GetOptions",
    "LOCAL_METADATA",
    "SetOptions",
    "SnapshotListenOptions",
    "SnapshotMetadata",
    "SnapshotOptions",
    "coerce_model",
]
