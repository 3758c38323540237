"""pyfiremock - In-memory document store emulator with snapshot listeners."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyfiremock")
except PackageNotFoundError:
    __version__ = "0+local"
from pyfiremock._completion import Completion
from pyfiremock.app import MockApp
from pyfiremock.collection import CollectionReference
from pyfiremock.config import FiremockConfig
from pyfiremock.converter import DEFAULT_CONVERTER, Converter, model_converter
from pyfiremock.document import DocumentReference
from pyfiremock.exceptions import (
    FiremockConfigError,
    FiremockError,
    FiremockInvalidArgumentError,
    FiremockInvalidPathError,
    FiremockNotFoundError,
    FiremockNotImplementedError,
    FiremockUnsupportedOptionError,
)
from pyfiremock.field_path import FieldPath
from pyfiremock.firestore import MockFirestore
from pyfiremock.models import (
    FirestoreSettings,
    GetOptions,
    SetOptions,
    SnapshotListenOptions,
    SnapshotMetadata,
    SnapshotOptions,
)
from pyfiremock.query import Query
from pyfiremock.snapshot import CollectionSnapshot, DocumentSnapshot
from pyfiremock.state.emitter import ListenerRegistration

__all__ = [
    "__version__",
    "CollectionReference",
    "CollectionSnapshot",
    "Completion",
    "Converter",
    "DEFAULT_CONVERTER",
    "DocumentReference",
    "DocumentSnapshot",
    "FieldPath",
    "FiremockConfig",
    "FiremockConfigError",
    "FiremockError",
    "FiremockInvalidArgumentError",
    "FiremockInvalidPathError",
    "FiremockNotFoundError",
    "FiremockNotImplementedError",
    "FiremockUnsupportedOptionError",
    "FirestoreSettings",
    "GetOptions",
    "ListenerRegistration",
    "MockApp",
    "MockFirestore",
    "Query",
    "SetOptions",
    "SnapshotListenOptions",
    "SnapshotMetadata",
    "SnapshotOptions",
    "model_converter",
]
