"""Conversion between application values and stored document data."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from pyfiremock.models.options import SnapshotOptions

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class Converter(Generic[T]):
    """A pair of pure functions.

    ``to_firestore`` turns an application value into a mapping of stored
    fields; ``from_firestore`` turns stored fields (plus read options)
    back into an application value. Two converters are equal when they
    hold the same function pair.
    """

    to_firestore: Callable[[T], Mapping[str, Any]]
    from_firestore: Callable[[dict[str, Any], SnapshotOptions], T]


def _identity_to_firestore(value: Any) -> Mapping[str, Any]:
    return value


def _identity_from_firestore(data: dict[str, Any], _options: SnapshotOptions) -> Any:
    return data


DEFAULT_CONVERTER: Converter[Any] = Converter(
    to_firestore=_identity_to_firestore,
    from_firestore=_identity_from_firestore,
)


def model_converter(model_cls: type[ModelT], *, by_alias: bool = False) -> Converter[ModelT]:
    """Build a converter storing pydantic models as their ``model_dump``."""

    def to_firestore(value: ModelT) -> Mapping[str, Any]:
        return value.model_dump(mode="python", by_alias=by_alias)

    def from_firestore(data: dict[str, Any], _options: SnapshotOptions) -> ModelT:
        return model_cls.model_validate(data)

    return Converter(to_firestore=to_firestore, from_firestore=from_firestore)
