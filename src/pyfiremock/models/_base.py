"""Base model for option and metadata payloads.

Every options model inherits from :class:`FiremockBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase option keys used by client
  SDKs (``mergeFields``, ``includeMetadataChanges``) map onto the
  snake_case fields.
* ``frozen=True`` so options are hashable values.
* ``extra="forbid"`` so a misspelled option fails loudly instead of
  being ignored.

:func:`coerce_model` turns ``None``, a mapping or a model instance into
a validated model, reporting validation problems as
:class:`~pyfiremock.exceptions.FiremockInvalidArgumentError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from pyfiremock.exceptions import FiremockInvalidArgumentError

M = TypeVar("M", bound="FiremockBaseModel")


class FiremockBaseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )


def coerce_model(model_cls: type[M], value: Any) -> M:
    """Validate *value* as *model_cls* (``None`` yields the defaults)."""
    if value is None:
        return model_cls()
    if isinstance(value, model_cls):
        return value
    if isinstance(value, Mapping):
        try:
            return model_cls.model_validate(dict(value))
        except ValidationError as exc:
            raise FiremockInvalidArgumentError(f"Invalid {model_cls.__name__}: {exc}") from exc
    raise FiremockInvalidArgumentError(
        f"{model_cls.__name__} must be a mapping or {model_cls.__name__}, got {type(value).__name__}"
    )
