"""Field addressing inside a document."""

from __future__ import annotations

from pyfiremock.exceptions import FiremockInvalidArgumentError


class FieldPath:
    """Explicit sequence of field names.

    ``FieldPath("a", "b")`` addresses the same field as the dotted key
    ``"a.b"``, but its segments may themselves contain dots.
    """

    __slots__ = ("_parts",)

    def __init__(self, *parts: str) -> None:
        if not parts:
            raise FiremockInvalidArgumentError("FieldPath needs at least one segment")
        for part in parts:
            if not isinstance(part, str) or not part:
                raise FiremockInvalidArgumentError(f"Invalid FieldPath segment: {part!r}")
        self._parts = tuple(parts)

    @classmethod
    def from_dotted(cls, dotted: str) -> FieldPath:
        return cls(*dotted.split("."))

    @property
    def parts(self) -> tuple[str, ...]:
        return self._parts

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldPath):
            return NotImplemented
        return self._parts == other._parts

    def __hash__(self) -> int:
        return hash(self._parts)

    def __str__(self) -> str:
        return ".".join(self._parts)

    def __repr__(self) -> str:
        return f"FieldPath{self._parts!r}"


FieldKey = str | FieldPath


def parse_field_path(key: FieldKey) -> tuple[str, ...]:
    """Normalize a dotted string or :class:`FieldPath` into its segments."""
    if isinstance(key, FieldPath):
        return key.parts
    if not isinstance(key, str):
        raise FiremockInvalidArgumentError(f"Field path must be str or FieldPath: {key!r}")
    parts = tuple(key.split("."))
    if any(not part for part in parts):
        raise FiremockInvalidArgumentError(f"Field path has an empty segment: {key!r}")
    return parts
