"""Slash-delimited path parsing and validation.

Segments alternate collection id / document id, so a collection path
has an odd segment count and a document path an even one.
"""

from __future__ import annotations

from pyfiremock.exceptions import FiremockInvalidPathError


def split_path(path: str) -> list[str]:
    """Split *path* on ``/`` dropping empty segments."""
    return [part for part in path.split("/") if part]


def join_path(segments: list[str]) -> str:
    """Canonical form: leading slash, single separators."""
    return "/" + "/".join(segments)


def collection_segments(path: str) -> list[str]:
    parts = split_path(path)
    if len(parts) % 2 == 0:
        raise FiremockInvalidPathError(
            f"Collection path must have an odd number of segments: {path!r}",
            path=path,
        )
    return parts


def document_segments(path: str) -> list[str]:
    parts = split_path(path)
    if len(parts) == 0 or len(parts) % 2 != 0:
        raise FiremockInvalidPathError(
            f"Document path must have an even number of segments: {path!r}",
            path=path,
        )
    return parts


def parent_path(path: str) -> str | None:
    """Canonical path one level up, or None at the root collection."""
    parts = split_path(path)
    if len(parts) <= 1:
        return None
    return join_path(parts[:-1])


def is_direct_child(parent: str, candidate: str) -> bool:
    prefix = parent.rstrip("/") + "/"
    if not candidate.startswith(prefix):
        return False
    rest = candidate[len(prefix) :]
    return bool(rest) and "/" not in rest
