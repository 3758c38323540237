"""Emulator configuration for pyfiremock."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyfiremock.exceptions import FiremockConfigError

DEFAULT_AUTO_ID_PREFIX = "__id"
DEFAULT_PROJECT_ID = "firemock-project"
DEFAULT_LOG_MAX_STRING = 256
DEFAULT_LOG_MAX_ENTRIES = 20


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class FiremockConfig:
    """Emulator configuration.

    Parameters
    ----------
    project_id : str
        Project identifier reported by the owning app handle.
    auto_id_prefix : str
        Prefix for generated document ids. Ids are ``prefix + n`` with
        ``n`` counting up from zero per store instance.
    raise_listener_errors : bool
        When true, an exception raised by a snapshot listener propagates
        out of the write that triggered it. When false (default) it is
        handed to the listener's ``error`` callback or logged.
    log_max_string : int
        Strings longer than this are truncated in DEBUG log previews.
    log_max_entries : int
        Mappings and arrays show at most this many entries in DEBUG log
        previews; the rest are counted.
    """

    project_id: str = DEFAULT_PROJECT_ID
    auto_id_prefix: str = DEFAULT_AUTO_ID_PREFIX
    raise_listener_errors: bool = False
    log_max_string: int = DEFAULT_LOG_MAX_STRING
    log_max_entries: int = DEFAULT_LOG_MAX_ENTRIES

    def __post_init__(self) -> None:
        if not self.project_id.strip():
            raise FiremockConfigError("project_id must be non-empty")
        if not self.auto_id_prefix or "/" in self.auto_id_prefix:
            raise FiremockConfigError(
                f"auto_id_prefix must be non-empty and contain no '/': {self.auto_id_prefix!r}"
            )
        if self.log_max_string <= 0:
            raise FiremockConfigError(f"log_max_string must be > 0: {self.log_max_string}")
        if self.log_max_entries <= 0:
            raise FiremockConfigError(f"log_max_entries must be > 0: {self.log_max_entries}")

    @classmethod
    def from_env(cls, **overrides: Any) -> FiremockConfig:
        """Create configuration from ``FIREMOCK_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        project_id = env.get("FIREMOCK_PROJECT_ID")
        if project_id is not None:
            config_kwargs["project_id"] = project_id

        prefix = env.get("FIREMOCK_AUTO_ID_PREFIX")
        if prefix is not None:
            config_kwargs["auto_id_prefix"] = prefix

        if "raise_listener_errors" not in overrides:
            config_kwargs["raise_listener_errors"] = _env_bool(
                env.get("FIREMOCK_RAISE_LISTENER_ERRORS"),
                False,
            )

        max_string_env = env.get("FIREMOCK_LOG_MAX_STRING")
        if max_string_env is not None and "log_max_string" not in overrides:
            try:
                config_kwargs["log_max_string"] = int(max_string_env)
            except ValueError as exc:
                raise FiremockConfigError(
                    f"FIREMOCK_LOG_MAX_STRING must be integer: {max_string_env}"
                ) from exc

        max_entries_env = env.get("FIREMOCK_LOG_MAX_ENTRIES")
        if max_entries_env is not None and "log_max_entries" not in overrides:
            try:
                config_kwargs["log_max_entries"] = int(max_entries_env)
            except ValueError as exc:
                raise FiremockConfigError(
                    f"FIREMOCK_LOG_MAX_ENTRIES must be integer: {max_entries_env}"
                ) from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
