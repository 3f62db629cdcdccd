"""Infrastructure configuration helpers."""

from __future__ import annotations

import os

_TRUTHY = {"1", "true", "yes", "on"}


def get_env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def is_enabled(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


__all__ = ["get_env", "is_enabled"]
