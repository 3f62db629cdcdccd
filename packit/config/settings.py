"""Runtime settings snapshot resolved from the environment."""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

from packit.domain.constants import DEFAULT_AIRLINE_LIMIT_KG
from packit.infrastructure.config import get_env, is_enabled

_BACKEND_MODES = {"http", "memory"}


def _is_configured(value: str | None) -> bool:
    return bool(value and value.strip())


def _float_env(name: str, default: float) -> float:
    raw = get_env(name)
    if not _is_configured(raw):
        return default
    try:
        value = float(str(raw).strip())
    except ValueError:
        return default
    return value if math.isfinite(value) and value > 0 else default


def resolve_backend_mode() -> str:
    mode = str(get_env("PACKIT_BACKEND") or "").strip().lower()
    if mode in _BACKEND_MODES:
        return mode
    # A configured URL implies the real service unless overridden.
    return "http" if _is_configured(get_env("PACKIT_API_BASE_URL")) else "memory"


class PackitSettings(BaseModel):
    backend: str = Field(default="memory")
    api_base_url: str = Field(default="")
    api_token: str | None = Field(default=None)
    http_timeout_seconds: float = Field(default=10.0, gt=0)
    user_id: str = Field(default="anonymous")
    default_limit_kg: float = Field(default=DEFAULT_AIRLINE_LIMIT_KG, gt=0)
    log_events: bool = Field(default=True)


def resolve_settings() -> PackitSettings:
    token = get_env("PACKIT_API_TOKEN")
    return PackitSettings(
        backend=resolve_backend_mode(),
        api_base_url=str(get_env("PACKIT_API_BASE_URL") or "").strip().rstrip("/"),
        api_token=token.strip() if _is_configured(token) else None,
        http_timeout_seconds=_float_env("PACKIT_HTTP_TIMEOUT_SECONDS", 10.0),
        user_id=str(get_env("PACKIT_USER_ID") or "").strip() or "anonymous",
        default_limit_kg=_float_env("PACKIT_DEFAULT_LIMIT_KG", DEFAULT_AIRLINE_LIMIT_KG),
        log_events=is_enabled("PACKIT_LOG_EVENTS", default=True),
    )


__all__ = ["PackitSettings", "resolve_backend_mode", "resolve_settings"]
