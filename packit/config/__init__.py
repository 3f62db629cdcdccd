"""Runtime configuration helpers."""

from packit.config.settings import PackitSettings, resolve_backend_mode, resolve_settings

__all__ = ["PackitSettings", "resolve_backend_mode", "resolve_settings"]
