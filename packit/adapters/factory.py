"""Backend adapter selection."""

from __future__ import annotations

import logging

from packit.adapters.backend.http import HttpPackingBackend
from packit.adapters.backend.memory import InMemoryPackingBackend
from packit.config.settings import PackitSettings
from packit.ports.interfaces import PackingBackend
from packit.security.http_client import SecureHttpClient

_logger = logging.getLogger("packit.backend")


def get_backend(settings: PackitSettings) -> PackingBackend:
    if settings.backend == "http":
        if not settings.api_base_url:
            _logger.warning("PACKIT_BACKEND=http but PACKIT_API_BASE_URL is empty; using memory backend")
            return InMemoryPackingBackend()
        http = SecureHttpClient(
            settings.api_base_url,
            timeout=settings.http_timeout_seconds,
            token=settings.api_token,
        )
        return HttpPackingBackend(http)
    return InMemoryPackingBackend()


__all__ = ["get_backend"]
