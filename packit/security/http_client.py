"""Secure HTTP client, the single exit point for backend calls.

Responsibilities:
  1. redact credentials from exception messages
  2. uniform timeout policy
  3. turn every transport failure into ``TransportError``
  4. keep the httpx dependency in one place
"""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from packit.security.redact import redact_sensitive
from packit.shared.exceptions import TransportError


class SecureHttpClient:
    """Wraps ``httpx.AsyncClient`` for JSON POST calls with redacted errors."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._token = token
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _scrub(self, text: str) -> str:
        return redact_sensitive(text, secrets=(self._token,) if self._token else ())

    async def post_json(self, call: str, path: str, body: dict[str, Any]) -> Any:
        """POST ``body`` to ``path`` and return the decoded JSON (``None`` for an empty body).

        No retries: a failed call is reported once and the caller decides.
        """
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(url, json=body, headers=self._headers())
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                call,
                f"HTTP {e.response.status_code}: {self._scrub(str(e))}",
                status_code=e.response.status_code,
            ) from None
        except httpx.TimeoutException:
            raise TransportError(call, f"request timed out after {self._timeout}s") from None
        except httpx.HTTPError as e:
            raise TransportError(call, f"request failed: {self._scrub(str(e))}") from None

        if not resp.content:
            return None
        try:
            return resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TransportError(call, f"response is not JSON: {self._scrub(str(e))}") from None


__all__ = ["SecureHttpClient"]
