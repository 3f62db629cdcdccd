"""Helpers for redacting credentials from log lines and error strings."""

from __future__ import annotations

import re
from collections.abc import Iterable

_REDACTED = "***REDACTED***"

_QUERY_VALUE_RE = re.compile(
    r"(?i)(?P<prefix>\b(?:key|api[_-]?key|token|secret|uid|password)\s*=\s*)(?P<value>[^&\s\"']+)"
)
_JSON_KV_RE = re.compile(
    r"(?i)(?P<prefix>(?:[\"']?(?:api[_-]?key|x-api-key|token|secret|password)[\"']?\s*[:=]\s*[\"']?))(?P<value>[^\"',\s}]+)"
)
_AUTH_HEADER_RE = re.compile(
    r"(?i)(?P<prefix>\bauthorization\s*:\s*(?:bearer|basic|token)\s+)(?P<value>[^\s,;]+)"
)
_BEARER_RE = re.compile(r"(?i)(?P<prefix>\bbearer\s+)(?P<value>[A-Za-z0-9._~+/=-]+)")
_JWT_RE = re.compile(r"\beyJ[A-Za-z0-9_-]{8,}\.[A-Za-z0-9_-]{8,}\.[A-Za-z0-9_-]{8,}\b")


def _replace_value(pattern: re.Pattern[str], text: str) -> str:
    def repl(match: re.Match[str]) -> str:
        return f"{match.group('prefix')}{_REDACTED}"

    return pattern.sub(repl, text)


def redact_sensitive(text: str, *, secrets: Iterable[str] = ()) -> str:
    """Redact common secret patterns plus any literal secret values passed in."""
    if not text:
        return text

    redacted = str(text)
    for secret in secrets:
        if secret and len(secret) >= 4:
            redacted = redacted.replace(secret, _REDACTED)

    for pattern in (_QUERY_VALUE_RE, _JSON_KV_RE, _AUTH_HEADER_RE, _BEARER_RE):
        redacted = _replace_value(pattern, redacted)
    return _JWT_RE.sub(_REDACTED, redacted)


__all__ = ["redact_sensitive"]
