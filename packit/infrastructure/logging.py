"""Structured logging: JSON lines with secret redaction."""

from __future__ import annotations

import io
import json
import sys
import time
import uuid
from typing import Any, Optional, TextIO

from packit.security.redact import redact_sensitive


class StructuredLogger:
    """Writes one JSON object per event, tagged with a trace id."""

    def __init__(
        self,
        trace_id: Optional[str] = None,
        output: Optional[TextIO] = None,
        *,
        secrets: tuple[str, ...] = (),
    ):
        self.trace_id = trace_id or str(uuid.uuid4())[:8]
        self._output = output or sys.stderr
        self._secrets = secrets
        self._timers: dict[str, float] = {}

    def _scrub(self, text: str) -> str:
        return redact_sensitive(text, secrets=self._secrets)

    def _emit(self, data: dict[str, Any]) -> None:
        data["trace_id"] = self.trace_id
        data["timestamp"] = time.time()
        try:
            line = json.dumps(data, ensure_ascii=False, default=str)
            self._output.write(self._scrub(line) + "\n")
            self._output.flush()
        except (OSError, ValueError, TypeError) as exc:
            fallback = {
                "event": "logger_internal_error",
                "trace_id": self.trace_id,
                "timestamp": time.time(),
                "error": str(exc),
            }
            sys.stderr.write(json.dumps(fallback, ensure_ascii=False, default=str) + "\n")

    def step_enter(self, step: str, **extra: Any) -> None:
        self._emit({"event": "step_enter", "step": step, **extra})

    def fetch_start(self, call: str, **extra: Any) -> None:
        self._timers[call] = time.time()
        self._emit({"event": "fetch_start", "call": call, **extra})

    def fetch_end(self, call: str, *, ok: bool = True, **extra: Any) -> None:
        start = self._timers.pop(call, time.time())
        duration_ms = round((time.time() - start) * 1000, 1)
        self._emit({"event": "fetch_end", "call": call, "ok": ok, "duration_ms": duration_ms, **extra})

    def error(self, step: str, error: str, **extra: Any) -> None:
        self._emit({"event": "error", "step": step, "error": self._scrub(error), **extra})

    def warning(self, step: str, message: str, **extra: Any) -> None:
        self._emit({"event": "warning", "step": step, "message": self._scrub(message), **extra})

    def summary(self, **extra: Any) -> None:
        self._emit({"event": "summary", **extra})


def make_null_logger() -> StructuredLogger:
    """Logger that swallows output; used when event logging is switched off."""
    return StructuredLogger(output=io.StringIO())


_logger: Optional[StructuredLogger] = None


def get_logger(trace_id: Optional[str] = None) -> StructuredLogger:
    global _logger
    if _logger is None or (trace_id and _logger.trace_id != trace_id):
        _logger = StructuredLogger(trace_id=trace_id)
    return _logger


__all__ = ["StructuredLogger", "get_logger", "make_null_logger"]
