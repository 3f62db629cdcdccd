"""pytest global fixtures: environment isolation."""

import io

import pytest

from packit.infrastructure.logging import StructuredLogger

PACKIT_ENV = (
    "PACKIT_BACKEND",
    "PACKIT_API_BASE_URL",
    "PACKIT_API_TOKEN",
    "PACKIT_HTTP_TIMEOUT_SECONDS",
    "PACKIT_USER_ID",
    "PACKIT_DEFAULT_LIMIT_KG",
    "PACKIT_LOG_EVENTS",
)


@pytest.fixture(autouse=True)
def no_real_backend(monkeypatch):
    """Never reach a real backend: every test starts from the in-memory defaults."""
    for name in PACKIT_ENV:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def event_output():
    return io.StringIO()


@pytest.fixture
def event_logger(event_output):
    return StructuredLogger(trace_id="test", output=event_output)
