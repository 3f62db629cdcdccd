"""Settings resolution and backend selection tests."""

from __future__ import annotations

from packit.adapters.backend.http import HttpPackingBackend
from packit.adapters.backend.memory import InMemoryPackingBackend
from packit.adapters.factory import get_backend
from packit.application.context import make_app_context
from packit.application.wizard import PackingWizard
from packit.config.settings import PackitSettings, resolve_backend_mode, resolve_settings


def test_defaults_use_memory_backend():
    settings = resolve_settings()

    assert settings.backend == "memory"
    assert settings.api_base_url == ""
    assert settings.api_token is None
    assert settings.http_timeout_seconds == 10.0
    assert settings.user_id == "anonymous"
    assert settings.default_limit_kg == 23.0
    assert settings.log_events is True


def test_base_url_implies_http_unless_overridden(monkeypatch):
    monkeypatch.setenv("PACKIT_API_BASE_URL", "https://api.example.test/")
    assert resolve_backend_mode() == "http"
    assert resolve_settings().api_base_url == "https://api.example.test"

    monkeypatch.setenv("PACKIT_BACKEND", "Memory")
    assert resolve_backend_mode() == "memory"


def test_invalid_numbers_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("PACKIT_HTTP_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("PACKIT_DEFAULT_LIMIT_KG", "-3")
    settings = resolve_settings()

    assert settings.http_timeout_seconds == 10.0
    assert settings.default_limit_kg == 23.0


def test_non_finite_numbers_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("PACKIT_HTTP_TIMEOUT_SECONDS", "1e999")
    monkeypatch.setenv("PACKIT_DEFAULT_LIMIT_KG", "inf")
    settings = resolve_settings()

    assert settings.http_timeout_seconds == 10.0
    assert settings.default_limit_kg == 23.0


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PACKIT_HTTP_TIMEOUT_SECONDS", "3.5")
    monkeypatch.setenv("PACKIT_DEFAULT_LIMIT_KG", "32")
    monkeypatch.setenv("PACKIT_USER_ID", " traveler-7 ")
    monkeypatch.setenv("PACKIT_API_TOKEN", " secret-token ")
    monkeypatch.setenv("PACKIT_LOG_EVENTS", "off")
    settings = resolve_settings()

    assert settings.http_timeout_seconds == 3.5
    assert settings.default_limit_kg == 32
    assert settings.user_id == "traveler-7"
    assert settings.api_token == "secret-token"
    assert settings.log_events is False


def test_factory_selects_backend():
    assert isinstance(get_backend(PackitSettings()), InMemoryPackingBackend)
    assert isinstance(get_backend(PackitSettings(backend="http")), InMemoryPackingBackend)
    http = get_backend(PackitSettings(backend="http", api_base_url="https://api.example.test"))
    assert isinstance(http, HttpPackingBackend)


def test_app_context_builds_wizard_with_default_limit():
    ctx = make_app_context(PackitSettings(default_limit_kg=32, user_id="u9", log_events=False))
    wizard = ctx.new_wizard()

    assert isinstance(wizard, PackingWizard)
    assert wizard.draft.airline_limit == 32
