"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from packit.adapters.factory import get_backend
from packit.application.state_factory import make_initial_state
from packit.application.wizard import PackingWizard
from packit.config.settings import PackitSettings, resolve_settings
from packit.infrastructure.logging import StructuredLogger, get_logger, make_null_logger
from packit.ports.interfaces import PackingBackend


@dataclass
class AppContext:
    settings: PackitSettings
    backend: PackingBackend
    logger: StructuredLogger

    def new_wizard(self) -> PackingWizard:
        return PackingWizard(
            self.backend,
            user_id=self.settings.user_id,
            logger=self.logger,
            state=make_initial_state(airline_limit=self.settings.default_limit_kg),
        )


def make_app_context(settings: Optional[PackitSettings] = None) -> AppContext:
    settings = settings or resolve_settings()
    if not settings.log_events:
        logger = make_null_logger()
    elif settings.api_token:
        logger = StructuredLogger(secrets=(settings.api_token,))
    else:
        logger = get_logger()
    return AppContext(settings=settings, backend=get_backend(settings), logger=logger)


__all__ = ["AppContext", "make_app_context"]
