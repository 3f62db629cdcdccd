"""Factory for the initial wizard state."""

from __future__ import annotations

from packit.application.state import WizardState
from packit.domain.constants import DEFAULT_AIRLINE_LIMIT_KG
from packit.domain.models import TripDraft


def make_initial_state(*, airline_limit: float = DEFAULT_AIRLINE_LIMIT_KG) -> WizardState:
    return WizardState(draft=TripDraft(airline_limit=airline_limit))


__all__ = ["make_initial_state"]
