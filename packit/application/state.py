"""Wizard session state: one immutable value replaced on every transition."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from packit.domain.enums import WizardStep
from packit.domain.models import TripDraft


class WizardState(BaseModel):
    model_config = ConfigDict(frozen=True)

    step: WizardStep = WizardStep.DETAILS
    draft: TripDraft = Field(default_factory=TripDraft)
    loading: bool = False
    error: Optional[str] = None
    # Bumped on every step entry and every invalidating edit; responses
    # captured under an older epoch are discarded.
    epoch: int = 0
    pending_trip_id: Optional[str] = None
    saved_trip_id: Optional[str] = None


__all__ = ["WizardState"]
