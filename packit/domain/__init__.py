"""Domain package exports."""

from packit.domain.calculations import (
    WeightStatus,
    liters_from_dims,
    needs_optimization,
    to_kilograms,
    trip_duration_days,
    weight_status,
)
from packit.domain.constants import DEFAULT_AIRLINE_LIMIT_KG, DEFAULT_SUITCASE_L, SUITCASE_SIZES
from packit.domain.enums import STEP_ORDER, Category, TravelClass, WizardStep
from packit.domain.exceptions import DomainError, StepValidationError
from packit.domain.models import (
    CanonicalTrip,
    Item,
    OptimizationResult,
    PackingPlan,
    PackingStep,
    Suggestion,
    SuitcaseDims,
    SuitcaseSpec,
    TripDraft,
)

__all__ = [
    "CanonicalTrip",
    "Category",
    "DomainError",
    "Item",
    "OptimizationResult",
    "PackingPlan",
    "PackingStep",
    "STEP_ORDER",
    "StepValidationError",
    "Suggestion",
    "SuitcaseDims",
    "SuitcaseSpec",
    "TravelClass",
    "TripDraft",
    "WeightStatus",
    "WizardStep",
    "DEFAULT_AIRLINE_LIMIT_KG",
    "DEFAULT_SUITCASE_L",
    "SUITCASE_SIZES",
    "liters_from_dims",
    "needs_optimization",
    "to_kilograms",
    "trip_duration_days",
    "weight_status",
]
