"""Pydantic domain models."""

from __future__ import annotations

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packit.domain.calculations import liters_from_dims
from packit.domain.constants import DEFAULT_AIRLINE_LIMIT_KG, DEFAULT_SUITCASE_L
from packit.domain.enums import Category, TravelClass


class Item(BaseModel):
    # Backend echoes extra keys (aiWeight, qty, count); they ride along untouched.
    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    quantity: int = Field(default=1, ge=1)
    category: Category = Category.OTHER
    weight: Optional[float] = Field(default=None, description="Grams")

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> Category:
        return Category.coerce(value)


class Suggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    category: str = ""
    reason: str = ""
    selected: bool = False


class SuitcaseDims(BaseModel):
    """Suitcase dimensions in centimetres; any side may still be unset while the user types."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    length_cm: Optional[float] = Field(default=None, alias="lengthCm")
    width_cm: Optional[float] = Field(default=None, alias="widthCm")
    depth_cm: Optional[float] = Field(default=None, alias="depthCm")

    @field_validator("length_cm", "width_cm", "depth_cm", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return None
        return number if math.isfinite(number) else None

    def liters(self) -> Optional[int]:
        return liters_from_dims(self.length_cm, self.width_cm, self.depth_cm)

    def is_complete(self) -> bool:
        return self.liters() is not None

    def to_wire(self) -> Optional[dict[str, float]]:
        """Dims as the backend expects them, or None unless all three sides are positive."""
        if not self.is_complete():
            return None
        return self.model_dump(by_alias=True)


class SuitcaseSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    volume_liters: float = DEFAULT_SUITCASE_L
    dims: Optional[SuitcaseDims] = None


class OptimizationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    keep: list[Item] = Field(default_factory=list)
    drop: list[Item] = Field(default_factory=list)
    total_grams: float = 0.0
    limit_grams: float = 0.0


class PackingStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    body: Optional[str] = None
    items: Optional[list[str]] = None


class PackingPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    suitcase: SuitcaseSpec = Field(default_factory=SuitcaseSpec)
    ordered_items: list[Item] = Field(default_factory=list)
    steps: list[PackingStep] = Field(default_factory=list)


class TripDraft(BaseModel):
    """Working state of the trip while the wizard is open."""

    model_config = ConfigDict(frozen=True)

    destination: str = ""
    start_date: str = ""
    end_date: str = ""
    airline: str = ""
    travel_class: str = TravelClass.ECONOMY.value
    purpose: str = "Vacation"
    airline_limit: float = DEFAULT_AIRLINE_LIMIT_KG
    suitcase: SuitcaseSpec = Field(default_factory=SuitcaseSpec)
    items: list[Item] = Field(default_factory=list)
    suggestions: list[Suggestion] = Field(default_factory=list)
    total_weight: float = Field(default=0.0, description="Kilograms, 0 when stale")
    optimization: Optional[OptimizationResult] = None
    packing_plan: Optional[PackingPlan] = None


class CanonicalTrip(BaseModel):
    """Read-only projection of a persisted trip, whatever shape the record came in."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    destination: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    airline: str = ""
    travel_class: str = TravelClass.ECONOMY.value
    purpose: str = "Trip"
    status: str = "completed"
    airline_limit: float = DEFAULT_AIRLINE_LIMIT_KG
    total_weight: float = 0.0
    suitcase_size_l: Optional[float] = None
    suitcase_dims: Optional[SuitcaseDims] = None
    accepted_recommendations: list[Suggestion] = Field(default_factory=list)
    packing_plan: Optional[PackingPlan] = None
    packing_steps: list[PackingStep] = Field(default_factory=list)
    items: list[Item] = Field(default_factory=list)
    optimization: Optional[OptimizationResult] = None
    created_at: Optional[str] = None
