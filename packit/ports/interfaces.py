"""Backend collaborator protocol and wire schemas.

Requests serialize with camelCase aliases (``model_dump(by_alias=True)``).
Responses are forgiving: every field has a default and
collection fields coerce anything that is not a list into an empty list, so
schema drift on the AI side degrades to "no data" instead of an exception.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packit.domain.constants import LUGGAGE_TYPE


class _Wire(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


# ── Requests ─────────────────────────────────────────


class TripDates(_Wire):
    start: str
    end: str


class SuggestionsRequest(_Wire):
    destination: str
    dates: TripDates
    airline: str = ""
    travel_class: str = Field(default="Economy", alias="travelClass")
    purpose: str = ""
    items: list[dict[str, Any]] = Field(default_factory=list)


class WeightsRequest(_Wire):
    items: list[dict[str, Any]] = Field(default_factory=list)


class OptimizeRequest(_Wire):
    items: list[dict[str, Any]] = Field(default_factory=list)
    limit_kg: float = Field(alias="limitKg")


class PackingStepsRequest(_Wire):
    items: list[dict[str, Any]] = Field(default_factory=list)
    recommendations_selected: list[dict[str, Any]] = Field(
        default_factory=list, alias="recommendationsSelected"
    )
    suitcase_size_l: float = Field(alias="suitcaseSizeL")
    suitcase_dims: Optional[dict[str, float]] = Field(default=None, alias="suitcaseDims")
    luggage_type: str = Field(default=LUGGAGE_TYPE, alias="luggageType")


class LuggageLookupRequest(_Wire):
    query: str


class SaveTripRequest(_Wire):
    uid: str
    trip_id: Optional[str] = Field(default=None, alias="tripId")
    payload: dict[str, Any]


class SaveItemsRequest(_Wire):
    uid: str
    trip_id: str = Field(alias="tripId")
    items: list[dict[str, Any]] = Field(default_factory=list)


class FetchTripRequest(_Wire):
    uid: str
    trip_id: str = Field(alias="tripId")


class ListTripsRequest(_Wire):
    uid: str


# ── Responses ────────────────────────────────────────


class SuggestionsResponse(_Wire):
    suggestions: list[Any] = Field(default_factory=list)

    @field_validator("suggestions", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[Any]:
        return _as_list(value)


class WeightsResponse(_Wire):
    items: list[Any] = Field(default_factory=list)
    total_g: float = Field(default=0.0, alias="totalG")

    @field_validator("items", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[Any]:
        return _as_list(value)

    @field_validator("total_g", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return _as_number(value)


class OptimizationResponse(_Wire):
    keep: list[Any] = Field(default_factory=list)
    drop: list[Any] = Field(default_factory=list)
    total_g: float = Field(default=0.0, alias="totalG")
    limit_g: float = Field(default=0.0, alias="limitG")

    @field_validator("keep", "drop", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[Any]:
        return _as_list(value)

    @field_validator("total_g", "limit_g", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return _as_number(value)


class PackingStepsResponse(_Wire):
    suitcase_size_l: Optional[float] = Field(default=None, alias="suitcaseSizeL")
    suitcase_dims: Optional[dict[str, Any]] = Field(default=None, alias="suitcaseDims")
    ordered_packing_list: list[Any] = Field(default_factory=list, alias="orderedPackingList")
    steps: list[Any] = Field(default_factory=list)

    @field_validator("ordered_packing_list", "steps", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[Any]:
        return _as_list(value)

    @field_validator("suitcase_size_l", mode="before")
    @classmethod
    def _coerce_liters(cls, value: Any) -> Optional[float]:
        number = _as_number(value)
        return number if number > 0 else None

    @field_validator("suitcase_dims", mode="before")
    @classmethod
    def _coerce_dims(cls, value: Any) -> Optional[dict[str, Any]]:
        return value if isinstance(value, dict) else None


class LuggageLookupResponse(_Wire):
    dims: Optional[dict[str, Any]] = None
    liters: Optional[float] = None

    @field_validator("dims", mode="before")
    @classmethod
    def _coerce_dims(cls, value: Any) -> Optional[dict[str, Any]]:
        return value if isinstance(value, dict) else None

    @field_validator("liters", mode="before")
    @classmethod
    def _coerce_liters(cls, value: Any) -> Optional[float]:
        number = _as_number(value)
        return number if number > 0 else None


class SaveTripResponse(_Wire):
    trip_id: Optional[str] = Field(default=None, alias="tripId")

    @field_validator("trip_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return str(value)


@runtime_checkable
class PackingBackend(Protocol):
    async def suggest(self, params: SuggestionsRequest) -> SuggestionsResponse: ...

    async def estimate_weights(self, params: WeightsRequest) -> WeightsResponse: ...

    async def optimize(self, params: OptimizeRequest) -> OptimizationResponse: ...

    async def packing_steps(self, params: PackingStepsRequest) -> PackingStepsResponse: ...

    async def lookup_luggage(self, params: LuggageLookupRequest) -> LuggageLookupResponse: ...

    async def save_trip(self, params: SaveTripRequest) -> SaveTripResponse: ...

    async def save_items(self, params: SaveItemsRequest) -> None: ...

    async def fetch_trip(self, params: FetchTripRequest) -> Any: ...

    async def list_trips(self, params: ListTripsRequest) -> Any: ...


__all__ = [
    "FetchTripRequest",
    "ListTripsRequest",
    "LuggageLookupRequest",
    "LuggageLookupResponse",
    "OptimizationResponse",
    "OptimizeRequest",
    "PackingBackend",
    "PackingStepsRequest",
    "PackingStepsResponse",
    "SaveItemsRequest",
    "SaveTripRequest",
    "SaveTripResponse",
    "SuggestionsRequest",
    "SuggestionsResponse",
    "TripDates",
    "WeightsRequest",
    "WeightsResponse",
]
