"""Builders turning the draft into backend requests and the persistence payload."""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from packit.application.suggestions import selected_suggestions
from packit.domain.constants import DEFAULT_SUITCASE_L, LUGGAGE_TYPE
from packit.domain.models import Item, PackingPlan, TripDraft
from packit.ports.interfaces import (
    OptimizeRequest,
    PackingStepsRequest,
    SuggestionsRequest,
    TripDates,
    WeightsRequest,
)


def item_to_wire(item: Item) -> dict[str, Any]:
    return item.model_dump(mode="json")


def item_for_packing(item: Item) -> dict[str, Any]:
    """Wire item with ``count`` and ``aiWeight`` filled the way the steps endpoint reads them."""
    wire = item_to_wire(item)
    count = wire.get("quantity")
    if count is None:
        count = wire.get("qty")
    weight = wire.get("weight")
    if weight is None:
        weight = wire.get("aiWeight")
    wire["count"] = 1 if count is None else count
    wire["aiWeight"] = 0 if weight is None else weight
    return wire


def build_suggestions_request(draft: TripDraft) -> SuggestionsRequest:
    return SuggestionsRequest(
        destination=draft.destination,
        dates=TripDates(start=draft.start_date, end=draft.end_date),
        airline=draft.airline,
        travel_class=draft.travel_class,
        purpose=draft.purpose,
        items=[item_to_wire(i) for i in draft.items],
    )


def build_weights_request(draft: TripDraft) -> WeightsRequest:
    return WeightsRequest(items=[item_to_wire(i) for i in draft.items])


def build_optimize_request(items: list[Item], limit_kg: float) -> OptimizeRequest:
    return OptimizeRequest(items=[item_to_wire(i) for i in items], limit_kg=limit_kg)


def _dims_wire(draft: TripDraft) -> Optional[dict[str, float]]:
    dims = draft.suitcase.dims
    return dims.to_wire() if dims is not None else None


def build_packing_request(draft: TripDraft) -> PackingStepsRequest:
    return PackingStepsRequest(
        items=[item_for_packing(i) for i in draft.items],
        recommendations_selected=[s.model_dump() for s in selected_suggestions(draft.suggestions)],
        suitcase_size_l=draft.suitcase.volume_liters or DEFAULT_SUITCASE_L,
        suitcase_dims=_dims_wire(draft),
        luggage_type=LUGGAGE_TYPE,
    )


def plan_to_wire(plan: Optional[PackingPlan]) -> Optional[dict[str, Any]]:
    """Packing plan in the same shape the steps endpoint returned it."""
    if plan is None:
        return None
    dims = plan.suitcase.dims
    return {
        "suitcaseSizeL": plan.suitcase.volume_liters,
        "suitcaseDims": dims.to_wire() if dims is not None else None,
        "orderedPackingList": [item_to_wire(i) for i in plan.ordered_items],
        "steps": [s.model_dump(exclude_none=True) for s in plan.steps],
    }


def build_trip_payload(draft: TripDraft, *, created_at: Optional[str] = None) -> dict[str, Any]:
    optimization = draft.optimization
    return {
        "destination": draft.destination,
        "startDate": draft.start_date,
        "endDate": draft.end_date,
        "airline": draft.airline,
        "travelClass": draft.travel_class,
        "purpose": draft.purpose,
        "status": "completed",
        "airlineLimitKg": draft.airline_limit,
        "totalWeightKg": draft.total_weight,
        "suitcaseSizeL": draft.suitcase.volume_liters,
        "suitcaseDims": _dims_wire(draft),
        "acceptedRecommendations": [s.model_dump() for s in selected_suggestions(draft.suggestions)],
        "packingPlan": plan_to_wire(draft.packing_plan),
        "packingSteps": [s.model_dump(exclude_none=True) for s in draft.packing_plan.steps]
        if draft.packing_plan
        else [],
        "optimization": {
            "keep": [item_to_wire(i) for i in optimization.keep],
            "drop": [item_to_wire(i) for i in optimization.drop],
            "totalG": optimization.total_grams,
            "limitG": optimization.limit_grams,
        }
        if optimization
        else None,
        "createdAt": created_at or dt.datetime.now(dt.timezone.utc).isoformat(),
    }


__all__ = [
    "build_optimize_request",
    "build_packing_request",
    "build_suggestions_request",
    "build_trip_payload",
    "build_weights_request",
    "item_for_packing",
    "item_to_wire",
    "plan_to_wire",
]
