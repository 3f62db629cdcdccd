"""Trip normalizer: persisted/fetched records of any known shape -> CanonicalTrip.

Trip records have been written under several naming conventions over time
(camelCase payloads, snake_case legacy rows, items nested in the trip or
returned next to it) and wrapped in different envelopes. Every helper here
is total: malformed input degrades to defaults, nothing raises.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Optional

from packit.application.suggestions import coerce_suggestions
from packit.domain.constants import DEFAULT_AIRLINE_LIMIT_KG, DEFAULT_SUITCASE_L
from packit.domain.enums import Category
from packit.domain.models import (
    CanonicalTrip,
    Item,
    OptimizationResult,
    PackingPlan,
    PackingStep,
    SuitcaseDims,
    SuitcaseSpec,
)

_ID_KEYS = ("id", "tripId", "trip_id")
_ITEM_FIELDS = {"name", "text", "quantity", "qty", "count", "category", "weight"}


def _first(record: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key that is present and not None/empty-string."""
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None


def _number(value: Any, default: Optional[float]) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


def _text(value: Any, default: str) -> str:
    return default if value is None or value == "" else str(value)


def _mapping(value: Any) -> Optional[Mapping[str, Any]]:
    return value if isinstance(value, Mapping) else None


# ── Nested values ────────────────────────────────────


def coerce_item(raw: Any) -> Optional[Item]:
    if isinstance(raw, Item):
        return raw
    if isinstance(raw, str):
        return Item(name=raw) if raw.strip() else None
    if not isinstance(raw, Mapping):
        return None
    name = _text(_first(raw, "name", "text"), "").strip()
    if not name:
        return None
    quantity = _number(_first(raw, "quantity", "qty", "count"), 1.0) or 1.0
    weight = _number(_first(raw, "weight", "aiWeight"), None)
    extras = {
        str(k): v
        for k, v in raw.items()
        if str(k) not in _ITEM_FIELDS and str(k).isidentifier() and not str(k).startswith("_")
    }
    return Item(
        **extras,
        name=name,
        quantity=max(1, int(quantity)),
        category=Category.coerce(raw.get("category")),
        weight=weight if weight is not None and weight >= 0 else None,
    )


def coerce_items(raw: Any) -> list[Item]:
    if not isinstance(raw, Sequence) or isinstance(raw, str):
        return []
    return [item for item in (coerce_item(entry) for entry in raw) if item is not None]


def _step_items(raw: Any) -> Optional[list[str]]:
    if not isinstance(raw, Sequence) or isinstance(raw, str):
        return None
    names: list[str] = []
    for entry in raw:
        if isinstance(entry, Mapping):
            entry = _first(entry, "name", "text")
        if entry is not None and str(entry).strip():
            names.append(str(entry))
    return names


def coerce_steps(raw: Any) -> list[PackingStep]:
    if not isinstance(raw, Sequence) or isinstance(raw, str):
        return []
    steps: list[PackingStep] = []
    for entry in raw:
        if isinstance(entry, str) and entry.strip():
            steps.append(PackingStep(title=entry))
            continue
        if not isinstance(entry, Mapping):
            continue
        title = _text(_first(entry, "title", "name"), "").strip()
        if not title:
            continue
        body = entry.get("body")
        steps.append(
            PackingStep(
                title=title,
                body=str(body) if body not in (None, "") else None,
                items=_step_items(entry.get("items")),
            )
        )
    return steps


def coerce_dims(raw: Any) -> Optional[SuitcaseDims]:
    mapping = _mapping(raw)
    if mapping is None:
        return None
    return SuitcaseDims(
        length_cm=_first(mapping, "lengthCm", "length_cm"),
        width_cm=_first(mapping, "widthCm", "width_cm"),
        depth_cm=_first(mapping, "depthCm", "depth_cm"),
    )


def coerce_plan(raw: Any, fallback: Optional[SuitcaseSpec] = None) -> Optional[PackingPlan]:
    mapping = _mapping(raw)
    if mapping is None:
        return None
    base = fallback or SuitcaseSpec()
    liters = _number(_first(mapping, "suitcaseSizeL", "suitcase_size_l"), None)
    dims = coerce_dims(_first(mapping, "suitcaseDims", "suitcase_dims"))
    return PackingPlan(
        suitcase=SuitcaseSpec(
            volume_liters=liters if liters and liters > 0 else base.volume_liters,
            dims=dims if dims is not None else base.dims,
        ),
        ordered_items=coerce_items(_first(mapping, "orderedPackingList", "ordered_packing_list", "ordered_items")),
        steps=coerce_steps(mapping.get("steps")),
    )


def coerce_optimization(raw: Any) -> Optional[OptimizationResult]:
    mapping = _mapping(raw)
    if mapping is None:
        return None
    return OptimizationResult(
        keep=coerce_items(mapping.get("keep")),
        drop=coerce_items(mapping.get("drop")),
        total_grams=_number(_first(mapping, "totalG", "total_grams"), 0.0) or 0.0,
        limit_grams=_number(_first(mapping, "limitG", "limit_grams"), 0.0) or 0.0,
    )


# ── Envelope extraction ──────────────────────────────


def _from_data_envelope(raw: Any) -> Optional[Mapping[str, Any]]:
    data = _mapping(raw.get("data")) if isinstance(raw, Mapping) else None
    return _mapping(data.get("trip")) if data is not None else None


def _from_trip_envelope(raw: Any) -> Optional[Mapping[str, Any]]:
    return _mapping(raw.get("trip")) if isinstance(raw, Mapping) else None


def _bare_record(raw: Any) -> Optional[Mapping[str, Any]]:
    return _mapping(raw)


# (strategy, whether the envelope itself marks its payload as a trip)
ENVELOPE_STRATEGIES: tuple[tuple[Callable[[Any], Optional[Mapping[str, Any]]], bool], ...] = (
    (_from_data_envelope, True),
    (_from_trip_envelope, True),
    (_bare_record, False),
)


def extract_trip_record(raw: Any) -> Optional[Mapping[str, Any]]:
    """First trip-shaped envelope candidate, else None.

    A bare record counts only when it carries a destination or an identity;
    anything under a ``trip`` key counts as long as it is a non-empty object.
    """
    for strategy, enveloped in ENVELOPE_STRATEGIES:
        candidate = strategy(raw)
        if not candidate:
            continue
        if enveloped or _first(candidate, "destination", *_ID_KEYS) is not None:
            return candidate
    return None


def _sibling_items(raw: Any) -> Any:
    if not isinstance(raw, Mapping):
        return None
    if isinstance(raw.get("items"), list):
        return raw["items"]
    data = _mapping(raw.get("data"))
    return data.get("items") if data is not None else None


def normalize_trip(raw: Any, trip_id: Optional[str] = None) -> Optional[CanonicalTrip]:
    """Build the canonical trip, or return None when no trip-shaped object exists."""
    record = extract_trip_record(raw)
    if record is None:
        return None

    items_raw = record.get("items") if isinstance(record.get("items"), list) else _sibling_items(raw)
    suitcase_size = _number(_first(record, "suitcaseSizeL", "suitcase_size_l"), None)
    dims = coerce_dims(_first(record, "suitcaseDims", "suitcase_dims"))
    fallback_suitcase = SuitcaseSpec(volume_liters=suitcase_size or DEFAULT_SUITCASE_L, dims=dims)
    record_id = _first(record, *_ID_KEYS)

    return CanonicalTrip(
        id=_text(record_id, "") or trip_id,
        destination=_text(record.get("destination"), ""),
        start_date=_text(_first(record, "startDate", "start_date"), "") or None,
        end_date=_text(_first(record, "endDate", "end_date"), "") or None,
        airline=_text(record.get("airline"), ""),
        travel_class=_text(_first(record, "travelClass", "travel_class"), "Economy"),
        purpose=_text(record.get("purpose"), "Trip"),
        status=_text(record.get("status"), "completed"),
        airline_limit=_number(_first(record, "airlineLimitKg", "airline_limit"), DEFAULT_AIRLINE_LIMIT_KG),
        total_weight=_number(_first(record, "totalWeightKg", "total_weight"), 0.0),
        suitcase_size_l=suitcase_size,
        suitcase_dims=dims,
        accepted_recommendations=coerce_suggestions(
            _first(record, "acceptedRecommendations", "accepted_recommendations")
        ),
        packing_plan=coerce_plan(_first(record, "packingPlan", "packing_plan"), fallback_suitcase),
        packing_steps=coerce_steps(_first(record, "packingSteps", "packing_steps")),
        items=coerce_items(items_raw),
        optimization=coerce_optimization(record.get("optimization")),
        created_at=_text(_first(record, "createdAt", "created_at"), "") or None,
    )


def _trip_list(raw: Any) -> list[Any]:
    if isinstance(raw, list):
        return raw
    if not isinstance(raw, Mapping):
        return []
    if isinstance(raw.get("trips"), list):
        return raw["trips"]
    data = raw.get("data")
    if isinstance(data, list):
        return data
    if isinstance(data, Mapping) and isinstance(data.get("trips"), list):
        return data["trips"]
    return []


def normalize_trip_list(raw: Any) -> list[CanonicalTrip]:
    trips = (normalize_trip(entry) for entry in _trip_list(raw))
    return [trip for trip in trips if trip is not None]


__all__ = [
    "ENVELOPE_STRATEGIES",
    "coerce_dims",
    "coerce_item",
    "coerce_items",
    "coerce_optimization",
    "coerce_plan",
    "coerce_steps",
    "extract_trip_record",
    "normalize_trip",
    "normalize_trip_list",
]
