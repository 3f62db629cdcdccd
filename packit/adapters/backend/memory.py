"""In-process packing backend with deterministic rule-based answers.

Stands in for the AI and trip services when no backend URL is configured,
and backs the offline CLI flow and integration tests.
"""

from __future__ import annotations

import math
import re
import uuid
from collections import defaultdict
from typing import Any

from packit.domain.calculations import liters_from_dims
from packit.domain.enums import Category
from packit.ports.interfaces import (
    FetchTripRequest,
    ListTripsRequest,
    LuggageLookupRequest,
    LuggageLookupResponse,
    OptimizationResponse,
    OptimizeRequest,
    PackingStepsRequest,
    PackingStepsResponse,
    SaveItemsRequest,
    SaveTripRequest,
    SaveTripResponse,
    SuggestionsRequest,
    SuggestionsResponse,
    WeightsRequest,
    WeightsResponse,
)

CATEGORY_GRAMS: dict[str, float] = {
    Category.CLOTHING.value: 250.0,
    Category.TOILETRIES.value: 150.0,
    Category.ELECTRONICS.value: 400.0,
    Category.DOCUMENTS.value: 50.0,
    Category.MEDICATIONS.value: 80.0,
    Category.SHOES.value: 800.0,
    Category.ACCESSORIES.value: 120.0,
    Category.OTHER.value: 300.0,
}

KNOWN_GRAMS: dict[str, float] = {
    "laptop": 1500.0,
    "jacket": 900.0,
    "coat": 1200.0,
    "jeans": 600.0,
    "sweater": 500.0,
    "hiking boots": 1400.0,
    "sneakers": 850.0,
    "camera": 700.0,
    "hair dryer": 600.0,
    "book": 350.0,
    "umbrella": 400.0,
    "passport": 40.0,
    "sunglasses": 30.0,
}

ESSENTIALS: dict[str, tuple[str, str]] = {
    Category.DOCUMENTS.value: ("Passport", "Required for international travel"),
    Category.TOILETRIES.value: ("Toothbrush", "Daily hygiene"),
    Category.ELECTRONICS.value: ("Phone charger", "Keep your phone powered"),
    Category.MEDICATIONS.value: ("First-aid kit", "Minor injuries on the road"),
    Category.CLOTHING.value: ("Socks", "One pair per day plus a spare"),
}

PURPOSE_EXTRAS: dict[str, tuple[str, str, str]] = {
    "business": ("Laptop", Category.ELECTRONICS.value, "Work on the go"),
    "beach": ("Sunscreen", Category.TOILETRIES.value, "Strong sun exposure"),
    "adventure": ("Hiking boots", Category.SHOES.value, "Rough terrain"),
    "vacation": ("Sunglasses", Category.ACCESSORIES.value, "Sightseeing outdoors"),
}

# bottom of the suitcase first
PACKING_LAYERS: tuple[tuple[str, tuple[str, ...], str], ...] = (
    ("Bottom layer", (Category.SHOES.value,), "Heavy, structured items go along the wheels."),
    ("Core layer", (Category.CLOTHING.value,), "Roll clothing tightly to fill the middle."),
    (
        "Gaps and corners",
        (Category.TOILETRIES.value, Category.ACCESSORIES.value, Category.OTHER.value),
        "Fill gaps with small items; keep liquids sealed.",
    ),
    (
        "Top layer",
        (Category.ELECTRONICS.value, Category.DOCUMENTS.value, Category.MEDICATIONS.value),
        "Keep what you need at security or on arrival within reach.",
    ),
)

LUGGAGE_CATALOG: dict[str, tuple[float, float, float]] = {
    "carry-on": (55.0, 40.0, 20.0),
    "samsonite 21": (55.0, 40.0, 23.0),
    "medium": (68.0, 46.0, 27.0),
    "large": (79.0, 52.0, 31.0),
}

_DIMS_RE = re.compile(
    r"(?P<l>\d+(?:\.\d+)?)\s*[x×*]\s*(?P<w>\d+(?:\.\d+)?)\s*[x×*]\s*(?P<d>\d+(?:\.\d+)?)"
)


def _slug(text: str) -> str:
    return re.sub(r"\s+", "-", text.strip().lower())


def _count(item: dict[str, Any]) -> int:
    raw = item.get("quantity") or item.get("qty") or item.get("count") or 1
    try:
        return max(1, int(raw))
    except (TypeError, ValueError, OverflowError):
        return 1


def _category(item: dict[str, Any]) -> str:
    return Category.coerce(item.get("category")).value


def unit_grams(item: dict[str, Any]) -> float:
    name = str(item.get("name") or "").strip().lower()
    if name in KNOWN_GRAMS:
        return KNOWN_GRAMS[name]
    return CATEGORY_GRAMS[_category(item)]


def _item_grams(item: dict[str, Any]) -> float:
    weight = item.get("aiWeight") or item.get("weight")
    if isinstance(weight, (int, float)) and not isinstance(weight, bool) and weight > 0:
        try:
            grams = float(weight)
        except OverflowError:
            grams = math.inf
        if math.isfinite(grams):
            return grams
    return unit_grams(item) * _count(item)


class InMemoryPackingBackend:
    backend = "memory"

    def __init__(self) -> None:
        self.calls: list[str] = []
        self._trips: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)
        self._items: dict[tuple[str, str], list[dict[str, Any]]] = {}

    async def suggest(self, params: SuggestionsRequest) -> SuggestionsResponse:
        self.calls.append("suggest")
        have_names = {str(i.get("name", "")).strip().lower() for i in params.items}
        have_categories = {str(i.get("category", "")) for i in params.items}

        suggestions: list[dict[str, Any]] = []
        for category, (text, reason) in ESSENTIALS.items():
            if category in have_categories or text.lower() in have_names:
                continue
            suggestions.append(
                {"id": f"ai:{_slug(text)}", "text": text, "category": category, "reason": reason, "selected": False}
            )

        extra = PURPOSE_EXTRAS.get(params.purpose.strip().lower())
        if extra and extra[0].lower() not in have_names:
            text, category, reason = extra
            suggestions.append(
                {"id": f"ai:{_slug(text)}", "text": text, "category": category, "reason": reason, "selected": False}
            )
        return SuggestionsResponse(suggestions=suggestions)

    async def estimate_weights(self, params: WeightsRequest) -> WeightsResponse:
        self.calls.append("estimate_weights")
        weighed = [{**item, "aiWeight": unit_grams(item) * _count(item)} for item in params.items]
        return WeightsResponse(items=weighed, total_g=sum(i["aiWeight"] for i in weighed))

    async def optimize(self, params: OptimizeRequest) -> OptimizationResponse:
        """Drop the heaviest non-essential items until the bag fits."""
        self.calls.append("optimize")
        limit_g = params.limit_kg * 1000
        protected = {Category.DOCUMENTS.value, Category.MEDICATIONS.value}

        keep = list(params.items)
        drop: list[dict[str, Any]] = []
        total = sum(_item_grams(i) for i in keep)
        candidates = sorted(
            (i for i in keep if str(i.get("category")) not in protected),
            key=_item_grams,
            reverse=True,
        )
        for item in candidates:
            if total <= limit_g:
                break
            keep.remove(item)
            drop.append(item)
            total -= _item_grams(item)
        return OptimizationResponse(keep=keep, drop=drop, total_g=total, limit_g=limit_g)

    async def packing_steps(self, params: PackingStepsRequest) -> PackingStepsResponse:
        self.calls.append("packing_steps")
        liters: float = params.suitcase_size_l
        if params.suitcase_dims:
            dims = params.suitcase_dims
            computed = liters_from_dims(dims.get("lengthCm"), dims.get("widthCm"), dims.get("depthCm"))
            liters = computed or liters

        extras = [
            {"name": rec.get("text", ""), "quantity": 1, "category": rec.get("category", Category.OTHER.value)}
            for rec in params.recommendations_selected
            if rec.get("text")
        ]
        ordered: list[dict[str, Any]] = []
        steps: list[dict[str, Any]] = []
        for title, categories, body in PACKING_LAYERS:
            layer = [i for i in [*params.items, *extras] if _category(i) in categories]
            if not layer:
                continue
            layer.sort(key=_item_grams, reverse=True)
            ordered.extend(layer)
            steps.append({"title": title, "body": body, "items": [str(i.get("name", "")) for i in layer]})

        return PackingStepsResponse(
            suitcase_size_l=liters,
            suitcase_dims=params.suitcase_dims,
            ordered_packing_list=ordered,
            steps=steps,
        )

    async def lookup_luggage(self, params: LuggageLookupRequest) -> LuggageLookupResponse:
        self.calls.append("lookup_luggage")
        query = params.query.strip().lower()
        dims = LUGGAGE_CATALOG.get(query)
        if dims is None:
            match = _DIMS_RE.search(query)
            if match is None:
                return LuggageLookupResponse()
            dims = (float(match["l"]), float(match["w"]), float(match["d"]))
        length, width, depth = dims
        return LuggageLookupResponse(
            dims={"lengthCm": length, "widthCm": width, "depthCm": depth},
            liters=liters_from_dims(length, width, depth),
        )

    async def save_trip(self, params: SaveTripRequest) -> SaveTripResponse:
        self.calls.append("save_trip")
        trip_id = params.trip_id or uuid.uuid4().hex[:12]
        self._trips[params.uid][trip_id] = dict(params.payload)
        return SaveTripResponse(trip_id=trip_id)

    async def save_items(self, params: SaveItemsRequest) -> None:
        self.calls.append("save_items")
        self._items[(params.uid, params.trip_id)] = [dict(i) for i in params.items]

    async def fetch_trip(self, params: FetchTripRequest) -> Any:
        self.calls.append("fetch_trip")
        record = self._trips.get(params.uid, {}).get(params.trip_id)
        if record is None:
            return {"ok": False, "data": None}
        items = self._items.get((params.uid, params.trip_id), [])
        return {"ok": True, "data": {"trip": {**record, "id": params.trip_id, "items": items}}}

    async def list_trips(self, params: ListTripsRequest) -> Any:
        self.calls.append("list_trips")
        trips = [{**record, "id": trip_id} for trip_id, record in self._trips.get(params.uid, {}).items()]
        return {"trips": trips}


__all__ = ["InMemoryPackingBackend", "unit_grams"]
