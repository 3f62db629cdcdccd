"""Request and persistence payload builder tests."""

from __future__ import annotations

from packit.application.requests import (
    build_optimize_request,
    build_packing_request,
    build_suggestions_request,
    build_trip_payload,
    item_for_packing,
)
from packit.domain.models import (
    Item,
    OptimizationResult,
    PackingPlan,
    PackingStep,
    Suggestion,
    SuitcaseDims,
    SuitcaseSpec,
    TripDraft,
)


def _draft(**updates) -> TripDraft:
    base = TripDraft(
        destination="Tokyo",
        start_date="2025-03-01",
        end_date="2025-03-10",
        airline="ANA",
        items=[Item(name="Jacket", category="Clothing", weight=900)],
        suggestions=[
            Suggestion(id="ai:umbrella", text="Umbrella", selected=True),
            Suggestion(id="ai:hat", text="Hat", selected=False),
        ],
    )
    return base.model_copy(update=updates)


def test_item_for_packing_defaults_count_and_weight():
    plain = item_for_packing(Item(name="Socks", quantity=3))
    legacy = item_for_packing(Item(name="Hat", aiWeight=120))

    assert plain["count"] == 3
    assert plain["aiWeight"] == 0
    assert legacy["aiWeight"] == 120


def test_suggestions_request_wire_shape():
    body = build_suggestions_request(_draft()).model_dump(by_alias=True, mode="json")

    assert body["destination"] == "Tokyo"
    assert body["dates"] == {"start": "2025-03-01", "end": "2025-03-10"}
    assert body["travelClass"] == "Economy"
    assert body["items"][0]["category"] == "Clothing"


def test_optimize_request_carries_limit():
    body = build_optimize_request([Item(name="Coat")], 23).model_dump(by_alias=True)
    assert body["limitKg"] == 23
    assert body["items"][0]["name"] == "Coat"


def test_packing_request_uses_selected_suggestions_and_complete_dims_only():
    partial = _draft(suitcase=SuitcaseSpec(volume_liters=60, dims=SuitcaseDims(length_cm=55)))
    body = build_packing_request(partial).model_dump(by_alias=True)

    assert [r["id"] for r in body["recommendationsSelected"]] == ["ai:umbrella"]
    assert body["suitcaseSizeL"] == 60
    assert body["suitcaseDims"] is None
    assert body["luggageType"] == "suitcase"
    assert body["items"][0]["aiWeight"] == 900

    complete = _draft(suitcase=SuitcaseSpec(dims=SuitcaseDims(length_cm=55, width_cm=40, depth_cm=20)))
    dims = build_packing_request(complete).model_dump(by_alias=True)["suitcaseDims"]
    assert dims == {"lengthCm": 55, "widthCm": 40, "depthCm": 20}


def test_trip_payload_shape():
    draft = _draft(
        total_weight=24.3,
        optimization=OptimizationResult(drop=[Item(name="Boots")], total_grams=24300, limit_grams=23000),
        packing_plan=PackingPlan(steps=[PackingStep(title="Bottom", items=["Boots"])]),
    )
    payload = build_trip_payload(draft, created_at="2025-02-01T00:00:00+00:00")

    assert payload["status"] == "completed"
    assert payload["airlineLimitKg"] == 23
    assert payload["totalWeightKg"] == 24.3
    assert [r["text"] for r in payload["acceptedRecommendations"]] == ["Umbrella"]
    assert payload["packingSteps"] == [{"title": "Bottom", "items": ["Boots"]}]
    assert payload["packingPlan"]["suitcaseSizeL"] == 40
    assert payload["optimization"]["drop"][0]["name"] == "Boots"
    assert payload["createdAt"] == "2025-02-01T00:00:00+00:00"


def test_trip_payload_without_plan_or_optimization():
    payload = build_trip_payload(_draft())

    assert payload["packingPlan"] is None
    assert payload["packingSteps"] == []
    assert payload["optimization"] is None
    assert payload["createdAt"]
