"""Trip summary presentation tests."""

from __future__ import annotations

from packit.application.normalizer import normalize_trip
from packit.services.trip_presenter import format_trip_summary, present_trip_summary, trip_card_line


def _record() -> dict:
    return {
        "id": "t1",
        "destination": "Tokyo",
        "startDate": "2025-03-01",
        "endDate": "2025-03-10",
        "airline": "ANA",
        "purpose": "Vacation",
        "airlineLimitKg": 23,
        "totalWeightKg": 21,
        "suitcaseSizeL": 60,
        "acceptedRecommendations": [{"id": "ai:umbrella", "text": "Umbrella", "selected": True}],
        "packingSteps": [{"title": "Shoes first", "body": "Along the wheels"}],
        "items": [{"name": "Boots", "category": "Shoes"}, {"name": "Coat", "category": "Clothing"}],
    }


def test_summary_projection():
    summary = present_trip_summary(normalize_trip(_record()))

    assert summary["destination"] == "Tokyo"
    assert summary["duration_days"] == 9
    assert summary["is_near_limit"] is True
    assert summary["is_over_limit"] is False
    assert summary["weight_percentage"] == round(21 / 23 * 100, 1)
    assert summary["suitcase_size_l"] == 60
    assert summary["ordered_items"] == ["Boots", "Coat"]
    assert summary["steps"] == [{"title": "Shoes first", "body": "Along the wheels"}]
    assert summary["accepted_recommendations"] == ["Umbrella"]
    assert summary["dropped_items"] == []


def test_plan_steps_and_order_take_precedence():
    record = _record()
    record["packingPlan"] = {
        "orderedPackingList": [{"name": "Coat"}, {"name": "Boots"}],
        "steps": [{"title": "Layer one", "items": ["Coat"]}],
    }
    summary = present_trip_summary(normalize_trip(record))

    assert summary["ordered_items"] == ["Coat", "Boots"]
    assert summary["steps"] == [{"title": "Layer one", "items": ["Coat"]}]


def test_summary_defaults_for_sparse_record():
    summary = present_trip_summary(normalize_trip({"tripId": "x"}))

    assert summary["destination"] == "Trip"
    assert summary["duration_days"] is None
    assert summary["airline_limit_kg"] == 23
    assert summary["suitcase_size_l"] is None
    assert summary["steps"] == []


def test_format_trip_summary_text():
    text = format_trip_summary(present_trip_summary(normalize_trip(_record())))

    assert text.splitlines()[0] == "Tokyo (9 days)"
    assert "Weight: 21.0 / 23 kg (91%)  near limit" in text
    assert "Accepted suggestions: Umbrella" in text
    assert "1. Shoes first" in text


def test_trip_card_line():
    assert trip_card_line(normalize_trip(_record())) == "[t1] Tokyo | 2025-03-01 - 2025-03-10 | 21.0/23 kg | completed"
    assert trip_card_line(normalize_trip({"destination": "Oslo"})) == "Oslo | 0.0/23 kg | completed"
