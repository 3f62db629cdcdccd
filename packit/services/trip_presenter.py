"""Presentation helpers for the trip summary and trip list."""

from __future__ import annotations

from typing import Any, Optional

from packit.domain.calculations import trip_duration_days, weight_status
from packit.domain.models import CanonicalTrip, Item, PackingStep


def _steps(trip: CanonicalTrip) -> list[PackingStep]:
    if trip.packing_plan is not None and trip.packing_plan.steps:
        return list(trip.packing_plan.steps)
    return list(trip.packing_steps)


def _ordered_items(trip: CanonicalTrip) -> list[Item]:
    if trip.packing_plan is not None and trip.packing_plan.ordered_items:
        return list(trip.packing_plan.ordered_items)
    return list(trip.items)


def _suitcase_liters(trip: CanonicalTrip) -> Optional[float]:
    if trip.suitcase_size_l:
        return trip.suitcase_size_l
    if trip.packing_plan is not None:
        return trip.packing_plan.suitcase.volume_liters
    return None


def present_trip_summary(trip: CanonicalTrip) -> dict[str, Any]:
    status = weight_status(trip.total_weight, trip.airline_limit)
    return {
        "id": trip.id,
        "destination": trip.destination or "Trip",
        "start_date": trip.start_date,
        "end_date": trip.end_date,
        "duration_days": trip_duration_days(trip.start_date, trip.end_date),
        "airline": trip.airline,
        "travel_class": trip.travel_class,
        "purpose": trip.purpose,
        "status": trip.status,
        "total_weight_kg": trip.total_weight,
        "airline_limit_kg": trip.airline_limit,
        "weight_percentage": round(status.percentage, 1),
        "is_over_limit": status.is_over_limit,
        "is_near_limit": status.is_near_limit,
        "suitcase_size_l": _suitcase_liters(trip),
        "ordered_items": [item.name for item in _ordered_items(trip)],
        "steps": [step.model_dump(exclude_none=True) for step in _steps(trip)],
        "accepted_recommendations": [s.text for s in trip.accepted_recommendations],
        "dropped_items": [item.name for item in trip.optimization.drop] if trip.optimization else [],
    }


def trip_card_line(trip: CanonicalTrip) -> str:
    dates = " - ".join(d for d in (trip.start_date, trip.end_date) if d)
    parts = [trip.destination or "Trip"]
    if dates:
        parts.append(dates)
    parts.append(f"{trip.total_weight:.1f}/{trip.airline_limit:.0f} kg")
    parts.append(trip.status)
    line = " | ".join(parts)
    return f"[{trip.id}] {line}" if trip.id else line


def format_trip_summary(summary: dict[str, Any]) -> str:
    lines: list[str] = []
    days = summary.get("duration_days")
    title = summary["destination"] + (f" ({days} days)" if days else "")
    lines.append(title)
    lines.append("=" * 50)
    lines.append(f"{summary['purpose']} | {summary['airline'] or 'airline n/a'} | {summary['travel_class']}")

    flag = ""
    if summary["is_over_limit"]:
        flag = "  OVER LIMIT"
    elif summary["is_near_limit"]:
        flag = "  near limit"
    lines.append(
        f"Weight: {summary['total_weight_kg']:.1f} / {summary['airline_limit_kg']:.0f} kg "
        f"({summary['weight_percentage']:.0f}%){flag}"
    )
    if summary.get("suitcase_size_l"):
        lines.append(f"Suitcase: {summary['suitcase_size_l']:.0f} L")

    if summary["accepted_recommendations"]:
        lines.append("Accepted suggestions: " + ", ".join(summary["accepted_recommendations"]))
    if summary["dropped_items"]:
        lines.append("Suggested to leave behind: " + ", ".join(summary["dropped_items"]))

    if summary["steps"]:
        lines.append("-" * 50)
        for number, step in enumerate(summary["steps"], start=1):
            lines.append(f"{number}. {step['title']}")
            if step.get("body"):
                lines.append(f"   {step['body']}")
            if step.get("items"):
                lines.append(f"   {', '.join(step['items'])}")
    elif summary["ordered_items"]:
        lines.append("-" * 50)
        lines.extend(f"- {name}" for name in summary["ordered_items"])
    return "\n".join(lines)


__all__ = ["format_trip_summary", "present_trip_summary", "trip_card_line"]
