"""Derived luggage figures: unit conversion, suitcase volume, limit classification."""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import Any, Optional

from packit.domain.constants import NEAR_LIMIT_RATIO


@dataclass(frozen=True)
class WeightStatus:
    is_over_limit: bool
    is_near_limit: bool
    percentage: float


def to_kilograms(grams: float) -> float:
    return grams / 1000


def _positive_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def liters_from_dims(length_cm: Any, width_cm: Any, depth_cm: Any) -> Optional[int]:
    """Volume in whole litres, or None unless every side is a positive number."""
    sides = [_positive_number(v) for v in (length_cm, width_cm, depth_cm)]
    if any(side is None for side in sides):
        return None
    length, width, depth = sides
    volume = length * width * depth / 1000
    if not math.isfinite(volume):
        return None
    # half-up, not banker's rounding
    return int(math.floor(volume + 0.5))


def needs_optimization(total_kg: float, limit_kg: float) -> bool:
    return total_kg > limit_kg


def weight_status(total_kg: float, limit_kg: float) -> WeightStatus:
    is_over = total_kg > limit_kg
    is_near = total_kg > limit_kg * NEAR_LIMIT_RATIO and not is_over
    percentage = min(total_kg / limit_kg * 100, 100.0) if limit_kg else 0.0
    return WeightStatus(is_over_limit=is_over, is_near_limit=is_near, percentage=percentage)


def _parse_date(value: Any) -> Optional[dt.datetime]:
    text = str(value or "").strip()
    if not text:
        return None
    try:
        return dt.datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def trip_duration_days(start: Any, end: Any) -> Optional[int]:
    start_dt = _parse_date(start)
    end_dt = _parse_date(end)
    if start_dt is None or end_dt is None:
        return None
    if (start_dt.tzinfo is None) != (end_dt.tzinfo is None):
        start_dt = start_dt.replace(tzinfo=None)
        end_dt = end_dt.replace(tzinfo=None)
    days = math.ceil((end_dt - start_dt).total_seconds() / 86400)
    return days if days > 0 else 1


__all__ = [
    "WeightStatus",
    "liters_from_dims",
    "needs_optimization",
    "to_kilograms",
    "trip_duration_days",
    "weight_status",
]
