"""Read-only trip retrieval service."""

from __future__ import annotations

from typing import Optional

from packit.application.context import AppContext
from packit.application.normalizer import normalize_trip, normalize_trip_list
from packit.domain.models import CanonicalTrip
from packit.ports.interfaces import FetchTripRequest, ListTripsRequest
from packit.shared.exceptions import TransportError


async def load_trip_summary(*, ctx: AppContext, trip_id: str) -> Optional[CanonicalTrip]:
    """Fetch and normalize one trip; ``None`` when it cannot be found or fetched."""
    try:
        raw = await ctx.backend.fetch_trip(FetchTripRequest(uid=ctx.settings.user_id, trip_id=trip_id))
    except TransportError as e:
        ctx.logger.error("summary", str(e), call="fetch_trip", trip_id=trip_id)
        return None
    trip = normalize_trip(raw, trip_id=trip_id)
    if trip is None:
        ctx.logger.warning("summary", "trip not found", trip_id=trip_id)
    return trip


async def list_trips(*, ctx: AppContext) -> list[CanonicalTrip]:
    try:
        raw = await ctx.backend.list_trips(ListTripsRequest(uid=ctx.settings.user_id))
    except TransportError as e:
        ctx.logger.error("home", str(e), call="list_trips")
        return []
    return normalize_trip_list(raw)


__all__ = ["list_trips", "load_trip_summary"]
