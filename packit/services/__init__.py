"""Service layer public exports."""

from packit.services.trip_presenter import format_trip_summary, present_trip_summary, trip_card_line
from packit.services.trip_service import list_trips, load_trip_summary

__all__ = ["format_trip_summary", "list_trips", "load_trip_summary", "present_trip_summary", "trip_card_line"]
