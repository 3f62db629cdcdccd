"""Packing backend adapter over HTTP/JSON."""

from __future__ import annotations

import logging
from typing import Any

from packit.adapters.backend.parsing import decode_response
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
from packit.security.http_client import SecureHttpClient

_logger = logging.getLogger("packit.backend.http")

PATHS: dict[str, str] = {
    "suggest": "/gemini/suggest",
    "estimate_weights": "/gemini/weight",
    "optimize": "/gemini/optimize",
    "packing_steps": "/gemini/steps",
    "lookup_luggage": "/luggage/lookup",
    "save_trip": "/trips/save",
    "save_items": "/trips/items",
    "fetch_trip": "/trips/get",
    "list_trips": "/trips/list",
}


class HttpPackingBackend:
    backend = "http"

    def __init__(self, http: SecureHttpClient):
        self._http = http

    async def _post(self, call: str, params: Any) -> Any:
        body = params.model_dump(by_alias=True, mode="json")
        _logger.debug("POST %s", PATHS[call])
        return await self._http.post_json(call, PATHS[call], body)

    async def suggest(self, params: SuggestionsRequest) -> SuggestionsResponse:
        return decode_response(SuggestionsResponse, await self._post("suggest", params), "suggest")

    async def estimate_weights(self, params: WeightsRequest) -> WeightsResponse:
        raw = await self._post("estimate_weights", params)
        return decode_response(WeightsResponse, raw, "estimate_weights")

    async def optimize(self, params: OptimizeRequest) -> OptimizationResponse:
        return decode_response(OptimizationResponse, await self._post("optimize", params), "optimize")

    async def packing_steps(self, params: PackingStepsRequest) -> PackingStepsResponse:
        raw = await self._post("packing_steps", params)
        return decode_response(PackingStepsResponse, raw, "packing_steps")

    async def lookup_luggage(self, params: LuggageLookupRequest) -> LuggageLookupResponse:
        raw = await self._post("lookup_luggage", params)
        return decode_response(LuggageLookupResponse, raw, "lookup_luggage")

    async def save_trip(self, params: SaveTripRequest) -> SaveTripResponse:
        return decode_response(SaveTripResponse, await self._post("save_trip", params), "save_trip")

    async def save_items(self, params: SaveItemsRequest) -> None:
        await self._post("save_items", params)

    async def fetch_trip(self, params: FetchTripRequest) -> Any:
        return await self._post("fetch_trip", params)

    async def list_trips(self, params: ListTripsRequest) -> Any:
        return await self._post("list_trips", params)


__all__ = ["HttpPackingBackend", "PATHS"]
