"""Wizard orchestration tests against a scripted backend."""

from __future__ import annotations

import asyncio
import json

import pytest

from packit.application.state import WizardState
from packit.application.transitions import MSG_DETAILS_REQUIRED, MSG_ITEMS_REQUIRED
from packit.application.wizard import (
    MSG_LOOKUP_FAILED,
    MSG_SAVE_FAILED,
    MSG_STRATEGY_FAILED,
    MSG_SUGGESTIONS_FAILED,
    MSG_WEIGHTS_FAILED,
    PackingWizard,
)
from packit.domain.enums import WizardStep
from packit.domain.models import Item, TripDraft
from packit.ports.interfaces import (
    LuggageLookupResponse,
    OptimizationResponse,
    PackingStepsResponse,
    SaveTripResponse,
    SuggestionsResponse,
    WeightsResponse,
)
from packit.shared.exceptions import TransportError

UMBRELLA = {"id": "ai:umbrella", "text": "Umbrella", "category": "Other", "reason": "Rainy season", "selected": False}
SUNSCREEN = {"id": "ai:sunscreen", "text": "Sunscreen", "category": "Toiletries", "reason": "", "selected": False}

HEAVY = {"Coat": 5000, "Boots": 5000, "Laptop": 5000, "Camera": 4000, "Books": 3000, "Jeans": 2300}
LIGHT = {"Coat": 5000, "Boots": 5000, "Laptop": 5000, "Camera": 4000, "Books": 2000, "Jeans": 1900}


class ScriptedBackend:
    """Backend double: records calls, fails on demand, can hold a call until released."""

    def __init__(self, *, grams=None, fail=(), trip_id="trip-1"):
        self.calls: list[str] = []
        self.requests: dict[str, list] = {}
        self.fail = set(fail)
        self.gates: dict[str, asyncio.Event] = {}
        self.suggestions = [UMBRELLA]
        self.grams = dict(grams or {})
        self.trip_id = trip_id
        self.saved_payloads: list[dict] = []

    async def _enter(self, call, params):
        self.calls.append(call)
        self.requests.setdefault(call, []).append(params)
        gate = self.gates.get(call)
        if gate is not None:
            await gate.wait()
        if call in self.fail:
            raise TransportError(call, "HTTP 503: service unavailable", status_code=503)

    async def suggest(self, params):
        suggestions = list(self.suggestions)
        await self._enter("suggest", params)
        return SuggestionsResponse(suggestions=suggestions)

    async def estimate_weights(self, params):
        await self._enter("estimate_weights", params)
        items = [{**item, "aiWeight": self.grams.get(item["name"], 1000)} for item in params.items]
        return WeightsResponse(items=items, total_g=sum(i["aiWeight"] for i in items))

    async def optimize(self, params):
        await self._enter("optimize", params)
        return OptimizationResponse(
            keep=params.items[1:],
            drop=params.items[:1],
            total_g=sum(i["weight"] for i in params.items[1:]),
            limit_g=params.limit_kg * 1000,
        )

    async def packing_steps(self, params):
        await self._enter("packing_steps", params)
        return PackingStepsResponse(
            suitcase_size_l=params.suitcase_size_l,
            ordered_packing_list=params.items,
            steps=[{"title": "Pack", "items": [i["name"] for i in params.items]}],
        )

    async def lookup_luggage(self, params):
        await self._enter("lookup_luggage", params)
        return LuggageLookupResponse(dims={"lengthCm": 55, "widthCm": 40, "depthCm": 20}, liters=44)

    async def save_trip(self, params):
        self.saved_payloads.append(params.payload)
        await self._enter("save_trip", params)
        return SaveTripResponse(trip_id=params.trip_id or self.trip_id)

    async def save_items(self, params):
        await self._enter("save_items", params)

    async def fetch_trip(self, params):
        await self._enter("fetch_trip", params)
        return None

    async def list_trips(self, params):
        await self._enter("list_trips", params)
        return {"trips": []}


def _items(grams) -> list[Item]:
    return [Item(name=name) for name in grams]


def _wizard(backend, event_logger, *, step=WizardStep.ITEMS, items=None, **draft) -> PackingWizard:
    fields = dict(destination="Tokyo", start_date="2025-03-01", end_date="2025-03-10", airline="ANA")
    fields.update(draft)
    state = WizardState(step=step, draft=TripDraft(items=items if items is not None else [Item(name="Jacket")], **fields))
    return PackingWizard(backend, user_id="user-1", logger=event_logger, state=state)


async def _advance(wizard: PackingWizard, times: int) -> None:
    for _ in range(times):
        assert await wizard.next()


def _events(output) -> list[dict]:
    return [json.loads(line) for line in output.getvalue().splitlines() if line.strip()]


def test_details_guard_sets_error_without_calls(event_logger):
    backend = ScriptedBackend()
    wizard = PackingWizard(backend, user_id="user-1", logger=event_logger)

    assert asyncio.run(wizard.next()) is False
    assert wizard.step is WizardStep.DETAILS
    assert wizard.error == MSG_DETAILS_REQUIRED
    assert backend.calls == []

    wizard.update_details(destination="Tokyo", start_date="2025-03-01", end_date="2025-03-10")
    assert asyncio.run(wizard.next()) is True
    assert wizard.step is WizardStep.ITEMS
    assert wizard.error is None


def test_items_guard_then_add_item(event_logger):
    backend = ScriptedBackend()
    wizard = _wizard(backend, event_logger, items=[])

    assert asyncio.run(wizard.next()) is False
    assert wizard.error == MSG_ITEMS_REQUIRED

    wizard.add_item(Item(name="Jacket"))
    assert asyncio.run(wizard.next()) is True
    assert wizard.step is WizardStep.SUGGESTIONS
    assert backend.calls == ["suggest"]


def test_overweight_run_fetches_each_step_once_in_order(event_logger):
    backend = ScriptedBackend(grams=HEAVY)
    wizard = _wizard(backend, event_logger, items=_items(HEAVY))

    asyncio.run(_advance(wizard, 3))

    assert wizard.step is WizardStep.STRATEGY
    assert backend.calls == ["suggest", "estimate_weights", "optimize", "packing_steps"]
    assert wizard.draft.total_weight == pytest.approx(24.3)
    assert [i.weight for i in wizard.draft.items] == list(HEAVY.values())
    assert [i.name for i in wizard.draft.optimization.drop] == ["Coat"]
    assert wizard.draft.optimization.limit_grams == 23000
    assert wizard.weight_status().is_over_limit

    optimize_request = backend.requests["optimize"][0]
    assert optimize_request.limit_kg == 23
    assert [i["weight"] for i in optimize_request.items] == list(HEAVY.values())


def test_underweight_run_skips_optimization(event_logger):
    backend = ScriptedBackend(grams=LIGHT)
    wizard = _wizard(backend, event_logger, items=_items(LIGHT))

    asyncio.run(_advance(wizard, 3))

    assert backend.calls == ["suggest", "estimate_weights", "packing_steps"]
    assert wizard.draft.total_weight == pytest.approx(22.9)
    assert wizard.draft.optimization is None
    assert wizard.weight_status().is_near_limit


def test_revisiting_steps_does_not_refetch_loaded_data(event_logger):
    backend = ScriptedBackend()
    wizard = _wizard(backend, event_logger)

    async def scenario():
        await _advance(wizard, 3)
        wizard.back()
        wizard.back()
        await _advance(wizard, 2)

    asyncio.run(scenario())
    assert backend.calls == ["suggest", "estimate_weights", "packing_steps"]


def test_item_change_forces_weight_and_plan_refetch(event_logger):
    backend = ScriptedBackend()
    wizard = _wizard(backend, event_logger)

    async def scenario():
        await _advance(wizard, 3)
        wizard.back()
        wizard.back()
        wizard.back()
        wizard.add_item(Item(name="Socks", quantity=3))
        await _advance(wizard, 3)

    asyncio.run(scenario())
    assert backend.calls == [
        "suggest",
        "estimate_weights",
        "packing_steps",
        "estimate_weights",
        "packing_steps",
    ]
    assert wizard.draft.total_weight == pytest.approx(2.0)


def test_missing_ai_weight_counts_as_zero(event_logger):
    backend = ScriptedBackend()

    async def weights_without_ai(params):
        backend.calls.append("estimate_weights")
        return WeightsResponse(items=[{"name": "Jacket"}], total_g=0)

    backend.estimate_weights = weights_without_ai
    wizard = _wizard(backend, event_logger, items=[Item(name="Jacket"), Item(name="Hat")])
    asyncio.run(_advance(wizard, 2))

    assert [i.weight for i in wizard.draft.items] == [0, 0]
    assert wizard.draft.total_weight == 0
    assert wizard.error is None


def test_out_of_range_ai_weights_count_as_zero(event_logger):
    backend = ScriptedBackend()

    async def weights_out_of_range(params):
        backend.calls.append("estimate_weights")
        items = [{"name": "Jacket", "aiWeight": 10**400}, {"name": "Hat", "aiWeight": float("inf")}]
        return WeightsResponse(items=items, total_g=float("inf"))

    backend.estimate_weights = weights_out_of_range
    wizard = _wizard(backend, event_logger, items=[Item(name="Jacket"), Item(name="Hat")])
    asyncio.run(_advance(wizard, 2))

    assert [i.weight for i in wizard.draft.items] == [0, 0]
    assert wizard.draft.total_weight == 0
    assert "optimize" not in backend.calls
    assert wizard.error is None


def test_suggestion_failure_sets_message_and_retry_recovers(event_logger):
    backend = ScriptedBackend(fail={"suggest"})
    wizard = _wizard(backend, event_logger)

    assert asyncio.run(wizard.next()) is True
    assert wizard.step is WizardStep.SUGGESTIONS
    assert wizard.error == MSG_SUGGESTIONS_FAILED
    assert wizard.draft.suggestions == []
    assert wizard.loading is False

    backend.fail.clear()
    asyncio.run(wizard.retry())
    assert wizard.error is None
    assert [s.id for s in wizard.draft.suggestions] == ["ai:umbrella"]
    assert backend.calls == ["suggest", "suggest"]


def test_optimization_failure_leaves_draft_untouched(event_logger):
    backend = ScriptedBackend(grams=HEAVY, fail={"optimize"})
    wizard = _wizard(backend, event_logger, items=_items(HEAVY))

    asyncio.run(_advance(wizard, 2))

    assert wizard.step is WizardStep.WEIGHT
    assert wizard.error == MSG_WEIGHTS_FAILED
    assert wizard.draft.total_weight == 0
    assert all(i.weight is None for i in wizard.draft.items)
    assert wizard.draft.optimization is None


def test_strategy_failure_message(event_logger):
    backend = ScriptedBackend(fail={"packing_steps"})
    wizard = _wizard(backend, event_logger)

    asyncio.run(_advance(wizard, 3))

    assert wizard.error == MSG_STRATEGY_FAILED
    assert wizard.draft.packing_plan is None


def test_packing_request_reflects_selection_and_suitcase(event_logger):
    backend = ScriptedBackend()
    wizard = _wizard(backend, event_logger, items=[Item(name="Socks", quantity=3)])

    async def scenario():
        await _advance(wizard, 1)
        wizard.toggle_suggestion("ai:umbrella")
        wizard.add_custom_suggestion("Travel pillow")
        wizard.set_suitcase_size(60)
        await _advance(wizard, 2)

    asyncio.run(scenario())
    request = backend.requests["packing_steps"][0]
    assert [r["id"] for r in request.recommendations_selected] == ["ai:umbrella", "custom:travel-pillow"]
    assert request.suitcase_size_l == 60
    assert request.suitcase_dims is None
    assert request.items[0]["count"] == 3
    assert request.items[0]["aiWeight"] == 1000
    assert wizard.draft.packing_plan.suitcase.volume_liters == 60
    assert wizard.draft.packing_plan.steps[0].items == ["Socks"]


def test_save_persists_trip_then_items(event_logger, event_output):
    backend = ScriptedBackend()
    wizard = _wizard(backend, event_logger)

    async def scenario():
        await _advance(wizard, 1)
        wizard.toggle_suggestion("ai:umbrella")
        await _advance(wizard, 2)
        return await wizard.next()

    assert asyncio.run(scenario()) is True
    assert wizard.step is WizardStep.SAVED
    assert wizard.saved_trip_id == "trip-1"
    assert backend.calls[-2:] == ["save_trip", "save_items"]

    save = backend.requests["save_trip"][0]
    assert save.uid == "user-1"
    assert save.trip_id is None
    assert save.payload["destination"] == "Tokyo"
    assert [r["id"] for r in save.payload["acceptedRecommendations"]] == ["ai:umbrella"]
    assert backend.requests["save_items"][0].trip_id == "trip-1"
    assert backend.requests["save_items"][0].items[0]["name"] == "Jacket"

    assert asyncio.run(wizard.next()) is False
    assert wizard.back() is False
    assert any(e["event"] == "summary" and e["trip_id"] == "trip-1" for e in _events(event_output))


def test_failed_save_returns_to_strategy_and_retry_reuses_payload(event_logger):
    backend = ScriptedBackend(fail={"save_items"})
    wizard = _wizard(backend, event_logger)
    asyncio.run(_advance(wizard, 3))

    assert asyncio.run(wizard.next()) is False
    assert wizard.step is WizardStep.STRATEGY
    assert wizard.error == MSG_SAVE_FAILED
    assert wizard.state.pending_trip_id == "trip-1"
    assert wizard.draft.packing_plan is not None

    backend.fail.clear()
    assert asyncio.run(wizard.next()) is True
    assert wizard.step is WizardStep.SAVED
    assert backend.requests["save_trip"][1].trip_id == "trip-1"
    assert backend.saved_payloads[0] == backend.saved_payloads[1]


def test_save_without_trip_id_is_a_failure(event_logger):
    backend = ScriptedBackend(trip_id="")
    wizard = _wizard(backend, event_logger)
    asyncio.run(_advance(wizard, 3))

    assert asyncio.run(wizard.next()) is False
    assert wizard.error == MSG_SAVE_FAILED
    assert "save_items" not in backend.calls


def test_luggage_lookup_updates_suitcase(event_logger):
    backend = ScriptedBackend()
    wizard = _wizard(backend, event_logger)

    assert asyncio.run(wizard.lookup_luggage("carry-on")) is True
    assert wizard.draft.suitcase.volume_liters == 44
    assert wizard.draft.suitcase.dims.depth_cm == 20
    assert asyncio.run(wizard.lookup_luggage("   ")) is False
    assert backend.calls == ["lookup_luggage"]


def test_luggage_lookup_failure(event_logger):
    backend = ScriptedBackend(fail={"lookup_luggage"})
    wizard = _wizard(backend, event_logger)

    assert asyncio.run(wizard.lookup_luggage("carry-on")) is False
    assert wizard.error == MSG_LOOKUP_FAILED
    assert wizard.draft.suitcase.dims is None


def test_stale_response_is_discarded_and_step_refetches(event_logger, event_output):
    backend = ScriptedBackend()
    wizard = _wizard(backend, event_logger)

    async def scenario():
        gate = asyncio.Event()
        backend.gates["suggest"] = gate
        first = asyncio.create_task(wizard.next())
        while "suggest" not in backend.calls:
            await asyncio.sleep(0)
        assert wizard.loading

        assert wizard.back() is True
        assert await wizard.next() is True
        assert backend.calls == ["suggest"]

        backend.suggestions = [SUNSCREEN]
        del backend.gates["suggest"]
        gate.set()
        await first

    asyncio.run(scenario())
    assert backend.calls == ["suggest", "suggest"]
    assert [s.id for s in wizard.draft.suggestions] == ["ai:sunscreen"]
    assert wizard.loading is False
    assert wizard.error is None
    assert any(e["event"] == "warning" and "stale" in e["message"] for e in _events(event_output))


def test_stale_response_after_leaving_step_is_dropped(event_logger):
    backend = ScriptedBackend()
    wizard = _wizard(backend, event_logger)

    async def scenario():
        gate = asyncio.Event()
        backend.gates["suggest"] = gate
        first = asyncio.create_task(wizard.next())
        while "suggest" not in backend.calls:
            await asyncio.sleep(0)
        wizard.back()
        gate.set()
        await first

    asyncio.run(scenario())
    assert wizard.step is WizardStep.ITEMS
    assert wizard.draft.suggestions == []
    assert wizard.loading is False
    assert backend.calls == ["suggest"]
