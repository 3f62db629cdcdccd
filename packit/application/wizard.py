"""Packing wizard orchestration.

DETAILS → ITEMS → SUGGESTIONS → WEIGHT → STRATEGY → (SAVING) → SAVED

Navigation and edits go through the pure functions in ``transitions``;
this class owns the session (current ``WizardState``, backend, logger) and
the on-enter actions that fetch data for SUGGESTIONS, WEIGHT and STRATEGY.

Each fetch captures ``state.epoch`` when it starts. A response that comes
back after the epoch moved on (the user navigated or edited meanwhile) is
dropped, and the current step's action runs again if its data is still
missing.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from packit.application import transitions as tr
from packit.application.normalizer import coerce_items, coerce_plan
from packit.application.requests import (
    build_optimize_request,
    build_packing_request,
    build_suggestions_request,
    build_trip_payload,
    build_weights_request,
    item_to_wire,
)
from packit.application.state import WizardState
from packit.application.state_factory import make_initial_state
from packit.domain.calculations import WeightStatus, needs_optimization, to_kilograms, weight_status
from packit.domain.enums import WizardStep
from packit.domain.exceptions import StepValidationError
from packit.domain.models import Item, OptimizationResult, PackingPlan, TripDraft
from packit.infrastructure.logging import StructuredLogger, get_logger
from packit.ports.interfaces import (
    LuggageLookupRequest,
    PackingBackend,
    SaveItemsRequest,
    SaveTripRequest,
)
from packit.shared.exceptions import TransportError

MSG_SUGGESTIONS_FAILED = "Failed to get AI suggestions. Please check your backend connection."
MSG_WEIGHTS_FAILED = "Failed to calculate weights. Please check your backend connection."
MSG_STRATEGY_FAILED = "Failed to get packing strategy. Please check your backend connection."
MSG_LOOKUP_FAILED = "Could not look up suitcase info."
MSG_SAVE_FAILED = "Failed to save trip. Please try again."

Transition = Callable[[WizardState], WizardState]
Loader = Callable[[TripDraft], Awaitable[Transition]]


@dataclass(frozen=True)
class StepAction:
    call: str
    needed: Callable[[WizardState], bool]
    load: Loader
    error_message: str


def _ai_weight(weighed: list[Any], index: int) -> float:
    entry = weighed[index] if index < len(weighed) else None
    if not isinstance(entry, Mapping):
        return 0.0
    value = entry.get("aiWeight")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if value <= 0:
        return 0.0
    try:
        weight = float(value)
    except OverflowError:
        return 0.0
    return weight if math.isfinite(weight) else 0.0


class PackingWizard:
    """One authoring session. Not shared between users or trips."""

    def __init__(
        self,
        backend: PackingBackend,
        *,
        user_id: str,
        logger: Optional[StructuredLogger] = None,
        state: Optional[WizardState] = None,
    ):
        self._backend = backend
        self._user_id = user_id
        self._logger = logger or get_logger()
        self._state = state or make_initial_state()
        self._save_payload: Optional[tuple[int, dict[str, Any]]] = None
        self._on_enter: dict[WizardStep, StepAction] = {
            WizardStep.SUGGESTIONS: StepAction(
                call="suggest",
                needed=lambda s: not s.draft.suggestions,
                load=self._load_suggestions,
                error_message=MSG_SUGGESTIONS_FAILED,
            ),
            WizardStep.WEIGHT: StepAction(
                call="estimate_weights",
                needed=lambda s: s.draft.total_weight == 0,
                load=self._load_weights,
                error_message=MSG_WEIGHTS_FAILED,
            ),
            WizardStep.STRATEGY: StepAction(
                call="packing_steps",
                needed=lambda s: s.draft.packing_plan is None,
                load=self._load_packing_plan,
                error_message=MSG_STRATEGY_FAILED,
            ),
        }

    # ── Read access ──────────────────────────────────

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def step(self) -> WizardStep:
        return self._state.step

    @property
    def draft(self) -> TripDraft:
        return self._state.draft

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def saved_trip_id(self) -> Optional[str]:
        return self._state.saved_trip_id

    def weight_status(self) -> WeightStatus:
        return weight_status(self.draft.total_weight, self.draft.airline_limit)

    # ── Edits ────────────────────────────────────────

    def update_details(self, **fields: Any) -> None:
        self._state = tr.update_details(self._state, **fields)

    def add_item(self, item: Item) -> None:
        self._state = tr.add_item(self._state, item)

    def remove_item(self, index: int) -> None:
        self._state = tr.remove_item(self._state, index)

    def toggle_suggestion(self, suggestion_id: str, selected: Optional[bool] = None) -> None:
        self._state = tr.toggle_suggestion(self._state, suggestion_id, selected)

    def add_custom_suggestion(self, text: str) -> None:
        self._state = tr.add_custom_suggestion(self._state, text)

    def add_suggestion_to_items(self, suggestion_id: str) -> None:
        self._state = tr.add_suggestion_to_items(self._state, suggestion_id)

    def set_suitcase_size(self, liters: float) -> None:
        self._state = tr.set_suitcase_size(self._state, liters)

    def set_suitcase_dim(self, side: str, value: Any) -> None:
        self._state = tr.set_suitcase_dim(self._state, side, value)

    # ── Navigation ───────────────────────────────────

    async def next(self) -> bool:
        """Advance one step (or save from STRATEGY). Returns False when nothing moved."""
        step = self._state.step
        if step in (WizardStep.SAVING, WizardStep.SAVED):
            return False
        if step is WizardStep.STRATEGY:
            if self._state.loading:
                return False
            return await self._save()

        try:
            self._state = tr.advance(self._state)
        except StepValidationError as e:
            self._state = self._state.model_copy(update={"error": str(e)})
            self._logger.warning(e.step, str(e))
            return False

        self._logger.step_enter(self._state.step.value, epoch=self._state.epoch)
        await self._run_on_enter()
        return True

    def back(self) -> bool:
        if self._state.step in (WizardStep.SAVING, WizardStep.SAVED):
            return False
        moved = tr.retreat(self._state)
        if moved is self._state:
            return False
        self._state = moved
        self._logger.step_enter(moved.step.value, epoch=moved.epoch)
        return True

    async def retry(self) -> None:
        """Re-run the current step's fetch when its data is still missing."""
        await self._run_on_enter()

    async def lookup_luggage(self, query: str) -> bool:
        if self._state.loading or not query.strip():
            return False

        async def load(_: TripDraft) -> Transition:
            resp = await self._backend.lookup_luggage(LuggageLookupRequest(query=query.strip()))
            return lambda s: tr.apply_luggage_lookup(s, resp.dims, resp.liters)

        return await self._fetch("lookup_luggage", load, MSG_LOOKUP_FAILED)

    # ── On-enter actions ─────────────────────────────

    async def _run_on_enter(self) -> None:
        action = self._on_enter.get(self._state.step)
        if action is None or self._state.loading or not action.needed(self._state):
            return
        await self._fetch(action.call, action.load, action.error_message)

    async def _fetch(self, call: str, load: Loader, error_message: str) -> bool:
        epoch = self._state.epoch
        step = self._state.step.value
        self._state = tr.begin_fetch(self._state)
        self._logger.fetch_start(call, step=step, epoch=epoch)

        apply: Optional[Transition] = None
        failure: Optional[str] = None
        try:
            apply = await load(self._state.draft)
        except asyncio.CancelledError:
            self._state = tr.end_fetch(self._state)
            raise
        except Exception as e:
            failure = str(e)

        if self._state.epoch != epoch:
            self._state = tr.end_fetch(self._state)
            self._logger.fetch_end(call, ok=False, stale=True)
            self._logger.warning(step, f"discarded stale {call} response", epoch=epoch)
            await self._run_on_enter()
            return False

        if failure is not None or apply is None:
            self._state = tr.end_fetch(self._state, error=error_message)
            self._logger.fetch_end(call, ok=False)
            self._logger.error(step, failure or "empty loader result", call=call)
            return False

        self._state = tr.end_fetch(apply(self._state))
        self._logger.fetch_end(call, ok=True)
        return True

    async def _load_suggestions(self, draft: TripDraft) -> Transition:
        resp = await self._backend.suggest(build_suggestions_request(draft))
        return lambda s: tr.apply_suggestions(s, resp.suggestions)

    async def _load_weights(self, draft: TripDraft) -> Transition:
        resp = await self._backend.estimate_weights(build_weights_request(draft))
        weighed = [
            item.model_copy(update={"weight": _ai_weight(resp.items, i)})
            for i, item in enumerate(draft.items)
        ]
        total_kg = to_kilograms(resp.total_g)

        # optimize reads the weights computed above
        optimization: Optional[OptimizationResult] = None
        if needs_optimization(total_kg, draft.airline_limit):
            opt = await self._backend.optimize(build_optimize_request(weighed, draft.airline_limit))
            optimization = OptimizationResult(
                keep=coerce_items(opt.keep),
                drop=coerce_items(opt.drop),
                total_grams=opt.total_g,
                limit_grams=opt.limit_g,
            )
        return lambda s: tr.apply_weights(s, weighed, total_kg, optimization)

    async def _load_packing_plan(self, draft: TripDraft) -> Transition:
        resp = await self._backend.packing_steps(build_packing_request(draft))
        plan = coerce_plan(resp.model_dump(by_alias=True), draft.suitcase) or PackingPlan(suitcase=draft.suitcase)
        return lambda s: tr.apply_packing_plan(s, plan)

    # ── Save ─────────────────────────────────────────

    def _payload(self) -> dict[str, Any]:
        # A retry after a failed save resends the same payload unless the draft changed.
        epoch = self._state.epoch
        if self._save_payload is None or self._save_payload[0] != epoch:
            self._save_payload = (epoch, build_trip_payload(self._state.draft))
        return self._save_payload[1]

    async def _save(self) -> bool:
        payload = self._payload()
        self._state = self._state.model_copy(
            update={"step": WizardStep.SAVING, "loading": True, "error": None}
        )
        self._logger.step_enter(WizardStep.SAVING.value)
        self._logger.fetch_start("save_trip")
        try:
            resp = await self._backend.save_trip(
                SaveTripRequest(uid=self._user_id, trip_id=self._state.pending_trip_id, payload=payload)
            )
            trip_id = resp.trip_id or self._state.pending_trip_id
            if not trip_id:
                raise TransportError("save_trip", "response did not include a tripId")
            self._state = self._state.model_copy(update={"pending_trip_id": trip_id})

            await self._backend.save_items(
                SaveItemsRequest(
                    uid=self._user_id,
                    trip_id=trip_id,
                    items=[item_to_wire(i) for i in self._state.draft.items],
                )
            )
        except asyncio.CancelledError:
            self._state = self._state.model_copy(update={"step": WizardStep.STRATEGY, "loading": False})
            raise
        except Exception as e:
            self._state = self._state.model_copy(
                update={"step": WizardStep.STRATEGY, "loading": False, "error": MSG_SAVE_FAILED}
            )
            self._logger.fetch_end("save_trip", ok=False)
            self._logger.error(WizardStep.STRATEGY.value, str(e), call="save_trip")
            return False

        self._state = self._state.model_copy(
            update={"step": WizardStep.SAVED, "loading": False, "saved_trip_id": trip_id}
        )
        self._logger.fetch_end("save_trip", ok=True, trip_id=trip_id)
        self._logger.summary(
            trip_id=trip_id,
            items=len(self.draft.items),
            total_weight_kg=self.draft.total_weight,
            accepted_recommendations=len(payload["acceptedRecommendations"]),
        )
        return True


__all__ = [
    "MSG_LOOKUP_FAILED",
    "MSG_SAVE_FAILED",
    "MSG_STRATEGY_FAILED",
    "MSG_SUGGESTIONS_FAILED",
    "MSG_WEIGHTS_FAILED",
    "PackingWizard",
    "StepAction",
]
