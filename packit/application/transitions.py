"""Pure wizard transitions: ``WizardState`` in, new ``WizardState`` out.

Edits that change what the weight or packing steps were computed from go
through ``invalidate`` so derived figures are never shown against a stale
item set.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any, Optional

from packit.application.normalizer import coerce_dims
from packit.application.state import WizardState
from packit.application.suggestions import (
    add_custom_suggestion as _add_custom,
    find_suggestion,
    replace_ai_suggestions,
    suggestion_to_item,
    toggle_suggestion as _toggle,
)
from packit.domain.constants import DEFAULT_AIRLINE_LIMIT_KG
from packit.domain.enums import STEP_ORDER, WizardStep
from packit.domain.exceptions import StepValidationError
from packit.domain.models import Item, OptimizationResult, PackingPlan, SuitcaseDims, SuitcaseSpec

DETAIL_FIELDS = frozenset(
    {"destination", "start_date", "end_date", "airline", "travel_class", "purpose", "airline_limit"}
)
DIM_SIDES = ("length_cm", "width_cm", "depth_cm")

MSG_DETAILS_REQUIRED = "Please fill in all required fields"
MSG_ITEMS_REQUIRED = "Please add at least one item to your packing list"


def _with_draft(state: WizardState, **updates: Any) -> WizardState:
    return state.model_copy(update={"draft": state.draft.model_copy(update=updates)})


def invalidate(state: WizardState, *, weight: bool = True) -> WizardState:
    """Drop derived results. ``weight=False`` keeps weight/optimization and drops only the plan."""
    updates: dict[str, Any] = {"packing_plan": None}
    if weight:
        updates.update(total_weight=0.0, optimization=None)
    invalidated = _with_draft(state, **updates)
    return invalidated.model_copy(update={"epoch": state.epoch + 1})


# ── Trip details ─────────────────────────────────────


def _parse_limit(value: Any) -> float:
    try:
        limit = float(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_AIRLINE_LIMIT_KG
    return limit if math.isfinite(limit) and limit > 0 else DEFAULT_AIRLINE_LIMIT_KG


def update_details(state: WizardState, **fields: Any) -> WizardState:
    unknown = set(fields) - DETAIL_FIELDS
    if unknown:
        raise ValueError(f"Unknown trip detail field(s): {', '.join(sorted(unknown))}")
    updates: dict[str, Any] = {}
    for key, value in fields.items():
        if key == "airline_limit":
            updates[key] = _parse_limit(value)
        else:
            updates[key] = "" if value is None else str(value).strip()
    return _with_draft(state, **updates)


# ── Items ────────────────────────────────────────────


def add_item(state: WizardState, item: Item) -> WizardState:
    return invalidate(_with_draft(state, items=[*state.draft.items, item]))


def remove_item(state: WizardState, index: int) -> WizardState:
    items = state.draft.items
    if not 0 <= index < len(items):
        return state
    return invalidate(_with_draft(state, items=[it for i, it in enumerate(items) if i != index]))


# ── Suggestions ──────────────────────────────────────


def apply_suggestions(state: WizardState, raw: Any) -> WizardState:
    return _with_draft(state, suggestions=replace_ai_suggestions(raw))


def toggle_suggestion(state: WizardState, suggestion_id: str, selected: Optional[bool] = None) -> WizardState:
    suggestions = _toggle(state.draft.suggestions, suggestion_id, selected)
    if suggestions is state.draft.suggestions:
        return state
    return invalidate(_with_draft(state, suggestions=suggestions))


def add_custom_suggestion(state: WizardState, text: str) -> WizardState:
    suggestions = _add_custom(state.draft.suggestions, text)
    if suggestions is state.draft.suggestions:
        return state
    # new entries arrive selected
    return invalidate(_with_draft(state, suggestions=suggestions), weight=False)


def add_suggestion_to_items(state: WizardState, suggestion_id: str) -> WizardState:
    suggestion = find_suggestion(state.draft.suggestions, suggestion_id)
    if suggestion is None:
        return state
    return add_item(state, suggestion_to_item(suggestion))


# ── Suitcase ─────────────────────────────────────────


def set_suitcase_size(state: WizardState, liters: float) -> WizardState:
    if liters <= 0:
        return state
    suitcase = state.draft.suitcase.model_copy(update={"volume_liters": float(liters)})
    return invalidate(_with_draft(state, suitcase=suitcase))


def set_suitcase_dim(state: WizardState, side: str, value: Any) -> WizardState:
    """Edit one side; litres follow the dims only once all three sides are positive."""
    if side not in DIM_SIDES:
        raise ValueError(f"Unknown suitcase side: {side}")
    current = state.draft.suitcase
    sides = (current.dims or SuitcaseDims()).model_dump()
    dims = SuitcaseDims.model_validate({**sides, side: value})
    liters = dims.liters()
    suitcase = SuitcaseSpec(volume_liters=liters if liters is not None else current.volume_liters, dims=dims)
    return invalidate(_with_draft(state, suitcase=suitcase))


def apply_luggage_lookup(state: WizardState, dims_raw: Any, liters: Optional[float]) -> WizardState:
    dims = coerce_dims(dims_raw)
    if dims is None:
        return state
    volume = liters if liters else state.draft.suitcase.volume_liters
    return invalidate(_with_draft(state, suitcase=SuitcaseSpec(volume_liters=volume, dims=dims)))


# ── Fetch results ────────────────────────────────────


def apply_weights(
    state: WizardState,
    items: list[Item],
    total_kg: float,
    optimization: Optional[OptimizationResult],
) -> WizardState:
    return _with_draft(state, items=items, total_weight=total_kg, optimization=optimization)


def apply_packing_plan(state: WizardState, plan: PackingPlan) -> WizardState:
    return _with_draft(state, packing_plan=plan)


def begin_fetch(state: WizardState) -> WizardState:
    return state.model_copy(update={"loading": True, "error": None})


def end_fetch(state: WizardState, *, error: Optional[str] = None) -> WizardState:
    return state.model_copy(update={"loading": False, "error": error})


# ── Navigation ───────────────────────────────────────


def _guard_details(state: WizardState) -> Optional[str]:
    draft = state.draft
    if not draft.destination or not draft.start_date or not draft.end_date:
        return MSG_DETAILS_REQUIRED
    return None


def _guard_items(state: WizardState) -> Optional[str]:
    return None if state.draft.items else MSG_ITEMS_REQUIRED


EXIT_GUARDS: dict[WizardStep, Callable[[WizardState], Optional[str]]] = {
    WizardStep.DETAILS: _guard_details,
    WizardStep.ITEMS: _guard_items,
}


def check_exit(state: WizardState) -> None:
    guard = EXIT_GUARDS.get(state.step)
    message = guard(state) if guard else None
    if message:
        raise StepValidationError(state.step.value, message)


def advance(state: WizardState) -> WizardState:
    """Move one step forward. Raises ``StepValidationError`` when the exit guard fails."""
    if state.step not in STEP_ORDER or state.step is STEP_ORDER[-1]:
        return state
    check_exit(state)
    nxt = STEP_ORDER[STEP_ORDER.index(state.step) + 1]
    return state.model_copy(update={"step": nxt, "error": None, "epoch": state.epoch + 1})


def retreat(state: WizardState) -> WizardState:
    if state.step not in STEP_ORDER or state.step is STEP_ORDER[0]:
        return state
    prev = STEP_ORDER[STEP_ORDER.index(state.step) - 1]
    return state.model_copy(update={"step": prev, "error": None, "epoch": state.epoch + 1})


__all__ = [
    "DETAIL_FIELDS",
    "EXIT_GUARDS",
    "MSG_DETAILS_REQUIRED",
    "MSG_ITEMS_REQUIRED",
    "add_custom_suggestion",
    "add_item",
    "add_suggestion_to_items",
    "advance",
    "apply_luggage_lookup",
    "apply_packing_plan",
    "apply_suggestions",
    "apply_weights",
    "begin_fetch",
    "check_exit",
    "end_fetch",
    "invalidate",
    "remove_item",
    "retreat",
    "set_suitcase_dim",
    "set_suitcase_size",
    "toggle_suggestion",
    "update_details",
]
