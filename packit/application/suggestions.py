"""Suggestion list management: AI replacement, custom entries, selection."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from packit.domain.enums import Category
from packit.domain.models import Item, Suggestion

CUSTOM_PREFIX = "custom:"
CUSTOM_CATEGORY = "custom"
CUSTOM_REASON = "User-added"

_WHITESPACE = re.compile(r"\s+")


def custom_suggestion_id(text: str) -> str:
    return CUSTOM_PREFIX + _WHITESPACE.sub("-", text.strip().lower())


def _coerce_suggestion(raw: Any) -> Optional[Suggestion]:
    if isinstance(raw, Suggestion):
        return raw
    if isinstance(raw, str):
        raw = {"text": raw}
    if not isinstance(raw, Mapping):
        return None
    text = str(raw.get("text") or raw.get("name") or "").strip()
    if not text:
        return None
    sid = str(raw.get("id") or "").strip() or _WHITESPACE.sub("-", text.lower())
    return Suggestion(
        id=sid,
        text=text,
        category=str(raw.get("category") or ""),
        reason=str(raw.get("reason") or ""),
        selected=bool(raw.get("selected", False)),
    )


def coerce_suggestions(raw: Any) -> list[Suggestion]:
    """Lenient list conversion; skips unusable entries, first occurrence of an id wins."""
    if not isinstance(raw, (list, tuple)):
        return []
    seen: set[str] = set()
    result: list[Suggestion] = []
    for entry in raw:
        suggestion = _coerce_suggestion(entry)
        if suggestion is None or suggestion.id in seen:
            continue
        seen.add(suggestion.id)
        result.append(suggestion)
    return result


def replace_ai_suggestions(raw: Any) -> list[Suggestion]:
    """A fresh AI response replaces the whole list; nothing is merged."""
    return coerce_suggestions(raw)


def add_custom_suggestion(suggestions: list[Suggestion], text: str) -> list[Suggestion]:
    cleaned = (text or "").strip()
    if not cleaned:
        return suggestions
    sid = custom_suggestion_id(cleaned)
    if any(s.id == sid for s in suggestions):
        return suggestions
    entry = Suggestion(id=sid, text=cleaned, category=CUSTOM_CATEGORY, reason=CUSTOM_REASON, selected=True)
    return [*suggestions, entry]


def toggle_suggestion(
    suggestions: list[Suggestion],
    suggestion_id: str,
    selected: Optional[bool] = None,
) -> list[Suggestion]:
    """Flip (or set) the selection of one entry. Unknown ids leave the list as is."""
    if not any(s.id == suggestion_id for s in suggestions):
        return suggestions
    return [
        s.model_copy(update={"selected": (not s.selected) if selected is None else selected})
        if s.id == suggestion_id
        else s
        for s in suggestions
    ]


def selected_suggestions(suggestions: Iterable[Suggestion]) -> list[Suggestion]:
    return [s for s in suggestions if s.selected]


def find_suggestion(suggestions: Iterable[Suggestion], suggestion_id: str) -> Optional[Suggestion]:
    return next((s for s in suggestions if s.id == suggestion_id), None)


def suggestion_to_item(suggestion: Suggestion) -> Item:
    return Item(name=suggestion.text, quantity=1, category=Category.OTHER)


__all__ = [
    "CUSTOM_PREFIX",
    "add_custom_suggestion",
    "coerce_suggestions",
    "custom_suggestion_id",
    "find_suggestion",
    "replace_ai_suggestions",
    "selected_suggestions",
    "suggestion_to_item",
    "toggle_suggestion",
]
