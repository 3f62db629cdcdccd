"""Suggestion list management tests."""

from __future__ import annotations

from packit.application.suggestions import (
    add_custom_suggestion,
    custom_suggestion_id,
    find_suggestion,
    replace_ai_suggestions,
    selected_suggestions,
    suggestion_to_item,
    toggle_suggestion,
)
from packit.domain.enums import Category
from packit.domain.models import Suggestion


def _ai_list() -> list[Suggestion]:
    return replace_ai_suggestions(
        [
            {"id": "ai:umbrella", "text": "Umbrella", "category": "Other", "reason": "Rainy season"},
            {"id": "ai:adapter", "text": "Plug adapter", "category": "Electronics", "selected": True},
        ]
    )


def test_custom_suggestion_id_is_normalized_slug():
    assert custom_suggestion_id("Sunglasses") == "custom:sunglasses"
    assert custom_suggestion_id("  Travel   Pillow ") == "custom:travel-pillow"


def test_add_custom_suggestion_twice_keeps_one_entry():
    first = add_custom_suggestion([], "Sunglasses")
    second = add_custom_suggestion(first, "sunglasses ")

    assert [s.id for s in first] == ["custom:sunglasses"]
    assert second is first
    entry = first[0]
    assert entry.selected is True
    assert entry.category == "custom"
    assert entry.reason == "User-added"


def test_add_custom_suggestion_ignores_blank_text():
    suggestions = _ai_list()
    assert add_custom_suggestion(suggestions, "   ") is suggestions


def test_replace_ai_suggestions_replaces_and_skips_junk():
    raw = [
        {"id": "a", "text": "Alpha"},
        {"id": "a", "text": "Duplicate"},
        None,
        {"text": ""},
        "Umbrella",
    ]
    suggestions = replace_ai_suggestions(raw)

    assert [(s.id, s.text) for s in suggestions] == [("a", "Alpha"), ("umbrella", "Umbrella")]
    assert replace_ai_suggestions("not a list") == []


def test_toggle_flips_and_sets_selection():
    suggestions = _ai_list()

    flipped = toggle_suggestion(suggestions, "ai:umbrella")
    assert find_suggestion(flipped, "ai:umbrella").selected is True
    assert find_suggestion(suggestions, "ai:umbrella").selected is False

    forced = toggle_suggestion(flipped, "ai:adapter", selected=True)
    assert find_suggestion(forced, "ai:adapter").selected is True


def test_toggle_unknown_id_is_noop():
    suggestions = _ai_list()
    assert toggle_suggestion(suggestions, "ai:missing") is suggestions


def test_selected_suggestions():
    assert [s.id for s in selected_suggestions(_ai_list())] == ["ai:adapter"]


def test_suggestion_to_item():
    item = suggestion_to_item(find_suggestion(_ai_list(), "ai:umbrella"))
    assert item.name == "Umbrella"
    assert item.quantity == 1
    assert item.category is Category.OTHER
