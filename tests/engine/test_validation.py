from __future__ import annotations

from tallyboard.engine.models import ReadinessSettings
from tallyboard.engine.validation import (
    validate_board_settings,
    validate_item_tag,
    validate_item_text,
    validate_option_text,
    validate_poll_settings,
    validate_question,
    validate_readiness_settings,
    validate_readiness_value,
    validate_slot_grid_settings,
    validate_slot_indexes,
)


def _grid(**overrides):
    payload = {
        "tz": "UTC",
        "startDate": "2026-01-20",
        "days": 5,
        "dayStart": 9,
        "dayEnd": 17,
        "slotMinutes": 30,
    }
    payload.update(overrides)
    return payload


def test_valid_grid_settings_pass():
    assert validate_slot_grid_settings(_grid()) == []


def test_grid_rejects_end_before_start():
    errors = validate_slot_grid_settings(_grid(dayStart=12, dayEnd=12))
    assert any("dayEnd" in e for e in errors)


def test_grid_rejects_unsupported_slot_minutes_and_days():
    errors = validate_slot_grid_settings(_grid(slotMinutes=20, days=31))
    assert any("slotMinutes" in e for e in errors)
    assert any("days" in e for e in errors)


def test_grid_rejects_too_many_slots():
    errors = validate_slot_grid_settings(_grid(days=30, dayStart=0, dayEnd=24, slotMinutes=15))
    assert any("limit" in e for e in errors)


def test_grid_rejects_non_object():
    assert validate_slot_grid_settings(None) == ["settings must be an object"]


def test_slot_indexes():
    assert validate_slot_indexes([0, 3], 4) == []
    assert validate_slot_indexes([], 4) != []
    assert validate_slot_indexes([0, 0], 4) != []
    assert validate_slot_indexes([4], 4) != []
    assert validate_slot_indexes("0,1", 4) != []


def test_readiness_settings():
    payload = {
        "prompt": "Ready?",
        "leftLabel": "No",
        "rightLabel": "Yes",
        "scaleMin": 0,
        "scaleMax": 100,
        "step": 10,
    }
    assert validate_readiness_settings(payload) == []
    assert validate_readiness_settings({**payload, "scaleMax": 0}) != []
    assert validate_readiness_settings({**payload, "step": 200}) != []


def test_readiness_value():
    settings = ReadinessSettings(scale_min=0, scale_max=100, step=5)
    assert validate_readiness_value(45, settings) == []
    assert validate_readiness_value(47, settings) != []
    assert validate_readiness_value(105, settings) != []
    assert validate_readiness_value(4.5, settings) != []


def test_poll_settings():
    payload = {
        "participantsCanAddOptions": False,
        "votingType": "multi",
        "resultsVisibility": "after-vote",
        "anonymous": True,
        "allowChangeVote": True,
        "maxSelections": 2,
    }
    assert validate_poll_settings(payload) == []
    assert validate_poll_settings({**payload, "resultsVisibility": "never"}) != []
    assert validate_poll_settings({**payload, "maxSelections": 0}) != []


def test_board_settings():
    assert validate_board_settings({"template": "retro", "votingEnabled": True}) == []
    assert validate_board_settings({"template": "kanban", "votingEnabled": True}) != []
    assert validate_board_settings({"template": "agenda"}) != []


def test_text_limits():
    assert validate_question("Lunch?") == []
    assert validate_question("   ") != []
    assert validate_option_text("x" * 201) != []
    assert validate_item_text("x" * 180) == []
    assert validate_item_tag(None) == []
    assert validate_item_tag("Kudos") == []
    assert validate_item_tag("Rant") != []
