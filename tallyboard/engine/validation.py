"""Payload checks run by the boundary before data is stored or aggregated.

Each validator returns a list of human-readable problems; an empty list means
the payload is acceptable.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from tallyboard.engine.models import RESULTS_VISIBILITY, VOTING_TYPES, ReadinessSettings

ALLOWED_SLOT_MINUTES = frozenset({15, 30, 60})
BOARD_ITEM_TAGS = frozenset({"Topic", "Decision", "Question", "Blocker", "Kudos"})
DEFAULT_MAX_TOTAL_SLOTS = 1000


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def validate_slot_grid_settings(
    payload: Any, max_total_slots: int = DEFAULT_MAX_TOTAL_SLOTS
) -> list[str]:
    if not isinstance(payload, dict):
        return ["settings must be an object"]
    errors: list[str] = []
    if not isinstance(payload.get("tz"), str):
        errors.append("tz is required")
    if not isinstance(payload.get("startDate"), str | date):
        errors.append("startDate is required")
    days = payload.get("days")
    if not _is_number(days) or not 1 <= days <= 30:
        errors.append("days must be between 1 and 30")
    day_start = payload.get("dayStart")
    day_end = payload.get("dayEnd")
    if not _is_number(day_start) or not 0 <= day_start < 24:
        errors.append("dayStart must be between 0 and 23")
    if not _is_number(day_end) or day_end > 24:
        errors.append("dayEnd must be at most 24")
    elif _is_number(day_start) and day_end <= day_start:
        errors.append("dayEnd must be after dayStart")
    slot_minutes = payload.get("slotMinutes")
    if slot_minutes not in ALLOWED_SLOT_MINUTES:
        errors.append("slotMinutes must be 15, 30 or 60")
    if not errors:
        total = days * (day_end - day_start) * 60 // slot_minutes
        if total > max_total_slots:
            errors.append(f"board would have {total} slots, limit is {max_total_slots}")
    return errors


def validate_slot_indexes(indexes: Any, max_slots: int) -> list[str]:
    if not isinstance(indexes, list):
        return ["selectedSlotIndexes must be a list"]
    if not indexes:
        return ["select at least one slot"]
    if len(indexes) > max_slots:
        return [f"at most {max_slots} slots can be selected"]
    seen: set[int] = set()
    for idx in indexes:
        if not isinstance(idx, int) or isinstance(idx, bool) or not 0 <= idx < max_slots:
            return [f"slot index out of range: {idx!r}"]
        if idx in seen:
            return [f"duplicate slot index: {idx}"]
        seen.add(idx)
    return []


def validate_readiness_settings(payload: Any) -> list[str]:
    if not isinstance(payload, dict):
        return ["settings must be an object"]
    errors: list[str] = []
    if not isinstance(payload.get("prompt"), str) or len(payload["prompt"]) > 200:
        errors.append("prompt must be at most 200 characters")
    for key in ("leftLabel", "rightLabel"):
        if not isinstance(payload.get(key), str) or len(payload[key]) > 50:
            errors.append(f"{key} must be at most 50 characters")
    scale_min = payload.get("scaleMin")
    scale_max = payload.get("scaleMax")
    step = payload.get("step")
    if not _is_number(scale_min) or scale_min < 0:
        errors.append("scaleMin must be >= 0")
    if not _is_number(scale_max) or scale_max > 1000:
        errors.append("scaleMax must be at most 1000")
    elif _is_number(scale_min) and scale_max <= scale_min:
        errors.append("scaleMax must be greater than scaleMin")
    if not _is_number(step) or step <= 0:
        errors.append("step must be > 0")
    elif not errors and step > scale_max - scale_min:
        errors.append("step must fit within the scale")
    return errors


def validate_readiness_value(value: Any, settings: ReadinessSettings) -> list[str]:
    if not isinstance(value, int) or isinstance(value, bool):
        return ["readiness must be an integer"]
    if not settings.scale_min <= value <= settings.scale_max:
        return [f"readiness must be between {settings.scale_min} and {settings.scale_max}"]
    if value % settings.step:
        return [f"readiness must be a multiple of {settings.step}"]
    return []


def validate_poll_settings(payload: Any) -> list[str]:
    if not isinstance(payload, dict):
        return ["settings must be an object"]
    errors: list[str] = []
    for key in ("participantsCanAddOptions", "anonymous", "allowChangeVote"):
        if not isinstance(payload.get(key), bool):
            errors.append(f"{key} must be a boolean")
    if payload.get("votingType") not in VOTING_TYPES:
        errors.append("votingType must be single or multi")
    if payload.get("resultsVisibility") not in RESULTS_VISIBILITY:
        errors.append("resultsVisibility must be immediately, after-vote or after-close")
    close_at = payload.get("closeAt")
    if close_at is not None and not isinstance(close_at, str):
        errors.append("closeAt must be an ISO timestamp")
    max_selections = payload.get("maxSelections")
    if max_selections is not None and (not _is_number(max_selections) or max_selections <= 0):
        errors.append("maxSelections must be > 0")
    return errors


def validate_board_settings(payload: Any, templates: set[str] | None = None) -> list[str]:
    if not isinstance(payload, dict):
        return ["settings must be an object"]
    errors: list[str] = []
    allowed = templates or {"agenda", "retro"}
    if payload.get("template") not in allowed:
        errors.append(f"template must be one of {', '.join(sorted(allowed))}")
    if not isinstance(payload.get("votingEnabled"), bool):
        errors.append("votingEnabled must be a boolean")
    close_at = payload.get("closeAt")
    if close_at is not None and not isinstance(close_at, str):
        errors.append("closeAt must be an ISO timestamp")
    return errors


def _validate_text(value: Any, label: str, max_length: int) -> list[str]:
    if not isinstance(value, str) or not value.strip():
        return [f"{label} is required"]
    if len(value) > max_length:
        return [f"{label} must be at most {max_length} characters"]
    return []


def validate_question(value: Any) -> list[str]:
    return _validate_text(value, "question", 500)


def validate_option_text(value: Any) -> list[str]:
    return _validate_text(value, "option text", 200)


def validate_item_text(value: Any) -> list[str]:
    return _validate_text(value, "item text", 180)


def validate_item_tag(value: Any) -> list[str]:
    if value is None or value in BOARD_ITEM_TAGS:
        return []
    return [f"tag must be one of {', '.join(sorted(BOARD_ITEM_TAGS))}"]
