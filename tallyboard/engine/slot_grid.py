"""Slot grid helpers for availability boards.

A board's grid is ``day_count`` days of ``slots_per_day`` equal slots between
``day_start_hour`` and ``day_end_hour``. Slot index ``i`` encodes
``(i // slots_per_day, i % slots_per_day)``.
"""

from __future__ import annotations

import logging
from datetime import datetime, time, timedelta, tzinfo

from dateutil import tz

from tallyboard.engine.models import SlotGridSettings, Window

logger = logging.getLogger(__name__)


def slots_per_day(settings: SlotGridSettings) -> int:
    assert settings.day_end_hour > settings.day_start_hour, "dayEnd must be after dayStart"
    return settings.slots_per_day


def slot_count(settings: SlotGridSettings) -> int:
    return settings.day_count * slots_per_day(settings)


def _minutes_from_midnight(slot_in_day: int, settings: SlotGridSettings) -> int:
    return settings.day_start_hour * 60 + slot_in_day * settings.slot_minutes


def slot_index_to_time(index: int, settings: SlotGridSettings) -> tuple[int, time]:
    """Return ``(day_index, clock_time)`` for the start of slot ``index``."""
    per_day = slots_per_day(settings)
    day_index, slot_in_day = divmod(index, per_day)
    minutes = _minutes_from_midnight(slot_in_day, settings)
    return day_index, time(minutes // 60, minutes % 60)


def _format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def slot_index_to_time_string(index: int, settings: SlotGridSettings) -> str:
    _, clock = slot_index_to_time(index, settings)
    return f"{clock.hour:02d}:{clock.minute:02d}"


def window_time_range(window: Window, settings: SlotGridSettings) -> tuple[str, str]:
    """Return ``("HH:MM", "HH:MM")`` for a window; the end may be ``"24:00"``."""
    day_offset = window.day_index * slots_per_day(settings)
    start = _minutes_from_midnight(window.start_slot_index - day_offset, settings)
    end = _minutes_from_midnight(window.end_slot_index - day_offset, settings)
    return _format_minutes(start), _format_minutes(end)


def _board_tz(settings: SlotGridSettings) -> tzinfo:
    zone = tz.gettz(settings.timezone)
    if zone is None:
        logger.debug("Unknown timezone %r, falling back to UTC", settings.timezone)
        return tz.UTC
    return zone


def day_label(day_index: int, settings: SlotGridSettings) -> str:
    # Calendar-day addition on a bare date; no instant arithmetic involved.
    target = settings.start_date + timedelta(days=day_index)
    return f"{target:%a} {target:%b} {target.day}"


def slot_start_datetime(index: int, settings: SlotGridSettings) -> datetime:
    """Wall-clock start of a slot, localized in the board's timezone."""
    day_index, clock = slot_index_to_time(index, settings)
    target = settings.start_date + timedelta(days=day_index)
    return datetime.combine(target, clock, tzinfo=_board_tz(settings))


def format_window_description(
    window: Window, settings: SlotGridSettings, contributors_count: int
) -> str:
    start, end = window_time_range(window, settings)
    label = day_label(window.day_index, settings)
    return f"{label} {start}–{end} ({window.available_count}/{contributors_count} people)"
