from __future__ import annotations

from datetime import date, time, timedelta

from tallyboard.engine.models import Window
from tallyboard.engine.slot_grid import (
    day_label,
    format_window_description,
    slot_count,
    slot_index_to_time,
    slot_index_to_time_string,
    slot_start_datetime,
    slots_per_day,
    window_time_range,
)


def test_slot_count_scenario(two_hour_grid):
    assert slots_per_day(two_hour_grid) == 2
    assert slot_count(two_hour_grid) == 2


def test_slot_count_multi_day_quarter_hours(grid_factory):
    grid = grid_factory(day_count=5, day_start_hour=9, day_end_hour=17, slot_minutes=15)
    assert slots_per_day(grid) == 32
    assert slot_count(grid) == 160


def test_slot_index_to_time_decodes_day_and_clock(grid_factory):
    grid = grid_factory(day_count=2, day_end_hour=17, slot_minutes=30)
    assert slot_index_to_time(0, grid) == (0, time(9, 0))
    assert slot_index_to_time(17, grid) == (1, time(9, 30))
    assert slot_index_to_time_string(15, grid) == "16:30"


def test_window_time_range_renders_day_end(grid_factory):
    grid = grid_factory(day_count=2, day_end_hour=17, slot_minutes=30)
    window = Window(day_index=1, start_slot_index=30, end_slot_index=32, available_count=1, window_length=2)
    assert window_time_range(window, grid) == ("16:00", "17:00")


def test_window_time_range_allows_midnight_end(grid_factory):
    grid = grid_factory(day_start_hour=22, day_end_hour=24)
    assert window_time_range(Window(0, 0, 2, 1, 2), grid) == ("22:00", "24:00")


def test_day_label_uses_calendar_days(grid_factory):
    grid = grid_factory(day_count=14)
    assert day_label(0, grid) == "Tue Jan 20"
    assert day_label(12, grid) == "Sun Feb 1"


def test_day_label_across_dst_change(grid_factory):
    grid = grid_factory(start_date=date(2026, 3, 7), day_count=3)
    assert day_label(1, grid) == "Sun Mar 8"
    assert day_label(2, grid) == "Mon Mar 9"


def test_slot_start_datetime_is_localized(grid_factory):
    grid = grid_factory(start_date=date(2026, 3, 7), day_count=2)
    before = slot_start_datetime(0, grid)
    after = slot_start_datetime(2, grid)
    assert before.hour == 9 and after.hour == 9
    assert before.utcoffset() == timedelta(hours=-5)
    assert after.utcoffset() == timedelta(hours=-4)


def test_unknown_timezone_falls_back_to_utc(grid_factory):
    grid = grid_factory(timezone="Not/AZone")
    assert slot_start_datetime(0, grid).utcoffset() == timedelta(0)


def test_format_window_description(two_hour_grid):
    window = Window(0, 0, 1, 2, 1)
    assert format_window_description(window, two_hour_grid, 2) == "Tue Jan 20 09:00–10:00 (2/2 people)"
