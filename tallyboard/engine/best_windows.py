"""Best meeting window search over an availability heatmap.

A window is a contiguous run of slots inside a single day. Its
``available_count`` is the minimum slot count across the run: the number of
participants free for the whole window, not just part of it.
"""

from __future__ import annotations

import logging
import math

from tallyboard.engine.models import SlotGridSettings, Window
from tallyboard.engine.slot_grid import slots_per_day

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 3
DEFAULT_MIN_WINDOW_MINUTES = 60


def min_window_slots(
    settings: SlotGridSettings, min_window_minutes: int = DEFAULT_MIN_WINDOW_MINUTES
) -> int:
    return max(math.ceil(min_window_minutes / settings.slot_minutes), 1)


def _day_windows(
    slot_counts: list[int], day_index: int, per_day: int, min_slots: int
) -> list[Window]:
    day_start = day_index * per_day
    day_end = day_start + per_day
    found: list[Window] = []
    for start in range(day_start, day_end - min_slots + 1):
        running_min = math.inf
        for end in range(start + 1, day_end + 1):
            value = slot_counts[end - 1] if end - 1 < len(slot_counts) else 0
            running_min = min(running_min, value)
            if running_min <= 0:
                # Every longer window from this start contains the empty slot.
                break
            if end - start >= min_slots:
                found.append(
                    Window(
                        day_index=day_index,
                        start_slot_index=start,
                        end_slot_index=end,
                        available_count=int(running_min),
                        window_length=end - start,
                    )
                )
    return found


def window_sort_key(window: Window) -> tuple[int, int, int, int]:
    return (
        -window.available_count,
        -window.window_length,
        window.day_index,
        window.start_slot_index,
    )


def find_best_windows(
    slot_counts: list[int],
    settings: SlotGridSettings,
    top_n: int = DEFAULT_TOP_N,
    min_window_minutes: int = DEFAULT_MIN_WINDOW_MINUTES,
) -> list[Window]:
    """Return the top ``top_n`` single-day windows by joint availability.

    Ordering is ``available_count`` desc, ``window_length`` desc, then the
    earliest day and earliest start slot.
    """
    per_day = slots_per_day(settings)
    min_slots = min_window_slots(settings, min_window_minutes)
    candidates: list[Window] = []
    for day_index in range(settings.day_count):
        candidates.extend(_day_windows(slot_counts, day_index, per_day, min_slots))
    candidates.sort(key=window_sort_key)
    logger.debug("Best-window search: %d candidates, returning top %d", len(candidates), top_n)
    return candidates[:top_n]
