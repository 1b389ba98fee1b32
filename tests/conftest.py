from __future__ import annotations

from datetime import date

import pytest

from tallyboard.config.settings import Settings
from tallyboard.engine.models import AvailabilityContribution, SlotGridSettings


def make_grid(**overrides: object) -> SlotGridSettings:
    defaults: dict[str, object] = {
        "timezone": "America/New_York",
        "start_date": date(2026, 1, 20),
        "day_count": 1,
        "day_start_hour": 9,
        "day_end_hour": 11,
        "slot_minutes": 60,
    }
    defaults.update(overrides)
    return SlotGridSettings(**defaults)  # type: ignore[arg-type]


def make_settings(**overrides: object) -> Settings:
    defaults: dict[str, object] = {
        "log_level": "INFO",
        "best_windows_top_n": 3,
        "min_window_minutes": 60,
        "readiness_bucket_count": 5,
        "readiness_threshold_ratio": 0.6,
        "max_total_slots": 1000,
        "presets_config_path": "config/does-not-exist.yaml",
        "include_archived_options": False,
    }
    defaults.update(overrides)
    return Settings(**defaults)  # type: ignore[arg-type]


@pytest.fixture
def two_hour_grid() -> SlotGridSettings:
    return make_grid()


@pytest.fixture
def sample_contributions() -> list[AvailabilityContribution]:
    return [
        AvailabilityContribution(contribution_id="c1", name="Alex", selected_slot_indexes=(0, 1)),
        AvailabilityContribution(contribution_id="c2", name="Beth", selected_slot_indexes=(0,)),
    ]


@pytest.fixture
def availability_snapshot() -> dict[str, object]:
    return {
        "toolType": "availability",
        "settings": {
            "tz": "America/New_York",
            "startDate": "2026-01-20",
            "days": 1,
            "dayStart": 9,
            "dayEnd": 11,
            "slotMinutes": 60,
        },
        "contributions": [
            {
                "contributionId": "c1",
                "name": "Alex",
                "createdAt": "2026-01-18T10:00:00Z",
                "payloadVersion": 1,
                "payload": {"selectedSlotIndexes": [0, 1]},
            },
            {
                "contributionId": "c2",
                "createdAt": "2026-01-18T11:00:00Z",
                "payloadVersion": 1,
                "payload": {"selectedSlotIndexes": [0]},
            },
        ],
    }


@pytest.fixture
def grid_factory():
    return make_grid


@pytest.fixture
def settings_factory():
    return make_settings
