from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from tallyboard.engine.models import AvailabilityContribution

logger = logging.getLogger(__name__)


def aggregate_slot_counts(
    slot_count: int, contributions: Iterable[AvailabilityContribution]
) -> list[int]:
    """Fold availability contributions into a per-slot count of participants."""
    counts = [0] * slot_count
    ignored = 0
    for contribution in contributions:
        for idx in contribution.selected_slot_indexes:
            if 0 <= idx < slot_count:
                counts[idx] += 1
            else:
                ignored += 1
    if ignored:
        logger.debug("Ignored %d out-of-range slot indexes (slot_count=%d)", ignored, slot_count)
    return counts


def list_contributors(contributions: Iterable[AvailabilityContribution]) -> list[dict[str, Any]]:
    return [
        {
            "contributionId": contribution.contribution_id,
            "name": contribution.name or "Anonymous",
            "selectedSlots": list(contribution.selected_slot_indexes),
        }
        for contribution in contributions
    ]
