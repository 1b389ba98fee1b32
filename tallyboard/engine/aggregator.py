"""Registry of per-tool aggregators. Add new board types here.

Every aggregator folds a snapshot of contributions into the ``computed``
block of a board's public response. Snapshots are plain deserialized
payloads (camelCase keys), the same shape the storage layer hands over.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from tallyboard.config.settings import Settings
from tallyboard.engine.availability import aggregate_slot_counts, list_contributors
from tallyboard.engine.best_windows import (
    DEFAULT_MIN_WINDOW_MINUTES,
    DEFAULT_TOP_N,
    find_best_windows,
)
from tallyboard.engine.models import (
    load_availability_contribution,
    load_board_column,
    load_board_item,
    load_board_vote,
    load_poll_option,
    load_poll_settings,
    load_poll_vote,
    load_readiness_contribution,
    load_readiness_settings,
    load_slot_grid_settings,
)
from tallyboard.engine.polls import get_user_votes, has_user_voted, tally_poll
from tallyboard.engine.readiness import (
    DEFAULT_BUCKET_COUNT,
    DEFAULT_THRESHOLD_RATIO,
    summarize_readiness,
)
from tallyboard.engine.slot_grid import slot_count
from tallyboard.engine.voting import rank_items, sort_columns
from tallyboard.utils.deadlines import results_visible

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewer:
    """Identity facts resolved by the authorization layer for one request."""

    participant_token: str | None = None
    voter_key_hash: str | None = None
    closed: bool = False


class BoardAggregator(Protocol):
    """Same contract for every tool type; only the fold differs."""

    @property
    def tool_type(self) -> str: ...

    def summarize(
        self, settings: dict[str, Any], snapshot: dict[str, Any], viewer: Viewer
    ) -> dict[str, Any]: ...


class AvailabilityAggregator:
    tool_type = "availability"

    def __init__(
        self, top_n: int = DEFAULT_TOP_N, min_window_minutes: int = DEFAULT_MIN_WINDOW_MINUTES
    ) -> None:
        self.top_n = top_n
        self.min_window_minutes = min_window_minutes

    def summarize(
        self, settings: dict[str, Any], snapshot: dict[str, Any], viewer: Viewer
    ) -> dict[str, Any]:
        grid = load_slot_grid_settings(settings)
        contributions = [
            load_availability_contribution(c) for c in snapshot.get("contributions", [])
        ]
        slot_counts = aggregate_slot_counts(slot_count(grid), contributions)
        windows = find_best_windows(
            slot_counts, grid, top_n=self.top_n, min_window_minutes=self.min_window_minutes
        )
        return {
            "contributorsCount": len(contributions),
            "slotCounts": slot_counts,
            "bestWindows": [window.to_dict() for window in windows],
            "contributors": list_contributors(contributions),
        }


class ReadinessAggregator:
    tool_type = "readiness"

    def __init__(
        self,
        bucket_count: int = DEFAULT_BUCKET_COUNT,
        threshold_ratio: float = DEFAULT_THRESHOLD_RATIO,
    ) -> None:
        self.bucket_count = bucket_count
        self.threshold_ratio = threshold_ratio

    def summarize(
        self, settings: dict[str, Any], snapshot: dict[str, Any], viewer: Viewer
    ) -> dict[str, Any]:
        scale = load_readiness_settings(settings)
        contributions = [load_readiness_contribution(c) for c in snapshot.get("contributions", [])]
        summary = summarize_readiness(
            contributions,
            scale,
            bucket_count=self.bucket_count,
            threshold_ratio=self.threshold_ratio,
        )
        return {
            "contributorsCount": len(contributions),
            **summary.to_dict(),
            "readinessContributors": [
                {
                    "contributionId": c.contribution_id,
                    "name": c.name,
                    "readiness": c.readiness if c.readiness is not None else 0,
                }
                for c in contributions
            ],
        }


class PollAggregator:
    tool_type = "poll"

    def __init__(self, include_archived: bool = False) -> None:
        self.include_archived = include_archived

    def summarize(
        self, settings: dict[str, Any], snapshot: dict[str, Any], viewer: Viewer
    ) -> dict[str, Any]:
        poll_settings = load_poll_settings(settings)
        options = [load_poll_option(o) for o in snapshot.get("options", [])]
        votes = [load_poll_vote(v) for v in snapshot.get("votes", [])]
        tally = tally_poll(options, votes, poll_settings, include_archived=self.include_archived)
        voted = has_user_voted(votes, viewer.voter_key_hash) if viewer.voter_key_hash else False
        return {
            "closed": viewer.closed,
            **tally.to_dict(),
            "userVoted": voted,
            "userVotes": get_user_votes(votes, viewer.voter_key_hash)
            if viewer.voter_key_hash
            else None,
            "resultsVisible": results_visible(
                poll_settings.results_visibility, voted, viewer.closed
            ),
        }


class BoardItemAggregator:
    tool_type = "board"

    def summarize(
        self, settings: dict[str, Any], snapshot: dict[str, Any], viewer: Viewer
    ) -> dict[str, Any]:
        items = [load_board_item(i) for i in snapshot.get("items", [])]
        votes = [load_board_vote(v) for v in snapshot.get("votes", [])]
        columns = sort_columns(load_board_column(c) for c in snapshot.get("columns", []))
        ranked = rank_items(
            items,
            votes,
            voting_enabled=bool(settings.get("votingEnabled", True)),
            participant_token=viewer.participant_token,
        )
        return {
            "closed": viewer.closed,
            "columns": [column.to_dict() for column in columns],
            "items": [item.to_dict() for item in ranked],
            "totalVotes": len(votes),
        }


_aggregators: dict[str, BoardAggregator] = {}


def register(aggregator: BoardAggregator) -> None:
    _aggregators[aggregator.tool_type] = aggregator
    logger.debug("Registered aggregator for tool type: %s", aggregator.tool_type)


def get_aggregator(tool_type: str) -> BoardAggregator:
    """Get aggregator by tool type. Raises KeyError if unknown."""
    if tool_type not in _aggregators:
        raise KeyError(f"Unknown tool type: {tool_type}. Available: {list_tool_types()}")
    return _aggregators[tool_type]


def list_tool_types() -> list[str]:
    return sorted(_aggregators)


def configure_from_settings(settings: Settings) -> None:
    """Re-register built-in aggregators with tuning values from ``settings``."""
    register(
        AvailabilityAggregator(
            top_n=settings.best_windows_top_n,
            min_window_minutes=settings.min_window_minutes,
        )
    )
    register(
        ReadinessAggregator(
            bucket_count=settings.readiness_bucket_count,
            threshold_ratio=settings.readiness_threshold_ratio,
        )
    )
    register(PollAggregator(include_archived=settings.include_archived_options))
    register(BoardItemAggregator())


def compute_public_view(
    tool_type: str,
    settings: dict[str, Any],
    snapshot: dict[str, Any],
    viewer: Viewer | None = None,
) -> dict[str, Any]:
    return get_aggregator(tool_type).summarize(settings or {}, snapshot or {}, viewer or Viewer())


def _init_registry() -> None:
    register(AvailabilityAggregator())
    register(ReadinessAggregator())
    register(PollAggregator())
    register(BoardItemAggregator())


# Register built-in aggregators on first import
_init_registry()
