"""Input and output types shared by the aggregation engine.

Inputs are loaded from already-deserialized wire payloads (camelCase keys) by
the ``load_*`` helpers. Outputs expose ``to_dict()`` returning the public
response shape, which external clients bind to field-for-field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any, cast

from dateutil import parser as date_parser

VOTE_TYPES = frozenset({"up", "down"})
RESULTS_VISIBILITY = frozenset({"immediately", "after-vote", "after-close"})
VOTING_TYPES = frozenset({"single", "multi"})


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO timestamp (or pass a datetime through); naive values are UTC."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        dt = cast(datetime, date_parser.isoparse(value.strip()))
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def parse_calendar_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        return cast(datetime, date_parser.isoparse(value.strip()[:10])).date()
    raise ValueError(f"Invalid date: {value!r}")


def _require(payload: dict[str, Any], key: str) -> Any:
    if key not in payload or payload[key] is None:
        raise ValueError(f"Missing required field: {key}")
    return payload[key]


# Availability


@dataclass(frozen=True)
class SlotGridSettings:
    timezone: str
    start_date: date
    day_count: int
    day_start_hour: int
    day_end_hour: int
    slot_minutes: int

    @property
    def slots_per_day(self) -> int:
        return (self.day_end_hour - self.day_start_hour) * 60 // self.slot_minutes

    @property
    def total_slots(self) -> int:
        return self.day_count * self.slots_per_day


@dataclass(frozen=True)
class AvailabilityContribution:
    contribution_id: str
    selected_slot_indexes: tuple[int, ...]
    name: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class Window:
    day_index: int
    start_slot_index: int
    end_slot_index: int
    available_count: int
    window_length: int

    def to_dict(self) -> dict[str, int]:
        return {
            "dayIndex": self.day_index,
            "startSlotIndex": self.start_slot_index,
            "endSlotIndex": self.end_slot_index,
            "availableCount": self.available_count,
            "windowLength": self.window_length,
        }


def load_slot_grid_settings(payload: dict[str, Any]) -> SlotGridSettings:
    return SlotGridSettings(
        timezone=str(payload.get("tz") or "UTC"),
        start_date=parse_calendar_date(_require(payload, "startDate")),
        day_count=int(_require(payload, "days")),
        day_start_hour=int(_require(payload, "dayStart")),
        day_end_hour=int(_require(payload, "dayEnd")),
        slot_minutes=int(_require(payload, "slotMinutes")),
    )


def load_availability_contribution(payload: dict[str, Any]) -> AvailabilityContribution:
    inner = payload.get("payload") or {}
    raw_indexes = inner.get("selectedSlotIndexes", payload.get("selectedSlotIndexes")) or []
    created_at = payload.get("createdAt")
    return AvailabilityContribution(
        contribution_id=str(payload.get("contributionId") or payload.get("id") or ""),
        name=payload.get("name") or None,
        selected_slot_indexes=tuple(int(idx) for idx in raw_indexes),
        created_at=parse_timestamp(created_at) if created_at else None,
    )


# Polls


@dataclass(frozen=True)
class PollSettings:
    voting_type: str = "single"
    results_visibility: str = "immediately"
    max_selections: int | None = None
    participants_can_add_options: bool = False
    anonymous: bool = True
    allow_change_vote: bool = True


@dataclass(frozen=True)
class PollOption:
    id: str
    text: str
    order: int
    is_archived: bool = False
    created_by: str = "editor"


@dataclass(frozen=True)
class PollVote:
    option_id: str
    voter_key_hash: str


@dataclass(frozen=True)
class OptionResult:
    id: str
    text: str
    order: int
    is_archived: bool
    created_by: str
    vote_count: int
    percentage: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "order": self.order,
            "isArchived": self.is_archived,
            "createdBy": self.created_by,
            "voteCount": self.vote_count,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class PollTally:
    options: list[OptionResult]
    total_votes: int
    total_voters: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "options": [option.to_dict() for option in self.options],
            "totalVotes": self.total_votes,
            "totalVoters": self.total_voters,
        }


def load_poll_settings(payload: dict[str, Any] | None) -> PollSettings:
    payload = payload or {}
    max_selections = payload.get("maxSelections")
    return PollSettings(
        voting_type=str(payload.get("votingType", "single")),
        results_visibility=str(payload.get("resultsVisibility", "immediately")),
        max_selections=int(max_selections) if max_selections is not None else None,
        participants_can_add_options=bool(payload.get("participantsCanAddOptions", False)),
        anonymous=bool(payload.get("anonymous", True)),
        allow_change_vote=bool(payload.get("allowChangeVote", True)),
    )


def load_poll_option(payload: dict[str, Any]) -> PollOption:
    return PollOption(
        id=str(_require(payload, "id")),
        text=str(payload.get("text", "")),
        order=int(payload.get("order", 0)),
        is_archived=bool(payload.get("isArchived", False)),
        created_by=str(payload.get("createdBy", "editor")),
    )


def load_poll_vote(payload: dict[str, Any]) -> PollVote:
    return PollVote(
        option_id=str(_require(payload, "optionId")),
        voter_key_hash=str(_require(payload, "voterKeyHash")),
    )


# Board items


@dataclass(frozen=True)
class BoardColumn:
    id: str
    name: str
    order: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "order": self.order}


@dataclass(frozen=True)
class BoardItem:
    id: str
    text: str
    created_at: datetime
    created_by_token: str
    column_id: str | None = None
    details: str | None = None
    tag: str | None = None


@dataclass(frozen=True)
class BoardVote:
    item_id: str
    participant_token: str
    vote_type: str


@dataclass(frozen=True)
class RankedItem:
    item: BoardItem
    upvote_count: int
    downvote_count: int
    user_vote: str | None = None
    user_can_edit: bool = False

    @property
    def net_score(self) -> int:
        return self.upvote_count - self.downvote_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.item.id,
            "columnId": self.item.column_id,
            "text": self.item.text,
            "details": self.item.details,
            "tag": self.item.tag,
            "createdAt": self.item.created_at.isoformat(),
            "upvoteCount": self.upvote_count,
            "downvoteCount": self.downvote_count,
            "netScore": self.net_score,
            "userVote": self.user_vote,
            "userCanEdit": self.user_can_edit,
        }


def load_board_column(payload: dict[str, Any]) -> BoardColumn:
    return BoardColumn(
        id=str(_require(payload, "id")),
        name=str(payload.get("name", "")),
        order=int(payload.get("order", 0)),
    )


def load_board_item(payload: dict[str, Any]) -> BoardItem:
    return BoardItem(
        id=str(_require(payload, "id")),
        text=str(payload.get("text", "")),
        created_at=parse_timestamp(_require(payload, "createdAt")),
        created_by_token=str(payload.get("createdByToken", "")),
        column_id=payload.get("columnId"),
        details=payload.get("details"),
        tag=payload.get("tag"),
    )


def load_board_vote(payload: dict[str, Any]) -> BoardVote:
    vote_type = str(_require(payload, "voteType"))
    if vote_type not in VOTE_TYPES:
        raise ValueError(f"Invalid voteType: {vote_type}")
    return BoardVote(
        item_id=str(_require(payload, "itemId")),
        participant_token=str(_require(payload, "participantToken")),
        vote_type=vote_type,
    )


# Readiness / pulse


@dataclass(frozen=True)
class ReadinessSettings:
    scale_min: int = 0
    scale_max: int = 100
    step: int = 1
    prompt: str = ""
    left_label: str = ""
    right_label: str = ""


@dataclass(frozen=True)
class ReadinessContribution:
    contribution_id: str
    readiness: float | None
    name: str | None = None


@dataclass(frozen=True)
class DistributionBucket:
    range: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"range": self.range, "count": self.count}


@dataclass(frozen=True)
class ReadinessSummary:
    count: int
    average: int
    median: float
    min: float
    max: float
    below_threshold_count: int
    distribution_buckets: list[DistributionBucket] = field(default_factory=list)
    values: list[float] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "averageReadiness": self.average,
            "medianReadiness": self.median,
            "minReadiness": self.min,
            "maxReadiness": self.max,
            "belowThresholdCount": self.below_threshold_count,
            "distributionBuckets": [bucket.to_dict() for bucket in self.distribution_buckets],
        }


def load_readiness_settings(payload: dict[str, Any] | None) -> ReadinessSettings:
    payload = payload or {}
    return ReadinessSettings(
        scale_min=int(payload.get("scaleMin", 0)),
        scale_max=int(payload.get("scaleMax", 100)),
        step=int(payload.get("step", 1)),
        prompt=str(payload.get("prompt", "")),
        left_label=str(payload.get("leftLabel", "")),
        right_label=str(payload.get("rightLabel", "")),
    )


def load_readiness_contribution(payload: dict[str, Any]) -> ReadinessContribution:
    inner = payload.get("payload") or {}
    value = inner.get("readiness", payload.get("readiness"))
    return ReadinessContribution(
        contribution_id=str(payload.get("contributionId") or payload.get("id") or ""),
        name=payload.get("name") or None,
        readiness=value if isinstance(value, int | float) and not isinstance(value, bool) else None,
    )
