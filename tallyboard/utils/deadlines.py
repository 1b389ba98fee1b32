"""Close, expiry and results-visibility helpers for polls and boards.

Policy:
- A poll or board is closed once it was closed manually or its ``close_at``
  deadline has passed.
- Data expires ``retention_days`` (7) after the manual close, else after the
  deadline, else after creation.
- A deadline must be in the future and at most 7 days after creation.

Naive datetimes are treated as UTC.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from tallyboard.engine.models import parse_timestamp

DEFAULT_RETENTION_DAYS = 7
DEFAULT_MAX_DEADLINE_DAYS = 7


def _as_utc(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    return parse_timestamp(value)


def _now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(UTC)
    return now if now.tzinfo is not None else now.replace(tzinfo=UTC)


def is_closed(
    closed_at: Any = None, close_at: Any = None, now: datetime | None = None
) -> bool:
    """Return True when manually closed or the deadline has passed."""
    if _as_utc(closed_at) is not None:
        return True
    deadline = _as_utc(close_at)
    if deadline is None:
        return False
    return _now(now) >= deadline


def compute_expires_at(
    created_at: Any,
    close_at: Any = None,
    closed_at: Any = None,
    retention_days: int = DEFAULT_RETENTION_DAYS,
) -> int:
    """Return the expiry as epoch seconds."""
    anchor = _as_utc(closed_at) or _as_utc(close_at) or parse_timestamp(created_at)
    return int((anchor + timedelta(days=retention_days)).timestamp())


def is_expired(expires_at: int, now: datetime | None = None) -> bool:
    return _now(now).timestamp() > expires_at


def validate_deadline(
    close_at: Any,
    created_at: Any,
    now: datetime | None = None,
    max_days: int = DEFAULT_MAX_DEADLINE_DAYS,
) -> bool:
    deadline = _as_utc(close_at)
    if deadline is None:
        return True
    if deadline <= _now(now):
        return False
    return deadline <= parse_timestamp(created_at) + timedelta(days=max_days)


def results_visible(visibility: str, has_voted: bool, closed: bool) -> bool:
    """Apply a poll's ``resultsVisibility`` setting to caller-supplied facts."""
    if visibility == "immediately":
        return True
    if visibility == "after-vote":
        return has_voted
    if visibility == "after-close":
        return closed
    return False
