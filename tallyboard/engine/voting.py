from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from tallyboard.engine.models import BoardColumn, BoardItem, BoardVote, RankedItem


def tally_board_votes(
    votes: Iterable[BoardVote],
) -> tuple[dict[str, int], dict[str, int], dict[str, dict[str, str]]]:
    """Return (upvotes by item, downvotes by item, participant -> item -> vote type)."""
    up_counts: dict[str, int] = defaultdict(int)
    down_counts: dict[str, int] = defaultdict(int)
    user_votes: dict[str, dict[str, str]] = defaultdict(dict)
    for vote in votes:
        if vote.vote_type == "up":
            up_counts[vote.item_id] += 1
        else:
            down_counts[vote.item_id] += 1
        user_votes[vote.participant_token][vote.item_id] = vote.vote_type
    return dict(up_counts), dict(down_counts), dict(user_votes)


def rank_items(
    items: Iterable[BoardItem],
    votes: Iterable[BoardVote],
    voting_enabled: bool = True,
    participant_token: str | None = None,
) -> list[RankedItem]:
    up_counts, down_counts, user_votes = tally_board_votes(votes)
    own_votes = user_votes.get(participant_token, {}) if participant_token else {}
    ranked = [
        RankedItem(
            item=item,
            upvote_count=up_counts.get(item.id, 0),
            downvote_count=down_counts.get(item.id, 0),
            user_vote=own_votes.get(item.id),
            user_can_edit=participant_token is not None
            and participant_token == item.created_by_token,
        )
        for item in items
    ]
    # Two stable passes: newest first, then net score when voting is on.
    ranked.sort(key=lambda r: r.item.created_at, reverse=True)
    if voting_enabled:
        ranked.sort(key=lambda r: r.net_score, reverse=True)
    return ranked


def apply_vote_toggle(current: str | None, requested: str) -> str | None:
    """Next vote state for a participant: repeating the same direction clears it."""
    if requested not in {"up", "down"}:
        raise ValueError(f"Invalid vote type: {requested}")
    if current == requested:
        return None
    return requested


def sort_columns(columns: Iterable[BoardColumn]) -> list[BoardColumn]:
    return sorted(columns, key=lambda col: col.order)
