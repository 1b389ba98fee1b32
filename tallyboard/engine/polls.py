from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable

from tallyboard.engine.models import OptionResult, PollOption, PollSettings, PollTally, PollVote


def round_percentage(count: int, total: int) -> int:
    """Float percentage rounded to the nearest integer, halves up; 0 when ``total`` is 0."""
    if total <= 0:
        return 0
    return math.floor(count / total * 100 + 0.5)


def tally_poll(
    options: Iterable[PollOption],
    votes: list[PollVote],
    settings: PollSettings | None = None,
    include_archived: bool = False,
) -> PollTally:
    """Count vote rows per option.

    ``total_votes`` counts every row, archived options included, and is the
    percentage base. Selection rules from ``settings`` are enforced when votes
    are submitted, so the tally does not look at them.
    """
    counts = Counter(vote.option_id for vote in votes)
    total_votes = len(votes)
    shown = [opt for opt in options if include_archived or not opt.is_archived]
    shown.sort(key=lambda opt: opt.order)
    results = [
        OptionResult(
            id=option.id,
            text=option.text,
            order=option.order,
            is_archived=option.is_archived,
            created_by=option.created_by,
            vote_count=counts.get(option.id, 0),
            percentage=round_percentage(counts.get(option.id, 0), total_votes),
        )
        for option in shown
    ]
    return PollTally(
        options=results,
        total_votes=total_votes,
        total_voters=len({vote.voter_key_hash for vote in votes}),
    )


def get_user_votes(votes: Iterable[PollVote], voter_key_hash: str) -> list[str]:
    return [vote.option_id for vote in votes if vote.voter_key_hash == voter_key_hash]


def has_user_voted(votes: Iterable[PollVote], voter_key_hash: str) -> bool:
    return any(vote.voter_key_hash == voter_key_hash for vote in votes)
