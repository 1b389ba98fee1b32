from __future__ import annotations

import pytest

from tallyboard.engine.models import PollOption, PollVote
from tallyboard.engine.polls import get_user_votes, has_user_voted, round_percentage, tally_poll


def _options() -> list[PollOption]:
    return [
        PollOption(id="b", text="Tacos", order=1),
        PollOption(id="a", text="Pizza", order=0),
    ]


def test_tally_scenario():
    votes = [PollVote("a", f"v{i}") for i in range(3)] + [PollVote("b", "v9")]
    tally = tally_poll(_options(), votes)
    assert tally.total_votes == 4
    by_id = {opt.id: opt for opt in tally.options}
    assert (by_id["a"].vote_count, by_id["a"].percentage) == (3, 75)
    assert (by_id["b"].vote_count, by_id["b"].percentage) == (1, 25)


def test_options_sorted_by_order():
    tally = tally_poll(_options(), [])
    assert [opt.id for opt in tally.options] == ["a", "b"]


def test_empty_tally_has_zero_percentages():
    empty = tally_poll([], [])
    assert empty.total_votes == 0
    assert empty.options == []
    no_votes = tally_poll(_options(), [])
    assert all(opt.percentage == 0 for opt in no_votes.options)


def test_archived_option_votes_count_toward_total():
    options = [*_options(), PollOption(id="c", text="Sushi", order=2, is_archived=True)]
    votes = [PollVote("a", "v1"), PollVote("c", "v2")]
    tally = tally_poll(options, votes)
    assert tally.total_votes == 2
    assert [opt.id for opt in tally.options] == ["a", "b"]
    assert tally.options[0].percentage == 50

    with_archived = tally_poll(options, votes, include_archived=True)
    assert with_archived.options[-1].id == "c"
    assert with_archived.options[-1].vote_count == 1


def test_multi_select_rows_count_individually():
    votes = [PollVote("a", "v1"), PollVote("b", "v1"), PollVote("a", "v2")]
    tally = tally_poll(_options(), votes)
    assert tally.total_votes == 3
    assert tally.total_voters == 2
    assert [opt.percentage for opt in tally.options] == [67, 33]


@pytest.mark.parametrize(
    ("count", "total", "expected"),
    [(1, 8, 13), (1, 3, 33), (2, 3, 67), (0, 5, 0), (5, 5, 100), (3, 0, 0), (29, 200, 14)],
)
def test_round_percentage_half_up(count, total, expected):
    assert round_percentage(count, total) == expected


def test_tally_public_shape():
    payload = tally_poll(_options(), [PollVote("a", "v1")]).to_dict()
    assert payload["totalVotes"] == 1
    assert payload["options"][0] == {
        "id": "a",
        "text": "Pizza",
        "order": 0,
        "isArchived": False,
        "createdBy": "editor",
        "voteCount": 1,
        "percentage": 100,
    }


def test_tally_is_idempotent():
    votes = [PollVote("a", "v1"), PollVote("b", "v2")]
    assert tally_poll(_options(), votes).to_dict() == tally_poll(_options(), votes).to_dict()


def test_user_vote_lookups():
    votes = [PollVote("a", "v1"), PollVote("b", "v1"), PollVote("a", "v2")]
    assert get_user_votes(votes, "v1") == ["a", "b"]
    assert has_user_voted(votes, "v2") is True
    assert has_user_voted(votes, "v3") is False
    assert get_user_votes(votes, "v3") == []
