import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import rcvtally.ballot
import rcvtally.candidate
import rcvtally.election


def build_election(names, ballots):
    election = rcvtally.election.Election(len(names))
    for name in names:
        election.add_candidate(name)
    for ranks, n_ballots in ballots:
        for i in range(n_ballots):
            election.add_ballot(ranks)
    return election


def eliminated_names(election):
    return [cand.name for cand in election.candidates if cand.eliminated]


ELECTIONS = {
    'abc_example': (
        ['A', 'B', 'C'],
        [([1, 2, 3], 3), ([2, 1, 3], 2), ([3, 2, 1], 4)],
        ['A'],
    ),
    'first_round_majority': (
        ['A', 'B', 'C'],
        [([1, 2, 3], 3), ([2, 1, 3], 1), ([2, 3, 1], 1)],
        ['A'],
    ),
    'two_way_tie': (
        ['Zed', 'Amy'],
        [([1, 2], 5), ([2, 1], 5)],
        ['Zed', 'Amy'],
    ),
    'bottom_tie': (
        ['A', 'B', 'C', 'D'],
        [
            ([1, 2, 3, 4], 4),
            ([2, 1, 3, 4], 3),
            ([3, 4, 1, 2], 1),
            ([3, 2, 4, 1], 1),
        ],
        ['A'],
    ),
    'three_counts': (
        ['A', 'B', 'C', 'D'],
        [
            ([1, 2, 3, 4], 5),
            ([3, 1, 2, 4], 4),
            ([3, 2, 1, 4], 3),
            ([4, 3, 2, 1], 1),
        ],
        ['A'],
    ),
    'single_candidate': (
        ['Solo'],
        [([1], 3)],
        ['Solo'],
    ),
    'no_ballots': (
        ['A', 'B'],
        [],
        [],
    ),
}


@pytest.mark.parametrize('name', list(ELECTIONS.keys()))
def test_select_winner(name):
    names, ballots, expected = ELECTIONS[name]
    election = build_election(names, ballots)
    assert election.select_winner() == expected


@pytest.mark.parametrize('name', list(ELECTIONS.keys()))
def test_ballots_conserved(name):
    names, ballots, expected = ELECTIONS[name]
    n_ballots = sum(n for ranks, n in ballots)
    election = build_election(names, ballots)
    assert election.total_ballot_count() == n_ballots
    election.select_winner()
    assert election.total_ballot_count() == n_ballots
    assert sum(cand.votes for cand in election.candidates) == n_ballots


def test_abc_example_counts():
    names, ballots, expected = ELECTIONS['abc_example']
    election = build_election(names, ballots)
    assert [cand.votes for cand in election.candidates] == [3, 2, 4]
    assert election.next_count(9) is None
    assert eliminated_names(election) == ['B']
    assert [cand.votes for cand in election.candidates] == [5, 0, 4]
    assert election.next_count(9) == ['A']


def test_majority_without_elimination():
    names, ballots, expected = ELECTIONS['first_round_majority']
    election = build_election(names, ballots)
    assert election.select_winner() == ['A']
    assert eliminated_names(election) == []


def test_tie_not_sorted():
    names, ballots, expected = ELECTIONS['two_way_tie']
    election = build_election(names, ballots)
    assert election.select_winner() == ['Zed', 'Amy']
    assert eliminated_names(election) == []


def test_bottom_tie_eliminated_together():
    names, ballots, expected = ELECTIONS['bottom_tie']
    election = build_election(names, ballots)
    assert election.next_count(9) is None
    assert eliminated_names(election) == ['C', 'D']
    # the C ballot prefers D next, which went out in the same count
    assert [cand.votes for cand in election.candidates] == [5, 4, 0, 0]


def test_three_counts():
    names, ballots, expected = ELECTIONS['three_counts']
    election = build_election(names, ballots)
    assert election.next_count(13) is None
    assert eliminated_names(election) == ['D']
    assert [cand.votes for cand in election.candidates] == [5, 4, 4, 0]
    assert election.next_count(13) is None
    assert eliminated_names(election) == ['B', 'C', 'D']
    assert election.next_count(13) == ['A']


def test_rerun_after_decision():
    names, ballots, expected = ELECTIONS['abc_example']
    election = build_election(names, ballots)
    assert election.select_winner() == ['A']
    assert election.select_winner() == ['A']
    assert eliminated_names(election) == ['B']


def test_intake_skips_eliminated():
    election = build_election(['A', 'B', 'C'], [])
    election.candidates[0].eliminate()
    ballot = election.add_ballot([1, 3, 2])
    assert ballot.top_candidate() == 2
    assert [cand.votes for cand in election.candidates] == [0, 0, 1]


def test_intake_after_count():
    names, ballots, expected = ELECTIONS['abc_example']
    election = build_election(names, ballots)
    election.select_winner()
    election.add_ballot([3, 1, 2])
    assert election.candidates[2].votes == 5
    assert election.total_ballot_count() == 10


@pytest.mark.parametrize('ranks', [
    [1, 2],
    [1, 2, 3, 4],
    [1, 1, 2],
    [0, 1, 2],
    [2, 3, 4],
    'abc',
])
def test_invalid_ballot_leaves_state(ranks):
    names, ballots, expected = ELECTIONS['abc_example']
    election = build_election(names, ballots)
    assert not election.is_ballot_valid(ranks)
    with pytest.raises(rcvtally.ballot.BallotError):
        election.add_ballot(ranks)
    assert [cand.votes for cand in election.candidates] == [3, 2, 4]
    assert election.select_winner() == ['A']


def test_ballot_valid():
    election = build_election(['A', 'B', 'C'], [])
    assert election.is_ballot_valid([2, 3, 1])
    assert election.is_ballot_valid((3, 2, 1))
    election.validate_ballot([1, 2, 3])


def test_candidate_capacity():
    election = build_election(['A', 'B'], [])
    with pytest.raises(rcvtally.candidate.CandidateCapacityError):
        election.add_candidate('C')
    assert [cand.name for cand in election.candidates] == ['A', 'B']


def test_incomplete_nomination():
    election = rcvtally.election.Election(3)
    election.add_candidate('A')
    election.add_candidate('B')
    with pytest.raises(rcvtally.election.VotingSystemError):
        election.add_ballot([1, 2, 3])
    with pytest.raises(rcvtally.election.VotingSystemError):
        election.select_winner()
    assert election.total_ballot_count() == 0


@pytest.mark.parametrize('n_candidates', [0, -1])
def test_invalid_candidate_count(n_candidates):
    with pytest.raises(ValueError):
        rcvtally.election.Election(n_candidates)
