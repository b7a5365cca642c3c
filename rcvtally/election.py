'''Ranked-choice election tallying by instant runoff.

Ranked choice voting uses this process:

1.  Rather than vote for a single candidate, a voter ranks all the
    candidates.
2.  The first-choice votes are tallied. If any candidate receives more than
    half of the votes, that candidate wins.
3.  Otherwise, the candidate(s) with the lowest number of votes are
    eliminated. Every ballot counting for an eliminated candidate is
    transferred to its next preferred candidate still in the count.
4.  Steps 2 and 3 are repeated until a candidate wins or all remaining
    candidates have exactly the same number of votes. A tie is reported
    as all the tied candidates; resolving it (e.g. by a separate election
    among them) is up to the caller.
'''

import logging
from typing import List, Optional, Sequence, Tuple

from rcvtally.ballot import Ballot, RankPermutationValidator
from rcvtally.candidate import Candidate, CandidateCapacityError

logger = logging.getLogger(__name__)


class VotingSystemError(Exception):
    '''An election ended up in a state where it cannot be counted.'''
    pass


class Election:
    '''A single-winner ranked-choice election.

    Candidates are registered by name up to the declared number; ballots are
    then submitted as ranks ordered by candidate registration.

    :param n_candidates: Number of candidates standing in the election.
    '''
    def __init__(self, n_candidates: int):
        if n_candidates < 1:
            raise ValueError(
                f'invalid number of candidates: {n_candidates}, must be >=1'
            )
        self.n_candidates = n_candidates
        self.validator = RankPermutationValidator(n_candidates)
        self._candidates: List[Candidate] = []

    @property
    def candidates(self) -> Tuple[Candidate, ...]:
        '''All registered candidates including the eliminated ones.'''
        return tuple(self._candidates)

    def add_candidate(self, name: str) -> Candidate:
        '''Register a candidate in the next free slot.

        :raises CandidateCapacityError: If all slots are taken.
        '''
        if len(self._candidates) >= self.n_candidates:
            raise CandidateCapacityError(name, self.n_candidates)
        candidate = Candidate(name)
        self._candidates.append(candidate)
        return candidate

    def validate_ballot(self, ranks: Sequence[int]) -> None:
        '''Check that the ranks are a permutation of 1 to n.

        :raises BallotError: If the ballot is invalid.
        '''
        self.validator.validate(ranks)

    def is_ballot_valid(self, ranks: Sequence[int]) -> bool:
        return self.validator.is_valid(ranks)

    def add_ballot(self, ranks: Sequence[int]) -> Ballot:
        '''Add a completed ballot to the election.

        :param ranks: Ranks given to the candidates in the order of their
            registration. A valid ballot contains exactly one entry with
            a rank of 1, exactly one with a rank of 2, etc.
        :returns: The accepted ballot.
        :raises BallotError: If the ballot is invalid. The election is left
            unchanged.
        :raises VotingSystemError: If not all candidates are registered yet.
        '''
        self.validate_ballot(ranks)
        self._check_nominations()
        ballot = Ballot(ranks)
        self._assign(ballot)
        return ballot

    def total_ballot_count(self) -> int:
        '''Return the number of ballots held by all candidates.'''
        return sum(cand.votes for cand in self._candidates)

    def select_winner(self) -> List[str]:
        '''Apply instant-runoff counting to identify the winner.

        Eliminations are permanent: calling this again after a decisive
        count returns the same result but the elimination rounds are not
        repeated.

        :returns: A list with the winner's name or, if the remaining
            candidates are tied, the names of all the tied candidates in the
            order of their registration. The list is empty only if no
            ballots were cast.
        '''
        self._check_nominations()
        total = self.total_ballot_count()
        count_i = 0
        while True:
            count_i += 1
            logger.info('proceeding to count %d', count_i)
            winners = self.next_count(total)
            if winners is not None:
                return winners

    def next_count(self, total: int) -> Optional[List[str]]:
        '''Advance the counting by one iteration (count).

        :param total: Total number of ballots, fixed for the whole counting.
        :returns: Names of the winners if the count was decisive or tied,
            None if candidates were eliminated and another count is needed.
        '''
        active = [
            cand for cand in self._candidates
            if not cand.eliminated and cand.votes > 0
        ]
        logger.info('current vote totals: %s',
                    {cand.name: cand.votes for cand in active})
        if all(cand.votes == active[0].votes for cand in active):
            tied = [cand.name for cand in active]
            logger.info('%s are tied, electing all', tied)
            return tied
        for cand in active:
            if cand.votes > total // 2:
                logger.info('%s has a majority, elected', cand.name)
                return [cand.name]
        min_votes = min(cand.votes for cand in active)
        eliminated = [cand for cand in active if cand.votes == min_votes]
        logger.info('eliminating %s with %d votes',
                    [cand.name for cand in eliminated], min_votes)
        released = []
        for cand in eliminated:
            released.extend(cand.eliminate())
        for ballot in released:
            self._assign(ballot)
        return None

    def _assign(self, ballot: Ballot) -> None:
        while True:
            cand_i = ballot.top_candidate()
            candidate = self._candidates[cand_i]
            if candidate.eliminated:
                ballot.eliminate_candidate(cand_i)
            else:
                logger.debug('assigning %s to %s', ballot, candidate.name)
                candidate.add_ballot(ballot)
                return

    def _check_nominations(self) -> None:
        if len(self._candidates) != self.n_candidates:
            raise VotingSystemError(
                f'only {len(self._candidates)} of {self.n_candidates}'
                ' candidates registered'
            )
