'''Election candidates and the ballots counting towards them.'''

from typing import Any, List

from rcvtally.ballot import Ballot


class CandidateError(Exception):
    '''A candidate is invalid in the given context.

    E.g. an eliminated candidate receiving a ballot.

    :param candidate: Candidate that was found to be invalid.
    :param expected: Definition of a candidate that was expected.
    '''
    def __init__(self, candidate: Any, expected: Any = None):
        self.candidate = candidate
        self.expected = expected
        message = f'invalid candidate: {candidate}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


class CandidateCapacityError(CandidateError):
    '''More candidates were registered than the election declared.

    :param candidate: Name of the candidate that did not fit.
    :param capacity: Declared number of candidates.
    '''
    def __init__(self, candidate: Any, capacity: int):
        self.capacity = capacity
        super().__init__(
            candidate, f'one of at most {capacity} registered candidates'
        )


class Candidate:
    '''A candidate standing in a ranked-choice election.

    The candidate holds the ballots that currently have them as their top
    choice. Eliminated candidates stay in the election's candidate list but
    hold no ballots.

    :param name: Name of the candidate.
    '''
    def __init__(self, name: str):
        self.name = name
        self.eliminated = False
        self._ballots: List[Ballot] = []

    @property
    def votes(self) -> int:
        '''Number of ballots currently counting towards the candidate.'''
        return len(self._ballots)

    @property
    def ballots(self) -> List[Ballot]:
        return list(self._ballots)

    def is_eliminated(self) -> bool:
        return self.eliminated

    def add_ballot(self, ballot: Ballot) -> None:
        '''Count the ballot towards this candidate.

        :raises CandidateError: If the candidate is already eliminated.
        '''
        if self.eliminated:
            raise CandidateError(self, 'a candidate still in the count')
        self._ballots.append(ballot)

    def eliminate(self) -> List[Ballot]:
        '''Eliminate the candidate and hand over their ballots.

        :returns: The ballots the candidate held, to be transferred to their
            next preferences.
        '''
        self.eliminated = True
        released = self._ballots
        self._ballots = []
        return released

    def __repr__(self) -> str:
        return (
            f'<Candidate({self.name}'
            + (',eliminated' if self.eliminated else f',{self.votes}')
            + ')>'
        )
