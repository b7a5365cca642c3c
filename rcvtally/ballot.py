'''Ranked ballots and ballot validators.

A ballot is given as a sequence of integer ranks indexed by candidate: on an
election with three candidates, the ballot ``(2, 1, 3)`` ranks the second
candidate first, the first candidate second and the third candidate last.
Only complete rankings are accepted, so the ranks must be a permutation of
the numbers 1 to n, where n is the number of candidates.

Ballot validators check the ranks before a :class:`Ballot` is constructed.
If the ranks are invalid, they raise a subclass of :class:`BallotError`,
which is also a ``ValueError``.
'''

import abc
import collections.abc
from numbers import Integral
from typing import Any, Sequence, Tuple, FrozenSet


class BallotError(ValueError, metaclass=abc.ABCMeta):
    '''A ballot is invalid given the election rules.'''
    pass


class BallotTypeError(BallotError):
    '''A ballot is not a sequence of integer ranks.

    :param ranks: The object detected as invalid.
    '''
    def __init__(self, ranks: Any):
        self.ranks = ranks
        super().__init__(
            f'invalid ballot: {ranks!r}, must be a sequence of integer ranks'
        )


class BallotLengthError(BallotError):
    '''A ballot does not rank the right number of candidates.

    :param length: Number of ranks found on the ballot.
    :param expected: Number of candidates in the election.
    '''
    def __init__(self, length: int, expected: int):
        self.length = length
        self.expected = expected
        super().__init__(
            f'invalid ballot length: {length}, must be {expected}'
        )


class BallotRankError(BallotError):
    '''The ranks on a ballot are not a permutation of 1 to n.

    :param ranks: The ranks found on the ballot.
    :param expected: Number of candidates in the election.
    '''
    def __init__(self, ranks: Sequence[int], expected: int):
        self.ranks = tuple(ranks)
        self.expected = expected
        super().__init__(
            f'invalid ballot ranks: {self.ranks}, '
            f'must be a permutation of 1 to {expected}'
        )


class ExhaustedBallotError(AssertionError):
    '''All candidates on a ballot have been eliminated.

    The counting procedure never eliminates every candidate a ballot could
    be routed to, so this signals a broken invariant rather than bad input.
    '''
    pass


class RankPermutationValidator:
    '''Validate that a ballot ranks all candidates exactly once.

    :param n_candidates: Number of candidates standing in the election.
    '''
    def __init__(self, n_candidates: int):
        self.n_candidates = n_candidates

    def validate(self, ranks: Sequence[int]) -> None:
        '''Check that the ranks are a permutation of 1 to n.

        :param ranks: Ranks given to the candidates, ordered by candidate.
        :raises BallotTypeError: If the ranks are not a sequence of integers.
        :raises BallotLengthError: If the ballot ranks a different number
            of candidates than stand in the election.
        :raises BallotRankError: If any rank is out of range or repeated.
        '''
        if (
            not isinstance(ranks, collections.abc.Sequence)
            or isinstance(ranks, (str, bytes))
            or not all(isinstance(rank, Integral) for rank in ranks)
        ):
            raise BallotTypeError(ranks)
        if len(ranks) != self.n_candidates:
            raise BallotLengthError(len(ranks), self.n_candidates)
        sorted_ranks = sorted(ranks)
        for i, rank in enumerate(sorted_ranks):
            if rank != i + 1:
                raise BallotRankError(ranks, self.n_candidates)

    def is_valid(self, ranks: Sequence[int]) -> bool:
        '''Return True if the ranks form a valid ballot.'''
        try:
            self.validate(ranks)
        except BallotError:
            return False
        return True


class Ballot:
    '''A single voter's complete ranking of the candidates.

    The ranking is fixed at construction. As candidates get eliminated, their
    entries on the ballot are marked exhausted and the ballot's top candidate
    moves on to the next preference.

    :param ranks: Ranks given to the candidates, ordered by candidate index
        (1 is the first choice). Must be validated beforehand.
    '''
    def __init__(self, ranks: Sequence[int]):
        self.ranks: Tuple[int, ...] = tuple(ranks)
        self.preferences: Tuple[int, ...] = tuple(sorted(
            range(len(self.ranks)), key=self.ranks.__getitem__
        ))
        self._exhausted = set()

    @property
    def exhausted_candidates(self) -> FrozenSet[int]:
        return frozenset(self._exhausted)

    @property
    def exhausted(self) -> bool:
        '''Whether every candidate on the ballot has been eliminated.'''
        return len(self._exhausted) == len(self.preferences)

    def top_candidate(self) -> int:
        '''Return the index of the most preferred candidate still in play.

        :raises ExhaustedBallotError: If all entries are exhausted.
        '''
        for cand_i in self.preferences:
            if cand_i not in self._exhausted:
                return cand_i
        raise ExhaustedBallotError(f'no candidates left on ballot {self!r}')

    def eliminate_candidate(self, index: int) -> None:
        '''Mark the given candidate as exhausted on this ballot.

        :param index: Index of the eliminated candidate.
        :raises IndexError: If the ballot has no such candidate.
        '''
        if not 0 <= index < len(self.ranks):
            raise IndexError(f'candidate {index} not on ballot {self!r}')
        self._exhausted.add(index)

    def __repr__(self) -> str:
        return f'<Ballot{self.ranks}>'
