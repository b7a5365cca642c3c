"""Rcvtally - a library for tallying ranked-choice elections.

Rcvtally counts single-winner elections by instant runoff. An election
consists of the following:

-   The candidates standing for the election, registered by name into the
    :class:`Election` up to its declared number (see the ``candidate``
    module).
-   The ballots, each a complete ranking of all the candidates. These are
    checked by the validators from the ``ballot`` module before they are
    accepted.
-   The counting itself, which repeatedly eliminates the weakest candidates
    and transfers their ballots until somebody has a majority or all the
    remaining candidates are tied. This is the task of the ``election``
    module.
"""

from rcvtally.ballot import (
    Ballot, BallotError, BallotTypeError, BallotLengthError, BallotRankError,
    ExhaustedBallotError, RankPermutationValidator,
)
from rcvtally.candidate import Candidate, CandidateError, \
    CandidateCapacityError
from rcvtally.election import Election, VotingSystemError
