'''Ballot (vote) types and ballot validation.

The following ballot types are recognized by Tallylib:

-   **Simple** votes - a voter votes for a single candidate. Represented by the
    candidate object itself.
-   **Transitive** votes - a voter orders a number of candidates from the most
    to the least preferred. Represented by a list or tuple of candidates.
    Ties cannot be expressed.
-   **Ranked** votes - a voter assigns a rank to a number of candidates.
    Represented by a sequence of ``(candidate, rank)`` pairs where rank is
    a non-negative integer, lower ranks are preferred and equal ranks
    express a tie. The order of the pairs is irrelevant.
-   **Approval** votes - a voter selects a number of candidates and votes for
    them equally. Represented by any collection of candidates.
-   **Score** votes - a voter assigns a numeric score to a number of
    candidates. Represented by a sequence of ``(candidate, score)`` pairs.

All tallies validate every ballot before recording any part of it; the
functions here raise a subclass of :class:`VoteError` for invalid ballots
(or :class:`tallylib.candidate.CandidateError` for invalid candidates).
'''

import collections.abc
from typing import Any, Collection, Iterable, Iterator, List, Optional, Sequence, Tuple
from numbers import Number

from tallylib.candidate import Candidate, CandidateError


class VoteError(Exception):
    '''A vote is invalid given the election rules.'''
    pass


class VoteTypeError(VoteError):
    '''A vote is of an invalid type.

    E.g. a bare string in place of a sequence of candidates.

    :param vote: Vote detected as invalid.
    :param expected: Vote type that was expected.
    '''
    def __init__(self, vote: Any, expected: Any = None):
        self.vote = vote
        self.expected = expected
        message = f'invalid vote type: {vote!r}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


class VoteValueError(VoteError):
    '''An explicitly given vote value is invalid.

    :param value: Value of the vote that is invalid.
    :param candidate: A candidate that the vote was given for. If None, a
        specific candidate could not be pinpointed.
    :param allowed: A spectrum of values that is allowed at the given point.
    '''
    def __init__(self,
                 value: Any,
                 candidate: Optional[Candidate] = None,
                 allowed: Any = None,
                 ):
        self.value = value
        self.candidate = candidate
        self.allowed = allowed
        message = f'invalid vote: {value!r}'
        if candidate is not None:
            message += f' for candidate {candidate!r}'
        if allowed is not None:
            message += f', allowed: {allowed}'
        super().__init__(message)


class DuplicateCandidate(VoteError):
    '''A vote lists the same candidate more than once.

    :param candidate: The first candidate found repeated.
    '''
    def __init__(self, candidate: Candidate):
        self.candidate = candidate
        super().__init__(f'vote contains duplicate candidate: {candidate!r}')


SimpleVoteType = Candidate
TransitiveVoteType = Sequence[Candidate]
RankedVoteType = Sequence[Tuple[Candidate, int]]
ApprovalVoteType = Collection[Candidate]
ScoreVoteType = Sequence[Tuple[Candidate, Number]]


def check_duplicates(candidates: Iterable[Candidate]) -> None:
    '''Check that no candidate is repeated.

    :raises CandidateError: If any of the candidates is not a valid
        candidate object (e.g. it is not hashable).
    :raises DuplicateCandidate: For the first repeated candidate.
    '''
    seen = set()
    for cand in candidates:
        if not isinstance(cand, Candidate):
            raise CandidateError(cand, 'a hashable non-tuple object')
        if cand in seen:
            raise DuplicateCandidate(cand)
        seen.add(cand)


def check_transitive(vote: TransitiveVoteType) -> None:
    '''Check that a transitive vote is a sequence of distinct candidates.

    :raises VoteTypeError: If the vote is a string or not a list or tuple.
    :raises DuplicateCandidate: If any candidate is listed twice.
    '''
    if not isinstance(vote, (list, tuple)):
        raise VoteTypeError(vote, 'a list or tuple of candidates')
    check_duplicates(vote)


def check_ranked(vote: RankedVoteType) -> None:
    '''Check that a ranked vote is a sequence of (candidate, rank) pairs.

    :raises VoteTypeError: If the vote is not a list or tuple, or any of
        its items is not a pair.
    :raises VoteValueError: If any rank is not a non-negative integer.
    :raises DuplicateCandidate: If any candidate is listed twice.
    '''
    if not isinstance(vote, (list, tuple)):
        raise VoteTypeError(vote, 'a list or tuple of (candidate, rank)')
    for item in vote:
        if not isinstance(item, tuple) or len(item) != 2:
            raise VoteTypeError(item, 'a (candidate, rank) pair')
        cand, rank = item
        if isinstance(rank, bool) or not isinstance(rank, int) or rank < 0:
            raise VoteValueError(rank, cand, 'non-negative integers')
    check_duplicates(cand for cand, rank in vote)


def check_approval(vote: ApprovalVoteType) -> None:
    '''Check that an approval vote is a collection of distinct candidates.

    :raises VoteTypeError: If the vote is a string or not a collection.
    :raises DuplicateCandidate: If any candidate is listed twice.
    '''
    if (isinstance(vote, (str, bytes))
            or not isinstance(vote, collections.abc.Collection)):
        raise VoteTypeError(vote, 'a collection of candidates')
    check_duplicates(vote)


def check_scored(vote: ScoreVoteType) -> None:
    '''Check that a score vote is a sequence of (candidate, score) pairs.

    :raises VoteTypeError: If the vote is not a list or tuple, or any of
        its items is not a pair.
    :raises VoteValueError: If any score is not a number.
    :raises DuplicateCandidate: If any candidate is scored twice.
    '''
    if not isinstance(vote, (list, tuple)):
        raise VoteTypeError(vote, 'a list or tuple of (candidate, score)')
    for item in vote:
        if not isinstance(item, tuple) or len(item) != 2:
            raise VoteTypeError(item, 'a (candidate, score) pair')
        cand, score = item
        if isinstance(score, bool) or not isinstance(score, Number):
            raise VoteValueError(score, cand, 'numbers')
    check_duplicates(cand for cand, score in vote)


def ranked_from_transitive(vote: TransitiveVoteType) -> List[Tuple[Candidate, int]]:
    '''Convert a transitive vote to a ranked vote with consecutive ranks.'''
    return [(cand, rank) for rank, cand in enumerate(vote)]


def pairwise_preferences(vote: RankedVoteType) -> Iterator[Tuple[Any, Any]]:
    '''Yield all pairs of candidates where the first is ranked better.

    Candidates at equal ranks do not produce any pair.

    :param vote: A ranked vote; its candidates may be represented by any
        objects (such as candidate identifiers).
    '''
    for cand_a, rank_a in vote:
        for cand_b, rank_b in vote:
            if rank_a < rank_b:
                yield cand_a, cand_b


def rank_tiers(vote: RankedVoteType) -> List[List[Candidate]]:
    '''Group the candidates of a ranked vote by rank, best rank first.

    Gaps in the ranks are closed up, so ``[('A', 0), ('B', 5)]`` gives
    ``[['A'], ['B']]``.
    '''
    tiers = collections.defaultdict(list)
    for cand, rank in vote:
        tiers[rank].append(cand)
    return [tiers[rank] for rank in sorted(tiers)]
