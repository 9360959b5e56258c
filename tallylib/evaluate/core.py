'''General tally machinery and the plurality tally.'''

import abc
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union
from numbers import Number

import tallylib.numeric
import tallylib.util
import tallylib.vote
from tallylib.candidate import Candidate, CandidateInterner
from tallylib.numeric import CountType
from tallylib.result import RankedCandidate, RankedWinners, rank_by_count


class VotingSystemError(Exception):
    '''A tally with a valid setup ended up in an unresolvable state.'''
    pass


class Tally(metaclass=abc.ABCMeta):
    '''Accumulate ballots and rank the candidates on request.

    A root abstract base class for all tallies. Ballots are validated as
    a whole before anything is recorded, so a ballot that raises an error
    leaves no trace in the tally.

    :param n_winners: Number of winners to select by :meth:`winners`. Zero
        means all ranked candidates are winners.
    :param candidates: If given, the tally only accepts these candidates
        and ballots naming any other candidate are rejected with
        :class:`tallylib.candidate.UnknownCandidate`.
    :param count_type: Numeric type to count the votes with - a name from
        :data:`tallylib.numeric.COUNT_TYPES`, a Python numeric type or
        a :class:`tallylib.numeric.CountType`.
    '''
    def __init__(self,
                 n_winners: int = 1,
                 candidates: Optional[Sequence[Candidate]] = None,
                 count_type: Union[str, type, CountType] = int,
                 ):
        if isinstance(n_winners, bool) or not isinstance(n_winners, int) \
                or n_winners < 0:
            raise ValueError(f'invalid number of winners: {n_winners!r}')
        self.n_winners = n_winners
        self.count_type = tallylib.numeric.construct(count_type)
        if candidates is not None:
            candidates = list(candidates)
            tallylib.vote.check_duplicates(candidates)
        self.interner = CandidateInterner(
            candidates, closed=(candidates is not None)
        )

    @classmethod
    def with_capacity(cls,
                      n_winners: int,
                      expected_candidates: int,
                      **kwargs) -> 'Tally':
        '''Create a tally expecting a given number of candidates.

        The expected number is a hint only; the tally accepts any number of
        candidates.
        '''
        if expected_candidates < 0:
            raise ValueError(
                f'invalid expected candidates: {expected_candidates!r}'
            )
        return cls(n_winners, **kwargs)

    @classmethod
    def with_candidates(cls,
                        n_winners: int,
                        candidates: Sequence[Candidate],
                        **kwargs) -> 'Tally':
        '''Create a tally that only accepts the given candidates.

        :raises tallylib.vote.DuplicateCandidate: If a candidate is listed
            twice.
        '''
        return cls(n_winners, candidates=list(candidates), **kwargs)

    def candidates(self) -> List[Candidate]:
        '''Return all candidates known to the tally, in order of appearance.'''
        return self.interner.candidates()

    @abc.abstractmethod
    def totals(self) -> List[Tuple[Any, Number]]:
        '''Return the running totals of the tally.'''
        raise NotImplementedError

    @abc.abstractmethod
    def ranked(self) -> List[RankedCandidate]:
        '''Rank all candidates, best first; equal ranks are ties.

        The ranking is computed from scratch on every call.
        '''
        raise NotImplementedError

    def winners(self) -> RankedWinners:
        '''Select n_winners best ranked candidates.

        Ties are never broken: if candidates tied at the last winning rank
        do not fit into the number of winners, all of them are included.
        '''
        return RankedWinners.from_ranked(self.ranked(), self.n_winners)

    def _convert_weight(self, weight: Number) -> Number:
        converted = self.count_type.convert(weight)
        if not self.count_type.is_finite(converted) \
                or converted < self.count_type.zero:
            raise tallylib.vote.VoteValueError(
                weight, allowed='finite non-negative weights'
            )
        return converted

    def _intern_all(self, candidates: Iterable[Candidate]) -> List[int]:
        # check first so that a rejected ballot interns nothing
        candidates = list(candidates)
        for cand in candidates:
            self.interner.check(cand)
        return [self.interner.intern(cand) for cand in candidates]

    def _by_candidate(self, counts: Iterable[Tuple[int, Number]]
                      ) -> List[Tuple[Candidate, Number]]:
        return [(self.interner[cand_id], count) for cand_id, count in counts]


class CountingTally(Tally):
    '''A tally that keeps a single running count for every candidate.

    Candidates are ranked by their counts in descending order. Subclasses
    only define how a ballot contributes to the counts.
    '''
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.running_total = {}

    def _add_counts(self, additions: Iterable[Tuple[int, Number]]) -> None:
        zero = self.count_type.zero
        for cand_id, addition in additions:
            self.running_total[cand_id] = \
                self.running_total.get(cand_id, zero) + addition

    def _counts(self) -> List[Tuple[int, Number]]:
        zero = self.count_type.zero
        return [
            (cand_id, self.running_total.get(cand_id, zero))
            for cand_id in range(len(self.interner))
        ]

    def totals(self) -> List[Tuple[Candidate, Number]]:
        '''Return the candidates with their counts, highest count first.

        Candidates with equal counts are listed in order of appearance.
        '''
        return self._by_candidate(tallylib.util.sorted_votes(self._counts()))

    def ranked(self) -> List[RankedCandidate]:
        return rank_by_count(self._by_candidate(self._counts()))


class PluralityTally(CountingTally):
    '''Plurality (first-past-the-post) tally.

    Each ballot is a single candidate. Candidates are ranked by the number
    of ballots cast for them.
    '''
    def add(self, vote: Candidate) -> None:
        self.add_weighted(vote, self.count_type.one)

    def add_weighted(self, vote: Candidate, weight: Number) -> None:
        '''Add a ballot for a single candidate with the given weight.

        A zero weight still registers the candidate.
        '''
        weight = self._convert_weight(weight)
        cand_id, = self._intern_all([vote])
        self._add_counts([(cand_id, weight)])
