'''Borda count tally and its variants.

A ranked ballot gives points to the candidates it lists, decreasing with
their position on the ballot. The variants of the Borda count, selected by
the rank scorers in :mod:`tallylib.component.rankscore`, differ in the
points per position and in the treatment of ballots that do not list all
candidates.

The points depend on the total number of candidates, which is only known
when all ballots have been added; identical ballots are therefore kept
together with their summed weight and the points are computed when the
ranking is requested.
'''

from typing import Callable, List, Tuple, Union
from numbers import Number

import tallylib.component.core
import tallylib.component.rankscore
import tallylib.util
import tallylib.vote
from tallylib.candidate import Candidate
from tallylib.evaluate.core import Tally
from tallylib.result import RankedCandidate, rank_by_count
from tallylib.vote import TransitiveVoteType


class BordaTally(Tally):
    '''Borda count tally.

    :param variant: Rank scorer to assign points to ballot positions; a name
        from :data:`tallylib.component.rankscore.RANK_SCORERS` or a callable
        with the same signature. The Dowdall variant requires a fractional
        count type.
    :raises tallylib.numeric.UnsupportedCountType: If the variant requires
        a fractional count type and the tally counts in integers.

    Other parameters are passed to :class:`tallylib.evaluate.core.Tally`.
    '''
    def __init__(self,
                 n_winners: int = 1,
                 candidates=None,
                 count_type=int,
                 variant: Union[str, Callable] = 'borda',
                 ):
        super().__init__(n_winners, candidates, count_type)
        self.scorer = tallylib.component.rankscore.construct(variant)
        tallylib.component.core.check_count_type(self.scorer, self.count_type)
        self.running_total = {}

    def add(self, vote: TransitiveVoteType) -> None:
        self.add_weighted(vote, self.count_type.one)

    def add_weighted(self, vote: TransitiveVoteType, weight: Number) -> None:
        '''Add a weighted ballot ordering candidates from the best.'''
        tallylib.vote.check_transitive(vote)
        weight = self._convert_weight(weight)
        key = tuple(self._intern_all(vote))
        self.running_total[key] = \
            self.running_total.get(key, self.count_type.zero) + weight

    def _points(self) -> List[Tuple[int, Number]]:
        n_candidates = len(self.interner)
        points = [self.count_type.zero] * n_candidates
        for ballot, weight in self.running_total.items():
            n_marked = len(ballot)
            for position, cand_id in enumerate(ballot):
                points[cand_id] += weight * self.scorer(
                    position, n_candidates, n_marked, self.count_type
                )
        return list(enumerate(points))

    def totals(self) -> List[Tuple[Candidate, Number]]:
        '''Return the candidates with their points, highest first.'''
        return self._by_candidate(
            tallylib.util.sorted_votes(self._points())
        )

    def ranked(self) -> List[RankedCandidate]:
        return rank_by_count(self._by_candidate(self._points()))
