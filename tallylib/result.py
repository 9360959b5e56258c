'''Ranked results of tallies.

All tallies present their results as a list of :class:`RankedCandidate`
pairs, ordered by ascending rank. Rank 0 is the most preferred; candidates
with equal rank are tied. The ranks present always form a contiguous
sequence starting at zero.

To select a given number of winners out of such a ranking, use
:meth:`RankedWinners.from_ranked`. Ties are never split: if the candidates
tied at the least significant included rank do not all fit into the number
of winners, they are all included and the winners *overflow*.
'''

import collections
import operator
from typing import Any, Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple
from numbers import Number

from tallylib.candidate import Candidate


class RankedCandidate(NamedTuple):
    '''A candidate with its rank in the result (0 is the best rank).'''
    candidate: Candidate
    rank: int


def rank_by_count(counts: Iterable[Tuple[Candidate, Number]]) -> List[RankedCandidate]:
    '''Rank candidates by descending counts, giving equal counts equal ranks.

    This is the plurality ranking reduction that most tallies end with.
    Candidates with equal counts keep their input order.

    :param counts: Pairs of candidates and their counts (or a dictionary
        items view).
    '''
    sorted_counts = sorted(counts, key=operator.itemgetter(1), reverse=True)
    ranked = []
    rank = 0
    for i, (cand, count) in enumerate(sorted_counts):
        if i > 0 and count != sorted_counts[i-1][1]:
            rank += 1
        ranked.append(RankedCandidate(cand, rank))
    return ranked


def rank_groups(groups: Iterable[Iterable[Candidate]]) -> List[RankedCandidate]:
    '''Rank groups of tied candidates, the first group getting rank 0.

    Empty groups do not consume a rank.
    '''
    ranked = []
    rank = 0
    for group in groups:
        members = [RankedCandidate(cand, rank) for cand in group]
        if members:
            ranked.extend(members)
            rank += 1
    return ranked


class RankedWinners:
    '''A ranked list of winning candidates, ordered by ascending rank.

    The number of winners may be higher than the requested number if there is
    a tie between the least significantly ranked winners; use
    :meth:`is_overflowing` to detect that.

    :param winners: Ranked winning candidates.
    :param n_winners: Requested number of winners. Zero means no limit.
    '''
    def __init__(self,
                 winners: Iterable[Tuple[Candidate, int]] = (),
                 n_winners: int = 0,
                 ):
        self.winners = sorted(
            (RankedCandidate(*item) for item in winners),
            key=operator.attrgetter('rank')
        )
        self.n_winners = n_winners

    @classmethod
    def from_ranked(cls,
                    ranked: Iterable[Tuple[Candidate, int]],
                    n_winners: int,
                    ) -> 'RankedWinners':
        '''Select winners from a full ranking.

        Rank groups are taken in ascending order until at least n_winners
        candidates are included. The last group taken is always included
        whole, even if this exceeds n_winners.

        :param ranked: Ranked candidates, in any order.
        :param n_winners: Number of winners requested. Zero means all ranked
            candidates are winners.
        '''
        ordered = sorted(
            (RankedCandidate(*item) for item in ranked),
            key=operator.attrgetter('rank')
        )
        winners = []
        for cand, rank in ordered:
            if (n_winners and len(winners) >= n_winners
                    and rank != winners[-1].rank):
                break
            winners.append(RankedCandidate(cand, rank))
        return cls(winners, n_winners)

    def __len__(self) -> int:
        return len(self.winners)

    def __iter__(self) -> Iterator[RankedCandidate]:
        return iter(self.winners)

    def __contains__(self, candidate: Any) -> bool:
        return self.contains(candidate)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, RankedWinners):
            return (
                self.winners == other.winners
                and self.n_winners == other.n_winners
            )
        return NotImplemented

    def __repr__(self) -> str:
        return f'RankedWinners({self.winners!r}, n_winners={self.n_winners})'

    def is_empty(self) -> bool:
        return not self.winners

    def contains(self, candidate: Any) -> bool:
        '''Return True if the candidate is among the winners.'''
        return any(ranked.candidate == candidate for ranked in self.winners)

    def rank_of(self, candidate: Any) -> Optional[int]:
        '''Return the rank of a winner, or None if it is not a winner.'''
        for ranked in self.winners:
            if ranked.candidate == candidate:
                return ranked.rank
        return None

    def all(self) -> List[Candidate]:
        '''Return all winners without their ranks, best first.'''
        return [ranked.candidate for ranked in self.winners]

    def by_rank(self) -> Dict[int, List[Candidate]]:
        '''Return the winners grouped by their rank.'''
        groups = collections.defaultdict(list)
        for cand, rank in self.winners:
            groups[rank].append(cand)
        return dict(groups)

    def is_overflowing(self) -> bool:
        '''Return True if there are more winners than requested.

        Only a tie of the least significantly ranked winners can cause an
        overflow. When filling three seats, a tie of the top two candidates
        causes none, but a tie of the third and fourth one makes both
        of them winners, equally ranked to fill the third seat.
        '''
        return bool(self.n_winners) and len(self.winners) > self.n_winners

    def overflowing_candidates(self) -> Optional[List[Candidate]]:
        '''Return the tied least significantly ranked winners on overflow.

        :returns: All winners sharing the last included rank if the winners
            overflow, None otherwise.
        '''
        if not self.is_overflowing():
            return None
        last_rank = self.winners[-1].rank
        return [
            ranked.candidate for ranked in self.winners
            if ranked.rank == last_rank
        ]
