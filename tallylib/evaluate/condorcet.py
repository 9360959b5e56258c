'''Condorcet tallies.

These tallies work by examining pairwise orderings between candidates (how
much voting weight prefers one candidate to another). All ballots are
decomposed into candidate pairs when they are added; the running total of
the tally is a table of weighted counts for ordered pairs of candidates.

Two ranking engines are built on top of the pairwise counts:

-   :class:`CondorcetTally` ranks the candidates by the strongly connected
    components of the preference graph, so the first rank is always the
    Smith set - the smallest group of candidates that beat or tie everyone
    outside of it. A full voting paradox (a preference cycle through all
    candidates) thus ties all of them at the first rank.
-   :class:`SchulzeTally` computes the strongest (widest) paths between all
    pairs of candidates and ranks them by the number of opponents they
    defeat in terms of those paths.

Both reliably select a Condorcet winner (a candidate that beats every
other one pairwise) as the sole top ranked candidate when there is one.
'''

import logging
from typing import Callable, Dict, List, Tuple, Union
from numbers import Number

import tallylib.component.core
import tallylib.component.strength
import tallylib.vote
from tallylib.candidate import Candidate
from tallylib.evaluate.core import Tally
from tallylib.graph import PreferenceGraph
from tallylib.result import RankedCandidate, rank_by_count, rank_groups
from tallylib.vote import RankedVoteType, TransitiveVoteType


logger = logging.getLogger(__name__)


class PairwiseTally(Tally):
    '''A tally of pairwise preferences between candidates.

    Keeps the total weight of ballots preferring candidate A to candidate B
    for every ordered pair of candidates (A, B) that was ever compared.
    Ranking is left to subclasses.

    Ballots can be given in two forms:

    -   *Transitive* ballots (:meth:`add`, :meth:`add_weighted`) are lists
        of candidates ordered from the most preferred. Every candidate is
        preferred to all candidates listed after it; candidates not listed
        are not compared at all.
    -   *Ranked* ballots (:meth:`add_ranked`, :meth:`add_ranked_weighted`)
        are lists of ``(candidate, rank)`` pairs, lower ranks being
        preferred and equal ranks denoting ties. If the tally was given its
        candidates upfront, the candidates missing from a ranked ballot are
        considered tied below all listed ones.

    Parameters are passed to :class:`tallylib.evaluate.core.Tally`.
    '''
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.running_total: Dict[Tuple[int, int], Number] = {}

    def add(self, vote: TransitiveVoteType) -> None:
        self.add_weighted(vote, self.count_type.one)

    def add_weighted(self, vote: TransitiveVoteType, weight: Number) -> None:
        '''Add a weighted transitive ballot.

        :param vote: Candidates ordered from the most preferred.
        :param weight: Weight of the ballot.
        :raises tallylib.vote.DuplicateCandidate: If a candidate is listed
            twice; the tally stays unchanged.
        :raises tallylib.candidate.UnknownCandidate: If a candidate is not
            among the candidates given upfront.
        '''
        tallylib.vote.check_transitive(vote)
        weight = self._convert_weight(weight)
        cand_ids = self._intern_all(vote)
        self._record(tallylib.vote.ranked_from_transitive(cand_ids), weight)

    def add_ranked(self, vote: RankedVoteType) -> None:
        self.add_ranked_weighted(vote, self.count_type.one)

    def add_ranked_weighted(self, vote: RankedVoteType, weight: Number) -> None:
        '''Add a weighted ranked ballot.

        :param vote: A list of ``(candidate, rank)`` pairs in any order.
        :param weight: Weight of the ballot.
        :raises tallylib.vote.DuplicateCandidate: If a candidate is listed
            twice; the tally stays unchanged.
        :raises tallylib.vote.VoteValueError: If a rank is not
            a non-negative integer.
        :raises tallylib.candidate.UnknownCandidate: If a candidate is not
            among the candidates given upfront.
        '''
        tallylib.vote.check_ranked(vote)
        weight = self._convert_weight(weight)
        cand_ids = self._intern_all(cand for cand, rank in vote)
        ranked_ids = [
            (cand_id, rank) for cand_id, (cand, rank) in zip(cand_ids, vote)
        ]
        if self.interner.closed:
            bottom_rank = max((rank for cand, rank in vote), default=-1) + 1
            listed = set(cand_ids)
            ranked_ids.extend(
                (cand_id, bottom_rank)
                for cand_id in range(len(self.interner))
                if cand_id not in listed
            )
        self._record(ranked_ids, weight)

    def _record(self,
                ranked_ids: List[Tuple[int, int]],
                weight: Number,
                ) -> None:
        zero = self.count_type.zero
        for pair in tallylib.vote.pairwise_preferences(ranked_ids):
            self.running_total[pair] = self.running_total.get(pair, zero) + weight

    def totals(self) -> List[Tuple[Tuple[Candidate, Candidate], Number]]:
        '''Return the pairwise counts.

        :returns: A list of ``((candidate_a, candidate_b), count)`` items
            where count is the total weight of ballots preferring candidate_a
            to candidate_b, ordered by the order of appearance of the
            candidates. Pairs that were never compared are omitted.
        '''
        return [
            ((self.interner[cand_a], self.interner[cand_b]), count)
            for (cand_a, cand_b), count in sorted(self.running_total.items())
        ]

    def build_graph(self) -> PreferenceGraph:
        '''Build the preference graph from the current pairwise counts.

        The graph has an edge from the loser of each pair to its winner (two
        opposite edges for a tie), weighted by the ``(support, opposition)``
        counts of the winner. A new graph is built on every call.
        '''
        return PreferenceGraph.from_counts(
            self.interner.candidates(),
            self.running_total,
            zero=self.count_type.zero,
        )


class CondorcetTally(PairwiseTally):
    '''Condorcet tally ranking the candidates by Smith sets.

    The candidates are ranked by the strongly connected components of the
    preference graph, found by Tarjan's algorithm. All members of one
    component share its rank; the first component is the Smith set.
    Candidates that were never compared with any other candidate each form
    their own component.

    Parameters are passed to :class:`tallylib.evaluate.core.Tally`.
    '''
    def ranked(self) -> List[RankedCandidate]:
        components = self.build_graph().strongly_connected_components()
        logger.info('found %d strongly connected components', len(components))
        for i, component in enumerate(components):
            logger.debug('component %d: %s', i, component)
        return rank_groups(components)

    def smith_set(self) -> List[Candidate]:
        '''Return the Smith set, the candidates at the first rank.'''
        return [cand for cand, rank in self.ranked() if rank == 0]


class SchulzeTally(PairwiseTally):
    '''Schulze (beatpath) Condorcet tally.

    Measures the strength of every pairwise victory, finds the strongest path
    between every pair of candidates (the path whose weakest link is the
    strongest), and ranks each candidate by the number of opponents whose
    strongest path towards it is not stronger than its own path towards them.
    Two candidates with equally strong paths in both directions thus both
    count each other as defeated.

    :param variant: Link strength measure; a name from
        :data:`tallylib.component.strength.STRENGTHS` (``winning``,
        ``margin``, ``ratio``, ``losing``) or a callable with the same
        signature. The ratio measure requires a fractional count type.
    :raises tallylib.numeric.UnsupportedCountType: If the variant requires
        a fractional count type and the tally counts in integers.

    Other parameters are passed to :class:`tallylib.evaluate.core.Tally`.
    '''
    def __init__(self,
                 n_winners: int = 1,
                 candidates=None,
                 count_type=int,
                 variant: Union[str, Callable] = 'winning',
                 ):
        super().__init__(n_winners, candidates, count_type)
        self.strength = tallylib.component.strength.construct(variant)
        tallylib.component.core.check_count_type(
            self.strength, self.count_type
        )

    def _saturation_ceiling(self) -> Number:
        '''Return a strength above the ratio of any two pairwise counts.

        No ratio exceeds the sum of all counts divided by the smallest
        positive count; the ceiling is twice that.
        '''
        zero = self.count_type.zero
        counts = [count for count in self.running_total.values() if count > zero]
        if not counts:
            return self.count_type.one
        bound = self.count_type.divide(sum(counts, zero), min(counts))
        return bound + bound

    def _link_strengths(self) -> List[List[Number]]:
        zero = self.count_type.zero
        n_cands = len(self.interner)
        links = [[zero] * n_cands for i in range(n_cands)]
        options = {}
        if getattr(self.strength, 'saturates', False):
            options['ceiling'] = self._saturation_ceiling()
            logger.debug('saturating unopposed links at %s', options['ceiling'])
        for (cand_a, cand_b), support in self.running_total.items():
            opposition = self.running_total.get((cand_b, cand_a), zero)
            links[cand_a][cand_b] = self.strength(
                support, opposition, self.count_type, **options
            )
        return links

    def _widest_paths(self) -> List[List[Number]]:
        paths = self._link_strengths()
        n_cands = len(paths)
        for via in range(n_cands):
            for source in range(n_cands):
                if source == via:
                    continue
                for target in range(n_cands):
                    if target == via or target == source:
                        continue
                    paths[source][target] = max(
                        paths[source][target],
                        min(paths[source][via], paths[via][target]),
                    )
        return paths

    def strongest_paths(self) -> List[Tuple[Tuple[Candidate, Candidate], Number]]:
        '''Return the strengths of the strongest paths between candidates.

        :returns: A list of ``((candidate_a, candidate_b), strength)`` items
            for all ordered pairs of distinct candidates, ordered by the
            order of appearance of the candidates. The strength is zero if
            there is no path from candidate_a to candidate_b.
        '''
        paths = self._widest_paths()
        return [
            ((self.interner[source], self.interner[target]), strength)
            for source, row in enumerate(paths)
            for target, strength in enumerate(row)
            if source != target
        ]

    def ranked(self) -> List[RankedCandidate]:
        paths = self._widest_paths()
        n_cands = len(paths)
        defeats = [
            (cand_id, sum(
                1 for other in range(n_cands)
                if other != cand_id
                and paths[cand_id][other] >= paths[other][cand_id]
            ))
            for cand_id in range(n_cands)
        ]
        logger.debug('strongest path defeat counts: %s', defeats)
        return rank_by_count(self._by_candidate(defeats))
