'''Sequential elimination tallies - instant-runoff voting and STV.

These tallies keep the ranked ballots themselves and count them in rounds.
In every round, each ballot counts for its most preferred candidate that is
still in the count; candidates are eliminated (and, in STV, elected) between
the rounds until the result is clear.
'''

import logging
from typing import Callable, Dict, List, Tuple, Union
from numbers import Number

import tallylib.component.core
import tallylib.component.quota
import tallylib.util
import tallylib.vote
from tallylib.candidate import Candidate
from tallylib.evaluate.core import Tally, VotingSystemError
from tallylib.component.votetree import VoteTree
from tallylib.result import RankedCandidate, rank_by_count, rank_groups
from tallylib.vote import TransitiveVoteType


logger = logging.getLogger(__name__)


class IRVTally(Tally):
    '''Instant-runoff voting tally.

    Also called alternative vote or (in the US) ranked choice voting.
    In every round, the candidates with the fewest votes are eliminated
    together and their ballots pass to the next preferences. Candidates
    without any votes in a round count as having zero votes. When all
    remaining candidates are tied, they share the best rank and the count
    ends.

    The ranking is the reverse of the order of elimination: the last
    remaining candidate is ranked first, and candidates eliminated in the
    same round share their rank.

    Parameters are passed to :class:`tallylib.evaluate.core.Tally`.
    '''
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.running_total = VoteTree(self.count_type.zero)

    def add(self, vote: TransitiveVoteType) -> None:
        self.add_weighted(vote, self.count_type.one)

    def add_weighted(self, vote: TransitiveVoteType, weight: Number) -> None:
        '''Add a weighted ballot ordering candidates from the best.'''
        tallylib.vote.check_transitive(vote)
        weight = self._convert_weight(weight)
        self.running_total.add(self._intern_all(vote), weight)

    def totals(self) -> List[Tuple[Candidate, Number]]:
        '''Return the first preference counts of all candidates.'''
        scores, exhausted = self.running_total.distribute(())
        zero = self.count_type.zero
        return self._by_candidate(tallylib.util.sorted_votes(
            (cand_id, scores.get(cand_id, zero))
            for cand_id in range(len(self.interner))
        ))

    def ranked(self) -> List[RankedCandidate]:
        zero = self.count_type.zero
        continuing = list(range(len(self.interner)))
        eliminated = set()
        elimination_rounds = []
        while continuing:
            scores, exhausted = self.running_total.distribute(eliminated)
            totals = [
                (cand_id, scores.get(cand_id, zero)) for cand_id in continuing
            ]
            logger.debug('round %d vote totals: %s, exhausted: %s',
                         len(elimination_rounds) + 1,
                         self._by_candidate(totals), exhausted)
            lowest = min(count for cand_id, count in totals)
            losers = [cand_id for cand_id, count in totals if count == lowest]
            if len(losers) == len(continuing):
                logger.info('remaining candidates tied: %s',
                            [self.interner[cand_id] for cand_id in losers])
            else:
                logger.info('eliminating %s with %s votes',
                            [self.interner[cand_id] for cand_id in losers],
                            lowest)
            elimination_rounds.append(losers)
            eliminated.update(losers)
            continuing = [
                cand_id for cand_id in continuing if cand_id not in eliminated
            ]
        return rank_groups(
            [self.interner[cand_id] for cand_id in losers]
            for losers in reversed(elimination_rounds)
        )


class STVTally(Tally):
    '''Single transferable vote tally.

    Elects n_winners candidates in rounds:

    -   Candidates reaching the quota are elected, in the order of their
        totals, and the surplus over the quota is transferred to the next
        preferences of their ballots with the Gregory method (every ballot
        continues with its weight multiplied by surplus / total).
    -   If nobody reaches the quota, the candidates with the fewest votes
        are eliminated together and their ballots continue at full weight.
    -   When the continuing candidates fit into the remaining seats, they are
        all elected.

    Elected candidates are ranked by the round of their election, tied when
    elected in the same round with equal totals. If the continuing
    candidates are all tied and do not fit into the remaining seats, they are
    all elected with equal rank, so that the winners overflow. Unelected
    candidates are ranked behind them - those left continuing by their final
    totals, then the eliminated ones in the reverse order of elimination.

    With an integer count type, the transferred weights are rounded down,
    so some of the surplus is lost in every transfer.

    :param quota: Quota to reach to be elected; a name from
        :data:`tallylib.component.quota.QUOTAS` or a callable with the same
        signature. The Hagenbach-Bischoff quota requires a fractional count
        type.
    :raises tallylib.numeric.UnsupportedCountType: If the quota requires
        a fractional count type and the tally counts in integers.
    :raises ValueError: If n_winners is zero; STV needs a number of seats.

    Other parameters are passed to :class:`tallylib.evaluate.core.Tally`.
    '''
    def __init__(self,
                 n_winners: int = 1,
                 candidates=None,
                 count_type=int,
                 quota: Union[str, Callable] = 'droop',
                 ):
        super().__init__(n_winners, candidates, count_type)
        if self.n_winners == 0:
            raise ValueError('STV requires at least one seat to fill')
        self.quota = tallylib.component.quota.construct(quota)
        tallylib.component.core.check_count_type(self.quota, self.count_type)
        self.running_total: Dict[Tuple[int, ...], Number] = {}

    def add(self, vote: TransitiveVoteType) -> None:
        self.add_weighted(vote, self.count_type.one)

    def add_weighted(self, vote: TransitiveVoteType, weight: Number) -> None:
        '''Add a weighted ballot ordering candidates from the best.

        Identical ballots are kept as a single group with their summed
        weight.
        '''
        tallylib.vote.check_transitive(vote)
        weight = self._convert_weight(weight)
        key = tuple(self._intern_all(vote))
        self.running_total[key] = \
            self.running_total.get(key, self.count_type.zero) + weight

    def totals(self) -> List[Tuple[Candidate, Number]]:
        '''Return the first preference counts of all candidates.'''
        piles = self._piles(
            [[weight, prefs, 0] for prefs, weight in self.running_total.items()],
            set(range(len(self.interner))),
        )
        return self._by_candidate(tallylib.util.sorted_votes(
            self._pile_totals(piles, range(len(self.interner)))
        ))

    @staticmethod
    def _piles(groups: List[list],
               continuing: set,
               ) -> Dict[int, List[list]]:
        # advance every ballot group to its first continuing preference
        piles = {}
        for group in groups:
            weight, prefs, position = group
            while position < len(prefs) and prefs[position] not in continuing:
                position += 1
            group[2] = position
            if position < len(prefs):
                piles.setdefault(prefs[position], []).append(group)
        return piles

    def _pile_totals(self,
                     piles: Dict[int, List[list]],
                     candidates,
                     ) -> List[Tuple[int, Number]]:
        zero = self.count_type.zero
        return [
            (cand_id, sum((group[0] for group in piles.get(cand_id, [])), zero))
            for cand_id in candidates
        ]

    def _transfer_surplus(self,
                          pile: List[list],
                          total: Number,
                          quota: Number,
                          ) -> None:
        surplus = total - quota
        for group in pile:
            if total > self.count_type.zero:
                group[0] = self.count_type.divide(group[0] * surplus, total)

    def ranked(self) -> List[RankedCandidate]:
        count_type = self.count_type
        groups = [
            [weight, prefs, 0] for prefs, weight in self.running_total.items()
        ]
        total_votes = sum(self.running_total.values(), count_type.zero)
        quota = self.quota(total_votes, self.n_winners, count_type)
        logger.info('quota computed at %s', quota)
        continuing = list(range(len(self.interner)))
        elected_rounds = []
        eliminated_rounds = []
        n_elected = 0
        while continuing and n_elected < self.n_winners:
            piles = self._piles(groups, set(continuing))
            totals = self._pile_totals(piles, continuing)
            logger.debug('current vote totals: %s', self._by_candidate(totals))
            n_remaining = self.n_winners - n_elected
            if len(continuing) <= n_remaining:
                logger.info('electing all remaining: %s',
                            self._by_candidate(totals))
                elected_rounds.append(rank_by_count(totals))
                n_elected += len(continuing)
                continuing = []
                break
            reached = [
                (cand_id, count) for cand_id, count in totals
                if count >= quota
            ]
            if reached:
                newly_elected = []
                for cand_id, rank in rank_by_count(reached):
                    if newly_elected and len(newly_elected) >= n_remaining \
                            and rank != newly_elected[-1][1]:
                        break
                    newly_elected.append((cand_id, rank))
                elected_ids = [cand_id for cand_id, rank in newly_elected]
                logger.info('%s elected by quota',
                            [self.interner[cand_id] for cand_id in elected_ids])
                for cand_id, count in totals:
                    if cand_id in elected_ids:
                        self._transfer_surplus(
                            piles.get(cand_id, []), count, quota
                        )
                elected_rounds.append(newly_elected)
                n_elected += len(elected_ids)
                continuing = [
                    cand_id for cand_id in continuing
                    if cand_id not in elected_ids
                ]
                continue
            lowest = min(count for cand_id, count in totals)
            losers = [cand_id for cand_id, count in totals if count == lowest]
            if len(losers) == len(continuing):
                logger.info('continuing candidates tied, electing all: %s',
                            [self.interner[cand_id] for cand_id in losers])
                elected_rounds.append([(cand_id, 0) for cand_id in losers])
                n_elected += len(losers)
                continuing = []
            elif losers:
                logger.info('eliminating %s with %s votes',
                            [self.interner[cand_id] for cand_id in losers],
                            lowest)
                eliminated_rounds.append(losers)
                continuing = [
                    cand_id for cand_id in continuing if cand_id not in losers
                ]
            else:
                raise VotingSystemError(
                    f'STV count stalled with continuing candidates {continuing}'
                )
        remaining = []
        if continuing:
            logger.info('%d seats filled, terminating', self.n_winners)
            remaining = self._pile_totals(
                self._piles(groups, set(continuing)), continuing
            )
        return self._rank_outcome(
            elected_rounds, rank_by_count(remaining), eliminated_rounds
        )

    def _rank_outcome(self,
                      elected_rounds: List[List[Tuple[int, int]]],
                      remaining: List[Tuple[int, int]],
                      eliminated_rounds: List[List[int]],
                      ) -> List[RankedCandidate]:
        groups = []
        for ranked_round in elected_rounds + [remaining]:
            by_rank = {}
            for cand_id, rank in ranked_round:
                by_rank.setdefault(rank, []).append(self.interner[cand_id])
            groups.extend(by_rank[rank] for rank in sorted(by_rank))
        groups.extend(
            [self.interner[cand_id] for cand_id in losers]
            for losers in reversed(eliminated_rounds)
        )
        return rank_groups(groups)
