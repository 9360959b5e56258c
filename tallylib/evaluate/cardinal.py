"""Cardinal voting tallies - tallies that use score votes.

Each voter can assign a numeric score to any number of candidates. The
scores are summed over all ballots, so this also evaluates cumulative voting
when the ballots are constrained to a fixed score total by the caller.
"""

from numbers import Number

import tallylib.vote
from tallylib.evaluate.core import CountingTally
from tallylib.vote import ScoreVoteType


class ScoreTally(CountingTally):
    """Score voting (range voting) tally.

    Candidates are ranked by the sum of their scores, each multiplied by
    the weight of its ballot. Scores must be representable in the count type
    of the tally; fractional scores thus need a fractional count type.
    """
    def add(self, vote: ScoreVoteType) -> None:
        self.add_weighted(vote, self.count_type.one)

    def add_weighted(self, vote: ScoreVoteType, weight: Number) -> None:
        """Add a weighted score ballot.

        :param vote: A list of ``(candidate, score)`` pairs.
        :param weight: Weight of the ballot, multiplying all its scores.
        """
        tallylib.vote.check_scored(vote)
        weight = self._convert_weight(weight)
        scores = [self.count_type.convert(score) for cand, score in vote]
        for (cand, raw_score), score in zip(vote, scores):
            if not self.count_type.is_finite(score):
                raise tallylib.vote.VoteValueError(
                    raw_score, cand, 'finite numbers'
                )
        cand_ids = self._intern_all(cand for cand, score in vote)
        self._add_counts(
            (cand_id, weight * score)
            for cand_id, score in zip(cand_ids, scores)
        )
