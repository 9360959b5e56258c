'''Approval voting tally.

In approval voting, each voter selects any number of candidates they
approve of, and each of them receives the full weight of the ballot.
'''

from numbers import Number

import tallylib.vote
from tallylib.evaluate.core import CountingTally
from tallylib.vote import ApprovalVoteType


class ApprovalTally(CountingTally):
    '''Approval voting tally.

    Candidates are ranked by the total weight of ballots approving them.
    '''
    def add(self, vote: ApprovalVoteType) -> None:
        self.add_weighted(vote, self.count_type.one)

    def add_weighted(self, vote: ApprovalVoteType, weight: Number) -> None:
        '''Add a weighted approval ballot.

        :param vote: A collection of approved candidates (a list, tuple or
            set). An empty ballot is accepted and changes nothing.
        :param weight: Weight of the ballot, added to every approved
            candidate.
        :raises tallylib.vote.DuplicateCandidate: If a candidate is listed
            twice.
        '''
        tallylib.vote.check_approval(vote)
        weight = self._convert_weight(weight)
        cand_ids = self._intern_all(vote)
        self._add_counts((cand_id, weight) for cand_id in cand_ids)
