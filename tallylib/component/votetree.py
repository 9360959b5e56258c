'''A prefix tree of ranked ballots for sequential elimination tallies.

Ranked ballots sharing their leading preferences share the path from the
root of the tree, so that a tally with many identical or similar ballots
needs to visit each distinct prefix only once when redistributing the votes
after an elimination.
'''

from typing import Collection, Dict, Hashable, Sequence, Tuple
from numbers import Number


class VoteTree:
    '''A node of the ranked ballot prefix tree.

    :param zero: Zero of the count type used for the ballot weights.
    '''
    def __init__(self, zero: Number = 0):
        self.zero = zero
        self.count = zero
        self.children: Dict[Hashable, 'VoteTree'] = {}

    def __repr__(self) -> str:
        return f'<VoteTree: {self.count} votes, {len(self.children)} branches>'

    def add(self, vote: Sequence[Hashable], weight: Number) -> Number:
        '''Add a ranked ballot to the tree.

        :param vote: Candidates in the order of preference.
        :param weight: Weight of the ballot.
        :returns: The total weight of all ballots recorded with exactly this
            sequence of preferences (or starting with it).
        '''
        node = self
        node.count += weight
        for cand in vote:
            if cand not in node.children:
                node.children[cand] = VoteTree(self.zero)
            node = node.children[cand]
            node.count += weight
        return node.count

    def distribute(self,
                   eliminated: Collection[Hashable],
                   ) -> Tuple[Dict[Hashable, Number], Number]:
        '''Assign the ballots to their most preferred remaining candidates.

        Eliminated candidates are skipped; the ballot then counts for the next
        preference on it.

        :param eliminated: Candidates to skip.
        :returns: A tuple of two items: a dictionary with the vote counts of
            every candidate that received any, and the weight of exhausted
            ballots (that have no remaining preference).
        '''
        scores = {}
        assigned = self.zero
        pending = [self]
        while pending:
            node = pending.pop()
            for cand, child in node.children.items():
                if cand in eliminated:
                    pending.append(child)
                else:
                    scores[cand] = scores.get(cand, self.zero) + child.count
                    assigned += child.count
        return scores, self.count - assigned
