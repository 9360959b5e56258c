'''Pairwise preference graphs and their strongly connected components.

A preference graph is built from a table of pairwise counts, where the count
of the ordered pair ``(i, j)`` is the total weight of the ballots preferring
candidate ``i`` to candidate ``j``. Edges point from the *loser* of a pair
to its *winner* and carry a ``(support, opposition)`` weight, support being
the count of the winner over the loser. A pair whose counts are equal gets
both edges, so two candidates that were compared at least once are always
connected in at least one direction.

With this orientation, Tarjan's algorithm emits the strongly connected
components ordered from the most to the least dominant, so the first one is
the Smith set of the candidates.

The graph is a disposable view: it is rebuilt from the counts whenever it is
needed and never modified afterwards.
'''

from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple
from numbers import Number

from tallylib.candidate import Candidate, UnknownCandidate


EdgeWeight = Tuple[Number, Number]


class PreferenceGraph:
    '''A directed graph of pairwise preferences between candidates.

    Nodes are candidate identifiers (zero-based dense integers) internally;
    all public methods take and return the candidate objects themselves.

    :param nodes: Candidates, ordered by their identifiers.
    '''
    def __init__(self, nodes: Sequence[Candidate]):
        self.nodes = list(nodes)
        self._ids = {cand: i for i, cand in enumerate(self.nodes)}
        self._successors: List[Dict[int, EdgeWeight]] = [
            {} for cand in self.nodes
        ]

    @classmethod
    def from_counts(cls,
                    nodes: Sequence[Candidate],
                    counts: Dict[Tuple[int, int], Number],
                    zero: Number = 0,
                    ) -> 'PreferenceGraph':
        '''Build a preference graph from a pairwise count table.

        The table is traversed once; the count of the reverse pair is looked
        up for every entry and defaults to zero.

        :param nodes: Candidates, ordered by their identifiers.
        :param counts: Pairwise counts keyed by ``(winner_id, loser_id)``.
        :param zero: Zero of the count type.
        '''
        graph = cls(nodes)
        for (cand_i, cand_j), count_ij in counts.items():
            count_ji = counts.get((cand_j, cand_i), zero)
            if count_ij >= count_ji:
                graph._add_edge(cand_j, cand_i, (count_ij, count_ji))
            if (cand_j, cand_i) not in counts and count_ji >= count_ij:
                # only a zero count recorded for the pair, it is a tie
                graph._add_edge(cand_i, cand_j, (count_ji, count_ij))
        return graph

    def _add_edge(self, source: int, target: int, weight: EdgeWeight) -> None:
        self._successors[source][target] = weight

    def _id(self, candidate: Any) -> int:
        try:
            return self._ids[candidate]
        except (KeyError, TypeError):
            raise UnknownCandidate(candidate)

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f'<PreferenceGraph: {len(self)} nodes, {self.edge_count()} edges>'

    def edge_count(self) -> int:
        return sum(len(succ) for succ in self._successors)

    def edges(self) -> Iterator[Tuple[Candidate, Candidate, EdgeWeight]]:
        '''Yield all edges as ``(source, target, (support, opposition))``.

        Edges are ordered by the identifiers of their source and target.
        '''
        for source_id, successors in enumerate(self._successors):
            for target_id in sorted(successors):
                yield (
                    self.nodes[source_id],
                    self.nodes[target_id],
                    successors[target_id],
                )

    def successors(self, candidate: Candidate) -> List[Candidate]:
        '''Return the candidates that the given one does not beat.'''
        return [
            self.nodes[target_id]
            for target_id in sorted(self._successors[self._id(candidate)])
        ]

    def has_edge(self, source: Candidate, target: Candidate) -> bool:
        return self._id(target) in self._successors[self._id(source)]

    def edge_weight(self,
                    source: Candidate,
                    target: Candidate,
                    ) -> Optional[EdgeWeight]:
        '''Return the ``(support, opposition)`` weight of an edge.

        :returns: None if there is no edge from source to target.
        '''
        return self._successors[self._id(source)].get(self._id(target))

    def strongly_connected_components(self) -> List[List[Candidate]]:
        '''Return the strongly connected components of the graph.

        The components are listed in the order emitted by Tarjan's algorithm,
        which, given the loser-to-winner edge orientation, starts with the
        Smith set and proceeds towards the least preferred candidates.
        Members of each component are ordered by their identifiers.
        '''
        return [
            [self.nodes[node] for node in component]
            for component in tarjan_scc(
                len(self.nodes),
                [sorted(succ) for succ in self._successors]
            )
        ]


def tarjan_scc(n_nodes: int,
               successors: Sequence[Sequence[int]],
               ) -> List[List[int]]:
    '''Find strongly connected components with Tarjan's algorithm.

    The depth-first search is driven by an explicit stack of iterators rather
    than recursion, so the graph size is not limited by the recursion limit.
    Roots are tried in ascending node order.

    :param n_nodes: Number of nodes, identified by integers from 0.
    :param successors: Successor lists of every node.
    :returns: Components in the order of completion (reverse topological
        order of the condensed graph); members of each are sorted.
    '''
    indices: List[Optional[int]] = [None] * n_nodes
    lowlinks = [0] * n_nodes
    on_stack = [False] * n_nodes
    stack = []
    components = []
    counter = 0
    for root in range(n_nodes):
        if indices[root] is not None:
            continue
        indices[root] = lowlinks[root] = counter
        counter += 1
        stack.append(root)
        on_stack[root] = True
        work = [(root, iter(successors[root]))]
        while work:
            node, children = work[-1]
            for child in children:
                if indices[child] is None:
                    indices[child] = lowlinks[child] = counter
                    counter += 1
                    stack.append(child)
                    on_stack[child] = True
                    work.append((child, iter(successors[child])))
                    break
                elif on_stack[child]:
                    lowlinks[node] = min(lowlinks[node], indices[child])
            else:
                work.pop()
                if work:
                    parent = work[-1][0]
                    lowlinks[parent] = min(lowlinks[parent], lowlinks[node])
                if lowlinks[node] == indices[node]:
                    component = []
                    while True:
                        member = stack.pop()
                        on_stack[member] = False
                        component.append(member)
                        if member == node:
                            break
                    components.append(sorted(component))
    return components
