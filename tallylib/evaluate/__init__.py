'''Tallies: accumulate ballots and rank the candidates.

Every tally accepts ballots one at a time through its ``add*`` methods and
computes a ranking of the candidates on request. The ranking is a list of
:class:`tallylib.result.RankedCandidate` pairs, best first, where equal ranks
denote ties; :meth:`core.Tally.winners` reduces it to the requested number
of winners without ever breaking a tie.

-   Counting tallies (plurality, approval, score, Borda) keep a running count
    per candidate.
-   Pairwise tallies (Condorcet, Schulze) keep a table of pairwise preference
    counts and rank the candidates by analyzing the preference graph.
-   Sequential tallies (instant-runoff, single transferable vote) keep the
    ballots and eliminate or elect candidates in rounds.
'''

from tallylib.evaluate.core import *    # noqa
