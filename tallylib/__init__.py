"""Tallylib - a library for tallying election ballots.

Tallylib objects accumulate ballots one at a time and compute a ranking of
the candidates under a chosen social choice rule on request.

A tally usually goes through the following stages:

-   Ballots are added one by one (optionally weighted). Each ballot is
    validated first - see the ``vote`` module - and a rejected ballot never
    leaves any trace in the tally.
-   Candidates are interned to dense integer identifiers as they first
    appear (see the ``candidate`` module), so that the running totals can be
    kept in structures indexed by integers.
-   When a result is requested, the ranking is computed from scratch from
    the running totals by one of the tallies in the ``evaluate`` subpackage.
    The pairwise (Condorcet and Schulze) tallies build a preference graph
    (see the ``graph`` module) for this.
-   The ranking is a list of :class:`result.RankedCandidate` objects, which
    can be reduced to a given number of winners with
    :class:`result.RankedWinners`, keeping ties intact.

The numeric type used to count votes can be chosen for every tally (see the
``numeric`` module); some methods require a type that supports fractions.
"""
