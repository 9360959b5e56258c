"""Read and write ballots in the plain-text ballot notation.

Each line holds a single ballot listing candidates from the most preferred,
separated by ``>``; candidates tied at the same rank are separated by ``=``.
The ballot may be followed by ``*`` and its weight; the weight defaults to
one. Blank lines and lines starting with ``#`` are ignored. For example::

    # Tennessee capital
    Memphis > Nashville > Chattanooga > Knoxville * 42
    Nashville > Chattanooga = Knoxville > Memphis * 26

Candidates are read as strings with surrounding whitespace stripped. The
weights are parsed by the count type given to the loader, so a fractional
weight such as ``3/2`` or ``0.5`` needs a fractional count type.

A ballot with no ties is read as a transitive ballot (a list of candidates),
one with a tie as a ranked ballot (a list of ``(candidate, rank)`` pairs).
"""

import dataclasses
import logging
from typing import Iterable, List, Optional, Union
from numbers import Number

import tallylib.io.core
import tallylib.numeric
import tallylib.vote
from tallylib.io.core import ParseError
from tallylib.numeric import CountType


logger = logging.getLogger(__name__)

COMMENT_MARK = '#'
RANK_SEPARATOR = '>'
TIE_SEPARATOR = '='
WEIGHT_SEPARATOR = '*'

TRANSITIVE = 'transitive'
RANKED = 'ranked'


@dataclasses.dataclass
class ParsedVote:
    """A ballot read from the text notation.

    :param kind: ``transitive`` for a list of candidates from the most
        preferred, ``ranked`` for a list of ``(candidate, rank)`` pairs.
    :param vote: The ballot itself.
    :param weight: Weight of the ballot.
    """
    kind: str
    vote: list
    weight: Number = 1

    def into_ranked(self) -> 'ParsedVote':
        """Return the ballot as a ranked ballot, converting if needed."""
        if self.kind == RANKED:
            return self
        return ParsedVote(
            RANKED,
            tallylib.vote.ranked_from_transitive(self.vote),
            self.weight
        )


def parse_line(line: str,
               count_type: Union[str, type, CountType] = 'int',
               line_number: Optional[int] = None,
               ) -> Optional[ParsedVote]:
    """Parse a single ballot line.

    :param line: The line to parse.
    :param count_type: Count type to parse the weight with.
    :param line_number: Number of the line to report in errors.
    :returns: None for blank and comment lines.
    :raises ParseError: If the candidates or the weight are malformed.
    """
    count_type = tallylib.numeric.construct(count_type)
    line = line.strip()
    if not line or line.startswith(COMMENT_MARK):
        return None
    parts = line.split(WEIGHT_SEPARATOR)
    if len(parts) > 2:
        raise ParseError(f'more than one weight in {line!r}', line_number)
    elif len(parts) == 2:
        weight = _parse_weight(parts[1], count_type, line_number)
    else:
        weight = count_type.one
    tiers = [
        [_parse_candidate(name, line_number)
         for name in tier.split(TIE_SEPARATOR)]
        for tier in parts[0].split(RANK_SEPARATOR)
    ]
    if all(len(tier) == 1 for tier in tiers):
        return ParsedVote(TRANSITIVE, [tier[0] for tier in tiers], weight)
    else:
        return ParsedVote(
            RANKED,
            [(cand, rank) for rank, tier in enumerate(tiers) for cand in tier],
            weight
        )


def _parse_candidate(name: str, line_number: Optional[int]) -> str:
    name = name.strip()
    if not name:
        raise ParseError('empty candidate name', line_number)
    return name


def _parse_weight(text: str,
                  count_type: CountType,
                  line_number: Optional[int],
                  ) -> Number:
    text = text.strip()
    if not text:
        raise ParseError('empty ballot weight', line_number)
    try:
        return count_type.parse(text)
    except ValueError as err:
        raise ParseError(
            f'invalid {count_type.name} ballot weight: {text!r}', line_number
        ) from err


def load_lines(lines: Iterable[str],
               count_type: Union[str, type, CountType] = 'int',
               ) -> List[ParsedVote]:
    """Parse ballots from lines of text.

    :param lines: Lines of the text notation.
    :param count_type: Count type to parse the weights with.
    :raises ParseError: On the first malformed line.
    """
    count_type = tallylib.numeric.construct(count_type)
    ballots = []
    for line_number, line in enumerate(lines, start=1):
        parsed = parse_line(line, count_type, line_number)
        if parsed is not None:
            ballots.append(parsed)
    logger.debug('loaded %d ballots', len(ballots))
    return ballots


load, loads = tallylib.io.core.loaders(load_lines)


def format_vote(ballot: ParsedVote) -> str:
    """Format a single ballot in the text notation.

    The weight is omitted when it is one.
    """
    if ballot.kind == RANKED:
        tiers = tallylib.vote.rank_tiers(ballot.vote)
    else:
        tiers = [[cand] for cand in ballot.vote]
    text = f' {RANK_SEPARATOR} '.join(
        f' {TIE_SEPARATOR} '.join(str(cand) for cand in tier)
        for tier in tiers
    )
    if ballot.weight != 1:
        text += f' {WEIGHT_SEPARATOR} {ballot.weight}'
    return text


def dump_lines(ballots: Iterable[ParsedVote]) -> Iterable[str]:
    """Produce lines of the text notation for the ballots."""
    for ballot in ballots:
        yield format_vote(ballot)


dump, dumps = tallylib.io.core.dumpers(dump_lines)


def feed(tally, ballots: Iterable[ParsedVote]) -> None:
    """Add the parsed ballots to a tally.

    Transitive ballots are added by ``add_weighted()``, ranked ballots by
    ``add_ranked_weighted()``.

    :param tally: A tally; ranked ballots need a tally that supports them
        (one of the pairwise tallies).
    :param ballots: Parsed ballots.
    :raises tallylib.vote.VoteTypeError: If a ranked ballot is given to
        a tally that only accepts transitive ballots.
    """
    for ballot in ballots:
        if ballot.kind == TRANSITIVE:
            tally.add_weighted(ballot.vote, ballot.weight)
        elif hasattr(tally, 'add_ranked_weighted'):
            tally.add_ranked_weighted(ballot.vote, ballot.weight)
        else:
            raise tallylib.vote.VoteTypeError(
                ballot.vote, 'a ballot without ties for this tally'
            )
