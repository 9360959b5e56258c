"""A commandline tool for quick tallying of ranked ballots.

Reads ballots in the plain-text notation (one ballot per line, such as
``A > B = C * 3``) and prints the ranking of the candidates under the chosen
tally method.
"""

import argparse
import io
import logging
import sys
import warnings
from typing import List, Optional

import tallylib.io.text
import tallylib.numeric
import tallylib.system
from tallylib.candidate import CandidateError
from tallylib.evaluate.core import Tally
from tallylib.io.core import ParseError
from tallylib.numeric import UnsupportedCountType
from tallylib.result import RankedCandidate
from tallylib.vote import VoteError

argparser = argparse.ArgumentParser(
    prog='tallylib',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load input ballots from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load input ballots from standard input',
)
argparser.add_argument(
    '-m', '--method',
    default='condorcet',
    choices=list(tallylib.system.TALLIES.keys()),
    help='tally method to use',
)
argparser.add_argument(
    '-n', '--n-winners',
    type=int,
    default=1,
    help='select this many winners; 0 ranks all candidates',
)
argparser.add_argument(
    '-c', '--count-type',
    default='int',
    choices=list(tallylib.numeric.COUNT_TYPES.keys()),
    help='numeric type to count votes and parse ballot weights with',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all tally log messages',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any tally log messages',
)


def main(input_file: Optional[io.TextIOBase] = None,
         use_stdin: bool = False,
         method: str = 'condorcet',
         n_winners: int = 1,
         count_type: str = 'int',
         verbose: bool = False,
         quiet: bool = False,
         ) -> List[RankedCandidate]:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    system = tallylib.system.get(method)
    tally = system.create(n_winners, count_type=count_type)
    ballots = tallylib.io.text.load(input_file, count_type=count_type)
    if not ballots:
        warnings.warn('no ballots: cannot tally, terminating')
        return []
    print(f'Running a {system.name} tally')
    print(f'Received {len(ballots)} ballot lines')
    tallylib.io.text.feed(tally, ballots)
    return show_result(tally)


def show_result(tally: Tally) -> List[RankedCandidate]:
    """Print the full ranking and the winners of the tally."""
    ranked = tally.ranked()
    print()
    print('Ranking:')
    for cand, rank in ranked:
        print(str(rank + 1).rjust(4), ' ', cand)
    winners = tally.winners()
    print()
    print('Winners: ' + ', '.join(str(cand) for cand in winners.all()))
    if winners.is_overflowing():
        warnings.warn(
            f'tie for the last winning rank: {len(winners)} winners'
            f' instead of {winners.n_winners}, tied: '
            + ', '.join(str(c) for c in winners.overflowing_candidates())
        )
    return ranked


def run(argv: Optional[List[str]] = None) -> None:
    args = argparser.parse_args(argv)
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
        return
    try:
        main(**vars(args))
    except (ParseError, VoteError, CandidateError, UnsupportedCountType) as err:
        argparser.exit(1, f'{argparser.prog}: error: {err}\n')


if __name__ == '__main__':
    run()
