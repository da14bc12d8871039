"""Tabulate a ranked pairs (Tideman) election from the command line.

Candidates are given as arguments. Ballots are read from a file (one
ballot per line, candidate names separated by commas or whitespace, most
preferred first) or, if no file is given, entered interactively rank by
rank.
"""

import argparse
import io
import logging
import re
import sys
from typing import Callable, Iterable, List, Optional

import tideman.component.strength
from tideman.candidate import CandidateError, CandidateCountError, \
    CandidateRoster
from tideman.evaluate import Election
from tideman.vote import VoteError

EXIT_USAGE = 1
EXIT_TOO_MANY_CANDIDATES = 2
EXIT_INVALID_VOTE = 3

NAME_SEPARATOR = re.compile(r'[\s,]+')

argparser = argparse.ArgumentParser(
    prog='tideman',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    'candidates',
    nargs='*',
    help='names of the candidates standing for the election',
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load ballots from (prompt for them if not given)',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load ballots from standard input without prompting',
)
argparser.add_argument(
    '-s', '--strength',
    default='margins',
    choices=sorted(tideman.component.strength.STRENGTH_SCORERS.keys()),
    help='measure of pairwise win strength used to rank the pairs',
)
argparser.add_argument(
    '-l', '--lenient',
    action='store_true',
    help=(
        'if several candidates remain unbeaten due to tied pairs,'
        ' elect the first of them instead of reporting no winner'
    ),
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all tabulation log messages',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any tabulation log messages',
)


def main(candidates: List[str],
         input_file: Optional[io.TextIOBase] = None,
         use_stdin: bool = False,
         strength: str = 'margins',
         lenient: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         prompt: Callable[[str], str] = input,
         ) -> int:
    """Run the election and print the winner; return the exit code."""
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if not candidates:
        print('Usage: tideman [candidate ...]')
        return EXIT_USAGE
    try:
        election = Election(candidates, strength=strength, strict=not lenient)
    except CandidateCountError as e:
        print(f'Maximum number of candidates is {e.max_count}')
        return EXIT_TOO_MANY_CANDIDATES
    except CandidateError as e:
        print(str(e))
        return EXIT_USAGE
    if use_stdin:
        input_file = sys.stdin
    if input_file is None:
        ballots = prompt_ballots(election.candidates, prompt)
    else:
        ballots = read_ballots(input_file)
    try:
        for names in ballots:
            election.record_named(names)
    except (CandidateError, VoteError) as e:
        logging.debug('rejected ballot: %s', e)
        print('Invalid vote.')
        return EXIT_INVALID_VOTE
    result = election.tabulate()
    if result.has_winner:
        print(result.winner_name)
    else:
        print('No winner')
    return 0


def read_ballots(lines: Iterable[str]) -> Iterable[List[str]]:
    """Parse ballots from lines of candidate names.

    Blank lines and lines starting with ``#`` are skipped.
    """
    for line in lines:
        line = line.strip()
        if line and not line.startswith('#'):
            yield [name for name in NAME_SEPARATOR.split(line) if name]


def prompt_ballots(roster: CandidateRoster,
                   prompt: Callable[[str], str] = input,
                   ) -> Iterable[List[str]]:
    """Ask for the number of voters and then for each voter's ranking.

    :raises CandidateError: As soon as a name that is not a candidate is
        entered, without asking for the remaining ranks.
    """
    n_voters = prompt_int('Number of voters: ', prompt)
    for voter_i in range(n_voters):
        names = []
        for rank in range(len(roster)):
            name = prompt(f'Rank {rank + 1}: ').strip()
            roster.index(name)
            names.append(name)
        yield names


def prompt_int(message: str, prompt: Callable[[str], str] = input) -> int:
    while True:
        try:
            value = int(prompt(message))
        except ValueError:
            continue
        if value >= 0:
            return value


def run() -> None:
    args = argparser.parse_args()
    sys.exit(main(**vars(args)))


if __name__ == '__main__':
    run()
