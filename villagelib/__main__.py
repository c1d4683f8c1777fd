"""A commandline tool for quick runs of village elections and festival plans.

Reads JSON input. For festivals, a list of objects with name, date and type;
for elections, an object with lists of candidates, voters and votes (given as
[voter_id, candidate_id] pairs).
"""

import argparse
import io
import json
import logging
import sys
import warnings
from typing import Any, Dict, List, Optional

import villagelib.persist
from villagelib.election import Election, create_election
from villagelib.festival import FESTIVAL_TYPES, DEFAULT_UPCOMING, \
    Festival, FestivalManager, create_festival_manager

input_argparser = argparse.ArgumentParser(add_help=False)
input_argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='JSON file to load input from',
)
input_argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load input from standard input',
)
input_argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all log messages including accepted operations',
)
input_argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any log messages except warnings',
)

argparser = argparse.ArgumentParser(
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
subparsers = argparser.add_subparsers(dest='command')

festivals_parser = subparsers.add_parser(
    'festivals',
    help='list festivals from a JSON list',
    parents=[input_argparser],
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
festivals_parser.add_argument(
    '-d', '--date',
    help='list up to N festivals on or after this YYYY-MM-DD date',
)
festivals_parser.add_argument(
    '-n', '--n-festivals',
    type=int,
    default=DEFAULT_UPCOMING,
    help='maximum number of upcoming festivals to list',
)
festivals_parser.add_argument(
    '-t', '--type',
    choices=sorted(FESTIVAL_TYPES),
    help='list only festivals of this type',
)
festivals_parser.add_argument(
    '-j', '--json',
    dest='as_json',
    action='store_true',
    help='output the listed festivals as JSON',
)

election_parser = subparsers.add_parser(
    'election',
    help='run an election from a JSON object',
    parents=[input_argparser],
)


def main(command: str,
         input_file: Optional[io.TextIOBase] = None,
         use_stdin: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         **kwargs,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    data = load_input(input_file)
    if command == 'festivals':
        run_festivals(data, **kwargs)
    elif command == 'election':
        run_election(data)
    else:
        raise ValueError(f'unknown command: {command}')


def load_input(input_file: io.TextIOBase) -> Any:
    """Load the JSON payload from the given file."""
    try:
        return json.load(input_file)
    except json.JSONDecodeError as e:
        raise ValueError(f'invalid JSON input: {e}') from e


def load_festivals(data: Any) -> FestivalManager:
    """Fill a new festival manager, warning about rejected entries."""
    if not isinstance(data, list):
        raise ValueError('festival input must be a JSON list')
    manager = create_festival_manager()
    for item in data:
        if not isinstance(item, dict):
            warnings.warn(f'ignoring festival entry {item!r}: not an object')
            continue
        added = manager.add_festival(
            item.get('name'), item.get('date'), item.get('type')
        )
        if added == -1:
            warnings.warn(f'ignoring invalid or duplicate festival {item!r}')
    return manager


def run_festivals(data: Any,
                  date: Optional[str] = None,
                  n_festivals: int = DEFAULT_UPCOMING,
                  type: Optional[str] = None,
                  as_json: bool = False,
                  ) -> None:
    manager = load_festivals(data)
    if not manager.get_count():
        warnings.warn('no valid festivals given, terminating')
        return
    if date is not None:
        listed = manager.get_upcoming(date, n_festivals, type=type)
    elif type is not None:
        listed = manager.get_by_type(type)
    else:
        listed = manager.get_all()
    if as_json:
        print(json.dumps(
            villagelib.persist.to_dicts(listed), indent=2, ensure_ascii=False
        ))
    else:
        show_festivals(listed)


def show_festivals(festivals: List[Festival]) -> None:
    if not festivals:
        print('No festivals')
        return
    n_just_chars = max(len(f.name) for f in festivals)
    for festival in festivals:
        print(festival.date, ' ', festival.name.ljust(n_just_chars),
              ' ', festival.type)


def _input_list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f'election input {key} must be a JSON list')
    return value


def load_election(data: Any) -> Election:
    """Create an election from the input and register its voters."""
    if not isinstance(data, dict):
        raise ValueError('election input must be a JSON object')
    election = create_election(data.get('candidates'))
    for voter in _input_list(data, 'voters'):
        if not election.register_voter(voter):
            warnings.warn(f'voter {voter!r} could not be registered')
    return election


def run_election(data: Dict[str, Any]) -> None:
    election = load_election(data)
    n_recorded = 0
    for ballot in _input_list(data, 'votes'):
        if not isinstance(ballot, list) or len(ballot) != 2:
            warnings.warn(f'ignoring malformed ballot {ballot!r}')
            continue
        if election.cast_vote(*ballot, on_success=lambda rec: True):
            n_recorded += 1
    print(f'Recorded {n_recorded} votes')
    print()
    print('Election result:')
    results = election.get_results()
    if not results:
        print('No candidates')
        return
    n_just_chars = max(len(str(row['name'])) for row in results)
    for row in results:
        print(str(row['name']).ljust(n_just_chars), ' ',
              str(row['party']).ljust(10), ' ', row['votes'])
    print()
    winner = election.get_winner()
    if winner is None:
        print('Nobody elected')
    else:
        print('Elected', ' ', winner.get('name'))


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.command or (not args.input_file and not args.use_stdin):
        argparser.print_usage()
    else:
        main(**vars(args))
