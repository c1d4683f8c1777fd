import sys
import os
import io
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import villagelib.__main__ as cli

FESTIVAL_INPUT = [
    {'name': 'Diwali', 'date': '2025-10-20', 'type': 'religious'},
    {'name': 'Republic Day', 'date': '2025-01-26', 'type': 'national'},
    {'name': 'Onam', 'date': '2025-09-05', 'type': 'cultural'},
]

ELECTION_INPUT = {
    'candidates': [
        {'id': 'C1', 'name': 'Sarpanch Ram', 'party': 'Janata'},
        {'id': 'C2', 'name': 'Pradhan Sita', 'party': 'Lok'},
    ],
    'voters': [
        {'id': 'V1', 'name': 'Mohan', 'age': 25},
        {'id': 'V2', 'name': 'Radha', 'age': 40},
        {'id': 'V3', 'name': 'Shyam', 'age': 30},
    ],
    'votes': [['V1', 'C2'], ['V2', 'C2'], ['V3', 'C1'], ['V1', 'C1']],
}


def run_cli(argv, payload):
    args = cli.argparser.parse_args(argv)
    args.input_file = io.StringIO(json.dumps(payload))
    cli.main(**vars(args))


def test_festivals_upcoming(capsys):
    run_cli(['festivals', '-d', '2025-01-01', '-n', '2'], FESTIVAL_INPUT)
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith('2025-01-26')
    assert 'Republic Day' in lines[0]
    assert 'Onam' in lines[1]


def test_festivals_by_type_json(capsys):
    run_cli(['festivals', '-t', 'cultural', '--json'], FESTIVAL_INPUT)
    assert json.loads(capsys.readouterr().out) == [{
        'class': 'villagelib.festival.Festival',
        'name': 'Onam',
        'date': '2025-09-05',
        'type': 'cultural',
    }]


def test_festivals_invalid_entry_warns(capsys):
    with pytest.warns(UserWarning, match='duplicate'):
        run_cli(['festivals'], FESTIVAL_INPUT + [FESTIVAL_INPUT[0]])
    assert len(capsys.readouterr().out.splitlines()) == 3


def test_festivals_empty_warns(capsys):
    with pytest.warns(UserWarning, match='no valid festivals'):
        run_cli(['festivals'], [])
    assert capsys.readouterr().out == ''


def test_festivals_not_list():
    with pytest.raises(ValueError):
        run_cli(['festivals'], {'name': 'Diwali'})


def test_election(capsys):
    run_cli(['election'], ELECTION_INPUT)
    out = capsys.readouterr().out
    assert 'Recorded 3 votes' in out
    assert out.strip().splitlines()[-1].endswith('Pradhan Sita')


def test_election_underage_warns(capsys):
    payload = dict(ELECTION_INPUT)
    payload['voters'] = ELECTION_INPUT['voters'] + [
        {'id': 'V9', 'name': 'Chotu', 'age': 12}
    ]
    with pytest.warns(UserWarning, match='could not be registered'):
        run_cli(['election'], payload)
    assert 'Recorded 3 votes' in capsys.readouterr().out


def test_election_no_votes(capsys):
    payload = dict(ELECTION_INPUT, votes=[])
    run_cli(['election'], payload)
    assert 'Nobody elected' in capsys.readouterr().out


def test_invalid_json():
    args = cli.argparser.parse_args(['election'])
    args.input_file = io.StringIO('{not json')
    with pytest.raises(ValueError):
        cli.main(**vars(args))


def test_festivals_upcoming_by_type(capsys):
    payload = [
        {'name': 'Holi', 'date': '2025-03-14', 'type': 'religious'},
        {'name': 'Republic Day', 'date': '2025-01-26', 'type': 'national'},
        {'name': 'Diwali', 'date': '2025-10-20', 'type': 'religious'},
        {'name': 'Independence Day', 'date': '2025-08-15', 'type': 'national'},
    ]
    run_cli(['festivals', '-d', '2025-01-01', '-n', '2', '-t', 'national'],
            payload)
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert 'Republic Day' in lines[0]
    assert 'Independence Day' in lines[1]


@pytest.mark.parametrize('key', ['voters', 'votes'])
@pytest.mark.parametrize('value', [5, 'V1', {'V1': 'C1'}])
def test_election_non_list_input(key, value):
    with pytest.raises(ValueError):
        run_cli(['election'], dict(ELECTION_INPUT, **{key: value}))


def test_election_missing_lists(capsys):
    run_cli(['election'], {'candidates': ELECTION_INPUT['candidates']})
    out = capsys.readouterr().out
    assert 'Recorded 0 votes' in out
    assert 'Nobody elected' in out
