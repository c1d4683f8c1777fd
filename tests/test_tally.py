import sys
import os
import copy
from decimal import Decimal

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from villagelib.tally import count_votes_in_regions, tally_pure

VILLAGE_TREE = {
    'name': 'District',
    'votes': 5,
    'sub_regions': [
        {'name': 'Rampur', 'votes': 3, 'sub_regions': []},
        {'name': 'Sitapur', 'votes': 2, 'sub_regions': [
            {'name': 'Sitapur Ward 1', 'votes': 1, 'sub_regions': []},
        ]},
    ],
}


def test_region_tree():
    assert count_votes_in_regions(VILLAGE_TREE) == 11


@pytest.mark.parametrize('region', [None, 5, 'District', [], [VILLAGE_TREE]])
def test_region_invalid(region):
    assert count_votes_in_regions(region) == 0


@pytest.mark.parametrize(('region', 'total'), [
    ({}, 0),
    ({'votes': 7}, 7),
    ({'votes': '7'}, 0),
    ({'votes': True}, 0),
    ({'votes': 2.5}, 2.5),
    ({'votes': 3j}, 0),
    ({'votes': float('nan')}, 0),
    ({'votes': Decimal('2')}, Decimal('2')),
    ({'votes': Decimal('2'), 'sub_regions': [{'votes': 3}]}, Decimal('5')),
    ({'votes': Decimal('1'), 'sub_regions': [{'votes': 1.5}]}, 2.5),
    ({'votes': 1.5, 'sub_regions': [{'votes': Decimal('1')}]}, 2.5),
    ({'votes': 4, 'sub_regions': 'none'}, 4),
    ({'votes': 4, 'sub_regions': {'votes': 3}}, 4),
    ({'votes': 4, 'sub_regions': ({'votes': 3},)}, 7),
    ({'sub_regions': [None, {'votes': 1}, 'x', {'sub_regions': [{'votes': 2}]}]}, 3),
])
def test_region_partial(region, total):
    assert count_votes_in_regions(region) == total


def test_region_deep_chain():
    node = {'votes': 1}
    for _ in range(50):
        node = {'votes': 1, 'sub_regions': [node]}
    assert count_votes_in_regions(node) == 51


@pytest.mark.parametrize(('tally', 'cand', 'expected'), [
    ({'C1': 5, 'C2': 3}, 'C1', {'C1': 6, 'C2': 3}),
    ({'C1': 5, 'C2': 3}, 'C3', {'C1': 5, 'C2': 3, 'C3': 1}),
    ({}, 'C1', {'C1': 1}),
    (None, 'C1', {'C1': 1}),
    ('C1', 'C1', {'C1': 1}),
    ({'C1': 5}, None, {'C1': 5}),
    ({'C1': 5}, '', {'C1': 5}),
    ({'C1': None}, 'C1', {'C1': 1}),
    ({'C1': 5}, ['C1'], {'C1': 5}),
    ({}, {'id': 'C1'}, {}),
    ({'C1': 3j}, 'C1', {'C1': 1}),
])
def test_tally_pure(tally, cand, expected):
    before = copy.deepcopy(tally)
    result = tally_pure(tally, cand)
    assert result == expected
    assert tally == before


def test_tally_pure_new_object():
    tally = {'C1': 1}
    result = tally_pure(tally, None)
    assert result == tally
    assert result is not tally
    result['C1'] = 10
    assert tally == {'C1': 1}


def test_tally_pure_chain():
    tally = {}
    for cand in ['C1', 'C2', 'C1', 'C1']:
        tally = tally_pure(tally, cand)
    assert tally == {'C1': 3, 'C2': 1}
