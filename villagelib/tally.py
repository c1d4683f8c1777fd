'''Stateless vote counting helpers.'''

from collections.abc import Mapping
from typing import Any, Dict, Hashable

import villagelib.util


def count_votes_in_regions(region: Any) -> Any:
    '''Sum the votes of a region and all its subregions, recursively.

    A region is a mapping with an optional numeric ``votes`` count and an
    optional ``sub_regions`` list of further regions. Non-numeric counts
    contribute zero, a non-list ``sub_regions`` is ignored and anything that
    is not a mapping counts as an empty region. The tree must be finite and
    acyclic.

    :param region: Root of the region tree.
    :returns: Total number of votes in the tree.
    '''
    if not isinstance(region, Mapping):
        return 0
    votes = region.get('votes')
    total = votes if villagelib.util.is_number(votes) else 0
    sub_regions = region.get('sub_regions')
    if villagelib.util.is_sequence(sub_regions):
        for sub_region in sub_regions:
            total = villagelib.util.add_counts(
                total, count_votes_in_regions(sub_region)
            )
    return total


def tally_pure(current_tally: Any,
               candidate_id: Hashable,
               ) -> Dict[Hashable, Any]:
    '''Return a new tally with one more vote for the candidate.

    The input tally is never modified. A candidate not yet in the tally
    starts at 1; a falsy or unhashable candidate ID only copies the tally.

    :param current_tally: Mapping of candidate IDs to vote counts; any other
        value is treated as an empty tally.
    :param candidate_id: Candidate receiving the vote.
    '''
    new_tally = dict(current_tally) if isinstance(current_tally, Mapping) else {}
    if not candidate_id:
        return new_tally
    try:
        hash(candidate_id)
    except TypeError:
        return new_tally
    count = new_tally.get(candidate_id)
    new_tally[candidate_id] = (count if villagelib.util.is_number(count) else 0) + 1
    return new_tally
