'''Various utility functions for other modules of villagelib.

There should normally be no need to use these functions directly.
'''

import operator
from decimal import Decimal
from numbers import Real
from typing import Any, Dict, List


def is_number(value: Any) -> bool:
    '''Return True for real numeric values; booleans do not count.

    Decimals are accepted although they are not registered as :class:`Real`.
    NaN values are not numbers here, as they do not compare.
    '''
    if isinstance(value, Decimal):
        return not value.is_nan()
    return (
        isinstance(value, Real)
        and not isinstance(value, bool)
        and value == value
    )


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def sorted_by_votes(rows: List[Dict[str, Any]],
                    descending: bool = True,
                    ) -> List[Dict[str, Any]]:
    '''Return result rows sorted by their vote count.

    The sort is stable, so rows with equal counts keep their input order
    in both directions.
    '''
    if descending:
        return sorted(rows, key=lambda row: -row['votes'])
    else:
        return sorted(rows, key=operator.itemgetter('votes'))


def add_counts(count1: Any, count2: Any) -> Any:
    '''Add two numeric counts, falling back to floats for mixed types.

    Decimals cannot be added to floats directly.
    '''
    try:
        return count1 + count2
    except TypeError:
        return float(count1) + float(count2)
