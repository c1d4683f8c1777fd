"""Villagelib - small in-memory tools for village elections and festivals.

The library consists of independent modules:

-   :mod:`election` tracks voter registration and one-vote-per-voter ballots
    for a fixed list of candidates, and reports the results and the winner.
-   :mod:`validate` builds reusable voter validators from declarative rules.
-   :mod:`tally` contains stateless counting helpers - a recursive vote sum
    over a tree of regions and a tally update that never mutates its input.
-   :mod:`festival` manages a list of festival dates with unique names.

None of the operations raise on malformed input; they report failures
through documented return values instead. Records can be converted to
JSON-ready dictionaries using the :mod:`persist` module.
"""

from villagelib.election import Election, create_election    # noqa: F401
from villagelib.festival import Festival, FestivalManager, \
    create_festival_manager    # noqa: F401
from villagelib.tally import count_votes_in_regions, tally_pure    # noqa: F401
from villagelib.validate import ValidationResult, VoterValidator, \
    create_vote_validator    # noqa: F401
