'''Single-constituency plurality election with voter registration.

An election is created from a fixed list of candidates by
:func:`create_election`. Candidates and voters are plain mappings:

-   a **candidate** has an ``id`` (any hashable, non-empty value), a ``name``
    and a ``party``,
-   a **voter** has an ``id``, a ``name`` and a numeric ``age``.

Voters must be registered before they can vote and each registered voter can
vote only once. Nothing in this module raises on invalid input; failures are
reported through return values or, for :meth:`Election.cast_vote`, through
the error handler with one of the reason codes defined here.
'''

import functools
import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Hashable, List, Optional

import villagelib.util

logger = logging.getLogger(__name__)

VOTER_NOT_REGISTERED = 'voter_not_registered'
CANDIDATE_NOT_FOUND = 'candidate_not_found'
ALREADY_VOTED = 'already_voted'

DEFAULT_MIN_AGE = 18

ResultRow = Dict[str, Any]
Comparator = Callable[[ResultRow, ResultRow], int]


def _noop(*args, **kwargs) -> None:
    return None


def _has_valid_id(record: Any) -> bool:
    if not isinstance(record, Mapping) or not record.get('id'):
        return False
    try:
        hash(record['id'])
    except TypeError:
        return False
    return True


class Election:
    '''Tallies one-vote-per-voter ballots for a fixed set of candidates.

    Use :func:`create_election` rather than instantiating directly; the
    factory tolerates malformed candidate lists.

    :param candidates: Candidate mappings. Entries that are not mappings or
        lack a truthy ``id`` are skipped.
    '''
    def __init__(self, candidates: List[Mapping]):
        self._candidates: Dict[Hashable, Dict[str, Any]] = {}
        self._votes: Dict[Hashable, int] = {}
        self._registered = set()
        self._voted = set()
        for cand in candidates:
            if not _has_valid_id(cand):
                logger.debug('skipping invalid candidate %r', cand)
                continue
            self._candidates[cand['id']] = dict(cand)
            self._votes[cand['id']] = 0

    def register_voter(self, voter: Any) -> bool:
        '''Register a voter so that they may cast a vote.

        :param voter: Voter mapping with ``id`` and ``age``.
        :returns: True if the voter was registered; False if the voter is
            malformed, younger than 18 or already registered.
        '''
        if not _has_valid_id(voter):
            logger.info('rejecting malformed voter %r', voter)
            return False
        age = voter.get('age')
        if not villagelib.util.is_number(age) or age < DEFAULT_MIN_AGE:
            logger.info('rejecting voter %s: age %r', voter['id'], age)
            return False
        if voter['id'] in self._registered:
            logger.info('voter %s already registered', voter['id'])
            return False
        self._registered.add(voter['id'])
        logger.debug('registered voter %s', voter['id'])
        return True

    def cast_vote(self,
                  voter_id: Hashable,
                  candidate_id: Hashable,
                  on_success: Optional[Callable[[Dict[str, Any]], Any]] = None,
                  on_error: Optional[Callable[[str], Any]] = None,
                  ) -> Any:
        '''Record a vote and report the outcome to exactly one handler.

        :param voter_id: ID of a registered voter.
        :param candidate_id: ID of the candidate voted for.
        :param on_success: Called with ``{'voter_id': ..., 'candidate_id':
            ...}`` when the vote is recorded.
        :param on_error: Called with one of :data:`VOTER_NOT_REGISTERED`,
            :data:`CANDIDATE_NOT_FOUND` or :data:`ALREADY_VOTED`.
        :returns: The return value of the handler that was called. Missing
            or non-callable handlers return None.
        '''
        success_cb = on_success if callable(on_success) else _noop
        error_cb = on_error if callable(on_error) else _noop
        reason = self._rejection_reason(voter_id, candidate_id)
        if reason is not None:
            logger.info('vote by %s for %s rejected: %s',
                        voter_id, candidate_id, reason)
            return error_cb(reason)
        self._votes[candidate_id] += 1
        self._voted.add(voter_id)
        logger.debug('vote by %s for %s recorded', voter_id, candidate_id)
        return success_cb({'voter_id': voter_id, 'candidate_id': candidate_id})

    def _rejection_reason(self,
                          voter_id: Hashable,
                          candidate_id: Hashable,
                          ) -> Optional[str]:
        if not self._is_known(voter_id, self._registered):
            return VOTER_NOT_REGISTERED
        if not self._is_known(candidate_id, self._candidates):
            return CANDIDATE_NOT_FOUND
        if voter_id in self._voted:
            return ALREADY_VOTED
        return None

    @staticmethod
    def _is_known(key: Any, container) -> bool:
        # unhashable keys can never have been stored
        try:
            return key in container
        except TypeError:
            return False

    def get_results(self,
                    comparator: Optional[Comparator] = None,
                    ) -> List[ResultRow]:
        '''Return vote counts for all candidates.

        :param comparator: Optional two-argument ordering function returning
            a negative, zero or positive number. By default, results are
            sorted by descending vote count.
        :returns: A fresh list of ``{'id', 'name', 'party', 'votes'}`` dicts.
            Ties keep the order in which the candidates were given.
        '''
        results = [
            {
                'id': cand_id,
                'name': cand.get('name'),
                'party': cand.get('party'),
                'votes': self._votes[cand_id],
            }
            for cand_id, cand in self._candidates.items()
        ]
        if callable(comparator):
            return sorted(results, key=functools.cmp_to_key(comparator))
        else:
            return villagelib.util.sorted_by_votes(results)

    def get_winner(self) -> Optional[Dict[str, Any]]:
        '''Return a copy of the candidate with the most votes.

        The first candidate (in input order) with the maximum count wins a
        tie. If no votes were cast at all, returns None.
        '''
        winner_id = None
        max_votes = 0
        for cand_id, n_votes in self._votes.items():
            if n_votes > max_votes:
                winner_id, max_votes = cand_id, n_votes
        if winner_id is None:
            return None
        return dict(self._candidates[winner_id])

    def get_tally(self) -> Dict[Hashable, int]:
        '''Return a fresh mapping of candidate IDs to vote counts.'''
        return dict(self._votes)

    def is_registered(self, voter_id: Hashable) -> bool:
        return self._is_known(voter_id, self._registered)

    def has_voted(self, voter_id: Hashable) -> bool:
        return self._is_known(voter_id, self._voted)

    def __repr__(self) -> str:
        return f'<Election({len(self._candidates)} candidates)>'


def create_election(candidates: Any) -> Election:
    '''Create an independent election for the given candidates.

    :param candidates: A list (or tuple) of candidate mappings. Any other
        value yields an election with no candidates.
    '''
    if not villagelib.util.is_sequence(candidates):
        candidates = []
    return Election(candidates)
