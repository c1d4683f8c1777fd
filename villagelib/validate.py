'''Voter validators built from declarative rules.

:func:`create_vote_validator` turns a rules mapping into a reusable
:class:`VoterValidator`. Validators are pure: calling one inspects the voter
and returns a :class:`ValidationResult` without raising or keeping state.
'''

from collections.abc import Mapping
from typing import Any, Iterable, NamedTuple, Optional, Tuple

import villagelib.util
from villagelib.election import DEFAULT_MIN_AGE
from villagelib.persist import simple_serialization

INVALID_VOTER = 'invalid_voter'
UNDERAGE = 'underage'
MISSING_PREFIX = 'missing_'


class ValidationResult(NamedTuple):
    '''Outcome of a voter validation; reason is empty for valid voters.'''
    valid: bool
    reason: str = ''


VALID = ValidationResult(True, '')


@simple_serialization
class VoterValidator:
    '''Check that a voter record satisfies the registration rules.

    The checks run in this order and the first failure is reported:

    1.  The voter must be a mapping (``invalid_voter``).
    2.  Every required field must be present (``missing_<field>``, for the
        first missing field in the order given).
    3.  The ``age`` must be a number no lower than the minimum age
        (``underage``).

    :param min_age: Minimum age of a valid voter.
    :param required_fields: Keys that must be present in the voter mapping.
    '''
    def __init__(self,
                 min_age: float = DEFAULT_MIN_AGE,
                 required_fields: Iterable[str] = (),
                 ):
        self.min_age = min_age
        self.required_fields: Tuple[str, ...] = tuple(required_fields)

    def __call__(self, voter: Any) -> ValidationResult:
        return self.validate(voter)

    def validate(self, voter: Any) -> ValidationResult:
        if not isinstance(voter, Mapping):
            return ValidationResult(False, INVALID_VOTER)
        for field in self.required_fields:
            if field not in voter:
                return ValidationResult(False, MISSING_PREFIX + str(field))
        age = voter.get('age')
        if not villagelib.util.is_number(age) or age < self.min_age:
            return ValidationResult(False, UNDERAGE)
        return VALID

    def __repr__(self) -> str:
        return (
            f'<VoterValidator(min_age={self.min_age!r},'
            f' required_fields={list(self.required_fields)!r})>'
        )


def create_vote_validator(rules: Optional[Mapping] = None) -> VoterValidator:
    '''Create a voter validation function from a rules mapping.

    :param rules: A mapping with optional ``min_age`` (default 18) and
        ``required_fields`` (default none) keys. Anything that is not a
        mapping counts as no rules; a ``required_fields`` value that is not
        a list or tuple is ignored, as is a non-numeric ``min_age``.
    '''
    if not isinstance(rules, Mapping):
        rules = {}
    min_age = rules.get('min_age')
    if not villagelib.util.is_number(min_age):
        min_age = DEFAULT_MIN_AGE
    required = rules.get('required_fields')
    if not villagelib.util.is_sequence(required):
        required = ()
    return VoterValidator(min_age=min_age, required_fields=required)
