'''A planner of named festival dates.

Festivals are kept by a :class:`FestivalManager` created with
:func:`create_festival_manager`. Each manager holds its own list; festival
names are unique within a manager and all accessors hand out fresh
:class:`Festival` copies, so callers can never change the stored list.

Dates are ``YYYY-MM-DD`` strings. Only the format is checked; because it is
fixed-width, comparing the strings orders the dates chronologically.
'''

import logging
import re
from typing import Any, List, Optional

from villagelib.persist import simple_serialization

logger = logging.getLogger(__name__)

FESTIVAL_TYPES = frozenset(['religious', 'national', 'cultural'])
DEFAULT_UPCOMING = 3

DATE_PATTERN = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')


def is_valid_date(date: Any) -> bool:
    '''Return True if the value is a string in ``YYYY-MM-DD`` format.'''
    return isinstance(date, str) and DATE_PATTERN.fullmatch(date) is not None


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@simple_serialization
class Festival:
    '''A festival on a given date.

    :param name: Name of the festival, unique within a manager.
    :param date: Date of the festival as ``YYYY-MM-DD``.
    :param type: One of ``religious``, ``national`` or ``cultural``.
    '''
    def __init__(self, name: str, date: str, type: str):
        self.name = name
        self.date = date
        self.type = type

    def copy(self) -> 'Festival':
        return Festival(self.name, self.date, self.type)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Festival):
            return NotImplemented
        return (
            self.name == other.name
            and self.date == other.date
            and self.type == other.type
        )

    def __repr__(self) -> str:
        return f'<Festival({self.name},{self.date},{self.type})>'


class FestivalManager:
    '''Maintains an ordered list of festivals with unique names.'''
    def __init__(self):
        self._festivals: List[Festival] = []

    def add_festival(self, name: Any, date: Any, type: Any) -> int:
        '''Add a festival to the end of the list.

        :returns: The new number of festivals, or -1 if the name is not
            a non-empty string, the date is malformed, the type is unknown
            or a festival of that name already exists.
        '''
        if not name or not isinstance(name, str):
            logger.info('rejecting festival with invalid name %r', name)
            return -1
        if not is_valid_date(date):
            logger.info('rejecting festival %s: invalid date %r', name, date)
            return -1
        if not isinstance(type, str) or type not in FESTIVAL_TYPES:
            logger.info('rejecting festival %s: invalid type %r', name, type)
            return -1
        if self._find(name) is not None:
            logger.info('rejecting festival %s: duplicate name', name)
            return -1
        self._festivals.append(Festival(name, date, type))
        logger.debug('added festival %s on %s', name, date)
        return len(self._festivals)

    def remove_festival(self, name: Any) -> bool:
        '''Remove the festival of the given name.

        :returns: True if it was found and removed, False otherwise.
        '''
        index = self._find(name)
        if index is None:
            return False
        del self._festivals[index]
        logger.debug('removed festival %s', name)
        return True

    def _find(self, name: Any):
        for i, festival in enumerate(self._festivals):
            if festival.name == name:
                return i
        return None

    def get_all(self) -> List[Festival]:
        '''Return copies of all festivals in insertion order.'''
        return [festival.copy() for festival in self._festivals]

    def get_by_type(self, type: Any) -> List[Festival]:
        '''Return copies of festivals of the given type in insertion order.'''
        return [
            festival.copy() for festival in self._festivals
            if festival.type == type
        ]

    def get_upcoming(self,
                     current_date: Any,
                     n: Optional[int] = DEFAULT_UPCOMING,
                     type: Optional[str] = None,
                     ) -> List[Festival]:
        '''Return the next festivals on or after the given date.

        :param current_date: Reference date as ``YYYY-MM-DD``. If it is
            malformed, an empty list is returned.
        :param n: Maximum number of festivals to return. None means the
            default of three; a non-integer or non-positive value gives an
            empty list.
        :param type: If given, only festivals of this type are considered.
        :returns: Up to n festival copies, ordered by ascending date;
            festivals on the same date keep their insertion order.
        '''
        if n is None:
            n = DEFAULT_UPCOMING
        if not is_valid_date(current_date) or not _is_count(n) or n <= 0:
            return []
        upcoming = sorted(
            (
                f for f in self._festivals
                if f.date >= current_date and (type is None or f.type == type)
            ),
            key=lambda f: f.date
        )
        return [festival.copy() for festival in upcoming[:n]]

    def get_count(self) -> int:
        return len(self._festivals)

    def __len__(self) -> int:
        return len(self._festivals)

    def __repr__(self) -> str:
        return f'<FestivalManager({len(self._festivals)} festivals)>'


def create_festival_manager() -> FestivalManager:
    '''Create a new, empty festival manager sharing no state with others.'''
    return FestivalManager()
