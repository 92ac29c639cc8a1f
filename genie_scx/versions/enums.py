"""
Enumeration codecs.

Closed integer sets stored in scenario files. Decoding an integer outside the
set raises a typed error that carries the value; encoding is total.

StartingAge is the exception to the fixed numbering: HD Edition (data version
1.25 and up) added a Nomad age and shifted the other ages by two, so decoding
and encoding take the data version as an explicit argument.
"""

from enum import Enum, IntEnum

from ..constants import STARTING_AGE_MODERN_VERSION
from ..errors import (
    ParseDataSetError,
    ParseDiplomaticStanceError,
    ParseDLCPackageError,
    ParseStartingAgeError,
    ParseVictoryConditionError,
)


class DiplomaticStance(IntEnum):
    ALLY = 0
    NEUTRAL = 1
    ENEMY = 3

    @classmethod
    def from_int(cls, n: int) -> 'DiplomaticStance':
        try:
            return cls(n)
        except ValueError:
            raise ParseDiplomaticStanceError(n) from None

    def to_int(self) -> int:
        return int(self)


class DataSet(IntEnum):
    """Which game data a scenario uses (HD Edition DLC options)."""
    BASE_GAME = 0
    EXPANSIONS = 1

    @classmethod
    def from_int(cls, n: int) -> 'DataSet':
        try:
            return cls(n)
        except ValueError:
            raise ParseDataSetError(n) from None

    def to_int(self) -> int:
        return int(self)


class DLCPackage(IntEnum):
    """An HD Edition DLC identifier."""
    AGE_OF_KINGS = 2
    AGE_OF_CONQUERORS = 3
    THE_FORGOTTEN = 4
    AFRICAN_KINGDOMS = 5
    RISE_OF_THE_RAJAS = 6

    @classmethod
    def from_int(cls, n: int) -> 'DLCPackage':
        try:
            return cls(n)
        except ValueError:
            raise ParseDLCPackageError(n) from None

    def to_int(self) -> int:
        return int(self)


class VictoryCondition(IntEnum):
    CAPTURE = 0
    CREATE = 1
    DESTROY = 2
    DESTROY_MULTIPLE = 3
    BRING_TO_AREA = 4
    BRING_TO_OBJECT = 5
    ATTRIBUTE = 6
    EXPLORE = 7
    CREATE_IN_AREA = 8
    DESTROY_ALL = 9
    DESTROY_PLAYER = 10
    POINTS = 11

    @classmethod
    def from_int(cls, n: int) -> 'VictoryCondition':
        try:
            return cls(n)
        except ValueError:
            raise ParseVictoryConditionError(n) from None

    def to_int(self) -> int:
        return int(self)


# Wire values per numbering scheme. Nomad has no legacy code of its own.
_LEGACY_AGES = {
    -1: 'DEFAULT',
    0: 'DARK_AGE',
    1: 'FEUDAL_AGE',
    2: 'CASTLE_AGE',
    3: 'IMPERIAL_AGE',
    4: 'POST_IMPERIAL_AGE',
}

_MODERN_AGES = {
    -1: 'DEFAULT',
    0: 'DEFAULT',
    1: 'NOMAD',
    2: 'DARK_AGE',
    3: 'FEUDAL_AGE',
    4: 'CASTLE_AGE',
    5: 'IMPERIAL_AGE',
    6: 'POST_IMPERIAL_AGE',
}


class StartingAge(Enum):
    """The age players start the scenario in."""
    DEFAULT = 'default'
    NOMAD = 'nomad'
    DARK_AGE = 'dark'
    FEUDAL_AGE = 'feudal'
    CASTLE_AGE = 'castle'
    IMPERIAL_AGE = 'imperial'
    POST_IMPERIAL_AGE = 'post_imperial'

    @classmethod
    def from_int(cls, n: int, version: float) -> 'StartingAge':
        """
        Decode a starting age number for a particular data version.

        Args:
            n: Wire value
            version: Data version of the scenario

        Raises:
            ParseStartingAgeError: if n is not valid for the version
        """
        table = _LEGACY_AGES if version < STARTING_AGE_MODERN_VERSION else _MODERN_AGES
        name = table.get(n)
        if name is None:
            raise ParseStartingAgeError(n, version)
        return cls[name]

    def to_int(self, version: float) -> int:
        """
        Encode this starting age for a particular data version.

        Legacy versions have no Nomad age; it is written as Dark Age (0) and
        reads back as DARK_AGE.
        """
        if version < STARTING_AGE_MODERN_VERSION:
            if self is StartingAge.NOMAD:
                return 0
            return _LEGACY_CODES[self]
        return _MODERN_CODES[self]


_LEGACY_CODES = {StartingAge[name]: code for code, name in _LEGACY_AGES.items()}
_MODERN_CODES = {StartingAge[name]: code for code, name in _MODERN_AGES.items() if code != -1}
