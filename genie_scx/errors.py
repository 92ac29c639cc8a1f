"""
Scenario error types.

Binary structure problems are fatal for the whole file, code page problems are
reported per string, and unknown enumeration values carry the offending integer.
"""

from .constants import STARTING_AGE_MODERN_VERSION


class DecodeStringError(ValueError):
    """A scenario string could not be decoded with the Windows-1252 code page."""

    def __init__(self, raw: bytes = b""):
        super().__init__("could not decode string as WINDOWS-1252")
        self.raw = raw


class EncodeStringError(ValueError):
    """A string could not be encoded with the Windows-1252 code page."""

    def __init__(self, text: str = ""):
        super().__init__("could not encode string as WINDOWS-1252")
        self.text = text


class ParseEnumError(ValueError):
    """An integer does not belong to a closed enumeration."""

    description = "value"
    expected = ""

    def __init__(self, value: int):
        message = f"invalid {self.description} {value}"
        if self.expected:
            message += f" (must be {self.expected})"
        super().__init__(message)
        self.value = value


class ParseDiplomaticStanceError(ParseEnumError):
    description = "diplomatic stance"
    expected = "0/1/3"


class ParseDataSetError(ParseEnumError):
    description = "data set"
    expected = "0/1"


class ParseDLCPackageError(ParseEnumError):
    description = "dlc package"
    expected = "2-6"


class ParseVictoryConditionError(ParseEnumError):
    description = "victory condition"
    expected = "0-11"


class ParseStartingAgeError(ParseEnumError):
    """Unknown starting age; the valid range depends on the data version."""

    description = "starting age"

    def __init__(self, value: int, version: float):
        self.expected = "-1-4" if version < STARTING_AGE_MODERN_VERSION else "-1-6"
        super().__init__(value)
        self.version = version


class UnsupportedPresetError(NotImplementedError):
    """A named version preset has no known parameters."""

    def __init__(self, name: str):
        super().__init__(f"version preset '{name}' is not supported")
        self.name = name


class InvalidScenarioError(ValueError):
    """The binary structure of a scenario file is malformed."""


class ConvertError(ValueError):
    """A scenario cannot be converted from its version family."""


class LoadError(Exception):
    """A language file resource section is missing or malformed."""
