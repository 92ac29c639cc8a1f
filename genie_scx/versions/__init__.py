"""
Versioning Package

- version_bundle: VersionBundle, the per-section version descriptor and its presets
- enums: closed enumerations stored in scenario files (some version dependent)
"""

from .version_bundle import VersionBundle
from .enums import (
    DiplomaticStance,
    DataSet,
    DLCPackage,
    VictoryCondition,
    StartingAge,
)

__all__ = [
    'VersionBundle',
    'DiplomaticStance',
    'DataSet',
    'DLCPackage',
    'VictoryCondition',
    'StartingAge',
]
