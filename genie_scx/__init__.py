"""
genie_scx

Read, write and convert Age of Empires II scenario (.scx) files.

- versions: VersionBundle and version dependent enumerations
- codecs: strings, embedded bitmap, terrain map
- scenario: the Scenario document and its sections
- remapping: HD Edition -> WololoKingdoms id conversion
- config: INI overrides for the conversion tables
- lang: game language files
"""

from .versions import VersionBundle
from .scenario import Scenario
from .remapping import AutoToWK, HDToWK, AoCToWK
from .lang import LangFile

__version__ = "0.1.0"

__all__ = ['VersionBundle', 'Scenario', 'AutoToWK', 'HDToWK', 'AoCToWK', 'LangFile']
