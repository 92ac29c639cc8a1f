"""
Language Package

- lang_file: LangFile, game strings from .dll, .ini and HD Edition key-value files
- pe_resources: raw resources of PE files (via pefile)
"""

from .lang_file import LangFile, parse_string_block, read_string_tables
from .pe_resources import PEResources

__all__ = ['LangFile', 'PEResources', 'parse_string_block', 'read_string_tables']
