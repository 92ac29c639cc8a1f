"""
Conversion Config Loader

Loads extra HD Edition -> WololoKingdoms id mappings from an INI file.
Entries extend the built-in remap tables and override them on conflict.

Config format (conversion.ini):
    [units]
    hd_unit_id = wk_unit_id

    [terrains]
    hd_terrain_id = wk_terrain_id

Example:
    [units]
    1001 = 1501

    [terrains]
    41 = 55
"""

import configparser
from pathlib import Path
from typing import Dict, Optional, Union

from ..utils import log, logDebug, logWarning

SECTIONS = ('units', 'terrains')

# Terrain ids are stored as signed bytes in the map
TERRAIN_ID_RANGE = range(0, 128)
UNIT_ID_RANGE = range(0, 0x10000)


class ConversionConfig:
    """
    Extra remap entries for the HD Edition -> WololoKingdoms converter.

    Invalid lines are reported and skipped, a missing file yields an empty config.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Load conversion config from an INI file.

        Args:
            config_path: Path to conversion.ini, or None for an empty config
        """
        self.units: Dict[int, int] = {}
        self.terrains: Dict[int, int] = {}
        self._config_path = Path(config_path) if config_path is not None else None
        if self._config_path is not None:
            self._load_config(self._config_path)

    @classmethod
    def from_string(cls, text: str) -> 'ConversionConfig':
        config = cls()
        parser = cls._make_parser()
        try:
            parser.read_string(text)
        except configparser.Error as e:
            logWarning(f"Failed to parse conversion config: {e}")
            return config
        config._load_parser(parser)
        return config

    @staticmethod
    def _make_parser() -> configparser.ConfigParser:
        parser = configparser.ConfigParser()
        # Preserve case sensitivity for section names and keys
        parser.optionxform = str
        return parser

    def _load_config(self, config_path: Path):
        """Parse INI file and populate the tables."""
        if not config_path.exists():
            logWarning(f"Conversion config not found: {config_path}")
            return

        parser = self._make_parser()
        try:
            parser.read(config_path, encoding='utf-8')
        except configparser.Error as e:
            logWarning(f"Failed to parse conversion config: {e}")
            return

        self._load_parser(parser)
        log(f"Loaded {self.entry_count} conversion config entries from {config_path}")

    def _load_parser(self, parser: configparser.ConfigParser):
        error_count = 0

        for section in parser.sections():
            name = section.lower()
            if name not in SECTIONS:
                logWarning(f"Unknown conversion config section [{section}]: expected [units] or [terrains]")
                error_count += 1
                continue

            table = self.units if name == 'units' else self.terrains
            valid_range = UNIT_ID_RANGE if name == 'units' else TERRAIN_ID_RANGE

            for key, value in parser.items(section):
                if not value.strip():
                    continue

                try:
                    source = int(key.strip())
                    target = int(value.strip())
                except ValueError:
                    logWarning(f"Invalid entry in [{section}] {key} = {value}: expected integer ids")
                    error_count += 1
                    continue

                if source not in valid_range or target not in valid_range:
                    logWarning(f"Id out of range in [{section}] {key} = {value}")
                    error_count += 1
                    continue

                table[source] = target
                logDebug(f"  [{section}] {source} -> {target}")

        if error_count > 0:
            logWarning(f"  {error_count} config errors")

    @property
    def entry_count(self) -> int:
        """Total number of entries loaded."""
        return len(self.units) + len(self.terrains)
