"""
Remapping Package

Handles unit and terrain id remapping between game version families.
"""

from .remap_tables import UNIT_TABLES, TERRAIN_TABLES, merged_table
from .id_remapper import IdRemapper
from .scenario_converter import ScenarioConverter, HDToWK, AoCToWK, AutoToWK, ConversionStats

__all__ = [
    'UNIT_TABLES',
    'TERRAIN_TABLES',
    'merged_table',
    'IdRemapper',
    'ScenarioConverter',
    'HDToWK',
    'AoCToWK',
    'AutoToWK',
    'ConversionStats',
]
