"""
HD Edition -> WololoKingdoms id tables.

WololoKingdoms ships the HD Edition DLC content on top of UserPatch 1.5, but
under its own unit and terrain ids. Each table lists the ids a DLC introduced
in HD Edition and the id WololoKingdoms uses for the same thing.

The DLC tables below are placeholder ranges, one contiguous block per DLC;
they do not list the real per-unit ids. Exact mappings go in a conversion
config (see ConversionConfig), whose entries override these tables.

The base game (AoK/AoC) ids are shared by both, so those tables are empty.
No target id is also a source id, which keeps conversion idempotent.
Terrain 0 is shared and never remapped.
"""

from typing import Dict, Iterable

from ..versions import DLCPackage


def _shifted(first: int, last: int, target: int) -> Dict[int, int]:
    """Map the inclusive id range first..last onto target, target + 1, ..."""
    return {source: target + offset for offset, source in enumerate(range(first, last + 1))}


UNIT_TABLES: Dict[DLCPackage, Dict[int, int]] = {
    DLCPackage.AGE_OF_KINGS: {},
    DLCPackage.AGE_OF_CONQUERORS: {},
    DLCPackage.THE_FORGOTTEN: _shifted(1100, 1119, 1400),
    DLCPackage.AFRICAN_KINGDOMS: _shifted(1001, 1018, 1501),
    DLCPackage.RISE_OF_THE_RAJAS: _shifted(1120, 1139, 1601),
}

TERRAIN_TABLES: Dict[DLCPackage, Dict[int, int]] = {
    DLCPackage.AGE_OF_KINGS: {},
    DLCPackage.AGE_OF_CONQUERORS: {},
    DLCPackage.THE_FORGOTTEN: {},
    DLCPackage.AFRICAN_KINGDOMS: _shifted(41, 48, 55),
    DLCPackage.RISE_OF_THE_RAJAS: _shifted(49, 54, 63),
}


def merged_table(tables: Dict[DLCPackage, Dict[int, int]], dlcs: Iterable[DLCPackage]) -> Dict[int, int]:
    """Union of the tables of several DLCs, in DLC order."""
    merged: Dict[int, int] = {}
    for dlc in sorted(set(dlcs)):
        merged.update(tables.get(dlc, {}))
    return merged
