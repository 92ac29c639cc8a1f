"""
Id Remapper

Looks up replacement ids in a single source -> target table.
Ids without an entry are returned unchanged.
"""

from typing import Dict, Optional

import numpy as np

from ..utils import logDebug, logWarning


class IdRemapper:
    """
    Source -> target id lookup.

    Entries whose target is itself a source id are dropped on construction,
    so applying the remapper twice gives the same result as applying it once.

    Usage:
        units = IdRemapper({1001: 1501}, name="unit")
        units.remap(1001)                  # 1501
        units.remap(4)                     # 4
        changed = terrains.remap_array(scenario.map.terrain)
    """

    def __init__(self, table: Dict[int, int], name: str = "id"):
        """
        Args:
            table: source id -> target id
            name: What the ids are, for log messages
        """
        self.name = name
        self._table = self._drop_chains(table)

        keys = np.array(sorted(self._table), dtype=np.int64)
        self._keys = keys
        self._values = np.array([self._table[k] for k in keys.tolist()], dtype=np.int64)

    def _drop_chains(self, table: Dict[int, int]) -> Dict[int, int]:
        # Identity entries do not count as sources
        sources = {source for source, target in table.items() if source != target}
        result = {}
        for source, target in table.items():
            if source == target:
                continue
            if target in sources:
                logWarning(f"Dropping {self.name} mapping {source} -> {target}: "
                           f"{target} is itself remapped")
                continue
            result[source] = target
        return result

    def remap(self, value: int) -> int:
        return self._table.get(value, value)

    def lookup(self, value: int) -> Optional[int]:
        """Target id for value, or None if value is not remapped."""
        return self._table.get(value)

    def remap_array(self, array: np.ndarray) -> int:
        """
        Remap every element of an integer array in place.

        Args:
            array: Array or array view (e.g. Map.terrain)

        Returns:
            Number of elements changed
        """
        if not self._table:
            return 0

        mask = np.isin(array, self._keys)
        changed = int(np.count_nonzero(mask))
        if changed:
            index = np.searchsorted(self._keys, array[mask])
            array[mask] = self._values[index].astype(array.dtype)
            logDebug(f"Remapped {changed} {self.name} values")
        return changed

    def __contains__(self, value: int) -> bool:
        return value in self._table

    def __len__(self) -> int:
        return len(self._table)

    def items(self):
        return self._table.items()
