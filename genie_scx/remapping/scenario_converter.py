"""
Scenario Converters

Rewrite a parsed scenario for UserPatch 1.5 / WololoKingdoms.

HD Edition scenarios use different unit and terrain ids for DLC content, so
HDToWK rewrites every place an id is stored:
- unit type of every placed object
- object type of per-player victory conditions
- unit type slots of trigger conditions and effects (per trigger version layout)
- terrain of every map tile

The document is changed in place and gets the userpatch_15() version bundle.
Ids without a table entry are left unchanged.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..config import ConversionConfig
from ..errors import ConvertError
from ..scenario import (
    ParameterLayout, Scenario, condition_layout, effect_layout, relayout_trigger_system,
)
from ..utils import log, logDebug
from ..versions import DLCPackage, VersionBundle
from .id_remapper import IdRemapper
from .remap_tables import TERRAIN_TABLES, UNIT_TABLES, merged_table


@dataclass
class ConversionStats:
    """Number of ids rewritten per document part."""
    objects: int = 0
    victory_entries: int = 0
    trigger_properties: int = 0
    tiles: int = 0

    @property
    def total(self) -> int:
        return self.objects + self.victory_entries + self.trigger_properties + self.tiles


class ScenarioConverter:
    """Base class for converters to the WololoKingdoms version family."""

    def convert(self, scenario: Scenario) -> ConversionStats:
        raise NotImplementedError


class AoCToWK(ScenarioConverter):
    """AoC and WololoKingdoms share ids; only the version bundle changes."""

    def convert(self, scenario: Scenario) -> ConversionStats:
        _set_target_version(scenario, VersionBundle.userpatch_15())
        return ConversionStats()


class HDToWK(ScenarioConverter):
    """
    Convert an HD Edition scenario to WololoKingdoms.

    Usage:
        converter = HDToWK(ConversionConfig(Path("conversion.ini")))
        stats = converter.convert(scenario)
    """

    def __init__(self, config: Optional[ConversionConfig] = None):
        self.config = config or ConversionConfig()

    def remappers_for(self, dlcs: List[DLCPackage]) -> Tuple[IdRemapper, IdRemapper]:
        """
        Build the unit and terrain remappers for a set of DLC dependencies.

        Config entries extend the built-in tables and win on conflict.
        """
        units: Dict[int, int] = merged_table(UNIT_TABLES, dlcs)
        units.update(self.config.units)
        terrains: Dict[int, int] = merged_table(TERRAIN_TABLES, dlcs)
        terrains.update(self.config.terrains)
        return IdRemapper(units, name="unit"), IdRemapper(terrains, name="terrain")

    def convert(self, scenario: Scenario) -> ConversionStats:
        # Documents without DLC options may use content from any DLC
        options = scenario.header.dlc_options
        dlcs = list(options.dependencies) if options is not None else list(DLCPackage)
        units, terrains = self.remappers_for(dlcs)

        stats = ConversionStats()

        for _, obj in scenario.objects():
            new_type = units.remap(obj.unit_type)
            if new_type != obj.unit_type:
                obj.unit_type = new_type
                stats.objects += 1

        for entries in scenario.victory_entries:
            for entry in entries:
                new_type = units.remap(entry.object_type)
                if new_type != entry.object_type:
                    entry.object_type = new_type
                    stats.victory_entries += 1

        if scenario.triggers is not None:
            stats.trigger_properties = self._convert_triggers(scenario, units)

        stats.tiles = terrains.remap_array(scenario.map.terrain)

        _set_target_version(scenario, VersionBundle.userpatch_15())

        log(f"Converted HD Edition scenario: {stats.objects} objects, "
            f"{stats.victory_entries} victory conditions, "
            f"{stats.trigger_properties} trigger properties, {stats.tiles} tiles")
        return stats

    @staticmethod
    def _convert_triggers(scenario: Scenario, units: IdRemapper) -> int:
        # Slot positions depend on the trigger version the document was read with
        trigger_version = scenario.version.triggers
        conditions = condition_layout(trigger_version)
        effects = effect_layout(trigger_version)

        changed = 0
        for trigger in scenario.triggers.triggers:
            for condition in trigger.conditions:
                changed += _remap_slots(condition.properties, conditions, units)
            for effect in trigger.effects:
                changed += _remap_slots(effect.properties, effects, units)
        return changed


class AutoToWK(ScenarioConverter):
    """Pick the converter for the scenario's version family."""

    def __init__(self, config: Optional[ConversionConfig] = None):
        self.config = config

    def convert(self, scenario: Scenario) -> ConversionStats:
        version = scenario.version
        if version.is_hd_edition():
            logDebug("Detected HD Edition scenario")
            return HDToWK(self.config).convert(scenario)
        if version.is_aoc():
            logDebug("Detected AoC scenario")
            return AoCToWK().convert(scenario)
        raise ConvertError(f"Cannot convert {version} to WololoKingdoms: "
                           "only AoC and HD Edition scenarios are supported")


def _remap_slots(properties: List[int], layout: ParameterLayout, units: IdRemapper) -> int:
    changed = 0
    for name in layout.unit_fields:
        value = layout.get(properties, name)
        if value is None or value not in units:
            continue
        layout.set(properties, name, units.remap(value))
        changed += 1
    return changed


def _set_target_version(scenario: Scenario, target: VersionBundle):
    """Replace the bundle, moving trigger properties to the target layout."""
    if scenario.triggers is not None:
        relayout_trigger_system(scenario.triggers, scenario.version.triggers, target.triggers)
    if not target.has_dlc_options():
        scenario.header.dlc_options = None
    scenario.version = target
