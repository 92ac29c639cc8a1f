"""
Trigger system section.

Layout (trigger version is the bundle's `triggers` axis):
- f64 version
- i8 objectives_state (version >= 1.5)
- i32 trigger count
- per trigger:
  - i32 enabled, i8 looping, u8 is_objective, i32 objective_order
  - i32-prefixed description, i32-prefixed name
  - i32 effect count, effects, effect count x i32 display order
  - i32 condition count, conditions, condition count x i32 display order
- trigger count x i32 display order (version >= 1.4)

Condition:
- i32 condition type
- i32 property count, property count x i32 properties

Effect:
- i32 effect type
- i32 property count, property count x i32 properties
- i32-prefixed text, i32-prefixed sound file name
- num_selected x i32 selected unit ids

Properties are kept as raw i32 vectors so unknown slots survive a round trip.
What each slot means depends on the trigger version; `condition_layout` and
`effect_layout` name the slots for a version.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..constants import (
    TRIGGER_VERSION_MODERN_LAYOUT,
    TRIGGER_VERSION_OBJECTIVES_STATE,
    TRIGGER_VERSION_ORDER,
)
from ..codecs.strings import read_i32_str, write_opt_i32_str
from ..errors import InvalidScenarioError
from ..utils.binary import (
    Buffer, read_f64, read_i8, read_i32, read_u8, write_f64, write_i8, write_i32, write_u8,
)
from .data_types import Trigger, TriggerCondition, TriggerEffect, TriggerSystem

UNSET = -1


@dataclass(frozen=True)
class ParameterLayout:
    """Names of the i32 property slots of a condition or effect."""
    fields: Tuple[str, ...]
    unit_fields: Tuple[str, ...] = ()

    def index(self, name: str) -> Optional[int]:
        try:
            return self.fields.index(name)
        except ValueError:
            return None

    def get(self, properties: List[int], name: str) -> Optional[int]:
        """Value of a named slot, or None if the slot is not stored."""
        index = self.index(name)
        if index is None or index >= len(properties):
            return None
        return properties[index]

    def set(self, properties: List[int], name: str, value: int) -> bool:
        """Set a named slot in place. Returns False if the slot is not stored."""
        index = self.index(name)
        if index is None or index >= len(properties):
            return False
        properties[index] = value
        return True

    def to_named(self, properties: List[int]) -> Dict[str, int]:
        return dict(zip(self.fields, properties))

    def from_named(self, values: Dict[str, int]) -> List[int]:
        return [values.get(name, UNSET) for name in self.fields]

    def blank(self) -> List[int]:
        return [UNSET] * len(self.fields)


_CONDITION_FIELDS = (
    'amount', 'resource', 'unit_object', 'unit_location', 'unit_type', 'player',
    'technology', 'timer', 'trigger', 'area_x1', 'area_y1', 'area_x2', 'area_y2',
    'unit_group', 'unit_class', 'ai_signal',
)

_EFFECT_FIELDS = (
    'ai_goal', 'amount', 'resource', 'diplomacy', 'num_selected', 'location_object',
    'unit_type', 'player_source', 'player_target', 'technology', 'string_id', 'sound_id',
    'display_time', 'trigger_index', 'location_x', 'location_y', 'area_x1', 'area_y1',
    'area_x2', 'area_y2', 'unit_group', 'unit_class', 'instruction_panel',
)

# Before 1.6 conditions stop after the area and effects after the location
LEGACY_CONDITION_LAYOUT = ParameterLayout(_CONDITION_FIELDS[:13], unit_fields=('unit_type',))
LEGACY_EFFECT_LAYOUT = ParameterLayout(_EFFECT_FIELDS[:16], unit_fields=('unit_type',))
MODERN_CONDITION_LAYOUT = ParameterLayout(_CONDITION_FIELDS, unit_fields=('unit_type',))
MODERN_EFFECT_LAYOUT = ParameterLayout(_EFFECT_FIELDS, unit_fields=('unit_type',))


def condition_layout(trigger_version: float) -> ParameterLayout:
    if trigger_version >= TRIGGER_VERSION_MODERN_LAYOUT:
        return MODERN_CONDITION_LAYOUT
    return LEGACY_CONDITION_LAYOUT


def effect_layout(trigger_version: float) -> ParameterLayout:
    if trigger_version >= TRIGGER_VERSION_MODERN_LAYOUT:
        return MODERN_EFFECT_LAYOUT
    return LEGACY_EFFECT_LAYOUT


def convert_properties(properties: List[int], source: ParameterLayout,
                       target: ParameterLayout) -> List[int]:
    """Move a property vector from one layout to another by slot name."""
    if source == target:
        return list(properties)
    return target.from_named(source.to_named(properties))


def _read_count(stream: Buffer, what: str) -> int:
    count = read_i32(stream)
    if count < 0:
        raise InvalidScenarioError(f"Negative {what} count {count}")
    return count


def _read_properties(stream: Buffer) -> List[int]:
    count = _read_count(stream, "property")
    return [read_i32(stream) for _ in range(count)]


def _write_properties(buffer: Buffer, properties: List[int]):
    write_i32(buffer, len(properties))
    for value in properties:
        write_i32(buffer, value)


def read_condition(stream: Buffer, trigger_version: float) -> TriggerCondition:
    condition_type = read_i32(stream)
    return TriggerCondition(condition_type=condition_type, properties=_read_properties(stream))


def write_condition(buffer: Buffer, condition: TriggerCondition, properties: List[int]):
    write_i32(buffer, condition.condition_type)
    _write_properties(buffer, properties)


def read_effect(stream: Buffer, trigger_version: float) -> TriggerEffect:
    effect = TriggerEffect(effect_type=read_i32(stream))
    effect.properties = _read_properties(stream)
    effect.text = read_i32_str(stream)
    effect.sound = read_i32_str(stream)

    num_selected = effect_layout(trigger_version).get(effect.properties, 'num_selected')
    if num_selected is not None and num_selected > 0:
        effect.selected_units = [read_i32(stream) for _ in range(num_selected)]
    return effect


def write_effect(buffer: Buffer, effect: TriggerEffect, properties: List[int],
                 layout: ParameterLayout):
    # The selected unit count slot must match the list that follows; -1 means none
    num_selected = layout.get(properties, 'num_selected')
    if num_selected is None:
        assert not effect.selected_units, "effect has selected units but no count slot"
    elif max(num_selected, 0) != len(effect.selected_units):
        layout.set(properties, 'num_selected', len(effect.selected_units))

    write_i32(buffer, effect.effect_type)
    _write_properties(buffer, properties)
    write_opt_i32_str(buffer, effect.text)
    write_opt_i32_str(buffer, effect.sound)
    for unit_id in effect.selected_units:
        write_i32(buffer, unit_id)


def read_trigger(stream: Buffer, trigger_version: float) -> Trigger:
    trigger = Trigger()
    trigger.enabled = read_i32(stream) != 0
    trigger.looping = read_i8(stream) != 0
    trigger.is_objective = read_u8(stream) != 0
    trigger.objective_order = read_i32(stream)
    trigger.description = read_i32_str(stream)
    trigger.name = read_i32_str(stream)

    effect_count = _read_count(stream, "effect")
    trigger.effects = [read_effect(stream, trigger_version) for _ in range(effect_count)]
    trigger.effect_order = [read_i32(stream) for _ in range(effect_count)]

    condition_count = _read_count(stream, "condition")
    trigger.conditions = [read_condition(stream, trigger_version) for _ in range(condition_count)]
    trigger.condition_order = [read_i32(stream) for _ in range(condition_count)]

    return trigger


def write_trigger(buffer: Buffer, trigger: Trigger, source_version: float, target_version: float):
    """
    Write a trigger, moving condition/effect properties to the target layout.

    Args:
        trigger: Trigger to write
        source_version: Trigger version the properties were read with
        target_version: Trigger version to write
    """
    assert len(trigger.effect_order) == len(trigger.effects)
    assert len(trigger.condition_order) == len(trigger.conditions)

    source_effects, target_effects = effect_layout(source_version), effect_layout(target_version)
    source_conditions = condition_layout(source_version)
    target_conditions = condition_layout(target_version)

    write_i32(buffer, 1 if trigger.enabled else 0)
    write_i8(buffer, 1 if trigger.looping else 0)
    write_u8(buffer, 1 if trigger.is_objective else 0)
    write_i32(buffer, trigger.objective_order)
    write_opt_i32_str(buffer, trigger.description)
    write_opt_i32_str(buffer, trigger.name)

    write_i32(buffer, len(trigger.effects))
    for effect in trigger.effects:
        properties = convert_properties(effect.properties, source_effects, target_effects)
        write_effect(buffer, effect, properties, target_effects)
    for index in trigger.effect_order:
        write_i32(buffer, index)

    write_i32(buffer, len(trigger.conditions))
    for condition in trigger.conditions:
        properties = convert_properties(condition.properties, source_conditions, target_conditions)
        write_condition(buffer, condition, properties)
    for index in trigger.condition_order:
        write_i32(buffer, index)


def read_trigger_system(stream: Buffer) -> Tuple[float, TriggerSystem]:
    """
    Read the trigger section.

    Returns:
        Tuple of (trigger version, TriggerSystem)
    """
    version = read_f64(stream)
    system = TriggerSystem()
    if version >= TRIGGER_VERSION_OBJECTIVES_STATE:
        system.objectives_state = read_i8(stream)

    count = _read_count(stream, "trigger")
    system.triggers = [read_trigger(stream, version) for _ in range(count)]
    if version >= TRIGGER_VERSION_ORDER:
        system.order = [read_i32(stream) for _ in range(count)]
    else:
        system.order = list(range(count))

    return version, system


def write_trigger_system(buffer: Buffer, system: TriggerSystem, source_version: float,
                         target_version: float):
    assert len(system.order) == len(system.triggers)

    write_f64(buffer, target_version)
    if target_version >= TRIGGER_VERSION_OBJECTIVES_STATE:
        write_i8(buffer, system.objectives_state)

    write_i32(buffer, len(system.triggers))
    for trigger in system.triggers:
        write_trigger(buffer, trigger, source_version, target_version)
    if target_version >= TRIGGER_VERSION_ORDER:
        for index in system.order:
            write_i32(buffer, index)


def relayout_trigger_system(system: TriggerSystem, source_version: float, target_version: float):
    """Move every condition/effect property vector to the target layout in place."""
    source_effects, target_effects = effect_layout(source_version), effect_layout(target_version)
    source_conditions = condition_layout(source_version)
    target_conditions = condition_layout(target_version)
    for trigger in system.triggers:
        for effect in trigger.effects:
            effect.properties = convert_properties(effect.properties, source_effects, target_effects)
        for condition in trigger.conditions:
            condition.properties = convert_properties(
                condition.properties, source_conditions, target_conditions)
