"""Tests for the trigger system section and its property layouts."""

import io
import struct

import pytest

from conftest import make_trigger
from genie_scx.errors import InvalidScenarioError
from genie_scx.scenario import (
    Trigger, TriggerEffect, TriggerSystem, condition_layout, convert_properties, effect_layout,
)
from genie_scx.scenario.triggers import (
    LEGACY_CONDITION_LAYOUT, LEGACY_EFFECT_LAYOUT, MODERN_CONDITION_LAYOUT, MODERN_EFFECT_LAYOUT,
    read_trigger_system, write_trigger_system,
)


def _round_trip(system: TriggerSystem, source: float, target: float):
    buffer = io.BytesIO()
    write_trigger_system(buffer, system, source, target)
    buffer.seek(0)
    version, loaded = read_trigger_system(buffer)
    assert buffer.read() == b""
    return version, loaded


def test_layout_selection() -> None:
    assert condition_layout(1.6) is MODERN_CONDITION_LAYOUT
    assert condition_layout(1.5) is LEGACY_CONDITION_LAYOUT
    assert effect_layout(1.6) is MODERN_EFFECT_LAYOUT
    assert effect_layout(1.0) is LEGACY_EFFECT_LAYOUT
    assert len(LEGACY_CONDITION_LAYOUT.fields) == 13
    assert len(MODERN_CONDITION_LAYOUT.fields) == 16
    assert len(LEGACY_EFFECT_LAYOUT.fields) == 16
    assert len(MODERN_EFFECT_LAYOUT.fields) == 23


def test_layout_accessors() -> None:
    properties = [7, 8, 9]
    assert MODERN_CONDITION_LAYOUT.get(properties, 'resource') == 8
    assert MODERN_CONDITION_LAYOUT.get(properties, 'unit_type') is None
    assert MODERN_CONDITION_LAYOUT.get(properties, 'no_such_slot') is None

    assert MODERN_CONDITION_LAYOUT.set(properties, 'amount', 1)
    assert not MODERN_CONDITION_LAYOUT.set(properties, 'unit_type', 1)
    assert properties == [1, 8, 9]


def test_modern_trigger_system_reads_back() -> None:
    system = TriggerSystem(objectives_state=1, triggers=[make_trigger(), make_trigger(4, 5)], order=[1, 0])
    version, loaded = _round_trip(system, 1.6, 1.6)
    assert version == 1.6
    assert loaded == system
    assert loaded.triggers[0].effects[0].selected_units == [0, 1]
    assert loaded.triggers[0].effects[0].text == "Reinforcements"


def test_old_versions_have_no_order_or_objectives_state() -> None:
    system = TriggerSystem(objectives_state=3, triggers=[make_trigger(), make_trigger()], order=[1, 0])
    version, loaded = _round_trip(system, 1.6, 1.3)
    assert version == 1.3
    assert loaded.objectives_state == 0
    assert loaded.order == [0, 1]


def test_writing_legacy_layout_keeps_named_slots() -> None:
    system = TriggerSystem(triggers=[make_trigger(condition_unit=1001, effect_unit=1010)], order=[0])
    _, loaded = _round_trip(system, 1.6, 1.5)

    condition = loaded.triggers[0].conditions[0]
    effect = loaded.triggers[0].effects[0]
    assert len(condition.properties) == 13
    assert len(effect.properties) == 16
    assert LEGACY_CONDITION_LAYOUT.get(condition.properties, 'unit_type') == 1001
    assert LEGACY_CONDITION_LAYOUT.get(condition.properties, 'amount') == 5
    assert LEGACY_EFFECT_LAYOUT.get(effect.properties, 'unit_type') == 1010
    assert effect.selected_units == [0, 1]


def test_legacy_properties_grow_with_unset_slots() -> None:
    legacy = LEGACY_CONDITION_LAYOUT.blank()
    LEGACY_CONDITION_LAYOUT.set(legacy, 'unit_type', 83)
    modern = convert_properties(legacy, LEGACY_CONDITION_LAYOUT, MODERN_CONDITION_LAYOUT)
    assert len(modern) == 16
    assert MODERN_CONDITION_LAYOUT.get(modern, 'unit_type') == 83
    assert MODERN_CONDITION_LAYOUT.get(modern, 'ai_signal') == -1


def test_unknown_extra_properties_survive_same_version() -> None:
    trigger = make_trigger()
    trigger.conditions[0].properties.extend([42, 43])
    system = TriggerSystem(triggers=[trigger], order=[0])
    _, loaded = _round_trip(system, 1.6, 1.6)
    assert loaded.triggers[0].conditions[0].properties[-2:] == [42, 43]


def test_unselected_effect_keeps_minus_one_count() -> None:
    effect = TriggerEffect(effect_type=3, properties=MODERN_EFFECT_LAYOUT.blank())
    trigger = Trigger(effects=[effect], effect_order=[0])
    system = TriggerSystem(triggers=[trigger], order=[0])
    _, loaded = _round_trip(system, 1.6, 1.6)
    loaded_effect = loaded.triggers[0].effects[0]
    assert MODERN_EFFECT_LAYOUT.get(loaded_effect.properties, 'num_selected') == -1
    assert loaded_effect.selected_units == []


def test_selected_unit_count_follows_the_list() -> None:
    trigger = make_trigger()
    trigger.effects[0].selected_units = [5, 6, 7]
    system = TriggerSystem(triggers=[trigger], order=[0])
    _, loaded = _round_trip(system, 1.6, 1.6)
    effect = loaded.triggers[0].effects[0]
    assert MODERN_EFFECT_LAYOUT.get(effect.properties, 'num_selected') == 3
    assert effect.selected_units == [5, 6, 7]


def test_negative_trigger_count_is_invalid() -> None:
    raw = struct.pack('<dbi', 1.6, 0, -1)
    with pytest.raises(InvalidScenarioError):
        read_trigger_system(io.BytesIO(raw))
