"""Shared builders for the scenario tests."""

import struct
from typing import Dict, Optional

import pytest

from genie_scx.codecs import Bitmap
from genie_scx.scenario import (
    PlayerBaseProperties, PlayerSetup, Scenario, ScenarioObject, Trigger,
    TriggerCondition, TriggerEffect, TriggerSystem, VictoryEntry,
)
from genie_scx.scenario.triggers import MODERN_CONDITION_LAYOUT, MODERN_EFFECT_LAYOUT
from genie_scx.utils import close_logging, init_logging
from genie_scx.versions import (
    DiplomaticStance, DLCPackage, StartingAge, VersionBundle, VictoryCondition,
)


@pytest.fixture(autouse=True)
def fresh_logging():
    """Start every test with console-only logging and empty warning/error counts."""
    close_logging()
    init_logging()
    yield
    close_logging()


def make_trigger(condition_unit: int = 1001, effect_unit: int = 1010) -> Trigger:
    """A trigger with one modern-layout condition and one effect with two selected units."""
    condition = TriggerCondition(condition_type=1, properties=MODERN_CONDITION_LAYOUT.blank())
    MODERN_CONDITION_LAYOUT.set(condition.properties, 'unit_type', condition_unit)
    MODERN_CONDITION_LAYOUT.set(condition.properties, 'amount', 5)

    effect = TriggerEffect(effect_type=11, properties=MODERN_EFFECT_LAYOUT.blank(),
                           text="Reinforcements", selected_units=[0, 1])
    MODERN_EFFECT_LAYOUT.set(effect.properties, 'unit_type', effect_unit)
    MODERN_EFFECT_LAYOUT.set(effect.properties, 'num_selected', 2)

    return Trigger(
        description="Spawn reinforcements",
        name="Reinforce",
        effects=[effect],
        effect_order=[0],
        conditions=[condition],
        condition_order=[0],
    )


def make_scenario(version: Optional[VersionBundle] = None) -> Scenario:
    """
    A small scenario touching every section.

    Contains African Kingdoms content (unit 1001, 1007 and 1010, terrain 41)
    next to base game content (units 4 and 59, terrain 0).
    """
    version = version or VersionBundle.hd_edition()
    scenario = Scenario.new(version, map_width=4, map_height=3)

    scenario.header.description = "Test scenario"
    scenario.header.timestamp = 1234567
    if scenario.header.dlc_options is not None:
        scenario.header.dlc_options.dependencies = [
            DLCPackage.AGE_OF_KINGS, DLCPackage.AGE_OF_CONQUERORS, DLCPackage.AFRICAN_KINGDOMS,
        ]

    scenario.next_object_id = 3
    scenario.player_names[0] = "Alice"
    scenario.player_names[1] = "Bob"
    scenario.player_properties[0] = PlayerBaseProperties(active=1, human=1, civilization=5, posture=4)
    scenario.messages.instructions = "Destroy the castle"
    scenario.messages.scout = "Scout around"
    scenario.cinematics.background = "intro.bmp"
    scenario.bitmap = Bitmap.blank(3, 2)

    scenario.player_setups[0] = PlayerSetup(gold=100, wood=200, food=300, stone=400,
                                            starting_age=StartingAge.FEUDAL_AGE)
    scenario.victory_entries[1].append(
        VictoryEntry(condition=VictoryCondition.DESTROY, object_type=1007, player=2))
    scenario.diplomacy[0][1] = DiplomaticStance.NEUTRAL
    scenario.allied_victory[0] = True

    scenario.camera = (10, 20)
    scenario.ai_map_type = 9
    scenario.map.tile_mut(1, 1).terrain = 41
    scenario.map.tile_mut(2, 1).elevation = 2

    scenario.player_objects[0] = [ScenarioObject(position=(0.5, 0.5, 0.0), id=2, unit_type=59)]
    scenario.player_objects[1] = [
        ScenarioObject(position=(1.5, 2.5, 0.0), id=0, unit_type=1001),
        ScenarioObject(position=(3.0, 1.0, 0.0), id=1, unit_type=4, angle=0.5),
    ]

    scenario.triggers = TriggerSystem(triggers=[make_trigger()], order=[0])
    return scenario


@pytest.fixture
def hd_scenario() -> Scenario:
    return make_scenario(VersionBundle.hd_edition())


@pytest.fixture
def aoc_scenario() -> Scenario:
    return make_scenario(VersionBundle.aoc())


# Minimal PE file with string table resources

RSRC_RVA = 0x1000
RSRC_RAW_POINTER = 0x200
SECTION_ALIGNMENT = 0x1000
HIGH_BIT = 0x80000000


def _resource_directory(entry_count: int) -> bytes:
    return struct.pack('<IIHHHH', 0, 0, 0, 0, 0, entry_count)


def build_string_dll(strings: Dict[int, str]) -> bytes:
    """Build a PE32 file whose only section holds string tables for `strings`."""
    blocks: Dict[int, Dict[int, str]] = {}
    for string_id, text in strings.items():
        blocks.setdefault(string_id // 16 + 1, {})[string_id % 16] = text
    block_ids = sorted(blocks)
    count = len(block_ids)

    # Offsets inside the resource section
    type_dir = 24
    language_dirs = type_dir + 16 + 8 * count
    data_entries = language_dirs + 24 * count
    payload_start = data_entries + 16 * count

    payloads = []
    for block_id in block_ids:
        payload = b""
        for i in range(16):
            encoded = blocks[block_id].get(i, "").encode('utf-16-le')
            payload += struct.pack('<H', len(encoded) // 2) + encoded
        payloads.append(payload)

    rsrc = _resource_directory(1) + struct.pack('<II', 6, HIGH_BIT | type_dir)
    rsrc += _resource_directory(count)
    for i, block_id in enumerate(block_ids):
        rsrc += struct.pack('<II', block_id, HIGH_BIT | (language_dirs + 24 * i))
    for i in range(count):
        rsrc += _resource_directory(1) + struct.pack('<II', 0x409, data_entries + 16 * i)
    offset = payload_start
    for payload in payloads:
        rsrc += struct.pack('<IIII', RSRC_RVA + offset, len(payload), 0, 0)
        offset += len(payload)
    rsrc += b"".join(payloads)

    headers = bytearray(RSRC_RAW_POINTER)
    headers[0:2] = b'MZ'
    struct.pack_into('<I', headers, 0x3C, 0x40)
    headers[0x40:0x44] = b'PE\x00\x00'
    struct.pack_into('<HHIIIHH', headers, 0x44, 0x14C, 1, 0, 0, 0, 224, 0x2102)
    optional = 0x58
    struct.pack_into('<H', headers, optional, 0x10B)
    struct.pack_into('<III', headers, optional + 28, 0x10000000, SECTION_ALIGNMENT, RSRC_RAW_POINTER)
    image_size = RSRC_RVA + (len(rsrc) + SECTION_ALIGNMENT - 1) // SECTION_ALIGNMENT * SECTION_ALIGNMENT
    struct.pack_into('<II', headers, optional + 56, image_size, RSRC_RAW_POINTER)
    struct.pack_into('<H', headers, optional + 68, 2)
    struct.pack_into('<I', headers, optional + 92, 16)
    struct.pack_into('<II', headers, optional + 96 + 2 * 8, RSRC_RVA, len(rsrc))
    struct.pack_into('<8sIIII', headers, optional + 224, b'.rsrc', len(rsrc), RSRC_RVA,
                     len(rsrc), RSRC_RAW_POINTER)
    # Initialized data, readable
    struct.pack_into('<I', headers, optional + 224 + 36, 0x40000040)

    return bytes(headers) + rsrc
