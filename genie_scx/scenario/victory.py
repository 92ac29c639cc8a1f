"""
Victory conditions section.

Layout (victory version is the bundle's `victory` axis):
- f32 victory version
- Global victory:
  - u32 conquest, ruins, relics, discoveries, explored_percent, gold
  - u32 all_custom_conditions_required
  - u32 mode, score, time_limit (victory >= 2.0)
- 16 x per-player custom conditions:
  - u32 count
  - count x entry:
    - i32 condition (VictoryCondition)
    - i32 object_type (unit type id)
    - i32 player
    - 4 x f32 area (x0, y0, x1, y1)
    - i32 number, i32 count
    - i32 source_object, i32 target_object
    - i8 group (victory >= 2.0)
"""

from typing import List, Tuple

from ..constants import MAX_PLAYERS, VICTORY_VERSION_EXTENDED
from ..utils.binary import (
    Buffer, read_i8, read_i32, read_struct, read_u32, read_version_f32,
    write_f32, write_i8, write_i32, write_u32,
)
from ..versions import VictoryCondition
from .data_types import GlobalVictory, VictoryEntry

GLOBAL_VICTORY_FORMAT = '<7I'
EXTENDED_VICTORY_FORMAT = '<3I'


def _read_entry(stream: Buffer, victory_version: float) -> VictoryEntry:
    condition = VictoryCondition.from_int(read_i32(stream))
    object_type, player = read_struct(stream, '<ii')
    area = read_struct(stream, '<4f')
    number, count, source_object, target_object = read_struct(stream, '<4i')
    group = read_i8(stream) if victory_version >= VICTORY_VERSION_EXTENDED else 0
    return VictoryEntry(
        condition=condition,
        object_type=object_type,
        player=player,
        area=area,
        number=number,
        count=count,
        source_object=source_object,
        target_object=target_object,
        group=group,
    )


def _write_entry(buffer: Buffer, entry: VictoryEntry, victory_version: float):
    write_i32(buffer, entry.condition.to_int())
    write_i32(buffer, entry.object_type)
    write_i32(buffer, entry.player)
    for coordinate in entry.area:
        write_f32(buffer, coordinate)
    write_i32(buffer, entry.number)
    write_i32(buffer, entry.count)
    write_i32(buffer, entry.source_object)
    write_i32(buffer, entry.target_object)
    if victory_version >= VICTORY_VERSION_EXTENDED:
        write_i8(buffer, entry.group)


def read_victory(stream: Buffer) -> Tuple[float, GlobalVictory, List[List[VictoryEntry]]]:
    """
    Read the victory section.

    Returns:
        Tuple of (victory version, global settings, per-player entries)
    """
    victory_version = read_version_f32(stream)

    global_victory = GlobalVictory(*read_struct(stream, GLOBAL_VICTORY_FORMAT))
    if victory_version >= VICTORY_VERSION_EXTENDED:
        global_victory.mode, global_victory.score, global_victory.time_limit = \
            read_struct(stream, EXTENDED_VICTORY_FORMAT)

    player_entries = []
    for _ in range(MAX_PLAYERS):
        count = read_u32(stream)
        player_entries.append([_read_entry(stream, victory_version) for _ in range(count)])

    return victory_version, global_victory, player_entries


def write_victory(buffer: Buffer, global_victory: GlobalVictory,
                  player_entries: List[List[VictoryEntry]], victory_version: float):
    assert len(player_entries) == MAX_PLAYERS

    write_f32(buffer, victory_version)
    for value in (global_victory.conquest, global_victory.ruins, global_victory.relics,
                  global_victory.discoveries, global_victory.explored_percent,
                  global_victory.gold, global_victory.all_custom_conditions_required):
        write_u32(buffer, value)
    if victory_version >= VICTORY_VERSION_EXTENDED:
        write_u32(buffer, global_victory.mode)
        write_u32(buffer, global_victory.score)
        write_u32(buffer, global_victory.time_limit)

    for entries in player_entries:
        write_u32(buffer, len(entries))
        for entry in entries:
            _write_entry(buffer, entry, victory_version)
