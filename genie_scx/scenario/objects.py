"""
Placed objects section.

Layout:
- u32 player count (GAIA + 8 players)
- per player:
  - u32 object count
  - per object:
    - 3 x f32 position (x, y, z)
    - i32 id
    - u16 unit type
    - u8 state
    - f32 angle
    - u16 animation frame (data > 1.12)
    - i32 garrisoned in (data >= 1.13)
"""

from typing import List

from ..constants import DATA_VERSION_GARRISON, DATA_VERSION_OBJECT_FRAME
from ..utils.binary import (
    Buffer, read_f32, read_i32, read_struct, read_u8, read_u16, read_u32,
    write_f32, write_i32, write_u8, write_u16, write_u32,
)
from .data_types import ScenarioObject


def read_object(stream: Buffer, data_version: float) -> ScenarioObject:
    position = read_struct(stream, '<3f')
    obj = ScenarioObject(
        position=position,
        id=read_i32(stream),
        unit_type=read_u16(stream),
        state=read_u8(stream),
        angle=read_f32(stream),
    )
    if data_version > DATA_VERSION_OBJECT_FRAME:
        obj.frame = read_u16(stream)
    if data_version >= DATA_VERSION_GARRISON:
        obj.garrisoned_in = read_i32(stream)
    return obj


def write_object(buffer: Buffer, obj: ScenarioObject, data_version: float):
    for coordinate in obj.position:
        write_f32(buffer, coordinate)
    write_i32(buffer, obj.id)
    write_u16(buffer, obj.unit_type)
    write_u8(buffer, obj.state)
    write_f32(buffer, obj.angle)
    if data_version > DATA_VERSION_OBJECT_FRAME:
        write_u16(buffer, obj.frame)
    if data_version >= DATA_VERSION_GARRISON:
        write_i32(buffer, obj.garrisoned_in)


def read_player_objects(stream: Buffer, data_version: float) -> List[List[ScenarioObject]]:
    """Read the object lists of GAIA and all players."""
    player_count = read_u32(stream)
    player_objects = []
    for _ in range(player_count):
        count = read_u32(stream)
        player_objects.append([read_object(stream, data_version) for _ in range(count)])
    return player_objects


def write_player_objects(buffer: Buffer, player_objects: List[List[ScenarioObject]],
                         data_version: float):
    write_u32(buffer, len(player_objects))
    for objects in player_objects:
        write_u32(buffer, len(objects))
        for obj in objects:
            write_object(buffer, obj, data_version)
