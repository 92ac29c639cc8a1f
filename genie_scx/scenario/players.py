"""
Player tables of the compressed scenario body.

All tables have one entry per player slot (16 slots, unused slots included).

Player names:
- 16 x 256-byte NUL padded name
- 16 x i32 string table id (data >= 1.16)

Base properties:
- 16 x (u32 active, u32 human, u32 civilization, u32 posture)

Player setups:
- 16 x (i32 gold, i32 wood, i32 food, i32 stone, i32 starting age)
  The starting age numbering depends on the data version.

Diplomacy:
- 16 x 16 i32 diplomatic stance
- 16 x u32 allied victory flag
"""

from typing import List, Optional, Tuple

from ..constants import DATA_VERSION_STRING_IDS, MAX_PLAYERS, PLAYER_NAME_LENGTH
from ..codecs.strings import read_fixed_str, write_fixed_str
from ..utils.binary import Buffer, read_i32, read_struct, read_u32, write_i32, write_u32
from ..versions import DiplomaticStance, StartingAge
from .data_types import PlayerBaseProperties, PlayerSetup

PLAYER_PROPERTIES_FORMAT = '<4I'
PLAYER_RESOURCES_FORMAT = '<4i'


def read_player_names(stream: Buffer, data_version: float) -> Tuple[List[Optional[str]], List[int]]:
    """
    Read player names and their string table ids.

    Returns:
        Tuple of (names, string ids); string ids are -1 for versions without them
    """
    names = [read_fixed_str(stream, PLAYER_NAME_LENGTH) for _ in range(MAX_PLAYERS)]
    if data_version >= DATA_VERSION_STRING_IDS:
        string_ids = [read_i32(stream) for _ in range(MAX_PLAYERS)]
    else:
        string_ids = [-1] * MAX_PLAYERS
    return names, string_ids


def write_player_names(buffer: Buffer, names: List[Optional[str]], string_ids: List[int],
                       data_version: float):
    for name in names:
        write_fixed_str(buffer, name, PLAYER_NAME_LENGTH)
    if data_version >= DATA_VERSION_STRING_IDS:
        for string_id in string_ids:
            write_i32(buffer, string_id)


def read_base_properties(stream: Buffer) -> List[PlayerBaseProperties]:
    return [PlayerBaseProperties(*read_struct(stream, PLAYER_PROPERTIES_FORMAT))
            for _ in range(MAX_PLAYERS)]


def write_base_properties(buffer: Buffer, properties: List[PlayerBaseProperties]):
    for player in properties:
        write_u32(buffer, player.active)
        write_u32(buffer, player.human)
        write_u32(buffer, player.civilization)
        write_u32(buffer, player.posture)


def read_player_setups(stream: Buffer, data_version: float) -> List[PlayerSetup]:
    """Read starting resources and ages, decoding ages for the data version."""
    setups = []
    for _ in range(MAX_PLAYERS):
        gold, wood, food, stone = read_struct(stream, PLAYER_RESOURCES_FORMAT)
        starting_age = StartingAge.from_int(read_i32(stream), data_version)
        setups.append(PlayerSetup(gold, wood, food, stone, starting_age))
    return setups


def write_player_setups(buffer: Buffer, setups: List[PlayerSetup], data_version: float):
    for setup in setups:
        write_i32(buffer, setup.gold)
        write_i32(buffer, setup.wood)
        write_i32(buffer, setup.food)
        write_i32(buffer, setup.stone)
        write_i32(buffer, setup.starting_age.to_int(data_version))


def read_diplomacy(stream: Buffer) -> Tuple[List[List[DiplomaticStance]], List[bool]]:
    """
    Read the diplomacy matrix and allied victory flags.

    Returns:
        Tuple of (stances[player][other], allied_victory[player])
    """
    stances = [[DiplomaticStance.from_int(read_i32(stream)) for _ in range(MAX_PLAYERS)]
               for _ in range(MAX_PLAYERS)]
    allied_victory = [read_u32(stream) != 0 for _ in range(MAX_PLAYERS)]
    return stances, allied_victory


def write_diplomacy(buffer: Buffer, stances: List[List[DiplomaticStance]], allied_victory: List[bool]):
    assert len(stances) == MAX_PLAYERS and all(len(row) == MAX_PLAYERS for row in stances)
    for row in stances:
        for stance in row:
            write_i32(buffer, stance.to_int())
    for flag in allied_victory:
        write_u32(buffer, 1 if flag else 0)


def default_diplomacy() -> List[List[DiplomaticStance]]:
    """Everyone is an enemy of everyone else and allied with themselves."""
    return [[DiplomaticStance.ALLY if player == other else DiplomaticStance.ENEMY
             for other in range(MAX_PLAYERS)]
            for player in range(MAX_PLAYERS)]
