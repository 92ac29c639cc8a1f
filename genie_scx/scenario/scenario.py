"""
Scenario document.

File layout:
- 4-byte ASCII format version (b"1.21")
- Header block (see header.py)
- Raw deflate compressed body:
  - i32 next_object_id
  - f32 data version
  - Player names and string ids (see players.py)
  - Player base properties
  - Messages: i32 string ids (data >= 1.16), then i16-prefixed
    instructions, hints, victory, loss, history, scout (data >= 1.22)
  - Cinematics: i16-prefixed pregame, victory, loss, background
  - u32 picture version + bitmap (see codecs/bitmap.py)
  - i32 -99
  - Player setups
  - i32 -99
  - Victory conditions (see victory.py)
  - i32 -99
  - Diplomacy
  - i32 -99
  - i32 camera x, i32 camera y, i32 AI map type (data >= 1.21)
  - Map (see codecs/tile_map.py)
  - Player objects (see objects.py)
  - Trigger system (data >= 1.14, see triggers.py)

Writing is not atomic: a failed write can leave a partial file behind.
"""

import io
import zlib
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..constants import (
    DATA_VERSION_AI_MAP_TYPE,
    DATA_VERSION_SCOUT_MESSAGE,
    DATA_VERSION_STRING_IDS,
    DATA_VERSION_TRIGGERS,
    DEFAULT_COMPRESSION_LEVEL,
    KNOWN_FORMATS,
    MAX_PLAYERS,
    OBJECT_PLAYER_COUNT,
    SECTION_SEPARATOR,
)
from ..codecs import Bitmap, Map, read_i16_str, write_opt_str
from ..errors import InvalidScenarioError
from ..utils import logDebug
from ..utils.binary import (
    Buffer, read_exact, read_i32, read_u32, read_version_f32, write_f32, write_i32, write_u32,
)
from ..versions import DiplomaticStance, VersionBundle
from .data_types import (
    Cinematics, DLCOptions, GlobalVictory, Messages, PlayerBaseProperties, PlayerSetup,
    ScenarioObject, SCXHeader, TriggerSystem, VictoryEntry,
)
from .header import read_header, write_header
from .objects import read_player_objects, write_player_objects
from .players import (
    default_diplomacy, read_base_properties, read_diplomacy, read_player_names,
    read_player_setups, write_base_properties, write_diplomacy, write_player_names,
    write_player_setups,
)
from .triggers import read_trigger_system, write_trigger_system
from .victory import read_victory, write_victory

MESSAGE_FIELDS = ('instructions', 'hints', 'victory', 'loss', 'history', 'scout')
CINEMATIC_FIELDS = ('pregame', 'victory', 'loss', 'background')


def _message_fields(data_version: float) -> Tuple[str, ...]:
    if data_version >= DATA_VERSION_SCOUT_MESSAGE:
        return MESSAGE_FIELDS
    return MESSAGE_FIELDS[:-1]


def _read_separator(stream: Buffer, section: str):
    marker = read_i32(stream)
    if marker != SECTION_SEPARATOR:
        raise InvalidScenarioError(
            f"Expected section separator {SECTION_SEPARATOR} before {section}, got {marker}")


class Scenario:
    """
    A parsed scenario file.

    Every section is decoded with the version axis of `self.version` that
    governs it, and written with the axis of the target bundle.

    Usage:
        scenario = Scenario.from_file(Path("map.scx"))
        scenario.map.tile_mut(0, 0).terrain = 2
        scenario.write_to_file(Path("out.scx"), VersionBundle.aoc())
    """

    def __init__(self, version: VersionBundle, map_width: int = 1, map_height: int = 1):
        """
        Create an empty scenario for a version.

        Args:
            version: Versions the document is created for
            map_width: Width of the blank map in tiles
            map_height: Height of the blank map in tiles
        """
        self.version = version
        self.header = SCXHeader()
        if version.has_dlc_options():
            self.header.dlc_options = DLCOptions()

        self.next_object_id = 0
        self.player_names: List[Optional[str]] = [None] * MAX_PLAYERS
        self.player_string_ids: List[int] = [-1] * MAX_PLAYERS
        self.player_properties = [PlayerBaseProperties() for _ in range(MAX_PLAYERS)]
        self.messages = Messages()
        self.cinematics = Cinematics()
        self.bitmap: Optional[Bitmap] = None

        self.player_setups = [PlayerSetup() for _ in range(MAX_PLAYERS)]
        self.global_victory = GlobalVictory()
        self.victory_entries: List[List[VictoryEntry]] = [[] for _ in range(MAX_PLAYERS)]
        self.diplomacy: List[List[DiplomaticStance]] = default_diplomacy()
        self.allied_victory: List[bool] = [False] * MAX_PLAYERS

        self.camera: Tuple[int, int] = (0, 0)
        self.ai_map_type = 0
        self.map = Map(map_width, map_height)
        self.player_objects: List[List[ScenarioObject]] = [[] for _ in range(OBJECT_PLAYER_COUNT)]
        self.triggers: Optional[TriggerSystem] = TriggerSystem()

    @classmethod
    def new(cls, version: VersionBundle, map_width: int = 1, map_height: int = 1) -> 'Scenario':
        return cls(version, map_width, map_height)

    # Reading

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'Scenario':
        with open(path, 'rb') as f:
            return cls.from_stream(f)

    @classmethod
    def from_stream(cls, stream: Buffer) -> 'Scenario':
        """
        Read a scenario.

        Raises:
            InvalidScenarioError: for malformed files
            EOFError: if the file is truncated
        """
        format_version = read_exact(stream, 4)
        if format_version not in KNOWN_FORMATS:
            raise InvalidScenarioError(f"Unknown scenario format {format_version!r}")
        header, header_version, dlc_version = read_header(stream)

        try:
            body = zlib.decompress(stream.read(), -zlib.MAX_WBITS)
        except zlib.error as e:
            raise InvalidScenarioError(f"Could not decompress scenario body: {e}") from e

        body_stream = io.BytesIO(body)
        scenario = cls(VersionBundle.aoc())
        scenario.header = header
        versions = scenario._read_body(body_stream)

        scenario.version = VersionBundle(
            format=format_version,
            header=header_version,
            dlc_options=dlc_version,
            data=versions['data'],
            picture=versions['picture'],
            victory=versions['victory'],
            triggers=versions['triggers'],
        )

        trailing = len(body) - body_stream.tell()
        if trailing:
            logDebug(f"Ignoring {trailing} trailing body bytes")
        logDebug(f"Read scenario: {scenario.version}")
        return scenario

    def _read_body(self, stream: Buffer) -> dict:
        """Read the decompressed body, returning the section versions found."""
        self.next_object_id = read_i32(stream)
        data_version = read_version_f32(stream)

        self.player_names, self.player_string_ids = read_player_names(stream, data_version)
        self.player_properties = read_base_properties(stream)

        fields = _message_fields(data_version)
        self.messages = Messages()
        if data_version >= DATA_VERSION_STRING_IDS:
            for name in fields:
                setattr(self.messages, f"{name}_id", read_i32(stream))
        for name in fields:
            setattr(self.messages, name, read_i16_str(stream))

        self.cinematics = Cinematics(*(read_i16_str(stream) for _ in CINEMATIC_FIELDS))

        picture_version = read_u32(stream)
        self.bitmap = Bitmap.from_stream(stream)

        _read_separator(stream, "player setups")
        self.player_setups = read_player_setups(stream, data_version)

        _read_separator(stream, "victory conditions")
        victory_version, self.global_victory, self.victory_entries = read_victory(stream)

        _read_separator(stream, "diplomacy")
        self.diplomacy, self.allied_victory = read_diplomacy(stream)

        _read_separator(stream, "map")
        self.camera = (0, 0)
        self.ai_map_type = 0
        if data_version >= DATA_VERSION_AI_MAP_TYPE:
            self.camera = (read_i32(stream), read_i32(stream))
            self.ai_map_type = read_i32(stream)
        self.map = Map.from_stream(stream)
        logDebug(f"Read {self.map.width}x{self.map.height} map")

        self.player_objects = read_player_objects(stream, data_version)

        trigger_version = 0.0
        self.triggers = None
        if data_version >= DATA_VERSION_TRIGGERS:
            trigger_version, self.triggers = read_trigger_system(stream)
            logDebug(f"Read {len(self.triggers.triggers)} triggers (version {trigger_version})")

        return {
            'data': data_version,
            'picture': picture_version,
            'victory': victory_version,
            'triggers': trigger_version,
        }

    # Writing

    def write_to(self, buffer: Buffer, compression_level: int = DEFAULT_COMPRESSION_LEVEL):
        """Write the scenario with its own versions."""
        self.write_to_version(buffer, self.version, compression_level)

    def write_to_version(self, buffer: Buffer, version: VersionBundle,
                         compression_level: int = DEFAULT_COMPRESSION_LEVEL):
        """
        Write the scenario for a target version.

        Fields the target version does not store are dropped; fields it adds
        are written with their defaults.

        Args:
            buffer: Output stream
            version: Target versions
            compression_level: zlib level for the body
        """
        buffer.write(version.format)
        write_header(buffer, self.header, version)

        body = io.BytesIO()
        self._write_body(body, version)

        compressor = zlib.compressobj(compression_level, zlib.DEFLATED, -zlib.MAX_WBITS)
        buffer.write(compressor.compress(body.getvalue()))
        buffer.write(compressor.flush())

    def write_to_file(self, path: Union[str, Path], version: Optional[VersionBundle] = None):
        """
        Write the scenario to a file, with its own versions unless given.

        The file is written in place, not atomically.
        """
        with open(path, 'wb') as f:
            self.write_to_version(f, version or self.version)

    def _write_body(self, buffer: Buffer, version: VersionBundle):
        data_version = version.data

        write_i32(buffer, self.next_object_id)
        write_f32(buffer, data_version)

        write_player_names(buffer, self.player_names, self.player_string_ids, data_version)
        write_base_properties(buffer, self.player_properties)

        fields = _message_fields(data_version)
        if data_version >= DATA_VERSION_STRING_IDS:
            for name in fields:
                write_i32(buffer, getattr(self.messages, f"{name}_id"))
        for name in fields:
            write_opt_str(buffer, getattr(self.messages, name))

        for name in CINEMATIC_FIELDS:
            write_opt_str(buffer, getattr(self.cinematics, name))

        write_u32(buffer, version.picture)
        if self.bitmap is None:
            Bitmap.write_empty(buffer)
        else:
            self.bitmap.write_to(buffer)

        write_i32(buffer, SECTION_SEPARATOR)
        write_player_setups(buffer, self.player_setups, data_version)

        write_i32(buffer, SECTION_SEPARATOR)
        write_victory(buffer, self.global_victory, self.victory_entries, version.victory)

        write_i32(buffer, SECTION_SEPARATOR)
        write_diplomacy(buffer, self.diplomacy, self.allied_victory)

        write_i32(buffer, SECTION_SEPARATOR)
        if data_version >= DATA_VERSION_AI_MAP_TYPE:
            write_i32(buffer, self.camera[0])
            write_i32(buffer, self.camera[1])
            write_i32(buffer, self.ai_map_type)
        self.map.write_to(buffer)

        write_player_objects(buffer, self.player_objects, data_version)

        if data_version >= DATA_VERSION_TRIGGERS:
            triggers = self.triggers if self.triggers is not None else TriggerSystem()
            write_trigger_system(buffer, triggers, self.version.triggers, version.triggers)

    # Queries

    def objects(self):
        """Iterate (player, object) over all placed objects."""
        for player, objects in enumerate(self.player_objects):
            for obj in objects:
                yield player, obj

    def __repr__(self) -> str:
        return f"Scenario({self.version}, map={self.map.width}x{self.map.height})"
