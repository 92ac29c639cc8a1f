"""Tests for whole scenario files."""

import io
import struct
import zlib

import numpy as np
import pytest

from conftest import make_scenario
from genie_scx.codecs import Tile
from genie_scx.errors import InvalidScenarioError
from genie_scx.scenario import PlayerSetup, Scenario
from genie_scx.versions import StartingAge, VersionBundle

SEPARATOR = struct.pack('<i', -99)


def _write(scenario: Scenario, version: VersionBundle = None) -> bytes:
    buffer = io.BytesIO()
    if version is None:
        scenario.write_to(buffer)
    else:
        scenario.write_to_version(buffer, version)
    return buffer.getvalue()


def _read(data: bytes) -> Scenario:
    return Scenario.from_stream(io.BytesIO(data))


def _split(data: bytes):
    """Split a scenario file into (format + header bytes, decompressed body)."""
    header_size = struct.unpack_from('<I', data, 4)[0]
    head = data[:8 + header_size]
    return head, zlib.decompress(data[8 + header_size:], -15)


def _join(head: bytes, body: bytes) -> bytes:
    compressor = zlib.compressobj(9, zlib.DEFLATED, -15)
    return head + compressor.compress(body) + compressor.flush()


@pytest.mark.parametrize("version", [VersionBundle.aoc(), VersionBundle.hd_edition()])
def test_scenario_reads_back(version) -> None:
    scenario = make_scenario(version)
    loaded = _read(_write(scenario))

    assert loaded.version == version
    assert loaded.header == scenario.header
    assert loaded.next_object_id == 3
    assert loaded.player_names == scenario.player_names
    assert loaded.player_string_ids == [-1] * 16
    assert loaded.player_properties == scenario.player_properties
    assert loaded.messages == scenario.messages
    assert loaded.cinematics == scenario.cinematics
    assert loaded.bitmap == scenario.bitmap
    assert loaded.player_setups == scenario.player_setups
    assert loaded.global_victory == scenario.global_victory
    assert loaded.victory_entries == scenario.victory_entries
    assert loaded.diplomacy == scenario.diplomacy
    assert loaded.allied_victory == scenario.allied_victory
    assert loaded.camera == (10, 20)
    assert loaded.ai_map_type == 9
    assert loaded.map == scenario.map
    assert loaded.player_objects == scenario.player_objects
    assert loaded.triggers == scenario.triggers


def test_written_file_layout() -> None:
    data = _write(Scenario.new(VersionBundle.aoc()))
    assert data[:4] == b"1.21"
    head, body = _split(data)
    assert struct.unpack_from('<I', head, 8)[0] == 2
    assert body.count(SEPARATOR) >= 4


def test_write_to_older_version_drops_hd_fields() -> None:
    scenario = make_scenario(VersionBundle.hd_edition())
    scenario.player_setups[2] = PlayerSetup(starting_age=StartingAge.NOMAD)

    loaded = _read(_write(scenario, VersionBundle.aoc()))
    assert loaded.version == VersionBundle.aoc()
    assert loaded.header.dlc_options is None
    assert loaded.player_setups[0].starting_age is StartingAge.FEUDAL_AGE
    # Nomad does not exist before HD Edition
    assert loaded.player_setups[2].starting_age is StartingAge.DARK_AGE
    assert loaded.map == scenario.map


def test_old_data_version_has_no_triggers() -> None:
    version = VersionBundle(b"1.18", 2, -1, 1.13, 1, 2.0, 1.6)
    scenario = make_scenario(version)
    loaded = _read(_write(scenario))

    assert loaded.version.data == 1.13
    assert loaded.triggers is None
    assert loaded.camera == (0, 0)
    assert loaded.messages.scout is None
    assert loaded.messages.instructions == "Destroy the castle"
    assert loaded.player_objects == scenario.player_objects


def test_new_scenario_has_blank_single_tile_map() -> None:
    scenario = Scenario.new(VersionBundle.hd_edition())
    assert scenario.map.tile(0, 0) == Tile(0, 0, 0)
    assert scenario.bitmap is None
    assert scenario.header.dlc_options is not None

    loaded = _read(_write(scenario))
    assert loaded.bitmap is None
    assert loaded.map.tile(0, 0) == Tile(0, 0, 0)
    assert loaded.triggers.triggers == []


def test_wrong_separator_is_invalid() -> None:
    head, body = _split(_write(Scenario.new(VersionBundle.aoc())))
    broken = body.replace(SEPARATOR, b"\x00\x00\x00\x00", 1)
    with pytest.raises(InvalidScenarioError):
        _read(_join(head, broken))


def test_unknown_format_is_invalid() -> None:
    data = b"9.99" + _write(Scenario.new(VersionBundle.aoc()))[4:]
    with pytest.raises(InvalidScenarioError):
        _read(data)


def test_corrupt_body_is_invalid() -> None:
    head, _ = _split(_write(Scenario.new(VersionBundle.aoc())))
    with pytest.raises(InvalidScenarioError):
        _read(head + b"not deflate data")


def test_truncated_body_raises_eof() -> None:
    head, body = _split(_write(make_scenario(VersionBundle.aoc())))
    with pytest.raises(EOFError):
        _read(_join(head, body[:len(body) // 2]))


def test_truncated_file_raises_eof() -> None:
    with pytest.raises(EOFError):
        _read(b"1.2")


def test_file_round_trip(tmp_path) -> None:
    path = tmp_path / "test.scx"
    scenario = make_scenario(VersionBundle.hd_edition())
    scenario.write_to_file(path)

    loaded = Scenario.from_file(path)
    assert loaded.version == VersionBundle.hd_edition()
    assert np.array_equal(loaded.map.terrain, scenario.map.terrain)

    loaded.write_to_file(path, VersionBundle.aoc())
    assert Scenario.from_file(path).version == VersionBundle.aoc()


def test_objects_iterates_all_players() -> None:
    scenario = make_scenario()
    assert [(player, obj.id) for player, obj in scenario.objects()] == [(0, 2), (1, 0), (1, 1)]


def test_player_name_filling_the_slot_reads_back() -> None:
    scenario = make_scenario(VersionBundle.aoc())
    scenario.player_names[2] = "N" * 256

    loaded = _read(_write(scenario))
    assert loaded.player_names[2] == "N" * 256
    assert loaded.player_names[3] is None
