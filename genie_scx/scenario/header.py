"""
Scenario file header.

Stored uncompressed after the 4-byte format version:
- u32 header_size (bytes that follow)
- u32 version
- u32 timestamp (version >= 2)
- u32 description length + Windows-1252 description
- u32 any_sp_victory
- u32 active_player_count
- DLC options (version >= 3):
  - i32 version (1000), or the data set for unversioned options
  - i32 game_data_set (versioned options only)
  - u32 dependency count
  - i32 DLC package id per dependency
"""

import io
from typing import Tuple

from ..constants import DLC_OPTIONS_HEADER_VERSION, DLC_OPTIONS_VERSIONED
from ..codecs.strings import read_u32_str, write_opt_i32_str
from ..utils import logDebug
from ..utils.binary import Buffer, read_exact, read_i32, read_u32, write_i32, write_u32
from ..versions import DataSet, DLCPackage, VersionBundle
from .data_types import DLCOptions, SCXHeader


def read_dlc_options(stream: Buffer) -> Tuple[int, DLCOptions]:
    """
    Read HD Edition DLC options.

    Returns:
        Tuple of (dlc options version, DLCOptions). Unversioned options
        report version 0.
    """
    version_or_data_set = read_i32(stream)
    if version_or_data_set >= DLC_OPTIONS_VERSIONED:
        version = version_or_data_set
        game_data_set = DataSet.from_int(read_i32(stream))
    else:
        version = 0
        game_data_set = DataSet.from_int(version_or_data_set)

    dependency_count = read_u32(stream)
    dependencies = [DLCPackage.from_int(read_i32(stream)) for _ in range(dependency_count)]

    return version, DLCOptions(game_data_set=game_data_set, dependencies=dependencies)


def write_dlc_options(buffer: Buffer, options: DLCOptions, version: int):
    if version >= DLC_OPTIONS_VERSIONED:
        write_i32(buffer, version)
    write_i32(buffer, options.game_data_set.to_int())
    write_u32(buffer, len(options.dependencies))
    for dlc in options.dependencies:
        write_i32(buffer, dlc.to_int())


def read_header(stream: Buffer) -> Tuple[SCXHeader, int, int]:
    """
    Read the uncompressed header block.

    Returns:
        Tuple of (SCXHeader, header version, dlc options version or -1 when absent)
    """
    header_size = read_u32(stream)
    block = io.BytesIO(read_exact(stream, header_size))

    header = SCXHeader()
    header_version = read_u32(block)
    if header_version >= 2:
        header.timestamp = read_u32(block)
    header.description = read_u32_str(block)
    header.any_sp_victory = read_u32(block) != 0
    header.active_player_count = read_u32(block)

    dlc_version = -1
    if header_version >= DLC_OPTIONS_HEADER_VERSION:
        dlc_version, header.dlc_options = read_dlc_options(block)

    trailing = header_size - block.tell()
    if trailing:
        logDebug(f"Ignoring {trailing} unknown header bytes")

    return header, header_version, dlc_version


def write_header(buffer: Buffer, header: SCXHeader, version: VersionBundle):
    """
    Write the header block for a target version.

    The block is assembled first so its size can be written in front of it.
    """
    block = io.BytesIO()
    write_u32(block, version.header)
    if version.header >= 2:
        write_u32(block, header.timestamp)
    write_opt_i32_str(block, header.description)
    write_u32(block, 1 if header.any_sp_victory else 0)
    write_u32(block, header.active_player_count)
    if version.has_dlc_options():
        write_dlc_options(block, header.dlc_options or DLCOptions(), version.dlc_options)

    data = block.getvalue()
    write_u32(buffer, len(data))
    buffer.write(data)
