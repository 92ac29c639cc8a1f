"""
Scenario Codecs Package

Leaf codecs shared by the scenario sections:

- strings: Windows-1252 length-prefixed and fixed-size strings
- bitmap: embedded palette bitmap (Bitmap, BitmapInfo, BitmapColor)
- tile_map: terrain grid (Map, Tile, TileRef)
"""

from .strings import (
    read_str,
    read_i16_str,
    read_i32_str,
    read_u32_str,
    read_fixed_str,
    write_str,
    write_i32_str,
    write_opt_str,
    write_opt_i32_str,
    write_fixed_str,
)
from .bitmap import Bitmap, BitmapInfo, BitmapColor
from .tile_map import Map, Tile, TileRef, TILE_DTYPE

__all__ = [
    # Strings
    'read_str',
    'read_i16_str',
    'read_i32_str',
    'read_u32_str',
    'read_fixed_str',
    'write_str',
    'write_i32_str',
    'write_opt_str',
    'write_opt_i32_str',
    'write_fixed_str',
    # Bitmap
    'Bitmap',
    'BitmapInfo',
    'BitmapColor',
    # Map
    'Map',
    'Tile',
    'TileRef',
    'TILE_DTYPE',
]
