"""
Scenario terrain map.

File format:
- u32 width
- u32 height
- height rows of width tiles, row-major:
  - i8 terrain
  - i8 elevation
  - i8 zone

Tiles are held in a numpy structured array of shape (height, width) so bulk
operations like terrain remapping can work on the whole grid at once.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from ..constants import TILE_SIZE
from ..utils.binary import Buffer, read_exact, read_struct, write_u32

TILE_DTYPE = np.dtype([('terrain', np.int8), ('elevation', np.int8), ('zone', np.int8)])


@dataclass
class Tile:
    """A map tile value."""
    terrain: int
    elevation: int
    zone: int


class TileRef:
    """
    A writable reference to one tile of a map.

    Reads and writes go straight to the map's grid.
    """

    __slots__ = ('_tiles', '_x', '_y')

    def __init__(self, tiles: np.ndarray, x: int, y: int):
        self._tiles = tiles
        self._x = x
        self._y = y

    @property
    def terrain(self) -> int:
        return int(self._tiles['terrain'][self._y, self._x])

    @terrain.setter
    def terrain(self, value: int):
        self._tiles['terrain'][self._y, self._x] = value

    @property
    def elevation(self) -> int:
        return int(self._tiles['elevation'][self._y, self._x])

    @elevation.setter
    def elevation(self, value: int):
        self._tiles['elevation'][self._y, self._x] = value

    @property
    def zone(self) -> int:
        return int(self._tiles['zone'][self._y, self._x])

    @zone.setter
    def zone(self, value: int):
        self._tiles['zone'][self._y, self._x] = value

    def value(self) -> Tile:
        return Tile(self.terrain, self.elevation, self.zone)

    def __repr__(self) -> str:
        return f"TileRef(x={self._x}, y={self._y}, {self.value()})"


class Map:
    """
    Describes the terrain in a map.

    Usage:
        m = Map.from_stream(stream)
        tile = m.tile(10, 4)           # Tile or None when out of bounds
        ref = m.tile_mut(10, 4)
        ref.terrain = 2
        for tile in m.tiles():
            ...
    """

    def __init__(self, width: int, height: int, tiles: Optional[np.ndarray] = None):
        """
        Args:
            width: Width of the map in tiles
            height: Height of the map in tiles
            tiles: (height, width) array of TILE_DTYPE, zero filled if omitted
        """
        self.width = width
        self.height = height
        if tiles is None:
            tiles = np.zeros((height, width), dtype=TILE_DTYPE)
        self._tiles = tiles

    @classmethod
    def filled(cls, width: int, height: int, terrain: int = 0, elevation: int = 0) -> 'Map':
        """Create a map with every tile set to the same terrain and elevation."""
        m = cls(width, height)
        m._tiles['terrain'] = terrain
        m._tiles['elevation'] = elevation
        return m

    @classmethod
    def from_stream(cls, stream: Buffer) -> 'Map':
        width, height = read_struct(stream, '<II')
        data = read_exact(stream, width * height * TILE_SIZE)
        tiles = np.frombuffer(data, dtype=TILE_DTYPE).reshape(height, width).copy()
        return cls(width, height, tiles)

    def write_to(self, buffer: Buffer):
        assert self._tiles.shape == (self.height, self.width), \
            f"tile grid {self._tiles.shape} does not match {self.height}x{self.width}"
        assert self._tiles.dtype == TILE_DTYPE

        write_u32(buffer, self.width)
        write_u32(buffer, self.height)
        buffer.write(self._tiles.tobytes())

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Optional[Tile]:
        """
        Get the tile at the given coordinates.

        If the coordinates are out of bounds, returns None.
        """
        if not self._in_bounds(x, y):
            return None
        terrain, elevation, zone = self._tiles[y, x].tolist()
        return Tile(terrain, elevation, zone)

    def tile_mut(self, x: int, y: int) -> Optional[TileRef]:
        """
        Get a writable reference to the tile at the given coordinates.

        If the coordinates are out of bounds, returns None.
        """
        if not self._in_bounds(x, y):
            return None
        return TileRef(self._tiles, x, y)

    def tiles(self) -> Iterator[Tile]:
        """Iterate over all the tiles, row by row."""
        for row in self._tiles:
            for terrain, elevation, zone in row.tolist():
                yield Tile(terrain, elevation, zone)

    def tiles_mut(self) -> Iterator[TileRef]:
        """
        Iterate over writable references to all the tiles, row by row.

        Handy to replace terrains throughout the entire map.
        """
        for y in range(self.height):
            for x in range(self.width):
                yield TileRef(self._tiles, x, y)

    @property
    def terrain(self) -> np.ndarray:
        """Writable (height, width) view of the terrain ids."""
        return self._tiles['terrain']

    @property
    def elevation(self) -> np.ndarray:
        """Writable (height, width) view of the elevations."""
        return self._tiles['elevation']

    def __eq__(self, other) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and np.array_equal(self._tiles, other._tiles))

    def __repr__(self) -> str:
        return f"Map({self.width}x{self.height})"
