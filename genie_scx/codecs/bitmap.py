"""
Embedded scenario bitmap.

Scenarios may embed an 8-bit palette image (the briefing picture):
- u32 own_memory
- u32 width
- u32 height
- u16 orientation
- If width and height are both nonzero:
  - BITMAPINFOHEADER (40 bytes, 11 fields)
  - 256 x RGBQUAD palette entries (r, g, b, reserved)
  - height rows of pixel indices, each padded to a multiple of 4 bytes

A zero width or height means there is no bitmap at all; `Bitmap.from_stream`
returns None and `Bitmap.write_empty` writes that form.
"""

import struct
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..constants import DIB_HEADER_SIZE, PALETTE_SIZE
from ..utils.binary import Buffer, align_up, read_exact, read_struct

BITMAP_HEADER_FORMAT = '<IIIH'
DIB_HEADER_FORMAT = '<IiiHHIIiiII'


@dataclass
class BitmapColor:
    """A palette colour: red, green, blue, reserved."""
    r: int
    g: int
    b: int
    reserved: int = 0

    @classmethod
    def from_stream(cls, stream: Buffer) -> 'BitmapColor':
        return cls(*read_struct(stream, '<4B'))

    def write_to(self, buffer: Buffer):
        buffer.write(struct.pack('<4B', self.r, self.g, self.b, self.reserved))


@dataclass
class BitmapInfo:
    """BITMAPINFOHEADER fields followed by the palette."""
    size: int = DIB_HEADER_SIZE
    width: int = 0
    height: int = 0
    planes: int = 1
    bit_count: int = 8
    compression: int = 0
    size_image: int = 0
    xpels_per_meter: int = 0
    ypels_per_meter: int = 0
    clr_used: int = 0
    clr_important: int = 0
    colors: List[BitmapColor] = field(default_factory=list)

    @classmethod
    def from_stream(cls, stream: Buffer) -> 'BitmapInfo':
        """Read the 11 header fields and the 256-entry palette."""
        info = cls(*read_struct(stream, DIB_HEADER_FORMAT))
        palette = read_exact(stream, PALETTE_SIZE * 4)
        info.colors = [BitmapColor(*entry) for entry in struct.iter_unpack('<4B', palette)]
        return info

    def write_to(self, buffer: Buffer):
        assert len(self.colors) == PALETTE_SIZE, f"palette must have {PALETTE_SIZE} colours"

        buffer.write(struct.pack(
            DIB_HEADER_FORMAT,
            self.size, self.width, self.height, self.planes, self.bit_count,
            self.compression, self.size_image, self.xpels_per_meter,
            self.ypels_per_meter, self.clr_used, self.clr_important,
        ))
        for color in self.colors:
            color.write_to(buffer)


@dataclass(eq=False)
class Bitmap:
    """
    A Genie-style bitmap: a typical BMP with some metadata.

    Pixels are stored row-padded, as a (height, stride) uint8 array where
    stride is the width rounded up to a multiple of 4.
    """
    own_memory: int
    width: int
    height: int
    orientation: int
    info: BitmapInfo
    pixels: np.ndarray

    @property
    def stride(self) -> int:
        return align_up(self.width, 4)

    @property
    def pixel_rows(self) -> np.ndarray:
        """Pixel indices without row padding, shape (height, width)."""
        return self.pixels[:, :self.width]

    @classmethod
    def blank(cls, width: int, height: int, colors: Optional[List[BitmapColor]] = None) -> 'Bitmap':
        """
        Create a bitmap filled with palette index 0.

        Args:
            width: Width in pixels (nonzero)
            height: Height in pixels (nonzero)
            colors: Palette, defaults to a greyscale ramp
        """
        if colors is None:
            colors = [BitmapColor(i, i, i) for i in range(PALETTE_SIZE)]
        stride = align_up(width, 4)
        info = BitmapInfo(width=width, height=height, size_image=stride * height, colors=list(colors))
        pixels = np.zeros((height, stride), dtype=np.uint8)
        return cls(own_memory=1, width=width, height=height, orientation=1, info=info, pixels=pixels)

    @classmethod
    def from_stream(cls, stream: Buffer) -> Optional['Bitmap']:
        """
        Read a bitmap.

        Returns:
            The bitmap, or None if the stored width or height is zero
        """
        own_memory, width, height, orientation = read_struct(stream, BITMAP_HEADER_FORMAT)
        if width == 0 or height == 0:
            return None

        info = BitmapInfo.from_stream(stream)
        stride = align_up(width, 4)
        data = read_exact(stream, height * stride)
        pixels = np.frombuffer(data, dtype=np.uint8).reshape(height, stride).copy()

        return cls(
            own_memory=own_memory,
            width=width,
            height=height,
            orientation=orientation,
            info=info,
            pixels=pixels,
        )

    def write_to(self, buffer: Buffer):
        assert self.pixels.shape == (self.height, self.stride), \
            f"pixel buffer shape {self.pixels.shape} does not match {self.height}x{self.stride}"

        buffer.write(struct.pack(BITMAP_HEADER_FORMAT, self.own_memory, self.width,
                                 self.height, self.orientation))
        self.info.write_to(buffer)
        buffer.write(self.pixels.astype(np.uint8).tobytes())

    @staticmethod
    def write_empty(buffer: Buffer):
        """Write the 'no bitmap' form: zero header fields only."""
        buffer.write(struct.pack(BITMAP_HEADER_FORMAT, 0, 0, 0, 0))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Bitmap):
            return NotImplemented
        return (self.own_memory == other.own_memory
                and self.width == other.width
                and self.height == other.height
                and self.orientation == other.orientation
                and self.info == other.info
                and np.array_equal(self.pixels, other.pixels))
