"""
Binary Stream Utilities

Little-endian read/write helpers shared by all scenario codecs.

Readers consume a forward-only stream (file or BytesIO) and raise EOFError
when the stream ends early. Writers append to any writable buffer.
"""

import io
import struct
from typing import BinaryIO, Tuple, Union

Buffer = Union[BinaryIO, io.BytesIO]


def read_exact(stream: Buffer, size: int) -> bytes:
    """
    Read exactly `size` bytes from a stream.

    Args:
        stream: Input stream
        size: Number of bytes to read

    Returns:
        The bytes read

    Raises:
        EOFError: if the stream ends before `size` bytes were read
    """
    data = stream.read(size)
    if len(data) != size:
        raise EOFError(f"Unexpected end of data: wanted {size} bytes, got {len(data)}")
    return data


def read_struct(stream: Buffer, fmt: str) -> Tuple:
    """Read and unpack a struct format string (little-endian prefix included in fmt)."""
    return struct.unpack(fmt, read_exact(stream, struct.calcsize(fmt)))


def read_u8(stream: Buffer) -> int:
    return read_struct(stream, '<B')[0]


def read_i8(stream: Buffer) -> int:
    return read_struct(stream, '<b')[0]


def read_u16(stream: Buffer) -> int:
    return read_struct(stream, '<H')[0]


def read_i16(stream: Buffer) -> int:
    return read_struct(stream, '<h')[0]


def read_u32(stream: Buffer) -> int:
    return read_struct(stream, '<I')[0]


def read_i32(stream: Buffer) -> int:
    return read_struct(stream, '<i')[0]


def read_f32(stream: Buffer) -> float:
    return read_struct(stream, '<f')[0]


def read_f64(stream: Buffer) -> float:
    return read_struct(stream, '<d')[0]


def read_version_f32(stream: Buffer) -> float:
    """
    Read an f32 version number.

    Versions like 1.22 are not exactly representable as f32, so the value is
    rounded back to the decimal it was written from.
    """
    return round(read_f32(stream), 4)


def write_u8(buffer: Buffer, value: int):
    buffer.write(struct.pack('<B', value))


def write_i8(buffer: Buffer, value: int):
    buffer.write(struct.pack('<b', value))


def write_u16(buffer: Buffer, value: int):
    buffer.write(struct.pack('<H', value))


def write_i16(buffer: Buffer, value: int):
    buffer.write(struct.pack('<h', value))


def write_u32(buffer: Buffer, value: int):
    buffer.write(struct.pack('<I', value))


def write_i32(buffer: Buffer, value: int):
    buffer.write(struct.pack('<i', value))


def write_f32(buffer: Buffer, value: float):
    buffer.write(struct.pack('<f', value))


def write_f64(buffer: Buffer, value: float):
    buffer.write(struct.pack('<d', value))


def align_up(value: int, alignment: int) -> int:
    """Round `value` up to the next multiple of `alignment` (a power of two)."""
    return (value + alignment - 1) & ~(alignment - 1)
