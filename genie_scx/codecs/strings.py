"""
Scenario string codec.

Scenario strings are Windows-1252 encoded and NUL terminated. Most are
prefixed by their length including the terminator, as an i16 in the older
sections and as an i32 in newer ones. Player names live in fixed 256-byte slots.

An empty string and a missing string look the same on the wire; both read
back as None.
"""

from typing import Optional

from ..constants import SCX_ENCODING
from ..errors import DecodeStringError, EncodeStringError, InvalidScenarioError
from ..utils.binary import Buffer, read_exact, read_i16, read_i32, read_u32, write_i16, write_i32

I16_MAX = 0x7FFF
I32_MAX = 0x7FFFFFFF


def read_str(stream: Buffer, length: int) -> Optional[str]:
    """
    Read a string stored in exactly `length` bytes.

    The bytes are cut at the first NUL and decoded as Windows-1252.

    Returns:
        The string, or None if nothing precedes the first NUL

    Raises:
        DecodeStringError: if a byte has no Windows-1252 mapping
    """
    if length <= 0:
        return None
    raw = read_exact(stream, length)
    end = raw.find(b'\x00')
    if end != -1:
        raw = raw[:end]
    if not raw:
        return None
    try:
        return raw.decode(SCX_ENCODING)
    except UnicodeDecodeError:
        raise DecodeStringError(raw) from None


def read_i16_str(stream: Buffer) -> Optional[str]:
    """Read a string with an i16 length prefix."""
    length = read_i16(stream)
    if length < 0:
        raise InvalidScenarioError(f"Negative string length {length}")
    return read_str(stream, length)


def read_i32_str(stream: Buffer) -> Optional[str]:
    """Read a string with an i32 length prefix."""
    length = read_i32(stream)
    if length < 0:
        raise InvalidScenarioError(f"Negative string length {length}")
    return read_str(stream, length)


def read_u32_str(stream: Buffer) -> Optional[str]:
    """Read a string with a u32 length prefix (file header description)."""
    return read_str(stream, read_u32(stream))


def encode_str(string: str) -> bytes:
    """Encode a string as Windows-1252, without terminator."""
    try:
        return string.encode(SCX_ENCODING)
    except UnicodeEncodeError:
        raise EncodeStringError(string) from None


def write_str(buffer: Buffer, string: str):
    """
    Write a string with an i16 length prefix and a NUL terminator.

    Raises:
        EncodeStringError: if a character has no Windows-1252 mapping
    """
    data = encode_str(string)
    assert len(data) < I16_MAX, "string too long for an i16 length prefix"
    write_i16(buffer, len(data) + 1)
    buffer.write(data)
    buffer.write(b'\x00')


def write_i32_str(buffer: Buffer, string: str):
    """Write a string with an i32 length prefix and a NUL terminator."""
    data = encode_str(string)
    assert len(data) < I32_MAX, "string too long for an i32 length prefix"
    write_i32(buffer, len(data) + 1)
    buffer.write(data)
    buffer.write(b'\x00')


def write_opt_str(buffer: Buffer, string: Optional[str]):
    """Write an optional string; None is a zero length prefix with no terminator."""
    if string is None:
        write_i16(buffer, 0)
    else:
        write_str(buffer, string)


def write_opt_i32_str(buffer: Buffer, string: Optional[str]):
    """Write an optional string with an i32 prefix; None is a zero length prefix."""
    if string is None:
        write_i32(buffer, 0)
    else:
        write_i32_str(buffer, string)


def read_fixed_str(stream: Buffer, size: int) -> Optional[str]:
    """Read a NUL padded string from a fixed-size slot."""
    return read_str(stream, size)


def write_fixed_str(buffer: Buffer, string: Optional[str], size: int):
    """Write a string into a fixed-size slot, NUL padded. A full slot has no terminator."""
    data = encode_str(string) if string is not None else b""
    assert len(data) <= size, f"string does not fit in a {size} byte slot"
    buffer.write(data.ljust(size, b'\x00'))
