"""Byte and nibble level field access for E2E headers.

All helpers operate directly on a caller-owned buffer at a given offset.
They do not validate the buffer length: every profile checks the length
before touching any field, so an out-of-range access here is a programming
error and surfaces as the underlying IndexError or struct.error.

Bit offsets follow the AUTOSAR convention used by the profiles: the byte is
selected by ``bit_offset >> 3`` and the bit position inside that byte by
``bit_offset & 7`` (0 = low nibble, 4 = high nibble).
"""

from __future__ import annotations

import struct
from typing import Union

ReadableBuffer = Union[bytes, bytearray, memoryview]
WritableBuffer = Union[bytearray, memoryview]

BITS_PER_BYTE = 8
BITS_PER_NIBBLE = 4
NIBBLE_MASK = 0x0F

_U16_BE = struct.Struct(">H")
_U16_LE = struct.Struct("<H")
_U32_BE = struct.Struct(">I")
_U32_LE = struct.Struct("<I")
_U64_BE = struct.Struct(">Q")
_U64_LE = struct.Struct("<Q")


def offset_bytes(bit_offset: int) -> int:
    """Convert a header bit offset to the byte offset it starts in."""
    return bit_offset // BITS_PER_BYTE


def read_u8(data: ReadableBuffer, offset: int) -> int:
    return data[offset]


def write_u8(data: WritableBuffer, offset: int, value: int) -> None:
    data[offset] = value & 0xFF


def write_masked_u8(data: WritableBuffer, offset: int, value: int, mask: int) -> None:
    """Replace only the bits selected by ``mask`` in the byte at ``offset``."""
    data[offset] = (data[offset] & ~mask & 0xFF) | (value & mask)


def read_u16_be(data: ReadableBuffer, offset: int) -> int:
    return _U16_BE.unpack_from(data, offset)[0]


def read_u16_le(data: ReadableBuffer, offset: int) -> int:
    return _U16_LE.unpack_from(data, offset)[0]


def write_u16_be(data: WritableBuffer, offset: int, value: int) -> None:
    _U16_BE.pack_into(data, offset, value & 0xFFFF)


def write_u16_le(data: WritableBuffer, offset: int, value: int) -> None:
    _U16_LE.pack_into(data, offset, value & 0xFFFF)


def read_u32_be(data: ReadableBuffer, offset: int) -> int:
    return _U32_BE.unpack_from(data, offset)[0]


def read_u32_le(data: ReadableBuffer, offset: int) -> int:
    return _U32_LE.unpack_from(data, offset)[0]


def write_u32_be(data: WritableBuffer, offset: int, value: int) -> None:
    _U32_BE.pack_into(data, offset, value & 0xFFFFFFFF)


def write_u32_le(data: WritableBuffer, offset: int, value: int) -> None:
    _U32_LE.pack_into(data, offset, value & 0xFFFFFFFF)


def read_u64_be(data: ReadableBuffer, offset: int) -> int:
    return _U64_BE.unpack_from(data, offset)[0]


def read_u64_le(data: ReadableBuffer, offset: int) -> int:
    return _U64_LE.unpack_from(data, offset)[0]


def write_u64_be(data: WritableBuffer, offset: int, value: int) -> None:
    _U64_BE.pack_into(data, offset, value & 0xFFFFFFFFFFFFFFFF)


def write_u64_le(data: WritableBuffer, offset: int, value: int) -> None:
    _U64_LE.pack_into(data, offset, value & 0xFFFFFFFFFFFFFFFF)


def read_nibble(data: ReadableBuffer, bit_offset: int) -> int:
    """Read the 4-bit value starting at ``bit_offset``.

    Args:
        data: Source buffer
        bit_offset: Bit position of the nibble's least significant bit

    Returns:
        Nibble value (0-15)
    """
    shift = bit_offset & 0x07
    return (data[bit_offset >> 3] >> shift) & NIBBLE_MASK


def write_nibble(data: WritableBuffer, bit_offset: int, value: int) -> None:
    """Write a 4-bit value at ``bit_offset``, preserving the other nibble.

    Args:
        data: Target buffer
        bit_offset: Bit position of the nibble's least significant bit
        value: Value to store; only the low 4 bits are used
    """
    shift = bit_offset & 0x07
    write_masked_u8(data, bit_offset >> 3, (value & NIBBLE_MASK) << shift, NIBBLE_MASK << shift)
