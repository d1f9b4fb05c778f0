"""CRC computation for E2E profiles.

The polynomial arithmetic is delegated to crcmod; this module only knows the
parameter sets each profile uses and how a protected buffer is fed into the
running digest (the CRC field itself is skipped, and some profiles append
context bytes that are never transmitted, such as an implicit Data ID).
"""

from __future__ import annotations

import functools
from dataclasses import dataclass

import crcmod

from .field_ops import ReadableBuffer


@dataclass(frozen=True)
class CrcParams:
    """Rocksoft-style CRC parameter set.

    Attributes:
        name: Catalogue name of the algorithm
        width: CRC width in bits (8, 16, 32 or 64)
        poly: Generator polynomial in normal form, without the implicit top bit
        init: Initial register value
        reflect: True if input and output are bit-reflected
        xor_out: Value XORed into the final register
    """

    name: str
    width: int
    poly: int
    init: int
    reflect: bool
    xor_out: int

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1


# Profile 11: SAE J1850 polynomial with zero init and zero output XOR
CRC8_PROFILE11 = CrcParams("CRC-8/PROFILE11", 8, 0x1D, 0x00, False, 0x00)
CRC8_AUTOSAR = CrcParams("CRC-8/AUTOSAR", 8, 0x2F, 0xFF, False, 0xFF)
CRC16_IBM_3740 = CrcParams("CRC-16/IBM-3740", 16, 0x1021, 0xFFFF, False, 0x0000)
CRC32_AUTOSAR = CrcParams("CRC-32/AUTOSAR", 32, 0xF4ACFB13, 0xFFFFFFFF, True, 0xFFFFFFFF)
CRC64_XZ = CrcParams(
    "CRC-64/XZ",
    64,
    0x42F0E1EBA9EA3693,
    0xFFFFFFFFFFFFFFFF,
    True,
    0xFFFFFFFFFFFFFFFF,
)


@functools.lru_cache(maxsize=None)
def _prototype(params: CrcParams) -> crcmod.Crc:
    # crcmod wants the polynomial with its top bit, and an initial value that
    # is already XORed with the output XOR (the CRC of an empty message)
    return crcmod.Crc(
        (1 << params.width) | params.poly,
        initCrc=params.init ^ params.xor_out,
        rev=params.reflect,
        xorOut=params.xor_out,
    )


def compute_crc_segments(params: CrcParams, *segments: ReadableBuffer) -> int:
    """Compute a CRC over several byte segments fed in order.

    Args:
        params: CRC parameter set
        *segments: Byte segments, appended to the running digest one by one

    Returns:
        Final CRC value

    Example:
        >>> hex(compute_crc_segments(CRC16_IBM_3740, b"1234", b"56789"))
        '0x29b1'
    """
    digest = _prototype(params).new()
    for segment in segments:
        if segment:
            digest.update(bytes(segment))
    return digest.crcValue & params.mask


def compute_crc(
    params: CrcParams,
    data: ReadableBuffer,
    exclude_start: int,
    exclude_len: int,
    extra: ReadableBuffer = b"",
) -> int:
    """Compute a CRC over ``data`` with one contiguous byte range left out.

    The digest is fed the bytes before ``exclude_start``, then the bytes after
    ``exclude_start + exclude_len``, then ``extra``.

    Args:
        params: CRC parameter set
        data: Protected buffer
        exclude_start: Byte offset of the CRC field
        exclude_len: Size of the CRC field in bytes
        extra: Out-of-band context bytes appended after the buffer

    Returns:
        Final CRC value
    """
    view = memoryview(data)
    return compute_crc_segments(
        params,
        view[:exclude_start],
        view[exclude_start + exclude_len :],
        extra,
    )
