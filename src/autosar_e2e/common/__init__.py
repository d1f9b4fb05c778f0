"""Building blocks shared by the E2E profiles.

This package provides header field access, the CRC parameter sets, counter
domains and the configuration/buffer-length checks used by every profile.
"""

from __future__ import annotations

from .counter import CounterDomain
from .crc import (
    CRC8_AUTOSAR,
    CRC8_PROFILE11,
    CRC16_IBM_3740,
    CRC32_AUTOSAR,
    CRC64_XZ,
    CrcParams,
    compute_crc,
    compute_crc_segments,
)

__all__ = [
    "CounterDomain",
    "CrcParams",
    "compute_crc",
    "compute_crc_segments",
    "CRC8_PROFILE11",
    "CRC8_AUTOSAR",
    "CRC16_IBM_3740",
    "CRC32_AUTOSAR",
    "CRC64_XZ",
]
