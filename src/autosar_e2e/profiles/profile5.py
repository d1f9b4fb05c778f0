"""E2E Profile 5: fixed-length data, 8-bit counter, CRC-16 with implicit Data ID.

Header layout (3 bytes, starting at ``offset // 8``)::

    +0  CRC      u16 little-endian
    +2  Counter  u8

The 16-bit Data ID is never transmitted. It is appended (little-endian) to the
CRC input, so a receiver configured with another Data ID sees a CRC error.
"""

from __future__ import annotations

from pydantic import Field

from ..common.counter import CounterDomain
from ..common.crc import CRC16_IBM_3740, compute_crc
from ..common.field_ops import (
    BITS_PER_BYTE,
    ReadableBuffer,
    WritableBuffer,
    offset_bytes,
    read_u8,
    read_u16_le,
    write_u8,
    write_u16_le,
)
from ..common.validation import (
    validate_data_length_bounds,
    validate_header_fits,
    validate_length_exact,
    validate_max_delta_counter,
    validate_multiple_of,
)
from ..config import ProfileConfig
from ..status import ProtectionStatus
from .base import BaseProfile, CheckItems

HEADER_LENGTH = 3
MIN_DATA_LENGTH_BITS = HEADER_LENGTH * BITS_PER_BYTE
MAX_DATA_LENGTH_BITS = 4096 * BITS_PER_BYTE

_CRC_POS = 0
_CRC_SIZE = 2
_COUNTER_POS = 2


class Profile5Config(ProfileConfig):
    """Configuration for Profile 5.

    Attributes:
        data_id: Implicit 16-bit Data ID
        offset: Bit offset of the header (multiple of 8)
        data_length: Exact buffer length in bits
        max_delta_counter: Largest counter jump still reported as OK_SOME_LOST
    """

    data_id: int = Field(default=0x1234, ge=0, le=0xFFFF)
    offset: int = Field(default=0, ge=0, le=0xFFFF)
    data_length: int = Field(default=MIN_DATA_LENGTH_BITS, ge=0, le=0xFFFF)
    max_delta_counter: int = Field(default=1, ge=0, le=0xFF)


class Profile5(BaseProfile[Profile5Config]):
    """Profile 5 protection engine.

    Example:
        >>> from autosar_e2e import Profile5, Profile5Config
        >>> data = bytearray(8)
        >>> Profile5(Profile5Config(data_length=64)).protect(data)
        >>> data[:3].hex(" ")
        '1c ca 00'
    """

    domain = CounterDomain.COUNTER8
    config_class = Profile5Config

    def _validate_config(self, config: Profile5Config) -> None:
        validate_data_length_bounds(
            "data_length", config.data_length, MIN_DATA_LENGTH_BITS, MAX_DATA_LENGTH_BITS
        )
        validate_multiple_of("data_length", config.data_length, BITS_PER_BYTE)
        validate_multiple_of("offset", config.offset, BITS_PER_BYTE)
        validate_header_fits(config.offset, HEADER_LENGTH, config.data_length)
        validate_max_delta_counter(config.max_delta_counter, self.domain)

    @property
    def _offset(self) -> int:
        return offset_bytes(self._config.offset)

    def _validate_length(self, data: ReadableBuffer) -> None:
        validate_length_exact(len(data), self._config.data_length // BITS_PER_BYTE)

    def _compute_crc(self, data: ReadableBuffer) -> int:
        return compute_crc(
            CRC16_IBM_3740,
            data,
            self._offset + _CRC_POS,
            _CRC_SIZE,
            self._config.data_id.to_bytes(2, "little"),
        )

    def protect(self, data: WritableBuffer) -> None:
        self._require_writable(data)
        self._validate_length(data)

        offset = self._offset
        write_u8(data, offset + _COUNTER_POS, self._counter)
        write_u16_le(data, offset + _CRC_POS, self._compute_crc(data))

        self._advance_counter()

    def check(self, data: ReadableBuffer) -> ProtectionStatus:
        self._validate_length(data)

        offset = self._offset
        return self._evaluate(
            CheckItems(
                rx_crc=read_u16_le(data, offset + _CRC_POS),
                computed_crc=self._compute_crc(data),
                rx_counter=read_u8(data, offset + _COUNTER_POS),
            )
        )
