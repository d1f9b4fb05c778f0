"""E2E Profile 7: large data, 32-bit counter, explicit Data ID, CRC-64/XZ.

Header layout (20 bytes, big-endian, starting at ``offset // 8``)::

    +0   CRC      u64  over the whole buffer except this field
    +8   Length   u32  total buffer length in bytes
    +12  Counter  u32
    +16  Data ID  u32
"""

from __future__ import annotations

from pydantic import Field

from ..common.counter import CounterDomain
from ..common.crc import CRC64_XZ, compute_crc
from ..common.field_ops import (
    BITS_PER_BYTE,
    ReadableBuffer,
    WritableBuffer,
    offset_bytes,
    read_u32_be,
    read_u64_be,
    write_u32_be,
    write_u64_be,
)
from ..common.validation import (
    validate_header_fits,
    validate_header_in_buffer,
    validate_length_range,
    validate_max_delta_counter,
    validate_min_data_length,
    validate_min_max_data_length,
    validate_multiple_of,
)
from ..config import ProfileConfig
from ..status import ProtectionStatus
from .base import BaseProfile, CheckItems

HEADER_LENGTH = 20
MIN_DATA_LENGTH_BITS = HEADER_LENGTH * BITS_PER_BYTE
MAX_DATA_LENGTH_BITS = 4096 * BITS_PER_BYTE

_CRC_POS = 0
_CRC_SIZE = 8
_LENGTH_POS = 8
_COUNTER_POS = 12
_DATA_ID_POS = 16


class Profile7Config(ProfileConfig):
    """Configuration for Profile 7 (and Profile 7M).

    Attributes:
        data_id: Data ID transmitted in the header
        offset: Bit offset of the header (multiple of 8)
        min_data_length: Minimum buffer length in bits
        max_data_length: Maximum buffer length in bits
        max_delta_counter: Largest counter jump still reported as OK_SOME_LOST
    """

    data_id: int = Field(default=0x0A0B0C0D, ge=0, le=0xFFFFFFFF)
    offset: int = Field(default=0, ge=0, le=0xFFFFFFFF)
    min_data_length: int = Field(default=MIN_DATA_LENGTH_BITS, ge=0, le=0xFFFFFFFF)
    max_data_length: int = Field(default=MAX_DATA_LENGTH_BITS, ge=0, le=0xFFFFFFFF)
    max_delta_counter: int = Field(default=1, ge=0, le=0xFFFFFFFF)


class Profile7(BaseProfile[Profile7Config]):
    """Profile 7 protection engine."""

    domain = CounterDomain.COUNTER32
    config_class = Profile7Config

    def _validate_config(self, config: Profile7Config) -> None:
        validate_min_data_length("min_data_length", config.min_data_length, MIN_DATA_LENGTH_BITS)
        validate_min_max_data_length(config.min_data_length, config.max_data_length)
        validate_multiple_of("offset", config.offset, BITS_PER_BYTE)
        validate_header_fits(config.offset, HEADER_LENGTH, config.max_data_length)
        validate_max_delta_counter(config.max_delta_counter, self.domain)

    @property
    def _offset(self) -> int:
        return offset_bytes(self._config.offset)

    def _validate_length(self, data: ReadableBuffer) -> None:
        validate_length_range(
            len(data),
            self._config.min_data_length // BITS_PER_BYTE,
            self._config.max_data_length // BITS_PER_BYTE,
        )
        validate_header_in_buffer(len(data), self._offset, HEADER_LENGTH)

    def _compute_crc(self, data: ReadableBuffer) -> int:
        return compute_crc(CRC64_XZ, data, self._offset + _CRC_POS, _CRC_SIZE)

    def protect(self, data: WritableBuffer) -> None:
        self._require_writable(data)
        self._validate_length(data)

        offset = self._offset
        write_u32_be(data, offset + _LENGTH_POS, len(data))
        write_u32_be(data, offset + _COUNTER_POS, self._counter)
        write_u32_be(data, offset + _DATA_ID_POS, self._config.data_id)
        write_u64_be(data, offset + _CRC_POS, self._compute_crc(data))

        self._advance_counter()

    def check(self, data: ReadableBuffer) -> ProtectionStatus:
        self._validate_length(data)

        offset = self._offset
        return self._evaluate(
            CheckItems(
                rx_crc=read_u64_be(data, offset + _CRC_POS),
                computed_crc=self._compute_crc(data),
                rx_counter=read_u32_be(data, offset + _COUNTER_POS),
                rx_data_id=read_u32_be(data, offset + _DATA_ID_POS),
                expected_data_id=self._config.data_id,
                rx_data_length=read_u32_be(data, offset + _LENGTH_POS),
                data_length=len(data),
            )
        )
