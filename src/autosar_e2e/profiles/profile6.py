"""E2E Profile 6: variable-length data, 8-bit counter, CRC-16 with implicit Data ID.

Header layout (5 bytes, big-endian, starting at ``offset // 8``)::

    +0  CRC      u16
    +2  Length   u16  total buffer length in bytes
    +4  Counter  u8

The 16-bit Data ID is appended big-endian to the CRC input and never
transmitted.
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
    read_u16_be,
    write_u8,
    write_u16_be,
)
from ..common.validation import (
    validate_data_length_bounds,
    validate_header_fits,
    validate_header_in_buffer,
    validate_length_range,
    validate_max_delta_counter,
    validate_min_max_data_length,
    validate_multiple_of,
)
from ..config import ProfileConfig
from ..status import ProtectionStatus
from .base import BaseProfile, CheckItems

HEADER_LENGTH = 5
MIN_DATA_LENGTH_BITS = HEADER_LENGTH * BITS_PER_BYTE
MAX_DATA_LENGTH_BITS = 4096 * BITS_PER_BYTE

_CRC_POS = 0
_CRC_SIZE = 2
_LENGTH_POS = 2
_COUNTER_POS = 4


class Profile6Config(ProfileConfig):
    """Configuration for Profile 6.

    Attributes:
        data_id: Implicit 16-bit Data ID
        offset: Bit offset of the header (multiple of 8)
        min_data_length: Minimum buffer length in bits
        max_data_length: Maximum buffer length in bits
        max_delta_counter: Largest counter jump still reported as OK_SOME_LOST
    """

    data_id: int = Field(default=0x1234, ge=0, le=0xFFFF)
    offset: int = Field(default=0, ge=0, le=0xFFFF)
    min_data_length: int = Field(default=MIN_DATA_LENGTH_BITS, ge=0, le=0xFFFF)
    max_data_length: int = Field(default=MAX_DATA_LENGTH_BITS, ge=0, le=0xFFFF)
    max_delta_counter: int = Field(default=1, ge=0, le=0xFF)


class Profile6(BaseProfile[Profile6Config]):
    """Profile 6 protection engine."""

    domain = CounterDomain.COUNTER8
    config_class = Profile6Config

    def _validate_config(self, config: Profile6Config) -> None:
        validate_data_length_bounds(
            "min_data_length", config.min_data_length, MIN_DATA_LENGTH_BITS, MAX_DATA_LENGTH_BITS
        )
        validate_data_length_bounds(
            "max_data_length", config.max_data_length, MIN_DATA_LENGTH_BITS, MAX_DATA_LENGTH_BITS
        )
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
        return compute_crc(
            CRC16_IBM_3740,
            data,
            self._offset + _CRC_POS,
            _CRC_SIZE,
            self._config.data_id.to_bytes(2, "big"),
        )

    def protect(self, data: WritableBuffer) -> None:
        self._require_writable(data)
        self._validate_length(data)

        offset = self._offset
        write_u16_be(data, offset + _LENGTH_POS, len(data))
        write_u8(data, offset + _COUNTER_POS, self._counter)
        write_u16_be(data, offset + _CRC_POS, self._compute_crc(data))

        self._advance_counter()

    def check(self, data: ReadableBuffer) -> ProtectionStatus:
        self._validate_length(data)

        offset = self._offset
        return self._evaluate(
            CheckItems(
                rx_crc=read_u16_be(data, offset + _CRC_POS),
                computed_crc=self._compute_crc(data),
                rx_counter=read_u8(data, offset + _COUNTER_POS),
                rx_data_length=read_u16_be(data, offset + _LENGTH_POS),
                data_length=len(data),
            )
        )
