"""E2E Profile 4: 16-bit counter, explicit 32-bit Data ID, CRC-32/AUTOSAR.

Header layout (12 bytes, big-endian, starting at ``offset // 8``)::

    +0  Length   u16  total buffer length in bytes
    +2  Counter  u16
    +4  Data ID  u32
    +8  CRC      u32  over the whole buffer except this field

Profile 4 protects variable-length data between ``min_data_length`` and
``max_data_length`` bits.
"""

from __future__ import annotations

from pydantic import Field

from ..common.counter import CounterDomain
from ..common.crc import CRC32_AUTOSAR, compute_crc
from ..common.field_ops import (
    BITS_PER_BYTE,
    ReadableBuffer,
    WritableBuffer,
    offset_bytes,
    read_u16_be,
    read_u32_be,
    write_u16_be,
    write_u32_be,
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

HEADER_LENGTH = 12
MIN_DATA_LENGTH_BITS = HEADER_LENGTH * BITS_PER_BYTE
MAX_DATA_LENGTH_BITS = 4096 * BITS_PER_BYTE

_LENGTH_POS = 0
_COUNTER_POS = 2
_DATA_ID_POS = 4
_CRC_POS = 8
_CRC_SIZE = 4


class Profile4Config(ProfileConfig):
    """Configuration for Profile 4 (and Profile 4M).

    Attributes:
        data_id: Data ID transmitted in the header
        offset: Bit offset of the header (multiple of 8)
        min_data_length: Minimum buffer length in bits
        max_data_length: Maximum buffer length in bits
        max_delta_counter: Largest counter jump still reported as OK_SOME_LOST
    """

    data_id: int = Field(default=0x0A0B0C0D, ge=0, le=0xFFFFFFFF)
    offset: int = Field(default=0, ge=0, le=0xFFFF)
    min_data_length: int = Field(default=MIN_DATA_LENGTH_BITS, ge=0, le=0xFFFF)
    max_data_length: int = Field(default=MAX_DATA_LENGTH_BITS, ge=0, le=0xFFFF)
    max_delta_counter: int = Field(default=1, ge=0, le=0xFFFF)


class Profile4(BaseProfile[Profile4Config]):
    """Profile 4 protection engine.

    Example:
        >>> from autosar_e2e import Profile4
        >>> data = bytearray(16)
        >>> Profile4().protect(data)
        >>> data[:12].hex(" ")
        '00 10 00 00 0a 0b 0c 0d 86 2b 05 56'
    """

    domain = CounterDomain.COUNTER16
    config_class = Profile4Config

    def _validate_config(self, config: Profile4Config) -> None:
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
        return compute_crc(CRC32_AUTOSAR, data, self._offset + _CRC_POS, _CRC_SIZE)

    def protect(self, data: WritableBuffer) -> None:
        self._require_writable(data)
        self._validate_length(data)

        offset = self._offset
        write_u16_be(data, offset + _LENGTH_POS, len(data))
        write_u16_be(data, offset + _COUNTER_POS, self._counter)
        write_u32_be(data, offset + _DATA_ID_POS, self._config.data_id)
        write_u32_be(data, offset + _CRC_POS, self._compute_crc(data))

        self._advance_counter()

    def check(self, data: ReadableBuffer) -> ProtectionStatus:
        self._validate_length(data)

        offset = self._offset
        return self._evaluate(
            CheckItems(
                rx_crc=read_u32_be(data, offset + _CRC_POS),
                computed_crc=self._compute_crc(data),
                rx_counter=read_u16_be(data, offset + _COUNTER_POS),
                rx_data_id=read_u32_be(data, offset + _DATA_ID_POS),
                expected_data_id=self._config.data_id,
                rx_data_length=read_u16_be(data, offset + _LENGTH_POS),
                data_length=len(data),
            )
        )
