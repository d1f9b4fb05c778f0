"""E2E Profile 22: fixed-length data, 4-bit counter, per-cycle Data ID, CRC-8.

Header layout (2 bytes, starting at ``offset // 8``)::

    +0  CRC      u8   CRC-8/AUTOSAR
    +1  Counter  low nibble (the high nibble belongs to the payload)

The CRC covers the whole buffer except the CRC byte, followed by
``data_id_list[counter]``: each counter value selects its own implicit Data ID.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from ..common.counter import CounterDomain
from ..common.crc import CRC8_AUTOSAR, compute_crc
from ..common.field_ops import (
    BITS_PER_BYTE,
    ReadableBuffer,
    WritableBuffer,
    offset_bytes,
    read_nibble,
    read_u8,
    write_nibble,
    write_u8,
)
from ..common.validation import (
    validate_header_fits,
    validate_length_exact,
    validate_max_delta_counter,
    validate_multiple_of,
)
from ..config import ProfileConfig
from ..status import ProtectionStatus
from .base import BaseProfile, CheckItems

HEADER_LENGTH = 2
DATA_ID_LIST_SIZE = 16

_CRC_POS = 0
_CRC_SIZE = 1
_COUNTER_POS = 1

DataIdByte = Annotated[int, Field(ge=0, le=0xFF)]


class Profile22Config(ProfileConfig):
    """Configuration for Profile 22.

    Attributes:
        data_length: Exact buffer length in bits
        data_id_list: Sixteen implicit Data IDs, one per counter value
        max_delta_counter: Largest counter jump still reported as OK_SOME_LOST
        offset: Bit offset of the header (multiple of 8)
    """

    data_length: int = Field(default=64, ge=0)
    data_id_list: tuple[DataIdByte, ...] = Field(
        default=tuple(range(0x01, 0x11)),
        min_length=DATA_ID_LIST_SIZE,
        max_length=DATA_ID_LIST_SIZE,
    )
    max_delta_counter: int = Field(default=1, ge=0, le=0xFF)
    offset: int = Field(default=0, ge=0)


class Profile22(BaseProfile[Profile22Config]):
    """Profile 22 protection engine.

    The counter is advanced before it is written, so the first protected
    message carries counter 1. A repeated counter is reported as REPEATED even
    before the first successful reception.
    """

    domain = CounterDomain.COUNTER4
    config_class = Profile22Config

    def _validate_config(self, config: Profile22Config) -> None:
        validate_multiple_of("data_length", config.data_length, BITS_PER_BYTE)
        validate_multiple_of("offset", config.offset, BITS_PER_BYTE)
        validate_header_fits(config.offset, HEADER_LENGTH, config.data_length)
        validate_max_delta_counter(config.max_delta_counter, self.domain)

    @property
    def _offset(self) -> int:
        return offset_bytes(self._config.offset)

    def _counter_bit_offset(self) -> int:
        return (self._offset + _COUNTER_POS) * BITS_PER_BYTE

    def _validate_length(self, data: ReadableBuffer) -> None:
        validate_length_exact(len(data), self._config.data_length // BITS_PER_BYTE)

    def _compute_crc(self, data: ReadableBuffer) -> int:
        counter = read_nibble(data, self._counter_bit_offset())
        return compute_crc(
            CRC8_AUTOSAR,
            data,
            self._offset + _CRC_POS,
            _CRC_SIZE,
            bytes([self._config.data_id_list[counter]]),
        )

    def protect(self, data: WritableBuffer) -> None:
        self._require_writable(data)
        self._validate_length(data)

        self._advance_counter()
        write_nibble(data, self._counter_bit_offset(), self._counter)
        write_u8(data, self._offset + _CRC_POS, self._compute_crc(data))

    def check(self, data: ReadableBuffer) -> ProtectionStatus:
        self._validate_length(data)

        return self._evaluate(
            CheckItems(
                rx_crc=read_u8(data, self._offset + _CRC_POS),
                computed_crc=self._compute_crc(data),
                rx_counter=read_nibble(data, self._counter_bit_offset()),
            )
        )
