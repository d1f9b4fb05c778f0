"""E2E Profile 11: short fixed-length data, 4-bit counter, CRC-8.

Profile 11 places its fields at freely configurable bit positions:

- CRC: one byte at ``crc_offset``
- Counter: one nibble at ``counter_offset``, counting 0-14 (15 is unused)
- Data ID nibble: one nibble at ``nibble_offset`` (Nibble mode only)

The CRC input is the Data ID followed by the buffer without the CRC byte. In
``BOTH`` mode the whole 16-bit Data ID is implicit (little-endian); in
``NIBBLE`` mode only its low byte enters the CRC (followed by a zero byte)
and bits 8-11 are transmitted in the Data ID nibble.
"""

from __future__ import annotations

import enum

from pydantic import Field

from ..common.counter import CounterDomain
from ..common.crc import CRC8_PROFILE11, compute_crc_segments
from ..common.field_ops import (
    BITS_PER_BYTE,
    BITS_PER_NIBBLE,
    NIBBLE_MASK,
    ReadableBuffer,
    WritableBuffer,
    offset_bytes,
    read_nibble,
    read_u8,
    write_nibble,
    write_u8,
)
from ..common.validation import (
    validate_data_length_bounds,
    validate_length_exact,
    validate_max_delta_counter,
    validate_multiple_of,
)
from ..config import ProfileConfig
from ..exceptions import ConfigurationError
from ..status import ProtectionStatus
from .base import BaseProfile, CheckItems

# CRC byte plus counter nibble, rounded up to whole bytes
MIN_DATA_LENGTH_BITS = 2 * BITS_PER_BYTE
MAX_DATA_LENGTH_BITS = 240
MAX_NIBBLE_DATA_ID = 0xFFF


class Profile11IdMode(str, enum.Enum):
    """How the Data ID is conveyed."""

    BOTH = "both"
    NIBBLE = "nibble"


class Profile11Config(ProfileConfig):
    """Configuration for Profile 11.

    Attributes:
        counter_offset: Bit offset of the counter nibble (multiple of 4)
        crc_offset: Bit offset of the CRC byte (multiple of 8)
        mode: Data ID mode
        data_id: 16-bit Data ID (at most 0xFFF in Nibble mode)
        nibble_offset: Bit offset of the Data ID nibble (multiple of 4)
        max_delta_counter: Largest counter jump still reported as OK_SOME_LOST
        data_length: Exact buffer length in bits
    """

    counter_offset: int = Field(default=8, ge=0, le=0xFF)
    crc_offset: int = Field(default=0, ge=0, le=0xFF)
    mode: Profile11IdMode = Profile11IdMode.NIBBLE
    data_id: int = Field(default=0x123, ge=0, le=0xFFFF)
    nibble_offset: int = Field(default=12, ge=0, le=0xFF)
    max_delta_counter: int = Field(default=1, ge=0, le=0xFF)
    data_length: int = Field(default=64, ge=0, le=0xFF)


def _overlaps(a_start: int, a_bits: int, b_start: int, b_bits: int) -> bool:
    return a_start < b_start + b_bits and b_start < a_start + a_bits


class Profile11(BaseProfile[Profile11Config]):
    """Profile 11 protection engine.

    Example:
        >>> from autosar_e2e import Profile11, Profile11Config, Profile11IdMode
        >>> engine = Profile11(Profile11Config(mode=Profile11IdMode.BOTH))
        >>> data = bytearray(8)
        >>> engine.protect(data)
        >>> data[:2].hex(" ")
        'cc 00'
    """

    domain = CounterDomain.COUNTER4_MOD15
    config_class = Profile11Config

    def _validate_config(self, config: Profile11Config) -> None:
        validate_data_length_bounds(
            "data_length", config.data_length, MIN_DATA_LENGTH_BITS, MAX_DATA_LENGTH_BITS
        )
        validate_multiple_of("data_length", config.data_length, BITS_PER_BYTE)
        validate_multiple_of("crc_offset", config.crc_offset, BITS_PER_BYTE)
        validate_multiple_of("counter_offset", config.counter_offset, BITS_PER_NIBBLE)
        validate_max_delta_counter(config.max_delta_counter, self.domain)

        fields = [
            ("crc_offset", config.crc_offset, BITS_PER_BYTE),
            ("counter_offset", config.counter_offset, BITS_PER_NIBBLE),
        ]
        if config.mode is Profile11IdMode.NIBBLE:
            validate_multiple_of("nibble_offset", config.nibble_offset, BITS_PER_NIBBLE)
            if config.data_id > MAX_NIBBLE_DATA_ID:
                raise ConfigurationError(
                    f"data_id shall not exceed 0x{MAX_NIBBLE_DATA_ID:X} in Nibble mode, "
                    f"got 0x{config.data_id:X}"
                )
            fields.append(("nibble_offset", config.nibble_offset, BITS_PER_NIBBLE))

        for name, start, bits in fields:
            if start + bits > config.data_length:
                raise ConfigurationError(
                    f"{name} ({start}) places the field outside the data "
                    f"({config.data_length} bits)"
                )
        for i, (name_a, start_a, bits_a) in enumerate(fields):
            for name_b, start_b, bits_b in fields[i + 1 :]:
                if _overlaps(start_a, bits_a, start_b, bits_b):
                    raise ConfigurationError(f"{name_a} and {name_b} overlap")

    def _validate_length(self, data: ReadableBuffer) -> None:
        validate_length_exact(len(data), self._config.data_length // BITS_PER_BYTE)

    def _id_bytes(self) -> bytes:
        if self._config.mode is Profile11IdMode.BOTH:
            return self._config.data_id.to_bytes(2, "little")
        return bytes([self._config.data_id & 0xFF, 0x00])

    def _compute_crc(self, data: ReadableBuffer) -> int:
        crc_pos = offset_bytes(self._config.crc_offset)
        view = memoryview(data)
        return compute_crc_segments(
            CRC8_PROFILE11, self._id_bytes(), view[:crc_pos], view[crc_pos + 1 :]
        )

    def protect(self, data: WritableBuffer) -> None:
        self._require_writable(data)
        self._validate_length(data)

        config = self._config
        if config.mode is Profile11IdMode.NIBBLE:
            write_nibble(data, config.nibble_offset, config.data_id >> BITS_PER_BYTE)
        write_nibble(data, config.counter_offset, self._counter)
        write_u8(data, offset_bytes(config.crc_offset), self._compute_crc(data))

        self._advance_counter()

    def check(self, data: ReadableBuffer) -> ProtectionStatus:
        self._validate_length(data)

        config = self._config
        rx_data_id = None
        expected_data_id = None
        if config.mode is Profile11IdMode.NIBBLE:
            rx_data_id = read_nibble(data, config.nibble_offset)
            expected_data_id = (config.data_id >> BITS_PER_BYTE) & NIBBLE_MASK

        return self._evaluate(
            CheckItems(
                rx_crc=read_u8(data, offset_bytes(config.crc_offset)),
                computed_crc=self._compute_crc(data),
                rx_counter=read_nibble(data, config.counter_offset),
                rx_data_id=rx_data_id,
                expected_data_id=expected_data_id,
            )
        )
