"""Unit tests for E2E Profile 5."""

from __future__ import annotations

from typing import Callable

import pytest

from autosar_e2e import (
    ConfigurationError,
    DataFormatError,
    Profile5,
    Profile5Config,
    ProtectionStatus,
)


class TestProfile5Vectors:
    """Reference wire vectors."""

    def test_basic_example(self, zero_buffer: Callable[[int], bytearray]) -> None:
        """Test an 8-byte message with the default Data ID."""
        config = Profile5Config(data_length=64)
        sender = Profile5(config)
        receiver = Profile5(config)
        data = zero_buffer(8)

        sender.protect(data)

        # CRC is little-endian
        assert data[:3] == b"\x1c\xca\x00"
        assert data[3:] == bytes(5)
        assert receiver.check(data) is ProtectionStatus.OK

    def test_offset_example(self, zero_buffer: Callable[[int], bytearray]) -> None:
        """Test header at bit offset 64."""
        config = Profile5Config(offset=64, data_length=128)
        sender = Profile5(config)
        receiver = Profile5(config)
        data = zero_buffer(16)

        sender.protect(data)

        assert data[8:11] == b"\x28\x91\x00"
        assert receiver.check(data) is ProtectionStatus.OK


class TestProfile5Sequence:
    """Counter handling."""

    def test_counter_wraparound(self, zero_buffer: Callable[[int], bytearray]) -> None:
        """Test a full 8-bit counter cycle."""
        config = Profile5Config(offset=64, data_length=128)
        sender = Profile5(config)
        receiver = Profile5(config)
        data = zero_buffer(16)

        for i in range(0x100):
            sender.protect(data)
            assert data[10] == i
            assert receiver.check(data) is ProtectionStatus.OK

        sender.protect(data)
        assert data[10] == 0x00
        assert receiver.check(data) is ProtectionStatus.OK

    def test_first_message_may_repeat_counter_zero(
        self, zero_buffer: Callable[[int], bytearray]
    ) -> None:
        """Test that counter 0 is OK on first reception and REPEATED later."""
        config = Profile5Config(data_length=64)
        sender = Profile5(config)
        receiver = Profile5(config)
        data = zero_buffer(8)
        sender.protect(data)

        assert receiver.initialized is False
        assert receiver.check(data) is ProtectionStatus.OK
        assert receiver.initialized is True
        assert receiver.check(data) is ProtectionStatus.REPEATED


class TestProfile5Errors:
    """Error detection."""

    def test_implicit_data_id_mismatch_is_crc_error(
        self, zero_buffer: Callable[[int], bytearray]
    ) -> None:
        """Test that a different Data ID shows up as a CRC error."""
        sender = Profile5(Profile5Config(data_length=64, data_id=0x1234))
        receiver = Profile5(Profile5Config(data_length=64, data_id=0x1235))
        data = zero_buffer(8)
        sender.protect(data)

        assert receiver.check(data) is ProtectionStatus.CRC_ERROR

    def test_corrupted_counter(self, zero_buffer: Callable[[int], bytearray]) -> None:
        """Test a flipped counter bit."""
        config = Profile5Config(data_length=64)
        sender = Profile5(config)
        receiver = Profile5(config)
        data = zero_buffer(8)
        sender.protect(data)
        data[2] ^= 0x80

        assert receiver.check(data) is ProtectionStatus.CRC_ERROR
        assert receiver.initialized is False

    @pytest.mark.parametrize("length", [7, 9])
    def test_wrong_buffer_length(
        self, length: int, zero_buffer: Callable[[int], bytearray]
    ) -> None:
        """Test exact length enforcement."""
        engine = Profile5(Profile5Config(data_length=64))

        with pytest.raises(DataFormatError, match=f"Expected 8 bytes, got {length} bytes"):
            engine.protect(zero_buffer(length))
        with pytest.raises(DataFormatError):
            engine.check(bytes(length))
        assert engine.counter == 0


class TestProfile5Config:
    """Configuration validation."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = Profile5Config()

        assert config.data_id == 0x1234
        assert config.offset == 0
        assert config.data_length == 24

    def test_minimum_length_buffer(self, zero_buffer: Callable[[int], bytearray]) -> None:
        """Test the 3-byte minimum message."""
        sender = Profile5()
        receiver = Profile5()
        data = zero_buffer(3)
        sender.protect(data)

        assert receiver.check(data) is ProtectionStatus.OK

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"data_length": 16},
            {"data_length": 32776},
            {"data_length": 68},
            {"offset": 4, "data_length": 64},
            {"offset": 48, "data_length": 64},
            {"max_delta_counter": 0},
            {"max_delta_counter": 0xFF},
        ],
    )
    def test_invalid_config(self, kwargs: dict) -> None:
        """Test rejected configurations."""
        with pytest.raises(ConfigurationError):
            Profile5(Profile5Config(**kwargs))

    def test_data_id_is_16_bit(self) -> None:
        """Test Data ID range."""
        with pytest.raises(ConfigurationError):
            Profile5Config(data_id=0x10000)
