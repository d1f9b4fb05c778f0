"""Configuration and buffer-length checks shared by all profiles.

Configuration checks run once, when an engine is constructed, and raise
ConfigurationError. Buffer-length checks run on every protect()/check() call,
before any header field is touched, and raise DataFormatError.
"""

from __future__ import annotations

from ..exceptions import ConfigurationError, DataFormatError
from .counter import CounterDomain
from .field_ops import BITS_PER_BYTE


def validate_data_length_bounds(name: str, value: int, min_bits: int, max_bits: int) -> None:
    """Check that a data length (in bits) lies inside a profile's range.

    Raises:
        ConfigurationError: If ``value`` is outside [min_bits, max_bits]
    """
    if value < min_bits or value > max_bits:
        raise ConfigurationError(
            f"{name} must be between {min_bits // BITS_PER_BYTE}B and "
            f"{max_bits // BITS_PER_BYTE}B ({min_bits}-{max_bits} bits), got {value} bits"
        )


def validate_min_data_length(name: str, value: int, min_bits: int) -> None:
    if value < min_bits:
        raise ConfigurationError(
            f"{name} shall be at least {min_bits // BITS_PER_BYTE}B ({min_bits} bits), "
            f"got {value} bits"
        )


def validate_min_max_data_length(min_bits: int, max_bits: int) -> None:
    if max_bits < min_bits:
        raise ConfigurationError(
            f"max_data_length ({max_bits} bits) shall not be smaller than "
            f"min_data_length ({min_bits} bits)"
        )


def validate_multiple_of(name: str, value: int, multiple: int) -> None:
    if value % multiple != 0:
        raise ConfigurationError(f"{name} shall be a multiple of {multiple}, got {value}")


def validate_max_delta_counter(value: int, domain: CounterDomain) -> None:
    """Check max_delta_counter against the counter domain.

    Zero is rejected because every new counter would be a loss, and the
    domain's maximum value is rejected because WRONG_SEQUENCE would become
    unreachable.

    Raises:
        ConfigurationError: If ``value`` is not in [1, domain.max_value)
    """
    if value < 1 or value >= domain.max_value:
        raise ConfigurationError(
            f"max_delta_counter must be between 1 and {domain.max_value - 1}, got {value}"
        )


def validate_header_fits(offset_bits: int, header_bytes: int, data_length_bits: int) -> None:
    """Check that a header placed at ``offset_bits`` fits in the data length.

    Raises:
        ConfigurationError: If the header would extend past the data
    """
    end_bits = offset_bits + header_bytes * BITS_PER_BYTE
    if end_bits > data_length_bits:
        raise ConfigurationError(
            f"Offset shall be between 0 and data length - {header_bytes}B: "
            f"header at bit {offset_bits} ends at bit {end_bits}, "
            f"data length is {data_length_bits} bits"
        )


def validate_length_exact(length: int, expected: int) -> None:
    """Per-call check for fixed-length profiles.

    Raises:
        DataFormatError: If ``length`` differs from ``expected``
    """
    if length != expected:
        raise DataFormatError(f"Expected {expected} bytes, got {length} bytes")


def validate_length_range(length: int, min_bytes: int, max_bytes: int) -> None:
    """Per-call check for variable-length profiles.

    Raises:
        DataFormatError: If ``length`` is outside [min_bytes, max_bytes]
    """
    if length < min_bytes or length > max_bytes:
        raise DataFormatError(f"Expected {min_bytes} - {max_bytes} bytes, got {length} bytes")


def validate_header_in_buffer(length: int, offset: int, header_bytes: int) -> None:
    """Per-call check that the header at byte ``offset`` lies inside the buffer.

    Raises:
        DataFormatError: If the buffer is too short for the header
    """
    if length < offset + header_bytes:
        raise DataFormatError(
            f"Data length shall be at least offset + {header_bytes}B: "
            f"expected at least {offset + header_bytes} bytes, got {length} bytes"
        )
