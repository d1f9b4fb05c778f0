"""Exception hierarchy for autosar_e2e.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from E2EError for easy catching of any E2E-specific error.

Note that failed protection checks (CRC mismatch, wrong sequence, ...) are not
exceptions. They are reported as a ProtectionStatus returned by check().
"""

from __future__ import annotations


class E2EError(Exception):
    """Base exception for all autosar_e2e errors."""

    pass


class ConfigurationError(E2EError):
    """Raised when a profile is constructed with an invalid configuration.

    Examples:
        - Data length outside the range supported by the profile
        - Maximum data length smaller than the minimum data length
        - max_delta_counter of 0 or equal to the counter's maximum value
        - Header offset not aligned to the field width
        - Header does not fit inside the configured data length
    """

    pass


class DataFormatError(E2EError):
    """Raised when a buffer passed to protect() or check() has the wrong size.

    The engine state is left untouched, so a subsequent call with a correctly
    sized buffer behaves as if the failed call never happened.

    Examples:
        - Buffer length differs from a fixed-length profile's data length
        - Buffer length outside [min_data_length, max_data_length]
        - Buffer too short to hold the header at the configured offset
    """

    pass
