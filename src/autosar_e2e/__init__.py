"""autosar_e2e: AUTOSAR End-to-End Protection Profiles

A Python implementation of the AUTOSAR E2E protection profiles 4, 4M, 5, 6,
7, 7M, 8, 11 and 22. A sender protects a byte buffer in place before
transmission; a receiver checks it after reception and learns whether the data
was corrupted, lost, repeated, reordered or came from the wrong stream.

Key Features:
- Bit-exact wire formats for every profile
- Pydantic-based, immutable profile configurations
- Sequence checking with configurable tolerance for lost messages
- Transport independent: works on plain bytearray buffers

Quick Start:
    >>> from autosar_e2e import Profile5, Profile5Config, ProtectionStatus
    >>>
    >>> config = Profile5Config(data_id=0x1234, data_length=64)
    >>> sender = Profile5(config)
    >>> receiver = Profile5(config)
    >>>
    >>> data = bytearray(8)
    >>> sender.protect(data)
    >>> receiver.check(data)
    <ProtectionStatus.OK: 'ok'>
"""

from __future__ import annotations

from .common.counter import CounterDomain
from .config import ProfileConfig
from .exceptions import ConfigurationError, DataFormatError, E2EError
from .profiles import (
    E2EProfile,
    Profile4,
    Profile4Config,
    Profile4M,
    Profile5,
    Profile5Config,
    Profile6,
    Profile6Config,
    Profile7,
    Profile7Config,
    Profile7M,
    Profile8,
    Profile8Config,
    Profile11,
    Profile11Config,
    Profile11IdMode,
    Profile22,
    Profile22Config,
)
from .status import ProtectionStatus

__version__ = "0.1.0"

__all__ = [
    # Core API
    "E2EProfile",
    "ProtectionStatus",
    "ProfileConfig",
    "CounterDomain",
    # Exceptions
    "E2EError",
    "ConfigurationError",
    "DataFormatError",
    # Profiles
    "Profile4",
    "Profile4Config",
    "Profile4M",
    "Profile5",
    "Profile5Config",
    "Profile6",
    "Profile6Config",
    "Profile7",
    "Profile7Config",
    "Profile7M",
    "Profile8",
    "Profile8Config",
    "Profile11",
    "Profile11Config",
    "Profile11IdMode",
    "Profile22",
    "Profile22Config",
]
