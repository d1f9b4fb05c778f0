"""Sequence counters and counter-delta classification.

Each profile uses one of a small, closed set of counter domains. A domain
knows its modulo, how to advance a counter and how to classify a received
counter against the last accepted one.
"""

from __future__ import annotations

import enum

from ..status import ProtectionStatus


class CounterDomain(enum.Enum):
    """Counter domains used by the E2E profiles.

    Members carry (bits, max_value, modulo, guard_first_reception):

    - COUNTER4_MOD15: profile 11, values 0-14 (15 is never a valid counter)
    - COUNTER4: profile 22, values 0-15
    - COUNTER8: profiles 5 and 6
    - COUNTER16: profiles 4 and 4M
    - COUNTER32: profiles 7, 7M and 8

    ``guard_first_reception`` controls whether a zero delta is reported as OK
    until the first successful reception. Profile 22 reports REPEATED for a
    zero delta unconditionally.
    """

    COUNTER4_MOD15 = (4, 14, 15, True)
    COUNTER4 = (4, 15, 16, False)
    COUNTER8 = (8, 0xFF, 0x100, True)
    COUNTER16 = (16, 0xFFFF, 0x10000, True)
    COUNTER32 = (32, 0xFFFFFFFF, 0x100000000, True)

    def __init__(
        self, bits: int, max_value: int, modulo: int, guard_first_reception: bool
    ) -> None:
        self.bits = bits
        self.max_value = max_value
        self.modulo = modulo
        self.guard_first_reception = guard_first_reception

    def contains(self, value: int) -> bool:
        """Return True if ``value`` is a legal counter value in this domain."""
        return 0 <= value <= self.max_value

    def increment(self, current: int) -> int:
        """Advance a counter by one step, wrapping to 0 after max_value."""
        return (current + 1) % self.modulo

    def delta(self, current: int, received: int) -> int:
        """Forward circular distance from ``current`` to ``received``.

        Example:
            >>> CounterDomain.COUNTER8.delta(0xFE, 0x01)
            3
        """
        if received >= current:
            return received - current
        return (self.modulo + received - current) % self.modulo

    def classify(
        self, current: int, received: int, max_delta: int, initialized: bool
    ) -> ProtectionStatus:
        """Classify a received counter against the last accepted one.

        Args:
            current: Last accepted counter value
            received: Counter value read from the buffer
            max_delta: Largest delta still accepted as OK_SOME_LOST
            initialized: Whether a successful reception has happened before

        Returns:
            REPEATED, OK, OK_SOME_LOST or WRONG_SEQUENCE
        """
        delta = self.delta(current, received)

        if delta == 0:
            if initialized or not self.guard_first_reception:
                return ProtectionStatus.REPEATED
            return ProtectionStatus.OK
        if delta == 1:
            return ProtectionStatus.OK
        if delta <= max_delta:
            return ProtectionStatus.OK_SOME_LOST
        return ProtectionStatus.WRONG_SEQUENCE
