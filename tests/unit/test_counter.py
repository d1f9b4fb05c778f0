"""Unit tests for counter domains and sequence classification."""

from __future__ import annotations

import pytest

from autosar_e2e import CounterDomain, ProtectionStatus


class TestDomainAttributes:
    """Test domain parameters."""

    @pytest.mark.parametrize(
        "domain, bits, max_value, modulo",
        [
            (CounterDomain.COUNTER4_MOD15, 4, 14, 15),
            (CounterDomain.COUNTER4, 4, 15, 16),
            (CounterDomain.COUNTER8, 8, 0xFF, 0x100),
            (CounterDomain.COUNTER16, 16, 0xFFFF, 0x10000),
            (CounterDomain.COUNTER32, 32, 0xFFFFFFFF, 0x100000000),
        ],
    )
    def test_parameters(self, domain: CounterDomain, bits: int, max_value: int, modulo: int) -> None:
        """Test bits, maximum and modulo."""
        assert domain.bits == bits
        assert domain.max_value == max_value
        assert domain.modulo == modulo

    def test_contains(self) -> None:
        """Test legal counter values."""
        assert CounterDomain.COUNTER4_MOD15.contains(14)
        assert not CounterDomain.COUNTER4_MOD15.contains(15)
        assert CounterDomain.COUNTER4.contains(15)
        assert not CounterDomain.COUNTER8.contains(-1)


class TestIncrement:
    """Test counter advancement."""

    def test_increment(self) -> None:
        """Test a normal step."""
        assert CounterDomain.COUNTER16.increment(7) == 8

    @pytest.mark.parametrize("domain", list(CounterDomain))
    def test_wraps_to_zero(self, domain: CounterDomain) -> None:
        """Test wraparound after max_value."""
        assert domain.increment(domain.max_value) == 0


class TestDelta:
    """Test circular distance."""

    def test_forward(self) -> None:
        """Test delta without wraparound."""
        assert CounterDomain.COUNTER8.delta(3, 5) == 2

    def test_wraparound(self) -> None:
        """Test delta across the wrap point."""
        assert CounterDomain.COUNTER8.delta(0xFE, 0x01) == 3
        assert CounterDomain.COUNTER4_MOD15.delta(14, 0) == 1
        assert CounterDomain.COUNTER4.delta(15, 0) == 1

    def test_backwards_is_large(self) -> None:
        """Test that an older counter gives a large delta."""
        assert CounterDomain.COUNTER16.delta(10, 9) == 0xFFFF


class TestClassify:
    """Test sequence classification."""

    def test_first_repeat_is_ok(self) -> None:
        """Test zero delta before the first reception."""
        status = CounterDomain.COUNTER8.classify(0, 0, max_delta=1, initialized=False)

        assert status is ProtectionStatus.OK

    def test_repeat_after_init(self) -> None:
        """Test zero delta after a successful reception."""
        status = CounterDomain.COUNTER8.classify(4, 4, max_delta=1, initialized=True)

        assert status is ProtectionStatus.REPEATED

    def test_unguarded_domain_repeats_immediately(self) -> None:
        """Test the 4-bit domain without first-reception guard."""
        status = CounterDomain.COUNTER4.classify(0, 0, max_delta=1, initialized=False)

        assert status is ProtectionStatus.REPEATED

    def test_next_is_ok(self) -> None:
        """Test delta of one."""
        assert (
            CounterDomain.COUNTER32.classify(0xFFFFFFFF, 0, max_delta=1, initialized=True)
            is ProtectionStatus.OK
        )

    def test_some_lost(self) -> None:
        """Test deltas inside the tolerance."""
        domain = CounterDomain.COUNTER16
        assert domain.classify(0, 2, max_delta=3, initialized=True) is ProtectionStatus.OK_SOME_LOST
        assert domain.classify(0, 3, max_delta=3, initialized=True) is ProtectionStatus.OK_SOME_LOST

    def test_wrong_sequence(self) -> None:
        """Test deltas beyond the tolerance."""
        domain = CounterDomain.COUNTER16
        assert domain.classify(0, 4, max_delta=3, initialized=True) is ProtectionStatus.WRONG_SEQUENCE
        assert domain.classify(0, 2, max_delta=1, initialized=True) is ProtectionStatus.WRONG_SEQUENCE
