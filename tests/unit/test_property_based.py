"""Property-based tests using hypothesis."""

from __future__ import annotations

from typing import Callable

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from autosar_e2e import (
    CounterDomain,
    E2EProfile,
    Profile4,
    Profile4Config,
    Profile4M,
    Profile5,
    Profile5Config,
    Profile6,
    Profile7,
    Profile7M,
    Profile8,
    Profile8Config,
    Profile11,
    Profile11Config,
    Profile11IdMode,
    Profile22,
    ProtectionStatus,
)

# (engine factory, buffer length, bytes skipped by the bit-flip test). The
# skipped bytes are the CRC field; for profile 22 also the counter byte, since
# the counter selects the Data ID that enters the CRC.
PROFILE_CASES: dict[str, tuple[Callable[[], E2EProfile], int, range]] = {
    "profile4": (Profile4, 32, range(8, 12)),
    "profile4m": (Profile4M, 32, range(8, 12)),
    "profile5": (lambda: Profile5(Profile5Config(data_length=256)), 32, range(0, 2)),
    "profile6": (Profile6, 32, range(0, 2)),
    "profile7": (Profile7, 32, range(0, 8)),
    "profile7m": (Profile7M, 32, range(0, 8)),
    "profile8": (Profile8, 32, range(0, 4)),
    "profile11": (Profile11, 8, range(0, 1)),
    "profile22": (Profile22, 8, range(0, 2)),
}

profile_names = st.sampled_from(sorted(PROFILE_CASES))


class TestRoundTripProperties:
    """A lossless channel always yields OK."""

    @given(name=profile_names, payload=st.binary(min_size=32, max_size=32), count=st.integers(1, 20))
    @settings(max_examples=50)
    def test_lossless_exchange(self, name: str, payload: bytes, count: int) -> None:
        """Test that every message of a lossless exchange is OK."""
        factory, length, _ = PROFILE_CASES[name]
        sender = factory()
        receiver = factory()

        for _ in range(count):
            data = bytearray(payload[:length])
            sender.protect(data)
            assert receiver.check(data) is ProtectionStatus.OK

    @given(payload=st.binary(min_size=12, max_size=200))
    def test_profile4_any_length(self, payload: bytes) -> None:
        """Test that Profile 4 accepts every length in range."""
        sender = Profile4()
        receiver = Profile4()
        data = bytearray(payload)

        sender.protect(data)

        assert receiver.check(data) is ProtectionStatus.OK
        assert data[12:] == payload[12:]


class TestTamperProperties:
    """Corruption outside the CRC field is always detected."""

    @given(name=profile_names, position=st.integers(0, 255), bit=st.integers(0, 7))
    @settings(max_examples=200)
    def test_single_bit_flip(self, name: str, position: int, bit: int) -> None:
        """Test that any single bit flip is a CRC error."""
        factory, length, skipped = PROFILE_CASES[name]
        position %= length
        assume(position not in skipped)

        sender = factory()
        receiver = factory()
        data = bytearray(length)
        sender.protect(data)
        data[position] ^= 1 << bit

        assert receiver.check(data) is ProtectionStatus.CRC_ERROR
        assert receiver.initialized is False

    @given(data_id_a=st.integers(0, 0xFFFF), data_id_b=st.integers(0, 0xFFFF))
    def test_profile5_masquerade(self, data_id_a: int, data_id_b: int) -> None:
        """Test that different implicit Data IDs never pass."""
        assume(data_id_a != data_id_b)
        sender = Profile5(Profile5Config(data_id=data_id_a, data_length=64))
        receiver = Profile5(Profile5Config(data_id=data_id_b, data_length=64))
        data = bytearray(8)
        sender.protect(data)

        assert receiver.check(data) is ProtectionStatus.CRC_ERROR

    @given(data_id_a=st.integers(0, 0xFFFFFFFF), data_id_b=st.integers(0, 0xFFFFFFFF))
    def test_profile4_masquerade(self, data_id_a: int, data_id_b: int) -> None:
        """Test that different explicit Data IDs are reported."""
        assume(data_id_a != data_id_b)
        sender = Profile4(Profile4Config(data_id=data_id_a))
        receiver = Profile4(Profile4Config(data_id=data_id_b))
        data = bytearray(16)
        sender.protect(data)

        assert receiver.check(data) is ProtectionStatus.DATA_ID_ERROR

    @given(data_id=st.integers(0, 0xFFF), other=st.integers(0, 0xFFF))
    def test_profile11_nibble_masquerade(self, data_id: int, other: int) -> None:
        """Test that Nibble mode never accepts another Data ID."""
        assume(data_id != other)
        sender = Profile11(Profile11Config(mode=Profile11IdMode.NIBBLE, data_id=data_id))
        receiver = Profile11(Profile11Config(mode=Profile11IdMode.NIBBLE, data_id=other))
        data = bytearray(8)
        sender.protect(data)

        assert receiver.check(data) in (
            ProtectionStatus.CRC_ERROR,
            ProtectionStatus.DATA_ID_ERROR,
        )


class TestSequenceProperties:
    """Counter classification."""

    @given(
        domain=st.sampled_from(list(CounterDomain)),
        start=st.integers(0, 0xFFFFFFFF),
        delta=st.integers(0, 20),
        max_delta=st.integers(1, 13),
    )
    def test_classification(
        self, domain: CounterDomain, start: int, delta: int, max_delta: int
    ) -> None:
        """Test the delta-to-status mapping for an initialized receiver."""
        assume(delta < domain.modulo)
        current = start % domain.modulo
        received = (current + delta) % domain.modulo

        status = domain.classify(current, received, max_delta, initialized=True)

        if delta == 0:
            assert status is ProtectionStatus.REPEATED
        elif delta == 1:
            assert status is ProtectionStatus.OK
        elif delta <= max_delta:
            assert status is ProtectionStatus.OK_SOME_LOST
        else:
            assert status is ProtectionStatus.WRONG_SEQUENCE

    @given(max_delta=st.integers(1, 10), lost=st.integers(0, 12))
    def test_lost_messages_profile8(self, max_delta: int, lost: int) -> None:
        """Test receiver outcome after dropping messages."""
        sender = Profile8(Profile8Config(max_delta_counter=max_delta))
        receiver = Profile8(Profile8Config(max_delta_counter=max_delta))
        data = bytearray(16)
        sender.protect(data)
        receiver.check(data)

        for _ in range(lost):
            sender.protect(bytearray(16))
        sender.protect(data)
        status = receiver.check(data)

        if lost == 0:
            assert status is ProtectionStatus.OK
        elif lost + 1 <= max_delta:
            assert status is ProtectionStatus.OK_SOME_LOST
        else:
            assert status is ProtectionStatus.WRONG_SEQUENCE
        assert receiver.counter == lost + 1

    @given(domain=st.sampled_from(list(CounterDomain)), value=st.integers(0, 0xFFFFFFFF))
    def test_increment_stays_in_domain(self, domain: CounterDomain, value: int) -> None:
        """Test that increment never leaves the domain."""
        assert domain.contains(domain.increment(value % domain.modulo))
