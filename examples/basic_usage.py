#!/usr/bin/env python3
"""Basic usage example for autosar_e2e.

This example demonstrates:
1. Configuring a profile
2. Protecting a buffer on the sender side
3. Checking it on the receiver side
4. Detecting a corrupted message
5. Detecting lost and repeated messages
"""

from __future__ import annotations

from autosar_e2e import Profile5, Profile5Config, ProtectionStatus

HEADER_LENGTH = 3


def make_frame(speed_rpm: int) -> bytearray:
    """Build an 8-byte frame with the payload after the E2E header."""
    frame = bytearray(8)
    frame[HEADER_LENGTH:] = speed_rpm.to_bytes(5, "big")
    return frame


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("autosar_e2e Basic Usage Example")
    print("=" * 60)
    print()

    # Configure both sides identically
    print("1. Configuring Profile 5...")
    config = Profile5Config(data_id=0x0815, data_length=64, max_delta_counter=2)
    sender = Profile5(config)
    receiver = Profile5(config)

    print(f"   Data ID: 0x{config.data_id:04X}")
    print(f"   Data length: {config.data_length} bits")
    print(f"   Max delta counter: {config.max_delta_counter}")
    print()

    # Protect a frame
    print("2. Protecting a frame...")
    frame = make_frame(1234)
    print(f"   Before: {frame.hex(' ')}")
    sender.protect(frame)
    print(f"   After:  {frame.hex(' ')}")
    print(f"   Sender counter is now {sender.counter}")
    print()

    # Check it
    print("3. Checking the frame...")
    status = receiver.check(frame)
    print(f"   Status: {status.name}")
    print()

    # Corruption
    print("4. Corrupting a payload byte...")
    frame = make_frame(1235)
    sender.protect(frame)
    frame[-1] ^= 0x01
    status = receiver.check(frame)
    print(f"   Status: {status.name}")
    if status is ProtectionStatus.CRC_ERROR:
        print("   ✓ Corruption detected")
    print()

    # Sequence problems
    print("5. Losing and repeating messages...")
    frame = make_frame(1236)
    sender.protect(frame)
    print(f"   After one lost message: {receiver.check(frame).name}")
    print(f"   Same frame again:       {receiver.check(frame).name}")

    for _ in range(3):
        sender.protect(make_frame(0))
    frame = make_frame(1240)
    sender.protect(frame)
    print(f"   After three lost:       {receiver.check(frame).name}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
