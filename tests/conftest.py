"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Callable

import pytest


@pytest.fixture
def zero_buffer() -> Callable[[int], bytearray]:
    """Factory for zero-filled buffers of a given byte length."""

    def make(length: int) -> bytearray:
        return bytearray(length)

    return make


@pytest.fixture
def sample_payload() -> bytes:
    """Sample application payload (20 bytes)."""
    return b"wheel speed: 1234rpm"
