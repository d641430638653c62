"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from mpwire import Encoder


@pytest.fixture
def encoder() -> Encoder:
    """Fresh encoder for each test."""
    return Encoder()


@pytest.fixture
def integer_boundaries() -> list[int]:
    """Integers on either side of every size-class boundary."""
    return [
        0, 127, 128, 255, 256, 65535, 65536,
        2147483647, 2147483648, 4294967295,
        -1, -32, -33, -128, -129, -32768, -32769, -2147483648,
    ]
