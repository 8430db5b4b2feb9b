"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Callable

import pytest


@pytest.fixture
def make_string() -> Callable[[int], str]:
    """Build an ASCII string of the given length."""

    def _make(length: int) -> str:
        return "a" * length

    return _make


@pytest.fixture
def make_binary() -> Callable[[int], bytes]:
    """Build a byte string of the given length with a repeating 0-255 pattern."""

    def _make(length: int) -> bytes:
        return bytes(i % 256 for i in range(length))

    return _make


@pytest.fixture
def sample_document() -> dict:
    """Nested document exercising every host-level kind."""
    return {
        "vehicle_id": 42,
        "depth_m": 12.5,
        "callsign": "ALPHA",
        "active": True,
        "last_fix": None,
        "waypoints": [[1, -2], [300, -40000]],
        "payload": b"\x00\x01\xfe\xff",
    }
