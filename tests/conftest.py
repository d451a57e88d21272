"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import random

import pytest


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so weighted choices are reproducible."""
    return random.Random(1234)
