"""Shared fixtures for engine tests."""

import numpy as np
import pytest


class FakeClock:
    """Manually advanced wall clock (seconds)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def seeded():
    np.random.seed(42)
