"""
Shared pytest fixtures for cafesim tests.
"""

import pytest

from cafesim.config import SimulationConfig


class Scripted:
    """Variate that returns the given durations in order, then repeats the last one."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    def sample(self):
        idx = min(self.calls, len(self.values) - 1)
        self.calls += 1
        return self.values[idx]


@pytest.fixture
def scripted():
    return Scripted


@pytest.fixture
def baseline_config() -> SimulationConfig:
    return SimulationConfig(duration=60.0, mean_service_time=3.0, mean_interarrival_time=4.0, servers=2, seed=42)


@pytest.fixture
def busy_config() -> SimulationConfig:
    """Heavily loaded shop so the line regularly grows past the baristas."""
    return SimulationConfig(duration=480.0, mean_service_time=5.0, mean_interarrival_time=1.5, servers=3, seed=7)

