# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# arrivals.py
# -----------------------------------------------------------------------------
# Purpose:
#   Random variates for the coffee shop: exponential interarrival gaps
#   (Poisson arrivals) and exponential service durations.
#
# Design notes:
#   - Every run owns a private random.Random(seed); nothing here touches the
#     module-level random state, so replications never share a stream.
#   - Anything with a sample() method can replace a variate (tests script
#     exact times that way).
#
# Usage:
#   interarrival, service = make_variates(config, random.Random(config.seed))
# -----------------------------------------------------------------------------

from __future__ import annotations
import math, random
from typing import Tuple

from .errors import ConfigError

class ExponentialVariate:
    """Exponential durations with the given mean, drawn by inversion.

    Parameters
    ----------
    mean : float
        Expected duration in minutes. Must be > 0; math.inf means "never".
    rng : random.Random
        Uniform source owned by the run.
    """
    def __init__(self, mean: float, rng: random.Random):
        if math.isnan(mean) or mean <= 0:
            raise ConfigError(f"exponential mean must be positive, got {mean!r}")
        self.mean = float(mean)
        self._rng = rng

    def sample(self) -> float:
        if math.isinf(self.mean):
            return math.inf
        # 1 - random() lies in (0, 1], keeping log() finite
        u = 1.0 - self._rng.random()
        return -self.mean * math.log(u)

    def __repr__(self):
        return f"ExponentialVariate(mean={self.mean})"

def make_variates(config, rng: random.Random) -> Tuple[ExponentialVariate, ExponentialVariate]:
    """Build (interarrival, service) variates sharing the run's RNG."""
    interarrival = ExponentialVariate(config.mean_interarrival_time, rng)
    service = ExponentialVariate(config.mean_service_time, rng)
    return interarrival, service
