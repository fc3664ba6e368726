"""
cafesim package initializer.

This package contains the discrete-event engine, event list, barista
counter, random variates and statistics collection used by the single-line
coffee shop model.
"""
from .config import SimulationConfig, load_cfg, apply_overrides
from .errors import CafeSimError, ConfigError, SimulationInvariantError
from .metrics import Statistics
from .simulation import CoffeeShopSimulation, run_one_day

__all__ = [
    "entities", "queues", "stations", "arrivals", "metrics", "simulation", "config", "errors",
    "SimulationConfig", "load_cfg", "apply_overrides",
    "CafeSimError", "ConfigError", "SimulationInvariantError",
    "Statistics", "CoffeeShopSimulation", "run_one_day",
]
