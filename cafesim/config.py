# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# config.py
# -----------------------------------------------------------------------------
# Purpose:
#   Load the YAML run configuration, merge scenario overrides, and turn the
#   raw dict into a validated SimulationConfig.
#
# Design notes:
#   - All times are in MINUTES, matching the YAML.
#   - Validation happens here so a bad value fails before any event runs.
#
# Usage:
#   cfg = load_cfg(); config = SimulationConfig.from_dict(cfg)
# -----------------------------------------------------------------------------

from __future__ import annotations
import copy, math, os
from dataclasses import dataclass, replace
from typing import Dict, Optional

import yaml

from .errors import ConfigError

# package data, installed next to this module
DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "baseline.yaml")

def load_cfg(path: Optional[str] = None) -> Dict:
    path = path or DEFAULT_CONFIG_PATH
    try:
        with open(path, "r") as f:
            cfg = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"config file {path} is not valid YAML: {exc}") from exc
    if not isinstance(cfg, dict):
        raise ConfigError(f"config file {path} is not a mapping")
    return cfg

def apply_overrides(cfg: Dict, overrides: Dict) -> Dict:
    """Apply scenario overrides (recursive merge) on top of the base config."""
    new = copy.deepcopy(cfg)

    def _merge(dst: Dict, src: Dict):
        for key, val in src.items():
            if isinstance(val, dict) and isinstance(dst.get(key), dict):
                _merge(dst[key], val)
            else:
                dst[key] = copy.deepcopy(val)

    _merge(new, overrides)
    return new

def _positive_mean(name: str, value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None
    if math.isnan(value) or value <= 0:
        raise ConfigError(f"{name} must be positive, got {value!r}")
    return value

def _integer(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    return value

@dataclass(frozen=True)
class SimulationConfig:
    """
    Parameters of a single run.

    Attributes
    ----------
    duration : float
        Horizon in minutes; events later than this are not processed.
    mean_service_time : float
        Mean barista service time (minutes).
    mean_interarrival_time : float
        Mean time between customer arrivals (minutes); inf disables arrivals
        after the first.
    servers : int
        Number of baristas.
    seed : int
        Seed for the run's private random.Random.
    """
    duration: float = 60.0
    mean_service_time: float = 3.0
    mean_interarrival_time: float = 4.0
    servers: int = 2
    seed: int = 42

    def __post_init__(self):
        try:
            duration = float(self.duration)
        except (TypeError, ValueError):
            raise ConfigError(f"duration must be a number, got {self.duration!r}") from None
        if math.isnan(duration) or math.isinf(duration) or duration < 0:
            raise ConfigError(f"duration must be finite and >= 0, got {self.duration!r}")
        object.__setattr__(self, "duration", duration)
        object.__setattr__(self, "mean_service_time",
                           _positive_mean("mean_service_time", self.mean_service_time))
        object.__setattr__(self, "mean_interarrival_time",
                           _positive_mean("mean_interarrival_time", self.mean_interarrival_time))
        if _integer("servers", self.servers) < 1:
            raise ConfigError(f"servers must be >= 1, got {self.servers!r}")
        _integer("seed", self.seed)

    @classmethod
    def from_dict(cls, cfg: Dict) -> "SimulationConfig":
        """Build from the parsed YAML layout (sim/service/arrivals sections)."""
        sim = cfg.get("sim", {}) or {}
        service = cfg.get("service", {}) or {}
        arrivals = cfg.get("arrivals", {}) or {}
        defaults = cls.__dataclass_fields__
        return cls(
            duration=sim.get("duration_minutes", defaults["duration"].default),
            mean_service_time=service.get("mean_service_minutes", defaults["mean_service_time"].default),
            mean_interarrival_time=arrivals.get(
                "mean_interarrival_minutes", defaults["mean_interarrival_time"].default
            ),
            servers=service.get("servers", defaults["servers"].default),
            seed=sim.get("seed", defaults["seed"].default),
        )

    def with_seed(self, seed: int) -> "SimulationConfig":
        return replace(self, seed=seed)
