# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# errors.py
# -----------------------------------------------------------------------------
# Purpose:
#   Exception types raised by the coffee shop DES.
#
# Design notes:
#   - ConfigError is raised while building a run, never mid-simulation.
#   - SimulationInvariantError flags a defect in the engine (clock going
#     backwards, unknown customer, too many customers in service).
#
# Usage:
#   from cafesim.errors import ConfigError, SimulationInvariantError
# -----------------------------------------------------------------------------

from __future__ import annotations


class CafeSimError(Exception):
    """Base class for all cafesim errors."""


class ConfigError(CafeSimError, ValueError):
    """Invalid configuration value (non-positive mean, no baristas, ...)."""


class SimulationInvariantError(CafeSimError, AssertionError):
    """Internal consistency check failed while the engine was running."""
