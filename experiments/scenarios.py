"""
experiments/scenarios.py

Holds scenario definitions (decision variables) to sweep during experiments.
Add staffing levels and demand levels here; overrides are merged onto
cafesim/baseline.yaml.
"""

from __future__ import annotations

BASELINE = {
    "name": "baseline",
    "overrides": {},  # override config keys here per scenario
}

ONE_BARISTA = {
    "name": "one_barista",
    "overrides": {
        "service": {"servers": 1},
    },
}

THREE_BARISTAS = {
    "name": "three_baristas",
    "overrides": {
        "service": {"servers": 3},
    },
}

MORNING_RUSH = {
    "name": "morning_rush",
    "overrides": {
        "arrivals": {"mean_interarrival_minutes": 1.5},
        "sim": {"duration_minutes": 120},
    },
}

SCENARIOS = [
    BASELINE,
    ONE_BARISTA,
    THREE_BARISTAS,
    MORNING_RUSH,
]
