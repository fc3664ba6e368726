# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# entities.py
# -----------------------------------------------------------------------------
# Purpose:
#   Entity definitions for the coffee shop DES.
#
# Design notes:
#   - A Customer is created when its arrival event is handled and is
#     referenced (never copied) by at most one pending completion event.
#   - cid is unique per run, so it is what the waiting line matches on.
#
# Usage:
#   from cafesim.entities import Customer
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class Customer:
    cid: int                         # sequential id, starts at 1
    arrival_time: float              # minutes since the shop opened
