# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# stations.py
# -----------------------------------------------------------------------------
# Purpose:
#   The barista counter: one FIFO waiting line served by c identical
#   baristas. The first min(len(line), c) customers are the ones in service.
#
# Design notes:
#   - Customers leave the line by id, not by position; completions can
#     happen out of order when c > 1.
#   - in_service mirrors the customers holding a pending completion event,
#     so capacity is checked on every hand-off.
#
# Usage:
#   from cafesim.stations import BaristaCounter
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import List, Optional, Set

from .entities import Customer
from .errors import ConfigError, SimulationInvariantError

class BaristaCounter:
    """Waiting line plus a pool of `servers` interchangeable baristas.

    Parameters
    ----------
    servers : int
        Number of baristas (>= 1).
    """
    def __init__(self, servers: int):
        if isinstance(servers, bool) or not isinstance(servers, int) or servers < 1:
            raise ConfigError(f"need at least one barista, got {servers!r}")
        self.servers = servers
        self.line: List[Customer] = []
        self.in_service: Set[int] = set()

    def __len__(self) -> int:
        return len(self.line)

    @property
    def busy(self) -> int:
        return len(self.in_service)

    def join(self, customer: Customer) -> bool:
        """Append to the tail. Returns True if a barista picks the customer up."""
        self.line.append(customer)
        if len(self.line) <= self.servers:
            self._start(customer)
            return True
        return False

    def leave(self, customer: Customer):
        for idx, waiting in enumerate(self.line):
            if waiting.cid == customer.cid:
                del self.line[idx]
                break
        else:
            raise SimulationInvariantError(f"customer {customer.cid} is not in the waiting line")
        self.in_service.discard(customer.cid)

    def next_to_serve(self) -> Optional[Customer]:
        """Hand the freed barista to the customer now at position servers-1."""
        if len(self.line) < self.servers:
            return None
        customer = self.line[self.servers - 1]
        self._start(customer)
        return customer

    def _start(self, customer: Customer):
        if customer.cid in self.in_service:
            raise SimulationInvariantError(f"customer {customer.cid} is already being served")
        if len(self.in_service) >= self.servers:
            raise SimulationInvariantError(
                f"all {self.servers} baristas busy, cannot serve customer {customer.cid}"
            )
        self.in_service.add(customer.cid)
