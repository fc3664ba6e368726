# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# metrics.py
# -----------------------------------------------------------------------------
# Purpose:
#   Collect run statistics: arrivals, accumulated wait, and the queue-length
#   time series, then freeze them into a Statistics snapshot.
#
# Design notes:
#   - Keep side-effect methods (note_*) for instrumentation from the engine.
#   - Wait time is completion time minus arrival time (queueing + service).
#   - Averages return None when there is nothing to average over.
#
# Usage:
#   M = Metrics(); ...; stats = M.snapshot(end_time)
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .entities import Customer
from .errors import SimulationInvariantError

Sample = Tuple[float, int]

@dataclass(frozen=True)
class Statistics:
    """Immutable result of one run, handed to the reporting side."""
    total_customers: int
    total_wait_time: float
    customers_completed: int
    queue_lengths: Tuple[Sample, ...]
    end_time: float

    @property
    def average_wait_time(self) -> Optional[float]:
        """Total wait over customers arrived; None means "no data"."""
        if self.total_customers == 0:
            return None
        return self.total_wait_time / self.total_customers

    @property
    def mean_completed_wait(self) -> Optional[float]:
        if self.customers_completed == 0:
            return None
        return self.total_wait_time / self.customers_completed

    @property
    def max_queue_length(self) -> int:
        return max((n for _, n in self.queue_lengths), default=0)

    def time_average_queue_length(self) -> Optional[float]:
        """
        Time-weighted mean of the line length over [0, end_time], treating the
        sample series as a step function that starts at 0.
        """
        if self.end_time <= 0:
            return None
        area = 0.0
        last_t, last_n = 0.0, 0
        for t, n in self.queue_lengths:
            t = min(t, self.end_time)
            area += last_n * (t - last_t)
            last_t, last_n = t, n
        area += last_n * (self.end_time - last_t)
        return area / self.end_time

    def as_dict(self) -> Dict:
        """JSON-serializable summary for tabulation."""
        return {
            "total_customers": self.total_customers,
            "customers_completed": self.customers_completed,
            "total_wait_time": self.total_wait_time,
            "average_wait_time": self.average_wait_time,
            "mean_completed_wait": self.mean_completed_wait,
            "max_queue_length": self.max_queue_length,
            "time_average_queue_length": self.time_average_queue_length(),
            "end_time": self.end_time,
            "queue_lengths": [list(s) for s in self.queue_lengths],
        }

class Metrics:
    def __init__(self):
        self.total_customers = 0
        self.total_wait_time = 0.0
        self.customers_completed = 0
        self.queue_lengths: List[Sample] = []   # (time, line length) after each change

    def _sample(self, t: float, queue_length: int):
        if queue_length < 0:
            raise SimulationInvariantError(f"negative queue length {queue_length} at t={t}")
        self.queue_lengths.append((t, queue_length))

    def note_arrival(self, t: float, queue_length: int):
        self.total_customers += 1
        self._sample(t, queue_length)

    def note_completion(self, t: float, customer: Customer, queue_length: int):
        self.total_wait_time += t - customer.arrival_time
        self.customers_completed += 1
        self._sample(t, queue_length)

    def snapshot(self, end_time: float) -> Statistics:
        return Statistics(
            total_customers=self.total_customers,
            total_wait_time=self.total_wait_time,
            customers_completed=self.customers_completed,
            queue_lengths=tuple(self.queue_lengths),
            end_time=end_time,
        )
