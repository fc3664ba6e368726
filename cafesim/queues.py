# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# queues.py
# -----------------------------------------------------------------------------
# Purpose:
#   Discrete-event primitives: the Event record and the Future Event List
#   (FEL), a min-heap that always yields the earliest pending event.
#
# Design notes:
#   - Two event kinds: "arrival" (no payload) and "completion" (carries the
#     Customer being served).
#   - Events compare on (t, seq). seq is the insertion counter of the FEL,
#     so events scheduled for the same instant are dispatched FIFO.
#
# Usage:
#   from cafesim.queues import Event, FutureEventList, ARRIVAL, COMPLETION
# -----------------------------------------------------------------------------

from __future__ import annotations
import heapq, itertools
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .entities import Customer

ARRIVAL = "arrival"
COMPLETION = "completion"

@dataclass(frozen=True, order=True)
class Event:
    """Immutable event for the FEL, ordered by time then insertion order."""
    t: float
    seq: int
    kind: str = field(compare=False)
    customer: Optional[Customer] = field(default=None, compare=False)

class FutureEventList:
    """Min-heap of scheduled events."""
    def __init__(self):
        self._heap: List[Event] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[Event]:
        """Pending events in heap order (not sorted)."""
        return iter(list(self._heap))

    def _push(self, t: float, kind: str, customer: Optional[Customer] = None) -> Event:
        ev = Event(t, next(self._counter), kind, customer)
        heapq.heappush(self._heap, ev)
        return ev

    def schedule_arrival(self, t: float) -> Event:
        return self._push(t, ARRIVAL)

    def schedule_completion(self, t: float, customer: Customer) -> Event:
        return self._push(t, COMPLETION, customer)

    def peek(self) -> Event:
        """Return the earliest event without removing it (IndexError if empty)."""
        if not self._heap:
            raise IndexError("peek from an empty event list")
        return self._heap[0]

    def pop(self) -> Event:
        """Remove and return the earliest event (IndexError if empty)."""
        if not self._heap:
            raise IndexError("pop from an empty event list")
        return heapq.heappop(self._heap)
