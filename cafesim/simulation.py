# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# simulation.py
# -----------------------------------------------------------------------------
# Purpose:
#   The coffee shop engine: clock, Future Event List, barista counter and
#   the two event handlers (arrival, order completion), plus run_one_day()
#   for a single replication driven by the raw YAML config.
#
# Design notes:
#   - All run state lives on the CoffeeShopSimulation instance, including its
#     own random.Random, so independent runs never share anything.
#   - The event that would cross the horizon stays in the FEL unprocessed.
#   - should_stop is polled between dispatches only, never inside a handler.
#
# Usage:
#   from cafesim.simulation import CoffeeShopSimulation, run_one_day
#   stats = CoffeeShopSimulation(config).run()
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging, random
from typing import Callable, Dict, Optional

from .arrivals import make_variates
from .config import SimulationConfig
from .entities import Customer
from .errors import SimulationInvariantError
from .metrics import Metrics, Statistics
from .queues import ARRIVAL, COMPLETION, Event, FutureEventList
from .stations import BaristaCounter

logger = logging.getLogger(__name__)

Observer = Callable[["CoffeeShopSimulation", Event], None]

class CoffeeShopSimulation:
    """Single-line, multi-barista coffee shop.

    Parameters
    ----------
    config : SimulationConfig
        Validated run parameters.
    interarrival, service : object, optional
        Variates with a sample() method. Default to exponentials drawn from
        random.Random(config.seed).
    observer : callable, optional
        Called as observer(sim, event) after each event is handled.
    """
    def __init__(self, config: SimulationConfig, interarrival=None, service=None,
                 observer: Optional[Observer] = None):
        self.config = config
        self.rng = random.Random(config.seed)
        default_interarrival, default_service = make_variates(config, self.rng)
        self.interarrival = interarrival if interarrival is not None else default_interarrival
        self.service = service if service is not None else default_service
        self.observer = observer

        self.t: float = 0.0
        self.FEL = FutureEventList()
        self.counter = BaristaCounter(config.servers)
        self.M = Metrics()
        self.next_customer_id = 1
        self.dispatched = 0
        self._started = False

    @property
    def horizon(self) -> float:
        return self.config.duration

    def schedule_next_arrival(self):
        self.FEL.schedule_arrival(self.t + self.interarrival.sample())

    def start_service(self, customer: Customer):
        self.FEL.schedule_completion(self.t + self.service.sample(), customer)

    def on_arrival(self, ev: Event):
        customer = Customer(self.next_customer_id, ev.t)
        self.next_customer_id += 1
        served_now = self.counter.join(customer)
        self.M.note_arrival(self.t, len(self.counter))
        self.schedule_next_arrival()
        if served_now:
            self.start_service(customer)

    def on_completion(self, ev: Event):
        customer = ev.customer
        self.counter.leave(customer)
        self.M.note_completion(ev.t, customer, len(self.counter))
        nxt = self.counter.next_to_serve()
        if nxt is not None:
            self.start_service(nxt)

    def dispatch(self, ev: Event):
        if ev.t < self.t:
            raise SimulationInvariantError(f"event at t={ev.t} dispatched after clock reached {self.t}")
        self.t = ev.t
        self.dispatched += 1
        logger.debug("t=%.4f %s customer=%s line=%d", ev.t, ev.kind,
                     ev.customer.cid if ev.customer is not None else "-", len(self.counter))
        if ev.kind == ARRIVAL:
            self.on_arrival(ev)
        elif ev.kind == COMPLETION:
            self.on_completion(ev)
        else:
            raise SimulationInvariantError(f"unknown event kind {ev.kind!r}")
        if self.observer is not None:
            self.observer(self, ev)

    def run(self, should_stop: Optional[Callable[[], bool]] = None) -> Statistics:
        """Process events up to the horizon and return the statistics snapshot."""
        if self._started:
            raise RuntimeError("a CoffeeShopSimulation can only be run once")
        self._started = True

        self.schedule_next_arrival()
        end_time = self.horizon
        while self.FEL:
            if self.FEL.peek().t > self.horizon:
                break
            if should_stop is not None and should_stop():
                logger.info("run stopped early at t=%.4f", self.t)
                end_time = self.t
                break
            self.dispatch(self.FEL.pop())

        stats = self.M.snapshot(end_time)
        logger.info(
            "run finished: seed=%d baristas=%d events=%d customers=%d completed=%d",
            self.config.seed, self.config.servers, self.dispatched,
            stats.total_customers, stats.customers_completed,
        )
        return stats

def run_one_day(cfg: Dict) -> Dict:
    """Simulate one replication from the raw YAML dict and return its summary."""
    config = SimulationConfig.from_dict(cfg)
    return CoffeeShopSimulation(config).run().as_dict()
