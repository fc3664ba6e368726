"""
experiments/run_experiments.py

Experiment harness that loads the baseline config, applies scenario overrides,
runs independent seeded replications, and reports the coffee shop KPIs
(customers, average wait, queue length) with confidence intervals. It is
also the reporting side of a run: it prints the summary and draws the
queue-length chart from the returned Statistics, never touching the engine.
"""

from __future__ import annotations
import argparse, logging, math, os, sys
from statistics import mean, stdev
from typing import Callable, Dict, List, Optional, Sequence

from scipy.stats import t

from cafesim.config import SimulationConfig, apply_overrides, load_cfg
from cafesim.errors import ConfigError
from cafesim.metrics import Statistics
from cafesim.simulation import CoffeeShopSimulation

from .scenarios import SCENARIOS

logger = logging.getLogger(__name__)

def mean_ci(values: List[float], confidence_level: float) -> tuple[float, float]:
    """Return (mean, half-width) using a t-distribution critical value."""
    if not values:
        return 0.0, 0.0
    mu = mean(values)
    n = len(values)
    if n < 2:
        return mu, 0.0
    level = min(max(confidence_level, 0.0), 0.999999)
    alpha = 1.0 - level
    tcrit = t.ppf(1 - alpha / 2.0, n - 1)
    half = tcrit * (stdev(values) / math.sqrt(n))
    return mu, float(half)

def run_replications(cfg: Dict, replications: int) -> List[Statistics]:
    """
    Run `replications` independent days. Replication i uses seed base+i and
    its own engine, so no state is shared between runs.
    """
    base = SimulationConfig.from_dict(cfg)
    results = []
    for rep in range(replications):
        config = base.with_seed(base.seed + rep)
        results.append(CoffeeShopSimulation(config).run())
    return results

def series(results: List[Statistics], extractor: Callable[[Statistics], Optional[float]]) -> List[float]:
    """Collect a numeric series across replications, skipping undefined values."""
    values = []
    for res in results:
        val = extractor(res)
        if val is not None:
            values.append(float(val))
    return values

def _fmt_minutes(value: Optional[float]) -> str:
    return "no data" if value is None else f"{value:.2f} min"

def format_report(name: str, stats: Statistics) -> str:
    """Console summary of one run."""
    tavg = stats.time_average_queue_length()
    lines = [
        f"Simulation Results: {name}",
        f"  Total customers: {stats.total_customers}",
        f"  Orders completed: {stats.customers_completed}",
        f"  Average wait time: {_fmt_minutes(stats.average_wait_time)}",
        f"  Time-average queue length: {'no data' if tavg is None else f'{tavg:.2f}'}",
        f"  Max queue length: {stats.max_queue_length}",
    ]
    return "\n".join(lines)

def format_replication_report(name: str, results: List[Statistics], confidence: float) -> str:
    """Console summary across replications (mean ± CI half-width)."""
    customers = mean_ci(series(results, lambda r: r.total_customers), confidence)
    waits = series(results, lambda r: r.average_wait_time)
    queue = mean_ci(series(results, lambda r: r.time_average_queue_length()), confidence)
    lines = [
        f"Scenario: {name} (replications={len(results)}, {confidence * 100.0:.1f}% CI)",
        f"  Customers/run: {customers[0]:.2f} ± {customers[1]:.2f}",
    ]
    if waits:
        wait = mean_ci(waits, confidence)
        lines.append(f"  Avg wait: {wait[0]:.2f} ± {wait[1]:.2f} min")
    else:
        lines.append("  Avg wait: no data")
    lines.append(f"  Time-average queue length: {queue[0]:.2f} ± {queue[1]:.2f}")
    return "\n".join(lines)

def plot_queue_length(stats: Statistics, scenario_name: str, out_dir: str) -> Optional[str]:
    """
    Persist a PNG step chart of queue length versus time for one run.
    Returns the path, or None when the run recorded no samples.
    """
    if not stats.queue_lengths:
        return None
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    x = [0.0] + [pt[0] for pt in stats.queue_lengths]
    y = [0] + [pt[1] for pt in stats.queue_lengths]
    plt.figure(figsize=(9, 5))
    plt.step(x, y, where="post", label="Queue length", color="#2563eb")
    plt.xlim(left=0, right=max(stats.end_time, x[-1]))
    plt.ylim(bottom=0, top=max(y) + 1)
    plt.xlabel("Time (minutes)")
    plt.ylabel("Queue Length")
    plt.title(f"Coffee Shop Queue Length Over Time ({scenario_name})")
    plt.legend()
    plt.grid(True, linestyle="--", alpha=0.4)
    os.makedirs(out_dir, exist_ok=True)
    safe_name = scenario_name.lower().replace(" ", "_")
    out_path = os.path.join(out_dir, f"{safe_name}_queue_length.png")
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()
    return out_path

def experiment_settings(exp_cfg: Dict, replications_override: Optional[int] = None) -> tuple[int, float]:
    """Validate the experiments section: (replications, confidence_level)."""
    replications = exp_cfg.get("replications", 1) if replications_override is None else replications_override
    if isinstance(replications, bool) or not isinstance(replications, int) or replications < 1:
        raise ConfigError(f"replications must be an integer >= 1, got {replications!r}")
    confidence = exp_cfg.get("confidence_level", 0.95)
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)) or not 0.0 < confidence < 1.0:
        raise ConfigError(f"confidence_level must be between 0 and 1, got {confidence!r}")
    return replications, float(confidence)

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run coffee shop queue simulations.")
    p.add_argument("--config", help="YAML config path (default: the packaged baseline.yaml)")
    p.add_argument("--scenario", action="append",
                   help="scenario name to run (repeatable; default: all)")
    p.add_argument("--replications", type=int, help="override experiments.replications")
    p.add_argument("--no-plot", action="store_true", help="skip the queue-length charts")
    p.add_argument("-v", "--verbose", action="store_true", help="log every event")
    return p

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point: drive the selected scenarios, replications, and report KPIs."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = load_cfg(args.config)
        exp_cfg = cfg.get("experiments", {}) or {}
        if not isinstance(exp_cfg, dict):
            raise ConfigError(f"experiments section must be a mapping, got {exp_cfg!r}")
        replications, confidence = experiment_settings(exp_cfg, args.replications)
        plot = exp_cfg.get("plot", True) and not args.no_plot
        out_dir = os.path.abspath(exp_cfg.get("output_dir", "output"))

        scenarios = SCENARIOS
        if args.scenario:
            by_name = {sc["name"]: sc for sc in SCENARIOS}
            unknown = [name for name in args.scenario if name not in by_name]
            if unknown:
                raise ConfigError(f"unknown scenario(s): {', '.join(unknown)}")
            scenarios = [by_name[name] for name in args.scenario]

        for sc in scenarios:
            sc_cfg = apply_overrides(cfg, sc["overrides"])
            results = run_replications(sc_cfg, replications)
            print(format_report(sc["name"], results[0]))
            if replications > 1:
                print(format_replication_report(sc["name"], results, confidence))
            if plot:
                plot_path = plot_queue_length(results[0], sc["name"], out_dir)
                if plot_path:
                    print(f"  Queue length chart saved to: {plot_path}")
            print("-")
    except ConfigError as exc:
        logger.error("configuration error: %s", exc)
        return 2
    return 0

if __name__ == "__main__":
    sys.exit(main())
