"""Benchmark comparing pareto-frontier's exact hypervolume with pymoo.

For every synthetic front shape, number of objectives and front size this
script measures the runtime of both implementations and the absolute
disagreement between them, then runs the live frontier store on a noisy
stream of candidates to record insertion cost and hypervolume growth.

Usage:
    uv run python benchmarks/hypervolume/run_benchmark.py
"""

import json
import logging
import sys
import time
from collections import defaultdict
from datetime import UTC, datetime
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np

from benchmarks.hypervolume.fronts import FRONTS
from benchmarks.metrics import reference_hypervolume

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# Experiment parameters
OBJECTIVE_COUNTS = [2, 3, 4, 5]
FRONT_SIZES = {2: [10, 100, 500], 3: [10, 50, 100], 4: [10, 25, 50], 5: [10, 20, 30]}
N_RUNS = 5
SEEDS = list(range(N_RUNS))

# Frontier store stream
STREAM_LENGTH = 500
STREAM_MAX_SIZE = 50
STREAM_NOISE = 0.05


def run_pareto_frontier(points: np.ndarray, reference: np.ndarray) -> tuple[float, float]:
    """Compute hypervolume with pareto-frontier.

    Returns:
        Tuple of (hypervolume, elapsed_time_seconds).
    """
    from pareto_frontier import hypervolume

    start_time = time.perf_counter()
    hv = hypervolume(points, reference)
    elapsed = time.perf_counter() - start_time
    return hv, elapsed


def run_pymoo(points: np.ndarray, reference: np.ndarray) -> tuple[float, float]:
    """Compute hypervolume with pymoo.

    Returns:
        Tuple of (hypervolume, elapsed_time_seconds).
    """
    start_time = time.perf_counter()
    hv = reference_hypervolume(points, reference)
    elapsed = time.perf_counter() - start_time
    return hv, elapsed


def run_stream(n_obj: int, seed: int) -> dict:
    """Feed a noisy candidate stream through the frontier store.

    Candidates are drawn around a concave front that slowly moves outwards,
    so later generations keep displacing earlier members.

    Returns:
        Dictionary with final size, hypervolume and mean insertion time.
    """
    from pareto_frontier import Candidate, FrontierConfig, add_solution, new_frontier

    rng = np.random.default_rng(seed)
    names = tuple(f"f{i + 1}" for i in range(n_obj))
    config = FrontierConfig(
        objectives=names,
        directions=dict.fromkeys(names, "maximize"),
        reference_point=dict.fromkeys(names, 0.0),
        max_size=STREAM_MAX_SIZE,
    )
    frontier = new_frontier(config)

    base = FRONTS["concave"](STREAM_LENGTH, n_obj, rng)
    progress = np.linspace(0.5, 1.0, STREAM_LENGTH)[:, np.newaxis]
    noisy = np.clip(base * progress + rng.normal(scale=STREAM_NOISE, size=base.shape), 0.0, 1.0)

    start_time = time.perf_counter()
    for i, row in enumerate(noisy):
        values = dict(zip(names, row.tolist(), strict=True))
        frontier = add_solution(frontier, Candidate(id=f"c{i}", objectives=values, normalized=values))
    elapsed = time.perf_counter() - start_time

    return {
        "size": len(frontier),
        "hypervolume": frontier.hypervolume,
        "time_per_insert": elapsed / STREAM_LENGTH,
    }


def run_benchmark() -> dict:
    """Run the full benchmark suite.

    Returns:
        Dictionary containing metadata and results.
    """
    timestamp = datetime.now(UTC).isoformat()

    metadata = {
        "timestamp": timestamp,
        "parameters": {
            "objective_counts": OBJECTIVE_COUNTS,
            "front_sizes": {str(k): v for k, v in FRONT_SIZES.items()},
            "n_runs": N_RUNS,
            "seeds": SEEDS,
            "stream_length": STREAM_LENGTH,
            "stream_max_size": STREAM_MAX_SIZE,
            "stream_noise": STREAM_NOISE,
        },
    }

    results = []
    total_runs = sum(len(FRONT_SIZES[m]) for m in OBJECTIVE_COUNTS) * len(FRONTS) * N_RUNS
    current_run = 0

    for front_name, front_fn in FRONTS.items():
        for n_obj in OBJECTIVE_COUNTS:
            reference = np.zeros(n_obj)
            for n_points in FRONT_SIZES[n_obj]:
                for seed in SEEDS:
                    current_run += 1
                    logger.info(
                        f"Running [{current_run}/{total_runs}]: {front_name} front, M={n_obj}, N={n_points} (seed={seed})"
                    )

                    points = front_fn(n_points, n_obj, np.random.default_rng(seed))
                    hv, elapsed = run_pareto_frontier(points, reference)
                    ref_hv, ref_elapsed = run_pymoo(points, reference)

                    results.append(
                        {
                            "front": front_name,
                            "n_obj": n_obj,
                            "n_points": n_points,
                            "seed": seed,
                            "hypervolume": hv,
                            "reference_hypervolume": ref_hv,
                            "abs_error": abs(hv - ref_hv),
                            "time_seconds": elapsed,
                            "reference_time_seconds": ref_elapsed,
                        }
                    )

                    logger.info(f"  HV: {hv:.6f} (pymoo {ref_hv:.6f}), Time: {elapsed:.4f}s vs {ref_elapsed:.4f}s")

    streams = []
    for n_obj in OBJECTIVE_COUNTS[:3]:
        for seed in SEEDS:
            logger.info(f"Streaming {STREAM_LENGTH} candidates, M={n_obj} (seed={seed})")
            stream = run_stream(n_obj, seed)
            streams.append({"n_obj": n_obj, "seed": seed, **stream})
            logger.info(f"  Size: {stream['size']}, HV: {stream['hypervolume']:.4f}")

    return {"metadata": metadata, "results": results, "streams": streams}


def print_summary(results: dict) -> None:
    """Print a summary table of the benchmark results.

    Args:
        results: The benchmark results dictionary.
    """
    errors = defaultdict(list)
    times = defaultdict(lambda: defaultdict(list))

    for r in results["results"]:
        key = (r["n_obj"], r["n_points"])
        errors[key].append(r["abs_error"])
        times[key]["pareto-frontier"].append(r["time_seconds"])
        times[key]["pymoo"].append(r["reference_time_seconds"])

    print("\n" + "=" * 70)
    print("HYPERVOLUME BENCHMARK SUMMARY")
    print("=" * 70)
    print(f"\nFronts: {', '.join(FRONTS)}, runs={N_RUNS}")
    print()

    header = f"{'M':>3}{'N':>6}{'max |error|':>16}{'pareto-frontier':>18}{'pymoo':>12}"
    print(header)
    print("-" * 55)

    for n_obj, n_points in sorted(errors):
        row = f"{n_obj:>3}{n_points:>6}{max(errors[(n_obj, n_points)]):>16.2e}"
        for lib in ["pareto-frontier", "pymoo"]:
            width = 18 if lib == "pareto-frontier" else 12
            row += f"{np.mean(times[(n_obj, n_points)][lib]):>{width}.4f}"
        print(row)

    print("-" * 55)

    print("\nFrontier store stream (mean over seeds):")
    by_obj = defaultdict(list)
    for s in results["streams"]:
        by_obj[s["n_obj"]].append(s)

    print(f"{'M':>3}{'size':>8}{'hypervolume':>14}{'ms/insert':>12}")
    print("-" * 37)
    for n_obj in sorted(by_obj):
        runs = by_obj[n_obj]
        size = np.mean([s["size"] for s in runs])
        hv = np.mean([s["hypervolume"] for s in runs])
        per_insert = 1000 * np.mean([s["time_per_insert"] for s in runs])
        print(f"{n_obj:>3}{size:>8.1f}{hv:>14.4f}{per_insert:>12.3f}")

    print()


def main() -> None:
    """Main entry point for the benchmark."""
    logger.info("Starting hypervolume benchmark suite")
    logger.info(f"Parameters: objectives={OBJECTIVE_COUNTS}, runs={N_RUNS}")

    results = run_benchmark()

    # Save results to JSON
    output_path = Path(__file__).parent / "results" / "benchmark_results.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)

    logger.info(f"Results saved to {output_path}")

    print_summary(results)


if __name__ == "__main__":
    main()
