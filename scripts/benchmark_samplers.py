#!/usr/bin/env python
"""
Time the single-item samplers over a counted range.

Writes a CSV with one row per sampler (wall time, draws, retrievals) and, with
``--histogram-trials``, a file of repeated skip-ahead samples over ``range(100)``
(one item per line) for plotting the distribution.

Usage:
    python scripts/benchmark_samplers.py
    python scripts/benchmark_samplers.py --n-items 10000000 --histogram-trials 100000
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from randline.evaluation import benchmark_samplers, sample_counts, uniformity_test
from randline.reservoir import OnePassSampler, SkipAheadSampler, TailRecursiveSampler
from randline.rng import NumpyRandomSource
from randline.sequence import counted_range

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

SAMPLERS = {
    "recursive": TailRecursiveSampler(),
    "one_pass": OnePassSampler(),
    "skip_ahead": SkipAheadSampler(),
}


def write_histogram_samples(path: Path, n_trials: int, n_items: int = 100, seed: int = 0) -> None:
    """Write *n_trials* skip-ahead samples over ``range(n_items)``, one per line."""
    rng = NumpyRandomSource(seed)
    sampler = SkipAheadSampler()
    with path.open("w", encoding="utf-8") as handle:
        for _ in range(n_trials):
            handle.write(f"{sampler.sample(counted_range(n_items), rng)}\n")


def _format_count(value: int | None) -> str:
    """Comma-format a count; an empty range samples nothing."""
    return "-" if value is None else f"{value:,}"


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark single-item reservoir samplers")
    parser.add_argument("--n-items", type=int, default=10_000_000)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--output", type=str, default="benchmark.csv")
    parser.add_argument("--histogram-trials", type=int, default=0)
    parser.add_argument("--histogram-output", type=str, default="100s.txt")
    parser.add_argument("--uniformity-trials", type=int, default=0)
    args = parser.parse_args(argv)

    logger.info("Benchmarking %d samplers over %s items", len(SAMPLERS), f"{args.n_items:,}")
    table = benchmark_samplers(SAMPLERS, n_items=args.n_items, seed=args.seed)
    for row in table.itertuples(index=False):
        logger.info(
            "%-10s item=%s draws=%s retrieved=%s %.3fs",
            row.sampler,
            _format_count(row.item),
            f"{row.n_draws:,}",
            f"{row.n_retrieved:,}",
            row.seconds,
        )
    table.to_csv(args.output, index=False)
    logger.info("Saved to: %s", args.output)

    if args.uniformity_trials > 0:
        for name, sampler in SAMPLERS.items():
            stats = uniformity_test(sample_counts(sampler, 3, args.uniformity_trials, args.seed))
            logger.info("%-10s chi2=%.3f p=%.4f", name, stats["chi2"], stats["p_value"])

    if args.histogram_trials > 0:
        write_histogram_samples(Path(args.histogram_output), args.histogram_trials, seed=args.seed)
        logger.info("Wrote %s samples to %s", f"{args.histogram_trials:,}", args.histogram_output)


if __name__ == "__main__":
    main()
