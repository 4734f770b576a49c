"""Uniformity checks and timing for the samplers.

Everything here runs samplers over :func:`~randline.sequence.counted_range`
sources, so the selected item doubles as its own 0-based position.
"""

from __future__ import annotations

import time
from typing import Any, Mapping

import numpy as np
import pandas as pd
from scipy.stats import chisquare

from randline.reservoir.base import ItemSampler
from randline.rng import CountingRandomSource, NumpyRandomSource
from randline.sequence import counted_range


def sample_counts(sampler: ItemSampler, n_items: int, n_trials: int, seed: int = 0) -> np.ndarray:
    """Histogram of the items chosen over *n_trials* runs.

    All trials share one generator seeded with *seed*, so each trial sees a
    different but reproducible stream of draws.

    Returns:
        Integer array of shape ``(n_items,)``.
    """
    if n_items <= 0:
        raise ValueError("n_items must be positive")
    rng = NumpyRandomSource(seed)
    counts = np.zeros(n_items, dtype=np.int64)
    for _ in range(n_trials):
        counts[sampler.sample(counted_range(n_items), rng)] += 1
    return counts


def uniformity_test(counts: np.ndarray) -> dict[str, float]:
    """Chi-squared goodness of fit of *counts* against the uniform distribution.

    Returns:
        ``{"chi2": float, "p_value": float, "n_trials": float}``.
    """
    counts = np.asarray(counts, dtype=np.float64)
    if counts.size < 2:
        raise ValueError("need at least two categories")
    result = chisquare(counts)
    return {
        "chi2": float(result.statistic),
        "p_value": float(result.pvalue),
        "n_trials": float(counts.sum()),
    }


def benchmark_samplers(
    samplers: Mapping[str, ItemSampler], n_items: int, seed: int = 0
) -> pd.DataFrame:
    """Time each sampler once over ``counted_range(n_items)``.

    Returns:
        DataFrame with one row per sampler and columns ``sampler``,
        ``n_items``, ``item``, ``n_draws``, ``n_retrieved``, ``seconds``.
    """
    rows: list[dict[str, Any]] = []
    for name, sampler in samplers.items():
        rng = CountingRandomSource(NumpyRandomSource(seed))
        sequence = counted_range(n_items)
        start = time.perf_counter()
        item = sampler.sample(sequence, rng)
        seconds = time.perf_counter() - start
        rows.append(
            {
                "sampler": name,
                "n_items": n_items,
                "item": item,
                "n_draws": rng.n_draws,
                "n_retrieved": sequence.retrieved,
                "seconds": seconds,
            }
        )
    return pd.DataFrame(rows)
