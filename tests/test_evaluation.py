"""Tests for uniformity checks and sampler benchmarking."""

from __future__ import annotations

import numpy as np
import pytest

from randline.evaluation import benchmark_samplers, sample_counts, uniformity_test
from randline.reservoir import OnePassSampler, SkipAheadSampler, TailRecursiveSampler

SAMPLERS = {
    "one_pass": OnePassSampler(),
    "skip_ahead": SkipAheadSampler(),
    "recursive": TailRecursiveSampler(),
}


@pytest.mark.parametrize("name", sorted(SAMPLERS))
def test_samplers_are_uniform_over_three_items(name: str) -> None:
    """Chi-squared against uniform must not reject for n=3."""
    counts = sample_counts(SAMPLERS[name], n_items=3, n_trials=30_000, seed=11)
    assert counts.sum() == 30_000
    stats = uniformity_test(counts)
    assert stats["p_value"] > 1e-4
    assert np.allclose(counts / counts.sum(), 1 / 3, atol=0.02)


def test_skip_ahead_uniform_over_many_items() -> None:
    counts = sample_counts(SkipAheadSampler(), n_items=20, n_trials=40_000, seed=5)
    assert uniformity_test(counts)["p_value"] > 1e-4


def test_uniformity_test_rejects_skewed_counts() -> None:
    stats = uniformity_test(np.array([9000, 500, 500]))
    assert stats["p_value"] < 1e-6
    assert stats["n_trials"] == 10_000


def test_uniformity_test_needs_two_categories() -> None:
    with pytest.raises(ValueError):
        uniformity_test(np.array([10]))


def test_sample_counts_is_reproducible() -> None:
    a = sample_counts(SkipAheadSampler(), n_items=10, n_trials=500, seed=2)
    b = sample_counts(SkipAheadSampler(), n_items=10, n_trials=500, seed=2)
    assert np.array_equal(a, b)


def test_benchmark_table() -> None:
    table = benchmark_samplers(SAMPLERS, n_items=5_000, seed=0)
    assert list(table["sampler"]) == ["one_pass", "skip_ahead", "recursive"]
    assert (table["n_retrieved"] == 5_000).all()
    by_name = table.set_index("sampler")
    assert by_name.loc["one_pass", "n_draws"] == 5_000
    assert by_name.loc["skip_ahead", "n_draws"] < 5_000
    assert by_name.loc["one_pass", "item"] == by_name.loc["recursive", "item"]
