"""Random sources used by the samplers.

Samplers only ever ask for two things: a uniform integer from a half-open
range and a uniform float from ``[0, 1)``. Anything implementing
:class:`RandomSource` can be substituted, which keeps tests reproducible via a
seeded generator while production code runs unseeded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class RandomSource(ABC):
    """Capability interface for uniform random draws."""

    @abstractmethod
    def integers(self, low: int, high: int) -> int:
        """Return a uniform integer from ``{low, ..., high - 1}``.

        Raises:
            ValueError: If ``high <= low``. This is a caller defect, not a
                data error.
        """

    @abstractmethod
    def random(self) -> float:
        """Return a uniform float from the half-open interval ``[0, 1)``."""


class NumpyRandomSource(RandomSource):
    """Random source backed by :func:`numpy.random.default_rng`."""

    def __init__(self, seed: int | None = None) -> None:
        """Initialize the random source.

        Args:
            seed: Random seed for reproducibility. ``None`` draws fresh
                entropy from the operating system.
        """
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def integers(self, low: int, high: int) -> int:
        if high <= low:
            raise ValueError(f"empty draw range [{low}, {high})")
        return int(self._rng.integers(low, high))

    def random(self) -> float:
        return float(self._rng.random())


class CountingRandomSource(RandomSource):
    """Wrap another source and count the draws made through it."""

    def __init__(self, inner: RandomSource) -> None:
        self.inner = inner
        self.n_integer_draws = 0
        self.n_unit_draws = 0

    @property
    def n_draws(self) -> int:
        """Total number of draws of either kind."""
        return self.n_integer_draws + self.n_unit_draws

    def integers(self, low: int, high: int) -> int:
        value = self.inner.integers(low, high)
        self.n_integer_draws += 1
        return value

    def random(self) -> float:
        value = self.inner.random()
        self.n_unit_draws += 1
        return value
