"""randline: pick one uniformly random item from a stream in a single pass.

Public API
----------
The entire usable surface is importable directly from ``randline``::

    from randline import SkipAheadSampler, NumpyRandomSource, file_lines

    sampler = SkipAheadSampler()
    line = sampler.sample(file_lines("200.txt"), NumpyRandomSource(seed=0))
"""

from __future__ import annotations

# Data acquisition
from randline.fetch import DataFetcher, FetchError, sample_file

# Samplers
from randline.reservoir import (
    ItemSampler,
    OnePassSampler,
    SkipAheadSampler,
    TailRecursiveSampler,
    TwoPassSampler,
    skip_distance,
)

# Random sources
from randline.rng import CountingRandomSource, NumpyRandomSource, RandomSource

# Sequences
from randline.sequence import (
    FallibleSequence,
    RetrievalError,
    counted_range,
    file_lines,
    from_items,
    try_count,
    try_nth,
)

__version__ = "0.1.0"

__all__ = [
    # Samplers
    "ItemSampler",
    "OnePassSampler",
    "SkipAheadSampler",
    "TailRecursiveSampler",
    "TwoPassSampler",
    "skip_distance",
    # Random sources
    "RandomSource",
    "NumpyRandomSource",
    "CountingRandomSource",
    # Sequences
    "FallibleSequence",
    "RetrievalError",
    "counted_range",
    "file_lines",
    "from_items",
    "try_count",
    "try_nth",
    # Data acquisition
    "DataFetcher",
    "FetchError",
    "sample_file",
    "__version__",
]
