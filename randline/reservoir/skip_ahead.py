"""Skip-ahead reservoir sampler ("Algorithm L" for a reservoir of one).

Instead of drawing once per item, the sampler draws the distance to the next
item that will replace the current candidate. Passed-over items are still
retrieved, so the stream is consumed exactly once, but only the landed-on
items cost a draw: about ``ln(n)`` draws for ``n`` items.

With the current candidate at 1-based position ``i``, the next replacement
lands more than ``s`` items later with probability ``i / (i + s)``. Inverting
that with a uniform ``r`` gives ``ceil(r * i / (1 - r))``, which is exact.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Iterator

from randline.reservoir.base import ItemSampler
from randline.rng import RandomSource
from randline.sequence import as_sequence, try_nth

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


def skip_distance(r: float, index1: int) -> int:
    """Return the offset from position *index1* to the next candidate.

    Args:
        r: Uniform draw from ``[0, 1)``.
        index1: 1-based position of the current candidate.

    Returns:
        Offset of at least 1. Values of *r* close to 1 give very long skips,
        and are not clamped.
    """
    if not 0.0 <= r < 1.0:
        raise ValueError(f"unit draw out of range: {r!r}")
    return max(1, math.ceil(r * index1 / (1.0 - r)))


class SkipAheadSampler(ItemSampler):
    """Uniform single-item sampler with O(log n) expected draws."""

    def candidates(self, sequence: Iterable[Any], rng: RandomSource) -> Iterator[tuple[int, Any]]:
        """Yield ``(index1, item)`` for every item the sampler lands on.

        The last yielded item is the sample. ``index1`` strictly increases.
        """
        sequence = as_sequence(sequence)
        offset = 1
        index1 = 1
        while True:
            item = try_nth(sequence, offset - 1, _EXHAUSTED)
            if item is _EXHAUSTED:
                return
            yield index1, item
            offset = skip_distance(rng.random(), index1)
            index1 += offset

    def sample(self, sequence: Iterable[Any], rng: RandomSource) -> Any | None:
        """Return a uniformly chosen item from *sequence*."""
        random_item = None
        for index1, item in self.candidates(sequence, rng):
            logger.debug("Landed on item %s", f"{index1:,}")
            random_item = item
        return random_item
