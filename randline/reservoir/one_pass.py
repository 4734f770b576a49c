"""One-pass reservoir sampler that draws once per item."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from randline.reservoir.base import ItemSampler
from randline.rng import RandomSource
from randline.sequence import as_sequence

logger = logging.getLogger(__name__)


class OnePassSampler(ItemSampler):
    """Keep the i-th item with probability ``1 / i``.

    Every item costs one integer draw, so a stream of ``n`` items needs ``n``
    draws.
    """

    def sample(self, sequence: Iterable[Any], rng: RandomSource) -> Any | None:
        """Return a uniformly chosen item from *sequence*."""
        random_item = None
        for index0, item in enumerate(as_sequence(sequence)):
            if rng.integers(0, index0 + 1) == 0:
                logger.debug("Replaced candidate at item %s", f"{index0 + 1:,}")
                random_item = item
        return random_item
