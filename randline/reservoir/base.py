"""Single-item reservoir sampling interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from randline.rng import RandomSource


class ItemSampler(ABC):
    """Base interface for strategies that pick one item from a stream."""

    @abstractmethod
    def sample(self, sequence: Iterable[Any], rng: RandomSource) -> Any | None:
        """Return one uniformly chosen item, or ``None`` for an empty stream.

        Raises:
            RetrievalError: If any item could not be retrieved. No partial
                result is returned.
        """
