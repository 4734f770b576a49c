"""One-pass sampler written as a tail-recursive step function.

Each step consumes one item and either finishes or hands back the arguments of
the next step. :meth:`TailRecursiveSampler.sample` runs the steps in a loop,
so stack depth stays constant however long the stream is.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from randline.reservoir.base import ItemSampler
from randline.rng import RandomSource
from randline.sequence import as_sequence

_EXHAUSTED = object()


def step(
    sequence: Iterator[Any], rng: RandomSource, index1: int, random_item: Any
) -> tuple[bool, int, Any]:
    """Consume one item.

    Returns:
        ``(done, index1, random_item)``. When ``done`` is ``True`` the stream
        is exhausted and ``random_item`` is the sample; otherwise the other two
        values are the arguments of the next step.
    """
    item = next(sequence, _EXHAUSTED)
    if item is _EXHAUSTED:
        return True, index1, random_item
    if rng.integers(0, index1) == 0:
        random_item = item
    return False, index1 + 1, random_item


class TailRecursiveSampler(ItemSampler):
    """Same distribution and draw sequence as :class:`OnePassSampler`."""

    def sample(self, sequence: Iterable[Any], rng: RandomSource) -> Any | None:
        """Return a uniformly chosen item from *sequence*."""
        sequence = as_sequence(sequence)
        done, index1, random_item = False, 1, None
        while not done:
            done, index1, random_item = step(sequence, rng, index1, random_item)
        return random_item
