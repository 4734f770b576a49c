"""Two-pass sampler for sources that can be opened more than once."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from randline.rng import RandomSource
from randline.sequence import as_sequence, try_count, try_nth

logger = logging.getLogger(__name__)


class TwoPassSampler:
    """Count the items, draw an index, then fetch that item.

    Only one draw is needed, but the source is read twice. It must yield the
    same items both times.
    """

    def sample(self, open_source: Callable[[], Iterable[Any]], rng: RandomSource) -> Any | None:
        """Return a uniformly chosen item.

        Args:
            open_source: Zero-argument callable returning a fresh iterable over
                the items, e.g. ``lambda: file_lines(path)``.
            rng: Random source.

        Returns:
            The chosen item, or ``None`` if the source is empty.

        Raises:
            RetrievalError: If any item could not be retrieved on either pass.
        """
        count = try_count(as_sequence(open_source()))
        if count == 0:
            return None
        index0 = rng.integers(0, count)
        logger.debug("Picked item %s of %s", f"{index0 + 1:,}", f"{count:,}")
        return try_nth(as_sequence(open_source()), index0)
