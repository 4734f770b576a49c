"""Fallible, single-use item sequences and the primitives that walk them.

A :class:`FallibleSequence` hands out items one at a time. Retrieval of any
single item may fail; the failure is raised as :class:`RetrievalError` and the
sequence refuses to touch its source again afterwards. Exhaustion is the usual
``StopIteration``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")

DEFAULT_RETRIEVAL_ERRORS: tuple[type[BaseException], ...] = (OSError, UnicodeDecodeError)

_MISSING = object()


class RetrievalError(Exception):
    """An item could not be retrieved from a sequence.

    Attributes:
        position: 1-based position of the item that failed.
        cause: The exception reported by the underlying source.
    """

    def __init__(self, position: int, cause: BaseException) -> None:
        super().__init__(f"failed to retrieve item {position:,}: {cause}")
        self.position = position
        self.cause = cause


class FallibleSequence(Generic[T]):
    """Single-use iterator whose item retrieval may fail.

    Attributes:
        retrieved: Number of items successfully retrieved so far. Passed-over
            items count; failed retrievals do not.
    """

    def __init__(
        self,
        source: Iterable[T],
        errors: tuple[type[BaseException], ...] = DEFAULT_RETRIEVAL_ERRORS,
    ) -> None:
        """Wrap an iterable.

        Args:
            source: Any iterable. It is consumed destructively.
            errors: Exception types raised by ``source`` that count as
                retrieval failures. Anything else propagates untouched.
        """
        self._iterator = iter(source)
        self._errors = errors
        self._error: RetrievalError | None = None
        self.retrieved = 0

    def __iter__(self) -> FallibleSequence[T]:
        return self

    def __next__(self) -> T:
        if self._error is not None:
            raise self._error
        try:
            item = next(self._iterator)
        except RetrievalError as exc:
            self._error = exc
            raise
        except self._errors as exc:
            self._error = RetrievalError(self.retrieved + 1, exc)
            raise self._error from exc
        self.retrieved += 1
        return item

    @property
    def failed(self) -> bool:
        """``True`` once a retrieval has failed."""
        return self._error is not None


def as_sequence(source: Iterable[T]) -> FallibleSequence[T]:
    """Return *source* unchanged if it is already fallible, else wrap it."""
    if isinstance(source, FallibleSequence):
        return source
    return FallibleSequence(source)


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------


def from_items(items: Iterable[T]) -> FallibleSequence[T]:
    """Sequence over an in-memory iterable."""
    return FallibleSequence(items)


def counted_range(n: int) -> FallibleSequence[int]:
    """Sequence over ``0, 1, ..., n - 1``."""
    return FallibleSequence(range(n))


def _read_lines(path: Path, encoding: str) -> Iterator[str]:
    with path.open("r", encoding=encoding, newline="") as handle:
        for line in handle:
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            yield line


def file_lines(path: str | Path, encoding: str = "utf-8") -> FallibleSequence[str]:
    """Sequence over the lines of a text file, line terminators stripped.

    The file is opened lazily on the first retrieval, so a missing or
    unreadable file surfaces as a :class:`RetrievalError` at position 1.
    """
    return FallibleSequence(_read_lines(Path(path), encoding))


# ---------------------------------------------------------------------------
# Walking primitives
# ---------------------------------------------------------------------------


def try_nth(sequence: Iterator[T], n: int, default: Any = None) -> T | Any:
    """Discard exactly *n* items, then return the next one.

    Args:
        sequence: Iterator to advance. Consumed in place.
        n: Number of items to pass over before the returned one.
        default: Returned when the sequence runs out during the discard phase
            or right after it.

    Returns:
        The item at 0-based offset *n*, or *default*.

    Raises:
        RetrievalError: The first retrieval failure, at whatever position it
            occurs. Nothing further is retrieved.
        ValueError: If *n* is negative.
    """
    if n < 0:
        raise ValueError(f"cannot advance by a negative count ({n})")
    for _ in range(n):
        if next(sequence, _MISSING) is _MISSING:
            return default
    return next(sequence, default)


def try_count(sequence: Iterable[Any]) -> int:
    """Consume *sequence* and return how many items it produced."""
    count = 0
    for _ in sequence:
        count += 1
    return count
