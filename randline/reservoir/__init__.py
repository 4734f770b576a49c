"""Single-item reservoir samplers."""

from randline.reservoir.base import ItemSampler
from randline.reservoir.one_pass import OnePassSampler
from randline.reservoir.recursive import TailRecursiveSampler
from randline.reservoir.skip_ahead import SkipAheadSampler, skip_distance
from randline.reservoir.two_pass import TwoPassSampler

__all__ = [
    "ItemSampler",
    "OnePassSampler",
    "SkipAheadSampler",
    "TailRecursiveSampler",
    "TwoPassSampler",
    "skip_distance",
]
