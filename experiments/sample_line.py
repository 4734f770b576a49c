"""Pick one random line from a (possibly downloaded) text file.

Usage:
    python experiments/sample_line.py
    python experiments/sample_line.py sampler=one_pass seed=42
    python experiments/sample_line.py source.path=/var/log/syslog seed=null
    python experiments/sample_line.py source.kind=range source.n_items=10000000
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import hydra
from dotenv import load_dotenv
from omegaconf import DictConfig

from randline.config import build_random_source, build_sampler, build_sequence
from randline.rng import CountingRandomSource

logger = logging.getLogger(__name__)


@dataclass
class SampleRun:
    """Outcome of one sampling run.

    Attributes:
        sampler: Short sampler name derived from its ``_target_``.
        item: The chosen item, ``None`` for an empty source.
        n_retrieved: Number of items consumed from the source.
        n_draws: Number of random draws made.
        wall_seconds: Wall-clock time for the sampling call.
    """

    sampler: str
    item: Any
    n_retrieved: int
    n_draws: int
    wall_seconds: float


def _sampler_key(cfg: DictConfig) -> str:
    """Normalize the configured sampler target class to a short key."""
    return str(cfg.sampler._target_).split(".")[-1].replace("Sampler", "").lower()


def run_sample(cfg: DictConfig) -> SampleRun:
    """Build everything ``cfg`` describes and sample once."""
    sampler = build_sampler(cfg)
    rng = CountingRandomSource(build_random_source(cfg))
    sequence = build_sequence(cfg)
    start = time.perf_counter()
    item = sampler.sample(sequence, rng)
    return SampleRun(
        sampler=_sampler_key(cfg),
        item=item,
        n_retrieved=sequence.retrieved,
        n_draws=rng.n_draws,
        wall_seconds=time.perf_counter() - start,
    )


@hydra.main(version_base=None, config_path="../configs", config_name="config")
def main(cfg: DictConfig) -> None:
    """Sample one item and log it."""
    load_dotenv()
    run = run_sample(cfg)
    logger.info(
        "%s: %s draws over %s items in %.3fs",
        run.sampler,
        f"{run.n_draws:,}",
        f"{run.n_retrieved:,}",
        run.wall_seconds,
    )
    print(repr(run.item))


if __name__ == "__main__":
    main()
