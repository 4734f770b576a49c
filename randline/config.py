"""Build samplers, random sources and sequences from Hydra configs."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from hydra import compose, initialize_config_dir
from hydra.utils import instantiate
from omegaconf import DictConfig, OmegaConf

from randline.fetch import DataFetcher
from randline.reservoir.base import ItemSampler
from randline.rng import NumpyRandomSource
from randline.sequence import FallibleSequence, counted_range, file_lines, from_items

CONFIG_ROOT = Path(__file__).resolve().parents[1] / "configs"

SOURCE_KINDS = ("file", "range", "items")


def compose_config(overrides: list[str] | None = None, config_name: str = "config") -> DictConfig:
    """Compose the root config outside of ``@hydra.main`` (scripts, tests)."""
    with initialize_config_dir(version_base=None, config_dir=str(CONFIG_ROOT)):
        return compose(config_name=config_name, overrides=list(overrides or []))


def build_sampler(cfg: DictConfig) -> ItemSampler:
    """Instantiate ``cfg.sampler`` via its ``_target_``."""
    sampler = instantiate(cfg.sampler)
    if not isinstance(sampler, ItemSampler):
        raise TypeError(f"{type(sampler).__name__} is not an ItemSampler")
    return sampler


def build_random_source(cfg: DictConfig) -> NumpyRandomSource:
    seed = cfg.get("seed")
    return NumpyRandomSource(None if seed is None else int(seed))


def build_fetcher(cfg: DictConfig) -> DataFetcher:
    data = cfg.data
    return DataFetcher(
        file_hashes=str(data.registry),
        url_base=str(data.url_base),
        env_key=str(data.env_key),
        cache_dir=data.get("cache_dir"),
        timeout=float(data.get("timeout", 30.0)),
    )


def resolve_source_path(cfg: DictConfig, fetcher: DataFetcher | None = None) -> Path:
    """Local path of the configured file source, fetching it if necessary."""
    if cfg.source.get("path"):
        return Path(str(cfg.source.path))
    fetcher = fetcher if fetcher is not None else build_fetcher(cfg)
    return fetcher.fetch_file(str(cfg.data.file))


def build_sequence(cfg: DictConfig, fetcher: DataFetcher | None = None) -> FallibleSequence[Any]:
    """Build the sequence described by ``cfg.source``.

    Raises:
        ValueError: If ``cfg.source.kind`` is not one of :data:`SOURCE_KINDS`.
        FetchError: If a file source has to be downloaded and that fails.
    """
    kind = str(cfg.source.kind)
    if kind == "file":
        return file_lines(resolve_source_path(cfg, fetcher), encoding=str(cfg.source.encoding))
    if kind == "range":
        return counted_range(int(cfg.source.n_items))
    if kind == "items":
        return from_items(OmegaConf.to_container(cfg.source["items"], resolve=True))
    raise ValueError(f"Unknown source kind: {kind!r} (expected one of {SOURCE_KINDS})")
