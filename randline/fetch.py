"""Resolve logical data file names to verified local copies.

Files are listed in a registry of ``name sha256`` lines. A cached copy is used
when its checksum matches; otherwise the file is downloaded from ``url_base``
and verified before it is moved into the cache.
"""

from __future__ import annotations

import hashlib
import logging
import os
from pathlib import Path

import requests

logger = logging.getLogger(__name__)

DEFAULT_ENV_KEY = "RANDOM_LINE_DATA_DIR"
DEFAULT_CACHE_DIR = Path.home() / ".cache" / "random-line"
DEFAULT_URL_BASE = "https://www.gutenberg.org/files/200/"
DEFAULT_REGISTRY = "200.txt 89c1562844d4cfa23605d3390a73a5254f6515c90700b2a8d673b56a311b8709"


class FetchError(Exception):
    """A data file could not be downloaded or failed verification."""


def parse_registry(registry: str) -> dict[str, str]:
    """Parse ``name sha256`` lines into a mapping; blank lines are ignored."""
    hashes: dict[str, str] = {}
    for line in registry.splitlines():
        line = line.strip()
        if not line:
            continue
        parts = line.split()
        if len(parts) != 2:
            raise ValueError(f"Malformed registry line: {line!r}")
        name, digest = parts
        hashes[name] = digest.lower()
    return hashes


def file_sha256(path: Path, chunk_size: int = 1 << 20) -> str:
    """Hex SHA-256 digest of a file."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(chunk_size), b""):
            digest.update(chunk)
    return digest.hexdigest()


class DataFetcher:
    """Download-and-cache helper for registered data files.

    Attributes:
        file_hashes: Mapping of file name to expected SHA-256 hex digest.
        url_base: URL prefix each file name is appended to.
        env_key: Environment variable that overrides the cache directory.
        cache_dir: Fallback cache directory when ``env_key`` is unset.
        timeout: Seconds allowed for the HTTP connection and each read.
    """

    def __init__(
        self,
        file_hashes: dict[str, str] | str,
        url_base: str,
        env_key: str = DEFAULT_ENV_KEY,
        cache_dir: str | Path | None = None,
        timeout: float = 30.0,
        chunk_size: int = 8192,
    ) -> None:
        if isinstance(file_hashes, str):
            file_hashes = parse_registry(file_hashes)
        self.file_hashes = {name: digest.lower() for name, digest in file_hashes.items()}
        self.url_base = url_base if url_base.endswith("/") else url_base + "/"
        self.env_key = env_key
        self.cache_dir = Path(cache_dir) if cache_dir is not None else DEFAULT_CACHE_DIR
        self.timeout = timeout
        self.chunk_size = chunk_size

    def data_dir(self) -> Path:
        """Directory cached files live in (created on demand)."""
        override = os.environ.get(self.env_key)
        data_dir = Path(override) if override else self.cache_dir
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def fetch_file(self, name: str) -> Path:
        """Return a local path to *name*, downloading it if needed.

        Raises:
            FetchError: If *name* is not registered, the download fails, or the
                downloaded bytes do not match the registered checksum.
        """
        if name not in self.file_hashes:
            raise FetchError(f"{name!r} is not in the registry")
        expected = self.file_hashes[name]
        path = self.data_dir() / name
        if path.exists():
            if file_sha256(path) == expected:
                return path
            logger.warning("Cached %s has a stale checksum; downloading again", path)
        self._download(self.url_base + name, path)
        actual = file_sha256(path)
        if actual != expected:
            path.unlink()
            raise FetchError(f"Checksum mismatch for {name}: expected {expected}, got {actual}")
        return path

    def _download(self, url: str, dst: Path) -> None:
        logger.info("Downloading <%s> -> <%s>", url, dst)
        tmp = dst.with_name(dst.name + ".part")
        try:
            with requests.get(url, stream=True, timeout=self.timeout) as req:
                if not req.ok:
                    raise FetchError(f"GET {url} returned {req.status_code} {req.reason}")
                with tmp.open("wb") as handle:
                    for chunk in req.iter_content(self.chunk_size):
                        handle.write(chunk)
        except requests.RequestException as exc:
            tmp.unlink(missing_ok=True)
            raise FetchError(f"GET {url} failed: {exc}") from exc
        except OSError as exc:
            # must follow RequestException, which subclasses OSError
            tmp.unlink(missing_ok=True)
            raise FetchError(f"Writing {tmp} failed: {exc}") from exc
        except FetchError:
            tmp.unlink(missing_ok=True)
            raise
        os.replace(tmp, dst)


_default_fetcher: DataFetcher | None = None


def sample_file(name: str) -> Path:
    """Fetch *name* from the default registry (Project Gutenberg ``200.txt``)."""
    global _default_fetcher
    if _default_fetcher is None:
        _default_fetcher = DataFetcher(DEFAULT_REGISTRY, DEFAULT_URL_BASE)
    return _default_fetcher.fetch_file(name)
