"""Tests for the download-and-cache helper (network is always patched)."""

from __future__ import annotations

import hashlib

import pytest
import requests

from randline.fetch import DataFetcher, FetchError, file_sha256, parse_registry

PAYLOAD = b"first line\nsecond line\n"
DIGEST = hashlib.sha256(PAYLOAD).hexdigest()


class _FakeResponse:
    def __init__(self, body: bytes, status_code: int = 200, reason: str = "OK") -> None:
        self.body = body
        self.status_code = status_code
        self.reason = reason

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def iter_content(self, chunk_size: int):
        for start in range(0, len(self.body), chunk_size):
            yield self.body[start : start + chunk_size]

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *exc) -> None:
        return None


def _patch_get(monkeypatch, response: _FakeResponse | Exception, calls: list[str]) -> None:
    def fake_get(url: str, stream: bool = False, timeout: float | None = None):
        calls.append(url)
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(requests, "get", fake_get)


def _fetcher(tmp_path, digest: str = DIGEST) -> DataFetcher:
    return DataFetcher(
        f"data.txt {digest}",
        "https://example.org/files",
        env_key="RANDLINE_TEST_DATA_DIR",
        cache_dir=tmp_path / "cache",
        chunk_size=5,
    )


def test_parse_registry() -> None:
    hashes = parse_registry("a.txt ABC\n\n  b.txt def  \n")
    assert hashes == {"a.txt": "abc", "b.txt": "def"}


def test_parse_registry_rejects_malformed_lines() -> None:
    with pytest.raises(ValueError):
        parse_registry("a.txt")


def test_download_then_verify(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("RANDLINE_TEST_DATA_DIR", raising=False)
    calls: list[str] = []
    _patch_get(monkeypatch, _FakeResponse(PAYLOAD), calls)
    path = _fetcher(tmp_path).fetch_file("data.txt")
    assert path == tmp_path / "cache" / "data.txt"
    assert path.read_bytes() == PAYLOAD
    assert calls == ["https://example.org/files/data.txt"]
    assert not (tmp_path / "cache" / "data.txt.part").exists()


def test_cached_file_is_reused(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("RANDLINE_TEST_DATA_DIR", raising=False)
    cache = tmp_path / "cache"
    cache.mkdir()
    (cache / "data.txt").write_bytes(PAYLOAD)
    calls: list[str] = []
    _patch_get(monkeypatch, AssertionError("should not download"), calls)
    assert _fetcher(tmp_path).fetch_file("data.txt").read_bytes() == PAYLOAD
    assert calls == []


def test_stale_cache_is_replaced(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("RANDLINE_TEST_DATA_DIR", raising=False)
    cache = tmp_path / "cache"
    cache.mkdir()
    (cache / "data.txt").write_bytes(b"corrupted")
    calls: list[str] = []
    _patch_get(monkeypatch, _FakeResponse(PAYLOAD), calls)
    assert _fetcher(tmp_path).fetch_file("data.txt").read_bytes() == PAYLOAD
    assert len(calls) == 1


def test_env_key_overrides_cache_dir(tmp_path, monkeypatch) -> None:
    override = tmp_path / "override"
    monkeypatch.setenv("RANDLINE_TEST_DATA_DIR", str(override))
    _patch_get(monkeypatch, _FakeResponse(PAYLOAD), [])
    assert _fetcher(tmp_path).fetch_file("data.txt") == override / "data.txt"


def test_checksum_mismatch_raises_and_cleans_up(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("RANDLINE_TEST_DATA_DIR", raising=False)
    _patch_get(monkeypatch, _FakeResponse(b"something else"), [])
    with pytest.raises(FetchError, match="Checksum mismatch"):
        _fetcher(tmp_path).fetch_file("data.txt")
    assert not (tmp_path / "cache" / "data.txt").exists()


def test_http_error_status_raises(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("RANDLINE_TEST_DATA_DIR", raising=False)
    _patch_get(monkeypatch, _FakeResponse(b"", status_code=404, reason="Not Found"), [])
    with pytest.raises(FetchError, match="404"):
        _fetcher(tmp_path).fetch_file("data.txt")
    assert list((tmp_path / "cache").iterdir()) == []


def test_network_error_raises_fetch_error(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("RANDLINE_TEST_DATA_DIR", raising=False)
    _patch_get(monkeypatch, requests.ConnectionError("no route to host"), [])
    with pytest.raises(FetchError) as exc_info:
        _fetcher(tmp_path).fetch_file("data.txt")
    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


class _DiskFullResponse(_FakeResponse):
    def iter_content(self, chunk_size: int):
        yield self.body[:chunk_size]
        raise OSError(28, "No space left on device")


def test_write_error_raises_fetch_error_and_cleans_up(tmp_path, monkeypatch) -> None:
    """An OSError mid-download is wrapped and leaves no partial file behind."""
    monkeypatch.delenv("RANDLINE_TEST_DATA_DIR", raising=False)
    _patch_get(monkeypatch, _DiskFullResponse(PAYLOAD), [])
    with pytest.raises(FetchError) as exc_info:
        _fetcher(tmp_path).fetch_file("data.txt")
    assert isinstance(exc_info.value.__cause__, OSError)
    assert list((tmp_path / "cache").iterdir()) == []


def test_unknown_name_raises(tmp_path) -> None:
    with pytest.raises(FetchError):
        _fetcher(tmp_path).fetch_file("other.txt")


def test_file_sha256(tmp_path) -> None:
    path = tmp_path / "blob"
    path.write_bytes(PAYLOAD)
    assert file_sha256(path, chunk_size=4) == DIGEST
