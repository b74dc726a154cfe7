"""Tests for GtfsFetcher - streaming download, retry policy, ZIP validation."""

from __future__ import annotations

import hashlib

import httpx
import pytest

from transit_feed.fetcher import RETRYABLE_STATUS, FetchError, GtfsFetcher, InvalidZipError

from .fixtures.gtfs_fixture import build_gtfs_zip, build_invalid_zip

FEED_URL = "https://example.com/gtfs.zip"


def _fetcher(handler, **kwargs) -> GtfsFetcher:  # noqa: ANN001
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    kwargs.setdefault("backoff_base", 0.01)
    return GtfsFetcher(client=client, **kwargs)


class TestFetcherSettings:
    """Constructor arguments fall back to environment settings."""

    def test_defaults_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GTFS_FETCH_MAX_RETRIES", "5")
        monkeypatch.setenv("GTFS_FETCH_MAX_BYTES", "1024")

        fetcher = GtfsFetcher()

        assert fetcher.max_retries == 5
        assert fetcher.max_bytes == 1024
        assert fetcher.backoff_base == 2.0

    def test_arguments_override_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GTFS_FETCH_MAX_RETRIES", "5")
        assert GtfsFetcher(max_retries=1).max_retries == 1


class TestFetch:
    """Tests for downloading an archive."""

    async def test_archive_and_digest(self) -> None:
        zip_bytes = build_gtfs_zip()
        fetcher = _fetcher(lambda request: httpx.Response(200, content=zip_bytes))

        archive = await fetcher.fetch(FEED_URL)

        assert archive.data == zip_bytes
        assert archive.sha256 == hashlib.sha256(zip_bytes).hexdigest()
        assert archive.size_bytes == len(zip_bytes)
        assert archive.url == FEED_URL

    async def test_retries_transient_status(self) -> None:
        zip_bytes = build_gtfs_zip()
        statuses = iter([503, 200])
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url)
            status = next(statuses)
            return httpx.Response(status, content=zip_bytes if status == 200 else b"")

        archive = await _fetcher(handler, max_retries=3).fetch(FEED_URL)

        assert archive.data == zip_bytes
        assert len(calls) == 2

    async def test_retries_connection_errors(self) -> None:
        zip_bytes = build_gtfs_zip()
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, content=zip_bytes)

        archive = await _fetcher(handler, max_retries=2).fetch(FEED_URL)

        assert archive.data == zip_bytes
        assert attempts == 2

    async def test_client_error_not_retried(self) -> None:
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            return httpx.Response(404)

        with pytest.raises(FetchError, match="HTTP 404") as exc_info:
            await _fetcher(handler, max_retries=3).fetch(FEED_URL)

        assert exc_info.value.status_code == 404
        assert attempts == 1
        assert 404 not in RETRYABLE_STATUS

    async def test_all_attempts_exhausted(self) -> None:
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            return httpx.Response(503)

        with pytest.raises(FetchError, match="HTTP 503") as exc_info:
            await _fetcher(handler, max_retries=2).fetch(FEED_URL)

        assert exc_info.value.url == FEED_URL
        assert attempts == 2

    async def test_connection_errors_exhausted(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError, match="ConnectError after 2 attempts"):
            await _fetcher(handler, max_retries=2).fetch(FEED_URL)

    async def test_oversized_archive_rejected(self) -> None:
        zip_bytes = build_gtfs_zip()
        fetcher = _fetcher(
            lambda request: httpx.Response(200, content=zip_bytes), max_bytes=len(zip_bytes) - 1
        )

        with pytest.raises(FetchError, match="exceeds"):
            await fetcher.fetch(FEED_URL)

    async def test_non_zip_content(self) -> None:
        fetcher = _fetcher(lambda request: httpx.Response(200, content=build_invalid_zip()))

        with pytest.raises(InvalidZipError, match="not a valid ZIP"):
            await fetcher.fetch(FEED_URL)

    async def test_zip_magic_without_archive(self) -> None:
        fetcher = _fetcher(lambda request: httpx.Response(200, content=b"PK\x03\x04 truncated"))

        with pytest.raises(InvalidZipError):
            await fetcher.fetch(FEED_URL)
