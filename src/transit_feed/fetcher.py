"""Remote GTFS archive download."""

from __future__ import annotations

import asyncio
import hashlib
import io
import zipfile
from dataclasses import dataclass

import httpx

from transit_feed.config import get_settings
from transit_feed.logging import get_logger

logger = get_logger(__name__)

# Statuses a later attempt can plausibly succeed on
RETRYABLE_STATUS = frozenset({408, 425, 429, 500, 502, 503, 504})


class FetchError(Exception):
    """Raised when an archive cannot be downloaded."""

    def __init__(self, url: str, reason: str, *, status_code: int | None = None) -> None:
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Failed to fetch GTFS archive from {url}: {reason}")


class InvalidZipError(Exception):
    """Raised when downloaded content is not a ZIP archive."""


@dataclass(frozen=True)
class Archive:
    """A downloaded feed archive and its content digest."""

    url: str
    data: bytes
    sha256: str

    @property
    def size_bytes(self) -> int:
        return len(self.data)


class GtfsFetcher:
    """Downloads feed archives, streaming the body and hashing as it arrives.

    Transport errors and the statuses in ``RETRYABLE_STATUS`` are retried
    with exponential backoff; any other HTTP error fails at once.
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        timeout_sec: int | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
        max_bytes: int | None = None,
    ) -> None:
        settings = get_settings()
        self._client = client
        self.timeout_sec = timeout_sec if timeout_sec is not None else settings.fetch_timeout_sec
        self.max_retries = max_retries if max_retries is not None else settings.fetch_max_retries
        self.backoff_base = (
            backoff_base if backoff_base is not None else settings.fetch_backoff_base
        )
        self.max_bytes = max_bytes if max_bytes is not None else settings.fetch_max_bytes

    async def fetch(self, url: str) -> Archive:
        """Download the archive at ``url``.

        Raises:
            FetchError: On a non-retryable HTTP error, an oversized body, or
                once every attempt has failed.
            InvalidZipError: If the body is not a ZIP archive.
        """
        if self._client is not None:
            return await self._fetch_with_retries(self._client, url)
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_sec),
            follow_redirects=True,
        ) as client:
            return await self._fetch_with_retries(client, url)

    async def _fetch_with_retries(self, client: httpx.AsyncClient, url: str) -> Archive:
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self._download(client, url)
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                if status not in RETRYABLE_STATUS or attempt == self.max_retries:
                    raise FetchError(url, f"HTTP {status}", status_code=status) from exc
                reason = f"HTTP {status}"
            except httpx.TransportError as exc:
                if attempt == self.max_retries:
                    msg = f"{type(exc).__name__} after {attempt} attempts"
                    raise FetchError(url, msg) from exc
                reason = str(exc) or type(exc).__name__

            delay = self.backoff_base**attempt
            logger.warning(
                "GTFS download failed, retrying",
                url=url,
                attempt=attempt,
                max_retries=self.max_retries,
                delay_sec=delay,
                reason=reason,
            )
            await asyncio.sleep(delay)

    async def _download(self, client: httpx.AsyncClient, url: str) -> Archive:
        digest = hashlib.sha256()
        body = io.BytesIO()
        async with client.stream("GET", url) as response:
            response.raise_for_status()
            async for chunk in response.aiter_bytes():
                if body.tell() + len(chunk) > self.max_bytes:
                    raise FetchError(url, f"archive exceeds {self.max_bytes} bytes")
                digest.update(chunk)
                body.write(chunk)

        data = body.getvalue()
        if not zipfile.is_zipfile(io.BytesIO(data)):
            msg = f"Content from {url} is not a valid ZIP file"
            raise InvalidZipError(msg)

        archive = Archive(url=url, data=data, sha256=digest.hexdigest())
        logger.info(
            "GTFS archive downloaded",
            url=url,
            size_bytes=archive.size_bytes,
            feed_hash=archive.sha256,
        )
        return archive
