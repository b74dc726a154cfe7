"""Feed aggregation: one typed collection per GTFS file."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

from transit_feed.archive import REQUIRED_FILES, DirectorySource, FeedSource, GtfsZipReader
from transit_feed.config import get_settings
from transit_feed.errors import TransitError
from transit_feed.fetcher import FetchError, GtfsFetcher, InvalidZipError
from transit_feed.logging import feed_log_context, get_logger
from transit_feed.records import (
    Agencies,
    Agency,
    Calendars,
    Routes,
    Shapes,
    StopTimes,
    Stops,
    Trips,
)

if TYPE_CHECKING:
    from transit_feed.collection import RecordCollection

logger = get_logger(__name__)


class FeedLoadError(Exception):
    """Raised when a feed file cannot be decoded or parsed, or the archive
    cannot be downloaded.

    ``filename`` names the failing file, or the URL for download failures.
    """

    def __init__(self, filename: str, error: Exception) -> None:
        self.filename = filename
        self.error = error
        super().__init__(f"Failed to load {filename}: {error}")


@dataclass
class Feed:
    """A parsed GTFS dataset. Files absent from the source stay None."""

    agencies: Agencies | None = None
    routes: Routes | None = None
    stops: Stops | None = None
    trips: Trips | None = None
    stop_times: StopTimes | None = None
    calendars: Calendars | None = None
    shapes: Shapes | None = None
    feed_hash: str | None = None

    @property
    def agency(self) -> Agency | None:
        """The first agency, which is the only one in single-agency feeds."""
        if not self.agencies:
            return None
        return self.agencies[0]

    @classmethod
    def from_source(
        cls,
        source: FeedSource,
        *,
        strict: bool | None = None,
        require_columns: bool | None = None,
        skip_invalid_files: bool | None = None,
        feed_hash: str | None = None,
    ) -> Feed:
        """Parse every known file the source provides.

        Raises:
            FeedLoadError: When a file fails to parse, unless
                ``skip_invalid_files`` is set, in which case the failure is
                logged and that collection is left as None.
        """
        if skip_invalid_files is None:
            skip_invalid_files = get_settings().skip_invalid_files

        feed = cls(feed_hash=feed_hash)
        for attribute, collection_type in _COLLECTIONS.items():
            filename = collection_type.schema.filename
            try:
                text = source.read_text(filename)
                if text is None:
                    logger.info("GTFS file absent", filename=filename)
                    continue
                collection = collection_type.from_text(
                    text, strict=strict, require_columns=require_columns, filename=filename
                )
            except (TransitError, UnicodeDecodeError) as exc:
                if not skip_invalid_files:
                    raise FeedLoadError(filename, exc) from exc
                logger.error(
                    "Skipping invalid GTFS file",
                    filename=filename,
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
                continue
            setattr(feed, attribute, collection)

        logger.info("GTFS feed loaded", **feed.counts())
        return feed

    @classmethod
    def from_directory(
        cls,
        path: str | Path,
        *,
        required_files: frozenset[str] = REQUIRED_FILES,
        **kwargs: Any,
    ) -> Feed:
        """Load an unpacked feed directory."""
        source = DirectorySource(path, required_files=required_files)
        with feed_log_context(feed_dir=str(source.path)):
            return cls.from_source(source, **kwargs)

    @classmethod
    def from_zip(
        cls,
        archive: bytes | str | Path,
        *,
        required_files: frozenset[str] = REQUIRED_FILES,
        **kwargs: Any,
    ) -> Feed:
        """Load a feed from ZIP bytes or a path to a ZIP file."""
        data = archive if isinstance(archive, bytes) else Path(archive).read_bytes()
        with GtfsZipReader(data, required_files=required_files) as reader:
            return cls.from_source(reader, **kwargs)

    @classmethod
    async def load_remote(
        cls,
        url: str,
        *,
        fetcher: GtfsFetcher | None = None,
        **kwargs: Any,
    ) -> Feed:
        """Download a feed archive and parse it, keyed by its content hash.

        Raises:
            FeedLoadError: If the download fails or yields no ZIP archive
                (``filename`` is the URL), or a file fails to parse.
            MissingRequiredFileError: If the archive lacks a required file.
        """
        fetcher = fetcher or GtfsFetcher()
        try:
            archive = await fetcher.fetch(url)
        except (FetchError, InvalidZipError) as exc:
            raise FeedLoadError(url, exc) from exc
        with feed_log_context(feed_url=url):
            return cls.from_zip(archive.data, feed_hash=archive.sha256, **kwargs)

    def counts(self) -> dict[str, int | None]:
        """Record count per collection, None for absent files."""
        result: dict[str, int | None] = {}
        for f in fields(self):
            if f.name in _COLLECTIONS:
                collection = getattr(self, f.name)
                result[f.name] = len(collection) if collection is not None else None
        return result


_COLLECTIONS: dict[str, type[RecordCollection[Any]]] = {
    "agencies": Agencies,
    "routes": Routes,
    "stops": Stops,
    "trips": Trips,
    "stop_times": StopTimes,
    "calendars": Calendars,
    "shapes": Shapes,
}
