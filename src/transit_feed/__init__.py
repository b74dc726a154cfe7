"""Typed GTFS static feed loading."""

from transit_feed.archive import DirectorySource, GtfsZipReader, MissingRequiredFileError
from transit_feed.collection import RecordCollection, construct_record
from transit_feed.errors import (
    TransitAssignError,
    TransitAssignErrorKind,
    TransitError,
    TransitErrorKind,
)
from transit_feed.feed import Feed, FeedLoadError
from transit_feed.fetcher import Archive, FetchError, GtfsFetcher, InvalidZipError
from transit_feed.schema import Header, read_header
from transit_feed.tokenizer import format_record, read_record, split_records
from transit_feed.values import Color, Coordinate

__all__ = [
    "Archive",
    "Color",
    "Coordinate",
    "DirectorySource",
    "Feed",
    "FeedLoadError",
    "FetchError",
    "GtfsFetcher",
    "GtfsZipReader",
    "Header",
    "InvalidZipError",
    "MissingRequiredFileError",
    "RecordCollection",
    "TransitAssignError",
    "TransitAssignErrorKind",
    "TransitError",
    "TransitErrorKind",
    "construct_record",
    "format_record",
    "read_header",
    "read_record",
    "split_records",
]
