"""GTFS feed sources: a ZIP archive or an unpacked directory."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Protocol

from transit_feed.config import get_settings
from transit_feed.logging import get_logger

logger = get_logger(__name__)

# Files every GTFS feed must ship
REQUIRED_FILES = frozenset({"agency.txt", "routes.txt", "trips.txt", "stop_times.txt"})

# Files we can parse when present
OPTIONAL_FILES = frozenset({"stops.txt", "calendar.txt", "shapes.txt"})


class MissingRequiredFileError(Exception):
    """Raised when a required GTFS file is missing from the feed."""


class FeedSource(Protocol):
    def read_text(self, filename: str) -> str | None: ...

    def list_files(self) -> list[str]: ...


def _check_required(names: set[str], required: frozenset[str], source: str) -> None:
    missing = required - names
    if missing:
        msg = f"Missing required GTFS files: {sorted(missing)}"
        raise MissingRequiredFileError(msg)

    logger.info(
        "GTFS feed validated",
        source=source,
        required_files=sorted(required),
        optional_present=sorted(OPTIONAL_FILES & names),
        total_files=len(names),
    )


class GtfsZipReader:
    """Opens and validates a GTFS ZIP archive."""

    def __init__(
        self,
        data: bytes,
        required_files: frozenset[str] = REQUIRED_FILES,
        encoding: str | None = None,
    ) -> None:
        """Initialize reader with ZIP bytes.

        Raises:
            zipfile.BadZipFile: If data is not a valid ZIP.
            MissingRequiredFileError: If required files are missing.
        """
        self._zip = zipfile.ZipFile(io.BytesIO(data))
        self._encoding = encoding or get_settings().file_encoding
        try:
            _check_required(set(self._zip.namelist()), required_files, "zip")
        except MissingRequiredFileError:
            self._zip.close()
            raise

    def read_text(self, filename: str) -> str | None:
        """Decode a member file, or return None if the archive lacks it."""
        try:
            raw = self._zip.read(filename)
        except KeyError:
            return None
        return raw.decode(self._encoding)

    def list_files(self) -> list[str]:
        """List all filenames in the archive."""
        return self._zip.namelist()

    def close(self) -> None:
        """Close the ZIP archive."""
        self._zip.close()

    def __enter__(self) -> GtfsZipReader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class DirectorySource:
    """Reads GTFS files from an unpacked feed directory."""

    def __init__(
        self,
        path: str | Path,
        required_files: frozenset[str] = REQUIRED_FILES,
        encoding: str | None = None,
    ) -> None:
        """Open a feed directory.

        Raises:
            NotADirectoryError: If ``path`` is not a directory.
            MissingRequiredFileError: If required files are missing.
        """
        self.path = Path(path)
        if not self.path.is_dir():
            msg = f"GTFS feed directory not found: {self.path}"
            raise NotADirectoryError(msg)
        self._encoding = encoding or get_settings().file_encoding
        _check_required(set(self.list_files()), required_files, str(self.path))

    def read_text(self, filename: str) -> str | None:
        file_path = self.path / filename
        if not file_path.is_file():
            return None
        with file_path.open(encoding=self._encoding, newline="") as fh:
            return fh.read()

    def list_files(self) -> list[str]:
        return sorted(p.name for p in self.path.iterdir() if p.is_file())
