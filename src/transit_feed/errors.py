"""Error taxonomy for GTFS parsing and record assembly."""

from __future__ import annotations

from enum import Enum


class TransitErrorKind(Enum):
    """Closed set of parse failures, each with a fixed description."""

    EMPTY_SUBSTRING = "Substring is empty"
    COMMA_EXPECTED = "A comma was expected, but not found"
    QUOTE_EXPECTED = "A quote was expected, but not found"
    INVALID_FIELD_TYPE = "An invalid field type was found"
    MISSING_REQUIRED_FIELDS = "One or more required fields is missing"
    HEADER_RECORD_MISMATCH = "The number of header and data fields are not the same"
    INVALID_COLOR = "An invalid color was found"

    @property
    def description(self) -> str:
        return self.value


class TransitAssignErrorKind(Enum):
    """Failures when routing a value onto a record attribute."""

    INVALID_PATH = "Path is invalid"
    INVALID_VALUE = "Could not convert value to target type"

    @property
    def description(self) -> str:
        return self.value


class TransitError(Exception):
    """Raised when feed text cannot be tokenized or coerced into a record.

    Context (file, row, field) is filled in as the error travels up from
    the coercion layer to the collection loader.
    """

    def __init__(
        self,
        kind: TransitErrorKind,
        detail: str | None = None,
        *,
        field: str | None = None,
    ) -> None:
        self.kind = kind
        self.detail = detail
        self.field = field
        self.filename: str | None = None
        self.row: int | None = None
        super().__init__(kind.description)

    def with_context(
        self,
        *,
        filename: str | None = None,
        row: int | None = None,
        field: str | None = None,
    ) -> TransitError:
        """Attach location context without replacing anything already set."""
        if filename is not None and self.filename is None:
            self.filename = filename
        if row is not None and self.row is None:
            self.row = row
        if field is not None and self.field is None:
            self.field = field
        return self

    def __str__(self) -> str:
        message = self.kind.description
        if self.detail:
            message = f"{message}: {self.detail}"
        location = []
        if self.filename:
            location.append(f"file={self.filename}")
        if self.row is not None:
            location.append(f"row={self.row}")
        if self.field:
            location.append(f"field={self.field}")
        if location:
            message = f"{message} ({', '.join(location)})"
        return message


class TransitAssignError(Exception):
    """Raised when a value is routed to an attribute it cannot occupy."""

    def __init__(self, kind: TransitAssignErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        message = kind.description if not detail else f"{kind.description}: {detail}"
        super().__init__(message)
