"""Generic record construction and per-file collection loading."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from transit_feed.coercion import assign
from transit_feed.config import get_settings
from transit_feed.errors import (
    TransitAssignError,
    TransitAssignErrorKind,
    TransitError,
    TransitErrorKind,
)
from transit_feed.logging import get_logger
from transit_feed.schema import Header, RecordSchema, read_header
from transit_feed.tokenizer import read_record, split_records

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

logger = get_logger(__name__)

R = TypeVar("R", bound="GtfsRecord")


class GtfsRecord:
    """Behaviour shared by every record dataclass.

    Each kind sets ``schema`` once its ``RecordSchema`` is built.
    """

    schema: ClassVar[RecordSchema[Any]]

    @classmethod
    def from_row(cls: type[R], row: str, header: Header) -> R:
        """Construct a record from one raw row using an already resolved header."""
        return construct_record(read_record(row), header, cls.schema)

    def has_required_fields(self) -> bool:
        return not missing_required_fields(self, self.schema)

    def has_conditionally_required_fields(self) -> bool:
        """Record-local part of the kind's conditional rules; cross-file rules are not checked."""
        return True


def missing_required_fields(
    record: Any,
    schema: RecordSchema[Any],
    header: Header | None = None,
) -> list[str]:
    """Names of required fields whose value is absent or empty on ``record``.

    With a header, only the required fields that header carries are checked.
    """
    candidates = schema.required if header is None else schema.required & set(header.fields)
    missing = []
    for gtfs_field in candidates:
        value = getattr(record, schema.bindings[gtfs_field].attribute)
        if value is None or value == "":
            missing.append(gtfs_field.value)
    return sorted(missing)


def construct_record(cells: Sequence[str], header: Header, schema: RecordSchema[R]) -> R:
    """Assemble one record from row cells zipped positionally with the header.

    Required columns the header does not carry are left unset (None or
    empty); the loader decides whether such a header is acceptable.

    Raises:
        TransitError: HEADER_RECORD_MISMATCH before any coercion when the
            cell count differs, the first coercion failure, or
            MISSING_REQUIRED_FIELDS when a required value is empty.
    """
    if len(cells) != len(header):
        raise TransitError(
            TransitErrorKind.HEADER_RECORD_MISMATCH,
            f"header has {len(header)} fields, record has {len(cells)}",
        )

    record = schema.record_type()
    for gtfs_field, column, cell in zip(header.fields, header.names, cells):
        assign(record, cell, gtfs_field, schema, column=column)

    missing = missing_required_fields(record, schema, header)
    if missing:
        raise TransitError(TransitErrorKind.MISSING_REQUIRED_FIELDS, f"empty {missing}")
    return record


class RecordCollection(Generic[R]):
    """Ordered, append-only records of one kind parsed from one file."""

    schema: ClassVar[RecordSchema[Any]]

    def __init__(self, records: Iterable[R] = (), header: Header | None = None) -> None:
        self.header = header
        self._records: list[R] = []
        for record in records:
            self.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> R:
        return self._records[index]

    def __setitem__(self, index: int, record: R) -> None:
        self._check_kind(record)
        self._records[index] = record

    def __iter__(self) -> Iterator[R]:
        return iter(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordCollection):
            return NotImplemented
        return type(self) is type(other) and self._records == other._records

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} records)"

    @property
    def header_fields(self) -> list[Any]:
        return list(self.header.fields) if self.header else []

    def append(self, record: R) -> None:
        self._check_kind(record)
        self._records.append(record)

    def _check_kind(self, record: object) -> None:
        if not isinstance(record, self.schema.record_type):
            raise TransitAssignError(
                TransitAssignErrorKind.INVALID_VALUE,
                f"{type(self).__name__} holds {self.schema.record_type.__name__}, "
                f"got {type(record).__name__}",
            )

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        strict: bool | None = None,
        require_columns: bool | None = None,
        filename: str | None = None,
    ) -> RecordCollection[R]:
        """Parse a whole file's text.

        A file with no data rows yields an empty collection. In strict mode
        (the default) the first bad row aborts the load; otherwise bad rows
        are logged and skipped. A header lacking required columns is logged,
        or rejected when ``require_columns`` is set.

        Raises:
            TransitError: With file and row context attached.
        """
        schema = cls.schema
        filename = filename or schema.filename
        settings = get_settings()
        if strict is None:
            strict = settings.strict
        if require_columns is None:
            require_columns = settings.require_columns

        try:
            rows = split_records(text)
        except TransitError as exc:
            raise exc.with_context(filename=filename)

        if len(rows) < 2:
            logger.info("GTFS file has no data rows", filename=filename)
            return cls()

        try:
            header = read_header(rows[0], schema.field_type)
            if require_columns:
                schema.check_header(header)
        except TransitError as exc:
            raise exc.with_context(filename=filename, row=1)

        missing_columns = schema.missing_columns(header)
        if missing_columns:
            logger.warning(
                "GTFS file lacks required columns",
                filename=filename,
                missing_columns=missing_columns,
            )
        logger.info(
            "Parsing GTFS file",
            filename=filename,
            columns=list(header.names),
            nonstandard_columns=header.nonstandard_columns or None,
        )

        collection = cls(header=header)
        skipped = 0
        for row_number, row in enumerate(rows[1:], start=2):
            try:
                record = construct_record(read_record(row), header, schema)
            except TransitError as exc:
                exc.with_context(filename=filename, row=row_number)
                if strict:
                    raise
                skipped += 1
                logger.warning("Skipping invalid GTFS row", filename=filename, error=str(exc))
                continue
            collection._records.append(record)

        logger.info(
            "GTFS file loaded",
            filename=filename,
            records=len(collection),
            skipped=skipped,
        )
        return collection

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        strict: bool | None = None,
        require_columns: bool | None = None,
        encoding: str | None = None,
    ) -> RecordCollection[R]:
        """Read and parse a GTFS file from disk.

        Raises:
            FileNotFoundError: If the file does not exist.
            TransitError: If any row fails to parse (strict mode).
        """
        path = Path(path)
        # newline="" keeps line breaks inside quoted cells verbatim
        with path.open(encoding=encoding or get_settings().file_encoding, newline="") as fh:
            text = fh.read()
        return cls.from_text(
            text, strict=strict, require_columns=require_columns, filename=path.name
        )
