"""Field catalog and header resolution shared by every record kind."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from transit_feed.errors import TransitError, TransitErrorKind
from transit_feed.tokenizer import read_record

NONSTANDARD_NAME = "nonstandard"

R = TypeVar("R")


class GtfsField(Enum):
    """Base for the per-kind field enumerations.

    Member values are the canonical GTFS column names. Every subclass
    defines ``NONSTANDARD``, which absorbs any column it does not know.
    """

    @classmethod
    def nonstandard(cls) -> GtfsField:
        return cls[NONSTANDARD_NAME.upper()]

    @classmethod
    def from_name(cls, name: str) -> GtfsField:
        """Resolve a header column name (case-sensitive)."""
        member = cls._value2member_map_.get(name)
        if member is None:
            return cls.nonstandard()
        return member  # type: ignore[return-value]

    @property
    def canonical_name(self) -> str | None:
        """Header text this field matches, or None for the catch-all."""
        if self.name == NONSTANDARD_NAME.upper():
            return None
        return self.value

    @property
    def is_nonstandard(self) -> bool:
        return self.canonical_name is None


class FieldClass(Enum):
    REQUIRED = "required"
    CONDITIONALLY_REQUIRED = "conditionally_required"
    OPTIONAL = "optional"
    NONSTANDARD = "nonstandard"


@dataclass(frozen=True)
class Binding:
    """Where a field's value lands on the record and how the cell is converted."""

    attribute: str
    coerce: Callable[[str], Any]


@dataclass(frozen=True)
class Header:
    """Fields of one file in column order, plus the raw column names."""

    fields: tuple[GtfsField, ...]
    names: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[GtfsField]:
        return iter(self.fields)

    def __getitem__(self, index: int) -> GtfsField:
        return self.fields[index]

    @property
    def nonstandard_columns(self) -> list[str]:
        return [name for f, name in zip(self.fields, self.names) if f.is_nonstandard]


@dataclass(frozen=True)
class RecordSchema(Generic[R]):
    """Everything the generic loader needs to know about one record kind."""

    name: str
    filename: str
    field_type: type[GtfsField]
    record_type: type[R]
    bindings: Mapping[GtfsField, Binding]
    required: frozenset[GtfsField]
    conditionally_required: frozenset[GtfsField] = frozenset()
    optional: frozenset[GtfsField] = frozenset()
    keeps_nonstandard: bool = field(init=False)

    def __post_init__(self) -> None:
        nonstandard = self.field_type.nonstandard()
        groups = (self.required, self.conditionally_required, self.optional)
        seen: set[GtfsField] = set()
        for group in groups:
            overlap = seen & group
            if overlap:
                msg = f"{self.name}: fields classified twice: {sorted(f.value for f in overlap)}"
                raise ValueError(msg)
            seen |= group

        expected = set(self.field_type) - {nonstandard}
        if seen != expected:
            missing = sorted(f.value for f in expected - seen)
            msg = f"{self.name}: fields without classification: {missing}"
            raise ValueError(msg)

        unbound = sorted(f.value for f in expected if f not in self.bindings)
        if unbound:
            msg = f"{self.name}: fields without attribute binding: {unbound}"
            raise ValueError(msg)

        attributes = {f.name for f in dataclasses.fields(self.record_type)}  # type: ignore[arg-type]
        for binding in self.bindings.values():
            if binding.attribute not in attributes:
                msg = f"{self.name}: no attribute {binding.attribute!r} on {self.record_type.__name__}"
                raise ValueError(msg)

        object.__setattr__(self, "keeps_nonstandard", NONSTANDARD_NAME in attributes)

    def classify(self, gtfs_field: GtfsField) -> FieldClass:
        if gtfs_field in self.required:
            return FieldClass.REQUIRED
        if gtfs_field in self.conditionally_required:
            return FieldClass.CONDITIONALLY_REQUIRED
        if gtfs_field in self.optional:
            return FieldClass.OPTIONAL
        return FieldClass.NONSTANDARD

    def missing_columns(self, header: Header) -> list[str]:
        """Required columns absent from ``header``."""
        return sorted(f.value for f in self.required - set(header.fields))

    def check_header(self, header: Header) -> None:
        """Ensure every required column is present in the header.

        Raises:
            TransitError: MISSING_REQUIRED_FIELDS naming the absent columns.
        """
        missing = self.missing_columns(header)
        if missing:
            raise TransitError(
                TransitErrorKind.MISSING_REQUIRED_FIELDS,
                f"{self.filename} header lacks {missing}",
            )


def read_header(row: str, field_type: type[GtfsField]) -> Header:
    """Resolve a header row into positional fields.

    Unknown column names resolve to the kind's nonstandard field, so the
    header always has exactly one entry per column.

    Raises:
        TransitError: EMPTY_SUBSTRING for a zero-length header row, or any
            tokenizer error.
    """
    if not row:
        raise TransitError(TransitErrorKind.EMPTY_SUBSTRING, "header row is empty")
    names = tuple(name.strip() for name in read_record(row))
    fields = tuple(field_type.from_name(name) for name in names)
    return Header(fields=fields, names=names)
