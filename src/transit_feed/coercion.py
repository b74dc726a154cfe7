"""Cell coercion: typed conversion of raw CSV text onto record attributes."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date
from enum import IntEnum
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import AnyUrl, TypeAdapter, ValidationError

from transit_feed.errors import (
    TransitAssignError,
    TransitAssignErrorKind,
    TransitError,
    TransitErrorKind,
)
from transit_feed.values import Color

if TYPE_CHECKING:
    from transit_feed.schema import GtfsField, RecordSchema

E = TypeVar("E", bound=IntEnum)

_UINT_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_DATE_RE = re.compile(r"[0-9]{8}")

_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def _invalid(cell: str, expected: str) -> TransitError:
    return TransitError(TransitErrorKind.INVALID_FIELD_TYPE, f"{cell!r} is not {expected}")


def to_string(cell: str) -> str:
    return cell


def to_optional_string(cell: str) -> str | None:
    if not cell.strip():
        return None
    return cell


def to_uint(cell: str) -> int:
    """Parse a non-negative base-10 integer; signs and decimals are rejected."""
    text = cell.strip()
    if not _UINT_RE.fullmatch(text):
        raise _invalid(cell, "an unsigned integer")
    return int(text)


def to_optional_uint(cell: str) -> int | None:
    if not cell.strip():
        return None
    return to_uint(cell)


def to_float(cell: str) -> float:
    text = cell.strip()
    if not _FLOAT_RE.fullmatch(text):
        raise _invalid(cell, "a decimal number")
    return float(text)


def to_optional_float(cell: str) -> float | None:
    if not cell.strip():
        return None
    return to_float(cell)


def to_coordinate(cell: str) -> float:
    """Parse a latitude or longitude; unlike optional numbers, empty fails."""
    if not cell.strip():
        raise _invalid(cell, "a coordinate")
    return to_float(cell)


def to_optional_url(cell: str) -> AnyUrl | None:
    text = cell.strip()
    if not text:
        return None
    try:
        return _url_adapter.validate_python(text)
    except ValidationError as exc:
        raise _invalid(cell, "a URL") from exc


def to_optional_color(cell: str) -> Color | None:
    text = cell.strip()
    if not text:
        return None
    try:
        return Color.from_hex(text)
    except ValueError as exc:
        raise TransitError(TransitErrorKind.INVALID_COLOR, f"{cell!r} is not RRGGBB hex") from exc


def to_date(cell: str) -> date:
    """Parse a GTFS service date (``YYYYMMDD``)."""
    text = cell.strip()
    if not _DATE_RE.fullmatch(text):
        raise _invalid(cell, "a YYYYMMDD date")
    try:
        return date(int(text[0:4]), int(text[4:6]), int(text[6:8]))
    except ValueError as exc:
        raise _invalid(cell, "a calendar date") from exc


def parse_gtfs_time(time_str: str) -> int:
    """Parse a GTFS time string (HH:MM:SS) to seconds from midnight.

    Supports times >= 24:00:00 for trips spanning past midnight, and
    single-digit hours.

    Examples:
        "08:30:00" -> 30600
        "25:01:30" -> 90090

    Raises:
        TransitError: INVALID_FIELD_TYPE if the format is invalid.
    """
    text = time_str.strip()
    parts = text.split(":")
    if len(parts) != 3 or not all(_UINT_RE.fullmatch(part) for part in parts):
        raise _invalid(time_str, "an HH:MM:SS time")

    hours, minutes, seconds = (int(part) for part in parts)
    if len(parts[1]) != 2 or len(parts[2]) != 2 or minutes > 59 or seconds > 59:
        raise _invalid(time_str, "an HH:MM:SS time")

    return hours * 3600 + minutes * 60 + seconds


def to_optional_time(cell: str) -> int | None:
    if not cell.strip():
        return None
    return parse_gtfs_time(cell)


def to_enum(enum_type: type[E]) -> Callable[[str], E]:
    """Build a coercer decoding an unsigned raw value into ``enum_type``.

    Values outside the enumeration fail; there is no fallback variant.
    """

    def coerce(cell: str) -> E:
        raw = to_uint(cell)
        try:
            return enum_type(raw)
        except ValueError as exc:
            raise TransitError(
                TransitErrorKind.INVALID_FIELD_TYPE,
                f"{raw} is not a known {enum_type.__name__}",
            ) from exc

    coerce.__name__ = f"to_{enum_type.__name__}"
    return coerce


def to_optional_enum(enum_type: type[E]) -> Callable[[str], E | None]:
    required = to_enum(enum_type)

    def coerce(cell: str) -> E | None:
        if not cell.strip():
            return None
        return required(cell)

    coerce.__name__ = f"to_optional_{enum_type.__name__}"
    return coerce


def assign(
    record: Any,
    cell: str,
    gtfs_field: GtfsField,
    schema: RecordSchema[Any],
    column: str | None = None,
) -> None:
    """Coerce ``cell`` and store it on the attribute bound to ``gtfs_field``.

    Nonstandard cells go to ``record.nonstandard[column]`` when the record
    kind keeps them and are dropped otherwise.

    Raises:
        TransitError: If the cell cannot be converted (field context attached).
        TransitAssignError: INVALID_PATH if the field belongs to another kind.
    """
    if not isinstance(gtfs_field, schema.field_type):
        raise TransitAssignError(
            TransitAssignErrorKind.INVALID_PATH,
            f"{gtfs_field!r} is not a {schema.field_type.__name__}",
        )

    if gtfs_field.is_nonstandard:
        if schema.keeps_nonstandard:
            record.nonstandard[column or gtfs_field.value] = cell
        return

    binding = schema.bindings[gtfs_field]
    try:
        value = binding.coerce(cell)
    except TransitError as exc:
        raise exc.with_context(field=gtfs_field.value)
    setattr(record, binding.attribute, value)
