"""Weekly service calendars (calendar.txt)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum

from transit_feed.coercion import to_date, to_enum, to_string
from transit_feed.collection import GtfsRecord, RecordCollection
from transit_feed.schema import Binding, GtfsField, RecordSchema


class CalendarField(GtfsField):
    SERVICE_ID = "service_id"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"
    START_DATE = "start_date"
    END_DATE = "end_date"
    NONSTANDARD = "nonstandard"


class ServiceAvailability(IntEnum):
    UNAVAILABLE = 0
    AVAILABLE = 1


@dataclass
class Calendar(GtfsRecord):
    service_id: str = ""
    monday: ServiceAvailability | None = None
    tuesday: ServiceAvailability | None = None
    wednesday: ServiceAvailability | None = None
    thursday: ServiceAvailability | None = None
    friday: ServiceAvailability | None = None
    saturday: ServiceAvailability | None = None
    sunday: ServiceAvailability | None = None
    start_date: date | None = None
    end_date: date | None = None
    nonstandard: dict[str, str] = field(default_factory=dict, compare=False)

    def __str__(self) -> str:
        return f"Calendar: {self.service_id}"

    @property
    def weekdays(self) -> tuple[ServiceAvailability | None, ...]:
        """Availability Monday through Sunday, indexed like ``date.weekday()``."""
        return (
            self.monday,
            self.tuesday,
            self.wednesday,
            self.thursday,
            self.friday,
            self.saturday,
            self.sunday,
        )

    def runs_on(self, day: date) -> bool:
        """Whether the weekly pattern includes ``day`` (exceptions not applied)."""
        if self.start_date is None or self.end_date is None:
            return False
        if not self.start_date <= day <= self.end_date:
            return False
        return self.weekdays[day.weekday()] is ServiceAvailability.AVAILABLE


_weekday = to_enum(ServiceAvailability)

CALENDAR_SCHEMA: RecordSchema[Calendar] = RecordSchema(
    name="calendar",
    filename="calendar.txt",
    field_type=CalendarField,
    record_type=Calendar,
    bindings={
        CalendarField.SERVICE_ID: Binding("service_id", to_string),
        CalendarField.MONDAY: Binding("monday", _weekday),
        CalendarField.TUESDAY: Binding("tuesday", _weekday),
        CalendarField.WEDNESDAY: Binding("wednesday", _weekday),
        CalendarField.THURSDAY: Binding("thursday", _weekday),
        CalendarField.FRIDAY: Binding("friday", _weekday),
        CalendarField.SATURDAY: Binding("saturday", _weekday),
        CalendarField.SUNDAY: Binding("sunday", _weekday),
        CalendarField.START_DATE: Binding("start_date", to_date),
        CalendarField.END_DATE: Binding("end_date", to_date),
    },
    required=frozenset(set(CalendarField) - {CalendarField.NONSTANDARD}),
)
Calendar.schema = CALENDAR_SCHEMA


class Calendars(RecordCollection[Calendar]):
    """A complete calendar.txt dataset."""

    schema = CALENDAR_SCHEMA
