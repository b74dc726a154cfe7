"""Agency records (agency.txt)."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import AnyUrl

from transit_feed.coercion import to_optional_string, to_optional_url, to_string
from transit_feed.collection import GtfsRecord, RecordCollection
from transit_feed.schema import Binding, GtfsField, RecordSchema


class AgencyField(GtfsField):
    AGENCY_ID = "agency_id"
    NAME = "agency_name"
    URL = "agency_url"
    TIMEZONE = "agency_timezone"
    LANGUAGE = "agency_lang"
    PHONE = "agency_phone"
    FARE_URL = "agency_fare_url"
    EMAIL = "agency_email"
    NONSTANDARD = "nonstandard"


@dataclass
class Agency(GtfsRecord):
    agency_id: str | None = None
    name: str = ""
    url: AnyUrl | None = None
    timezone: str = ""
    language: str | None = None
    phone: str | None = None
    fare_url: AnyUrl | None = None
    email: str | None = None
    nonstandard: dict[str, str] = field(default_factory=dict, compare=False)

    def __str__(self) -> str:
        return f"Agency: {self.name}"


AGENCY_SCHEMA: RecordSchema[Agency] = RecordSchema(
    name="agency",
    filename="agency.txt",
    field_type=AgencyField,
    record_type=Agency,
    bindings={
        AgencyField.AGENCY_ID: Binding("agency_id", to_optional_string),
        AgencyField.NAME: Binding("name", to_string),
        AgencyField.URL: Binding("url", to_optional_url),
        AgencyField.TIMEZONE: Binding("timezone", to_string),
        AgencyField.LANGUAGE: Binding("language", to_optional_string),
        AgencyField.PHONE: Binding("phone", to_optional_string),
        AgencyField.FARE_URL: Binding("fare_url", to_optional_url),
        AgencyField.EMAIL: Binding("email", to_optional_string),
    },
    required=frozenset({AgencyField.NAME, AgencyField.URL, AgencyField.TIMEZONE}),
    conditionally_required=frozenset({AgencyField.AGENCY_ID}),
    optional=frozenset(
        {AgencyField.LANGUAGE, AgencyField.PHONE, AgencyField.FARE_URL, AgencyField.EMAIL}
    ),
)
Agency.schema = AGENCY_SCHEMA


class Agencies(RecordCollection[Agency]):
    """A complete agency.txt dataset."""

    schema = AGENCY_SCHEMA
