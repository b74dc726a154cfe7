"""Stop records (stops.txt)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from pydantic import AnyUrl

from transit_feed.coercion import (
    to_optional_enum,
    to_optional_float,
    to_optional_string,
    to_optional_url,
    to_string,
)
from transit_feed.collection import GtfsRecord, RecordCollection
from transit_feed.schema import Binding, GtfsField, RecordSchema
from transit_feed.values import Coordinate


class StopField(GtfsField):
    STOP_ID = "stop_id"
    CODE = "stop_code"
    NAME = "stop_name"
    TTS_NAME = "tts_stop_name"
    DETAILS = "stop_desc"
    LATITUDE = "stop_lat"
    LONGITUDE = "stop_lon"
    ZONE_ID = "zone_id"
    URL = "stop_url"
    LOCATION_TYPE = "location_type"
    PARENT_STATION = "parent_station"
    TIMEZONE = "stop_timezone"
    ACCESSIBILITY = "wheelchair_boarding"
    LEVEL_ID = "level_id"
    PLATFORM_CODE = "platform_code"
    NONSTANDARD = "nonstandard"


class LocationType(IntEnum):
    STOP = 0
    STATION = 1
    ENTRANCE = 2
    GENERIC_NODE = 3
    BOARDING_AREA = 4


class Accessibility(IntEnum):
    """Wheelchair or bicycle accommodation; shared by stops and trips."""

    NO_INFORMATION = 0
    ACCESSIBLE = 1
    NOT_ACCESSIBLE = 2


@dataclass
class Stop(GtfsRecord):
    stop_id: str = ""
    code: str | None = None
    name: str | None = None
    tts_name: str | None = None
    details: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    zone_id: str | None = None
    url: AnyUrl | None = None
    location_type: LocationType | None = None
    parent_station: str | None = None
    timezone: str | None = None
    accessibility: Accessibility | None = None
    level_id: str | None = None
    platform_code: str | None = None
    nonstandard: dict[str, str] = field(default_factory=dict, compare=False)

    def __str__(self) -> str:
        return f"Stop: {self.stop_id}"

    @property
    def location(self) -> Coordinate | None:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(self.latitude, self.longitude)

    def has_conditionally_required_fields(self) -> bool:
        """Stops, stations and entrances need a name and a position;
        entrances and boarding areas need a parent station."""
        kind = self.location_type or LocationType.STOP
        if kind <= LocationType.ENTRANCE and (not self.name or self.location is None):
            return False
        if kind >= LocationType.ENTRANCE and not self.parent_station:
            return False
        return True


STOP_SCHEMA: RecordSchema[Stop] = RecordSchema(
    name="stop",
    filename="stops.txt",
    field_type=StopField,
    record_type=Stop,
    bindings={
        StopField.STOP_ID: Binding("stop_id", to_string),
        StopField.CODE: Binding("code", to_optional_string),
        StopField.NAME: Binding("name", to_optional_string),
        StopField.TTS_NAME: Binding("tts_name", to_optional_string),
        StopField.DETAILS: Binding("details", to_optional_string),
        StopField.LATITUDE: Binding("latitude", to_optional_float),
        StopField.LONGITUDE: Binding("longitude", to_optional_float),
        StopField.ZONE_ID: Binding("zone_id", to_optional_string),
        StopField.URL: Binding("url", to_optional_url),
        StopField.LOCATION_TYPE: Binding("location_type", to_optional_enum(LocationType)),
        StopField.PARENT_STATION: Binding("parent_station", to_optional_string),
        StopField.TIMEZONE: Binding("timezone", to_optional_string),
        StopField.ACCESSIBILITY: Binding("accessibility", to_optional_enum(Accessibility)),
        StopField.LEVEL_ID: Binding("level_id", to_optional_string),
        StopField.PLATFORM_CODE: Binding("platform_code", to_optional_string),
    },
    required=frozenset({StopField.STOP_ID}),
    conditionally_required=frozenset(
        {StopField.NAME, StopField.LATITUDE, StopField.LONGITUDE, StopField.PARENT_STATION}
    ),
    optional=frozenset(
        {
            StopField.CODE,
            StopField.TTS_NAME,
            StopField.DETAILS,
            StopField.ZONE_ID,
            StopField.URL,
            StopField.LOCATION_TYPE,
            StopField.TIMEZONE,
            StopField.ACCESSIBILITY,
            StopField.LEVEL_ID,
            StopField.PLATFORM_CODE,
        }
    ),
)
Stop.schema = STOP_SCHEMA


class Stops(RecordCollection[Stop]):
    """A complete stops.txt dataset."""

    schema = STOP_SCHEMA
