"""Trip records (trips.txt)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from transit_feed.coercion import to_optional_enum, to_optional_string, to_string
from transit_feed.collection import GtfsRecord, RecordCollection
from transit_feed.records.stop import Accessibility
from transit_feed.schema import Binding, GtfsField, RecordSchema


class TripField(GtfsField):
    ROUTE_ID = "route_id"
    SERVICE_ID = "service_id"
    TRIP_ID = "trip_id"
    HEAD_SIGN = "trip_headsign"
    SHORT_NAME = "trip_short_name"
    DIRECTION = "direction_id"
    BLOCK_ID = "block_id"
    SHAPE_ID = "shape_id"
    IS_ACCESSIBLE = "wheelchair_accessible"
    BIKES_ALLOWED = "bikes_allowed"
    NONSTANDARD = "nonstandard"


class Direction(IntEnum):
    INBOUND = 0
    OUTBOUND = 1


@dataclass
class Trip(GtfsRecord):
    route_id: str = ""
    service_id: str = ""
    trip_id: str = ""
    head_sign: str | None = None
    short_name: str | None = None
    direction: Direction | None = None
    block_id: str | None = None
    shape_id: str | None = None
    is_accessible: Accessibility | None = None
    bikes_allowed: Accessibility | None = None
    nonstandard: dict[str, str] = field(default_factory=dict, compare=False)

    def __str__(self) -> str:
        return f"Trip: {self.trip_id}"


TRIP_SCHEMA: RecordSchema[Trip] = RecordSchema(
    name="trip",
    filename="trips.txt",
    field_type=TripField,
    record_type=Trip,
    bindings={
        TripField.ROUTE_ID: Binding("route_id", to_string),
        TripField.SERVICE_ID: Binding("service_id", to_string),
        TripField.TRIP_ID: Binding("trip_id", to_string),
        TripField.HEAD_SIGN: Binding("head_sign", to_optional_string),
        TripField.SHORT_NAME: Binding("short_name", to_optional_string),
        TripField.DIRECTION: Binding("direction", to_optional_enum(Direction)),
        TripField.BLOCK_ID: Binding("block_id", to_optional_string),
        TripField.SHAPE_ID: Binding("shape_id", to_optional_string),
        TripField.IS_ACCESSIBLE: Binding("is_accessible", to_optional_enum(Accessibility)),
        TripField.BIKES_ALLOWED: Binding("bikes_allowed", to_optional_enum(Accessibility)),
    },
    required=frozenset({TripField.ROUTE_ID, TripField.SERVICE_ID, TripField.TRIP_ID}),
    conditionally_required=frozenset({TripField.SHAPE_ID}),
    optional=frozenset(
        {
            TripField.HEAD_SIGN,
            TripField.SHORT_NAME,
            TripField.DIRECTION,
            TripField.BLOCK_ID,
            TripField.IS_ACCESSIBLE,
            TripField.BIKES_ALLOWED,
        }
    ),
)
Trip.schema = TRIP_SCHEMA


class Trips(RecordCollection[Trip]):
    """A complete trips.txt dataset."""

    schema = TRIP_SCHEMA
