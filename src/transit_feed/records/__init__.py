"""Record kinds: one field enum, record dataclass, schema and collection each."""

from transit_feed.records.agency import AGENCY_SCHEMA, Agencies, Agency, AgencyField
from transit_feed.records.calendar import (
    CALENDAR_SCHEMA,
    Calendar,
    CalendarField,
    Calendars,
    ServiceAvailability,
)
from transit_feed.records.route import (
    ROUTE_SCHEMA,
    PickupDropOffPolicy,
    Route,
    RouteField,
    Routes,
    RouteType,
)
from transit_feed.records.shape import SHAPE_SCHEMA, Shape, ShapeField, Shapes
from transit_feed.records.stop import (
    STOP_SCHEMA,
    Accessibility,
    LocationType,
    Stop,
    StopField,
    Stops,
)
from transit_feed.records.stop_time import (
    STOP_TIME_SCHEMA,
    PickupDropOffType,
    StopTime,
    StopTimeField,
    StopTimes,
    Timepoint,
)
from transit_feed.records.trip import TRIP_SCHEMA, Direction, Trip, TripField, Trips

__all__ = [
    "AGENCY_SCHEMA",
    "CALENDAR_SCHEMA",
    "ROUTE_SCHEMA",
    "SHAPE_SCHEMA",
    "STOP_SCHEMA",
    "STOP_TIME_SCHEMA",
    "TRIP_SCHEMA",
    "Accessibility",
    "Agencies",
    "Agency",
    "AgencyField",
    "Calendar",
    "CalendarField",
    "Calendars",
    "Direction",
    "LocationType",
    "PickupDropOffPolicy",
    "PickupDropOffType",
    "Route",
    "RouteField",
    "RouteType",
    "Routes",
    "ServiceAvailability",
    "Shape",
    "ShapeField",
    "Shapes",
    "Stop",
    "StopField",
    "StopTime",
    "StopTimeField",
    "StopTimes",
    "Stops",
    "Timepoint",
    "Trip",
    "TripField",
    "Trips",
]
