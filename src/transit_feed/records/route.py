"""Route records (routes.txt)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from pydantic import AnyUrl

from transit_feed.coercion import (
    to_enum,
    to_optional_color,
    to_optional_enum,
    to_optional_string,
    to_optional_uint,
    to_optional_url,
    to_string,
)
from transit_feed.collection import GtfsRecord, RecordCollection
from transit_feed.schema import Binding, GtfsField, RecordSchema
from transit_feed.values import Color


class RouteField(GtfsField):
    ROUTE_ID = "route_id"
    AGENCY_ID = "agency_id"
    NAME = "route_long_name"
    SHORT_NAME = "route_short_name"
    DETAILS = "route_desc"
    TYPE = "route_type"
    URL = "route_url"
    COLOR = "route_color"
    TEXT_COLOR = "route_text_color"
    SORT_ORDER = "route_sort_order"
    PICKUP_POLICY = "continuous_pickup"
    DROP_OFF_POLICY = "continuous_drop_off"
    NONSTANDARD = "nonstandard"


class RouteType(IntEnum):
    TRAM = 0
    SUBWAY = 1
    RAIL = 2
    BUS = 3
    FERRY = 4
    CABLE = 5
    AERIAL = 6
    FUNICULAR = 7
    TROLLEYBUS = 11
    MONORAIL = 12


class PickupDropOffPolicy(IntEnum):
    """Continuous stopping behaviour along a route or between stops."""

    CONTINUOUS = 0
    NONE = 1
    COORDINATE_WITH_AGENCY = 2
    COORDINATE_WITH_DRIVER = 3


@dataclass
class Route(GtfsRecord):
    route_id: str = ""
    agency_id: str | None = None
    name: str | None = None
    short_name: str | None = None
    details: str | None = None
    type: RouteType | None = None
    url: AnyUrl | None = None
    color: Color | None = None
    text_color: Color | None = None
    sort_order: int | None = None
    pickup_policy: PickupDropOffPolicy | None = None
    drop_off_policy: PickupDropOffPolicy | None = None
    nonstandard: dict[str, str] = field(default_factory=dict, compare=False)

    def __str__(self) -> str:
        return f"Route: {self.route_id}"

    def has_conditionally_required_fields(self) -> bool:
        """GTFS requires at least one of the short and long names."""
        return bool(self.name or self.short_name)


ROUTE_SCHEMA: RecordSchema[Route] = RecordSchema(
    name="route",
    filename="routes.txt",
    field_type=RouteField,
    record_type=Route,
    bindings={
        RouteField.ROUTE_ID: Binding("route_id", to_string),
        RouteField.AGENCY_ID: Binding("agency_id", to_optional_string),
        RouteField.NAME: Binding("name", to_optional_string),
        RouteField.SHORT_NAME: Binding("short_name", to_optional_string),
        RouteField.DETAILS: Binding("details", to_optional_string),
        RouteField.TYPE: Binding("type", to_enum(RouteType)),
        RouteField.URL: Binding("url", to_optional_url),
        RouteField.COLOR: Binding("color", to_optional_color),
        RouteField.TEXT_COLOR: Binding("text_color", to_optional_color),
        RouteField.SORT_ORDER: Binding("sort_order", to_optional_uint),
        RouteField.PICKUP_POLICY: Binding("pickup_policy", to_optional_enum(PickupDropOffPolicy)),
        RouteField.DROP_OFF_POLICY: Binding(
            "drop_off_policy", to_optional_enum(PickupDropOffPolicy)
        ),
    },
    required=frozenset({RouteField.ROUTE_ID, RouteField.TYPE}),
    conditionally_required=frozenset(
        {RouteField.AGENCY_ID, RouteField.NAME, RouteField.SHORT_NAME}
    ),
    optional=frozenset(
        {
            RouteField.DETAILS,
            RouteField.URL,
            RouteField.COLOR,
            RouteField.TEXT_COLOR,
            RouteField.SORT_ORDER,
            RouteField.PICKUP_POLICY,
            RouteField.DROP_OFF_POLICY,
        }
    ),
)
Route.schema = ROUTE_SCHEMA


class Routes(RecordCollection[Route]):
    """A complete routes.txt dataset."""

    schema = ROUTE_SCHEMA
