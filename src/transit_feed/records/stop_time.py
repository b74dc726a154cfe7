"""Stop time records (stop_times.txt)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from transit_feed.coercion import (
    to_optional_enum,
    to_optional_float,
    to_optional_string,
    to_optional_time,
    to_string,
    to_uint,
)
from transit_feed.collection import GtfsRecord, RecordCollection
from transit_feed.records.route import PickupDropOffPolicy
from transit_feed.schema import Binding, GtfsField, RecordSchema


class StopTimeField(GtfsField):
    TRIP_ID = "trip_id"
    ARRIVAL = "arrival_time"
    DEPARTURE = "departure_time"
    STOP_ID = "stop_id"
    STOP_SEQUENCE = "stop_sequence"
    HEAD_SIGN = "stop_headsign"
    PICKUP_TYPE = "pickup_type"
    DROP_OFF_TYPE = "drop_off_type"
    PICKUP_POLICY = "continuous_pickup"
    DROP_OFF_POLICY = "continuous_drop_off"
    DISTANCE_TRAVELED = "shape_dist_traveled"
    TIMEPOINT = "timepoint"
    NONSTANDARD = "nonstandard"


class PickupDropOffType(IntEnum):
    """How passengers board or alight at a single stop."""

    REGULAR = 0
    NONE = 1
    PHONE_AGENCY = 2
    COORDINATE_WITH_DRIVER = 3


class Timepoint(IntEnum):
    APPROXIMATE = 0
    EXACT = 1


@dataclass
class StopTime(GtfsRecord):
    """One scheduled call; times are seconds after midnight of the service day."""

    trip_id: str = ""
    arrival: int | None = None
    departure: int | None = None
    stop_id: str | None = None
    stop_sequence: int | None = None
    head_sign: str | None = None
    pickup_type: PickupDropOffType | None = None
    drop_off_type: PickupDropOffType | None = None
    pickup_policy: PickupDropOffPolicy | None = None
    drop_off_policy: PickupDropOffPolicy | None = None
    distance_traveled: float | None = None
    timepoint: Timepoint | None = None
    nonstandard: dict[str, str] = field(default_factory=dict, compare=False)

    def __str__(self) -> str:
        return f"StopTime: {self.trip_id} #{self.stop_sequence}"

    def has_conditionally_required_fields(self) -> bool:
        """A stop is needed; exact timepoints need both times."""
        if not self.stop_id:
            return False
        if self.timepoint is Timepoint.EXACT:
            return self.arrival is not None and self.departure is not None
        return True


STOP_TIME_SCHEMA: RecordSchema[StopTime] = RecordSchema(
    name="stop_time",
    filename="stop_times.txt",
    field_type=StopTimeField,
    record_type=StopTime,
    bindings={
        StopTimeField.TRIP_ID: Binding("trip_id", to_string),
        StopTimeField.ARRIVAL: Binding("arrival", to_optional_time),
        StopTimeField.DEPARTURE: Binding("departure", to_optional_time),
        StopTimeField.STOP_ID: Binding("stop_id", to_optional_string),
        StopTimeField.STOP_SEQUENCE: Binding("stop_sequence", to_uint),
        StopTimeField.HEAD_SIGN: Binding("head_sign", to_optional_string),
        StopTimeField.PICKUP_TYPE: Binding("pickup_type", to_optional_enum(PickupDropOffType)),
        StopTimeField.DROP_OFF_TYPE: Binding(
            "drop_off_type", to_optional_enum(PickupDropOffType)
        ),
        StopTimeField.PICKUP_POLICY: Binding(
            "pickup_policy", to_optional_enum(PickupDropOffPolicy)
        ),
        StopTimeField.DROP_OFF_POLICY: Binding(
            "drop_off_policy", to_optional_enum(PickupDropOffPolicy)
        ),
        StopTimeField.DISTANCE_TRAVELED: Binding("distance_traveled", to_optional_float),
        StopTimeField.TIMEPOINT: Binding("timepoint", to_optional_enum(Timepoint)),
    },
    required=frozenset({StopTimeField.TRIP_ID, StopTimeField.STOP_SEQUENCE}),
    conditionally_required=frozenset(
        {StopTimeField.ARRIVAL, StopTimeField.DEPARTURE, StopTimeField.STOP_ID}
    ),
    optional=frozenset(
        {
            StopTimeField.HEAD_SIGN,
            StopTimeField.PICKUP_TYPE,
            StopTimeField.DROP_OFF_TYPE,
            StopTimeField.PICKUP_POLICY,
            StopTimeField.DROP_OFF_POLICY,
            StopTimeField.DISTANCE_TRAVELED,
            StopTimeField.TIMEPOINT,
        }
    ),
)
StopTime.schema = STOP_TIME_SCHEMA


class StopTimes(RecordCollection[StopTime]):
    """A complete stop_times.txt dataset."""

    schema = STOP_TIME_SCHEMA
