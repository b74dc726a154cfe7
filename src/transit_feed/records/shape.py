"""Shape points (shapes.txt)."""

from __future__ import annotations

from dataclasses import dataclass

from transit_feed.coercion import to_coordinate, to_optional_float, to_string, to_uint
from transit_feed.collection import GtfsRecord, RecordCollection
from transit_feed.schema import Binding, GtfsField, RecordSchema
from transit_feed.values import Coordinate


class ShapeField(GtfsField):
    SHAPE_ID = "shape_id"
    POINT_LAT = "shape_pt_lat"
    POINT_LON = "shape_pt_lon"
    POINT_SEQUENCE = "shape_pt_sequence"
    DIST_TRAVELED = "shape_dist_traveled"
    NONSTANDARD = "nonstandard"


@dataclass
class Shape(GtfsRecord):
    """One vertex of a shape polyline. Nonstandard columns are not kept."""

    shape_id: str = ""
    point_lat: float | None = None
    point_lon: float | None = None
    point_sequence: int | None = None
    dist_traveled: float | None = None

    def __str__(self) -> str:
        return f"Shape: {self.shape_id} #{self.point_sequence}"

    @property
    def point(self) -> Coordinate | None:
        if self.point_lat is None or self.point_lon is None:
            return None
        return Coordinate(self.point_lat, self.point_lon)


SHAPE_SCHEMA: RecordSchema[Shape] = RecordSchema(
    name="shape",
    filename="shapes.txt",
    field_type=ShapeField,
    record_type=Shape,
    bindings={
        ShapeField.SHAPE_ID: Binding("shape_id", to_string),
        ShapeField.POINT_LAT: Binding("point_lat", to_coordinate),
        ShapeField.POINT_LON: Binding("point_lon", to_coordinate),
        ShapeField.POINT_SEQUENCE: Binding("point_sequence", to_uint),
        ShapeField.DIST_TRAVELED: Binding("dist_traveled", to_optional_float),
    },
    required=frozenset(
        {
            ShapeField.SHAPE_ID,
            ShapeField.POINT_LAT,
            ShapeField.POINT_LON,
            ShapeField.POINT_SEQUENCE,
        }
    ),
    optional=frozenset({ShapeField.DIST_TRAVELED}),
)
Shape.schema = SHAPE_SCHEMA


class Shapes(RecordCollection[Shape]):
    """A complete shapes.txt dataset."""

    schema = SHAPE_SCHEMA
