"""Tests for whole-file loading into record collections."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from transit_feed.errors import (
    TransitAssignError,
    TransitAssignErrorKind,
    TransitError,
    TransitErrorKind,
)
from transit_feed.records import (
    Route,
    RouteField,
    Routes,
    RouteType,
    Shapes,
    Stop,
    Stops,
    StopTimes,
    Trip,
)
from transit_feed.values import Color

from .fixtures.gtfs_fixture import ROUTES_TXT, SHAPES_TXT, STOP_TIMES_TXT, STOPS_TXT

if TYPE_CHECKING:
    from pathlib import Path


class TestFromText:
    """Tests for parsing a file's text."""

    def test_routes_parsed_in_order(self) -> None:
        routes = Routes.from_text(ROUTES_TXT)
        assert [r.route_id for r in routes] == ["001", "002"]
        assert routes[0].color == Color(255, 0, 0)
        assert routes[0].url is None
        assert str(routes[1].url) == "https://www.translink.ca/routes/2"
        assert routes.header_fields[0] is RouteField.ROUTE_ID

    def test_empty_text(self) -> None:
        routes = Routes.from_text("")
        assert len(routes) == 0
        assert routes.header is None
        assert routes.header_fields == []

    def test_header_only(self) -> None:
        assert len(Routes.from_text("route_id,route_type\n")) == 0

    def test_single_column_files(self) -> None:
        routes = Routes.from_text("route_id,route_color\nA1,FF0000\n")
        assert routes[0] == Route(route_id="A1", color=Color(255, 0, 0))

    def test_stop_columns_per_record(self) -> None:
        stops = Stops.from_text(STOPS_TXT)
        assert stops[2].name == "Granville Station, Platform 1"
        assert stops[2].zone_id == "BUS ZN"
        assert stops[0].zone_id is None
        assert stops[0].code == "50001"

    def test_shape_extra_columns_ignored(self) -> None:
        shapes = Shapes.from_text(SHAPES_TXT)
        assert len(shapes) == 2
        assert shapes[1].dist_traveled == pytest.approx(0.65)

    def test_times_past_midnight(self) -> None:
        stop_times = StopTimes.from_text(STOP_TIMES_TXT)
        assert len(stop_times) == 8
        assert stop_times[6].arrival == 90090

    def test_quoted_newline_inside_cell(self) -> None:
        text = 'stop_id,stop_name,stop_desc\r\n1,Main,"north side\r\nby the clock"\r\n2,Side,\r\n'
        stops = Stops.from_text(text)
        assert len(stops) == 2
        assert stops[0].details == "north side\r\nby the clock"
        assert stops[1].details is None

    def test_mid_cell_quote_is_literal(self) -> None:
        stops = Stops.from_text('stop_id,stop_name\nS1,12" display\nS2,Main\n')
        assert [s.name for s in stops] == ['12" display', "Main"]

    def test_blank_lines_ignored(self) -> None:
        routes = Routes.from_text("route_id,route_type\n\nA1,3\n\n\nB2,1\n")
        assert [r.type for r in routes] == [RouteType.BUS, RouteType.SUBWAY]

    def test_iteration_is_restartable(self) -> None:
        routes = Routes.from_text(ROUTES_TXT)
        assert list(routes) == list(routes)


class TestStrictMode:
    """Bad rows abort the load unless lenient mode is selected."""

    BAD_ROUTES = "route_id,route_type\nA1,3\nB2,99\nC3,1\n"

    def test_strict_raises_with_location(self) -> None:
        with pytest.raises(TransitError) as exc_info:
            Routes.from_text(self.BAD_ROUTES)
        error = exc_info.value
        assert error.kind is TransitErrorKind.INVALID_FIELD_TYPE
        assert error.filename == "routes.txt"
        assert error.row == 3
        assert error.field == "route_type"
        assert "row=3" in str(error)

    def test_lenient_skips_bad_rows(self) -> None:
        routes = Routes.from_text(self.BAD_ROUTES, strict=False)
        assert [r.route_id for r in routes] == ["A1", "C3"]

    def test_lenient_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GTFS_STRICT", "false")
        assert len(Routes.from_text(self.BAD_ROUTES)) == 2

    def test_mismatched_row(self) -> None:
        with pytest.raises(TransitError) as exc_info:
            Routes.from_text("route_id,route_type\nA1,3,extra\n")
        assert exc_info.value.kind is TransitErrorKind.HEADER_RECORD_MISMATCH
        assert exc_info.value.row == 2

    def test_unterminated_quote_names_file(self) -> None:
        with pytest.raises(TransitError) as exc_info:
            Routes.from_text('route_id,route_desc\nA1,"open\n', filename="custom.txt")
        assert exc_info.value.kind is TransitErrorKind.QUOTE_EXPECTED
        assert exc_info.value.filename == "custom.txt"

    def test_require_columns(self) -> None:
        text = "route_id,route_color\nA1,FF0000\n"
        with pytest.raises(TransitError) as exc_info:
            Routes.from_text(text, require_columns=True)
        assert exc_info.value.kind is TransitErrorKind.MISSING_REQUIRED_FIELDS
        assert exc_info.value.row == 1

    def test_require_columns_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GTFS_REQUIRE_COLUMNS", "1")
        with pytest.raises(TransitError, match="route_type"):
            Routes.from_text("route_id\nA1\n")


class TestFromFile:
    """Tests for reading files from disk."""

    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "stops.txt"
        path.write_bytes(STOPS_TXT.encode("utf-8"))
        stops = Stops.from_file(path)
        assert len(stops) == 3

    def test_crlf_in_quoted_cell_preserved(self, tmp_path: Path) -> None:
        path = tmp_path / "stops.txt"
        path.write_bytes(b'stop_id,stop_desc\r\n1,"a\r\nb"\r\n')
        assert Stops.from_file(path)[0].details == "a\r\nb"

    def test_error_names_file_on_disk(self, tmp_path: Path) -> None:
        path = tmp_path / "routes-2024.txt"
        path.write_bytes(b"route_id,route_type\nA1,bus\n")
        with pytest.raises(TransitError) as exc_info:
            Routes.from_file(path)
        assert exc_info.value.filename == "routes-2024.txt"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Routes.from_file(tmp_path / "routes.txt")


class TestCollectionBehaviour:
    """Tests for the sequence interface."""

    def test_append_and_index(self) -> None:
        routes = Routes()
        routes.append(Route(route_id="A1"))
        routes[0] = Route(route_id="B2")
        assert len(routes) == 1
        assert routes[0].route_id == "B2"

    def test_append_wrong_kind(self) -> None:
        with pytest.raises(TransitAssignError) as exc_info:
            Routes().append(Trip(trip_id="t1"))
        assert exc_info.value.kind is TransitAssignErrorKind.INVALID_VALUE

    def test_setitem_wrong_kind(self) -> None:
        routes = Routes([Route(route_id="A1")])
        with pytest.raises(TransitAssignError, match="Routes holds Route, got Stop"):
            routes[0] = Stop(stop_id="1")

    def test_equality(self) -> None:
        assert Routes([Route(route_id="A1")]) == Routes([Route(route_id="A1")])
        assert Routes() != Stops()

    def test_repr(self) -> None:
        assert repr(Routes([Route(route_id="A1")])) == "Routes(1 records)"
