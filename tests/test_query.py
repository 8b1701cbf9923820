"""Tests for SearchQuery validation and URL rendering."""

from datetime import datetime, timedelta, timezone

import pytest

from quake_stats.domain.enums import QueryParam
from quake_stats.domain.errors import FieldValidationError
from quake_stats.domain.query import SearchQuery, create_query

BASE_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"


def _valid_query(**overrides) -> dict:
    """Return valid create_query kwargs, with optional overrides."""
    base = {
        "limit": 100,
        "latitude": 0.0,
        "longitude": 0.0,
        "radius_km": 1000,
        "start_time": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "end_time": datetime(2024, 2, 1, tzinfo=timezone.utc),
        "min_magnitude": 4.5,
        "max_magnitude": 10.0,
        "min_depth": 1.0,
        "max_depth": 800.0,
    }
    base.update(overrides)
    return base


def _query(**overrides) -> SearchQuery:
    return create_query(**_valid_query(**overrides))


def _rejected_field(**overrides) -> str:
    with pytest.raises(FieldValidationError) as info:
        _query(**overrides)
    return info.value.field


class TestQueryValidation:
    def test_valid_query(self) -> None:
        query = _query()
        assert query.limit == 100
        assert query.radius_km == 1000

    @pytest.mark.parametrize("limit", [1, 20000])
    def test_limit_bounds_accepted(self, limit: int) -> None:
        assert _query(limit=limit).limit == limit

    @pytest.mark.parametrize("limit", [0, -1, 20001])
    def test_limit_out_of_range_rejected(self, limit: int) -> None:
        assert _rejected_field(limit=limit) == "limit"

    @pytest.mark.parametrize("radius", [1, 20001])
    def test_radius_bounds_accepted(self, radius: int) -> None:
        assert _query(radius_km=radius).radius_km == radius

    @pytest.mark.parametrize("radius", [0, -5, 20002])
    def test_radius_out_of_range_rejected(self, radius: int) -> None:
        assert _rejected_field(radius_km=radius) == "radius_km"

    def test_latitude_and_longitude_bounds(self) -> None:
        assert _rejected_field(latitude=90.5) == "latitude"
        assert _rejected_field(longitude=-180.5) == "longitude"
        assert _query(latitude=-90.0, longitude=180.0).latitude == -90.0

    def test_end_before_start_rejected(self) -> None:
        assert _rejected_field(
            start_time=datetime(2024, 2, 1, tzinfo=timezone.utc),
            end_time=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ) == "end_time"

    def test_end_equal_to_start_accepted(self) -> None:
        moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert _query(start_time=moment, end_time=moment).end_time == moment

    def test_start_before_1900_rejected(self) -> None:
        assert _rejected_field(start_time=datetime(1899, 12, 31, 23, tzinfo=timezone.utc)) == "start_time"

    def test_end_in_future_rejected(self) -> None:
        future = datetime.now(timezone.utc) + timedelta(days=1)
        assert _rejected_field(end_time=future) == "end_time"

    def test_max_magnitude_below_min_rejected(self) -> None:
        assert _rejected_field(min_magnitude=6.0, max_magnitude=5.0) == "max_magnitude"

    def test_magnitude_bounds(self) -> None:
        assert _rejected_field(min_magnitude=-5.5) == "min_magnitude"
        assert _rejected_field(max_magnitude=10.5) == "max_magnitude"

    def test_max_depth_below_min_rejected(self) -> None:
        assert _rejected_field(min_depth=100.0, max_depth=50.0) == "max_depth"

    @pytest.mark.parametrize("field", ["min_depth", "max_depth"])
    def test_zero_depth_rejected(self, field: str) -> None:
        overrides = {field: 0.0}
        if field == "max_depth":
            overrides["min_depth"] = 0.5
        assert _rejected_field(**overrides) == field

    def test_query_is_immutable(self) -> None:
        query = _query()
        with pytest.raises(Exception):
            query.limit = 5


class TestQueryRendering:
    def test_url_has_fixed_order_and_format_directive(self) -> None:
        assert _query().to_url(BASE_URL) == (
            BASE_URL
            + "?format=geojson&jsonerror"
            + "&limit=100&latitude=0.0&longitude=0.0&maxradiuskm=1000"
            + "&starttime=2024-01-01T00:00:00Z&endtime=2024-02-01T00:00:00Z"
            + "&minmagnitude=4.5&maxmagnitude=10.0&mindepth=1.0&maxdepth=800.0"
        )

    def test_params_follow_enum_order(self) -> None:
        names = [param for param, _ in _query().params()]
        assert names == list(QueryParam)

    def test_rendering_is_deterministic(self) -> None:
        assert _query().to_url(BASE_URL) == _query().to_url(BASE_URL)

    def test_times_are_rendered_in_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        query = _query(start_time=datetime(2024, 1, 1, 2, 0, tzinfo=plus_two))
        assert dict(query.params())[QueryParam.START_TIME] == "2024-01-01T00:00:00Z"
