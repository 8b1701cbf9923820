"""Tests for SeismicEntry construction, validation and rendering."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from quake_stats.domain.entry import SeismicEntry, create_entry
from quake_stats.domain.errors import FieldValidationError, QuakeStatsError
from quake_stats.foundation.clock import EARLIEST_RECORD_TIME

_TIME = datetime(2024, 1, 5, 13, 45, tzinfo=timezone.utc)
_TIME_MS = 1_704_462_300_000


def _valid_entry(**overrides) -> dict:
    """Return valid create_entry kwargs, with optional overrides."""
    base = {
        "magnitude": 5.0,
        "place": "10 km N of Somewhere",
        "time": _TIME,
        "longitude": 10.0,
        "latitude": 20.0,
        "depth": 15.0,
    }
    base.update(overrides)
    return base


def _entry(**overrides) -> SeismicEntry:
    return create_entry(**_valid_entry(**overrides))


def _rejected_field(**overrides) -> str:
    with pytest.raises(FieldValidationError) as info:
        _entry(**overrides)
    return info.value.field


class TestEntryValidation:
    def test_valid_entry(self) -> None:
        entry = _entry()
        assert entry.magnitude == 5.0
        assert entry.time == _TIME

    def test_error_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            _entry(magnitude=11.0)
        with pytest.raises(QuakeStatsError):
            _entry(magnitude=11.0)

    @pytest.mark.parametrize("magnitude", [-5.0, 0.0, 10.0])
    def test_magnitude_bounds_accepted(self, magnitude: float) -> None:
        assert _entry(magnitude=magnitude).magnitude == magnitude

    @pytest.mark.parametrize("magnitude", [-5.1, 10.1, 100.0])
    def test_magnitude_out_of_range_rejected(self, magnitude: float) -> None:
        assert _rejected_field(magnitude=magnitude) == "magnitude"

    @pytest.mark.parametrize("latitude", [-90.0, 90.0])
    def test_latitude_bounds_accepted(self, latitude: float) -> None:
        assert _entry(latitude=latitude).latitude == latitude

    @pytest.mark.parametrize("latitude", [-90.1, 90.1])
    def test_latitude_out_of_range_rejected(self, latitude: float) -> None:
        assert _rejected_field(latitude=latitude) == "latitude"

    @pytest.mark.parametrize("longitude", [-180.0, 180.0])
    def test_longitude_bounds_accepted(self, longitude: float) -> None:
        assert _entry(longitude=longitude).longitude == longitude

    @pytest.mark.parametrize("longitude", [-180.1, 180.1])
    def test_longitude_out_of_range_rejected(self, longitude: float) -> None:
        assert _rejected_field(longitude=longitude) == "longitude"

    @pytest.mark.parametrize("depth", [0.001, 800.0])
    def test_depth_bounds_accepted(self, depth: float) -> None:
        assert _entry(depth=depth).depth == depth

    @pytest.mark.parametrize("depth", [0.0, -1.0, 800.1])
    def test_depth_out_of_range_rejected(self, depth: float) -> None:
        assert _rejected_field(depth=depth) == "depth"

    def test_place_at_max_length_accepted(self) -> None:
        assert len(_entry(place="x" * 512).place) == 512

    @pytest.mark.parametrize("place", ["", "   ", "x" * 513, None])
    def test_bad_place_rejected(self, place) -> None:
        assert _rejected_field(place=place) == "place"

    def test_earliest_time_accepted(self) -> None:
        assert _entry(time=EARLIEST_RECORD_TIME).time == EARLIEST_RECORD_TIME

    def test_time_before_1900_rejected(self) -> None:
        assert _rejected_field(time=EARLIEST_RECORD_TIME - timedelta(seconds=1)) == "time"

    def test_time_exactly_now_accepted(self) -> None:
        now = datetime(2025, 8, 1, tzinfo=timezone.utc)
        with patch("quake_stats.domain.entry.utc_now", return_value=now):
            assert _entry(time=now).time == now

    def test_future_time_rejected(self) -> None:
        now = datetime(2025, 8, 1, tzinfo=timezone.utc)
        with patch("quake_stats.domain.entry.utc_now", return_value=now):
            assert _rejected_field(time=now + timedelta(seconds=1)) == "time"

    def test_naive_time_gets_utc(self) -> None:
        entry = _entry(time=datetime(2024, 1, 5, 13, 45))
        assert entry.time.tzinfo is not None
        assert entry.time == _TIME

    def test_error_names_value_and_bound(self) -> None:
        with pytest.raises(FieldValidationError) as info:
            _entry(depth=900.0)
        assert info.value.value == 900.0
        assert "900.0" in str(info.value)
        assert "800" in info.value.reason

    @pytest.mark.parametrize("time", ["2024-01-05T13:45:00Z", 1_700_000_000, 1_704_462_300_000])
    def test_time_must_be_a_datetime(self, time) -> None:
        assert _rejected_field(time=time) == "time"

    @pytest.mark.parametrize("field", ["magnitude", "longitude", "latitude", "depth"])
    @pytest.mark.parametrize("value", [True, "5.0", None])
    def test_numeric_fields_reject_other_types(self, field: str, value) -> None:
        assert _rejected_field(**{field: value}) == field

    def test_integer_values_accepted_as_floats(self) -> None:
        entry = _entry(magnitude=5, longitude=10, latitude=20, depth=15)
        assert entry.magnitude == 5.0
        assert entry.depth == 15.0

    def test_first_failure_is_reported(self) -> None:
        with pytest.raises(FieldValidationError) as info:
            _entry(magnitude=20.0, depth=-3.0)
        assert info.value.field == "magnitude"


class TestEntryBehaviour:
    def test_entry_is_immutable(self) -> None:
        entry = _entry()
        with pytest.raises(Exception):
            entry.magnitude = 6.0

    def test_structural_equality(self) -> None:
        assert _entry() == _entry()
        assert _entry() != _entry(magnitude=5.1)

    def test_reconstruction_is_idempotent(self) -> None:
        first = _entry()
        second = create_entry(
            first.magnitude, first.place, first.time, first.longitude, first.latitude, first.depth
        )
        assert second == first
        assert second.render() == first.render()

    def test_from_epoch_millis(self) -> None:
        entry = SeismicEntry.from_epoch_millis(5.0, "Somewhere", _TIME_MS, 10.0, 20.0, 15.0)
        assert entry.time == _TIME

    @pytest.mark.parametrize("time_ms", [1_704_462_300.0, "1704462300000", True])
    def test_from_epoch_millis_requires_integer(self, time_ms) -> None:
        with pytest.raises(FieldValidationError) as info:
            SeismicEntry.from_epoch_millis(5.0, "Somewhere", time_ms, 10.0, 20.0, 15.0)
        assert info.value.field == "time"

    def test_from_epoch_millis_out_of_range(self) -> None:
        with pytest.raises(FieldValidationError) as info:
            SeismicEntry.from_epoch_millis(5.0, "Somewhere", 10**20, 10.0, 20.0, 15.0)
        assert info.value.field == "time"

    def test_render(self) -> None:
        assert _entry().render() == (
            "earthquake entry: earthquake in 10 km N of Somewhere "
            "(at 20.000° N 10.000° E) happened at Friday, January 5, 2024 13:45 UTC "
            "with a magnitude of 5.0Mw hitting a depth: 15.00 km)]"
        )

    def test_str_matches_render(self) -> None:
        entry = _entry()
        assert str(entry) == entry.render()
