"""SearchQuery — a validated request against the FDSN event service.

Every bound is checked when the query is created, including the three
cross-field constraints (end after start, max magnitude above min,
max depth below min).  A query that exists can always be sent.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from quake_stats.domain.enums import QueryParam
from quake_stats.domain.validation import (
    MAX_DEPTH_KM,
    MAX_LATITUDE,
    MAX_LIMIT,
    MAX_LONGITUDE,
    MAX_MAGNITUDE,
    MAX_RADIUS_KM,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    MIN_MAGNITUDE,
    first_field_error,
)
from quake_stats.foundation.clock import EARLIEST_RECORD_TIME, ensure_utc, utc_now

# Always ask for GeoJSON, and for errors as JSON rather than HTML.
FORMAT_DIRECTIVE = "format=geojson&jsonerror"


def _format_time(value: datetime) -> str:
    return f"{value:%Y-%m-%dT%H:%M:%SZ}"


class SearchQuery(BaseModel):
    """Immutable FDSN event query parameters."""

    limit: int = Field(..., ge=1, le=MAX_LIMIT, description="Maximum entries returned")
    latitude: float = Field(..., ge=MIN_LATITUDE, le=MAX_LATITUDE)
    longitude: float = Field(..., ge=MIN_LONGITUDE, le=MAX_LONGITUDE)
    radius_km: int = Field(..., gt=0, description="Search radius around the centre")
    start_time: datetime
    end_time: datetime
    min_magnitude: float = Field(..., ge=MIN_MAGNITUDE, le=MAX_MAGNITUDE)
    max_magnitude: float = Field(..., ge=MIN_MAGNITUDE, le=MAX_MAGNITUDE)
    min_depth: float = Field(..., gt=0.0, le=MAX_DEPTH_KM)
    max_depth: float = Field(..., gt=0.0, le=MAX_DEPTH_KM)

    model_config = {"frozen": True}

    # ── Validators ───────────────────────────────────────────────────────

    @field_validator("radius_km")
    @classmethod
    def radius_within_half_circumference(cls, v: int) -> int:
        if v > MAX_RADIUS_KM:
            raise ValueError(
                f"radius cannot exceed {MAX_RADIUS_KM} km (half of Earth's circumference)"
            )
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def time_must_be_historical(cls, v: datetime) -> datetime:
        v = ensure_utc(v)
        if v < EARLIEST_RECORD_TIME:
            raise ValueError("time cannot be before 1900-01-01T00:00:00Z")
        if v > utc_now():
            raise ValueError("time cannot be in the future")
        return v

    @field_validator("end_time")
    @classmethod
    def end_not_before_start(cls, v: datetime, info: ValidationInfo) -> datetime:
        start = info.data.get("start_time")
        if start is not None and v < start:
            raise ValueError("end time cannot be before start time")
        return v

    @field_validator("max_magnitude")
    @classmethod
    def max_magnitude_not_below_min(cls, v: float, info: ValidationInfo) -> float:
        low = info.data.get("min_magnitude")
        if low is not None and v < low:
            raise ValueError("highest magnitude cannot be less than lowest magnitude")
        return v

    @field_validator("max_depth")
    @classmethod
    def max_depth_not_below_min(cls, v: float, info: ValidationInfo) -> float:
        low = info.data.get("min_depth")
        if low is not None and v < low:
            raise ValueError("highest depth cannot be less than lowest depth")
        return v

    # ── Rendering ────────────────────────────────────────────────────────

    def params(self) -> list[tuple[QueryParam, str]]:
        """Wire parameters in their fixed order."""
        return [
            (QueryParam.LIMIT, str(self.limit)),
            (QueryParam.LATITUDE, repr(self.latitude)),
            (QueryParam.LONGITUDE, repr(self.longitude)),
            (QueryParam.RADIUS_KM, str(self.radius_km)),
            (QueryParam.START_TIME, _format_time(self.start_time)),
            (QueryParam.END_TIME, _format_time(self.end_time)),
            (QueryParam.MIN_MAGNITUDE, repr(self.min_magnitude)),
            (QueryParam.MAX_MAGNITUDE, repr(self.max_magnitude)),
            (QueryParam.MIN_DEPTH, repr(self.min_depth)),
            (QueryParam.MAX_DEPTH, repr(self.max_depth)),
        ]

    def to_url(self, base_url: str) -> str:
        query = "&".join(f"{param.value}={value}" for param, value in self.params())
        return f"{base_url}?{FORMAT_DIRECTIVE}&{query}"


def create_query(
    limit: int,
    latitude: float,
    longitude: float,
    radius_km: int,
    start_time: datetime,
    end_time: datetime,
    min_magnitude: float,
    max_magnitude: float,
    min_depth: float,
    max_depth: float,
) -> SearchQuery:
    """Validate every bound and return an immutable SearchQuery.

    Raises:
        FieldValidationError: naming the first field that violates its bound.
    """
    try:
        return SearchQuery(
            limit=limit,
            latitude=latitude,
            longitude=longitude,
            radius_km=radius_km,
            start_time=start_time,
            end_time=end_time,
            min_magnitude=min_magnitude,
            max_magnitude=max_magnitude,
            min_depth=min_depth,
            max_depth=max_depth,
        )
    except ValidationError as exc:
        raise first_field_error(exc) from exc
