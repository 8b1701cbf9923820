"""SeismicEntry — one validated earthquake record.

An entry is built from the six fields the USGS feed reports for an event
and is immutable afterwards.  Every bound is checked at construction so
downstream code (conversion, reporting, rendering) never re-checks them.

Use ``create_entry`` to build one: it is the single path that turns a
pydantic failure into a FieldValidationError naming the offending field.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, ValidationError, field_validator

from quake_stats.domain.errors import FieldValidationError
from quake_stats.domain.validation import (
    MAX_DEPTH_KM,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MAX_MAGNITUDE,
    MAX_PLACE_LENGTH,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    MIN_MAGNITUDE,
    first_field_error,
)
from quake_stats.foundation.clock import (
    EARLIEST_RECORD_TIME,
    ensure_utc,
    from_epoch_millis,
    human_readable,
    utc_now,
)


class SeismicEntry(BaseModel):
    """A single earthquake occurrence.

    Structural equality only: two entries built from the same six values
    are equal and render identically.
    """

    magnitude: float = Field(
        ...,
        strict=True,
        ge=MIN_MAGNITUDE,
        le=MAX_MAGNITUDE,
        description="Moment magnitude (Mw)",
    )
    place: str = Field(
        ...,
        max_length=MAX_PLACE_LENGTH,
        description="Human description of the epicentre region",
    )
    time: datetime = Field(..., strict=True, description="Origin time (UTC)")
    longitude: float = Field(..., strict=True, ge=MIN_LONGITUDE, le=MAX_LONGITUDE)
    latitude: float = Field(..., strict=True, ge=MIN_LATITUDE, le=MAX_LATITUDE)
    depth: float = Field(..., strict=True, gt=0.0, le=MAX_DEPTH_KM, description="Depth in km")

    model_config = {"frozen": True}

    # ── Validators ───────────────────────────────────────────────────────

    @field_validator("place")
    @classmethod
    def place_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("place cannot be blank")
        return v

    @field_validator("time")
    @classmethod
    def time_must_be_historical(cls, v: datetime) -> datetime:
        v = ensure_utc(v)
        if v < EARLIEST_RECORD_TIME:
            raise ValueError("entry time cannot be before 1900-01-01T00:00:00Z")
        if v > utc_now():
            raise ValueError("entry time cannot be in the future")
        return v

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def from_epoch_millis(
        cls,
        magnitude: float,
        place: str,
        time_ms: int,
        longitude: float,
        latitude: float,
        depth: float,
    ) -> SeismicEntry:
        """Build an entry from a provider timestamp in milliseconds.

        Raises:
            FieldValidationError: If *time_ms* is not an integer, lies
                outside the representable range, or any field is out of bounds.
        """
        if not isinstance(time_ms, int) or isinstance(time_ms, bool):
            raise FieldValidationError("time", time_ms, "must be integer milliseconds since the epoch")
        try:
            time = from_epoch_millis(time_ms)
        except OverflowError as exc:
            raise FieldValidationError(
                "time", time_ms, "timestamp is outside the representable range"
            ) from exc
        return create_entry(magnitude, place, time, longitude, latitude, depth)

    # ── Rendering ────────────────────────────────────────────────────────

    @property
    def human_time(self) -> str:
        return human_readable(self.time)

    def render(self) -> str:
        return (
            f"earthquake entry: earthquake in {self.place} "
            f"(at {self.latitude:.3f}° N {self.longitude:.3f}° E) "
            f"happened at {self.human_time} "
            f"with a magnitude of {self.magnitude:.1f}Mw "
            f"hitting a depth: {self.depth:.2f} km)]"
        )

    def __str__(self) -> str:
        return self.render()


def create_entry(
    magnitude: float,
    place: str,
    time: datetime,
    longitude: float,
    latitude: float,
    depth: float,
) -> SeismicEntry:
    """Validate the six fields and return an immutable SeismicEntry.

    Raises:
        FieldValidationError: naming the first field that violates its bound.
    """
    try:
        return SeismicEntry(
            magnitude=magnitude,
            place=place,
            time=time,
            longitude=longitude,
            latitude=latitude,
            depth=depth,
        )
    except ValidationError as exc:
        raise first_field_error(exc) from exc
