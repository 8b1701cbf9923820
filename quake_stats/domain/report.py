"""SeismicReport — immutable statistics derived from a set of entries.

This is a pure data structure.  The numbers are computed once by the
ReportEngine and never re-derived or updated in place; the entries the
report was computed from are kept as a tuple snapshot.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from quake_stats.domain.entry import SeismicEntry


class Centroid(BaseModel):
    """Arithmetic mean position of a set of entries (not geodesic)."""

    latitude: float
    longitude: float

    model_config = {"frozen": True}


class SeismicReport(BaseModel):
    """Descriptive statistics and a naive next-occurrence window."""

    entries: tuple[SeismicEntry, ...] = Field(..., min_length=1)
    magnitude_quartiles: tuple[float, float, float] = Field(
        ..., description="Q1, Q2 (median) and Q3 of magnitude"
    )
    mean_magnitude: float
    mean_depth: float = Field(..., description="Mean depth in km")
    mean_intermission_hours: float = Field(
        ..., description="Mean whole-hour gap between consecutive entries (0 for one entry)"
    )
    monthly_frequency: float = Field(
        ...,
        description=(
            "Elapsed whole days of the query window divided by the entry count. "
            "Despite the name this is days per entry, and it is negative for an "
            "inverted window."
        ),
    )
    centroid: Centroid
    predicted_next_window: tuple[datetime, datetime] = Field(
        ..., description="Earliest and latest predicted next occurrence"
    )
    window_start: datetime
    window_end: datetime
    generated_at: datetime

    model_config = {"frozen": True}

    @property
    def entry_count(self) -> int:
        return len(self.entries)


class ReportComparison(BaseModel):
    """Unrounded differences between the latest report and the one before it.

    Every delta is ``latest - previous``.
    """

    latest: SeismicReport
    previous: SeismicReport
    mean_magnitude_delta: float
    magnitude_quartile_deltas: tuple[float, float, float]
    mean_depth_delta: float
    mean_intermission_hours_delta: float
    monthly_frequency_delta: float
    centroid_latitude_delta: float
    centroid_longitude_delta: float
    entry_count_delta: int

    model_config = {"frozen": True}

    @classmethod
    def between(cls, latest: SeismicReport, previous: SeismicReport) -> ReportComparison:
        q_new, q_old = latest.magnitude_quartiles, previous.magnitude_quartiles
        return cls(
            latest=latest,
            previous=previous,
            mean_magnitude_delta=latest.mean_magnitude - previous.mean_magnitude,
            magnitude_quartile_deltas=(
                q_new[0] - q_old[0],
                q_new[1] - q_old[1],
                q_new[2] - q_old[2],
            ),
            mean_depth_delta=latest.mean_depth - previous.mean_depth,
            mean_intermission_hours_delta=(
                latest.mean_intermission_hours - previous.mean_intermission_hours
            ),
            monthly_frequency_delta=latest.monthly_frequency - previous.monthly_frequency,
            centroid_latitude_delta=latest.centroid.latitude - previous.centroid.latitude,
            centroid_longitude_delta=latest.centroid.longitude - previous.centroid.longitude,
            entry_count_delta=latest.entry_count - previous.entry_count,
        )
