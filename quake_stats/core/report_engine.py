"""ReportEngine — deterministic statistics over a set of SeismicEntries.

Design principles:
    1. Pure function: accepts entries and a query window, returns a SeismicReport.
    2. No side effects, no state mutation, no I/O.
    3. No regression, no confidence intervals: means, quartiles and a
       linear duration estimate only.

Quartiles (Q1, Q2, Q3) of magnitude:
    n = 1   → all three equal the single magnitude
    n = 2   → Q1 = min, Q3 = max, Q2 = mean of the two
    n >= 3  → on the ascending magnitudes m, with targets
              t1 = n // 4, t2 = n // 2, t3 = (3 * n) // 4:
                Q1 = mean(m[t1 - 1], m[t1]) if (n // 2) is even else m[t1]
                Q2 = mean(m[t2 - 1], m[t2]) if n is even        else m[t2]
                Q3 = mean(m[t3 - 1], m[t3]) if (n // 2) is even else m[t3]
    This is neither Tukey's nor the inclusive/exclusive method; reports
    produced by earlier versions of the tool depend on it.

Timing:
    mean intermission = mean of whole-hour gaps between consecutive
                        entries in time order (0 for a single entry)
    monthly frequency = whole days in [start, end] / entry count
                        (days per entry; negative for an inverted window)

Prediction window:
    latest + whole hours of the mean intermission, and
    latest + int(monthly frequency) days, returned earliest first.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta

from quake_stats.domain.entry import SeismicEntry
from quake_stats.domain.errors import StateError
from quake_stats.domain.report import Centroid, SeismicReport
from quake_stats.foundation.clock import ensure_utc, utc_now

logger = logging.getLogger(__name__)

_HOUR = timedelta(hours=1)
_DAY = timedelta(days=1)


class ReportEngine:
    """Deterministic report computation.

    This engine is stateless: it accepts entries and produces a
    SeismicReport.  It never mutates the entries it is given.
    """

    # ── Public API ───────────────────────────────────────────────────────

    def evaluate(
        self,
        entries: Sequence[SeismicEntry],
        start_time: datetime,
        end_time: datetime,
    ) -> SeismicReport:
        """Produce a report for *entries* observed over [start_time, end_time].

        Raises:
            StateError: If *entries* is empty; a zero-entry report is never built.
        """
        if not entries:
            raise StateError("Cannot report on zero entries; the current data set is empty.")

        snapshot = tuple(entries)
        start_time, end_time = ensure_utc(start_time), ensure_utc(end_time)

        mean_gap = self.mean_intermission_hours(snapshot)
        frequency = self.monthly_frequency(snapshot, start_time, end_time)

        report = SeismicReport(
            entries=snapshot,
            magnitude_quartiles=self.magnitude_quartiles(snapshot),
            mean_magnitude=self.mean_magnitude(snapshot),
            mean_depth=self.mean_depth(snapshot),
            mean_intermission_hours=mean_gap,
            monthly_frequency=frequency,
            centroid=self.centroid(snapshot),
            predicted_next_window=self.predict_next_window(snapshot, mean_gap, frequency),
            window_start=start_time,
            window_end=end_time,
            generated_at=utc_now(),
        )
        logger.debug(
            "Report computed over %d entr%s (mean %.2f Mw)",
            report.entry_count,
            "y" if report.entry_count == 1 else "ies",
            report.mean_magnitude,
        )
        return report

    # ── Averages ─────────────────────────────────────────────────────────

    @staticmethod
    def _mean(values: Sequence[float]) -> float:
        return sum(values) / len(values)

    @classmethod
    def mean_magnitude(cls, entries: Sequence[SeismicEntry]) -> float:
        return cls._mean([e.magnitude for e in entries])

    @classmethod
    def mean_depth(cls, entries: Sequence[SeismicEntry]) -> float:
        return cls._mean([e.depth for e in entries])

    @classmethod
    def centroid(cls, entries: Sequence[SeismicEntry]) -> Centroid:
        return Centroid(
            latitude=cls._mean([e.latitude for e in entries]),
            longitude=cls._mean([e.longitude for e in entries]),
        )

    @staticmethod
    def magnitude_quartiles(entries: Sequence[SeismicEntry]) -> tuple[float, float, float]:
        m = sorted(e.magnitude for e in entries)
        n = len(m)

        if n == 1:
            return (m[0], m[0], m[0])
        if n == 2:
            return (m[0], (m[0] + m[1]) / 2.0, m[1])

        def pick(target: int, pair: bool) -> float:
            if pair:
                return (m[target - 1] + m[target]) / 2.0
            return m[target]

        half_even = (n // 2) % 2 == 0
        return (
            pick(n // 4, half_even),
            pick(n // 2, n % 2 == 0),
            pick((3 * n) // 4, half_even),
        )

    # ── Timing ───────────────────────────────────────────────────────────

    @staticmethod
    def mean_intermission_hours(entries: Sequence[SeismicEntry]) -> float:
        if len(entries) == 1:
            return 0.0

        times = sorted(e.time for e in entries)
        gaps = [(later - earlier) // _HOUR for earlier, later in zip(times, times[1:])]
        return sum(gaps) / len(gaps)

    @staticmethod
    def monthly_frequency(
        entries: Sequence[SeismicEntry],
        start_time: datetime,
        end_time: datetime,
    ) -> float:
        # Whole days, truncated toward zero so an inverted window stays symmetric.
        elapsed = end_time - start_time
        elapsed_days = abs(elapsed) // _DAY
        if elapsed < timedelta(0):
            elapsed_days = -elapsed_days
        return elapsed_days / len(entries)

    # ── Prediction ───────────────────────────────────────────────────────

    @staticmethod
    def predict_next_window(
        entries: Sequence[SeismicEntry],
        mean_intermission_hours: float,
        monthly_frequency: float,
    ) -> tuple[datetime, datetime]:
        latest = max(e.time for e in entries)

        by_gap = latest + timedelta(hours=int(mean_intermission_hours))
        by_frequency = latest + timedelta(hours=int(monthly_frequency) * 24)

        if by_gap <= by_frequency:
            return (by_gap, by_frequency)
        return (by_frequency, by_gap)
