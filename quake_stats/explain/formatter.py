"""ReportFormatter — deterministic plain-text rendering.

Reports and raw data sets are separate text products so a caller can
show one without the other.  Nothing here computes statistics; it only
lays out values already present on the SeismicReport.
"""

from __future__ import annotations

from collections.abc import Sequence

from quake_stats.domain.entry import SeismicEntry
from quake_stats.domain.report import ReportComparison, SeismicReport
from quake_stats.foundation.clock import human_readable

_MANUAL = """--- Welcome to the program! ---
> commands (enter the corresponding number to activate one of the following):
> 1. api query - make and commit data query to the USGS api.
> 2. generate report - generate report from current data set (from latest api query) and view it; said report will be saved in cache.
> 3. view raw data set - view the current data set (from latest api query) in raw format.
> 4. export all reports - export all cached reports (with their respective raw data) to the console.
> 5. compare to previous report - compare the latest report to the previous report (if both exist) and view the comparison.
> 6. exit program - exit the program safely.
> 7. help - view this manual again.
--- ----------------------- ---"""


class ReportFormatter:
    """Plain-text layouts for reports, data sets, exports and comparisons."""

    @staticmethod
    def format_report(report: SeismicReport) -> str:
        q1, q2, q3 = report.magnitude_quartiles
        lat, lon = report.centroid.latitude, report.centroid.longitude
        earliest, latest = report.predicted_next_window

        lines = ["Earthquake report:"]
        lines.append(
            f"> Magnitude - mean of {report.mean_magnitude:.1f} with quartiles "
            f"(Q1, Q2, and Q3) of {q1:.1f} Mw, {q2:.1f} Mw, and {q3:.1f} Mw."
        )
        lines.append(
            f"> Timing - mean intermission time of {report.mean_intermission_hours:.1f} hours "
            f"with a monthly frequency of {report.monthly_frequency:.2f} earthquakes per month."
        )
        lines.append(f"> Location - centroid at {lat:.3f}° N {lon:.3f}° E.")
        lines.append(f"> Depth - mean of {report.mean_depth:.2f} km.")
        lines.append(
            "> Predicted next earthquake occurrence (based on given data set) - "
            f"estimated to occur at {lat:.3f}° N, {lon:.3f}° E, with magnitude strength of "
            f"{report.mean_magnitude:.1f} Mw hitting {report.mean_depth:.2f} Km deep, "
            f"between {human_readable(earliest)} and {human_readable(latest)}."
        )
        lines.append(f"> Total number of earthquake entries analysed - {report.entry_count}.")
        lines.append("End of report.")
        lines.append("Disclaimer - seeing the raw data set (all earthquake entries) is a separate action.")
        return "\n".join(lines)

    @staticmethod
    def format_raw_data_set(entries: Sequence[SeismicEntry]) -> str:
        """The current data set as shown by the view command, numbered from 1."""
        lines = ["### Raw Data Set: ###"]
        for i, entry in enumerate(entries, start=1):
            lines.append(f"> #{i} {entry.render()}")
        lines.append("### ############# ###")
        return "\n".join(lines)

    @staticmethod
    def format_report_data_set(report: SeismicReport) -> str:
        """The entries a report was computed from, indexed from 0."""
        lines = ["Earthquake Data Set:"]
        for i, entry in enumerate(report.entries):
            lines.append(f"> Index #{i} {entry.render()}")
        return "\n".join(lines)

    @classmethod
    def format_export(cls, reports: Sequence[SeismicReport]) -> str:
        """Every report with its raw data set, in the order they were generated."""
        parts = []
        for i, report in enumerate(reports, start=1):
            parts.append(f"--- Report #{i} ---")
            parts.append(cls.format_report(report))
            parts.append("### Raw Data Set: ###")
            parts.append(cls.format_report_data_set(report))
            parts.append("### ############# ###")
            parts.append("--- --------------- ---")
        parts.append("ALL REPORTS (and their respective raw data sets) EXPORTED SUCCESSFULLY TO CONSOLE")
        return "\n".join(parts)

    @staticmethod
    def format_comparison(comparison: ReportComparison) -> str:
        """Full-precision deltas (latest minus previous); nothing is rounded."""
        dq1, dq2, dq3 = comparison.magnitude_quartile_deltas
        lines = ["Comparison of latest report against previous report (latest - previous):"]
        lines.append(f"> Mean magnitude: {comparison.mean_magnitude_delta!r} Mw")
        lines.append(f"> Magnitude quartiles (Q1, Q2, Q3): {dq1!r}, {dq2!r}, {dq3!r} Mw")
        lines.append(f"> Mean depth: {comparison.mean_depth_delta!r} km")
        lines.append(f"> Mean intermission time: {comparison.mean_intermission_hours_delta!r} hours")
        lines.append(f"> Monthly frequency: {comparison.monthly_frequency_delta!r}")
        lines.append(
            f"> Centroid: {comparison.centroid_latitude_delta!r}° N "
            f"{comparison.centroid_longitude_delta!r}° E"
        )
        lines.append(f"> Entries analysed: {comparison.entry_count_delta:+d}")
        return "\n".join(lines)

    @staticmethod
    def format_manual() -> str:
        return _MANUAL
