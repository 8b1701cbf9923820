"""In-memory query session: the current data set and the report history.

Design notes:
    - Single-threaded: every command runs to completion before the next,
      so no locking is needed.
    - A session holds zero-or-one current data set (with the window it was
      queried over) and zero-or-more reports in generation order.
    - The current data set is replaced only when a query fully succeeds;
      a failed fetch or conversion leaves the previous one in place.
    - The session does NOT compute statistics or render text.  It sequences
      the client, converter and engine and enforces the required prior state.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol

from quake_stats.adapters.registry import ConverterRegistry
from quake_stats.core.report_engine import ReportEngine
from quake_stats.domain.entry import SeismicEntry
from quake_stats.domain.errors import StateError
from quake_stats.domain.query import SearchQuery
from quake_stats.domain.report import ReportComparison, SeismicReport

logger = logging.getLogger(__name__)


class EnvelopeSource(Protocol):
    def fetch(self, query: SearchQuery) -> dict: ...


class QuerySession:
    """Caches the latest data set and every generated report.

    Args:
        client: Anything with ``fetch(query) -> dict`` (normally RetrievalClient).
        converter: Registry that turns the envelope into entries.
        engine: Stateless report engine.
    """

    def __init__(
        self,
        client: EnvelopeSource,
        converter: ConverterRegistry,
        engine: ReportEngine | None = None,
    ) -> None:
        self._client = client
        self._converter = converter
        self._engine = engine or ReportEngine()
        self._entries: tuple[SeismicEntry, ...] | None = None
        self._window: tuple[datetime, datetime] | None = None
        self._reports: list[SeismicReport] = []

    # ── Query ────────────────────────────────────────────────────────────

    def submit_query(self, query: SearchQuery) -> tuple[SeismicEntry, ...]:
        """Fetch and convert *query*, then make the result the current data set.

        Errors from the client or converter propagate and leave the session
        unchanged.
        """
        envelope = self._client.fetch(query)
        entries = tuple(self._converter.convert(envelope))
        self._entries = entries
        self._window = (query.start_time, query.end_time)
        logger.info("Stored data set of %d entr%s", len(entries), "y" if len(entries) == 1 else "ies")
        return entries

    @property
    def has_data_set(self) -> bool:
        return self._entries is not None

    def raw_data_set(self) -> tuple[SeismicEntry, ...]:
        """Return the current data set, which may legitimately be empty."""
        if not self.has_data_set:
            raise StateError("Current data set empty; query the API first before viewing data set.")
        return self._entries

    # ── Reports ──────────────────────────────────────────────────────────

    def generate_report(self) -> SeismicReport:
        """Compute a report over the current data set and append it to the history."""
        if not self.has_data_set:
            raise StateError("Current data set empty; query the API first before generating report.")
        if not self._entries:
            raise StateError(
                "Cannot report on zero entries; the last query matched no moment-magnitude earthquakes."
            )

        start, end = self._window
        report = self._engine.evaluate(self._entries, start, end)
        self._reports.append(report)
        logger.info("Cached report #%d", len(self._reports))
        return report

    @property
    def reports(self) -> list[SeismicReport]:
        """Read-only view of the history, in generation order."""
        return list(self._reports)

    def export_reports(self) -> list[SeismicReport]:
        if not self._reports:
            raise StateError("No cached reports to export; generate report first before exporting.")
        return list(self._reports)

    def compare_latest(self) -> ReportComparison:
        """Compare the last generated report against the one generated before it."""
        if len(self._reports) < 2:
            raise StateError(
                "Not enough cached reports to compare; generate at least two reports before comparing."
            )
        return ReportComparison.between(self._reports[-1], self._reports[-2])
