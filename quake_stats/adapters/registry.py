"""Converter Registry — selects the envelope adapter for an API response.

The registry holds a list of registered EnvelopeAdapters.  When an
envelope arrives, it iterates through adapters in registration order
and selects the first one whose can_handle() returns True.

No heuristics.  No guessing.  An envelope whose API version no adapter
claims is a hard compatibility failure, not a warning.
"""

from __future__ import annotations

import logging
from typing import Any

from quake_stats.adapters.base import EnvelopeAdapter, api_version
from quake_stats.domain.entry import SeismicEntry
from quake_stats.domain.errors import QuakeStatsError, UnsupportedVersionError

logger = logging.getLogger(__name__)


class ConverterStats:
    """Per-adapter conversion statistics for observability."""

    __slots__ = ("api_family", "accepted_count", "rejected_count", "entries_produced")

    def __init__(self, api_family: str) -> None:
        self.api_family = api_family
        self.accepted_count: int = 0
        self.rejected_count: int = 0
        self.entries_produced: int = 0

    def to_dict(self) -> dict:
        return {
            "api_family": self.api_family,
            "accepted_count": self.accepted_count,
            "rejected_count": self.rejected_count,
            "entries_produced": self.entries_produced,
        }


class ConverterRegistry:
    """Registry of envelope adapters with selection and stats tracking.

    Usage:
        registry = ConverterRegistry()
        registry.register(GeoJsonV1Adapter())

        entries = registry.convert(envelope)
    """

    def __init__(self) -> None:
        self._adapters: list[EnvelopeAdapter] = []
        self._stats: dict[str, ConverterStats] = {}

    def register(self, adapter: EnvelopeAdapter) -> None:
        """Add an adapter to the registry."""
        self._adapters.append(adapter)
        self._stats[adapter.api_family] = ConverterStats(adapter.api_family)
        logger.info("Registered envelope adapter: %s", adapter.api_family)

    def convert(self, envelope: dict[str, Any]) -> list[SeismicEntry]:
        """Route an envelope through the first adapter that accepts its version.

        Args:
            envelope: The parsed JSON object returned by the API.

        Returns:
            Validated entries in feature order (possibly empty when every
            feature was filtered out by magnitude type).

        Raises:
            UnsupportedVersionError: If no adapter's can_handle() returns True.
            FormatError / FieldValidationError: Propagated unchanged from the
                matched adapter; no partial results are returned.
        """
        for adapter in self._adapters:
            if adapter.can_handle(envelope):
                stats = self._stats[adapter.api_family]
                try:
                    entries = adapter.convert(envelope)
                except QuakeStatsError as exc:
                    stats.rejected_count += 1
                    logger.warning(
                        "Adapter '%s' rejected envelope: %s",
                        adapter.api_family,
                        exc,
                    )
                    raise
                stats.accepted_count += 1
                stats.entries_produced += len(entries)
                logger.info(
                    "Adapter '%s' converted envelope into %d entr%s",
                    adapter.api_family,
                    len(entries),
                    "y" if len(entries) == 1 else "ies",
                )
                return entries

        raise UnsupportedVersionError(api_version(envelope))

    @property
    def api_families(self) -> list[str]:
        """List of registered API families in registration order."""
        return [a.api_family for a in self._adapters]

    @property
    def stats(self) -> list[dict]:
        return [s.to_dict() for s in self._stats.values()]

    @property
    def total_accepted(self) -> int:
        return sum(s.accepted_count for s in self._stats.values())

    @property
    def total_rejected(self) -> int:
        return sum(s.rejected_count for s in self._stats.values())
