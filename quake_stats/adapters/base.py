"""Abstract base for response envelope adapters.

Envelope adapters turn a parsed API response into SeismicEntry records.

Architectural rules:
    1. Adapters must NOT mutate the incoming envelope dict.
    2. convert() returns every surviving entry or raises; never a partial list.
    3. No adapter performs network I/O; the envelope is already fetched.
    4. No statistics live inside an adapter, only structure checks and mapping.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from quake_stats.domain.entry import SeismicEntry


def api_version(envelope: dict[str, Any]) -> Any:
    """Return the envelope's ``metadata.api`` value, or None if absent."""
    metadata = envelope.get("metadata")
    if not isinstance(metadata, dict):
        return None
    return metadata.get("api")


class EnvelopeAdapter(ABC):
    """Base class for converting API envelopes into SeismicEntries."""

    @abstractmethod
    def can_handle(self, envelope: dict[str, Any]) -> bool:
        """Return True if this adapter understands *envelope*'s API version.

        Must be a fast, non-destructive check (e.g. a version prefix).
        """
        ...

    @abstractmethod
    def convert(self, envelope: dict[str, Any]) -> list[SeismicEntry]:
        """Translate an envelope into validated entries.

        Raises:
            FormatError: If the envelope or any feature is malformed.
            FieldValidationError: If a well-formed feature carries an
                out-of-range value.
        """
        ...

    @property
    @abstractmethod
    def api_family(self) -> str:
        """Human-readable name of the API version family this adapter handles."""
        ...
