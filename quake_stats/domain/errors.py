"""Error taxonomy for quake-stats.

Every failure the pipeline can surface derives from QuakeStatsError so the
command shell can report it and keep running.  Field-level failures also
derive from ValueError, matching what callers expect from a bad argument.
"""

from __future__ import annotations

from typing import Any


class QuakeStatsError(Exception):
    """Base class for all quake-stats failures."""


# ── Validation ───────────────────────────────────────────────────────────────

class FieldValidationError(QuakeStatsError, ValueError):
    """A single field is out of bounds or a cross-field constraint failed."""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{value!r} is invalid for '{field}': {reason}")


# ── Response format ──────────────────────────────────────────────────────────

class FormatError(QuakeStatsError):
    """The API envelope (or one of its features) is not in the expected shape."""


class UnsupportedVersionError(FormatError):
    """The envelope's API version is missing or not one we can convert."""

    def __init__(self, version: Any) -> None:
        self.version = version
        if version is None:
            detail = "response carries no 'metadata.api' version field"
        else:
            detail = f"response API version {version!r} is not supported"
        super().__init__(f"Program is out-of-date for the USGS api: {detail}")


class MissingFeaturesError(FormatError):
    """The envelope has no 'features' list."""


class EmptyFeaturesError(FormatError):
    """The envelope's 'features' list is present but empty."""


class MalformedFeatureError(FormatError):
    """One feature violates a structural rule; the whole conversion fails."""

    def __init__(self, index: int, rule: str) -> None:
        self.index = index
        self.rule = rule
        super().__init__(f"feature #{index} has invalid structure: {rule}")


# ── Transport ────────────────────────────────────────────────────────────────

class NetworkError(QuakeStatsError):
    """The service could not be reached within the retry budget."""

    def __init__(self, attempts: int, reason: str) -> None:
        self.attempts = attempts
        self.reason = reason
        super().__init__(
            f"Failed to reach the USGS api after {attempts} attempt(s): {reason}"
        )


class RemoteError(QuakeStatsError):
    """The service answered with a non-success status code."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"GET request failed. Response code - {status_code}. "
            f"Advanced error description - {body or '<empty>'}."
        )


# ── Session sequencing ───────────────────────────────────────────────────────

class StateError(QuakeStatsError):
    """An operation was attempted without the prior state it needs."""
