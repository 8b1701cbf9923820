"""Shared bounds and pydantic error translation for the validating factories."""

from __future__ import annotations

from pydantic import ValidationError

from quake_stats.domain.errors import FieldValidationError

# ── Bounds ───────────────────────────────────────────────────────────────────

MIN_MAGNITUDE = -5.0
MAX_MAGNITUDE = 10.0
MAX_PLACE_LENGTH = 512
MIN_LATITUDE, MAX_LATITUDE = -90.0, 90.0
MIN_LONGITUDE, MAX_LONGITUDE = -180.0, 180.0
MAX_DEPTH_KM = 800.0  # exclusive lower bound is 0
MAX_LIMIT = 20_000
MAX_RADIUS_KM = 20_001.6  # half of Earth's circumference


def first_field_error(exc: ValidationError) -> FieldValidationError:
    """Reduce a pydantic ValidationError to its first failing field."""
    err = exc.errors()[0]
    loc = err.get("loc") or ("__root__",)
    field = ".".join(str(part) for part in loc)
    reason = err.get("msg", "invalid value")
    if reason.startswith("Value error, "):
        reason = reason[len("Value error, "):]
    return FieldValidationError(field, err.get("input"), reason)
