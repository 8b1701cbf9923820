"""Timezone-aware clock utilities.

All timestamps in quake-stats are UTC-aware.  This module is the single
source of "now" so tests can monkey-patch it trivially, and the single
place where provider epoch timestamps become datetimes.

The USGS GeoJSON feed reports ``properties.time`` in **milliseconds**
since the Unix epoch; that is the only unit accepted here.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

EARLIEST_RECORD_TIME = datetime(1900, 1, 1, tzinfo=timezone.utc)
UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def from_epoch_millis(millis: int) -> datetime:
    """Convert a provider timestamp (ms since epoch) to an aware datetime."""
    return UNIX_EPOCH + timedelta(milliseconds=millis)


def human_readable(value: datetime) -> str:
    """Render as e.g. ``Tuesday, July 30, 2024 13:05 UTC``."""
    t = ensure_utc(value)
    return f"{t:%A}, {t:%B} {t.day}, {t.year} {t:%H:%M} UTC"
