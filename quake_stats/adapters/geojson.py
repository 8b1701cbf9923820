"""GeoJsonV1Adapter — converts USGS FDSN GeoJSON envelopes (api 1.x).

Expected envelope format (abridged):
{
    "type": "FeatureCollection",
    "metadata": {"api": "1.14.1", "count": 2, ...},
    "features": [
        {
            "properties": {
                "mag": 5.1,
                "place": "45 km SSW of Sand Point, Alaska",
                "time": 1722345600000,          # ms since the Unix epoch
                "magType": "mww",
                ...
            },
            "geometry": {"type": "Point", "coordinates": [-160.7, 54.9, 35.0]}
        },
        ...
    ]
}

The service can only filter by one exact magnitude type per request, so
the moment-magnitude family (mw, mwc, mwb, mwr, mww, ...) is consolidated
here on the client side.
"""

from __future__ import annotations

import logging
from typing import Any

from quake_stats.adapters.base import EnvelopeAdapter, api_version
from quake_stats.domain.entry import SeismicEntry
from quake_stats.domain.errors import (
    EmptyFeaturesError,
    MalformedFeatureError,
    MissingFeaturesError,
)

logger = logging.getLogger(__name__)

_REQUIRED_PROPERTIES = ("mag", "place", "time", "magType")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class GeoJsonV1Adapter(EnvelopeAdapter):
    """Maps USGS GeoJSON features to SeismicEntries."""

    def __init__(self, api_prefix: str = "1.", magnitude_type_prefix: str = "mw") -> None:
        self._api_prefix = api_prefix
        self._magnitude_type_prefix = magnitude_type_prefix.lower()

    @property
    def api_family(self) -> str:
        return f"usgs_geojson_{self._api_prefix}x"

    def can_handle(self, envelope: dict[str, Any]) -> bool:
        version = api_version(envelope)
        return isinstance(version, str) and version.startswith(self._api_prefix)

    def convert(self, envelope: dict[str, Any]) -> list[SeismicEntry]:
        features = envelope.get("features")
        if not isinstance(features, list):
            raise MissingFeaturesError(
                "Server response has invalid structure - 'features' is missing or not an array"
            )
        if not features:
            raise EmptyFeaturesError("Server response 'features' array is empty")

        # ── Structure first: one malformed feature fails everything ─────
        for index, feature in enumerate(features):
            self._check_structure(index, feature)

        # ── Magnitude-type filter ────────────────────────────────────────
        kept = [f for f in features if self.is_moment_magnitude(f)]
        logger.debug(
            "Kept %d of %d feature(s) with magType prefix '%s'",
            len(kept),
            len(features),
            self._magnitude_type_prefix,
        )

        # ── Mapping (validates every value) ──────────────────────────────
        return [self._to_entry(feature) for feature in kept]

    def is_moment_magnitude(self, feature: dict[str, Any]) -> bool:
        mag_type = feature["properties"]["magType"]
        # Some catalog entries carry a null magType; they are not Mw.
        if not isinstance(mag_type, str):
            return False
        return mag_type.lower().startswith(self._magnitude_type_prefix)

    # ── Internals ────────────────────────────────────────────────────────

    @staticmethod
    def _check_structure(index: int, feature: Any) -> None:
        if not isinstance(feature, dict):
            raise MalformedFeatureError(index, "feature is not an object")

        properties = feature.get("properties")
        if not isinstance(properties, dict):
            raise MalformedFeatureError(index, "missing 'properties' object")
        missing = [key for key in _REQUIRED_PROPERTIES if key not in properties]
        if missing:
            raise MalformedFeatureError(
                index, f"missing {', '.join(repr(k) for k in missing)} in 'properties'"
            )
        time_value = properties["time"]
        if not isinstance(time_value, int) or isinstance(time_value, bool):
            raise MalformedFeatureError(
                index, "'time' in 'properties' is not an integer epoch timestamp"
            )

        geometry = feature.get("geometry")
        if not isinstance(geometry, dict):
            raise MalformedFeatureError(index, "missing 'geometry' object")
        if "coordinates" not in geometry:
            raise MalformedFeatureError(index, "missing 'coordinates' in 'geometry'")
        coordinates = geometry["coordinates"]
        if not isinstance(coordinates, list) or len(coordinates) != 3:
            raise MalformedFeatureError(
                index,
                "'coordinates' in 'geometry' is not an array of 3 elements "
                "(longitude, latitude, depth)",
            )
        if not all(_is_number(c) for c in coordinates):
            raise MalformedFeatureError(index, "'coordinates' in 'geometry' must be numeric")

    @staticmethod
    def _to_entry(feature: dict[str, Any]) -> SeismicEntry:
        properties = feature["properties"]
        longitude, latitude, depth = feature["geometry"]["coordinates"]
        return SeismicEntry.from_epoch_millis(
            magnitude=properties["mag"],
            place=properties["place"],
            time_ms=properties["time"],
            longitude=longitude,
            latitude=latitude,
            depth=depth,
        )
