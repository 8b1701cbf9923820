"""Controlled enumerations for the quake-stats domain.

Wire parameter names and shell commands are fixed vocabularies; free-form
strings are not used for either.
"""

from __future__ import annotations

from enum import Enum


class QueryParam(str, Enum):
    """FDSN event query parameters, in the order they are rendered."""

    LIMIT = "limit"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    RADIUS_KM = "maxradiuskm"
    START_TIME = "starttime"
    END_TIME = "endtime"
    MIN_MAGNITUDE = "minmagnitude"
    MAX_MAGNITUDE = "maxmagnitude"
    MIN_DEPTH = "mindepth"
    MAX_DEPTH = "maxdepth"


class Command(str, Enum):
    """Shell commands, keyed by the number the user types."""

    QUERY = "1"
    REPORT = "2"
    RAW_DATA = "3"
    EXPORT = "4"
    COMPARE = "5"
    EXIT = "6"
    MANUAL = "7"


class InputKind(str, Enum):
    """How a line of shell input must parse before it is accepted."""

    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    TIMESTAMP = "timestamp"
