"""HURDAT2 line classification and parsing.

This module turns single header and data lines into typed records.
Parse failures are returned as values so callers can record them
per line without exceptions crossing the parsing boundary.
"""

from __future__ import annotations

from datetime import datetime
import re

from core.constants import (
    DATE_FORMAT,
    HEADER_ID_PATTERN,
    LATITUDE_PATTERN,
    LONGITUDE_PATTERN,
    MAX_HEADER_FIELD_COUNT,
    MIN_DATA_FIELD_COUNT,
    MISSING_VALUE_SENTINEL,
    STATUS_PATTERN,
)
from core.types import HeaderRecord, LineParseResult, TrackPoint, WindRadii

_HEADER_ID_RE = re.compile(HEADER_ID_PATTERN)
_STATUS_RE = re.compile(STATUS_PATTERN)
_LATITUDE_RE = re.compile(LATITUDE_PATTERN)
_LONGITUDE_RE = re.compile(LONGITUDE_PATTERN)


class _FieldError(ValueError):
    """Internal signal for one invalid field."""


def is_header_line(text: str) -> bool:
    """Return whether a line has the storm header shape.

    A header starts with a basin-prefixed identifier such as ``AL041851``
    and has at most a handful of comma-separated fields.

    Args:
        text: Raw line text.

    Returns:
        True for header-shaped lines.
    """
    fields = text.split(",")
    if len(fields) > MAX_HEADER_FIELD_COUNT:
        return False
    return _HEADER_ID_RE.match(fields[0].strip()) is not None


def parse_header_line(text: str) -> LineParseResult[HeaderRecord]:
    """Parse a header line such as ``AL041851,  UNNAMED,  49,``.

    Args:
        text: Raw header line.

    Returns:
        Parsed header or a failure reason.
    """
    fields = [field.strip() for field in text.split(",")]
    if len(fields) < 3:
        return LineParseResult(error=f"header has {len(fields)} fields, expected at least 3")
    id_match = _HEADER_ID_RE.match(fields[0])
    if id_match is None:
        return LineParseResult(
            error=f"invalid storm identifier '{fields[0]}', expected e.g. AL041851"
        )
    try:
        declared_count = _parse_int(fields[2], "entry count")
    except _FieldError as error:
        return LineParseResult(error=str(error))
    if declared_count < 0:
        return LineParseResult(error=f"entry count must be >= 0, got {declared_count}")
    header = HeaderRecord(
        basin=id_match.group(1),
        storm_number=int(id_match.group(2)),
        year=int(id_match.group(3)),
        name=fields[1],
        declared_count=declared_count,
    )
    return LineParseResult(value=header)


def parse_track_point_line(text: str) -> LineParseResult[TrackPoint]:
    """Parse one comma-separated track data line.

    Args:
        text: Raw data line with at least 20 fields.

    Returns:
        Parsed track point or a failure reason.
    """
    fields = [field.strip() for field in text.split(",")]
    if len(fields) < MIN_DATA_FIELD_COUNT:
        return LineParseResult(
            error=f"data line has {len(fields)} fields, expected at least {MIN_DATA_FIELD_COUNT}"
        )
    try:
        return LineParseResult(value=_build_track_point(fields))
    except _FieldError as error:
        return LineParseResult(error=str(error))


def _build_track_point(fields: list[str]) -> TrackPoint:
    """Build a track point from stripped fields.

    Raises:
        _FieldError: If any field is invalid.
    """
    latitude, latitude_hemisphere = _parse_coordinate(fields[4], _LATITUDE_RE, "latitude")
    longitude, longitude_hemisphere = _parse_coordinate(fields[5], _LONGITUDE_RE, "longitude")
    max_wind_radius = None
    if len(fields) > MIN_DATA_FIELD_COUNT and fields[MIN_DATA_FIELD_COUNT]:
        max_wind_radius = _parse_optional_int(fields[MIN_DATA_FIELD_COUNT], "max wind radius")
    return TrackPoint(
        observed_at=_parse_timestamp(fields[0], fields[1]),
        record_marker=_parse_marker(fields[2]),
        status=_parse_status(fields[3]),
        latitude=latitude,
        latitude_hemisphere=latitude_hemisphere,
        longitude=longitude,
        longitude_hemisphere=longitude_hemisphere,
        max_wind=_parse_optional_int(fields[6], "max wind"),
        min_pressure=_parse_optional_int(fields[7], "min pressure"),
        radii_34kt=_parse_radii(fields[8:12], "34kt"),
        radii_50kt=_parse_radii(fields[12:16], "50kt"),
        radii_64kt=_parse_radii(fields[16:20], "64kt"),
        max_wind_radius=max_wind_radius,
    )


def _parse_timestamp(date_text: str, time_text: str) -> datetime:
    if len(date_text) != 8 or len(time_text) != 4:
        raise _FieldError(f"invalid timestamp '{date_text} {time_text}', expected yyyymmdd hhmm")
    try:
        return datetime.strptime(date_text + time_text, DATE_FORMAT)
    except ValueError as error:
        raise _FieldError(f"invalid timestamp '{date_text} {time_text}': {error}") from error


def _parse_marker(marker_text: str) -> str | None:
    if not marker_text:
        return None
    if len(marker_text) != 1:
        raise _FieldError(f"invalid record marker '{marker_text}', expected one character")
    return marker_text


def _parse_status(status_text: str) -> str:
    if _STATUS_RE.match(status_text) is None:
        raise _FieldError(f"invalid status '{status_text}', expected two letters")
    return status_text


def _parse_coordinate(
    coordinate_text: str,
    pattern: re.Pattern[str],
    label: str,
) -> tuple[float, str]:
    coordinate_match = pattern.match(coordinate_text)
    if coordinate_match is None:
        raise _FieldError(f"invalid {label} '{coordinate_text}'")
    return float(coordinate_match.group(1)), coordinate_match.group(2)


def _parse_radii(values: list[str], threshold: str) -> WindRadii:
    northeast, southeast, southwest, northwest = (
        _parse_optional_int(value, f"{threshold} wind radius") for value in values
    )
    return WindRadii(
        northeast=northeast,
        southeast=southeast,
        southwest=southwest,
        northwest=northwest,
    )


def _parse_optional_int(value: str, label: str) -> int | None:
    """Parse an integer field where the -999 sentinel means absent."""
    parsed = _parse_int(value, label)
    return None if parsed == MISSING_VALUE_SENTINEL else parsed


def _parse_int(value: str, label: str) -> int:
    try:
        return int(value)
    except ValueError as error:
        raise _FieldError(f"invalid {label} '{value}', expected integer") from error
