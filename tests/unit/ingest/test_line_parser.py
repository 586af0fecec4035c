"""Unit tests for HURDAT2 line parsing."""

from __future__ import annotations

from datetime import datetime

from ingest.line_parser import is_header_line, parse_header_line, parse_track_point_line
from tests.track_lines import data_line, header_line


def test_is_header_line_accepts_basin_prefixed_identifier() -> None:
    """Header classifier should accept the canonical header layout."""
    assert is_header_line("AL041851,            UNNAMED,     49,")


def test_is_header_line_rejects_data_lines() -> None:
    """Header classifier should reject data lines."""
    assert not is_header_line(data_line())


def test_is_header_line_rejects_identifier_with_many_fields() -> None:
    """A basin-shaped first field with many fields is not a header."""
    line = "AL041851, " + ", ".join(["1"] * 10)

    assert not is_header_line(line)


def test_parse_header_line_reads_identity_fields() -> None:
    """Header parser should split the identifier and entry count."""
    result = parse_header_line("AL041851,            UNNAMED,     49,")

    assert result.value is not None and (
        result.value.storm_id,
        result.value.name,
        result.value.declared_count,
    ) == ("AL041851", "UNNAMED", 49)


def test_parse_header_line_reports_invalid_count() -> None:
    """Header parser should return an error for a non-numeric count."""
    result = parse_header_line("AL041851,            UNNAMED,     xx,")

    assert result.value is None and "entry count" in (result.error or "")


def test_parse_track_point_line_reads_timestamp_and_marker() -> None:
    """Data parser should build the timestamp and landfall marker."""
    result = parse_track_point_line(data_line(date="19510816", time="1200", marker="L"))

    assert result.value is not None and (
        result.value.observed_at,
        result.value.is_landfall,
    ) == (datetime(1951, 8, 16, 12, 0), True)


def test_parse_track_point_line_maps_sentinel_to_absent() -> None:
    """Every -999 field should parse to None, never to -999."""
    result = parse_track_point_line(data_line(max_wind_radius="-999"))

    point = result.value
    assert point is not None and all(
        value is None
        for value in (
            point.min_pressure,
            point.radii_34kt.northeast,
            point.radii_50kt.southwest,
            point.radii_64kt.northwest,
            point.max_wind_radius,
        )
    )


def test_parse_track_point_line_reads_radii_in_quadrant_order() -> None:
    """Wind radii should map NE, SE, SW, NW for each threshold."""
    radii = tuple(str(value) for value in range(10, 130, 10))

    result = parse_track_point_line(data_line(pressure="960", radii=radii, max_wind_radius="20"))

    point = result.value
    assert point is not None and (
        point.min_pressure,
        point.radii_34kt.northeast,
        point.radii_50kt.southeast,
        point.radii_64kt.northwest,
        point.max_wind_radius,
    ) == (960, 10, 60, 120, 20)


def test_parse_track_point_line_treats_blank_max_wind_radius_as_absent() -> None:
    """A trailing comma should not produce a max wind radius."""
    result = parse_track_point_line(data_line() + ",")

    assert result.value is not None and result.value.max_wind_radius is None


def test_parse_track_point_line_rejects_short_lines() -> None:
    """Lines with fewer than 20 fields should fail."""
    result = parse_track_point_line("18510625, 0000,  , HU, 28.0N,  94.8W,  80")

    assert result.value is None and "fields" in (result.error or "")


def test_parse_track_point_line_rejects_wrong_hemisphere_letter() -> None:
    """Latitude must end in N or S."""
    result = parse_track_point_line(data_line(latitude="28.0W"))

    assert result.error == "invalid latitude '28.0W'"


def test_parse_track_point_line_rejects_impossible_date() -> None:
    """Invalid calendar dates should be reported, not raised."""
    result = parse_track_point_line(data_line(date="18511332"))

    assert result.value is None and "timestamp" in (result.error or "")
