"""Unit tests for landfall boundary filtering."""

from __future__ import annotations

from datetime import datetime

import pytest

from core.errors import StormTrackConfigError
from core.types import HeaderRecord, MergedRecord, TrackPoint
from transforms.landfall_filter import GeoBoundary, filter_by_boundary, landfall_points

_FLORIDA = GeoBoundary(
    name="Florida",
    min_latitude=24.5,
    max_latitude=31.0,
    min_longitude=-87.6,
    max_longitude=-80.0,
)


def _point(year: int, latitude: float, longitude: float, marker: str | None) -> TrackPoint:
    return TrackPoint(
        observed_at=datetime(year, 9, 5, 4, 30),
        record_marker=marker,
        status="HU",
        latitude=latitude,
        latitude_hemisphere="N",
        longitude=longitude,
        longitude_hemisphere="W",
        max_wind=90,
    )


def _record(storm_id: str, *points: TrackPoint) -> MergedRecord:
    header = HeaderRecord(
        basin=storm_id[:2],
        storm_number=int(storm_id[2:4]),
        year=int(storm_id[4:]),
        name="FRANCES",
        declared_count=len(points),
    )
    return MergedRecord(header=header, track_points=points, is_complete=True)


def test_filter_by_boundary_matches_landfall_inside_area() -> None:
    """A landfall point inside the box selects the storm."""
    records = [
        _record("AL062004", _point(2004, 27.2, 80.2, "L")),
        _record("AL011851", _point(1851, 28.2, 96.0, "L")),
    ]

    matching = filter_by_boundary(records, _FLORIDA)

    assert [record.storm_id for record in matching] == ["AL062004"]


def test_filter_by_boundary_ignores_unmarked_points_by_default() -> None:
    """Passing through the box without landfall does not match."""
    records = [_record("AL062004", _point(2004, 27.2, 80.2, None))]

    matching = filter_by_boundary(records, _FLORIDA)

    assert matching == []


def test_filter_by_boundary_can_match_any_point() -> None:
    """With landfall_only disabled, any point in the box matches."""
    records = [_record("AL062004", _point(2004, 27.2, 80.2, None))]

    matching = filter_by_boundary(records, _FLORIDA, landfall_only=False)

    assert len(matching) == 1


def test_filter_by_boundary_applies_since_year() -> None:
    """Points observed before the cutoff year are ignored."""
    records = [_record("AL062004", _point(2004, 27.2, 80.2, "L"))]

    matching = filter_by_boundary(records, _FLORIDA, since_year=2005)

    assert matching == []


def test_boundary_contains_edges() -> None:
    """Points exactly on an edge are inside."""
    point = _point(2004, 24.5, 80.0, "L")

    assert _FLORIDA.contains(point)


def test_boundary_rejects_inverted_edges() -> None:
    """A minimum edge above its maximum is a configuration error."""
    with pytest.raises(StormTrackConfigError):
        GeoBoundary(
            name="Inverted",
            min_latitude=31.0,
            max_latitude=24.5,
            min_longitude=-87.6,
            max_longitude=-80.0,
        )


def test_landfall_points_keeps_track_order() -> None:
    """Only landfall-marked points are returned, in order."""
    first = _point(2004, 27.2, 80.2, "L")
    second = _point(2004, 29.9, 84.1, "L")
    record = _record("AL062004", first, _point(2004, 27.6, 81.1, None), second)

    assert landfall_points(record) == [first, second]
