"""Landfall and boundary filtering for merged records.

This module selects storms whose track crosses a rectangular area.
It runs after the merge phase and never mutates the records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from core.errors import StormTrackConfigError
from core.logging_config import get_logger
from core.types import MergedRecord, TrackPoint

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class GeoBoundary:
    """Rectangular area in signed degrees.

    Attributes:
        name: Display name of the area.
        min_latitude: Southern edge, negative south of the equator.
        max_latitude: Northern edge.
        min_longitude: Western edge, negative west of Greenwich.
        max_longitude: Eastern edge.
    """

    name: str
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    def __post_init__(self) -> None:
        if self.min_latitude > self.max_latitude or self.min_longitude > self.max_longitude:
            raise StormTrackConfigError(
                f"Invalid boundary '{self.name}': minimum edges must not exceed maximum "
                "edges. Swap the min and max values."
            )

    def contains(self, point: TrackPoint) -> bool:
        """Return whether a track point lies inside the boundary (edges inclusive)."""
        return (
            self.min_latitude <= point.signed_latitude <= self.max_latitude
            and self.min_longitude <= point.signed_longitude <= self.max_longitude
        )


def landfall_points(record: MergedRecord) -> list[TrackPoint]:
    """Return the landfall-marked points of a record in track order."""
    return [point for point in record.track_points if point.is_landfall]


def filter_by_boundary(
    records: Iterable[MergedRecord],
    boundary: GeoBoundary,
    landfall_only: bool = True,
    since_year: int | None = None,
) -> list[MergedRecord]:
    """Keep records with at least one qualifying point inside a boundary.

    Args:
        records: Merged records in file order.
        boundary: Area to test against.
        landfall_only: Only consider landfall-marked points.
        since_year: Only consider points observed in or after this year.

    Returns:
        Matching records, order preserved.
    """
    matching = [
        record
        for record in records
        if any(
            boundary.contains(point)
            for point in _candidate_points(record, landfall_only, since_year)
        )
    ]
    _LOGGER.info(
        "boundary_filter_applied",
        boundary=boundary.name,
        landfall_only=landfall_only,
        since_year=since_year,
        match_count=len(matching),
    )
    return matching


def _candidate_points(
    record: MergedRecord,
    landfall_only: bool,
    since_year: int | None,
) -> list[TrackPoint]:
    points = landfall_points(record) if landfall_only else list(record.track_points)
    if since_year is None:
        return points
    return [point for point in points if point.observed_at.year >= since_year]
