"""HURDAT2 text rendering for merged records.

This module writes merged records back in the fixed-width HURDAT2
layout. Absent numeric values are rendered as the ``-999`` sentinel.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from core.constants import MISSING_VALUE_SENTINEL
from core.errors import StormTrackExportError
from core.types import HeaderRecord, MergedRecord, TrackPoint, WindRadii


def format_header_line(header: HeaderRecord) -> str:
    """Render a header line, e.g. ``AL041851,            UNNAMED,     49,``."""
    return f"{header.storm_id},{header.name:>19},{header.declared_count:>7},"


def format_track_point_line(point: TrackPoint) -> str:
    """Render one track point as a 21-field data line.

    Args:
        point: Track point to render.

    Returns:
        HURDAT2 data line without trailing newline.
    """
    fields = [
        point.observed_at.strftime("%Y%m%d"),
        f" {point.observed_at.strftime('%H%M')}",
        f" {point.record_marker or ' '}",
        f" {point.status}",
        f"{point.latitude:>5.1f}{point.latitude_hemisphere}",
        f"{point.longitude:>6.1f}{point.longitude_hemisphere}",
        f"{_format_optional(point.max_wind):>4}",
        f"{_format_optional(point.min_pressure):>5}",
        *_format_radii(point.radii_34kt),
        *_format_radii(point.radii_50kt),
        *_format_radii(point.radii_64kt),
        f"{_format_optional(point.max_wind_radius):>5}",
    ]
    return ",".join(fields)


def render_records(records: Iterable[MergedRecord]) -> list[str]:
    """Render records as HURDAT2 lines in record order."""
    lines: list[str] = []
    for record in records:
        lines.append(format_header_line(record.header))
        lines.extend(format_track_point_line(point) for point in record.track_points)
    return lines


def write_hurdat2(output_path: Path, records: Iterable[MergedRecord]) -> int:
    """Write merged records to a HURDAT2 text file.

    Args:
        output_path: Destination file path.
        records: Records to render.

    Returns:
        Number of lines written.

    Raises:
        StormTrackExportError: If the file cannot be written.
    """
    lines = render_records(records)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    except OSError as error:
        raise StormTrackExportError(
            f"Failed to write HURDAT2 output to {output_path}: {error}. "
            "Choose a writable output path."
        ) from error
    return len(lines)


def _format_radii(radii: WindRadii) -> list[str]:
    return [
        f"{_format_optional(value):>5}"
        for value in (radii.northeast, radii.southeast, radii.southwest, radii.northwest)
    ]


def _format_optional(value: int | None) -> str:
    return str(MISSING_VALUE_SENTINEL if value is None else value)
