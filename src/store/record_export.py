"""JSONL serialization for merged storm records.

This module converts merged records into JSON-safe payloads and
writes one record per line for downstream tools.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from core.errors import StormTrackExportError
from core.types import MergedRecord, TrackPoint, WindRadii


def merged_record_to_payload(record: MergedRecord) -> dict[str, object]:
    """Serialize a merged record into a JSON-safe payload.

    Absent numeric values become ``null``.

    Args:
        record: Merged record instance.

    Returns:
        Dictionary payload for JSON encoding.
    """
    header = record.header
    return {
        "storm_id": record.storm_id,
        "basin": header.basin,
        "storm_number": header.storm_number,
        "year": header.year,
        "name": header.name,
        "declared_count": header.declared_count,
        "is_complete": record.is_complete,
        "track_points": [_track_point_to_payload(point) for point in record.track_points],
    }


def write_records_jsonl(output_path: Path, records: Iterable[MergedRecord]) -> int:
    """Write merged records to a JSONL file.

    Args:
        output_path: Output JSONL file path.
        records: Records to serialize.

    Returns:
        Number of records written.

    Raises:
        StormTrackExportError: If the file cannot be written.
    """
    lines = [json.dumps(merged_record_to_payload(record), sort_keys=True) for record in records]
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    except OSError as error:
        raise StormTrackExportError(
            f"Failed to write JSONL output to {output_path}: {error}. "
            "Choose a writable output path."
        ) from error
    return len(lines)


def _track_point_to_payload(point: TrackPoint) -> dict[str, object]:
    return {
        "observed_at": point.observed_at.isoformat(),
        "record_marker": point.record_marker,
        "status": point.status,
        "latitude": point.signed_latitude,
        "longitude": point.signed_longitude,
        "max_wind": point.max_wind,
        "min_pressure": point.min_pressure,
        "radii_34kt": _radii_to_payload(point.radii_34kt),
        "radii_50kt": _radii_to_payload(point.radii_50kt),
        "radii_64kt": _radii_to_payload(point.radii_64kt),
        "max_wind_radius": point.max_wind_radius,
    }


def _radii_to_payload(radii: WindRadii) -> dict[str, int | None]:
    return {
        "ne": radii.northeast,
        "se": radii.southeast,
        "sw": radii.southwest,
        "nw": radii.northwest,
    }
