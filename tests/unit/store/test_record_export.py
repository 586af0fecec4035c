"""Unit tests for JSONL record export."""

from __future__ import annotations

from datetime import datetime
import json

from core.types import HeaderRecord, MergedRecord, TrackPoint
from store.record_export import merged_record_to_payload, write_records_jsonl


def _record() -> MergedRecord:
    header = HeaderRecord(
        basin="AL",
        storm_number=1,
        year=1851,
        name="UNNAMED",
        declared_count=2,
    )
    point = TrackPoint(
        observed_at=datetime(1851, 6, 25, 12, 0),
        record_marker="L",
        status="HU",
        latitude=28.2,
        latitude_hemisphere="N",
        longitude=96.0,
        longitude_hemisphere="W",
        max_wind=80,
    )
    return MergedRecord(header=header, track_points=(point,), is_complete=False)


def test_merged_record_to_payload_uses_signed_coordinates() -> None:
    """Western longitudes are exported as negative degrees."""
    payload = merged_record_to_payload(_record())

    assert (payload["track_points"][0]["latitude"], payload["track_points"][0]["longitude"]) == (
        28.2,
        -96.0,
    )


def test_merged_record_to_payload_exports_absent_values_as_null() -> None:
    """Missing pressure and radii become None in the payload."""
    point_payload = merged_record_to_payload(_record())["track_points"][0]

    assert (point_payload["min_pressure"], point_payload["radii_34kt"]["ne"]) == (None, None)


def test_write_records_jsonl_writes_one_line_per_record(tmp_path) -> None:
    """Each record becomes one JSON line."""
    output_path = tmp_path / "records.jsonl"

    write_records_jsonl(output_path, [_record(), _record()])
    rows = [json.loads(line) for line in output_path.read_text(encoding="utf-8").splitlines()]

    assert [(row["storm_id"], row["is_complete"]) for row in rows] == [
        ("AL011851", False),
        ("AL011851", False),
    ]
