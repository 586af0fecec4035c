"""Unit tests for the public SDK module."""

from __future__ import annotations

import stormtrack
from tests.fixture_paths import fixture_path


def test_sdk_runs_pipeline_and_filter(pipeline_config) -> None:
    """The re-exported operations compose without internal imports."""
    boundary = stormtrack.GeoBoundary(
        name="Texas",
        min_latitude=25.8,
        max_latitude=36.5,
        min_longitude=-106.6,
        max_longitude=-93.5,
    )

    result = stormtrack.run_pipeline(fixture_path("hurdat2_sample.txt"), config=pipeline_config)
    matching = stormtrack.filter_by_boundary(result.records, boundary)

    assert [record.storm_id for record in matching] == ["AL011851"]


def test_sdk_chunk_operations_match_pipeline(pipeline_config) -> None:
    """Loading, parsing, and merging by hand gives the pipeline records."""
    source_path = fixture_path("hurdat2_sample.txt")

    chunks = stormtrack.load_chunks(source_path, chunk_size=3, config=pipeline_config)
    merged = stormtrack.merge_chunks(stormtrack.parse_chunk(chunk) for chunk in chunks)

    assert merged.records == stormtrack.run_pipeline(source_path, config=pipeline_config).records
