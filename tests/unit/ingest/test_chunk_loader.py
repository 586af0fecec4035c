"""Unit tests for the record-preserving chunk loader."""

from __future__ import annotations

import io

import pytest

from core.config import StormTrackConfig
from core.errors import StormTrackConfigError, StormTrackIOError
from core.types import SourceLine
from ingest.chunk_loader import ChunkLoader, load_chunks
from ingest.line_parser import is_header_line
from tests.fixture_paths import fixture_path
from tests.track_lines import data_line, header_line


def _numbered(lines: list[str]) -> list[SourceLine]:
    return [SourceLine(line_number=index, text=text) for index, text in enumerate(lines, 1)]


def _storm_lines(storm_id: str, point_count: int) -> list[str]:
    return [header_line(storm_id, count=point_count)] + [data_line()] * point_count


def test_split_never_starts_chunk_inside_record() -> None:
    """Every chunk should begin with a header line."""
    lines = _storm_lines("AL011851", 3) + _storm_lines("AL021851", 1) + _storm_lines("AL031851", 4)

    chunks = ChunkLoader(2).split(_numbered(lines))

    assert all(is_header_line(chunk.lines[0].text) for chunk in chunks)


def test_split_lets_chunk_exceed_target_by_one_record() -> None:
    """A record that started accumulating is kept whole."""
    lines = _storm_lines("AL011851", 5) + _storm_lines("AL021851", 1)

    chunks = ChunkLoader(2).split(_numbered(lines))

    assert [len(chunk.lines) for chunk in chunks] == [6, 2]


def test_split_packs_small_records_until_target_reached() -> None:
    """Records are added to a chunk until it reaches the target size."""
    lines = _storm_lines("AL011851", 1) + _storm_lines("AL021851", 1) + _storm_lines("AL031851", 1)

    chunks = ChunkLoader(4).split(_numbered(lines))

    assert [len(chunk.lines) for chunk in chunks] == [4, 2]


def test_split_assigns_monotonic_chunk_ids() -> None:
    """Chunk ids should count up from zero in file order."""
    lines = _storm_lines("AL011851", 1) + _storm_lines("AL021851", 1) + _storm_lines("AL031851", 1)

    chunks = ChunkLoader(1).split(_numbered(lines))

    assert [chunk.chunk_id for chunk in chunks] == [0, 1, 2]


def test_split_keeps_orphan_lines_and_warns() -> None:
    """Data lines before the first header stay in the first chunk with a warning."""
    loader = ChunkLoader(1)
    lines = [data_line()] + _storm_lines("AL011851", 1)

    chunks = loader.split(_numbered(lines))

    assert (
        [line.line_number for line in chunks[0].lines],
        [warning.kind for warning in loader.warnings],
    ) == ([1], ["orphan_line"])


def test_split_records_original_line_span() -> None:
    """Chunks should expose the physical line span they cover."""
    source_lines = [
        SourceLine(line_number=3, text=header_line(count=1)),
        SourceLine(line_number=7, text=data_line()),
    ]

    chunks = ChunkLoader(10).split(source_lines)

    assert (chunks[0].start_line, chunks[0].end_line) == (3, 7)


def test_split_returns_no_chunks_for_empty_input() -> None:
    """An empty source produces no chunks."""
    assert ChunkLoader(5).split([]) == []


def test_chunk_loader_rejects_non_positive_target() -> None:
    """Target chunk size must be at least one."""
    with pytest.raises(StormTrackConfigError):
        ChunkLoader(0)


def test_load_chunks_skips_blank_lines_in_size(pipeline_config: StormTrackConfig) -> None:
    """Blank lines should not count toward chunk size."""
    chunks = load_chunks(fixture_path("hurdat2_sample.txt"), 100, pipeline_config)

    assert len(chunks) == 1 and len(chunks[0].lines) == 10


def test_load_chunks_reads_streams(pipeline_config: StormTrackConfig) -> None:
    """Streams should be chunked the same way as files."""
    stream = io.StringIO("\n".join(_storm_lines("AL011851", 2) + _storm_lines("AL021851", 2)))

    chunks = load_chunks(stream, 1, pipeline_config)

    assert len(chunks) == 2


def test_load_chunks_raises_for_unreadable_source(
    tmp_path, pipeline_config: StormTrackConfig
) -> None:
    """A missing source is fatal."""
    with pytest.raises(StormTrackIOError):
        load_chunks(tmp_path / "missing.txt", 10, pipeline_config)
