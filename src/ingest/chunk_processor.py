"""Isolated chunk parsing.

This module parses one chunk into ordered record fragments. It has
no shared state, so chunks can be parsed concurrently. Malformed
lines are recorded on the result and never abort the chunk.
"""

from __future__ import annotations

import time

from core.logging_config import get_logger
from core.types import (
    Chunk,
    HeaderRecord,
    LineError,
    ProcessedChunk,
    RecordFragment,
    SourceLine,
    TrackPoint,
)
from ingest.line_parser import is_header_line, parse_header_line, parse_track_point_line

_LOGGER = get_logger(__name__)


class _FragmentBuilder:
    """Open fragment accumulated while walking a chunk."""

    def __init__(self, header: HeaderRecord | None, first_line_number: int) -> None:
        self.header = header
        self.first_line_number = first_line_number
        self.track_points: list[TrackPoint] = []

    def build(self) -> RecordFragment:
        return RecordFragment(
            header=self.header,
            track_points=tuple(self.track_points),
            header_present=self.header is not None,
            first_line_number=self.first_line_number,
        )


class _ChunkParseState:
    """Mutable per-call parse state; never shared between chunks."""

    def __init__(self) -> None:
        self.fragments: list[RecordFragment] = []
        self.errors: list[LineError] = []
        self.open_fragment: _FragmentBuilder | None = None
        self.rejected_header_line: int | None = None

    def close_fragment(self) -> None:
        if self.open_fragment is not None:
            self.fragments.append(self.open_fragment.build())
            self.open_fragment = None


def parse_chunk(chunk: Chunk) -> ProcessedChunk:
    """Parse one chunk into record fragments.

    Args:
        chunk: Loader chunk to parse.

    Returns:
        Processed chunk with fragments and per-line errors.
    """
    started_at = time.perf_counter()
    state = _ChunkParseState()
    for line in chunk.lines:
        if is_header_line(line.text):
            _handle_header_line(state, line)
        else:
            _handle_data_line(state, line)
    state.close_fragment()
    elapsed_seconds = time.perf_counter() - started_at
    _LOGGER.debug(
        "chunk_processed",
        chunk_id=chunk.chunk_id,
        start_line=chunk.start_line,
        end_line=chunk.end_line,
        fragment_count=len(state.fragments),
        error_count=len(state.errors),
        elapsed_seconds=round(elapsed_seconds, 6),
    )
    return ProcessedChunk(
        chunk_id=chunk.chunk_id,
        fragments=tuple(state.fragments),
        errors=tuple(state.errors),
        ends_in_rejected_record=state.rejected_header_line is not None,
        elapsed_seconds=elapsed_seconds,
    )


def check_processed_chunk(processed: ProcessedChunk) -> bool:
    """Log diagnostics for a processed chunk.

    This check never blocks the merge; the caller only counts results.

    Args:
        processed: Processed chunk to inspect.

    Returns:
        False when the chunk recorded line errors.
    """
    for fragment in processed.fragments:
        if fragment.header is not None and not fragment.track_points:
            _LOGGER.warning(
                "fragment_without_track_points",
                chunk_id=processed.chunk_id,
                storm_id=fragment.header.storm_id,
                line_number=fragment.first_line_number,
            )
    if processed.is_valid:
        return True
    _LOGGER.warning(
        "chunk_has_line_errors",
        chunk_id=processed.chunk_id,
        error_count=len(processed.errors),
        first_error_line=processed.errors[0].line_number,
        first_error=processed.errors[0].message,
    )
    return False


def _handle_header_line(state: _ChunkParseState, line: SourceLine) -> None:
    state.close_fragment()
    result = parse_header_line(line.text)
    if result.value is None:
        state.rejected_header_line = line.line_number
        _record_error(state, line, f"invalid header: {result.error}")
        return
    state.rejected_header_line = None
    state.open_fragment = _FragmentBuilder(result.value, line.line_number)


def _handle_data_line(state: _ChunkParseState, line: SourceLine) -> None:
    if state.rejected_header_line is not None:
        _record_error(
            state,
            line,
            f"skipped: belongs to invalid header at line {state.rejected_header_line}",
        )
        return
    if state.open_fragment is None:
        state.open_fragment = _FragmentBuilder(None, line.line_number)
    result = parse_track_point_line(line.text)
    if result.value is None:
        _record_error(state, line, f"invalid data line: {result.error}")
        return
    state.open_fragment.track_points.append(result.value)


def _record_error(state: _ChunkParseState, line: SourceLine, message: str) -> None:
    state.errors.append(LineError(line_number=line.line_number, message=message))
    _LOGGER.debug("line_rejected", line_number=line.line_number, reason=message)
