"""Merge processed chunks into complete storm records.

This module walks processed chunks in ascending chunk id and stitches
their fragments into records keyed by storm id. A headerless fragment
only continues the record open at the end of the directly preceding
chunk; anything else is reported as unattached instead of guessed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from core.logging_config import get_logger
from core.types import (
    HeaderRecord,
    MergedRecord,
    MergeResult,
    PipelineWarning,
    ProcessedChunk,
    RecordFragment,
    TrackPoint,
)

_LOGGER = get_logger(__name__)


@dataclass
class _RecordAccumulator:
    """Mutable record under construction; confined to the merge thread."""

    header: HeaderRecord
    track_points: list[TrackPoint] = field(default_factory=list)

    def freeze(self) -> MergedRecord:
        return MergedRecord(
            header=self.header,
            track_points=tuple(self.track_points),
            is_complete=len(self.track_points) == self.header.declared_count,
        )


class ChunkMerger:
    """Single-threaded, order-dependent fragment merger."""

    def __init__(self) -> None:
        self._records: dict[str, _RecordAccumulator] = {}
        self._open_record: _RecordAccumulator | None = None
        self._previous_chunk_id: int | None = None
        self._unattached: list[RecordFragment] = []
        self._warnings: list[PipelineWarning] = []

    def merge(self, processed_chunks: Iterable[ProcessedChunk]) -> MergeResult:
        """Merge processed chunks in ascending chunk id order.

        Args:
            processed_chunks: Processed chunks; sorted by id before merging.

        Returns:
            Merged records in file order plus unattached fragments.
        """
        ordered_chunks = sorted(processed_chunks, key=lambda processed: processed.chunk_id)
        for processed in ordered_chunks:
            self._merge_chunk(processed)
        records = tuple(accumulator.freeze() for accumulator in self._records.values())
        _log_merge_completion(len(ordered_chunks), records, len(self._unattached))
        return MergeResult(
            records=records,
            unattached_fragments=tuple(self._unattached),
            warnings=tuple(self._warnings),
        )

    def _merge_chunk(self, processed: ProcessedChunk) -> None:
        follows_previous = (
            self._previous_chunk_id is not None
            and processed.chunk_id == self._previous_chunk_id + 1
        )
        if not follows_previous:
            self._open_record = None
        for fragment in processed.fragments:
            if fragment.header is not None:
                self._merge_header_fragment(fragment.header, fragment)
            else:
                self._merge_continuation(processed.chunk_id, fragment)
        if processed.ends_in_rejected_record:
            self._open_record = None
        self._previous_chunk_id = processed.chunk_id

    def _merge_header_fragment(self, header: HeaderRecord, fragment: RecordFragment) -> None:
        accumulator = self._records.get(header.storm_id)
        if accumulator is None:
            accumulator = _RecordAccumulator(header=header)
            self._records[header.storm_id] = accumulator
        accumulator.track_points.extend(fragment.track_points)
        self._open_record = accumulator

    def _merge_continuation(self, chunk_id: int, fragment: RecordFragment) -> None:
        if self._open_record is not None:
            self._open_record.track_points.extend(fragment.track_points)
            _LOGGER.debug(
                "continuation_attached",
                chunk_id=chunk_id,
                storm_id=self._open_record.header.storm_id,
                point_count=len(fragment.track_points),
            )
            return
        self._unattached.append(fragment)
        self._warnings.append(
            PipelineWarning(
                kind="orphan_fragment",
                message=(
                    f"{len(fragment.track_points)} track points starting at line "
                    f"{fragment.first_line_number} have no preceding storm header "
                    "and were left out."
                ),
                chunk_id=chunk_id,
                line_number=fragment.first_line_number,
            )
        )
        _LOGGER.warning(
            "orphan_fragment",
            chunk_id=chunk_id,
            line_number=fragment.first_line_number,
            point_count=len(fragment.track_points),
        )


def merge_chunks(processed_chunks: Iterable[ProcessedChunk]) -> MergeResult:
    """Merge processed chunks into complete records.

    Args:
        processed_chunks: Processed chunks, ideally ordered by chunk id.

    Returns:
        Merge result with records in file order.
    """
    return ChunkMerger().merge(processed_chunks)


def _log_merge_completion(
    chunk_count: int,
    records: tuple[MergedRecord, ...],
    unattached_count: int,
) -> None:
    """Log merge totals and every incomplete record."""
    incomplete_records = [record for record in records if not record.is_complete]
    for record in incomplete_records:
        _LOGGER.debug(
            "record_incomplete",
            storm_id=record.storm_id,
            declared_count=record.header.declared_count,
            actual_count=len(record.track_points),
        )
    _LOGGER.info(
        "merge_completed",
        chunk_count=chunk_count,
        record_count=len(records),
        complete_count=len(records) - len(incomplete_records),
        incomplete_count=len(incomplete_records),
        unattached_count=unattached_count,
    )
