"""Track ingest orchestration.

This module drives the three pipeline phases: load the source into
record-preserving chunks, parse every chunk on a bounded thread pool
behind a deadline barrier, then merge the results in chunk order.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
import time
from typing import Callable

from core.config import StormTrackConfig
from core.constants import WORKER_THREAD_PREFIX
from core.logging_config import get_logger
from core.types import (
    Chunk,
    LineError,
    MergeResult,
    PipelineResult,
    PipelineWarning,
    ProcessedChunk,
)
from ingest.chunk_loader import split_source
from ingest.chunk_merger import merge_chunks
from ingest.chunk_processor import check_processed_chunk, parse_chunk
from ingest.input_reader import TrackSource, describe_source

_LOGGER = get_logger(__name__)

ChunkParser = Callable[[Chunk], ProcessedChunk]


@dataclass
class _ProcessingOutcome:
    """Results and losses of the parallel processing phase."""

    processed_chunks: list[ProcessedChunk] = field(default_factory=list)
    dropped_chunk_ids: list[int] = field(default_factory=list)
    warnings: list[PipelineWarning] = field(default_factory=list)


class TrackPipelineRunner:
    """Runner for one load, process, and merge pass over a source."""

    def __init__(
        self,
        config: StormTrackConfig,
        chunk_parser: ChunkParser = parse_chunk,
    ) -> None:
        self._config = config
        self._chunk_parser = chunk_parser

    def run(self, source: TrackSource, chunk_size: int | None = None) -> PipelineResult:
        """Execute the pipeline and return merged records with diagnostics.

        Args:
            source: Local path, ``s3://`` URI, or iterable of text lines.
            chunk_size: Advisory lines per chunk; defaults to config.

        Returns:
            Pipeline result with records in file order.

        Raises:
            StormTrackIOError: If the source cannot be read.
            StormTrackConfigError: If chunk size is invalid.
        """
        pipeline_start = time.perf_counter()
        chunks, loader_warnings = split_source(source, chunk_size, self._config)
        load_seconds = time.perf_counter() - pipeline_start

        process_start = time.perf_counter()
        outcome = self._process_chunks(chunks)
        processed_chunks = sorted(outcome.processed_chunks, key=lambda item: item.chunk_id)
        validity_warnings = _check_processed_chunks(processed_chunks)
        process_seconds = time.perf_counter() - process_start

        merge_start = time.perf_counter()
        merge_result = merge_chunks(processed_chunks)
        merge_seconds = time.perf_counter() - merge_start

        result = _build_pipeline_result(
            chunks,
            processed_chunks,
            outcome,
            merge_result,
            loader_warnings + validity_warnings,
        )
        _LOGGER.info(
            "pipeline_completed",
            source=describe_source(source),
            chunk_count=len(chunks),
            dropped_chunk_count=len(outcome.dropped_chunk_ids),
            record_count=len(result.records),
            incomplete_count=result.incomplete_count,
            warning_count=len(result.warnings),
            load_seconds=round(load_seconds, 6),
            process_seconds=round(process_seconds, 6),
            merge_seconds=round(merge_seconds, 6),
            total_seconds=round(time.perf_counter() - pipeline_start, 6),
        )
        return result

    def _process_chunks(self, chunks: list[Chunk]) -> _ProcessingOutcome:
        """Parse chunks concurrently and wait for all of them.

        Tasks still running at the deadline are abandoned and their
        chunks dropped; the pool is then shut down without waiting.
        """
        outcome = _ProcessingOutcome()
        if not chunks:
            return outcome
        executor = ThreadPoolExecutor(
            max_workers=self._config.max_workers,
            thread_name_prefix=WORKER_THREAD_PREFIX,
        )
        timed_out = False
        try:
            futures = {executor.submit(self._chunk_parser, chunk): chunk for chunk in chunks}
            done, not_done = wait(futures, timeout=self._config.process_timeout_seconds)
            for future in done:
                _collect_future(future, futures[future], outcome)
            for future in not_done:
                timed_out = True
                future.cancel()
                _record_timeout(futures[future], self._config.process_timeout_seconds, outcome)
        finally:
            executor.shutdown(wait=not timed_out, cancel_futures=True)
        return outcome


def run_pipeline(
    source: TrackSource,
    chunk_size: int | None = None,
    config: StormTrackConfig | None = None,
) -> PipelineResult:
    """Load, parse, and merge a HURDAT2 track source.

    Args:
        source: Local path, ``s3://`` URI, or iterable of text lines.
        chunk_size: Advisory lines per chunk; defaults to config.
        config: Runtime configuration.

    Returns:
        Merged records plus warnings, line errors, and dropped chunks.

    Raises:
        StormTrackIOError: If the source cannot be read.
    """
    runner = TrackPipelineRunner(config or StormTrackConfig.from_env())
    return runner.run(source, chunk_size)


def _collect_future(
    future: Future[ProcessedChunk],
    chunk: Chunk,
    outcome: _ProcessingOutcome,
) -> None:
    """Store a finished task result or drop its chunk on failure."""
    try:
        outcome.processed_chunks.append(future.result())
    except Exception as error:
        _LOGGER.error(
            "chunk_task_failed",
            chunk_id=chunk.chunk_id,
            start_line=chunk.start_line,
            end_line=chunk.end_line,
            error=repr(error),
        )
        outcome.dropped_chunk_ids.append(chunk.chunk_id)
        outcome.warnings.append(
            PipelineWarning(
                kind="chunk_task_failure",
                message=(
                    f"Chunk {chunk.chunk_id} (lines {chunk.start_line}-{chunk.end_line}) "
                    f"failed and was dropped: {error!r}"
                ),
                chunk_id=chunk.chunk_id,
                line_number=chunk.start_line,
            )
        )


def _record_timeout(chunk: Chunk, timeout_seconds: float, outcome: _ProcessingOutcome) -> None:
    _LOGGER.error(
        "chunk_timeout",
        chunk_id=chunk.chunk_id,
        start_line=chunk.start_line,
        end_line=chunk.end_line,
        timeout_seconds=timeout_seconds,
    )
    outcome.dropped_chunk_ids.append(chunk.chunk_id)
    outcome.warnings.append(
        PipelineWarning(
            kind="chunk_timeout",
            message=(
                f"Chunk {chunk.chunk_id} (lines {chunk.start_line}-{chunk.end_line}) "
                f"did not finish within {timeout_seconds}s and was dropped."
            ),
            chunk_id=chunk.chunk_id,
            line_number=chunk.start_line,
        )
    )


def _check_processed_chunks(processed_chunks: list[ProcessedChunk]) -> list[PipelineWarning]:
    """Run the log-only validity check over ordered results."""
    warnings: list[PipelineWarning] = []
    for processed in processed_chunks:
        if check_processed_chunk(processed):
            continue
        warnings.append(
            PipelineWarning(
                kind="invalid_chunk",
                message=(
                    f"Chunk {processed.chunk_id} skipped {len(processed.errors)} "
                    "malformed lines."
                ),
                chunk_id=processed.chunk_id,
            )
        )
    _LOGGER.info(
        "chunks_validated",
        valid_count=len(processed_chunks) - len(warnings),
        invalid_count=len(warnings),
    )
    return warnings


def _build_pipeline_result(
    chunks: list[Chunk],
    processed_chunks: list[ProcessedChunk],
    outcome: _ProcessingOutcome,
    merge_result: MergeResult,
    phase_warnings: list[PipelineWarning],
) -> PipelineResult:
    """Assemble records and every diagnostic into one result."""
    line_errors: list[LineError] = []
    for processed in processed_chunks:
        line_errors.extend(processed.errors)
    task_warnings = sorted(outcome.warnings, key=lambda warning: warning.chunk_id or 0)
    warnings = phase_warnings + task_warnings + list(merge_result.warnings)
    return PipelineResult(
        records=merge_result.records,
        warnings=tuple(warnings),
        line_errors=tuple(line_errors),
        unattached_fragments=merge_result.unattached_fragments,
        chunk_count=len(chunks),
        dropped_chunk_ids=tuple(sorted(outcome.dropped_chunk_ids)),
    )
