"""Record-preserving chunk loader.

This module scans a track source once and groups its lines into
ordered chunks. A chunk boundary is only ever placed in front of a
header line, so a storm record is never torn apart by the loader.
"""

from __future__ import annotations

from typing import Iterable

from core.config import StormTrackConfig, validate_chunk_size
from core.logging_config import get_logger
from core.types import Chunk, PipelineWarning, SourceLine
from ingest.input_reader import TrackSource, describe_source, iter_source_lines
from ingest.line_parser import is_header_line

_LOGGER = get_logger(__name__)


class ChunkLoader:
    """Stateful single-pass splitter of source lines into chunks.

    The target size is advisory: a chunk may exceed it by up to one
    full record because records are flushed whole.
    """

    def __init__(self, target_chunk_size: int) -> None:
        self._target_chunk_size = validate_chunk_size(target_chunk_size)
        self._chunks: list[Chunk] = []
        self._chunk_lines: list[SourceLine] = []
        self._record_lines: list[SourceLine] = []
        self.warnings: list[PipelineWarning] = []

    def split(self, lines: Iterable[SourceLine]) -> list[Chunk]:
        """Split numbered source lines into ordered chunks.

        Args:
            lines: Non-blank source lines in file order.

        Returns:
            Chunks with ids assigned from zero upwards.

        Raises:
            StormTrackIOError: If the underlying source fails mid-read.
        """
        for line in lines:
            if is_header_line(line.text):
                self._start_record(line)
            elif self._record_lines:
                self._record_lines.append(line)
            else:
                self._add_orphan_line(line)
        self._flush_record()
        self._close_chunk()
        chunks = self._chunks
        self._chunks = []
        return chunks

    def _start_record(self, header_line: SourceLine) -> None:
        self._flush_record()
        if len(self._chunk_lines) >= self._target_chunk_size:
            self._close_chunk()
        self._record_lines.append(header_line)

    def _add_orphan_line(self, line: SourceLine) -> None:
        """Keep a data line seen before any header with the current chunk."""
        chunk_id = len(self._chunks)
        _LOGGER.warning("orphan_line", line_number=line.line_number, chunk_id=chunk_id)
        self.warnings.append(
            PipelineWarning(
                kind="orphan_line",
                message=f"Data line {line.line_number} appears before any storm header.",
                chunk_id=chunk_id,
                line_number=line.line_number,
            )
        )
        self._chunk_lines.append(line)

    def _flush_record(self) -> None:
        self._chunk_lines.extend(self._record_lines)
        self._record_lines = []

    def _close_chunk(self) -> None:
        if not self._chunk_lines:
            return
        self._chunks.append(Chunk(chunk_id=len(self._chunks), lines=tuple(self._chunk_lines)))
        self._chunk_lines = []


def load_chunks(
    source: TrackSource,
    chunk_size: int | None = None,
    config: StormTrackConfig | None = None,
) -> list[Chunk]:
    """Read a track source and split it into record-preserving chunks.

    Args:
        source: Local path, ``s3://`` URI, or iterable of text lines.
        chunk_size: Advisory lines per chunk; defaults to ``config.chunk_size``.
        config: Runtime configuration.

    Returns:
        Ordered list of chunks.

    Raises:
        StormTrackConfigError: If chunk size is below one.
        StormTrackIOError: If the source cannot be read.
    """
    chunks, _warnings = split_source(source, chunk_size, config or StormTrackConfig.from_env())
    return chunks


def split_source(
    source: TrackSource,
    chunk_size: int | None,
    config: StormTrackConfig,
) -> tuple[list[Chunk], list[PipelineWarning]]:
    """Split a source into chunks and collect loader warnings.

    Args:
        source: Local path, ``s3://`` URI, or iterable of text lines.
        chunk_size: Advisory lines per chunk; defaults to ``config.chunk_size``.
        config: Runtime configuration.

    Returns:
        Ordered chunks and orphan-line warnings.
    """
    target_chunk_size = config.chunk_size if chunk_size is None else chunk_size
    loader = ChunkLoader(target_chunk_size)
    chunks = loader.split(iter_source_lines(source, config))
    _log_chunks_loaded(source, target_chunk_size, chunks)
    return chunks, list(loader.warnings)


def _log_chunks_loaded(source: TrackSource, chunk_size: int, chunks: list[Chunk]) -> None:
    """Log loader completion with chunk size distribution."""
    _LOGGER.info(
        "chunks_loaded",
        source=describe_source(source),
        target_chunk_size=chunk_size,
        chunk_count=len(chunks),
        line_count=sum(len(chunk.lines) for chunk in chunks),
        largest_chunk=max((len(chunk.lines) for chunk in chunks), default=0),
    )
