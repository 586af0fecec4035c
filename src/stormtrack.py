"""Public SDK surface for StormTrack.

This module provides a stable import path for pipeline users.
It re-exports the core operations and typed result models.
"""

from __future__ import annotations

from core.config import StormTrackConfig
from core.errors import StormTrackError, StormTrackIOError
from core.types import (
    Chunk,
    HeaderRecord,
    MergedRecord,
    MergeResult,
    PipelineResult,
    PipelineWarning,
    ProcessedChunk,
    TrackPoint,
)
from ingest.chunk_loader import load_chunks
from ingest.chunk_merger import merge_chunks
from ingest.chunk_processor import parse_chunk
from ingest.pipeline import TrackPipelineRunner, run_pipeline
from store.hurdat_writer import write_hurdat2
from store.record_export import write_records_jsonl
from transforms.landfall_filter import GeoBoundary, filter_by_boundary

__all__ = [
    "Chunk",
    "GeoBoundary",
    "HeaderRecord",
    "MergeResult",
    "MergedRecord",
    "PipelineResult",
    "PipelineWarning",
    "ProcessedChunk",
    "StormTrackConfig",
    "StormTrackError",
    "StormTrackIOError",
    "TrackPipelineRunner",
    "TrackPoint",
    "filter_by_boundary",
    "load_chunks",
    "merge_chunks",
    "parse_chunk",
    "run_pipeline",
    "write_hurdat2",
    "write_records_jsonl",
]
