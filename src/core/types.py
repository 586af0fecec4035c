"""Shared typed models.

This module defines the immutable value types handed between the
loader, chunk processor, merger, and pipeline orchestrator.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, Literal, TypeVar

from core.constants import LANDFALL_MARKER

WarningKind = Literal[
    "orphan_line",
    "orphan_fragment",
    "chunk_task_failure",
    "chunk_timeout",
    "invalid_chunk",
]

ParsedValue = TypeVar("ParsedValue")


@dataclass(frozen=True)
class HeaderRecord:
    """Parsed storm header line.

    Attributes:
        basin: Two-letter basin code, for example ``AL``.
        storm_number: Storm sequence number within the year.
        year: Four-digit season year.
        name: Display name, ``UNNAMED`` for early storms.
        declared_count: Number of track points announced by the header.
    """

    basin: str
    storm_number: int
    year: int
    name: str
    declared_count: int

    @property
    def storm_id(self) -> str:
        """Identity key built from basin, number, and year."""
        return f"{self.basin}{self.storm_number:02d}{self.year}"


@dataclass(frozen=True)
class WindRadii:
    """Wind radii in nautical miles for one wind threshold."""

    northeast: int | None = None
    southeast: int | None = None
    southwest: int | None = None
    northwest: int | None = None


@dataclass(frozen=True)
class TrackPoint:
    """One parsed track observation.

    Attributes:
        observed_at: Observation timestamp (UTC, naive).
        record_marker: Optional single-character event code.
        status: Two-letter system status such as ``HU`` or ``TS``.
        latitude: Absolute latitude in degrees.
        latitude_hemisphere: ``N`` or ``S``.
        longitude: Absolute longitude in degrees.
        longitude_hemisphere: ``W`` or ``E``.
        max_wind: Maximum sustained wind in knots.
        min_pressure: Minimum central pressure in millibars.
        radii_34kt: 34 knot wind radii.
        radii_50kt: 50 knot wind radii.
        radii_64kt: 64 knot wind radii.
        max_wind_radius: Radius of maximum wind in nautical miles.
    """

    observed_at: datetime
    record_marker: str | None
    status: str
    latitude: float
    latitude_hemisphere: str
    longitude: float
    longitude_hemisphere: str
    max_wind: int | None
    min_pressure: int | None = None
    radii_34kt: WindRadii = WindRadii()
    radii_50kt: WindRadii = WindRadii()
    radii_64kt: WindRadii = WindRadii()
    max_wind_radius: int | None = None

    @property
    def is_landfall(self) -> bool:
        """Return whether this point carries the landfall marker."""
        return self.record_marker == LANDFALL_MARKER

    @property
    def signed_latitude(self) -> float:
        """Latitude in signed degrees, negative in the southern hemisphere."""
        return -self.latitude if self.latitude_hemisphere == "S" else self.latitude

    @property
    def signed_longitude(self) -> float:
        """Longitude in signed degrees, negative in the western hemisphere."""
        return -self.longitude if self.longitude_hemisphere == "W" else self.longitude


@dataclass(frozen=True)
class LineParseResult(Generic[ParsedValue]):
    """Outcome of parsing one line: a value or a failure reason."""

    value: ParsedValue | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return whether the line parsed successfully."""
        return self.error is None


@dataclass(frozen=True)
class SourceLine:
    """Non-blank source line with its physical line number."""

    line_number: int
    text: str


@dataclass(frozen=True)
class Chunk:
    """Ordered slice of raw lines produced by the loader.

    Attributes:
        chunk_id: Monotonic id assigned by the loader; defines merge order.
        lines: Non-blank source lines in file order.
    """

    chunk_id: int
    lines: tuple[SourceLine, ...]

    @property
    def start_line(self) -> int:
        """First physical line number covered by this chunk."""
        return self.lines[0].line_number if self.lines else 0

    @property
    def end_line(self) -> int:
        """Last physical line number covered by this chunk."""
        return self.lines[-1].line_number if self.lines else 0


@dataclass(frozen=True)
class LineError:
    """Malformed line recorded by the chunk processor."""

    line_number: int
    message: str


@dataclass(frozen=True)
class RecordFragment:
    """Portion of one storm record visible inside a single chunk.

    Attributes:
        header: Parsed header, absent for continuation fragments.
        track_points: Track points in file order.
        header_present: Whether the fragment started with a header line.
        first_line_number: Line number where the fragment starts.
    """

    header: HeaderRecord | None
    track_points: tuple[TrackPoint, ...]
    header_present: bool
    first_line_number: int


@dataclass(frozen=True)
class ProcessedChunk:
    """Chunk parsing result.

    Attributes:
        chunk_id: Id of the source chunk.
        fragments: Record fragments in chunk order.
        errors: Per-line format errors.
        ends_in_rejected_record: Chunk ended under a header that failed to parse.
        elapsed_seconds: Wall time spent parsing.
    """

    chunk_id: int
    fragments: tuple[RecordFragment, ...]
    errors: tuple[LineError, ...] = ()
    ends_in_rejected_record: bool = False
    elapsed_seconds: float = 0.0

    @property
    def is_valid(self) -> bool:
        """Return True when no line errors were recorded."""
        return not self.errors


@dataclass(frozen=True)
class MergedRecord:
    """Storm header plus its reconstructed track.

    Attributes:
        header: Header from the first occurrence of the storm id.
        track_points: Track points gathered across all contributing chunks.
        is_complete: Whether the point count matches the declared count.
    """

    header: HeaderRecord
    track_points: tuple[TrackPoint, ...]
    is_complete: bool

    @property
    def storm_id(self) -> str:
        """Identity key of the merged record."""
        return self.header.storm_id


@dataclass(frozen=True)
class PipelineWarning:
    """Non-fatal pipeline condition reported to the caller."""

    kind: WarningKind
    message: str
    chunk_id: int | None = None
    line_number: int | None = None


@dataclass(frozen=True)
class MergeResult:
    """Merger output with diagnostics."""

    records: tuple[MergedRecord, ...]
    unattached_fragments: tuple[RecordFragment, ...] = ()
    warnings: tuple[PipelineWarning, ...] = ()


@dataclass(frozen=True)
class PipelineResult:
    """Final pipeline output.

    Attributes:
        records: Merged records in file order.
        warnings: Loader, processing, and merge warnings.
        line_errors: Line format errors across all processed chunks.
        unattached_fragments: Continuation fragments with no owner.
        chunk_count: Number of chunks produced by the loader.
        dropped_chunk_ids: Chunks excluded from the merge.
    """

    records: tuple[MergedRecord, ...]
    warnings: tuple[PipelineWarning, ...] = ()
    line_errors: tuple[LineError, ...] = ()
    unattached_fragments: tuple[RecordFragment, ...] = ()
    chunk_count: int = 0
    dropped_chunk_ids: tuple[int, ...] = ()

    @property
    def complete_count(self) -> int:
        """Count records whose track matches the declared count."""
        return sum(1 for record in self.records if record.is_complete)

    @property
    def incomplete_count(self) -> int:
        """Count records flagged incomplete."""
        return len(self.records) - self.complete_count
