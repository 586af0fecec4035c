"""StormTrack exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Only source read failures abort a pipeline run; line-level problems
are reported as data on the processed chunks instead.
"""

from __future__ import annotations


class StormTrackError(Exception):
    """Base exception for all StormTrack failures."""


class StormTrackConfigError(StormTrackError):
    """Raised for invalid runtime configuration."""


class StormTrackIOError(StormTrackError):
    """Raised when the track source cannot be opened or read."""


class StormTrackIngestError(StormTrackError):
    """Raised for invalid source specifications."""


class StormTrackDependencyError(StormTrackError):
    """Raised when an optional runtime dependency is missing."""


class StormTrackExportError(StormTrackError):
    """Raised when merged records cannot be written."""
