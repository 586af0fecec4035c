"""Runtime configuration model for StormTrack.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_MAX_WORKERS,
    DEFAULT_PROCESS_TIMEOUT_SECONDS,
)
from core.errors import StormTrackConfigError


@dataclass(frozen=True)
class StormTrackConfig:
    """Validated runtime configuration.

    Attributes:
        chunk_size: Advisory number of non-blank lines per chunk.
        max_workers: Thread pool size for chunk processing.
        process_timeout_seconds: Deadline for the chunk processing barrier.
        s3_region: Optional default AWS region for S3 sources.
        s3_profile: Optional AWS profile for boto3 session initialization.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_workers: int = DEFAULT_MAX_WORKERS
    process_timeout_seconds: float = DEFAULT_PROCESS_TIMEOUT_SECONDS
    s3_region: str | None = None
    s3_profile: str | None = None

    @classmethod
    def from_env(cls) -> "StormTrackConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            StormTrackConfigError: If environment values are invalid.
        """
        chunk_size = _parse_positive_int(
            "STORMTRACK_CHUNK_SIZE",
            os.getenv("STORMTRACK_CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE)),
        )
        max_workers = _parse_positive_int(
            "STORMTRACK_MAX_WORKERS",
            os.getenv("STORMTRACK_MAX_WORKERS", str(DEFAULT_MAX_WORKERS)),
        )
        process_timeout_seconds = _parse_positive_float(
            "STORMTRACK_PROCESS_TIMEOUT_SECONDS",
            os.getenv(
                "STORMTRACK_PROCESS_TIMEOUT_SECONDS",
                str(DEFAULT_PROCESS_TIMEOUT_SECONDS),
            ),
        )
        return cls(
            chunk_size=chunk_size,
            max_workers=max_workers,
            process_timeout_seconds=process_timeout_seconds,
            s3_region=os.getenv("STORMTRACK_S3_REGION"),
            s3_profile=os.getenv("STORMTRACK_S3_PROFILE"),
        )


def validate_chunk_size(chunk_size: int) -> int:
    """Validate an advisory chunk size.

    Args:
        chunk_size: Requested number of lines per chunk.

    Returns:
        The unchanged chunk size.

    Raises:
        StormTrackConfigError: If chunk size is below one.
    """
    if chunk_size < 1:
        raise StormTrackConfigError(
            f"Invalid chunk size {chunk_size}: expected an integer >= 1. "
            "Pass a positive chunk size."
        )
    return chunk_size


def _parse_positive_int(env_name: str, raw_value: str) -> int:
    """Parse a positive integer environment value.

    Args:
        env_name: Environment variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer.

    Raises:
        StormTrackConfigError: If value is not a positive integer.
    """
    try:
        value = int(raw_value)
    except ValueError as error:
        raise StormTrackConfigError(
            f"Invalid {env_name} value: expected integer, got '{raw_value}'. "
            f"Set {env_name} to a positive whole number."
        ) from error
    if value < 1:
        raise StormTrackConfigError(
            f"Invalid {env_name} value: expected >= 1, got {value}. "
            f"Set {env_name} to a positive whole number."
        )
    return value


def _parse_positive_float(env_name: str, raw_value: str) -> float:
    """Parse a positive float environment value."""
    try:
        value = float(raw_value)
    except ValueError as error:
        raise StormTrackConfigError(
            f"Invalid {env_name} value: expected number, got '{raw_value}'. "
            f"Set {env_name} to a positive number of seconds."
        ) from error
    if value <= 0:
        raise StormTrackConfigError(
            f"Invalid {env_name} value: expected > 0, got {value}. "
            f"Set {env_name} to a positive number of seconds."
        )
    return value
