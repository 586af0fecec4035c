"""Track source readers for ingestion.

This module yields numbered, non-blank lines from local files,
S3 objects, or already-open text streams. Any read failure is
raised as ``StormTrackIOError`` because it aborts the pipeline.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Iterator, Union

from core.config import StormTrackConfig
from core.errors import StormTrackDependencyError, StormTrackIOError
from core.s3_uri import parse_s3_uri
from core.types import SourceLine

TrackSource = Union[str, Path, Iterable[str]]


def iter_source_lines(source: TrackSource, config: StormTrackConfig) -> Iterator[SourceLine]:
    """Yield non-blank lines from a track source.

    Args:
        source: Local path, ``s3://`` URI, or an iterable of text lines.
        config: Runtime configuration for S3 session defaults.

    Yields:
        Stripped lines with their one-based physical line numbers.

    Raises:
        StormTrackIOError: If the source cannot be opened or read.
    """
    if isinstance(source, str) and source.startswith("s3://"):
        yield from _numbered_lines(_read_s3_lines(source, config), source)
    elif isinstance(source, (str, Path)):
        yield from _read_local_lines(Path(source).expanduser())
    else:
        yield from _numbered_lines(source, "<stream>")


def describe_source(source: TrackSource) -> str:
    """Return a printable label for a source."""
    if isinstance(source, (str, Path)):
        return str(source)
    return "<stream>"


def _read_local_lines(source_path: Path) -> Iterator[SourceLine]:
    """Read lines lazily from a local file.

    Args:
        source_path: Input file path.

    Yields:
        Numbered non-blank lines.

    Raises:
        StormTrackIOError: If path is missing or unreadable.
    """
    if not source_path.is_file():
        raise StormTrackIOError(
            f"Failed to read track source at {source_path}: file does not exist. "
            "Provide an existing HURDAT2 text file."
        )
    try:
        with source_path.open("r", encoding="utf-8") as handle:
            yield from _numbered_lines(handle, str(source_path))
    except OSError as error:
        raise StormTrackIOError(
            f"Failed to read track source at {source_path}: {error}. "
            "Check file permissions and retry."
        ) from error


def _numbered_lines(lines: Iterable[str], label: str) -> Iterator[SourceLine]:
    """Number raw lines and drop blanks.

    Args:
        lines: Raw text lines, with or without trailing newlines.
        label: Source label for error context.

    Yields:
        Numbered non-blank lines.

    Raises:
        StormTrackIOError: If iteration fails or text is not valid UTF-8.
    """
    try:
        for line_number, raw_line in enumerate(lines, 1):
            text = raw_line.strip()
            if text:
                yield SourceLine(line_number=line_number, text=text)
    except (OSError, UnicodeDecodeError) as error:
        raise StormTrackIOError(
            f"Failed to read track source {label}: {error}. "
            "Make sure the source is a readable UTF-8 text file."
        ) from error


def _read_s3_lines(source_uri: str, config: StormTrackConfig) -> list[str]:
    """Download an S3 object and split it into lines.

    Args:
        source_uri: ``s3://bucket/key`` URI.
        config: Runtime config for region/profile.

    Returns:
        Raw text lines of the object.

    Raises:
        StormTrackIOError: If the object cannot be fetched or decoded.
    """
    location = parse_s3_uri(source_uri)
    s3_client = _create_s3_client(config)
    try:
        body = s3_client.get_object(Bucket=location.bucket, Key=location.key)["Body"].read()
        return body.decode("utf-8").splitlines()
    except UnicodeDecodeError as error:
        raise StormTrackIOError(
            f"Failed to decode {source_uri}: {error}. Upload the file as UTF-8 text."
        ) from error
    except Exception as error:
        raise StormTrackIOError(
            f"Failed to download {source_uri}: {error}. "
            "Check the bucket, key, and AWS credentials."
        ) from error


def _create_s3_client(config: StormTrackConfig) -> Any:
    """Create a boto3 S3 client.

    Args:
        config: Runtime config containing optional profile/region.

    Returns:
        Boto3 S3 client.

    Raises:
        StormTrackDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise StormTrackDependencyError(
            "S3 support requires boto3, but it is not installed. "
            "Install stormtrack[s3] to read s3:// sources."
        ) from error
    session_kwargs = _build_boto3_session_kwargs(config)
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


def _build_boto3_session_kwargs(config: StormTrackConfig) -> dict[str, str]:
    """Build boto3 Session kwargs from config."""
    kwargs: dict[str, str] = {}
    if config.s3_profile:
        kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        kwargs["region_name"] = config.s3_region
    return kwargs
