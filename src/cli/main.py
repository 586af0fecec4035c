"""StormTrack CLI entry points.

This module exposes the pipeline and landfall filtering as commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.landfall_command import add_landfall_command, run_landfall_command
from core.config import StormTrackConfig
from core.constants import SUPPORTED_EXPORT_FORMATS
from core.errors import StormTrackConfigError, StormTrackError
from core.types import PipelineResult
from ingest.pipeline import run_pipeline
from store.hurdat_writer import write_hurdat2
from store.record_export import write_records_jsonl


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="stormtrack", description="HURDAT2 track pipeline")
    parser.add_argument("--workers", type=int, help="Override STORMTRACK_MAX_WORKERS")
    parser.add_argument(
        "--timeout",
        type=float,
        help="Override STORMTRACK_PROCESS_TIMEOUT_SECONDS",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_parse_command(subparsers)
    add_landfall_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the StormTrack CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.workers, args.timeout)
        if args.command == "parse":
            return _run_parse_command(config, args)
        if args.command == "landfall":
            return run_landfall_command(config, args)
    except StormTrackError as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(workers: int | None, timeout: float | None) -> StormTrackConfig:
    """Build config with optional command-line overrides.

    Args:
        workers: Optional worker count override.
        timeout: Optional processing deadline override.

    Returns:
        Runtime configuration.

    Raises:
        StormTrackConfigError: If an override is not positive.
    """
    config = StormTrackConfig.from_env()
    if workers is not None:
        if workers < 1:
            raise StormTrackConfigError(f"Invalid --workers {workers}: expected >= 1.")
        config = replace(config, max_workers=workers)
    if timeout is not None:
        if timeout <= 0:
            raise StormTrackConfigError(f"Invalid --timeout {timeout}: expected > 0.")
        config = replace(config, process_timeout_seconds=timeout)
    return config


def _add_parse_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("parse", help="Run the chunked pipeline over a source")
    parser.add_argument("source", help="HURDAT2 file path or s3://bucket/key URI")
    parser.add_argument("--chunk-size", type=int, help="Advisory lines per chunk")
    parser.add_argument("--output", help="Optional path for exported records")
    parser.add_argument(
        "--format",
        choices=SUPPORTED_EXPORT_FORMATS,
        default="jsonl",
        help="Export format for --output",
    )


def _run_parse_command(config: StormTrackConfig, args: argparse.Namespace) -> int:
    """Handle parse command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    result = run_pipeline(args.source, args.chunk_size, config)
    for record in result.records:
        status = "complete" if record.is_complete else "incomplete"
        print(
            f"{record.storm_id}\t{record.header.name}\t"
            f"{len(record.track_points)}/{record.header.declared_count}\t{status}"
        )
    _print_diagnostics(result)
    if args.output:
        _export_records(result, Path(args.output), args.format)
    return 0


def _export_records(result: PipelineResult, output_path: Path, export_format: str) -> None:
    if export_format == "hurdat2":
        line_count = write_hurdat2(output_path, result.records)
        print(f"exported_lines={line_count} path={output_path}")
        return
    record_count = write_records_jsonl(output_path, result.records)
    print(f"exported_records={record_count} path={output_path}")


def _print_diagnostics(result: PipelineResult) -> None:
    for warning in result.warnings:
        print(f"warning={warning.kind}\t{warning.message}")
    for line_error in result.line_errors:
        print(f"line_error={line_error.line_number}\t{line_error.message}")
    print(
        f"records={len(result.records)} incomplete={result.incomplete_count} "
        f"chunks={result.chunk_count} dropped_chunks={len(result.dropped_chunk_ids)}"
    )
