"""Landfall filter command wiring for StormTrack CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.config import StormTrackConfig
from ingest.pipeline import run_pipeline
from transforms.landfall_filter import GeoBoundary, filter_by_boundary, landfall_points


def add_landfall_command(subparsers: Any) -> None:
    """Register landfall subcommand."""
    parser = subparsers.add_parser(
        "landfall",
        help="List storms with landfall inside a latitude/longitude box",
    )
    parser.add_argument("source", help="HURDAT2 file path or s3://bucket/key URI")
    parser.add_argument("--min-lat", type=float, required=True, help="Southern edge")
    parser.add_argument("--max-lat", type=float, required=True, help="Northern edge")
    parser.add_argument("--min-lon", type=float, required=True, help="Western edge")
    parser.add_argument("--max-lon", type=float, required=True, help="Eastern edge")
    parser.add_argument("--name", default="Custom Area", help="Display name of the area")
    parser.add_argument("--since-year", type=int, help="Ignore points before this year")
    parser.add_argument("--chunk-size", type=int, help="Advisory lines per chunk")
    parser.add_argument(
        "--all-points",
        action="store_true",
        help="Match any track point, not only landfall-marked points",
    )


def run_landfall_command(config: StormTrackConfig, args: argparse.Namespace) -> int:
    """Run the pipeline and print storms matching the boundary."""
    boundary = GeoBoundary(
        name=args.name,
        min_latitude=args.min_lat,
        max_latitude=args.max_lat,
        min_longitude=args.min_lon,
        max_longitude=args.max_lon,
    )
    result = run_pipeline(args.source, args.chunk_size, config)
    matching = filter_by_boundary(
        result.records,
        boundary,
        landfall_only=not args.all_points,
        since_year=args.since_year,
    )
    for record in matching:
        first_landfall = next(iter(landfall_points(record)), None)
        landfall_at = first_landfall.observed_at.isoformat() if first_landfall else "-"
        print(f"{record.storm_id}\t{record.header.name}\t{landfall_at}")
    print(f"matches={len(matching)} area={boundary.name}")
    return 0
