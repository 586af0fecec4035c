"""Core constants used across StormTrack modules.

This module centralizes HURDAT2 format constants and runtime defaults.
Keeping values here avoids magic literals in parsing logic.
"""

from __future__ import annotations

DEFAULT_CHUNK_SIZE = 500
DEFAULT_MAX_WORKERS = 4
DEFAULT_PROCESS_TIMEOUT_SECONDS = 300.0
MISSING_VALUE_SENTINEL = -999
LANDFALL_MARKER = "L"
MIN_DATA_FIELD_COUNT = 20
MAX_HEADER_FIELD_COUNT = 4
HEADER_ID_PATTERN = r"^([A-Z]{2})(\d{2})(\d{4})$"
STATUS_PATTERN = r"^[A-Z]{2}$"
LATITUDE_PATTERN = r"^(\d+(?:\.\d+)?)([NS])$"
LONGITUDE_PATTERN = r"^(\d+(?:\.\d+)?)([WE])$"
DATE_FORMAT = "%Y%m%d%H%M"
WORKER_THREAD_PREFIX = "chunk-worker"
SUPPORTED_EXPORT_FORMATS = ("jsonl", "hurdat2")
