"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def pipeline_config():
    """Small deterministic pipeline configuration."""
    from core.config import StormTrackConfig

    return StormTrackConfig(chunk_size=2, max_workers=3, process_timeout_seconds=30.0)
