"""Unit tests for the landfall CLI command."""

from __future__ import annotations

from cli.main import main
from tests.fixture_paths import fixture_path

_FLORIDA_ARGS = [
    "--min-lat=24.5",
    "--max-lat=31.0",
    "--min-lon=-87.6",
    "--max-lon=-80.0",
    "--name",
    "Florida",
]


def test_cli_landfall_prints_matching_storms(capsys) -> None:
    """Only storms with landfall inside the box are printed."""
    exit_code = main(["landfall", str(fixture_path("hurdat2_sample.txt")), *_FLORIDA_ARGS])
    output_lines = capsys.readouterr().out.strip().splitlines()

    assert (exit_code, output_lines) == (
        0,
        ["AL062004\tFRANCES\t2004-09-05T04:30:00", "matches=1 area=Florida"],
    )


def test_cli_landfall_applies_since_year(capsys) -> None:
    """A cutoff after the only match leaves no storms."""
    main(
        [
            "landfall",
            str(fixture_path("hurdat2_sample.txt")),
            *_FLORIDA_ARGS,
            "--since-year",
            "2005",
        ]
    )

    assert capsys.readouterr().out.strip() == "matches=0 area=Florida"


def test_cli_landfall_rejects_inverted_box(capsys) -> None:
    """Inverted edges are reported as an error."""
    exit_code = main(
        [
            "landfall",
            str(fixture_path("hurdat2_sample.txt")),
            "--min-lat=31.0",
            "--max-lat=24.5",
            "--min-lon=-87.6",
            "--max-lon=-80.0",
        ]
    )

    assert (exit_code, capsys.readouterr().out.startswith("error=")) == (1, True)
