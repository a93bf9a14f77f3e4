"""Shared test fixtures for tfsframe tests."""

from pathlib import Path

import pytest

from tfsframe import TfsDataFrame, parse_lines

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def twiss_path():
    """Path to the five-row sample file."""
    return DATA_DIR / "test.tfs"


@pytest.fixture
def twiss_df(twiss_path):
    """The sample file, freshly read."""
    return TfsDataFrame.open(twiss_path)


@pytest.fixture
def sample_lines():
    """Minimal two-row TFS content."""
    return [
        "@ TITLE %s sample",
        "* NAME BETX",
        "$ %s   %le",
        "BPM1   10.0",
        "BPM2   20.0",
    ]


@pytest.fixture
def sample_df(sample_lines):
    """Table parsed from ``sample_lines``."""
    return parse_lines(sample_lines)


@pytest.fixture
def write_tfs(tmp_path):
    """Write TFS text to a temporary file and return its path."""

    def _write(text: str, name: str = "table.tfs") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write
