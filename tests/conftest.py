"""
Shared fixtures for the test suite.
"""

import os

os.environ.setdefault("MPLBACKEND", "Agg")

import pytest
from meeting_calendar.config import Config


@pytest.fixture(autouse=True)
def no_configured_year_range(monkeypatch):
    """Keep a MIN_YEAR/MAX_YEAR from the environment out of the tests"""
    monkeypatch.setattr(Config, "MIN_YEAR", None)
    monkeypatch.setattr(Config, "MAX_YEAR", None)


@pytest.fixture
def write_csv(tmp_path):
    """Write a meetings CSV with the given Date values and return its path"""
    def _write(values, name="meetings.csv", column="Date"):
        path = tmp_path / name
        lines = [f"{column},Place"] + [f"{value},Kirkwall" for value in values]
        path.write_text("\n".join(lines) + "\n")
        return path
    return _write
