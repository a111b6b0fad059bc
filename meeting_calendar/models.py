"""
Data models for the Meeting Calendar tool.

This module defines the data structures shared by every stage:
- NormalizedDate: validated calendar date parsed from a raw record
- NormalizationResult: tagged outcome of normalizing one raw date
- ColoredDay: user-declared colour annotation for one date
- YearRange: inclusive year filter
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional

# Rejection reasons
INCOMPLETE = "incomplete"
INVALID_DATE = "invalid_date"
LOAD_FAILURE = "load_failure"

# Accepted textual shapes
SHAPE_RUN_TOGETHER = "run_together"
SHAPE_SHORT_YEAR = "short_year"
SHAPE_GENERAL = "general"

# bucket key -> occurrence count
FrequencyTable = Dict[int, int]


@dataclass(frozen=True, order=True)
class NormalizedDate:
    """A real proleptic-Gregorian calendar date"""
    year: int
    month: int
    day: int

    def __post_init__(self):
        # date() raises ValueError for month 13, day 32, Feb 29 in common years...
        date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, value: date) -> "NormalizedDate":
        return cls(value.year, value.month, value.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    @property
    def iso(self) -> str:
        """Canonical YYYY-MM-DD form, used as the deduplication key"""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    @property
    def day_of_year(self) -> int:
        """1-based day of year (1..366)"""
        return self.to_date().timetuple().tm_yday

    @property
    def day_index(self) -> int:
        """0-based offset from January 1 (0..365)"""
        return self.day_of_year - 1


@dataclass(frozen=True)
class NormalizationResult:
    """Outcome of normalizing one raw date string"""
    raw: object
    date: Optional[NormalizedDate] = None
    reason: Optional[str] = None  # INCOMPLETE or INVALID_DATE when rejected
    shape: Optional[str] = None   # which accepted shape matched the input

    @property
    def ok(self) -> bool:
        return self.date is not None

    @property
    def iso(self) -> Optional[str]:
        return self.date.iso if self.date else None


@dataclass(frozen=True)
class ColoredDay:
    """Colour annotation for a single ISO date"""
    date: str
    color: str


@dataclass(frozen=True)
class YearRange:
    """Inclusive [min, max] year filter"""
    min: int
    max: int

    def __post_init__(self):
        if self.min > self.max:
            raise ValueError(f"Invalid year range: {self.min} > {self.max}")

    def __contains__(self, year: int) -> bool:
        return self.min <= year <= self.max
