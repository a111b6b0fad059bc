"""
Date normalization module for meeting records.

Turns the loosely formatted day-first dates of the meeting records into
validated calendar dates. Three textual shapes are accepted, tried in order:

1. Run-together "DD/MMYYYY" (missing separator), repaired to "DD/MM/YYYY"
2. Short "DD/MM/YY", expanded to the 1600s ("01/01/70" -> 1670)
3. General "DD/MM/YYYY"

Anything else, or a date that does not exist on the calendar, is rejected.
Rejections are returned, never raised.
"""

import logging
import re
from typing import List, Optional

from meeting_calendar.config import Config
from meeting_calendar.models import (
    INCOMPLETE,
    INVALID_DATE,
    SHAPE_GENERAL,
    SHAPE_RUN_TOGETHER,
    SHAPE_SHORT_YEAR,
    NormalizationResult,
    NormalizedDate,
)

logger = logging.getLogger(__name__)

RUN_TOGETHER_PATTERN = re.compile(r"(\d{2})/(\d{2})(\d{4})", re.ASCII)
SHORT_YEAR_PATTERN = re.compile(r"(\d{2})/(\d{2})/(\d{2})", re.ASCII)
GENERAL_PATTERN = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})", re.ASCII)


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or (year % 400 == 0)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def format_dmy(value: NormalizedDate) -> str:
    """Format a date back to zero-padded DD/MM/YYYY"""
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


class DateNormalizer:
    """Normalizes day-first meeting dates to validated calendar dates"""

    def __init__(self, placeholder_chars: Optional[List[str]] = None,
                 two_digit_year_prefix: Optional[str] = None):
        """Initialize date normalizer with config rules"""
        self.placeholder_chars = (
            placeholder_chars if placeholder_chars is not None else Config.PLACEHOLDER_CHARS
        )
        self.two_digit_year_prefix = (
            two_digit_year_prefix if two_digit_year_prefix is not None else Config.TWO_DIGIT_YEAR_PREFIX
        )

    def is_incomplete(self, date_str) -> bool:
        """
        Check whether a raw value carries no usable date.

        Non-strings (pandas NaN, None), blank strings and strings containing a
        placeholder character such as "?" are incomplete.
        """
        if not isinstance(date_str, str):
            return True
        cleaned = date_str.strip()
        if not cleaned:
            return True
        return any(char in cleaned for char in self.placeholder_chars)

    def normalize_date(self, date_str) -> NormalizationResult:
        """
        Normalize a raw date string.

        Args:
            date_str: Raw value from the Date column

        Returns:
            NormalizationResult with either a NormalizedDate or a reason
            ("incomplete" / "invalid_date")

        Example:
            >>> DateNormalizer().normalize_date("02/061671").iso
            '1671-06-02'
        """
        if self.is_incomplete(date_str):
            logger.debug(f"Incomplete date: {date_str!r}")
            return NormalizationResult(raw=date_str, reason=INCOMPLETE)

        cleaned, repaired = RUN_TOGETHER_PATTERN.subn(r"\1/\2/\3", date_str.strip(), count=1)

        short_match = SHORT_YEAR_PATTERN.fullmatch(cleaned)
        if repaired:
            shape = SHAPE_RUN_TOGETHER
        elif short_match:
            shape = SHAPE_SHORT_YEAR
        else:
            shape = SHAPE_GENERAL

        if short_match:
            day, month, short_year = short_match.groups()
            year = self.two_digit_year_prefix + short_year
        else:
            general_match = GENERAL_PATTERN.fullmatch(cleaned)
            if not general_match:
                logger.debug(f"Unrecognised date shape: {date_str!r}")
                return NormalizationResult(raw=date_str, reason=INVALID_DATE)
            day, month, year = general_match.groups()

        try:
            normalized = NormalizedDate(int(year), int(month), int(day))
        except ValueError:
            logger.debug(f"Not a calendar date: {date_str!r}")
            return NormalizationResult(raw=date_str, reason=INVALID_DATE)

        return NormalizationResult(raw=date_str, date=normalized, shape=shape)


# Global instance (singleton)
_date_normalizer_instance = None


def get_date_normalizer() -> DateNormalizer:
    """Get global DateNormalizer instance"""
    global _date_normalizer_instance
    if _date_normalizer_instance is None:
        _date_normalizer_instance = DateNormalizer()
    return _date_normalizer_instance


def normalize(date_str) -> NormalizationResult:
    """Normalize one raw date with the default rules"""
    return get_date_normalizer().normalize_date(date_str)
