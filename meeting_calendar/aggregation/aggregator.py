"""
Frequency aggregation over normalized meeting dates.

Every function here is a pure, single-pass transform over an already
materialized sequence of dates:

- count_by_year: dense per-year counts from the first to the last year seen
- count_by_month: counts for months 1-12
- count_by_day_of_year: counts keyed by 1-based day of year, optionally
  filtered to an inclusive year range
- build_year_color_maps: per-year day-index -> colour tables for the
  calendar heatmap

Only the heatmap ingestion path deduplicates by ISO date; the bar charts and
the overlay count every row.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import ciso8601

from meeting_calendar.models import (
    ColoredDay,
    FrequencyTable,
    NormalizedDate,
    YearRange,
)
from meeting_calendar.normalization.date_normalizer import days_in_year

logger = logging.getLogger(__name__)

BY_YEAR = "year"
BY_MONTH = "month"
BY_DAY_OF_YEAR = "day_of_year"
BY_YEAR_DAY_OF_YEAR = "year_day_of_year"

MODES = (BY_YEAR, BY_MONTH, BY_DAY_OF_YEAR, BY_YEAR_DAY_OF_YEAR)

MAX_DAY_OF_YEAR = 366


def deduplicate(dates: Iterable[NormalizedDate]) -> List[NormalizedDate]:
    """Keep only the first occurrence of each ISO date, preserving order"""
    seen = set()
    unique = []
    for value in dates:
        if value.iso in seen:
            continue
        seen.add(value.iso)
        unique.append(value)
    return unique


def available_year_range(dates: Iterable[NormalizedDate]) -> Optional[YearRange]:
    """Smallest inclusive year range covering all dates, or None when empty"""
    years = [value.year for value in dates]
    if not years:
        return None
    return YearRange(min(years), max(years))


def count_by_year(dates: Iterable[NormalizedDate]) -> FrequencyTable:
    """
    Count meetings per calendar year.

    The table is dense: every year between the first and last observed year is
    present, zero-filled, so bar charts show the gaps.
    """
    counts = Counter(value.year for value in dates)
    if not counts:
        return {}
    return {year: counts.get(year, 0) for year in range(min(counts), max(counts) + 1)}


def count_by_month(dates: Iterable[NormalizedDate]) -> FrequencyTable:
    """Count meetings per month number; all twelve months are always present"""
    counts = Counter(value.month for value in dates)
    return {month: counts.get(month, 0) for month in range(1, 13)}


def count_by_day_of_year(dates: Iterable[NormalizedDate],
                         year_range: Optional[YearRange] = None,
                         dense: bool = True) -> FrequencyTable:
    """
    Count meetings per 1-based day of year.

    Args:
        dates: Normalized dates
        year_range: When given, dates outside [min, max] are dropped first
        dense: True for all keys 1..366, False for populated keys only

    Returns:
        FrequencyTable keyed by day of year
    """
    counts = Counter(
        value.day_of_year for value in dates
        if year_range is None or value.year in year_range
    )
    if not dense:
        return dict(sorted(counts.items()))
    return {day: counts.get(day, 0) for day in range(1, MAX_DAY_OF_YEAR + 1)}


def colored_days_by_year(dates: Iterable[NormalizedDate], color: str) -> Dict[int, List[ColoredDay]]:
    """Group dates into ColoredDay annotations keyed by their year"""
    grouped: Dict[int, List[ColoredDay]] = {}
    for value in dates:
        grouped.setdefault(value.year, []).append(ColoredDay(date=value.iso, color=color))
    return grouped


def build_year_color_maps(colored_days: Mapping[int, Sequence[ColoredDay]],
                          default_color: Optional[str] = None) -> Dict[int, Dict[int, str]]:
    """
    Build one day-index -> colour table per year for the calendar heatmap.

    Args:
        colored_days: Year key -> annotations declared for that year
        default_color: When given, every day of the year is present and
            unannotated days get this background colour

    Returns:
        Dict keyed by year (ascending) of 0-based day index -> colour.
        An annotation whose date falls in another year than its key is
        dropped; for repeated days the last annotation wins.
    """
    color_maps: Dict[int, Dict[int, str]] = {}

    for year in sorted(colored_days):
        color_map: Dict[int, str] = {}
        if default_color is not None:
            color_map = {index: default_color for index in range(days_in_year(year))}

        for annotation in colored_days[year]:
            try:
                parsed = ciso8601.parse_datetime(annotation.date).date()
            except (TypeError, ValueError):
                logger.warning(f"Invalid date format: {annotation.date!r}")
                continue

            if parsed.year != year:
                continue

            color_map[NormalizedDate.from_date(parsed).day_index] = annotation.color

        color_maps[year] = color_map

    return color_maps


def aggregate(dates: Sequence[NormalizedDate], mode: str,
              year_range: Optional[YearRange] = None,
              color: Optional[str] = None, default_color: Optional[str] = None):
    """
    Aggregate normalized dates according to mode.

    Args:
        dates: Normalized dates
        mode: One of "year", "month", "day_of_year", "year_day_of_year"
        year_range: Inclusive filter, used by the day-of-year mode
        color: Annotation colour for the year/day-of-year mode
        default_color: Background colour for the year/day-of-year mode

    Returns:
        FrequencyTable, or per-year colour maps for "year_day_of_year"
    """
    if mode == BY_YEAR:
        return count_by_year(dates)
    if mode == BY_MONTH:
        return count_by_month(dates)
    if mode == BY_DAY_OF_YEAR:
        return count_by_day_of_year(dates, year_range=year_range)
    if mode == BY_YEAR_DAY_OF_YEAR:
        if color is None:
            raise ValueError("Aggregation mode 'year_day_of_year' requires an annotation color")
        return build_year_color_maps(colored_days_by_year(dates, color), default_color=default_color)
    raise ValueError(f"Unknown aggregation mode: {mode!r}. Expected one of {MODES}")
