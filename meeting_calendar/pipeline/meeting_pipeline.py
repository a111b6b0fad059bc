"""
Main data processing pipeline for meeting records.

This ingests the meetings CSV once, normalizes every date and hands the
validated dates to the aggregation step for each view.

1. Load the CSV (the only step that can fail the whole run)
2. Normalize each Date value; bad rows are counted and skipped, never fatal
3. Build the per-view tables: bar charts, day-of-year overlay, year calendar
"""

import logging
import time
from collections import Counter
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

from meeting_calendar.aggregation.aggregator import (
    available_year_range,
    build_year_color_maps,
    colored_days_by_year,
    count_by_day_of_year,
    count_by_month,
    count_by_year,
    deduplicate,
)
from meeting_calendar.config import Config
from meeting_calendar.models import LOAD_FAILURE, FrequencyTable, NormalizedDate, YearRange
from meeting_calendar.normalization.date_normalizer import DateNormalizer

logger = logging.getLogger(__name__)


class LoadFailure(Exception):
    """The meetings CSV could not be loaded; nothing else can proceed"""

    reason = LOAD_FAILURE


class MeetingPipeline:
    """
    Pipeline for turning a messy meetings CSV into validated dates.

    Pipeline stages re-iterated:
    1. Load CSV
    2. Normalize dates, absorbing per-row failures
    3. Return the validated dates together with processing metadata
    """

    def __init__(self, date_column: Optional[str] = None):
        """Initialize pipeline with its normalizer"""
        self.date_column = date_column or Config.DATE_COLUMN
        self.date_normalizer = DateNormalizer()
        self.malformed_lines = 0  # lines skipped by the last load_csv

        logger.info("Pipeline initialized")

    def load_csv(self, csv_path: Path) -> pd.DataFrame:
        """
        Load the meetings CSV with every column kept as text.

        Raises:
            LoadFailure: file missing, unreadable, or without the Date column

        Lines with more fields than the header are skipped and counted in
        self.malformed_lines; short lines are padded and reach the normalizer.
        """
        logger.info(f"Loading CSV: {csv_path}")

        if not csv_path.exists():
            raise LoadFailure(f"CSV file not found: {csv_path}")

        self.malformed_lines = 0

        def skip_malformed(fields: List[str]) -> None:
            self.malformed_lines += 1
            logger.warning(f"Skipping malformed CSV line with {len(fields)} fields: {fields}")
            return None

        try:
            df = pd.read_csv(
                csv_path,
                dtype=str,
                keep_default_na=False,
                engine="python",
                on_bad_lines=skip_malformed,
            )
        except Exception as e:
            raise LoadFailure(f"Failed to read CSV file: {e}") from e

        if self.date_column not in df.columns:
            raise LoadFailure(
                f"Missing required column: {self.date_column!r}. Found: {list(df.columns)}"
            )

        logger.info(f"Loaded {len(df)} rows from CSV")
        return df

    def normalize_frame(self, df: pd.DataFrame) -> Tuple[List[NormalizedDate], Dict]:
        """
        Normalize the Date column of an already loaded frame.

        Returns:
            Tuple of (dates, metadata)
            - dates: valid dates in row order
            - metadata: row counts, skip reasons and accepted shapes
        """
        results = df[self.date_column].map(self.date_normalizer.normalize_date)

        dates = [result.date for result in results if result.ok]
        skipped_by_reason = Counter(result.reason for result in results if not result.ok)
        shapes = Counter(result.shape for result in results if result.ok)

        metadata = {
            'total_rows': len(df),
            'valid_dates': len(dates),
            'skipped_rows': sum(skipped_by_reason.values()),
            'skipped_by_reason': dict(skipped_by_reason),
            'shapes': dict(shapes),
        }

        logger.info(f"Processed {metadata['valid_dates']} valid dates, "
                    f"skipped {metadata['skipped_rows']} rows")
        return dates, metadata

    def process_csv(self, csv_path: Path) -> Tuple[List[NormalizedDate], Dict]:
        """
        Process a CSV file through the complete pipeline.

        Args:
            csv_path: Path to the meetings CSV

        Returns:
            Tuple of (dates, metadata_dict)
        """
        start_time = time.time()

        df = self.load_csv(csv_path)
        dates, metadata = self.normalize_frame(df)

        metadata['malformed_lines'] = self.malformed_lines
        metadata['input_file'] = str(csv_path)
        metadata['processing_time_seconds'] = time.time() - start_time

        logger.info(f"Pipeline complete in {metadata['processing_time_seconds']:.2f}s")
        return dates, metadata


def build_bar_chart_data(dates: List[NormalizedDate]) -> Dict[str, FrequencyTable]:
    """Year, month and day-of-year tables for the bar charts (no deduplication)"""
    chart_data = {
        'year': count_by_year(dates),
        'month': count_by_month(dates),
        'day_of_year': count_by_day_of_year(dates),
    }
    if chart_data['year']:
        logger.info(f"Bar chart data: {len(chart_data['year'])} years "
                    f"({min(chart_data['year'])}-{max(chart_data['year'])}), "
                    f"{len(dates)} meetings")
    return chart_data


def build_overlay_counts(dates: List[NormalizedDate],
                         year_range: Optional[YearRange] = None) -> FrequencyTable:
    """
    Sparse day-of-year counts for the overlay (no deduplication).

    Without an explicit year range the configured MIN_YEAR/MAX_YEAR range is
    used, falling back to the full range present in the data.
    """
    year_range = year_range or Config.get_year_range() or available_year_range(dates)
    if year_range is None:
        return {}

    counts = count_by_day_of_year(dates, year_range=year_range, dense=False)
    filtered = sum(1 for value in dates if value.year not in year_range)

    logger.info(f"Overlay {year_range.min}-{year_range.max}: {sum(counts.values())} dates, "
                f"filtered {filtered} by year range, {len(counts)} unique days of year")
    if counts:
        logger.info(f"Max occurrences for a single day: {max(counts.values())}")
    return counts


def build_calendar_data(dates: List[NormalizedDate], color: Optional[str] = None,
                        default_color: Optional[str] = None) -> Dict[int, Dict[int, str]]:
    """
    Per-year colour maps for the calendar heatmap.

    Repeated ISO dates are collapsed to a single calendar entry here, unlike
    the bar chart and overlay tables.
    """
    unique = deduplicate(dates)
    if len(unique) < len(dates):
        logger.info(f"Dropped {len(dates) - len(unique)} duplicate calendar dates")

    colored = colored_days_by_year(unique, color or Config.MEETING_COLOR)
    return build_year_color_maps(colored, default_color=default_color)


# Helper function for CLI
def process_meetings_data(csv_path: str) -> Tuple[List[NormalizedDate], Dict]:
    """
    Helper function to process a CSV file.

    Args:
        csv_path: Path to CSV file (string)

    Returns:
        Tuple of (dates, metadata)
    """
    pipeline = MeetingPipeline()
    return pipeline.process_csv(Path(csv_path))
