"""
Central configuration for the Meeting Calendar tool.

This module contains all application settings, paths, and layout constants.
All other modules import configuration from here to maintain consistency.
"""

import os
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

from meeting_calendar.models import YearRange

# Load environment variables from .env file
load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


class Config:
    """Application configuration and constants"""

    # ==========================================
    # Project Paths
    # ==========================================
    PROJECT_ROOT = Path(__file__).parent.parent
    DATA_DIR = PROJECT_ROOT / "data"
    OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", str(PROJECT_ROOT / "output")))

    # ==========================================
    # Input
    # ==========================================
    MEETINGS_CSV = Path(os.getenv("MEETINGS_CSV", str(DATA_DIR / "meetings.csv")))
    DATE_COLUMN = os.getenv("DATE_COLUMN", "Date")

    # Characters that mark a date as unknown in the source records
    PLACEHOLDER_CHARS: List[str] = ["?"]

    # Source records are from the 1600s, so "12/06/71" means 1671
    TWO_DIGIT_YEAR_PREFIX = "16"

    # Optional inclusive year-range filter for the day-of-year overlay
    MIN_YEAR = _optional_int("MIN_YEAR")
    MAX_YEAR = _optional_int("MAX_YEAR")

    # ==========================================
    # Application Settings
    # ==========================================
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")          # DEBUG, INFO, WARNING, ERROR

    # ==========================================
    # Year Calendar Layout
    # ==========================================
    CALENDAR_CELL_WIDTH = 2
    CALENDAR_ROW_HEIGHT = 30
    CALENDAR_CELL_SPACING = 2
    CALENDAR_ROW_SPACING = 10
    CALENDAR_MARGIN = {"top": 40, "right": 20, "bottom": 20, "left": 60}
    CALENDAR_DEFAULT_CELL_COLOR = "#eeeeee"
    MEETING_COLOR = os.getenv("MEETING_COLOR", "#ff0000")

    # ==========================================
    # Day-of-Year Overlay Layout
    # ==========================================
    OVERLAY_WIDTH = int(os.getenv("OVERLAY_WIDTH", "1200"))
    OVERLAY_ROW_HEIGHT = 80
    OVERLAY_CELL_SPACING = 0
    OVERLAY_OPACITY_PER_OCCURRENCE = float(os.getenv("OVERLAY_OPACITY_PER_OCCURRENCE", "0.05"))
    OVERLAY_MARGIN = {"top": 40, "right": 20, "bottom": 20, "left": 80}
    OVERLAY_DEFAULT_CELL_COLOR = "#ffffff"
    OVERLAY_OCCURRENCE_COLOR = "#ff0000"

    # Leap year used to label day-of-year cells ("Feb 29" is day 60)
    REFERENCE_LEAP_YEAR = 2024

    # ==========================================
    # Bar Charts
    # ==========================================
    BAR_CHART_WIDTH = 850
    BAR_CHART_HEIGHT = 400
    BAR_COLOR = "#4a90e2"
    YEAR_LABEL_EVERY = 10

    # ==========================================
    # Shared Drawing Constants
    # ==========================================
    MONTH_LINE_COLOR = "#000000"
    MONTH_LABEL_COLOR = "#000000"
    AXIS_OFFSET = -20
    DAYS_IN_LEAP_YEAR = 366
    FIGURE_DPI = 100

    # ==========================================
    # Logging Configuration
    # ==========================================
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    # ==========================================
    # Class Methods
    # ==========================================
    @classmethod
    def get_year_range(cls) -> Optional[YearRange]:
        """
        Year-range filter configured through MIN_YEAR / MAX_YEAR.

        Returns:
            YearRange if both bounds are set, otherwise None
        """
        if cls.MIN_YEAR is None or cls.MAX_YEAR is None:
            return None
        return YearRange(cls.MIN_YEAR, cls.MAX_YEAR)

    @classmethod
    def print_config_summary(cls) -> None:
        """Print configuration summary for debugging"""
        print("=" * 60)
        print("Meeting Calendar - Configuration Summary")
        print("=" * 60)
        print(f"Meetings CSV:         {cls.MEETINGS_CSV}")
        print(f"Date column:          {cls.DATE_COLUMN}")
        print(f"Output directory:     {cls.OUTPUT_DIR}")
        print(f"Year range:           {cls.MIN_YEAR} - {cls.MAX_YEAR}")
        print(f"Overlay opacity:      {cls.OVERLAY_OPACITY_PER_OCCURRENCE}")
        print(f"Log level:            {cls.LOG_LEVEL}")
        print("=" * 60)
