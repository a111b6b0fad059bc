"""
Meeting Calendar CLI

Loads the meetings CSV once and renders the calendar, overlay and bar chart views.

Usage:
    python -m meeting_calendar.cli                              # all views from MEETINGS_CSV
    python -m meeting_calendar.cli --csv data/meetings.csv --view overlay --min-year 1660 --max-year 1680
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from meeting_calendar.config import Config
from meeting_calendar.models import NormalizedDate, YearRange
from meeting_calendar.pipeline.meeting_pipeline import (
    LoadFailure,
    build_bar_chart_data,
    build_calendar_data,
    build_overlay_counts,
    process_meetings_data,
)
from meeting_calendar.rendering.charts import (
    plot_bar_charts,
    plot_day_of_year_overlay,
    plot_year_calendar,
)

logger = logging.getLogger(__name__)

VIEWS = ("calendar", "overlay", "bars")


def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='meeting-calendar',
        description='Renders calendar heatmap, day-of-year overlay and bar chart views of meeting records.',
        epilog='Example: meeting-calendar --csv data/meetings.csv --view overlay --min-year 1660 --max-year 1680',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--csv',
        type=Path,
        default=Config.MEETINGS_CSV,
        help=f'Path to the meetings CSV (default: {Config.MEETINGS_CSV})'
    )

    parser.add_argument(
        '--view',
        choices=VIEWS + ('all',),
        default='all',
        help='Which view to render (default: all)'
    )

    parser.add_argument(
        '--min-year',
        type=int,
        default=Config.MIN_YEAR,
        help='First year shown in the day-of-year overlay (default: first year in data)'
    )

    parser.add_argument(
        '--max-year',
        type=int,
        default=Config.MAX_YEAR,
        help='Last year shown in the day-of-year overlay (default: last year in data)'
    )

    parser.add_argument(
        '--output-dir',
        type=Path,
        default=Config.OUTPUT_DIR,
        help=f'Directory for rendered images (default: {Config.OUTPUT_DIR})'
    )

    parser.add_argument(
        '--opacity',
        type=float,
        default=Config.OVERLAY_OPACITY_PER_OCCURRENCE,
        help='Overlay opacity added per occurrence (default: %(default)s)'
    )

    parser.add_argument(
        '--show-config',
        action='store_true',
        help='Print the configuration summary before processing (default: False)'
    )

    parser.add_argument(
        '--width',
        type=int,
        default=Config.OVERLAY_WIDTH,
        help='Overlay width in pixels (default: %(default)s)'
    )

    return parser


def resolve_year_range(dates: List[NormalizedDate], min_year: Optional[int],
                       max_year: Optional[int]) -> Optional[YearRange]:
    """
    Fill missing bounds from the data.

    Returns None when no year can be selected: there is no data, or a single
    given bound lies past the other end of the data.
    """
    if not dates:
        return None
    years = [value.year for value in dates]
    low = min_year if min_year is not None else min(years)
    high = max_year if max_year is not None else max(years)
    if low > high:
        logger.info(f"Year bounds {low}-{high} select no years")
        return None
    return YearRange(low, high)


def display_results(metadata: Dict):
    """Display processing results"""
    print("\n" + "=" * 80)
    print("PROCESSING RESULTS")
    print("=" * 80)
    print(f"Input file: {metadata.get('input_file')}")
    print(f"Total rows: {metadata.get('total_rows', 0)}")
    print(f"Valid dates: {metadata.get('valid_dates', 0)}")
    print(f"Skipped rows: {metadata.get('skipped_rows', 0)}")
    print(f"Malformed lines: {metadata.get('malformed_lines', 0)}")
    for reason, count in sorted(metadata.get('skipped_by_reason', {}).items()):
        print(f"  {reason:20s} {count}")
    print(f"Processing time: {metadata.get('processing_time_seconds', 0):.2f} seconds")

    if metadata.get('shapes'):
        print("\nDate shapes accepted:")
        print("-" * 80)
        for shape, count in sorted(metadata['shapes'].items()):
            print(f"  {shape:20s} {count}")


def render_views(dates: List[NormalizedDate], views: List[str], output_dir: Path,
                 year_range: Optional[YearRange], opacity: float, width: int) -> Tuple[Dict[str, Optional[str]], List[str]]:
    """
    Render each requested view to a PNG file.

    A view that fails to render is logged and reported as None without
    stopping the others. A year_range of None means the overlay selects no
    dates.

    Returns:
        Tuple of (saved, failed)
        - saved: view name -> saved path (None when nothing was written)
        - failed: views that raised while rendering
    """
    saved: Dict[str, Optional[str]] = {}
    failed: List[str] = []

    for view in views:
        out_path = str(output_dir / f"{view}.png")
        try:
            if view == "calendar":
                _, _, saved[view] = plot_year_calendar(build_calendar_data(dates), out_path=out_path)

            elif view == "overlay":
                counts = build_overlay_counts(dates, year_range) if year_range is not None else {}
                if not counts:
                    print("No valid meeting dates found in selected year range.")
                    saved[view] = None
                    continue
                _, _, saved[view] = plot_day_of_year_overlay(
                    counts, out_path=out_path, width=width, opacity_per_occurrence=opacity
                )

            elif view == "bars":
                _, _, saved[view] = plot_bar_charts(build_bar_chart_data(dates), out_path=out_path)

        except Exception as e:
            logger.error(f"Error rendering {view} view: {e}", exc_info=True)
            print(f"\nError: Something went wrong rendering the {view} view: {e}")
            saved[view] = None
            failed.append(view)
            continue

        if saved[view]:
            print(f"Saved {view} view to: {saved[view]}")

    return saved, failed


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI"""
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format=Config.LOG_FORMAT,
        datefmt=Config.LOG_DATE_FORMAT
    )

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.min_year is not None and args.max_year is not None and args.min_year > args.max_year:
        parser.error("--min-year must not be greater than --max-year")

    if args.show_config:
        Config.print_config_summary()

    print("Loading meetings data...")
    try:
        dates, metadata = process_meetings_data(str(args.csv))
    except LoadFailure as e:
        logger.error(f"Error loading CSV: {e}")
        print(f"Error loading data: {e}")
        return 1

    display_results(metadata)

    views = list(VIEWS) if args.view == 'all' else [args.view]

    # Only the overlay is filtered by year
    year_range = None
    if "overlay" in views:
        year_range = resolve_year_range(dates, args.min_year, args.max_year)
        if year_range is not None:
            print(f"\nYear Range: {year_range.min} - {year_range.max}")

    args.output_dir.mkdir(parents=True, exist_ok=True)
    _, failed = render_views(dates, views, args.output_dir, year_range, args.opacity, args.width)

    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
