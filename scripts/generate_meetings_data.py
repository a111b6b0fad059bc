#!/usr/bin/env python3
"""
Generate messy meeting records for testing.

This script creates a CSV file with the date shapes found in the real records:
- Clean day-first dates (DD/MM/YYYY)
- Two-digit years that mean the 1600s (DD/MM/YY)
- Missing separators between month and year (DD/MMYYYY)
- Unknown dates with placeholders ("??/03/1671"), blanks and impossible days

Usage:
    python scripts/generate_meetings_data.py [num_meetings]

Output:
    data/meetings.csv (3 columns: Date, Place, Notes)
"""

import csv
import random
import sys
from collections import Counter
from datetime import date, timedelta
from pathlib import Path
from typing import Dict, List, Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from meeting_calendar.config import Config


class MeetingDataGenerator:
    """Generates intentionally messy meeting records for testing"""

    PLACES = ["Kirkwall", "Stromness", "St Magnus", "Birsay", "Orphir", "Deerness"]
    NOTES = ["", "session", "presbytery", "minutes damaged", "adjourned"]

    FIRST_DAY = date(1660, 1, 1)
    LAST_DAY = date(1699, 12, 31)

    # Shape -> weight
    SHAPES = {
        "general": 0.70,
        "short_year": 0.10,
        "run_together": 0.08,
        "placeholder": 0.05,
        "blank": 0.03,
        "impossible": 0.04,
    }

    IMPOSSIBLE_DATES = ["31/02/1671", "29/02/1673", "00/05/1680", "12/13/1665", "32/01/1690"]

    def __init__(self, num_meetings: Optional[int] = None, output_path: Optional[Path] = None,
                 seed: Optional[int] = None):
        """
        Initialize generator
        Args:
            num_meetings: Number of rows to generate
            output_path: Where to write the CSV (default: Config.MEETINGS_CSV)
            seed: Seed for reproducible output
        """
        self.num_meetings = num_meetings if num_meetings else 500
        self.output_path = Path(output_path) if output_path else Config.MEETINGS_CSV
        self.random = random.Random(seed)

    def generate_random_day(self) -> date:
        """Random day between FIRST_DAY and LAST_DAY"""
        span = (self.LAST_DAY - self.FIRST_DAY).days
        return self.FIRST_DAY + timedelta(days=self.random.randint(0, span))

    def generate_date_value(self, shape: str) -> str:
        """Render a date in the given shape"""
        day = self.generate_random_day()

        if shape == "short_year":
            return f"{day.day:02d}/{day.month:02d}/{day.year % 100:02d}"
        if shape == "run_together":
            return f"{day.day:02d}/{day.month:02d}{day.year:04d}"
        if shape == "placeholder":
            return self.random.choice([
                f"??/{day.month:02d}/{day.year}",
                f"{day.day:02d}/?/{day.year}",
                f"{day.day:02d}/{day.month:02d}/16??",
            ])
        if shape == "blank":
            return self.random.choice(["", "   "])
        if shape == "impossible":
            return self.random.choice(self.IMPOSSIBLE_DATES)

        value = f"{day.day:02d}/{day.month:02d}/{day.year}"
        # Add extra spaces now and then
        if self.random.random() < 0.1:
            return f" {value} "
        return value

    def generate_meeting(self) -> Dict[str, str]:
        """Generate one meeting row, tagged with the shape used"""
        shape = self.random.choices(list(self.SHAPES), weights=list(self.SHAPES.values()))[0]
        return {
            "Date": self.generate_date_value(shape),
            "Place": self.random.choice(self.PLACES),
            "Notes": self.random.choice(self.NOTES),
            "_shape": shape,
        }

    def generate_csv(self) -> Path:
        """
        Generate the messy meetings CSV.

        Returns:
            Path of the written CSV
        """
        print(f"Generating {self.num_meetings} messy meeting records...")

        meetings = [self.generate_meeting() for _ in range(self.num_meetings)]

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=["Date", "Place", "Notes"], extrasaction="ignore")
            writer.writeheader()
            writer.writerows(meetings)

        print(f"   Generated meetings data: {self.output_path}")
        print(f"   Total meetings: {self.num_meetings}")
        print(f"   File size: {self.output_path.stat().st_size:,} bytes")

        self._print_statistics(meetings)
        return self.output_path

    def _print_statistics(self, meetings: List[Dict[str, str]]):
        """Print statistics about generated data"""
        print("\nData Statistics:")

        shape_counts = Counter(meeting["_shape"] for meeting in meetings)
        for shape, count in sorted(shape_counts.items(), key=lambda x: x[1], reverse=True):
            percentage = (count / len(meetings)) * 100
            print(f"   {shape:15s} {count:4d} ({percentage:5.1f}%)")


def main():
    """Main entry point"""
    print("=" * 70)
    print("Messy Meeting Data Generator")
    print("=" * 70)

    num_meetings = int(sys.argv[1]) if len(sys.argv) > 1 else None
    generator = MeetingDataGenerator(num_meetings=num_meetings)
    csv_path = generator.generate_csv()

    print("\n" + "=" * 70)
    print(f"  Success! Generated data: {csv_path}")
    print("   Columns: Date, Place, Notes")
    print("=" * 70)

    return 0


if __name__ == "__main__":
    sys.exit(main())
