"""
Tests for the sample data generator script.
"""

import sys
from pathlib import Path

import pandas as pd
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from generate_meetings_data import MeetingDataGenerator
from meeting_calendar.pipeline.meeting_pipeline import process_meetings_data


class TestMeetingDataGenerator:

    def test_writes_csv(self, tmp_path):
        out_path = tmp_path / "meetings.csv"
        generator = MeetingDataGenerator(num_meetings=200, output_path=out_path, seed=42)

        assert generator.generate_csv() == out_path
        df = pd.read_csv(out_path, dtype=str, keep_default_na=False)
        assert list(df.columns) == ["Date", "Place", "Notes"]
        assert len(df) == 200

    def test_seed_is_reproducible(self, tmp_path):
        first = MeetingDataGenerator(50, tmp_path / "a.csv", seed=7).generate_csv()
        second = MeetingDataGenerator(50, tmp_path / "b.csv", seed=7).generate_csv()
        assert first.read_text() == second.read_text()

    @pytest.mark.parametrize("shape", ["general", "short_year", "run_together"])
    def test_accepted_shapes_normalize(self, shape):
        from meeting_calendar.normalization.date_normalizer import normalize

        generator = MeetingDataGenerator(seed=1)
        for _ in range(50):
            result = normalize(generator.generate_date_value(shape))
            assert result.ok
            assert 1660 <= result.date.year <= 1699

    def test_pipeline_accounts_for_every_row(self, tmp_path):
        out_path = MeetingDataGenerator(300, tmp_path / "meetings.csv", seed=3).generate_csv()
        dates, metadata = process_meetings_data(str(out_path))

        assert metadata['total_rows'] == 300
        assert metadata['valid_dates'] + metadata['skipped_rows'] == 300
        assert metadata['skipped_rows'] > 0
        assert len(dates) == metadata['valid_dates']


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
