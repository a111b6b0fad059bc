"""
Tests for the command line entry point.
"""

import matplotlib

matplotlib.use("Agg")

import pytest
from meeting_calendar import cli
from meeting_calendar.models import NormalizedDate, YearRange


DATES = ["02/06/1671", "01/01/70", "??/03/1671", "29/02/1672", "15/08/1690"]


class TestMain:

    def test_renders_all_views(self, write_csv, tmp_path, capsys):
        output_dir = tmp_path / "out"
        exit_code = cli.main(["--csv", str(write_csv(DATES)), "--output-dir", str(output_dir)])

        assert exit_code == 0
        for view in cli.VIEWS:
            assert (output_dir / f"{view}.png").exists()

        captured = capsys.readouterr().out
        assert "Total rows: 5" in captured
        assert "Valid dates: 4" in captured
        assert "Year Range: 1670 - 1690" in captured

    def test_single_view(self, write_csv, tmp_path):
        output_dir = tmp_path / "out"
        exit_code = cli.main([
            "--csv", str(write_csv(DATES)), "--output-dir", str(output_dir), "--view", "bars",
        ])
        assert exit_code == 0
        assert (output_dir / "bars.png").exists()
        assert not (output_dir / "calendar.png").exists()

    def test_empty_year_range(self, write_csv, tmp_path, capsys):
        output_dir = tmp_path / "out"
        exit_code = cli.main([
            "--csv", str(write_csv(DATES)), "--output-dir", str(output_dir),
            "--view", "overlay", "--min-year", "1800", "--max-year", "1850",
        ])
        assert exit_code == 0
        assert "No valid meeting dates found in selected year range." in capsys.readouterr().out
        assert not (output_dir / "overlay.png").exists()

    def test_min_year_past_data(self, write_csv, tmp_path, capsys):
        """A bound past the data empties the overlay but leaves the other views alone"""
        output_dir = tmp_path / "out"
        exit_code = cli.main([
            "--csv", str(write_csv(DATES)), "--output-dir", str(output_dir), "--min-year", "1700",
        ])

        assert exit_code == 0
        assert "No valid meeting dates found in selected year range." in capsys.readouterr().out
        assert (output_dir / "calendar.png").exists()
        assert (output_dir / "bars.png").exists()
        assert not (output_dir / "overlay.png").exists()

    def test_year_bounds_ignored_without_overlay(self, write_csv, tmp_path, capsys):
        output_dir = tmp_path / "out"
        exit_code = cli.main([
            "--csv", str(write_csv(DATES)), "--output-dir", str(output_dir),
            "--view", "bars", "--min-year", "1700",
        ])

        assert exit_code == 0
        assert (output_dir / "bars.png").exists()
        assert "Year Range" not in capsys.readouterr().out

    def test_load_failure(self, tmp_path, capsys):
        exit_code = cli.main(["--csv", str(tmp_path / "missing.csv"), "--output-dir", str(tmp_path)])
        assert exit_code == 1
        assert "Error loading data:" in capsys.readouterr().out

    def test_inverted_year_range(self, write_csv):
        with pytest.raises(SystemExit):
            cli.main(["--csv", str(write_csv(DATES)), "--min-year", "1690", "--max-year", "1670"])

    def test_render_failure_is_isolated(self, write_csv, tmp_path, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(cli, "plot_year_calendar", broken)
        output_dir = tmp_path / "out"
        exit_code = cli.main(["--csv", str(write_csv(DATES)), "--output-dir", str(output_dir)])

        assert exit_code == 1
        assert (output_dir / "overlay.png").exists()
        assert (output_dir / "bars.png").exists()


class TestResolveYearRange:

    @pytest.fixture
    def dates(self):
        return [NormalizedDate(1670, 1, 1), NormalizedDate(1690, 8, 15)]

    def test_defaults_from_data(self, dates):
        assert cli.resolve_year_range(dates, None, None) == YearRange(1670, 1690)

    def test_partial_bounds(self, dates):
        assert cli.resolve_year_range(dates, 1680, None) == YearRange(1680, 1690)

    def test_no_data(self):
        assert cli.resolve_year_range([], 1670, 1680) is None

    @pytest.mark.parametrize("min_year,max_year", [(1700, None), (None, 1600)])
    def test_bound_past_data_selects_nothing(self, dates, min_year, max_year):
        assert cli.resolve_year_range(dates, min_year, max_year) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
