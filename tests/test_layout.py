"""
Tests for the calendar and overlay layout geometry.
"""

import pytest
from meeting_calendar.rendering.layout import (
    calendar_layout,
    format_day_of_year,
    overlay_cell_color,
    overlay_layout,
    overlay_stats,
)

MARGIN = {"top": 40, "right": 20, "bottom": 20, "left": 60}


class TestCalendarLayout:
    """One row per year, one cell per day"""

    @pytest.fixture
    def color_maps(self):
        return {
            1672: {0: "#ff0000", 59: "#ff0000"},
            1671: {153: "#ff0000"},
        }

    def test_canvas_size(self, color_maps):
        layout = calendar_layout(color_maps, cell_width=2, row_height=30, cell_spacing=2,
                                 row_spacing=10, margin=MARGIN)
        assert layout.width == 366 * 4 + 60 + 20
        assert layout.height == 2 * 40 + 40 + 20

    def test_cells_per_year(self, color_maps):
        layout = calendar_layout(color_maps, margin=MARGIN)
        assert len(layout.rects) == 365 + 366

    def test_rows_sorted_by_year(self, color_maps):
        layout = calendar_layout(color_maps, margin=MARGIN)
        year_labels = [label for label in layout.labels if label.anchor == "end"]
        assert [label.text for label in year_labels] == ["1671", "1672"]
        assert all(label.x == 50 for label in year_labels)

    def test_cell_positions_and_titles(self, color_maps):
        layout = calendar_layout(color_maps, cell_width=2, row_height=30, cell_spacing=2,
                                 row_spacing=10, margin=MARGIN, default_color="#eeeeee")
        first_1672 = layout.rects[365]
        assert first_1672.x == 60
        assert first_1672.y == 40 + 40
        assert first_1672.fill == "#ff0000"
        assert first_1672.title == "1672-01-01 - #ff0000"

        plain = layout.rects[1]
        assert plain.fill == "#eeeeee"
        assert plain.title == "1671-01-02"
        assert plain.x == 60 + 4

    def test_default_color_is_not_annotated(self):
        layout = calendar_layout({1671: {0: "#eeeeee"}}, default_color="#eeeeee")
        assert layout.rects[0].title == "1671-01-01"

    def test_month_axis(self, color_maps):
        layout = calendar_layout(color_maps, cell_width=2, cell_spacing=2, margin=MARGIN)
        assert len(layout.lines) == 12
        month_labels = [label.text for label in layout.labels if label.anchor == "start"]
        assert month_labels == list("JFMAMJJASOND")
        # March starts after Jan and Feb of the first (non-leap) year shown
        assert layout.lines[2].x1 == 60 + 59 * 4

    def test_empty(self):
        layout = calendar_layout({}, margin=MARGIN)
        assert layout.rects == []
        assert layout.height == 60


class TestOverlayLayout:
    """A single row of 366 cells"""

    def test_cells_fill_available_width(self):
        margin = {"top": 40, "right": 20, "bottom": 20, "left": 80}
        layout = overlay_layout({}, width=1200, row_height=80, cell_spacing=0, margin=margin)
        assert len(layout.rects) == 366
        cell_width = (1200 - 100) / 366
        assert layout.rects[0].width == pytest.approx(cell_width)
        assert layout.rects[-1].x + layout.rects[-1].width == pytest.approx(1200 - 20)
        assert layout.height == 80 + 40 + 20 + 30

    def test_opacity_and_titles(self):
        layout = overlay_layout({15: 3, 60: 40}, opacity_per_occurrence=0.05)
        jan_15 = layout.rects[14]
        assert jan_15.fill == "#ff0000"
        assert jan_15.opacity == pytest.approx(0.15)
        assert jan_15.title == "Jan 15 (Day 15)\nOccurrences: 3"

        feb_29 = layout.rects[59]
        assert feb_29.opacity == 1.0
        assert feb_29.title.startswith("Feb 29 (Day 60)")

        empty = layout.rects[0]
        assert empty.fill == "#ffffff"
        assert empty.title == "Jan 01 (Day 1)\nNo occurrences"

    def test_stats_label(self):
        layout = overlay_layout({15: 3, 60: 40, 100: 0})
        assert layout.labels[-1].text == (
            "Total occurrences: 43 | Unique days: 2/366 | Max occurrences for a single day: 40"
        )

    def test_full_month_labels(self):
        layout = overlay_layout({})
        assert [label.text for label in layout.labels[:12]] == [
            "Jan", "Feb", "Mar", "Apr", "May", "Jun",
            "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
        ]


class TestOverlayHelpers:

    @pytest.mark.parametrize("count,expected", [
        (0, ("#ffffff", 1.0)),
        (1, ("#ff0000", 0.05)),
        (20, ("#ff0000", 1.0)),
        (50, ("#ff0000", 1.0)),
    ])
    def test_cell_color(self, count, expected):
        fill, opacity = overlay_cell_color(count, 0.05)
        assert fill == expected[0]
        assert opacity == pytest.approx(expected[1])

    def test_stats_empty(self):
        assert overlay_stats({}) == {'total_occurrences': 0, 'unique_days': 0, 'max_occurrences': 0}

    @pytest.mark.parametrize("day,expected", [
        (1, "Jan 01"), (15, "Jan 15"), (60, "Feb 29"), (61, "Mar 01"), (366, "Dec 31"),
    ])
    def test_format_day_of_year(self, day, expected):
        assert format_day_of_year(day) == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
