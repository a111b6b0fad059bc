"""
Layout geometry for the calendar heatmap and the day-of-year overlay.

Pure functions from aggregated tables to drawing primitives. Coordinates are
in pixels with the origin at the top-left corner and y growing downwards;
margins are already applied.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Mapping, Optional, Tuple

from meeting_calendar.config import Config
from meeting_calendar.models import FrequencyTable, NormalizedDate
from meeting_calendar.normalization.date_normalizer import days_in_year

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

STATS_OFFSET = 30


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str
    opacity: float = 1.0
    title: str = ""  # hover text


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str = Config.MONTH_LINE_COLOR
    stroke_width: float = 1.0


@dataclass(frozen=True)
class Label:
    x: float
    y: float
    text: str
    font_size: float = 10
    color: str = Config.MONTH_LABEL_COLOR
    anchor: str = "start"       # start, middle, end
    baseline: str = "baseline"  # baseline, middle
    bold: bool = False


@dataclass
class Layout:
    """Drawing primitives plus the canvas size they were laid out for"""
    width: float
    height: float
    rects: List[Rect] = field(default_factory=list)
    lines: List[Line] = field(default_factory=list)
    labels: List[Label] = field(default_factory=list)


def format_day_of_year(day_of_year: int) -> str:
    """Readable label for a 1-based day of year, e.g. 15 -> "Jan 15" (leap reference year)"""
    value = date(Config.REFERENCE_LEAP_YEAR, 1, 1) + timedelta(days=day_of_year - 1)
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.day:02d}"


def _month_axis(reference_year: int, left: float, top: float, cell_pitch: float,
                rows_height: float, first_letter_only: bool) -> Tuple[List[Line], List[Label]]:
    axis_top = top + Config.AXIS_OFFSET
    lines, labels = [], []
    for month in range(1, 13):
        x = left + NormalizedDate(reference_year, month, 1).day_index * cell_pitch
        lines.append(Line(x1=x, y1=axis_top + 15, x2=x, y2=axis_top + rows_height + 5))

        text = MONTH_ABBREVIATIONS[month - 1]
        labels.append(Label(
            x=x + 5,
            y=axis_top + 12,
            text=text[0].upper() if first_letter_only else text,
            bold=True,
        ))
    return lines, labels


def calendar_layout(color_maps: Mapping[int, Mapping[int, str]],
                    cell_width: float = Config.CALENDAR_CELL_WIDTH,
                    row_height: float = Config.CALENDAR_ROW_HEIGHT,
                    cell_spacing: float = Config.CALENDAR_CELL_SPACING,
                    row_spacing: float = Config.CALENDAR_ROW_SPACING,
                    margin: Optional[Dict[str, float]] = None,
                    default_color: str = Config.CALENDAR_DEFAULT_CELL_COLOR) -> Layout:
    """
    Lay out the year calendar: one row per year, one cell per day.

    Args:
        color_maps: Year -> 0-based day index -> colour
        cell_width: Width of a day cell
        row_height: Height of a year row; cells fill it
        cell_spacing: Horizontal gap between cells
        row_spacing: Vertical gap between rows
        margin: {top, right, bottom, left}
        default_color: Fill for days without a colour

    Returns:
        Layout sized for 366 cells and one row per year
    """
    margin = margin or Config.CALENDAR_MARGIN
    years = sorted(color_maps)

    cell_pitch = cell_width + cell_spacing
    row_pitch = row_height + row_spacing
    layout = Layout(
        width=Config.DAYS_IN_LEAP_YEAR * cell_pitch + margin["left"] + margin["right"],
        height=len(years) * row_pitch + margin["top"] + margin["bottom"],
    )
    if not years:
        return layout

    layout.lines, layout.labels = _month_axis(
        years[0], margin["left"], margin["top"], cell_pitch,
        len(years) * row_pitch, first_letter_only=True,
    )

    for row, year in enumerate(years):
        row_top = margin["top"] + row * row_pitch
        color_map = color_maps[year]

        layout.labels.append(Label(
            x=margin["left"] - 10,
            y=row_top + row_height / 2,
            text=str(year),
            font_size=14,
            anchor="end",
            baseline="middle",
            bold=True,
        ))

        first_day = date(year, 1, 1)
        for index in range(days_in_year(year)):
            color = color_map.get(index)
            annotated = color is not None and color != default_color
            title = (first_day + timedelta(days=index)).isoformat()
            if annotated:
                title = f"{title} - {color}"

            layout.rects.append(Rect(
                x=margin["left"] + index * cell_pitch,
                y=row_top,
                width=cell_width,
                height=row_height,
                fill=color if annotated else default_color,
                title=title,
            ))

    return layout


def overlay_cell_color(count: int,
                       opacity_per_occurrence: float = Config.OVERLAY_OPACITY_PER_OCCURRENCE) -> Tuple[str, float]:
    """
    Fill colour and opacity for an overlay cell.

    Each occurrence adds opacity_per_occurrence, capped at fully opaque.
    Days without occurrences get the plain background.
    """
    if count <= 0:
        return Config.OVERLAY_DEFAULT_CELL_COLOR, 1.0
    return Config.OVERLAY_OCCURRENCE_COLOR, min(count * opacity_per_occurrence, 1.0)


def overlay_stats(day_counts: FrequencyTable) -> Dict[str, int]:
    """Summary numbers shown under the overlay"""
    populated = [count for count in day_counts.values() if count > 0]
    return {
        'total_occurrences': sum(populated),
        'unique_days': len(populated),
        'max_occurrences': max(populated) if populated else 0,
    }


def overlay_layout(day_counts: FrequencyTable,
                   width: float = Config.OVERLAY_WIDTH,
                   row_height: float = Config.OVERLAY_ROW_HEIGHT,
                   cell_spacing: float = Config.OVERLAY_CELL_SPACING,
                   opacity_per_occurrence: float = Config.OVERLAY_OPACITY_PER_OCCURRENCE,
                   margin: Optional[Dict[str, float]] = None) -> Layout:
    """
    Lay out the day-of-year overlay: a single row of 366 cells stretched to width.

    Args:
        day_counts: 1-based day of year -> occurrences (sparse or dense)
        width: Total canvas width; cells share what the margins leave
        row_height: Height of the row
        cell_spacing: Horizontal gap between cells
        opacity_per_occurrence: Opacity added per occurrence
        margin: {top, right, bottom, left}

    Returns:
        Layout with the cells, month axis and a statistics line
    """
    margin = margin or Config.OVERLAY_MARGIN
    days = Config.DAYS_IN_LEAP_YEAR

    available_width = width - margin["left"] - margin["right"]
    cell_width = (available_width - (days - 1) * cell_spacing) / days
    cell_pitch = cell_width + cell_spacing

    layout = Layout(
        width=width,
        height=row_height + margin["top"] + margin["bottom"] + STATS_OFFSET,
    )
    layout.lines, layout.labels = _month_axis(
        Config.REFERENCE_LEAP_YEAR, margin["left"], margin["top"], cell_pitch,
        row_height, first_letter_only=False,
    )

    for day_of_year in range(1, days + 1):
        count = day_counts.get(day_of_year, 0)
        fill, opacity = overlay_cell_color(count, opacity_per_occurrence)
        occurrences = f"Occurrences: {count}" if count > 0 else "No occurrences"

        layout.rects.append(Rect(
            x=margin["left"] + (day_of_year - 1) * cell_pitch,
            y=margin["top"],
            width=cell_width,
            height=row_height,
            fill=fill,
            opacity=opacity,
            title=f"{format_day_of_year(day_of_year)} (Day {day_of_year})\n{occurrences}",
        ))

    stats = overlay_stats(day_counts)
    layout.labels.append(Label(
        x=margin["left"],
        y=margin["top"] + row_height + STATS_OFFSET,
        text=(f"Total occurrences: {stats['total_occurrences']} | "
              f"Unique days: {stats['unique_days']}/{days} | "
              f"Max occurrences for a single day: {stats['max_occurrences']}"),
        font_size=12,
    ))

    return layout
