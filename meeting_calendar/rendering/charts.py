from __future__ import annotations
import os
from typing import Dict, Mapping, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection, PatchCollection
from matplotlib.colors import to_rgba
from matplotlib.patches import Rectangle

from meeting_calendar.config import Config
from meeting_calendar.models import FrequencyTable
from meeting_calendar.rendering.layout import (
    MONTH_ABBREVIATIONS,
    Layout,
    calendar_layout,
    overlay_layout,
)

_ANCHORS = {"start": "left", "middle": "center", "end": "right"}
_BASELINES = {"baseline": "baseline", "middle": "center"}


def _ensure_dir(p: Optional[str]) -> None:
    if p:
        d = os.path.dirname(p)
        if d and not os.path.exists(d):
            os.makedirs(d, exist_ok=True)


def _save_or_close(fig: plt.Figure, out_path: Optional[str], show: bool, **savefig_kwargs) -> Optional[str]:
    saved = None
    if out_path:
        _ensure_dir(out_path)
        fig.savefig(out_path, **savefig_kwargs)
        saved = out_path

    if show:
        plt.show()
    else:
        plt.close(fig)
    return saved


def plot_layout(
    layout: Layout,
    out_path: Optional[str] = None,
    show: bool = False,
    *,
    dpi: int = Config.FIGURE_DPI,
) -> Tuple[plt.Figure, plt.Axes, Optional[str]]:
    """
    Draw a pixel Layout 1:1 onto a figure of the same size.

    Rects go into one PatchCollection and lines into one LineCollection;
    label font sizes are given in pixels and converted to points.
    """
    fig = plt.figure(figsize=(layout.width / dpi, layout.height / dpi), dpi=dpi)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, layout.width)
    ax.set_ylim(layout.height, 0)  # y grows downwards
    ax.axis("off")

    if layout.rects:
        patches = [Rectangle((r.x, r.y), r.width, r.height) for r in layout.rects]
        colors = [to_rgba(r.fill, r.opacity) for r in layout.rects]
        ax.add_collection(PatchCollection(patches, facecolors=colors, edgecolors="none", linewidths=0))

    if layout.lines:
        segments = [[(line.x1, line.y1), (line.x2, line.y2)] for line in layout.lines]
        ax.add_collection(LineCollection(
            segments,
            colors=[line.stroke for line in layout.lines],
            linewidths=[line.stroke_width for line in layout.lines],
        ))

    px_to_pt = 72.0 / dpi
    for label in layout.labels:
        ax.text(
            label.x, label.y, label.text,
            fontsize=label.font_size * px_to_pt,
            color=label.color,
            ha=_ANCHORS.get(label.anchor, "left"),
            va=_BASELINES.get(label.baseline, "baseline"),
            fontweight="bold" if label.bold else "normal",
        )

    saved = _save_or_close(fig, out_path, show, dpi=dpi)
    return fig, ax, saved


def plot_year_calendar(
    color_maps: Mapping[int, Mapping[int, str]],
    out_path: Optional[str] = None,
    show: bool = False,
    **layout_kwargs,
) -> Tuple[plt.Figure, plt.Axes, Optional[str]]:
    """Year calendar heatmap: years as rows, days as cells."""
    return plot_layout(calendar_layout(color_maps, **layout_kwargs), out_path=out_path, show=show)


def plot_day_of_year_overlay(
    day_counts: FrequencyTable,
    out_path: Optional[str] = None,
    show: bool = False,
    **layout_kwargs,
) -> Tuple[plt.Figure, plt.Axes, Optional[str]]:
    """Day-of-year overlay: one row of 366 cells, opacity by frequency."""
    return plot_layout(overlay_layout(day_counts, **layout_kwargs), out_path=out_path, show=show)


def _style_bar_axes(ax: plt.Axes, title: str, xlabel: str) -> None:
    ax.set_title(title, fontsize=16, fontweight="bold")
    ax.set_xlabel(xlabel, fontsize=14)
    ax.set_ylabel("Meeting Count", fontsize=14)
    ax.spines[["top", "right"]].set_visible(False)


def plot_bar_charts(
    chart_data: Dict[str, FrequencyTable],
    out_path: Optional[str] = None,
    show: bool = False,
    *,
    year_label_every: int = Config.YEAR_LABEL_EVERY,
    color: str = Config.BAR_COLOR,
) -> Tuple[plt.Figure, Tuple[plt.Axes, plt.Axes, plt.Axes], Optional[str]]:
    """
    Three stacked bar charts:
      1. meetings by year (every year from first to last, every Nth labelled)
      2. meetings by month (Jan..Dec)
      3. meetings by day of year (1..366)

    chart_data: {'year': {...}, 'month': {...}, 'day_of_year': {...}}
    """
    required = {"year", "month", "day_of_year"}
    missing = required - set(chart_data)
    if missing:
        raise ValueError(f"chart_data is missing tables: {missing}")

    width_in = Config.BAR_CHART_WIDTH / Config.FIGURE_DPI
    height_in = Config.BAR_CHART_HEIGHT / Config.FIGURE_DPI
    fig, (ax_year, ax_month, ax_day) = plt.subplots(3, 1, figsize=(width_in, 3 * height_in))

    # Year
    years = sorted(chart_data["year"])
    ax_year.bar(range(len(years)), [chart_data["year"][y] for y in years], width=0.9, color=color)
    ticks = list(range(0, len(years), max(1, year_label_every)))
    ax_year.set_xticks(ticks)
    ax_year.set_xticklabels([str(years[i]) for i in ticks], rotation=45, ha="right")
    if not years:
        ax_year.text(0.5, 0.5, "No data", ha="center", va="center", transform=ax_year.transAxes)
    _style_bar_axes(ax_year, "Meetings by Year", "Year")

    # Month
    months = sorted(chart_data["month"])
    ax_month.bar(
        [MONTH_ABBREVIATIONS[m - 1] for m in months],
        [chart_data["month"][m] for m in months],
        width=0.8, color=color,
    )
    _style_bar_axes(ax_month, "Meetings by Month", "Month")

    # Day of year
    days = sorted(chart_data["day_of_year"])
    ax_day.bar(days, [chart_data["day_of_year"][d] for d in days], width=1.0, color=color)
    ax_day.set_xlim(1 - 0.5, Config.DAYS_IN_LEAP_YEAR + 0.5)
    ax_day.locator_params(axis="x", nbins=12)
    _style_bar_axes(ax_day, "Meetings by Day of Year", "Day of Year")

    fig.tight_layout()
    saved = _save_or_close(fig, out_path, show, dpi=Config.FIGURE_DPI, bbox_inches="tight")
    return fig, (ax_year, ax_month, ax_day), saved
