"""
Static FIRMS charts.

Line and bar charts of daily detection counts, stacked confidence bars and a
static point map, drawn with matplotlib. Every function returns the Figure
and writes a PNG when given an output path.
"""

from typing import Optional

import geopandas as gpd
import matplotlib.pyplot as plt
import polars as pl

from wildfire_data.utils import CONFIDENCE_LEVELS, prepare_detections

from .styles import CONFIDENCE_COLORS, FILL_OPACITY

FIGSIZE = (10, 5)
DPI = 150


def _save(fig: plt.Figure, output_path: Optional[str]) -> None:
    if output_path:
        print(f"Saving chart to: {output_path}")
        fig.savefig(output_path, dpi=DPI, bbox_inches="tight")


def plot_daily_counts(
    counts: pl.DataFrame, kind: str = "line", output_path: Optional[str] = None
) -> plt.Figure:
    """
    Plot detections per day.

    Args:
        counts: Output of count_by_date (acq_date, count)
        kind: "line" or "bar"
        output_path: Optional PNG path

    Returns:
        plt.Figure: The chart
    """
    if kind not in ("line", "bar"):
        raise ValueError(f"Unsupported chart kind: {kind}. Available kinds: line, bar")

    dates = counts["acq_date"].to_list()
    values = counts["count"].to_list()

    fig, ax = plt.subplots(figsize=FIGSIZE)
    if kind == "line":
        ax.plot(dates, values, marker="o", color=CONFIDENCE_COLORS["high"])
    else:
        ax.bar(dates, values, color=CONFIDENCE_COLORS["high"])

    ax.set_title("Daily Fire Detections")
    ax.set_xlabel("Acquisition date")
    ax.set_ylabel("Detections")
    ax.grid(True, alpha=0.3)
    fig.autofmt_xdate()

    _save(fig, output_path)
    return fig


def plot_confidence_counts(
    counts: pl.DataFrame, output_path: Optional[str] = None
) -> plt.Figure:
    """
    Stacked bar chart of detections per day split by confidence.

    Args:
        counts: Output of pivot_confidence_counts (acq_date, low, medium, high)
        output_path: Optional PNG path
    """
    dates = counts["acq_date"].to_list()

    fig, ax = plt.subplots(figsize=FIGSIZE)
    bottom = [0] * len(dates)
    for level in CONFIDENCE_LEVELS:
        values = counts[level].to_list()
        ax.bar(
            dates,
            values,
            bottom=bottom,
            label=level.capitalize(),
            color=CONFIDENCE_COLORS[level],
        )
        bottom = [b + v for b, v in zip(bottom, values)]

    ax.set_title("Daily Fire Detections by Confidence")
    ax.set_xlabel("Acquisition date")
    ax.set_ylabel("Detections")
    ax.legend(title="Confidence")
    fig.autofmt_xdate()

    _save(fig, output_path)
    return fig


def plot_detection_points(
    gdf: gpd.GeoDataFrame, output_path: Optional[str] = None
) -> plt.Figure:
    """
    Static map of detection points coloured by confidence.

    Args:
        gdf: Point detections from a loader
        output_path: Optional PNG path
    """
    df = prepare_detections(gdf)

    fig, ax = plt.subplots(figsize=(8, 8))
    for level in CONFIDENCE_LEVELS:
        mask = (df["confidence"] == level).to_numpy()
        if not mask.any():
            continue
        gdf[mask].plot(
            ax=ax,
            color=CONFIDENCE_COLORS[level],
            markersize=12,
            alpha=FILL_OPACITY,
            label=level.capitalize(),
        )

    ax.set_title("Fire Detections")
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    if ax.get_legend_handles_labels()[0]:
        ax.legend(title="Confidence")

    _save(fig, output_path)
    return fig
