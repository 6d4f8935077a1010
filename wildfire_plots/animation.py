"""
Time-animated FIRMS maps.

Two renderings of how detections accumulate day by day: an interactive folium
map with a time slider (TimestampedGeoJson) and a GIF drawn frame by frame
with matplotlib.
"""

from pathlib import Path
from typing import List, Optional

import folium
import matplotlib.pyplot as plt
import polars as pl
from folium.plugins import TimestampedGeoJson
from matplotlib.animation import FuncAnimation, PillowWriter

from wildfire_data.utils import (
    CONFIDENCE_LEVELS,
    DetectionTable,
    check_coordinates,
    prepare_detections,
)

from .maps import create_base_map
from .styles import CONFIDENCE_COLORS, FILL_OPACITY, MARKER_RADIUS

BOUNDS_PADDING_DEG = 0.5


def build_timeline_features(table: DetectionTable) -> List[dict]:
    """
    Convert detections into GeoJSON point features carrying a 'time' property.

    Args:
        table: Point detections with acq_date and confidence

    Returns:
        list: GeoJSON features ordered by acquisition date
    """
    df = prepare_detections(table)
    if df.is_empty():
        return []
    df = check_coordinates(df).sort("acq_date", maintain_order=True)

    features = []
    for row in df.iter_rows(named=True):
        color = CONFIDENCE_COLORS[row["confidence"]]
        features.append(
            {
                "type": "Feature",
                "geometry": {
                    "type": "Point",
                    "coordinates": [
                        float(row["longitude"]),
                        float(row["latitude"]),
                    ],  # [lon, lat] per GeoJSON spec
                },
                "properties": {
                    "time": row["acq_date"].isoformat(),
                    "popup": f"{row['acq_date']} - {row['confidence']} confidence",
                    "icon": "circle",
                    "iconstyle": {
                        "fillColor": color,
                        "color": color,
                        "fillOpacity": FILL_OPACITY,
                        "stroke": "true",
                        "radius": MARKER_RADIUS,
                    },
                },
            }
        )

    return features


def create_timeline_map(
    table: DetectionTable, output_path: Optional[str] = None, period: str = "P1D"
) -> folium.Map:
    """
    Create an interactive map whose time slider steps through acquisition dates.

    Args:
        table: Point detections
        output_path: Path to save the HTML map
        period: ISO 8601 step between slider positions
    """
    print("Creating timeline map...")
    features = build_timeline_features(table)
    if not features:
        raise ValueError("No detections to animate")

    df = prepare_detections(table)
    m = create_base_map(
        df["latitude"].min(),
        df["longitude"].min(),
        df["latitude"].max(),
        df["longitude"].max(),
    )

    TimestampedGeoJson(
        {"type": "FeatureCollection", "features": features},
        period=period,
        add_last_point=False,
        auto_play=False,
        loop=False,
        date_options="YYYY-MM-DD",
    ).add_to(m)

    if output_path:
        print(f"Saving timeline map to: {output_path}")
        m.save(output_path)

    return m


def animate_detections(table: DetectionTable, output_path, fps: int = 2) -> Path:
    """
    Render a GIF with one frame per acquisition date, showing all detections
    up to that date coloured by confidence.

    Args:
        table: Point detections
        output_path: Destination .gif path
        fps: Frames per second

    Returns:
        Path: The written GIF
    """
    df = prepare_detections(table)
    if df.is_empty():
        raise ValueError("No detections to animate")
    check_coordinates(df)

    dates = df["acq_date"].unique().sort().to_list()
    min_lat, max_lat = df["latitude"].min(), df["latitude"].max()
    min_lon, max_lon = df["longitude"].min(), df["longitude"].max()

    fig, ax = plt.subplots(figsize=(8, 8))

    def draw_frame(frame_index):
        current_date = dates[frame_index]
        visible = df.filter(pl.col("acq_date") <= current_date)

        ax.clear()
        for level in CONFIDENCE_LEVELS:
            points = visible.filter(pl.col("confidence") == level)
            ax.scatter(
                points["longitude"].to_numpy(),
                points["latitude"].to_numpy(),
                s=12,
                color=CONFIDENCE_COLORS[level],
                alpha=FILL_OPACITY,
                label=level.capitalize(),
            )
        ax.set_xlim(min_lon - BOUNDS_PADDING_DEG, max_lon + BOUNDS_PADDING_DEG)
        ax.set_ylim(min_lat - BOUNDS_PADDING_DEG, max_lat + BOUNDS_PADDING_DEG)
        ax.set_xlabel("Longitude")
        ax.set_ylabel("Latitude")
        ax.set_title(f"Fire Detections through {current_date} ({len(visible)} total)")
        ax.legend(title="Confidence", loc="upper right")

    animation = FuncAnimation(fig, draw_frame, frames=len(dates), repeat=False)

    path = Path(output_path)
    print(f"Rendering {len(dates)} frames to: {path}")
    animation.save(path, writer=PillowWriter(fps=fps))
    plt.close(fig)

    return path
