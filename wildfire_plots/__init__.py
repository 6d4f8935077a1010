"""
FIRMS Plots Package

Static charts, interactive maps and time animations of FIRMS fire detections.
"""

from .animation import animate_detections, build_timeline_features, create_timeline_map
from .charts import plot_confidence_counts, plot_daily_counts, plot_detection_points
from .maps import create_detection_map, create_footprint_map, create_heatmap

__all__ = [
    "animate_detections",
    "build_timeline_features",
    "create_timeline_map",
    "plot_confidence_counts",
    "plot_daily_counts",
    "plot_detection_points",
    "create_detection_map",
    "create_footprint_map",
    "create_heatmap",
]
