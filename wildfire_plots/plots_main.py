#!/usr/bin/env python3
"""
FIRMS Detection Visualization

Creates charts and maps from a NASA FIRMS detection file. Point detections
(CSV, shapefile) get daily charts, a static map, an interactive point map,
a heatmap, a timeline map and a GIF animation. Footprint polygons (KML/KMZ)
get a polygon overlay map.

Usage:
    python -m wildfire_plots.plots_main --input data/fire_nrt.csv
    python -m wildfire_plots.plots_main --input data/firms.kmz --output plots/
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, Optional

import geopandas as gpd
import matplotlib.pyplot as plt

from wildfire_data.aggregation import (
    count_by_date,
    get_detection_summary,
    pivot_confidence_counts,
)
from wildfire_data.firms import load_detections
from wildfire_plots.animation import animate_detections, create_timeline_map
from wildfire_plots.charts import (
    plot_confidence_counts,
    plot_daily_counts,
    plot_detection_points,
)
from wildfire_plots.maps import (
    create_detection_map,
    create_footprint_map,
    create_heatmap,
)


def render_points(gdf: gpd.GeoDataFrame, output_dir: Path) -> Dict[str, Path]:
    """Render every chart and map for point detections."""
    outputs = {}

    daily_counts = count_by_date(gdf)
    for kind in ("line", "bar"):
        path = output_dir / f"daily_counts_{kind}.png"
        plt.close(plot_daily_counts(daily_counts, kind=kind, output_path=str(path)))
        outputs[f"daily_{kind}"] = path

    path = output_dir / "daily_confidence_counts.png"
    plt.close(plot_confidence_counts(pivot_confidence_counts(gdf), output_path=str(path)))
    outputs["confidence_bars"] = path

    path = output_dir / "detections_static.png"
    plt.close(plot_detection_points(gdf, output_path=str(path)))
    outputs["static_map"] = path

    path = output_dir / "detections_map.html"
    create_detection_map(gdf, output_path=str(path))
    outputs["point_map"] = path

    path = output_dir / "detections_heatmap.html"
    create_heatmap(gdf, output_path=str(path))
    outputs["heatmap"] = path

    path = output_dir / "detections_timeline.html"
    create_timeline_map(gdf, output_path=str(path))
    outputs["timeline_map"] = path

    outputs["animation"] = animate_detections(gdf, output_dir / "detections.gif")

    return outputs


def render_footprints(gdf: gpd.GeoDataFrame, output_dir: Path) -> Dict[str, Path]:
    """Render the polygon overlay map for KML footprints."""
    path = output_dir / "footprints_map.html"
    create_footprint_map(gdf, output_path=str(path))
    return {"footprint_map": path}


def run(input_path, layer: Optional[str] = None, output_dir="plots") -> Dict[str, Path]:
    """
    Load a detection file and render every applicable visualization.

    Returns:
        dict: Output name to written file path
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    gdf = load_detections(input_path, layer=layer)

    if gdf.empty:
        raise ValueError(f"No features found in {input_path}")

    if (gdf.geom_type == "Point").all():
        summary = get_detection_summary(gdf)
        print("\n=== Detection Data Summary ===")
        print(f"Total detections: {summary['total_detections']}")
        if summary["first_date"] is not None:
            print(f"Date range: {summary['first_date']} to {summary['last_date']}")
        if summary["confidence_counts"]:
            for level, level_count in summary["confidence_counts"].items():
                print(f"  {level}: {level_count}")

        bounds = summary["geographic_bounds"]
        print(
            f"Geographic extent: {bounds['min_lat']:.2f}°N to {bounds['max_lat']:.2f}°N, "
            f"{bounds['min_lon']:.2f}°E to {bounds['max_lon']:.2f}°E"
        )

        print("\n=== Creating Charts and Maps ===")
        outputs = render_points(gdf, output_path)
    else:
        print(f"\n=== Creating Footprint Map ({len(gdf)} polygons) ===")
        outputs = render_footprints(gdf, output_path)

    print("\n=== Visualization Complete ===")
    for name, path in outputs.items():
        print(f"{name}: {path}")

    return outputs


def main():
    """Main function for the plotting script."""
    parser = argparse.ArgumentParser(
        description="Visualize NASA FIRMS fire detections as charts and maps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m wildfire_plots.plots_main --input data/fire_nrt.csv
  python -m wildfire_plots.plots_main --input data/fire_archive.shp --output plots/
  python -m wildfire_plots.plots_main --input data/firms.kmz --layer "Fire Pixels"
        """,
    )

    parser.add_argument(
        "--input",
        type=str,
        default="data/fire_nrt.csv",
        help="Path to a .shp, .kml, .kmz or .csv detection file (default: data/fire_nrt.csv)",
    )

    parser.add_argument(
        "--layer",
        type=str,
        help="KML layer name (default: first layer)",
    )

    parser.add_argument(
        "--output",
        type=str,
        default="plots/",
        help="Output directory for charts and maps (default: plots/)",
    )

    args = parser.parse_args()

    try:
        run(args.input, layer=args.layer, output_dir=args.output)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
