#!/usr/bin/env python3
"""
FIRMS Detection Data - Main Module

Loads a NASA FIRMS detection archive (shapefile, KML/KMZ or CSV), validates
it and writes the daily aggregations used by the charts.

Process:
1. Loads detections from a local file, or downloads a CSV from the FIRMS API
2. Validates columns, coordinates, dates and confidence categories
3. Counts detections per date and per date and confidence
4. Writes daily_counts.csv and daily_confidence_counts.csv

Usage:
    python -m wildfire_data.data_main --input data/fire_archive.shp
    python -m wildfire_data.data_main --fetch --source VIIRS_SNPP_NRT --area world --days 2
"""

import argparse
import sys
from pathlib import Path

from wildfire_data.aggregation import count_by_date, count_by_date_confidence
from wildfire_data.firms import SOURCES, download_detections, load_detections
from wildfire_data.utils import (
    prepare_detections,
    print_sample_data,
    print_summary_statistics,
)
from wildfire_data.validation import validate_and_report


def run(input_path, layer=None, output_dir="output"):
    """
    Load, validate and aggregate one detection file.

    Args:
        input_path: Path to a .shp, .kml, .kmz or .csv file
        layer: KML layer name
        output_dir: Directory for the aggregated CSV files

    Returns:
        Tuple of (daily_counts, daily_confidence_counts)
    """
    print("=== FIRMS Detection Data ===\n")

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    # Step 1: Load detections
    print("1. Loading detections...")
    gdf = load_detections(input_path, layer=layer)

    # Step 2: Validate
    print("\n2. Validating detections...")
    validation_passed = validate_and_report(gdf)
    if not validation_passed:
        raise ValueError("Detection table failed validation - see the report above")

    df = prepare_detections(gdf)
    print_summary_statistics(df)
    print_sample_data(df)

    # Step 3: Aggregate
    print("\n3. Counting detections per date...")
    daily_counts = count_by_date(df)
    daily_confidence_counts = count_by_date_confidence(df)
    print(f"   {len(daily_counts)} dates, {len(daily_confidence_counts)} date/confidence groups")

    # Step 4: Save
    print("\n4. Saving aggregations...")
    daily_file = output_path / "daily_counts.csv"
    confidence_file = output_path / "daily_confidence_counts.csv"
    daily_counts.write_csv(daily_file)
    daily_confidence_counts.write_csv(confidence_file)

    print("\n=== Aggregation Complete ===")
    print(f"Daily counts saved to: {daily_file}")
    print(f"Daily confidence counts saved to: {confidence_file}")

    return daily_counts, daily_confidence_counts


def main():
    """Main command-line interface for loading and aggregating detections."""
    parser = argparse.ArgumentParser(
        description="Load, validate and aggregate NASA FIRMS fire detections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m wildfire_data.data_main --input data/fire_archive.shp
  python -m wildfire_data.data_main --input data/firms.kmz --layer "Fire Pixels"
  python -m wildfire_data.data_main --fetch --area -125,32,-114,42 --days 5
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
        default="output",
        help="Output directory for aggregated CSV files (default: output)",
    )

    parser.add_argument(
        "--fetch",
        action="store_true",
        help="Download detections from the FIRMS API into --input before loading",
    )

    parser.add_argument(
        "--source",
        type=str,
        default="VIIRS_SNPP_NRT",
        choices=SOURCES,
        help="FIRMS data source for --fetch (default: VIIRS_SNPP_NRT)",
    )

    parser.add_argument(
        "--area",
        type=str,
        default="world",
        help='Area for --fetch: "world" or "west,south,east,north" (default: world)',
    )

    parser.add_argument(
        "--days",
        type=int,
        default=1,
        help="Number of days for --fetch, 1-10 (default: 1)",
    )

    args = parser.parse_args()

    try:
        if args.fetch:
            download_detections(
                args.input, source=args.source, area=args.area, day_range=args.days
            )

        run(args.input, layer=args.layer, output_dir=args.output)

    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
