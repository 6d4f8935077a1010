"""
Data utility functions for FIRMS detection tables.

Provides column normalization, the geometry-to-attribute conversion used by
every aggregation and renderer, and console summaries.
"""

from typing import Union

import geopandas as gpd
import pandas as pd
import polars as pl

# Confidence categories in display order
CONFIDENCE_LEVELS = ["low", "medium", "high"]

# VIIRS publishes l/n/h, older exports spell the words out
CONFIDENCE_ALIASES = {
    "l": "low",
    "low": "low",
    "n": "medium",
    "nominal": "medium",
    "medium": "medium",
    "h": "high",
    "high": "high",
}

# MODIS publishes 0-100; FIRMS documents <30 low, 30-80 nominal, >=80 high
NUMERIC_LOW_BELOW = 30
NUMERIC_HIGH_FROM = 80

DATE_FORMAT = "%Y-%m-%d"

DetectionTable = Union[gpd.GeoDataFrame, pl.DataFrame]


def normalize_columns(gdf: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """
    Lower-case attribute column names, keeping the active geometry column.

    FIRMS shapefiles ship upper-case fields (LATITUDE, ACQ_DATE, ...) while the
    CSV and KML exports are lower-case.
    """
    geometry_name = gdf.geometry.name
    renamed = {
        col: col.lower() for col in gdf.columns if col != geometry_name
    }
    return gdf.rename(columns=renamed)


def to_polars(table: DetectionTable) -> pl.DataFrame:
    """
    Return the attribute table of a detection dataset as a polars DataFrame.

    Args:
        table: GeoDataFrame from one of the loaders, or an already converted
            polars DataFrame (returned unchanged)

    Returns:
        pl.DataFrame without geometry. Latitude and longitude columns are
        derived when the file did not carry them: from the point itself, or
        from a representative point of each footprint polygon.
    """
    if isinstance(table, pl.DataFrame):
        return table

    geometry_name = table.geometry.name
    attributes = pd.DataFrame(table.drop(columns=geometry_name))
    df = pl.from_pandas(attributes)

    if len(table) > 0:
        # Footprint polygons are located by a point guaranteed inside each pixel
        if (table.geom_type == "Point").all():
            points = table.geometry
        else:
            points = table.geometry.representative_point()
        if "latitude" not in df.columns:
            df = df.with_columns(
                pl.Series("latitude", points.y.to_numpy(), dtype=pl.Float64)
            )
        if "longitude" not in df.columns:
            df = df.with_columns(
                pl.Series("longitude", points.x.to_numpy(), dtype=pl.Float64)
            )

    return df


def parse_acq_date(df: pl.DataFrame) -> pl.DataFrame:
    """Cast the acq_date column to pl.Date whatever type the reader produced."""
    if "acq_date" not in df.columns:
        return df

    dtype = df.schema["acq_date"]
    if dtype == pl.Date:
        return df
    if dtype == pl.Utf8:
        return df.with_columns(
            pl.col("acq_date").str.strip_chars().str.to_date(DATE_FORMAT)
        )
    # Datetime from pyogrio date fields, Null from empty tables
    return df.with_columns(pl.col("acq_date").cast(pl.Date))


def normalize_confidence(df: pl.DataFrame) -> pl.DataFrame:
    """
    Map FIRMS confidence values onto the low / medium / high categories.

    Args:
        df: Detection attributes with a 'confidence' column

    Returns:
        DataFrame whose confidence column only holds CONFIDENCE_LEVELS values

    Raises:
        ValueError: If any confidence value cannot be mapped
    """
    if "confidence" not in df.columns:
        raise ValueError("Missing required columns: ['confidence']")

    raw = pl.col("confidence").cast(pl.Utf8).str.strip_chars().str.to_lowercase()
    numeric = raw.cast(pl.Float64, strict=False)

    label = raw.replace_strict(CONFIDENCE_ALIASES, default=None, return_dtype=pl.Utf8)
    from_numeric = (
        pl.when((numeric >= 0) & (numeric < NUMERIC_LOW_BELOW))
        .then(pl.lit("low"))
        .when((numeric >= NUMERIC_LOW_BELOW) & (numeric < NUMERIC_HIGH_FROM))
        .then(pl.lit("medium"))
        .when((numeric >= NUMERIC_HIGH_FROM) & (numeric <= 100))
        .then(pl.lit("high"))
        .otherwise(pl.lit(None, dtype=pl.Utf8))
    )

    normalized = df.with_columns(
        pl.coalesce(label, from_numeric).alias("_confidence_level")
    )

    unmapped = normalized.filter(pl.col("_confidence_level").is_null())
    if not unmapped.is_empty():
        bad_values = unmapped["confidence"].unique().to_list()
        raise ValueError(f"Unrecognized confidence values: {bad_values}")

    return normalized.with_columns(
        pl.col("_confidence_level").alias("confidence")
    ).drop("_confidence_level")


def check_coordinates(df: pl.DataFrame) -> pl.DataFrame:
    """
    Make sure every detection has a latitude and a longitude.

    Raises:
        ValueError: If either column is missing or holds null values
    """
    missing_columns = [col for col in ("latitude", "longitude") if col not in df.columns]
    if missing_columns:
        raise ValueError(f"Missing required columns: {missing_columns}")

    null_count = df.filter(
        pl.col("latitude").is_null() | pl.col("longitude").is_null()
    ).height
    if null_count > 0:
        raise ValueError(f"Found {null_count} detections with missing coordinates")

    return df


def prepare_detections(table: DetectionTable) -> pl.DataFrame:
    """
    Convert a loaded detection table into the polars form the aggregations use.

    Parses acq_date and normalizes confidence when those columns exist.
    """
    df = parse_acq_date(to_polars(table))
    if "confidence" in df.columns:
        df = normalize_confidence(df)
    return df


def print_summary_statistics(df: pl.DataFrame) -> None:
    """Print summary statistics for a prepared detection table."""

    print("\n=== Summary Statistics ===")
    print(f"Fire detections: {len(df)}")

    if df.is_empty():
        return

    if "acq_date" in df.columns:
        print(f"Date range: {df['acq_date'].min()} to {df['acq_date'].max()}")
        print(f"Days with detections: {df['acq_date'].n_unique()}")

    if "confidence" in df.columns:
        for level in CONFIDENCE_LEVELS:
            level_count = df.filter(pl.col("confidence") == level).height
            print(
                f"  {level}: {level_count} ({level_count / len(df) * 100:.1f}%)"
            )

    if "satellite" in df.columns:
        print(f"Satellites: {sorted(df['satellite'].cast(pl.Utf8).unique().to_list())}")


def print_sample_data(df: pl.DataFrame) -> None:
    """Print the first rows of the key detection columns."""

    print("\n=== Sample Data ===")
    key_columns = [
        "latitude",
        "longitude",
        "acq_date",
        "acq_time",
        "confidence",
        "satellite",
        "frp",
    ]

    # Only show columns that exist
    available_columns = [col for col in key_columns if col in df.columns]

    try:
        print(df.select(available_columns).head())
    except UnicodeEncodeError:
        # Handle Unicode encoding issues on Windows
        print(
            "Sample data contains special characters that cannot be displayed in this terminal."
        )
        print(f"Columns: {available_columns}")
        print(f"Number of rows: {len(df)}")
