"""
Detection count aggregations.

Groups a FIRMS detection table by acquisition date (and optionally by
confidence category) and counts rows per group. Inputs may be the
GeoDataFrame returned by a loader or a polars DataFrame; outputs are always
polars DataFrames sorted by date.
"""

from typing import Any, Dict, List

import polars as pl

from ..utils.data_utils import (
    CONFIDENCE_LEVELS,
    DetectionTable,
    normalize_confidence,
    parse_acq_date,
    to_polars,
)

COUNT_DTYPE = pl.UInt32


def _require_columns(df: pl.DataFrame, columns: List[str]) -> None:
    missing_columns = [col for col in columns if col not in df.columns]
    if missing_columns:
        raise ValueError(f"Missing required columns: {missing_columns}")


def count_by_date(table: DetectionTable) -> pl.DataFrame:
    """
    Count detections per acquisition date.

    Args:
        table: Loaded detection table with an 'acq_date' column

    Returns:
        pl.DataFrame: Columns acq_date, count; one row per date present
    """
    df = to_polars(table)
    _require_columns(df, ["acq_date"])
    df = parse_acq_date(df)

    return (
        df.group_by("acq_date")
        .agg(pl.len().cast(COUNT_DTYPE).alias("count"))
        .sort("acq_date")
    )


def count_by_date_confidence(table: DetectionTable) -> pl.DataFrame:
    """
    Count detections per acquisition date and confidence category.

    Args:
        table: Loaded detection table with 'acq_date' and 'confidence' columns

    Returns:
        pl.DataFrame: Columns acq_date, confidence, count, sorted by date and
        then low < medium < high. Only observed combinations appear.
    """
    df = to_polars(table)
    _require_columns(df, ["acq_date", "confidence"])
    df = normalize_confidence(parse_acq_date(df))

    level_order = {level: rank for rank, level in enumerate(CONFIDENCE_LEVELS)}

    return (
        df.group_by(["acq_date", "confidence"])
        .agg(pl.len().cast(COUNT_DTYPE).alias("count"))
        .with_columns(
            pl.col("confidence")
            .replace_strict(level_order, return_dtype=pl.Int8)
            .alias("_level_rank")
        )
        .sort(["acq_date", "_level_rank"])
        .drop("_level_rank")
    )


def pivot_confidence_counts(table: DetectionTable) -> pl.DataFrame:
    """
    Wide date x confidence table for stacked charts.

    Returns:
        pl.DataFrame: Columns acq_date, low, medium, high with zero-filled counts
    """
    counts = count_by_date_confidence(table)

    if counts.is_empty():
        schema = {"acq_date": pl.Date}
        schema.update({level: COUNT_DTYPE for level in CONFIDENCE_LEVELS})
        return pl.DataFrame(schema=schema)

    wide = counts.pivot(on="confidence", index="acq_date", values="count")
    for level in CONFIDENCE_LEVELS:
        if level not in wide.columns:
            wide = wide.with_columns(pl.lit(0, dtype=COUNT_DTYPE).alias(level))

    return (
        wide.select(["acq_date"] + CONFIDENCE_LEVELS)
        .fill_null(0)
        .sort("acq_date")
    )


def get_detection_summary(table: DetectionTable) -> Dict[str, Any]:
    """
    Generate a summary of a detection table.

    Args:
        table: Loaded detection table

    Returns:
        dict: Summary statistics
    """
    df = to_polars(table)

    summary = {
        "total_detections": len(df),
        "first_date": None,
        "last_date": None,
        "days_with_detections": 0,
        "confidence_counts": None,
        "geographic_bounds": None,
    }

    if df.is_empty():
        return summary

    if "acq_date" in df.columns:
        df = parse_acq_date(df)
        summary["first_date"] = df["acq_date"].min()
        summary["last_date"] = df["acq_date"].max()
        summary["days_with_detections"] = df["acq_date"].n_unique()

    if "confidence" in df.columns:
        df = normalize_confidence(df)
        summary["confidence_counts"] = {
            level: df.filter(pl.col("confidence") == level).height
            for level in CONFIDENCE_LEVELS
        }

    if "latitude" in df.columns and "longitude" in df.columns:
        summary["geographic_bounds"] = {
            "min_lon": df["longitude"].min(),
            "min_lat": df["latitude"].min(),
            "max_lon": df["longitude"].max(),
            "max_lat": df["latitude"].max(),
        }

    return summary
