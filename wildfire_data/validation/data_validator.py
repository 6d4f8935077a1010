"""
Data validation utilities for loaded FIRMS detection tables.

Checks that a loaded table has the columns and value ranges the aggregations
and maps rely on, and reports problems before any chart is drawn.
"""

from typing import Any, Dict, List, Optional

import polars as pl

from ..utils.data_utils import (
    DetectionTable,
    normalize_confidence,
    parse_acq_date,
    to_polars,
)


def validate_detections(
    table: DetectionTable,
    required_columns: Optional[List[str]] = None,
    min_records: int = 1,
) -> Dict[str, Any]:
    """
    Validate a loaded detection table.

    Args:
        table: GeoDataFrame from a loader or its polars attribute table
        required_columns: List of required column names. If None, uses default.
        min_records: Minimum number of records required

    Returns:
        Dictionary containing validation results and statistics
    """
    # Default required columns for point detections
    if required_columns is None:
        required_columns = ["latitude", "longitude", "acq_date", "confidence"]

    validation_result = {
        "record_count": 0,
        "column_count": 0,
        "missing_columns": [],
        "has_null_coordinates": False,
        "data_types_valid": True,
        "errors": [],
        "warnings": [],
    }

    df = to_polars(table)

    # Step 1: Basic dataframe validation
    validation_result["record_count"] = len(df)
    validation_result["column_count"] = len(df.columns)

    if len(df) < min_records:
        validation_result["errors"].append(
            f"Insufficient records: {len(df)} (minimum required: {min_records})"
        )
        print(f"[ERROR] Insufficient records: {len(df)} < {min_records}")

    # Step 2: Check for required columns
    missing_columns = [col for col in required_columns if col not in df.columns]
    validation_result["missing_columns"] = missing_columns

    if missing_columns:
        validation_result["errors"].append(
            f"Missing required columns: {missing_columns}"
        )
        print(f"[ERROR] Missing required columns: {missing_columns}")

    # Step 3: Validate coordinate columns
    data_type_issues = []

    for col, limit in (("latitude", 90), ("longitude", 180)):
        if col not in df.columns:
            continue
        if not df[col].dtype.is_numeric():
            data_type_issues.append(f"{col} column is not numeric")
            print(f"[ERROR] {col.capitalize()} column is not numeric")
        elif df[col].null_count() > 0:
            validation_result["has_null_coordinates"] = True
            null_count = df[col].null_count()
            validation_result["errors"].append(
                f"Found {null_count} null values in {col} column"
            )
            print(f"[ERROR] Found {null_count} null {col} values")
        elif not df[col].is_between(-limit, limit).all():
            invalid_count = (~df[col].is_between(-limit, limit)).sum()
            validation_result["warnings"].append(
                f"Found {invalid_count} {col} values outside valid range [-{limit}, {limit}]"
            )
            print(f"[WARNING] Found {invalid_count} invalid {col} values")

    # Step 4: Check the date column parses
    if "acq_date" in df.columns:
        try:
            df = parse_acq_date(df)
        except pl.exceptions.PolarsError:
            data_type_issues.append("acq_date column cannot be converted to date")
            print("[ERROR] acq_date column is not valid YYYY-MM-DD format")

    # Step 5: Check confidence categories
    if "confidence" in df.columns:
        try:
            normalize_confidence(df)
        except ValueError as e:
            data_type_issues.append(str(e))
            print(f"[ERROR] {e}")

    if data_type_issues:
        validation_result["data_types_valid"] = False
        validation_result["errors"].extend(data_type_issues)

    # Step 6: Check for duplicate records
    duplicate_subset = ["latitude", "longitude", "acq_date", "acq_time"]
    duplicate_subset = [col for col in duplicate_subset if col in df.columns]
    if len(duplicate_subset) >= 3:
        duplicate_count = len(df) - len(df.unique(subset=duplicate_subset))
        if duplicate_count > 0:
            validation_result["warnings"].append(
                f"Found {duplicate_count} potential duplicate records"
            )
            print(f"[WARNING] Found {duplicate_count} duplicate records")

    # Step 7: Final validation status
    validation_result["is_valid"] = len(validation_result["errors"]) == 0

    return validation_result


def print_validation_report(validation_result: Dict[str, Any]) -> None:
    """Print a formatted validation report."""

    print("\n" + "=" * 50)
    print("VALIDATION REPORT")
    print("=" * 50)

    print("[DATA] Data Status:")
    print(f"   Records: {validation_result['record_count']:,}")
    print(f"   Columns: {validation_result['column_count']}")
    print(
        f"   Data types valid: {'OK' if validation_result['data_types_valid'] else 'FAIL'}"
    )

    if validation_result["errors"]:
        print(f"\n[ERROR] ERRORS ({len(validation_result['errors'])}):")
        for error in validation_result["errors"]:
            print(f"   - {error}")

    if validation_result["warnings"]:
        print(f"\n[WARN] WARNINGS ({len(validation_result['warnings'])}):")
        for warning in validation_result["warnings"]:
            print(f"   - {warning}")

    overall_status = "PASSED" if validation_result.get("is_valid", False) else "FAILED"
    print(f"\n[RESULT] Overall Status: {overall_status}")
    print("=" * 50)


def validate_and_report(
    table: DetectionTable,
    required_columns: Optional[List[str]] = None,
    min_records: int = 1,
    print_report: bool = True,
) -> bool:
    """
    Validate a detection table and optionally print a formatted report.

    Returns:
        True if validation passed, False otherwise
    """
    validation_result = validate_detections(
        table, required_columns=required_columns, min_records=min_records
    )

    if print_report:
        print_validation_report(validation_result)

    return validation_result.get("is_valid", False)
