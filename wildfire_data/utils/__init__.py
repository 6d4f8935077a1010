"""
Utility functions for FIRMS detection tables.

Common utilities for column normalization, type conversion, and console summaries.
"""

from .data_utils import (
    CONFIDENCE_LEVELS,
    DetectionTable,
    check_coordinates,
    normalize_columns,
    normalize_confidence,
    parse_acq_date,
    prepare_detections,
    print_sample_data,
    print_summary_statistics,
    to_polars,
)

__all__ = [
    'CONFIDENCE_LEVELS',
    'DetectionTable',
    'check_coordinates',
    'normalize_columns',
    'normalize_confidence',
    'parse_acq_date',
    'prepare_detections',
    'print_sample_data',
    'print_summary_statistics',
    'to_polars',
]
