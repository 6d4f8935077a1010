"""
Aggregation helpers for FIRMS detections.

Groups detections by date and confidence category for charting.
"""

from .detection_counts import (
    count_by_date,
    count_by_date_confidence,
    get_detection_summary,
    pivot_confidence_counts,
)

__all__ = [
    'count_by_date',
    'count_by_date_confidence',
    'get_detection_summary',
    'pivot_confidence_counts',
]
