"""
Validation helpers for FIRMS detection tables.

Contains utilities for checking loaded tables before aggregation and plotting.
"""

from .data_validator import validate_detections, validate_and_report, print_validation_report

__all__ = ['validate_detections', 'validate_and_report', 'print_validation_report']
