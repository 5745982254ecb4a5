"""
Configuration for percentile series.

Defines the percentiles shown by default and how they are labelled.
"""

from __future__ import annotations

import math

from ..core.types import DEFAULT_PERCENTILES

__all__ = ["DEFAULT_PERCENTILES", "format_percentile_label", "is_valid_percentile"]

MIN_PERCENTILE = 0
MAX_PERCENTILE = 100


def is_valid_percentile(value: float) -> bool:
    """Check a requested percentile is a number within [0, 100]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if math.isnan(value):
        return False
    return MIN_PERCENTILE <= value <= MAX_PERCENTILE


def format_percentile_label(value: float) -> str:
    """Label for a percentile series, e.g. 50 -> "50%", 12.5 -> "12.5%"."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}%"
