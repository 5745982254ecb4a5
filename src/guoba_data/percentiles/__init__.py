"""
Percentile curves and step-function sampling for experiment data.
"""

from .calculator import (
    PercentileAggregator,
    canonical_x_axis,
    compute_percentiles,
    percentile_index,
)
from .config import DEFAULT_PERCENTILES, format_percentile_label, is_valid_percentile
from .sampler import (
    CurveSampler,
    TerminalValueSampler,
    get_sampler,
    sample_at_or_after,
    sampler_for,
    terminal_sample,
)

__all__ = [
    "PercentileAggregator",
    "canonical_x_axis",
    "compute_percentiles",
    "percentile_index",
    "DEFAULT_PERCENTILES",
    "format_percentile_label",
    "is_valid_percentile",
    "CurveSampler",
    "TerminalValueSampler",
    "get_sampler",
    "sample_at_or_after",
    "sampler_for",
    "terminal_sample",
]
