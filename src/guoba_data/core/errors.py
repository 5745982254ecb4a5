"""
Error types for the data-loading layer.

The aggregation engine never raises these; they describe problems with the
files on disk. ExperimentService turns them into a "no data available" result.
"""

from __future__ import annotations


class GuobaDataError(Exception):
    """Base exception for data loading errors."""

    def __init__(self, message: str, code: str = "GUOBA_DATA_ERROR"):
        super().__init__(message)
        self.message = message
        self.code = code


class ExperimentNotFoundError(GuobaDataError):
    """Raised when an experiment id is not listed in experiments.json."""

    def __init__(self, experiment_id: str):
        super().__init__(f"Experiment not found: {experiment_id}", code="NOT_FOUND")
        self.experiment_id = experiment_id


class DataUnavailableError(GuobaDataError):
    """Raised when a data file is missing, unreadable or malformed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message, code="DATA_UNAVAILABLE")
        self.path = path
