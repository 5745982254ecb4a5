"""
Core module for GUOBA Data.

This module provides the foundational components:
- Configuration management (config.py)
- Data models (models.py)
- Type definitions and the AR level table (types.py)
- Loader errors (errors.py)

Usage:
    from guoba_data.core import Settings, get_settings
    from guoba_data.core import UserSeries, ExperimentMeta, Sample
"""

# Configuration
from .config import Settings, get_settings

# Errors
from .errors import DataUnavailableError, ExperimentNotFoundError, GuobaDataError

# Types
from .types import (
    AR_LEVEL_XP,
    SYNTHETIC_AR,
    SamplingMode,
    total_adventure_xp,
)

# Models
from .models import (
    ChartDataset,
    ExperimentMeta,
    ExperimentView,
    LeaderboardRow,
    OutputEntry,
    PercentileSeries,
    Sample,
    UserRecord,
    UserSeries,
    ViewOptions,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "GuobaDataError",
    "ExperimentNotFoundError",
    "DataUnavailableError",
    # Types
    "AR_LEVEL_XP",
    "SYNTHETIC_AR",
    "SamplingMode",
    "total_adventure_xp",
    # Models
    "ChartDataset",
    "ExperimentMeta",
    "ExperimentView",
    "LeaderboardRow",
    "OutputEntry",
    "PercentileSeries",
    "Sample",
    "UserRecord",
    "UserSeries",
    "ViewOptions",
]
