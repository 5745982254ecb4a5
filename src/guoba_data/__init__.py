"""
GUOBA Data

Aggregation engine for GUOBA experiment submissions. Each user submits a
progression curve (e.g. artifact XP spent vs. resulting crit value); this
package turns those curves into percentile curves and leaderboards.

Key Features:
- Step-function sampling (hold the next recorded value, no interpolation)
- Percentile curves over every recorded x, or over ar for one-shot experiments
- Leaderboards for any minimum x, users without a qualifying value last
- Loader for the exported experiments/users/output JSON files

Usage:
    from guoba_data import compute_percentiles, rank, UserSeries

    users = [
        UserSeries(nickname="A", stats=[(0, 10), (10, 20)]),
        UserSeries(nickname="B", stats=[(0, 5), (10, 30)]),
    ]
    series = compute_percentiles(users, [25, 50, 75])
    rows = rank(users, minimum_x=5)
"""

from .core.models import (
    ExperimentMeta,
    LeaderboardRow,
    PercentileSeries,
    Sample,
    UserSeries,
)
from .leaderboard import LeaderboardRanker, rank
from .loader import ExperimentLoader
from .percentiles import (
    CurveSampler,
    PercentileAggregator,
    TerminalValueSampler,
    canonical_x_axis,
    compute_percentiles,
    get_sampler,
    sample_at_or_after,
)

__all__ = [
    # Models
    "ExperimentMeta",
    "LeaderboardRow",
    "PercentileSeries",
    "Sample",
    "UserSeries",
    # Sampling
    "CurveSampler",
    "TerminalValueSampler",
    "get_sampler",
    "sample_at_or_after",
    # Aggregation
    "PercentileAggregator",
    "canonical_x_axis",
    "compute_percentiles",
    # Leaderboard
    "LeaderboardRanker",
    "rank",
    # Loading
    "ExperimentLoader",
]
