"""
Leaderboard ranking for experiment submissions.
"""

from .ranker import LeaderboardRanker, rank

__all__ = [
    "LeaderboardRanker",
    "rank",
]
