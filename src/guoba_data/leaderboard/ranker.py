"""
Leaderboard ranking for experiment submissions.

Each user is represented by their first sample at or beyond a minimum x (or
their single value in one-shot experiments). Users are then ordered by that
value, best first. Users who never reached the minimum x are listed last, in
their original order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from ..core.models import LeaderboardRow, Sample, UserSeries
from ..percentiles.sampler import Sampler, get_sampler

logger = logging.getLogger(__name__)


def _leaderboard_key(sample: Optional[Sample]) -> tuple[int, float]:
    # Defined values first (descending), then everyone without a value
    if sample is None:
        return (1, 0.0)
    return (0, -sample[1])


class LeaderboardRanker:
    """
    Ranks users by their best qualifying sample.

    Ranking is strictly positional: equal values keep their input order and
    still get distinct ranks.
    """

    def __init__(self, sampler: Sampler):
        self.sampler = sampler

    def rank(
        self,
        users: Sequence[UserSeries],
        minimum_x: float = 0,
    ) -> list[LeaderboardRow]:
        """
        Build the leaderboard.

        Args:
            users: Resolved user curves (synthetic series are skipped)
            minimum_x: Only samples with x >= minimum_x qualify

        Returns:
            Rows ordered best-first with 1-based ranks
        """
        candidates = [
            (user, self.sampler.sample(user, minimum_x))
            for user in users
            if not user.is_synthetic
        ]
        candidates.sort(key=lambda c: _leaderboard_key(c[1]))

        rows = [
            LeaderboardRow(
                rank=position,
                nickname=user.nickname,
                ar=user.ar,
                affiliation=user.affiliation,
                best_sample=best,
            )
            for position, (user, best) in enumerate(candidates, start=1)
        ]

        logger.debug(
            "Ranked %d users at minimum x %s (%d without a qualifying sample)",
            len(rows),
            minimum_x,
            sum(1 for row in rows if row.best_sample is None),
        )
        return rows


def rank(
    users: Sequence[UserSeries],
    minimum_x: float = 0,
    one_shot: bool = False,
) -> list[LeaderboardRow]:
    """Rank users for a minimum x. See LeaderboardRanker.rank."""
    return LeaderboardRanker(get_sampler(one_shot)).rank(users, minimum_x)
