"""
Percentile curves across all submissions of an experiment.

For every point of the experiment's x-axis, each real user is sampled and the
values are ranked best-first. A percentile picks one rank from that list, so
each requested percentile yields its own synthetic step curve:

- 100% follows the best value at every x
- 0% follows the worst value at every x
- Users whose curve ends before x still occupy a slot, valued as 0

The resulting series have the same shape as user curves and can be drawn next
to them.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Optional

from ..core.models import PercentileSeries, Sample, UserSeries
from .config import format_percentile_label, is_valid_percentile
from .sampler import Sampler, get_sampler

logger = logging.getLogger(__name__)


def _ranking_key(sample: Optional[Sample]) -> float:
    """Missing values rank as 0."""
    return sample[1] if sample is not None else 0


def percentile_index(sample_size: int, percentile: float) -> int:
    """
    Index into a best-first list of sample_size values for a percentile.

    Uses the nearest-rank method: percentile 100 is index 0 (the best), and
    percentile 0 is the last index (the worst).

    Args:
        sample_size: Number of ranked values (N)
        percentile: Requested percentile in [0, 100]

    Returns:
        Index in [0, sample_size - 1]
    """
    index = math.floor(sample_size * (100 - percentile) / 100)
    return min(index, sample_size - 1)


class PercentileAggregator:
    """
    Computes percentile series over a set of user curves.

    Usage:
        aggregator = PercentileAggregator(sampler_for(meta))
        series = aggregator.compute(users, [5, 50, 95])
    """

    def __init__(self, sampler: Sampler):
        self.sampler = sampler

    def x_axis(self, users: Sequence[UserSeries]) -> list[float]:
        return self.sampler.x_axis(users)

    def ranked_samples(
        self, users: Sequence[UserSeries], x: float
    ) -> list[Optional[Sample]]:
        """Sample every real user at x and order the results best-first."""
        sampled = [self.sampler.sample(user, x) for user in users if not user.is_synthetic]
        return sorted(sampled, key=_ranking_key, reverse=True)

    def compute(
        self,
        users: Sequence[UserSeries],
        percentiles: Sequence[float],
        x_axis: Optional[Sequence[float]] = None,
    ) -> list[PercentileSeries]:
        """
        Compute one step series per requested percentile.

        Args:
            users: Resolved user curves (synthetic series are ignored)
            percentiles: Requested percentiles, kept in order and with duplicates
            x_axis: Points to evaluate at; derived from the users when omitted

        Returns:
            List of PercentileSeries, one per entry of percentiles
        """
        axis = list(x_axis) if x_axis is not None else self.x_axis(users)
        points: list[list[Sample]] = [[] for _ in percentiles]

        for p in percentiles:
            if not is_valid_percentile(p):
                logger.warning("Ignoring percentile outside [0, 100]: %r", p)

        for x in axis:
            ranked = self.ranked_samples(users, x)
            if not ranked:
                continue

            for p, stats in zip(percentiles, points):
                if not is_valid_percentile(p):
                    continue

                chosen = ranked[percentile_index(len(ranked), p)]
                if chosen is None:
                    continue

                # Flat runs keep their first point and one trailing point
                if len(stats) > 1 and stats[-1].y == chosen.y:
                    stats.pop()
                stats.append(Sample(x, chosen.y))

        logger.debug(
            "Computed %d percentile series over %d users and %d x-values",
            len(percentiles),
            len(users),
            len(axis),
        )

        return [
            PercentileSeries(
                nickname=format_percentile_label(p),
                percentile=p,
                stats=stats,
            )
            for p, stats in zip(percentiles, points)
        ]


def canonical_x_axis(users: Sequence[UserSeries], one_shot: bool = False) -> list[float]:
    """
    Derive the x-axis percentiles are evaluated on.

    For curve experiments this is every distinct recorded x, ascending. For
    one-shot experiments it is just the lowest and highest ar.
    """
    return get_sampler(one_shot).x_axis(users)


def compute_percentiles(
    users: Sequence[UserSeries],
    percentiles: Sequence[float],
    *,
    one_shot: bool = False,
    x_axis: Optional[Sequence[float]] = None,
) -> list[PercentileSeries]:
    """Compute percentile series for users. See PercentileAggregator.compute."""
    return PercentileAggregator(get_sampler(one_shot)).compute(users, percentiles, x_axis)
