"""
Experiment Service implementation.

Assembles everything an experiment page shows: the user curves, special
reference curves, percentile curves and the leaderboard. Loading problems are
logged and reported as "no data available" (None) instead of raised.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from ..core.config import Settings
from ..core.errors import GuobaDataError
from ..core.models import (
    ChartDataset,
    ExperimentMeta,
    ExperimentView,
    LeaderboardRow,
    PercentileSeries,
    Sample,
    UserSeries,
    ViewOptions,
)
from ..core.types import SPECIAL_AFFILIATION, SYNTHETIC_AR
from ..leaderboard import LeaderboardRanker
from ..loader import ExperimentLoader
from ..percentiles import PercentileAggregator, sampler_for

logger = logging.getLogger(__name__)


class ExperimentService:
    """
    Experiment page service.

    Features:
    - Resolves user curves through ExperimentLoader
    - Derives percentile series and the leaderboard on every request
    - Merges experiment-specific special curves from ExperimentMeta
    """

    def __init__(
        self,
        loader: Optional[ExperimentLoader] = None,
        settings: Optional[Settings] = None,
    ):
        self._loader = loader or ExperimentLoader(settings)

    def list_experiments(self) -> Optional[list[ExperimentMeta]]:
        try:
            return self._loader.load_experiments()
        except GuobaDataError as e:
            logger.warning("No experiments available: %s", e.message)
            return None

    # =========================================================================
    # Engine Calls
    # =========================================================================

    def percentiles(
        self,
        meta: ExperimentMeta,
        users: Sequence[UserSeries],
        percentiles: Sequence[float],
    ) -> list[PercentileSeries]:
        return PercentileAggregator(sampler_for(meta)).compute(users, percentiles)

    def leaderboard(
        self,
        meta: ExperimentMeta,
        users: Sequence[UserSeries],
        minimum_x: float = 0,
    ) -> list[LeaderboardRow]:
        return LeaderboardRanker(sampler_for(meta)).rank(users, minimum_x)

    # =========================================================================
    # Chart Composition
    # =========================================================================

    @staticmethod
    def special_series(meta: ExperimentMeta) -> list[UserSeries]:
        """Fixed reference curves configured on the experiment."""
        return [
            UserSeries(
                nickname=label,
                affiliation=SPECIAL_AFFILIATION,
                ar=SYNTHETIC_AR,
                stats=stats,
            )
            for label, stats in meta.special.items()
        ]

    @staticmethod
    def chart_points(user: UserSeries, meta: ExperimentMeta) -> list[Sample]:
        """
        Points to draw for a series.

        One-shot submissions are drawn as a single point at the user's ar,
        using their highest value.
        """
        if meta.one_shot and user.ar > 0 and user.stats:
            return [Sample(user.ar, max(s[1] for s in user.stats))]
        return list(user.stats)

    def build_datasets(
        self,
        meta: ExperimentMeta,
        users: Sequence[UserSeries],
        options: ViewOptions,
    ) -> list[ChartDataset]:
        """
        Build the chart's datasets.

        Specials come first, then users ordered by label. With percentiles
        enabled, only the marked user is kept unless show_both is set, and
        the percentile curves are appended.
        """
        with_percentiles = options.show_percentiles or options.show_both

        shown: list[UserSeries] = list(users)
        if with_percentiles and not options.show_both:
            shown = [u for u in users if u.nickname == options.marked_user]

        datasets = []
        if options.show_special:
            datasets.extend(self._dataset(s, meta) for s in self.special_series(meta))

        datasets.extend(
            sorted(
                (self._dataset(u, meta) for u in shown),
                key=lambda d: d.label.casefold(),
            )
        )

        if with_percentiles:
            datasets.extend(
                self._dataset(s, meta)
                for s in self.percentiles(meta, users, options.percentiles)
            )

        return datasets

    def _dataset(self, series: UserSeries, meta: ExperimentMeta) -> ChartDataset:
        return ChartDataset(
            label=series.nickname,
            affiliation=series.affiliation,
            ar=series.ar,
            points=self.chart_points(series, meta),
        )

    # =========================================================================
    # Page Entry Point
    # =========================================================================

    def get_view(
        self,
        experiment_id: str,
        options: Optional[ViewOptions] = None,
    ) -> Optional[ExperimentView]:
        """
        Load an experiment and compute everything its page shows.

        Args:
            experiment_id: Experiment identifier from experiments.json
            options: Page options (defaults to ViewOptions())

        Returns:
            ExperimentView, or None if the experiment's data is not available
        """
        options = options or ViewOptions()

        try:
            meta = self._loader.get_experiment(experiment_id)
            prev, next_ = self._loader.get_neighbours(experiment_id)
            users = self._loader.load_user_series(meta)
        except GuobaDataError as e:
            logger.warning(
                "No data available for experiment %s: %s (%s)",
                experiment_id,
                e.message,
                e.code,
            )
            return None

        return ExperimentView(
            meta=meta,
            prev=prev,
            next=next_,
            users=users,
            datasets=self.build_datasets(meta, users, options),
            leaderboard=self.leaderboard(meta, users, options.minimum_x),
        )


def get_experiment_service(settings: Optional[Settings] = None) -> ExperimentService:
    """Create an ExperimentService reading from the configured data directory."""
    return ExperimentService(settings=settings)
