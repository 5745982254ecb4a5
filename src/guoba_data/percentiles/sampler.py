"""
Step-function sampling of user curves.

A user's metric at x is the next recorded sample at or after x (hold-forward,
no interpolation). One-shot experiments are different: every user submits a
single value keyed by their total adventure XP, so the query x is ignored.

The two behaviours are separate sampler classes, picked once per experiment:

    sampler = sampler_for(meta)
    axis = sampler.x_axis(users)
    value = sampler.sample(user, axis[0])
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from collections.abc import Sequence
from typing import Optional, Protocol

from ..core.models import ExperimentMeta, Sample, UserSeries
from ..core.types import SamplingMode

logger = logging.getLogger(__name__)


def sample_at_or_after(stats: Sequence[Sample], x: float) -> Optional[Sample]:
    """
    Return the first sample whose x is >= the query x.

    Args:
        stats: Samples sorted ascending by x
        x: Query point

    Returns:
        The matching sample, or None if the curve ends before x
    """
    index = bisect_left(stats, x, key=lambda s: s[0])
    if index == len(stats):
        return None
    return Sample(*stats[index])


def terminal_sample(user: UserSeries) -> Optional[Sample]:
    """Single one-shot value for a user, keyed by ar instead of a stats index."""
    if not user.stats:
        return None
    return Sample(user.ar, user.stats[0][1])


class Sampler(Protocol):
    mode: SamplingMode

    def sample(self, user: UserSeries, x: float) -> Optional[Sample]: ...

    def x_axis(self, users: Sequence[UserSeries]) -> list[float]: ...


class CurveSampler:
    """Samples a user's recorded curve with hold-forward semantics."""

    mode = SamplingMode.curve

    def sample(self, user: UserSeries, x: float) -> Optional[Sample]:
        return sample_at_or_after(user.stats, x)

    def x_axis(self, users: Sequence[UserSeries]) -> list[float]:
        """Every distinct x recorded by any real user, ascending."""
        xs = {s[0] for user in users if not user.is_synthetic for s in user.stats}
        return sorted(xs)


class TerminalValueSampler:
    """Samples the single value a user submitted in a one-shot experiment."""

    mode = SamplingMode.terminal

    def sample(self, user: UserSeries, x: float) -> Optional[Sample]:
        return terminal_sample(user)

    def x_axis(self, users: Sequence[UserSeries]) -> list[float]:
        """The lowest and highest ar across real users."""
        ars = [user.ar for user in users if not user.is_synthetic]
        if not ars:
            return []
        return [min(ars), max(ars)]


def get_sampler(one_shot: bool) -> Sampler:
    """Pick the sampling strategy for an experiment."""
    if one_shot:
        return TerminalValueSampler()
    return CurveSampler()


def sampler_for(meta: ExperimentMeta) -> Sampler:
    sampler = get_sampler(meta.one_shot)
    logger.debug("Using %s sampling for experiment %s", sampler.mode.value, meta.id)
    return sampler
