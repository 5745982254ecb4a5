"""
Core types and constants for GUOBA Data.

This module provides:
- SamplingMode enum (curve vs. one-shot terminal sampling)
- Sentinel values shared by synthetic series
- AR_LEVEL_XP table used to turn (level, xp) into total adventure XP
"""

from enum import Enum


class SamplingMode(str, Enum):
    """How a user's y-value is looked up for a given x."""

    curve = "curve"
    terminal = "terminal"


# =============================================================================
# Synthetic series markers
# =============================================================================
# Any series with a negative ar is not a real submission. Percentile and
# special (reference) curves carry ar = -1 and one of the affiliations below.

SYNTHETIC_AR = -1
PERCENTILE_AFFILIATION = "percentile"
SPECIAL_AFFILIATION = "special"
UNAFFILIATED = "Unaffiliated"

# Percentiles shown when the page first enables percentile curves
DEFAULT_PERCENTILES: tuple[float, ...] = (5, 25, 50, 75, 95)


# =============================================================================
# Adventure Rank experience table
# =============================================================================
# AR_LEVEL_XP[level] is the cumulative XP needed to reach that level.
# Index 0 is a placeholder so the table can be indexed by level directly.

AR_LEVEL_XP: tuple[int, ...] = (
    0,
    0, 375, 875, 1500, 2225, 3075, 4025, 5100, 6300, 7600,
    9025, 10550, 12200, 13975, 15850, 17850, 20225, 22725, 25350, 28125,
    30950, 34375, 38100, 42100, 46400, 50975, 55850, 61000, 66450, 72175,
    78200, 84500, 91100, 98000, 105175, 112650, 120400, 128450, 136775, 145400,
    155950, 167475, 179950, 193400, 207800, 223150, 239475, 256750, 275000, 294200,
    320600, 349400, 380600, 414200, 450200, 682550, 941500, 1227250, 1540075, 1880200,
)

MAX_AR_LEVEL = len(AR_LEVEL_XP) - 1


def total_adventure_xp(level: int, xp: int) -> int:
    """
    Convert an adventure rank level and in-level XP into total XP.

    Levels outside the table are clamped to its bounds.
    """
    level = min(max(level, 0), MAX_AR_LEVEL)
    return AR_LEVEL_XP[level] + xp
