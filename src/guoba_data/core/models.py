"""
Pydantic models for experiment data.

These models are used for:
- Validating raw files (experiments.json, users.json, output/*.json)
- The read-only series consumed by the aggregation engine
- Results handed to the rendering layer (percentile series, leaderboard rows)
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .types import (
    DEFAULT_PERCENTILES,
    PERCENTILE_AFFILIATION,
    SYNTHETIC_AR,
    UNAFFILIATED,
    total_adventure_xp,
)


class Sample(NamedTuple):
    """One measurement point: metric y observed at x."""

    x: float
    y: float


def _parse_int(value: Optional[str]) -> int:
    """Parse a form field as an int, treating blanks and junk as 0."""
    if value is None:
        return 0
    try:
        return int(str(value).strip())
    except ValueError:
        return 0


# =============================================================================
# Experiment Configuration
# =============================================================================


class ExperimentMeta(BaseModel):
    """One entry of experiments.json."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    name: str
    template: Optional[str] = None
    one_shot: bool = Field(default=False, alias="oneShot")
    x: Optional[str] = None
    y: Optional[str] = None
    kqmc: Optional[list[Sample]] = None
    special: dict[str, list[Sample]] = Field(default_factory=dict)
    archived: bool = False
    note: Optional[str] = None
    output_file: Optional[str] = Field(default=None, alias="outputFile")

    @property
    def output_name(self) -> str:
        """Base name of the output file holding this experiment's submissions."""
        return self.output_file or self.template or self.id

    @property
    def x_label(self) -> str:
        if self.one_shot:
            return "Total Adventure XP"
        return self.x or "x"

    @property
    def y_label(self) -> str:
        return self.y or "y"


# =============================================================================
# Raw Submission Records
# =============================================================================


class DbFile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    file_id: str = Field(alias="fileId")


class UserRecord(BaseModel):
    """One form submission from users.json."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    response_id: Optional[str] = Field(default=None, alias="responseId")
    ar_level: Optional[str] = Field(default=None, alias="arLvl")
    ar_xp: Optional[str] = Field(default=None, alias="arXP")
    server: Optional[str] = None
    db_file: DbFile = Field(alias="dbFile")
    discord: str = ""
    affiliation: str = ""
    show_tag: str = Field(default="No", alias="showTag")

    @property
    def output_key(self) -> str:
        """Name under which this user's results appear in output files."""
        return f"{self.db_file.file_id}.json"

    @property
    def shows_tag(self) -> bool:
        return self.show_tag == "Yes"

    @property
    def adventure_xp(self) -> int:
        return total_adventure_xp(_parse_int(self.ar_level), _parse_int(self.ar_xp))


class OutputEntry(BaseModel):
    """One user's computed curve from output/<experiment>.json."""

    model_config = ConfigDict(extra="ignore")

    user: str
    stats: list[Sample] = Field(default_factory=list)


# =============================================================================
# Aggregation Models
# =============================================================================


class UserSeries(BaseModel):
    """A user's progression curve, resolved and ready for aggregation."""

    model_config = ConfigDict(frozen=True)

    nickname: str
    affiliation: str = UNAFFILIATED
    ar: float = 0
    stats: list[Sample] = Field(default_factory=list)

    @property
    def is_synthetic(self) -> bool:
        """Percentile and special series carry a negative ar."""
        return self.ar < 0


class PercentileSeries(UserSeries):
    """Synthetic step curve for one requested percentile."""

    affiliation: str = PERCENTILE_AFFILIATION
    ar: float = SYNTHETIC_AR
    percentile: float


class LeaderboardRow(BaseModel):
    """Single entry in a leaderboard."""

    model_config = ConfigDict(frozen=True)

    rank: int
    nickname: str
    ar: float
    affiliation: str
    best_sample: Optional[Sample] = None

    @computed_field
    @property
    def value(self) -> Optional[float]:
        """The ranked y-value, or None when the user never reached minimum x."""
        return self.best_sample.y if self.best_sample is not None else None


# =============================================================================
# View Models
# =============================================================================


class ViewOptions(BaseModel):
    """What the experiment page asks for."""

    percentiles: list[float] = Field(default_factory=lambda: list(DEFAULT_PERCENTILES))
    show_percentiles: bool = False
    show_both: bool = False
    show_special: bool = True
    marked_user: Optional[str] = None
    minimum_x: float = 0


class ChartDataset(BaseModel):
    """One line of the experiment chart."""

    label: str
    affiliation: str
    ar: float
    points: list[Sample]

    @property
    def is_synthetic(self) -> bool:
        return self.ar < 0


class ExperimentView(BaseModel):
    """Everything the experiment page renders."""

    meta: ExperimentMeta
    prev: Optional[ExperimentMeta] = None
    next: Optional[ExperimentMeta] = None
    users: list[UserSeries]
    datasets: list[ChartDataset]
    leaderboard: list[LeaderboardRow]
