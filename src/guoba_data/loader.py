"""
Loader for exported experiment data.

Reads the files produced by the GUOBA pipeline and resolves them into
UserSeries ready for aggregation.

Layout (relative to Settings.data_dir):
    experiments.json          list of experiment definitions
    users.json                raw form submissions
    output/<experiment>.json  per-user curves for one experiment

Output file format:
    [
        {"user": "1a2b3c.json", "stats": [[0, 12.5], [20, 31.0]]},
        ...
    ]
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from .core.config import Settings, get_settings
from .core.errors import DataUnavailableError, ExperimentNotFoundError
from .core.models import ExperimentMeta, OutputEntry, UserRecord, UserSeries

logger = logging.getLogger(__name__)

_experiments_adapter = TypeAdapter(list[ExperimentMeta])
_users_adapter = TypeAdapter(list[UserRecord])
_output_adapter = TypeAdapter(list[OutputEntry])


def _read_json(path: Path) -> Any:
    """Read a JSON file, wrapping I/O and parse failures."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise DataUnavailableError(f"Data file not found: {path}", path=str(path)) from e
    except (OSError, json.JSONDecodeError) as e:
        raise DataUnavailableError(f"Could not read {path}: {e}", path=str(path)) from e


def _validate(adapter: TypeAdapter, data: Any, path: Path) -> Any:
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        raise DataUnavailableError(
            f"Malformed data in {path}: {e.error_count()} validation error(s)",
            path=str(path),
        ) from e


class ExperimentLoader:
    """Load experiments and resolve their submissions into user curves."""

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the loader.

        Args:
            settings: Settings to read paths from (defaults to get_settings())
        """
        self.settings = settings or get_settings()

    # =========================================================================
    # Experiments
    # =========================================================================

    def load_experiments(self) -> list[ExperimentMeta]:
        path = self.settings.experiments_path
        experiments = _validate(_experiments_adapter, _read_json(path), path)
        logger.debug("Loaded %d experiments from %s", len(experiments), path)
        return experiments

    def get_experiment(self, experiment_id: str) -> ExperimentMeta:
        """
        Look up one experiment.

        Raises:
            ExperimentNotFoundError: If no experiment has this id
        """
        for meta in self.load_experiments():
            if meta.id == experiment_id:
                return meta
        raise ExperimentNotFoundError(experiment_id)

    def get_neighbours(
        self, experiment_id: str
    ) -> tuple[Optional[ExperimentMeta], Optional[ExperimentMeta]]:
        """Return the (previous, next) experiments in file order."""
        experiments = self.load_experiments()
        for index, meta in enumerate(experiments):
            if meta.id == experiment_id:
                prev = experiments[index - 1] if index > 0 else None
                next_ = experiments[index + 1] if index + 1 < len(experiments) else None
                return prev, next_
        raise ExperimentNotFoundError(experiment_id)

    # =========================================================================
    # Submissions
    # =========================================================================

    def load_users(self) -> list[UserRecord]:
        path = self.settings.users_path
        users = _validate(_users_adapter, _read_json(path), path)
        logger.debug("Loaded %d user records from %s", len(users), path)
        return users

    def load_output(self, meta: ExperimentMeta) -> list[OutputEntry]:
        path = self.settings.output_path / f"{meta.output_name}.json"
        return _validate(_output_adapter, _read_json(path), path)

    def load_user_series(self, meta: ExperimentMeta) -> list[UserSeries]:
        """
        Resolve an experiment's output into user curves.

        Users who did not opt in to showing their tag are numbered
        "Anonymous #1", "Anonymous #2", ... in output order. The result is
        sorted by nickname.
        """
        users_by_key = {user.output_key: user for user in self.load_users()}
        entries = self.load_output(meta)

        series = []
        anonymous = 0
        unmatched = 0
        for entry in entries:
            user = users_by_key.get(entry.user)
            if user is None:
                unmatched += 1

            if user is not None and user.shows_tag:
                nickname = user.discord
            else:
                anonymous += 1
                nickname = f"{self.settings.anonymous_prefix}{anonymous}"

            series.append(
                UserSeries(
                    nickname=nickname,
                    affiliation=(user.affiliation if user else "") or self.settings.unaffiliated_label,
                    ar=user.adventure_xp if user else 0,
                    stats=entry.stats,
                )
            )

        if unmatched:
            logger.warning(
                "%d of %d submissions for %s have no matching user record",
                unmatched,
                len(entries),
                meta.id,
            )

        series.sort(key=lambda s: s.nickname.casefold())

        logger.info(
            "Loaded %d user series for %s (%d anonymous)",
            len(series),
            meta.id,
            anonymous,
        )
        return series
