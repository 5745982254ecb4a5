"""
Tests for ExperimentService page composition.
"""

from __future__ import annotations

import pytest

from guoba_data.core.config import Settings
from guoba_data.core.models import ExperimentMeta, UserSeries, ViewOptions
from guoba_data.services import ExperimentService


@pytest.fixture
def service(settings):
    return ExperimentService(settings=settings)


class TestGetView:
    def test_view(self, service):
        view = service.get_view("em-sands", ViewOptions(minimum_x=50))

        assert view is not None
        assert view.meta.name == "EM Sands"
        assert view.prev is None
        assert view.next.id == "crit-value"
        assert len(view.users) == 4

    def test_leaderboard(self, service):
        view = service.get_view("em-sands", ViewOptions(minimum_x=50))

        assert [(r.nickname, r.value) for r in view.leaderboard] == [
            ("zeta#0001", 90),
            ("Anonymous #1", 70),
            ("alpha#0003", None),
            ("Anonymous #2", None),
        ]

    def test_one_shot_leaderboard(self, service):
        view = service.get_view("one-shot")

        assert [r.nickname for r in view.leaderboard] == [
            "Anonymous #1",
            "alpha#0003",
            "zeta#0001",
        ]
        assert view.leaderboard[0].best_sample == (294200, 30)

    def test_unknown_experiment(self, service):
        assert service.get_view("nope") is None

    def test_missing_output(self, service):
        assert service.get_view("crit-value") is None

    def test_list_experiments(self, service):
        assert [e.id for e in service.list_experiments()] == ["em-sands", "crit-value", "one-shot"]

    def test_list_experiments_without_data(self, tmp_path):
        service = ExperimentService(settings=Settings(data_dir=tmp_path))
        assert service.list_experiments() is None


class TestDatasets:
    def test_default_shows_specials_then_users(self, service):
        view = service.get_view("em-sands")
        labels = [d.label for d in view.datasets]

        assert labels == ["KQMS", "alpha#0003", "Anonymous #1", "Anonymous #2", "zeta#0001"]
        assert view.datasets[0].affiliation == "special"
        assert view.datasets[0].is_synthetic

    def test_percentiles_with_marked_user(self, service):
        options = ViewOptions(
            show_percentiles=True,
            show_special=False,
            marked_user="zeta#0001",
            percentiles=[0, 100],
        )
        view = service.get_view("em-sands", options)

        assert [d.label for d in view.datasets] == ["zeta#0001", "0%", "100%"]
        assert view.datasets[2].points[0] == (0, 60)

    def test_percentiles_without_marked_user(self, service):
        options = ViewOptions(show_percentiles=True, show_special=False, percentiles=[50])
        view = service.get_view("em-sands", options)

        assert [d.label for d in view.datasets] == ["50%"]

    def test_show_both(self, service):
        options = ViewOptions(
            show_percentiles=True,
            show_both=True,
            show_special=False,
            percentiles=[25, 75],
        )
        view = service.get_view("em-sands", options)

        assert [d.label for d in view.datasets] == [
            "alpha#0003",
            "Anonymous #1",
            "Anonymous #2",
            "zeta#0001",
            "25%",
            "75%",
        ]


class TestChartPoints:
    def test_one_shot_single_point_at_ar(self):
        meta = ExperimentMeta(id="x", name="X", one_shot=True)
        user = UserSeries(nickname="A", ar=1200, stats=[(0, 3), (1, 8), (2, 5)])

        assert ExperimentService.chart_points(user, meta) == [(1200, 8)]

    def test_curve_points_unchanged(self):
        meta = ExperimentMeta(id="x", name="X")
        user = UserSeries(nickname="A", ar=1200, stats=[(0, 3), (1, 8)])

        assert ExperimentService.chart_points(user, meta) == [(0, 3), (1, 8)]

    def test_special_series(self):
        meta = ExperimentMeta.model_validate(
            {"id": "x", "name": "X", "special": {"KQMS": [[0, 1]], "Max": [[0, 2]]}}
        )
        specials = ExperimentService.special_series(meta)

        assert [s.nickname for s in specials] == ["KQMS", "Max"]
        assert all(s.ar == -1 for s in specials)
