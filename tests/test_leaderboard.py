"""
Tests for leaderboard ranking.
"""

from __future__ import annotations

from guoba_data.core.models import PercentileSeries, UserSeries
from guoba_data.leaderboard import LeaderboardRanker, rank
from guoba_data.percentiles import CurveSampler


class TestRank:
    def test_minimum_x_scenario(self, scenario_users):
        rows = rank(scenario_users, minimum_x=5)

        assert [r.nickname for r in rows] == ["B", "A"]
        assert rows[0].best_sample == (10, 30)
        assert rows[1].best_sample == (10, 20)

    def test_default_minimum_uses_first_sample(self, scenario_users):
        rows = rank(scenario_users)

        assert [r.nickname for r in rows] == ["A", "B"]
        assert [r.value for r in rows] == [10, 5]

    def test_rows_carry_user_details(self, scenario_users):
        row = rank(scenario_users, minimum_x=5)[0]

        assert row.rank == 1
        assert row.ar == 200
        assert row.affiliation == "KQM Leaks"

    def test_undefined_values_last_in_input_order(self):
        users = [
            UserSeries(nickname="short-1", stats=[(0, 100)]),
            UserSeries(nickname="long-low", stats=[(0, 1), (50, 2)]),
            UserSeries(nickname="none", stats=[]),
            UserSeries(nickname="short-2", stats=[(10, 99)]),
            UserSeries(nickname="long-high", stats=[(60, 50)]),
        ]
        rows = rank(users, minimum_x=20)

        assert [r.nickname for r in rows] == [
            "long-high",
            "long-low",
            "short-1",
            "none",
            "short-2",
        ]
        assert [r.best_sample is None for r in rows] == [False, False, True, True, True]
        assert rows[-1].value is None

    def test_ties_keep_input_order_with_distinct_ranks(self):
        users = [
            UserSeries(nickname="c", stats=[(0, 7)]),
            UserSeries(nickname="a", stats=[(0, 9)]),
            UserSeries(nickname="b", stats=[(0, 7)]),
        ]
        rows = rank(users)

        assert [r.nickname for r in rows] == ["a", "c", "b"]
        assert [r.rank for r in rows] == [1, 2, 3]

    def test_one_shot_ignores_minimum_x(self):
        users = [
            UserSeries(nickname="low", ar=5, stats=[(0, 10)]),
            UserSeries(nickname="high", ar=25, stats=[(0, 20)]),
            UserSeries(nickname="empty", ar=15, stats=[]),
        ]
        rows = rank(users, minimum_x=1_000_000, one_shot=True)

        assert [r.nickname for r in rows] == ["high", "low", "empty"]
        assert rows[0].best_sample == (25, 20)
        assert rows[2].best_sample is None

    def test_synthetic_series_are_not_ranked(self, scenario_users):
        users = scenario_users + [
            PercentileSeries(nickname="100%", percentile=100, stats=[(0, 999)]),
            UserSeries(nickname="KQMS", ar=-1, stats=[(0, 999)]),
        ]
        assert [r.nickname for r in rank(users)] == ["A", "B"]

    def test_empty(self):
        assert rank([], minimum_x=10) == []

    def test_total_order(self):
        users = [
            UserSeries(nickname=str(i), stats=[(i % 3, (i * 7) % 5)]) for i in range(12)
        ]
        rows = LeaderboardRanker(CurveSampler()).rank(users, minimum_x=1)

        defined = [r for r in rows if r.value is not None]
        undefined = [r for r in rows if r.value is None]
        assert rows == defined + undefined
        for earlier, later in zip(defined, defined[1:]):
            assert earlier.value >= later.value
            if earlier.value == later.value:
                assert int(earlier.nickname) < int(later.nickname)
        assert [int(r.nickname) for r in undefined] == sorted(int(r.nickname) for r in undefined)
