"""
Tests for model-input resolution over the season_stats table.
"""

import pytest

from app.db import SeasonStats
from app.errors import InsufficientDataError, NotFoundError
from app.services.stats_repository import (
    get_available_years,
    get_league_averages,
    get_model_inputs,
    get_team_by_id,
    get_team_stats,
    null_to_zero,
    resolve_latest_common_year,
    to_team_stats,
)
from factories import make_stats, make_team


class TestNullToZero:

    @pytest.mark.parametrize("value, expected", [
        (None, 0),
        ("", 0),
        ("12.5", 12.5),
        ("n/a", 0),
        (float("nan"), 0),
        (7, 7),
        (3.25, 3.25),
    ])
    def test_coercion(self, value, expected):
        assert null_to_zero(value) == expected

    def test_row_with_nulls(self):
        row = SeasonStats(team_id="KC", year=2024, yards_per_game=380.0, fpi=None)
        stats = to_team_stats(row)
        assert stats.year == 2024
        assert stats.yards_per_game_season == 380.0
        assert stats.points_per_game_season == 0
        assert stats.fpi_overall == 0
        assert stats.has_missing_stats()

    def test_column_mapping(self):
        row = make_stats(
            "KC", 2024, opponent_yards_per_game=333.0, opponent_points_per_game=19.5,
            yards_per_point_last_3=14.2, fpi_offense=2.5,
        )
        stats = to_team_stats(row)
        assert stats.defensive_yards_allowed_season == 333.0
        assert stats.defensive_points_allowed_season == 19.5
        assert stats.yards_per_point_last3 == 14.2
        assert stats.fpi_offense == 2.5


class TestYearResolution:

    def test_latest_common_year(self, league):
        assert resolve_latest_common_year(league, "KC", "BUF") == 2024

    def test_common_year_ignores_newer_one_sided_season(self, league):
        league.add(make_stats("KC", 2025))
        league.commit()
        assert resolve_latest_common_year(league, "KC", "BUF") == 2024

    def test_falls_back_to_global_max(self, league):
        league.add(make_team("MIA", "Miami Dolphins"))
        league.add(make_stats("MIA", 2020))
        league.add(make_stats("NE", 2025))
        league.commit()
        assert resolve_latest_common_year(league, "MIA", "KC") == 2025

    def test_no_stats_at_all(self, db_session):
        with pytest.raises(NotFoundError):
            resolve_latest_common_year(db_session, "KC", "BUF")

    def test_available_years_desc(self, league):
        assert get_available_years(league) == [2024, 2023]
        assert get_available_years(league, "NE") == [2024]


class TestTeamStats:

    def test_get_team_stats(self, league):
        stats = get_team_stats(league, "KC", 2024)
        assert stats.yards_per_game_season == 400.0
        assert stats.fpi_overall == 5.0

    def test_missing_row(self, league):
        with pytest.raises(NotFoundError, match="No stats found for team NE in year 2023"):
            get_team_stats(league, "NE", 2023)

    def test_duplicate_rows_lowest_id_wins(self, league):
        league.add(make_stats("NE", 2024, yards_per_game=999.0))
        league.commit()
        assert get_team_stats(league, "NE", 2024).yards_per_game_season == 350.0

    def test_get_team_by_id(self, league):
        assert get_team_by_id(league, "KC").name == "Kansas City Chiefs"
        with pytest.raises(NotFoundError, match="Team not found: XXX"):
            get_team_by_id(league, "XXX")


class TestLeagueAverages:

    def test_means(self, league):
        averages = get_league_averages(league, 2024)
        assert averages.league_avg_defensive_yards_allowed == pytest.approx((360 + 340 + 350) / 3)
        assert averages.league_avg_defensive_points_allowed == pytest.approx((20 + 24 + 22) / 3)
        assert averages.league_avg_yards_per_point == pytest.approx(15.0)

    def test_skips_null_and_non_positive(self, league):
        league.add(make_team("MIA", "Miami Dolphins"))
        league.add(make_stats("MIA", 2024, opponent_yards_per_game=0.0, opponent_points_per_game=-3.0))
        league.add(make_stats("MIA", 2024, opponent_yards_per_game=None))
        league.commit()
        averages = get_league_averages(league, 2024)
        assert averages.league_avg_defensive_yards_allowed == pytest.approx((360 + 340 + 350) / 3)
        assert averages.league_avg_defensive_points_allowed == pytest.approx((20 + 24 + 22) / 3)
        assert averages.league_avg_yards_per_point == pytest.approx(15.0)

    def test_no_rows(self, league):
        with pytest.raises(NotFoundError, match="No league data found for year 1999"):
            get_league_averages(league, 1999)

    def test_no_valid_values(self, db_session):
        db_session.add(make_team("KC", "Kansas City Chiefs"))
        db_session.add(make_stats("KC", 2024, opponent_yards_per_game=0.0))
        db_session.commit()
        with pytest.raises(InsufficientDataError):
            get_league_averages(db_session, 2024)


class TestModelInputs:

    def test_assembles_inputs(self, league):
        inputs = get_model_inputs(league, "KC", "BUF")
        assert inputs.year == 2024
        assert inputs.home_team.id == "KC"
        assert inputs.away_team.id == "BUF"
        assert inputs.home_stats.yards_per_game_season == 400.0
        assert inputs.away_stats.yards_per_game_season == 350.0
        assert inputs.league.league_avg_yards_per_point == pytest.approx(15.0)

    def test_unknown_team(self, league):
        league.add(make_stats("GHOST", 2024))
        league.commit()
        with pytest.raises(NotFoundError, match="Team not found"):
            get_model_inputs(league, "GHOST", "KC")
