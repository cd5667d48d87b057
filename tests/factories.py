from datetime import datetime

from app.db import Game, SeasonStats, Team


def make_team(team_id: str, name: str, conference: str = "AFC", division: str = "East") -> Team:
    return Team(
        id=team_id,
        name=name,
        abbreviation=team_id,
        conference=conference,
        division=division,
        logo_url=f"https://example.com/{team_id}.svg",
        primary_color="#000000",
        secondary_color="#FFFFFF",
    )


def make_stats(team_id: str, year: int, **overrides) -> SeasonStats:
    values = dict(
        yards_per_game=350.0,
        yards_per_game_last_3=350.0,
        yards_per_game_last_1=350.0,
        yards_per_game_home=355.0,
        yards_per_game_away=345.0,
        points_per_game=22.0,
        points_per_game_last_3=22.0,
        points_per_game_last_1=22.0,
        points_per_game_home=23.0,
        points_per_game_away=21.0,
        touchdowns_per_game=2.6,
        opponent_yards_per_game=340.0,
        opponent_points_per_game=22.0,
        yards_per_point=15.0,
        yards_per_point_last_3=15.0,
        yards_per_point_last_1=15.0,
        yards_per_point_home=14.8,
        yards_per_point_away=15.2,
        fpi=0.0,
        fpi_offense=0.0,
        fpi_defense=0.0,
    )
    values.update(overrides)
    return SeasonStats(team_id=team_id, year=year, **values)


def make_game(game_id: str, season: int, week: int, kickoff: datetime, away: str, home: str, **overrides) -> Game:
    values = dict(
        season_type=2,
        week_name=f"Week {week}",
        away_display_name=away,
        home_display_name=home,
        game_status="pre",
    )
    values.update(overrides)
    return Game(
        game_id=game_id,
        season_year=season,
        week_num=week,
        datetime_utc=kickoff,
        away_abbr=away,
        home_abbr=home,
        **values,
    )
