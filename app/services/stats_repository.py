"""
Season Stats Repository

Resolves everything the scoring engine needs for a matchup:
- The latest season both teams have stats for
- Each team's stats row for that season, coerced into TeamStats
- League averages for that season

Null or unparseable stat values become 0 here, before they reach the
engine. A zero in a core field is what the engine reads as missing data.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db import SeasonStats, Team
from app.errors import InsufficientDataError, NotFoundError
from app.models import LeagueAverages, TeamStats
from app.utils.logging import get_logger

logger = get_logger(__name__)

# TeamStats attribute -> season_stats column
TEAM_STATS_COLUMNS = {
    "yards_per_game_season": "yards_per_game",
    "yards_per_game_last3": "yards_per_game_last_3",
    "yards_per_game_last1": "yards_per_game_last_1",
    "yards_per_game_home": "yards_per_game_home",
    "yards_per_game_away": "yards_per_game_away",
    "points_per_game_season": "points_per_game",
    "points_per_game_last3": "points_per_game_last_3",
    "points_per_game_last1": "points_per_game_last_1",
    "points_per_game_home": "points_per_game_home",
    "points_per_game_away": "points_per_game_away",
    "touchdowns_per_game_season": "touchdowns_per_game",
    "defensive_yards_allowed_season": "opponent_yards_per_game",
    "defensive_points_allowed_season": "opponent_points_per_game",
    "yards_per_point_season": "yards_per_point",
    "yards_per_point_last3": "yards_per_point_last_3",
    "yards_per_point_last1": "yards_per_point_last_1",
    "yards_per_point_home": "yards_per_point_home",
    "yards_per_point_away": "yards_per_point_away",
    "fpi_overall": "fpi",
    "fpi_offense": "fpi_offense",
    "fpi_defense": "fpi_defense",
}


@dataclass
class ModelInputs:
    year: int
    home_team: Team
    home_stats: TeamStats
    away_team: Team
    away_stats: TeamStats
    league: LeagueAverages


def null_to_zero(value: Any) -> float:
    """Coerce a stored value to a number; None, blanks, junk and NaN become 0."""
    if value is None or value == "":
        return 0
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return 0
    if isinstance(value, float) and math.isnan(value):
        return 0
    return value


def to_team_stats(row: SeasonStats) -> TeamStats:
    values = {attr: null_to_zero(getattr(row, column)) for attr, column in TEAM_STATS_COLUMNS.items()}
    return TeamStats(year=null_to_zero(row.year), **values)


def get_available_years(db: Session, team_id: Optional[str] = None) -> List[int]:
    """Distinct seasons with stats, newest first."""
    query = db.query(SeasonStats.year).filter(SeasonStats.year.isnot(None))
    if team_id is not None:
        query = query.filter(SeasonStats.team_id == team_id)
    return [year for (year,) in query.distinct().order_by(SeasonStats.year.desc()).all()]


def resolve_latest_common_year(db: Session, home_team_id: str, away_team_id: str) -> int:
    """
    Latest season both teams have stats for. Falls back to the newest
    season across all teams when they share none.
    """
    home_years = set(get_available_years(db, home_team_id))
    away_years = set(get_available_years(db, away_team_id))

    common_years = home_years & away_years
    if common_years:
        return max(common_years)

    global_max = db.query(func.max(SeasonStats.year)).scalar()
    if global_max is None:
        raise NotFoundError("No season stats data found")

    logger.info(
        f"No common season for {home_team_id} and {away_team_id}, falling back to {global_max}"
    )
    return int(global_max)


def get_team_stats(db: Session, team_id: str, year: int) -> TeamStats:
    # Duplicate rows for a team/season: the lowest id wins
    row = (
        db.query(SeasonStats)
        .filter(SeasonStats.team_id == team_id, SeasonStats.year == year)
        .order_by(SeasonStats.id)
        .first()
    )
    if row is None:
        raise NotFoundError(f"No stats found for team {team_id} in year {year}")
    return to_team_stats(row)


def _valid_mean(values: np.ndarray) -> Optional[float]:
    valid = values[values > 0]
    if valid.size == 0:
        return None
    return float(valid.mean())


def get_league_averages(db: Session, year: int) -> LeagueAverages:
    rows = (
        db.query(
            SeasonStats.opponent_yards_per_game,
            SeasonStats.opponent_points_per_game,
            SeasonStats.yards_per_point,
        )
        .filter(
            SeasonStats.year == year,
            SeasonStats.opponent_yards_per_game.isnot(None),
            SeasonStats.opponent_points_per_game.isnot(None),
            SeasonStats.yards_per_point.isnot(None),
        )
        .all()
    )
    if not rows:
        raise NotFoundError(f"No league data found for year {year}")

    table = np.array([tuple(row) for row in rows], dtype=float)
    yards_allowed = _valid_mean(table[:, 0])
    points_allowed = _valid_mean(table[:, 1])
    yards_per_point = _valid_mean(table[:, 2])

    if yards_allowed is None or points_allowed is None or yards_per_point is None:
        raise InsufficientDataError(f"Insufficient valid data for league averages in year {year}")

    return LeagueAverages(
        league_avg_defensive_yards_allowed=yards_allowed,
        league_avg_defensive_points_allowed=points_allowed,
        league_avg_yards_per_point=yards_per_point,
    )


def get_team_by_id(db: Session, team_id: str) -> Team:
    team = db.query(Team).filter(Team.id == team_id).first()
    if team is None:
        raise NotFoundError(f"Team not found: {team_id}")
    return team


def get_model_inputs(db: Session, home_team_id: str, away_team_id: str) -> ModelInputs:
    year = resolve_latest_common_year(db, home_team_id, away_team_id)

    home_team = get_team_by_id(db, home_team_id)
    away_team = get_team_by_id(db, away_team_id)

    return ModelInputs(
        year=year,
        home_team=home_team,
        home_stats=get_team_stats(db, home_team_id, year),
        away_team=away_team,
        away_stats=get_team_stats(db, away_team_id, year),
        league=get_league_averages(db, year),
    )


def get_season_table(db: Session, year: int) -> List[Dict[str, Any]]:
    """Every team's stats row for a season, joined with the team, ordered by team name."""
    rows = (
        db.query(SeasonStats, Team)
        .join(Team, SeasonStats.team_id == Team.id)
        .filter(SeasonStats.year == year)
        .order_by(Team.name, SeasonStats.id)
        .all()
    )
    return [{"stats": stats, "team": team} for stats, team in rows]
