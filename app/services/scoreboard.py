"""
Scoreboard Service

Reads games for a season, derives their live status and groups them by
week in kickoff order.
"""

from itertools import groupby
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.db import Game
from app.schemas.games import ScoreboardGame, ScoreboardWeek
from app.utils.logging import get_logger

logger = get_logger(__name__)

FINAL_PERIOD = "F"
ZERO_CLOCK = "0:00"


def game_status_flags(game: Game) -> Tuple[bool, bool, bool]:
    """(is_over, is_in_progress, has_started) for one game."""
    is_over = game.game_status == "post" or game.period == FINAL_PERIOD
    is_in_progress = game.game_status == "in" or bool(
        game.period and game.period != FINAL_PERIOD and game.display_clock != ZERO_CLOCK
    )
    has_started = (
        game.away_score is not None
        or game.home_score is not None
        or is_in_progress
        or is_over
    )
    return is_over, is_in_progress, has_started


def to_scoreboard_game(game: Game) -> ScoreboardGame:
    is_over, is_in_progress, has_started = game_status_flags(game)
    return ScoreboardGame(
        game_key=game.game_id,
        date=game.datetime_utc.strftime("%Y-%m-%dT%H:%M:%SZ"),
        week=game.week_num,
        season=game.season_year,
        away_team=game.away_abbr,
        home_team=game.home_abbr,
        away_score=game.away_score,
        home_score=game.home_score,
        quarter=game.period,
        channel=game.broadcasts,
        is_over=is_over,
        is_in_progress=is_in_progress,
        has_started=has_started,
        week_name=game.week_name,
        away_display_name=game.away_display_name,
        home_display_name=game.home_display_name,
        game_status=game.game_status,
        display_clock=game.display_clock,
        situation=game.situation,
        total_points=game.total_points,
        over_under=game.over_under,
        spread=game.spread,
        favored_team=game.favored_team,
    )


def get_games_by_week(db: Session, season: int, week: Optional[int] = None) -> List[Dict[str, Any]]:
    query = db.query(Game).filter(Game.season_year == season)
    if week is not None:
        query = query.filter(Game.week_num == week)
    games = query.order_by(Game.week_num, Game.datetime_utc, Game.game_id).all()

    weeks = []
    for week_num, week_games in groupby(games, key=lambda game: game.week_num):
        schedule = ScoreboardWeek(week=week_num, games=[to_scoreboard_game(g) for g in week_games])
        weeks.append(schedule.model_dump(by_alias=True))

    logger.debug(f"Scoreboard {season} week={week}: {len(games)} games in {len(weeks)} weeks")
    return weeks
