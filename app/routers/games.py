from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import SCOREBOARD_DEFAULT_SEASON
from app.db import get_db
from app.services.scoreboard import get_games_by_week
from app.services.sportsdata import CACHE_CONTROL
from app.utils.cache import cache, PREFIX_GAMES, TTL_SHORT
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Games"])


@router.get("/games")
def list_games(
    response: Response,
    season: int = Query(SCOREBOARD_DEFAULT_SEASON, description="Season year"),
    week: Optional[int] = Query(None, description="Only this week"),
    db: Session = Depends(get_db),
):
    """Scoreboard for a season, grouped by week."""
    cache_key = f"{PREFIX_GAMES}:{season}:{week if week is not None else 'all'}"
    weeks = cache.get(cache_key)
    if weeks is None:
        try:
            weeks = get_games_by_week(db, season, week)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch games for season {season}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch games from database")
        cache.set(cache_key, weeks, TTL_SHORT)

    response.headers["Cache-Control"] = CACHE_CONTROL
    return weeks
