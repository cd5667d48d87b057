from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.db import get_db, Team
from app.errors import NotFoundError
from app.schemas.teams import SeasonStatsRead, TeamRead
from app.services.stats_repository import get_available_years, get_season_table, get_team_by_id
from app.utils.cache import cache, PREFIX_STATS, PREFIX_TEAMS, TTL_MEDIUM

router = APIRouter(tags=["Teams"])


def _team_payload(team: Team) -> dict:
    return TeamRead.model_validate(team).model_dump(by_alias=True)


@router.get("/teams")
def list_teams(db: Session = Depends(get_db)):
    cache_key = f"{PREFIX_TEAMS}:all"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    teams = db.query(Team).order_by(Team.name).all()
    result = {"teams": [_team_payload(team) for team in teams]}
    cache.set(cache_key, result, TTL_MEDIUM)
    return result


@router.get("/teams/{team_id}")
def get_team(team_id: str, db: Session = Depends(get_db)):
    cache_key = f"{PREFIX_TEAMS}:{team_id}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    try:
        team = get_team_by_id(db, team_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    result = _team_payload(team)
    cache.set(cache_key, result, TTL_MEDIUM)
    return result


@router.get("/team-stats")
def get_team_stats_table(
    year: Optional[int] = Query(None, description="Season; defaults to the most recent one"),
    db: Session = Depends(get_db),
):
    cache_key = f"{PREFIX_STATS}:{year if year is not None else 'latest'}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    available_years = get_available_years(db)
    if year is None:
        if not available_years:
            return {"data": [], "availableYears": [], "year": None}
        year = available_years[0]

    data = []
    seen_teams = set()
    for row in get_season_table(db, year):
        # One row per team; the lowest id wins
        if row["stats"].team_id in seen_teams:
            continue
        seen_teams.add(row["stats"].team_id)
        item = SeasonStatsRead.model_validate(row["stats"]).model_dump(by_alias=True)
        item["team"] = _team_payload(row["team"])
        data.append(item)

    result = {"data": data, "availableYears": available_years, "year": year}
    cache.set(cache_key, result, TTL_MEDIUM)
    return result
