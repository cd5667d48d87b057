from typing import List, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_pascal


class ScoreboardGame(BaseModel):
    """Keys on the wire follow SportsData.io score objects (GameKey, HomeTeam, ...)."""
    game_key: str
    date: str
    week: int
    season: int
    away_team: str
    home_team: str
    away_score: Optional[int] = None
    home_score: Optional[int] = None
    quarter: Optional[str] = None
    channel: Optional[str] = None
    is_over: bool
    is_in_progress: bool
    has_started: bool

    week_name: Optional[str] = None
    away_display_name: Optional[str] = None
    home_display_name: Optional[str] = None
    game_status: Optional[str] = None
    display_clock: Optional[str] = None
    situation: Optional[str] = None
    total_points: Optional[float] = None
    over_under: Optional[float] = None
    spread: Optional[float] = None
    favored_team: Optional[str] = None

    class Config:
        alias_generator = to_pascal
        populate_by_name = True


class ScoreboardWeek(BaseModel):
    week: int
    games: List[ScoreboardGame]
