from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class TeamRead(BaseModel):
    id: str
    name: str
    abbreviation: str
    conference: str
    division: str
    logo_url: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class SeasonStatsRead(BaseModel):
    id: int
    team_id: str
    year: Optional[int] = None

    yards_per_game: Optional[float] = None
    yards_per_game_last_3: Optional[float] = None
    yards_per_game_last_1: Optional[float] = None
    yards_per_game_home: Optional[float] = None
    yards_per_game_away: Optional[float] = None

    points_per_game: Optional[float] = None
    points_per_game_last_3: Optional[float] = None
    points_per_game_last_1: Optional[float] = None
    points_per_game_home: Optional[float] = None
    points_per_game_away: Optional[float] = None

    touchdowns_per_game: Optional[float] = None
    touchdowns_per_game_last_3: Optional[float] = None
    touchdowns_per_game_last_1: Optional[float] = None
    touchdowns_per_game_home: Optional[float] = None
    touchdowns_per_game_away: Optional[float] = None

    passing_yards_per_game: Optional[float] = None
    rushing_yards_per_game: Optional[float] = None
    opponent_yards_per_game: Optional[float] = None
    opponent_points_per_game: Optional[float] = None

    average_scoring_margin: Optional[float] = None
    average_scoring_margin_last_3: Optional[float] = None
    average_scoring_margin_last_1: Optional[float] = None
    average_scoring_margin_home: Optional[float] = None
    average_scoring_margin_away: Optional[float] = None

    yards_per_point: Optional[float] = None
    yards_per_point_last_3: Optional[float] = None
    yards_per_point_last_1: Optional[float] = None
    yards_per_point_home: Optional[float] = None
    yards_per_point_away: Optional[float] = None

    fpi: Optional[float] = None
    fpi_offense: Optional[float] = None
    fpi_defense: Optional[float] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
