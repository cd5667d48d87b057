"""
Data contracts consumed and produced by the scoring engine.

Attributes are snake_case; `to_dict()` emits the camelCase field names
used on the wire.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Literal, Mapping

from app.models.constants import DEFAULT_SETTINGS, SETTING_RANGES

Direction = Literal["home", "away"]
Winner = Literal["Home", "Away"]


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _camel_dict(obj: Any) -> Dict[str, Any]:
    return {to_camel(f.name): getattr(obj, f.name) for f in fields(obj)}


@dataclass
class TeamStats:
    """Per-team, per-season statistics snapshot. Missing values arrive as 0."""
    year: float = 0

    # Offense - yards per game
    yards_per_game_season: float = 0.0
    yards_per_game_last3: float = 0.0
    yards_per_game_last1: float = 0.0
    yards_per_game_home: float = 0.0
    yards_per_game_away: float = 0.0

    # Offense - points per game
    points_per_game_season: float = 0.0
    points_per_game_last3: float = 0.0
    points_per_game_last1: float = 0.0
    points_per_game_home: float = 0.0
    points_per_game_away: float = 0.0

    touchdowns_per_game_season: float = 0.0

    # Defense - allowed per game
    defensive_yards_allowed_season: float = 0.0
    defensive_points_allowed_season: float = 0.0

    # Efficiency - yards per point (lower is better)
    yards_per_point_season: float = 0.0
    yards_per_point_last3: float = 0.0
    yards_per_point_last1: float = 0.0
    yards_per_point_home: float = 0.0
    yards_per_point_away: float = 0.0

    # Power ratings, 0 = league average
    fpi_overall: float = 0.0
    fpi_offense: float = 0.0
    fpi_defense: float = 0.0

    def has_missing_stats(self) -> bool:
        # Zero in a core field is the sentinel for absent data
        return (
            self.yards_per_game_season == 0
            or self.points_per_game_season == 0
            or self.defensive_yards_allowed_season == 0
        )

    def to_dict(self) -> Dict[str, Any]:
        return _camel_dict(self)


@dataclass
class LeagueAverages:
    """League-wide means for one season. All values are used as denominators."""
    league_avg_defensive_yards_allowed: float
    league_avg_defensive_points_allowed: float
    league_avg_yards_per_point: float

    def to_dict(self) -> Dict[str, Any]:
        return _camel_dict(self)


@dataclass
class PredictionSettings:
    recent_form: float = DEFAULT_SETTINGS["recent_form"]
    home_field_advantage: float = DEFAULT_SETTINGS["home_field_advantage"]
    defensive_strength: float = DEFAULT_SETTINGS["defensive_strength"]
    fpi_edge: float = DEFAULT_SETTINGS["fpi_edge"]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PredictionSettings":
        """
        Build settings from snake_case or camelCase keys. Missing, null or
        zero values fall back to the defaults, then every value is clamped.
        """
        values = {}
        for name, default in DEFAULT_SETTINGS.items():
            raw = data.get(name, data.get(to_camel(name)))
            values[name] = float(raw) if raw else default
        return cls(**values).clamped()

    def clamped(self) -> "PredictionSettings":
        updates = {}
        for name, (low, high) in SETTING_RANGES.items():
            updates[name] = max(low, min(high, getattr(self, name)))
        return replace(self, **updates)

    def to_dict(self) -> Dict[str, float]:
        return _camel_dict(self)


@dataclass
class Contribution:
    key: str
    value: float
    direction: Direction

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "value": self.value, "direction": self.direction}


@dataclass
class PredictResult:
    home_score: float
    away_score: float
    total: float
    spread: float
    predicted_winner: Winner
    win_probability_home: float
    confidence: float
    contributions: List[Contribution] = field(default_factory=list)
    adjusted_home_yards: float = 0.0
    adjusted_away_yards: float = 0.0

    def contribution(self, key: str) -> Contribution:
        for item in self.contributions:
            if item.key == key:
                return item
        raise KeyError(key)

    def to_dict(self) -> Dict[str, Any]:
        data = _camel_dict(self)
        data["contributions"] = [c.to_dict() for c in self.contributions]
        return data
