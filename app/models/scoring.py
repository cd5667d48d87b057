"""
Game Scoring Engine

Turns two teams' season statistics plus league averages into a predicted
score, spread, win probability, confidence and factor breakdown.

Both the fixed-weight model and the user-tunable model run through the
same `score_game` pipeline; they differ only in the ScoringConfig they
pass in:
1. Weighted offensive yards (season / last 3 / last 1 / home-away split)
2. Opponent defensive yards adjustment
3. Effective yards per point, blended with the league average
4. Raw score = adjusted yards / effective YPP
5. Optional points-per-game calibration
6. Opponent defensive points adjustment
7. FPI offense-vs-defense multiplier and FPI overall additive
8. Optional home-field boost
9. Deterministic seeded jitter
10. Score clamp, derived metrics, contributions, then per-output rounding

The engine is pure: no I/O, no shared state, and identical inputs
(including the seed) always give identical output.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from app.models import constants as c
from app.models.helpers import blend, clamp, logistic, random_offset, round_to
from app.models.types import (
    Contribution,
    LeagueAverages,
    PredictionSettings,
    PredictResult,
    TeamStats,
)

Bounds = Tuple[float, float]


@dataclass(frozen=True)
class ScoringConfig:
    """Every knob of the scoring pipeline."""
    season_weight: float
    last3_weight: float
    last1_weight: float
    home_away_weight: float

    home_ypp_blend: Tuple[float, float, float]
    away_ypp_blend: Tuple[float, float, float]
    league_ypp_weight: float
    ypp_bounds: Bounds

    defensive_points_factor: float
    fpi_relative_factor: float
    fpi_additive_weight: float

    score_bounds: Bounds

    defensive_yard_bounds: Optional[Bounds] = None
    defensive_points_bounds: Optional[Bounds] = None
    fpi_relative_bounds: Optional[Bounds] = None

    # (projection share, PPG share); None skips the calibration step
    ppg_calibration: Optional[Tuple[float, float]] = None
    home_field_boost: float = 0.0
    jitter_scale: float = 1.0

    defense_contribution_scale: float = 1.0
    home_field_contribution_scale: float = c.HOME_AWAY_WEIGHT
    recent_form_contribution_scale: float = 1.0
    fpi_contribution_scale: float = 1.0

    @classmethod
    def from_settings(cls, settings: PredictionSettings) -> "ScoringConfig":
        season, last3, last1, home_away = normalized_weights(settings)
        return cls(
            season_weight=season,
            last3_weight=last3,
            last1_weight=last1,
            home_away_weight=home_away,
            home_ypp_blend=c.ENHANCED_YPP_BLEND,
            away_ypp_blend=c.ENHANCED_YPP_BLEND,
            league_ypp_weight=c.LEAGUE_YPP_BLEND_WEIGHT,
            ypp_bounds=c.ENHANCED_YPP_BOUNDS,
            defensive_points_factor=settings.defensive_strength,
            fpi_relative_factor=settings.fpi_edge * c.FPI_EDGE_RELATIVE_SCALE,
            fpi_additive_weight=settings.fpi_edge * c.FPI_EDGE_ADDITIVE_SCALE,
            score_bounds=c.ENHANCED_SCORE_BOUNDS,
            defensive_yard_bounds=c.DEFENSIVE_YARD_FACTOR_BOUNDS,
            defensive_points_bounds=c.DEFENSIVE_STRENGTH_BOUNDS,
            fpi_relative_bounds=c.FPI_OFF_DEF_BOUNDS,
            ppg_calibration=(c.PPG_PROJECTION_WEIGHT, c.PPG_CALIBRATION_WEIGHT),
            home_field_boost=settings.home_field_advantage * c.HOME_FIELD_BOOST_MULTIPLIER,
            jitter_scale=c.ENHANCED_JITTER_SCALE,
            defense_contribution_scale=settings.defensive_strength,
            home_field_contribution_scale=settings.home_field_advantage,
            recent_form_contribution_scale=settings.recent_form,
            fpi_contribution_scale=settings.fpi_edge,
        )


FIXED_CONFIG = ScoringConfig(
    season_weight=c.SEASON_WEIGHT,
    last3_weight=c.LAST3_WEIGHT,
    last1_weight=c.LAST1_WEIGHT,
    home_away_weight=c.HOME_AWAY_WEIGHT,
    home_ypp_blend=c.FIXED_HOME_YPP_BLEND,
    away_ypp_blend=c.FIXED_AWAY_YPP_BLEND,
    league_ypp_weight=c.LEAGUE_YPP_BLEND_WEIGHT,
    ypp_bounds=(c.MIN_EFFECTIVE_YPP, math.inf),
    defensive_points_factor=c.DEFENSIVE_POINTS_ADJ_FACTOR,
    fpi_relative_factor=c.FPI_RELATIVE_FACTOR,
    fpi_additive_weight=c.FPI_ADDITIVE_WEIGHT,
    score_bounds=(0, math.inf),
)


def normalized_weights(settings: PredictionSettings) -> Tuple[float, float, float, float]:
    """
    Season / last-3 / last-1 / home-away weights for the tunable model.

    Whatever recent form takes away from (or adds to) its 0.30 default is
    moved into the season weight, then all four are rescaled to sum to 1.
    """
    last3 = settings.recent_form
    season = c.ENHANCED_BASE_SEASON_WEIGHT + (c.LAST3_WEIGHT - last3)
    last1 = c.ENHANCED_LAST1_WEIGHT
    home_away = settings.home_field_advantage

    total = season + last3 + last1 + home_away
    return season / total, last3 / total, last1 / total, home_away / total


def _divide(numerator: float, denominator: float) -> float:
    # IEEE semantics instead of ZeroDivisionError; bad league data must not crash
    try:
        return numerator / denominator
    except ZeroDivisionError:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _bounded(value: float, bounds: Optional[Bounds]) -> float:
    if bounds is None:
        return value
    return clamp(value, bounds[0], bounds[1])


def _seed_suffix(year: float) -> str:
    if isinstance(year, float) and year.is_integer():
        return str(int(year))
    return str(year)


def _weighted_yards(stats: TeamStats, split_yards: float, config: ScoringConfig) -> float:
    return (
        stats.yards_per_game_season * config.season_weight
        + stats.yards_per_game_last3 * config.last3_weight
        + stats.yards_per_game_last1 * config.last1_weight
        + split_yards * config.home_away_weight
    )


def _effective_ypp(
    stats: TeamStats,
    weights: Tuple[float, float, float],
    league: LeagueAverages,
    config: ScoringConfig,
) -> float:
    season_w, last3_w, last1_w = weights
    team_ypp = (
        stats.yards_per_point_season * season_w
        + stats.yards_per_point_last3 * last3_w
        + stats.yards_per_point_last1 * last1_w
    )
    blended = blend(team_ypp, league.league_avg_yards_per_point, config.league_ypp_weight)
    return clamp(blended, config.ypp_bounds[0], config.ypp_bounds[1])


def _project_score(
    own: TeamStats,
    opponent: TeamStats,
    adjusted_yards: float,
    effective_ypp: float,
    league: LeagueAverages,
    seed: str,
    config: ScoringConfig,
    is_home: bool,
) -> float:
    score = adjusted_yards / effective_ypp

    if config.ppg_calibration is not None:
        projection_share, ppg_share = config.ppg_calibration
        score = score * projection_share + own.points_per_game_season * ppg_share

    points_ratio = _divide(
        opponent.defensive_points_allowed_season, league.league_avg_defensive_points_allowed
    )
    factor = config.defensive_points_factor
    score *= _bounded(factor + (1 - factor) * points_ratio, config.defensive_points_bounds)

    fpi_diff = own.fpi_offense - opponent.fpi_defense
    score *= _bounded(1 + config.fpi_relative_factor * (fpi_diff / 10), config.fpi_relative_bounds)
    score += config.fpi_additive_weight * own.fpi_overall

    if is_home and config.home_field_boost:
        score += config.home_field_boost

    jitter = random_offset(seed + _seed_suffix(own.year)) * config.jitter_scale
    score *= 1 + jitter

    return clamp(score, config.score_bounds[0], config.score_bounds[1])


def _confidence(spread: float, home: TeamStats, away: TeamStats) -> float:
    confidence = c.BASE_CONFIDENCE
    confidence += min(abs(spread) / c.SPREAD_CONFIDENCE_DIVISOR, c.MAX_SPREAD_CONFIDENCE)
    if home.has_missing_stats() or away.has_missing_stats():
        confidence -= c.MISSING_STATS_PENALTY
    return clamp(confidence, 0, 1)


def _contributions(
    home: TeamStats,
    away: TeamStats,
    league: LeagueAverages,
    adjusted_home_yards: float,
    adjusted_away_yards: float,
    home_ypp: float,
    away_ypp: float,
    config: ScoringConfig,
) -> List[Contribution]:
    offense = _divide(
        abs(adjusted_home_yards - adjusted_away_yards),
        max(adjusted_home_yards, adjusted_away_yards),
    )
    efficiency = _divide(abs(away_ypp - home_ypp), max(home_ypp, away_ypp)) * 0.5
    defense = _divide(
        abs(away.defensive_points_allowed_season - home.defensive_points_allowed_season),
        league.league_avg_defensive_points_allowed,
    )
    split_diff = (
        abs(home.yards_per_game_home - home.yards_per_game_away)
        + abs(away.yards_per_game_away - away.yards_per_game_home)
    )
    home_field = _divide(
        split_diff, max(home.yards_per_game_season, away.yards_per_game_season)
    ) * config.home_field_contribution_scale
    recent_form = _divide(
        abs(home.points_per_game_last3 - away.points_per_game_last3),
        max(home.points_per_game_last3, away.points_per_game_last3, 1),
    )
    fpi_edge = abs(home.fpi_overall - away.fpi_overall)

    return [
        Contribution(
            "offense", offense,
            "home" if adjusted_home_yards > adjusted_away_yards else "away",
        ),
        # Lower yards per point is the more efficient offense
        Contribution("efficiency", efficiency, "home" if home_ypp < away_ypp else "away"),
        Contribution(
            "defense", defense * config.defense_contribution_scale,
            "home" if away.defensive_points_allowed_season > home.defensive_points_allowed_season else "away",
        ),
        Contribution("homeField", home_field, "home"),
        Contribution(
            "recentForm", recent_form * config.recent_form_contribution_scale,
            "home" if home.points_per_game_last3 > away.points_per_game_last3 else "away",
        ),
        Contribution(
            "fpiEdge", fpi_edge * config.fpi_contribution_scale,
            "home" if home.fpi_overall > away.fpi_overall else "away",
        ),
    ]


def score_game(
    home: TeamStats,
    away: TeamStats,
    league: LeagueAverages,
    seed: str,
    config: ScoringConfig,
) -> PredictResult:
    # Home team uses its home split, away team its away split
    home_yards = _weighted_yards(home, home.yards_per_game_home, config)
    away_yards = _weighted_yards(away, away.yards_per_game_away, config)

    home_yard_factor = _bounded(
        _divide(away.defensive_yards_allowed_season, league.league_avg_defensive_yards_allowed),
        config.defensive_yard_bounds,
    )
    away_yard_factor = _bounded(
        _divide(home.defensive_yards_allowed_season, league.league_avg_defensive_yards_allowed),
        config.defensive_yard_bounds,
    )
    adjusted_home_yards = home_yards * home_yard_factor
    adjusted_away_yards = away_yards * away_yard_factor

    home_ypp = _effective_ypp(home, config.home_ypp_blend, league, config)
    away_ypp = _effective_ypp(away, config.away_ypp_blend, league, config)

    home_score = _project_score(
        home, away, adjusted_home_yards, home_ypp, league, seed, config, is_home=True
    )
    away_score = _project_score(
        away, home, adjusted_away_yards, away_ypp, league, seed, config, is_home=False
    )

    # Derived metrics use the unrounded scores; each output is rounded on its own
    spread = home_score - away_score
    total = home_score + away_score

    return PredictResult(
        home_score=round_to(home_score, 1),
        away_score=round_to(away_score, 1),
        total=round_to(total, 1),
        spread=round_to(spread, 1),
        predicted_winner="Home" if home_score > away_score else "Away",
        win_probability_home=round_to(logistic(c.LOGISTIC_K * spread), 3),
        confidence=round_to(_confidence(spread, home, away), 2),
        contributions=_contributions(
            home, away, league, adjusted_home_yards, adjusted_away_yards,
            home_ypp, away_ypp, config,
        ),
        adjusted_home_yards=round_to(adjusted_home_yards, 1),
        adjusted_away_yards=round_to(adjusted_away_yards, 1),
    )


def predict_game(
    home: TeamStats,
    away: TeamStats,
    league: LeagueAverages,
    seed: str,
    config: ScoringConfig = FIXED_CONFIG,
) -> PredictResult:
    """
    Fixed-weight prediction.

    League averages must be positive; zero denominators are not rejected
    and surface as NaN or infinity in the result.
    """
    return score_game(home, away, league, seed, config)


def predict_game_enhanced(
    home: TeamStats,
    away: TeamStats,
    league: LeagueAverages,
    seed: str,
    settings: Optional[PredictionSettings] = None,
) -> PredictResult:
    """Prediction driven by user-tunable settings (clamped by the caller)."""
    return score_game(home, away, league, seed, ScoringConfig.from_settings(settings or PredictionSettings()))
