"""
Prediction service: resolves model inputs for a matchup, runs the scoring
engine and shapes the API response.
"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.db import Team
from app.errors import InvalidArgumentError
from app.models import MODEL_REGISTRY, PredictionSettings
from app.services.stats_repository import get_model_inputs
from app.utils.logging import get_logger

logger = get_logger(__name__)


def make_seed(home_team_id: str, away_team_id: str) -> str:
    return f"{home_team_id}_{away_team_id}"


def team_to_dict(team: Team) -> Dict[str, Any]:
    return {
        "id": team.id,
        "name": team.name,
        "abbreviation": team.abbreviation,
        "conference": team.conference,
        "division": team.division,
        "logoUrl": team.logo_url,
        "primaryColor": team.primary_color,
        "secondaryColor": team.secondary_color,
    }


def run_prediction(
    db: Session,
    home_team_id: str,
    away_team_id: str,
    settings: Optional[PredictionSettings] = None,
) -> Dict[str, Any]:
    """
    Predict a matchup.

    Without settings the fixed-weight model runs; with settings the tunable
    model runs on the clamped values. Raises InvalidArgumentError for
    identical team ids and NotFoundError when data is missing.
    """
    if not home_team_id or not away_team_id:
        raise InvalidArgumentError("Both homeId and awayId are required")
    if home_team_id == away_team_id:
        raise InvalidArgumentError("Home and away teams must be different")

    inputs = get_model_inputs(db, home_team_id, away_team_id)
    seed = make_seed(home_team_id, away_team_id)

    if settings is None:
        model_name = "fixed"
        result = MODEL_REGISTRY[model_name](inputs.home_stats, inputs.away_stats, inputs.league, seed)
    else:
        model_name = "enhanced"
        settings = settings.clamped()
        result = MODEL_REGISTRY[model_name](
            inputs.home_stats, inputs.away_stats, inputs.league, seed, settings
        )

    logger.info(
        f"Predicted {home_team_id} vs {away_team_id} ({inputs.year}, {model_name}): "
        f"{result.home_score}-{result.away_score}"
    )

    return {
        "meta": {
            "homeTeam": team_to_dict(inputs.home_team),
            "awayTeam": team_to_dict(inputs.away_team),
            "year": inputs.year,
        },
        "prediction": {
            "homeScore": result.home_score,
            "awayScore": result.away_score,
            "total": result.total,
            "spread": result.spread,
            "predictedWinner": result.predicted_winner,
            "winProbabilityHome": result.win_probability_home,
            "confidence": result.confidence,
        },
        "contributions": [item.to_dict() for item in result.contributions],
        "inputs": {
            "home": inputs.home_stats.to_dict(),
            "away": inputs.away_stats.to_dict(),
            "league": inputs.league.to_dict(),
        },
        "calculationDetails": {
            "adjustedHomeYards": result.adjusted_home_yards,
            "adjustedAwayYards": result.adjusted_away_yards,
        },
        "model": model_name,
        "settings": settings.to_dict() if settings is not None else None,
    }
