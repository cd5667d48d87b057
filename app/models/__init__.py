from app.models.types import (
    TeamStats,
    LeagueAverages,
    PredictionSettings,
    Contribution,
    PredictResult,
)
from app.models.scoring import (
    ScoringConfig,
    FIXED_CONFIG,
    normalized_weights,
    score_game,
    predict_game,
    predict_game_enhanced,
)
from app.models.helpers import clamp, blend, logistic, random_offset, round_to

MODEL_REGISTRY = {
    "fixed": predict_game,
    "enhanced": predict_game_enhanced,
}
