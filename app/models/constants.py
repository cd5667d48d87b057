"""
Scoring engine constants.

Fixed-engine weights come first; the tunable engine reuses the same
shape with several of them replaced by caller-supplied settings.
"""

# Time-period weights for offensive yards (sum to 1.0)
SEASON_WEIGHT = 0.45
LAST3_WEIGHT = 0.30
LAST1_WEIGHT = 0.10
HOME_AWAY_WEIGHT = 0.15  # home team uses home splits, away team uses away splits

# Adjustment factors
DEFENSIVE_POINTS_ADJ_FACTOR = 0.5
FPI_RELATIVE_FACTOR = 0.6
FPI_ADDITIVE_WEIGHT = 0.35

# Randomness and probability
RANDOMNESS_RANGE = 0.05  # offsets land in [-0.025, 0.025]
LOGISTIC_K = 0.25

# Yards-per-point blends (season, last3, last1) and league-average share
FIXED_HOME_YPP_BLEND = (0.9, 0.08, 0.02)
FIXED_AWAY_YPP_BLEND = (0.8, 0.15, 0.05)
ENHANCED_YPP_BLEND = (0.80, 0.15, 0.05)
LEAGUE_YPP_BLEND_WEIGHT = 0.2
MIN_EFFECTIVE_YPP = 1

# Tunable engine
ENHANCED_BASE_SEASON_WEIGHT = 0.50
ENHANCED_LAST1_WEIGHT = 0.10
DEFENSIVE_YARD_FACTOR_BOUNDS = (0.85, 1.15)
ENHANCED_YPP_BOUNDS = (8, 50)
PPG_PROJECTION_WEIGHT = 0.80
PPG_CALIBRATION_WEIGHT = 0.20
DEFENSIVE_STRENGTH_BOUNDS = (0.9, 1.1)
FPI_OFF_DEF_BOUNDS = (0.95, 1.05)
FPI_EDGE_RELATIVE_SCALE = 0.1
FPI_EDGE_ADDITIVE_SCALE = 0.2
HOME_FIELD_BOOST_MULTIPLIER = 2.0
ENHANCED_JITTER_SCALE = 0.02
ENHANCED_SCORE_BOUNDS = (3, 60)

# Confidence
BASE_CONFIDENCE = 0.50
MAX_SPREAD_CONFIDENCE = 0.30
SPREAD_CONFIDENCE_DIVISOR = 20
MISSING_STATS_PENALTY = 0.1

# User-tunable settings: defaults and allowed ranges (+/-20% around defaults)
DEFAULT_SETTINGS = {
    "recent_form": 0.30,
    "home_field_advantage": 0.15,
    "defensive_strength": 0.5,
    "fpi_edge": 0.6,
}

SETTING_RANGES = {
    "recent_form": (0.24, 0.36),
    "home_field_advantage": (0.12, 0.18),
    "defensive_strength": (0.4, 0.6),
    "fpi_edge": (0.48, 0.72),
}

CONTRIBUTION_KEYS = ("offense", "efficiency", "defense", "homeField", "recentForm", "fpiEdge")
